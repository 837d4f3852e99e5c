"""Exceptions normalisees du store de secrets U2F.

Toute erreur remontee par le coffre (Secret Service, D-Bus,
chiffrement de session) est convertie a la frontiere du coffre en
une et une seule des classes ci-dessous. Aucun type d'exception
propre a secretstorage ou jeepney ne traverse cette frontiere.
"""

from enum import StrEnum

from linux_u2f_store.errors.exceptions import ApplicationError


class StoreErrorKind(StrEnum):
    """Categories stables d'erreurs du store."""

    CRYPTO = "crypto"
    BACKEND = "backend"
    LOCKED = "locked"
    NOT_FOUND = "not_found"
    PARSE_FAILURE = "parse_failure"
    PROMPT_DISMISSED = "prompt_dismissed"


class SecretStoreError(ApplicationError):
    """Exception de base pour toutes les erreurs du store de secrets."""

    kind: StoreErrorKind = StoreErrorKind.BACKEND


class CryptoError(SecretStoreError):
    """Le coffre a signale une erreur de chiffrement de session."""

    kind = StoreErrorKind.CRYPTO


class BackendError(SecretStoreError):
    """Un appel D-Bus vers le coffre a echoue.

    Attributes:
        name: Nom de l'erreur D-Bus (texte de diagnostic opaque).
        message: Message de l'erreur D-Bus (texte de diagnostic opaque).
    """

    kind = StoreErrorKind.BACKEND

    def __init__(self, name: str = "", message: str = "") -> None:
        self.name = name
        self.message = message
        super().__init__(f"D-Bus error {name} {message}".rstrip())


class LockedError(SecretStoreError):
    """La collection n'a pas pu etre deverrouillee."""

    kind = StoreErrorKind.LOCKED


class NoResultError(SecretStoreError):
    """Une recherche censee retourner un resultat n'en a retourne aucun."""

    kind = StoreErrorKind.NOT_FOUND


class ParseError(SecretStoreError):
    """Reponse du coffre ou contenu stocke impossible a decoder."""

    kind = StoreErrorKind.PARSE_FAILURE


class DuplicateItemError(ParseError):
    """Plusieurs elements du coffre correspondent au meme couple
    (application, key handle)."""


class PromptDismissedError(SecretStoreError):
    """Le prompt de deverrouillage a ete annule par l'utilisateur."""

    kind = StoreErrorKind.PROMPT_DISMISSED
