"""Modeles de donnees des credentials U2F et leur format persistant.

Le contenu stocke dans le trousseau est un objet JSON :

    {
        "application_key": {
            "application": "<base64>",
            "handle": "<base64>",
            "private_key": "<base64>"
        },
        "counter": <entier non signe>
    }

Ce format est le contrat de compatibilite des credentials existants :
renommer un champ ou changer d'encodage les rend illisibles.
"""

import base64
import binascii
import json
from dataclasses import dataclass, field, replace
from typing import Any

from linux_u2f_store.store.exceptions import ParseError

APPLICATION_ID_LENGTH = 32


@dataclass(frozen=True)
class ApplicationKey:
    """Credential U2F enregistre.

    Attributes:
        application: Identifiant d'application (SHA-256 de l'AppID).
        handle: Key handle remis au relying party a l'enregistrement.
        private_key: Materiel de cle privee (PEM ou DER, opaque ici).
            Exclu de repr().
    """

    application: bytes
    handle: bytes
    private_key: bytes = field(repr=False)

    def __post_init__(self) -> None:
        """Valide les champs apres initialisation."""
        for name in ("application", "handle", "private_key"):
            value = getattr(self, name)
            if not isinstance(value, (bytes, bytearray)):
                raise TypeError(
                    f"Le champ {name!r} doit etre de type bytes."
                )
            object.__setattr__(self, name, bytes(value))
        if len(self.application) != APPLICATION_ID_LENGTH:
            raise ValueError(
                f"Le champ 'application' doit faire "
                f"{APPLICATION_ID_LENGTH} octets, "
                f"recu {len(self.application)}."
            )
        if not self.handle:
            raise ValueError("Le champ 'handle' ne peut pas etre vide.")
        if not self.private_key:
            raise ValueError(
                "Le champ 'private_key' ne peut pas etre vide."
            )


@dataclass(frozen=True)
class SecretRecord:
    """Unite persistee : credential et compteur anti-rejeu.

    Attributes:
        application_key: Credential enregistre.
        counter: Compteur d'utilisation, jamais decremente.
    """

    application_key: ApplicationKey
    counter: int = 0

    def __post_init__(self) -> None:
        """Valide le compteur apres initialisation."""
        if isinstance(self.counter, bool) or \
                not isinstance(self.counter, int):
            raise TypeError("Le champ 'counter' doit etre un entier.")
        if self.counter < 0:
            raise ValueError("Le champ 'counter' doit etre positif.")

    def with_counter(self, counter: int) -> "SecretRecord":
        """Retourne une copie portant un nouveau compteur."""
        return replace(self, counter=counter)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(value: Any, name: str) -> bytes:
    if not isinstance(value, str):
        raise ParseError(f"Champ {name!r} : chaine base64 attendue.")
    try:
        return base64.b64decode(value.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ParseError(f"Champ {name!r} : base64 invalide.") from exc


def serialize(record: SecretRecord) -> bytes:
    """Encode un SecretRecord en JSON UTF-8.

    Args:
        record: Enregistrement a encoder.

    Returns:
        Contenu a stocker dans le trousseau.
    """
    key = record.application_key
    document = {
        "application_key": {
            "application": _b64encode(key.application),
            "handle": _b64encode(key.handle),
            "private_key": _b64encode(key.private_key),
        },
        "counter": record.counter,
    }
    return json.dumps(document, separators=(",", ":")).encode("utf-8")


def deserialize(data: bytes) -> SecretRecord:
    """Decode le contenu stocke en SecretRecord.

    Args:
        data: Contenu brut lu dans le trousseau.

    Returns:
        Enregistrement decode.

    Raises:
        ParseError: Si le contenu n'est pas un enregistrement valide.
    """
    try:
        document = json.loads(bytes(data).decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        # ValueError couvre JSONDecodeError et les entiers trop longs
        raise ParseError("Contenu stocke : JSON invalide.") from exc

    if not isinstance(document, dict):
        raise ParseError("Contenu stocke : objet JSON attendu.")
    key_document = document.get("application_key")
    if not isinstance(key_document, dict):
        raise ParseError("Champ 'application_key' absent ou invalide.")
    if "counter" not in document:
        raise ParseError("Champ 'counter' absent.")

    try:
        application_key = ApplicationKey(
            application=_b64decode(
                key_document.get("application"), "application"
            ),
            handle=_b64decode(key_document.get("handle"), "handle"),
            private_key=_b64decode(
                key_document.get("private_key"), "private_key"
            ),
        )
        return SecretRecord(
            application_key=application_key,
            counter=document["counter"],
        )
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Enregistrement invalide : {exc}") from exc
