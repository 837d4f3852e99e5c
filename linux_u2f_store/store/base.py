"""Interfaces abstraites du store de credentials U2F.

Ce module definit les ABCs SecretStore (contrat consomme par la
couche protocole U2F) et UserSecretStore (ajoute l'import d'un
enregistrement complet) selon le principe ISP.
"""

from abc import ABC, abstractmethod
from typing import Optional

from linux_u2f_store.store.models import ApplicationKey, SecretRecord


class SecretStore(ABC):
    """Contrat de stockage des credentials U2F.

    La couche d'enregistrement/authentification ne parle jamais au
    coffre directement : elle depend uniquement de cette interface.
    """

    @abstractmethod
    def add_application_key(self, key: ApplicationKey) -> None:
        """Enregistre un nouveau credential, compteur a 0.

        Args:
            key: Credential complet.

        Raises:
            SecretStoreError: si le coffre echoue. Aucune ecriture
                partielle n'est laissee.
        """
        pass  # pragma: no cover

    @abstractmethod
    def retrieve_application_key(
        self,
        application: bytes,
        handle: bytes,
    ) -> Optional[ApplicationKey]:
        """Retourne le credential du couple, ou None s'il n'existe pas.

        None signifie "aucun credential enregistre" ; une exception
        signifie "impossible de determiner".

        Raises:
            SecretStoreError: si le coffre echoue ou si le contenu
                stocke est illisible (ParseError).
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_and_increment_counter(
        self,
        application: bytes,
        handle: bytes,
    ) -> int:
        """Retourne le compteur courant et persiste sa valeur + 1.

        Les valeurs retournees sur la vie d'un credential sont
        strictement croissantes, sans repetition.

        Raises:
            NoResultError: si aucun credential n'existe pour le couple.
            SecretStoreError: si le coffre echoue.
        """
        pass  # pragma: no cover


class UserSecretStore(SecretStore):
    """Store de l'utilisateur, capable d'importer un enregistrement."""

    @abstractmethod
    def add_secret(self, record: SecretRecord) -> None:
        """Enregistre un credential avec son compteur existant.

        Args:
            record: Enregistrement complet (ex: migration depuis un
                autre store).

        Raises:
            SecretStoreError: si le coffre echoue.
        """
        pass  # pragma: no cover
