"""Interfaces abstraites du coffre securise (Secret Service).

Le store ne depend que de ces interfaces : le coffre reel
(SecretServiceVault) et le coffre en memoire (MemoryVault) sont
interchangeables. Toute implementation doit lever exclusivement
des SecretStoreError (linux_u2f_store.store.exceptions).
"""

from abc import ABC, abstractmethod
from typing import Dict, List

Attributes = Dict[str, str]


class VaultItem(ABC):
    """Element du coffre : libelle, attributs et secret opaque."""

    @abstractmethod
    def get_secret(self) -> bytes:
        """Retourne le secret de l'element.

        Raises:
            LockedError: si l'element est verrouille.
        """
        pass  # pragma: no cover

    @abstractmethod
    def set_secret(self, secret: bytes, content_type: str) -> None:
        """Remplace le secret de l'element."""
        pass  # pragma: no cover

    @abstractmethod
    def get_attributes(self) -> Attributes:
        """Retourne une copie des attributs de l'element."""
        pass  # pragma: no cover

    @abstractmethod
    def set_attributes(self, attributes: Attributes) -> None:
        """Remplace l'ensemble des attributs de l'element."""
        pass  # pragma: no cover

    @abstractmethod
    def get_label(self) -> str:
        """Retourne le libelle de l'element."""
        pass  # pragma: no cover


class VaultCollection(ABC):
    """Collection du coffre, verrouillable."""

    @abstractmethod
    def is_locked(self) -> bool:
        """Indique si la collection est verrouillee."""
        pass  # pragma: no cover

    @abstractmethod
    def unlock(self) -> bool:
        """Demande le deverrouillage de la collection.

        Peut declencher un prompt interactif et bloquer jusqu'a sa
        resolution.

        Returns:
            True si le prompt a ete annule, False sinon.
        """
        pass  # pragma: no cover

    @abstractmethod
    def create_item(
        self,
        label: str,
        attributes: Attributes,
        secret: bytes,
        content_type: str,
        replace: bool,
    ) -> VaultItem:
        """Cree un element dans la collection.

        Args:
            label: Libelle affiche a l'utilisateur.
            attributes: Attributs de recherche et metadonnees.
            secret: Contenu opaque.
            content_type: Type MIME du contenu.
            replace: Remplacer un element aux attributs identiques.
        """
        pass  # pragma: no cover

    @abstractmethod
    def search_items(self, attributes: Attributes) -> List[VaultItem]:
        """Retourne les elements possedant tous les attributs donnes."""
        pass  # pragma: no cover


class Vault(ABC):
    """Service de stockage securise."""

    @abstractmethod
    def default_collection(self) -> VaultCollection:
        """Retourne la collection protegee par defaut."""
        pass  # pragma: no cover

    def close(self) -> None:
        """Libere la connexion au service (rien par defaut)."""

    def __enter__(self) -> "Vault":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
