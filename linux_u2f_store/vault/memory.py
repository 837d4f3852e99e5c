"""Coffre en memoire, substituable au Secret Service.

Reproduit le comportement observable du Secret Service utile au
store : verrouillage de la collection, prompt de deverrouillage
(accepte, annule ou refuse), recherche par sous-ensemble
d'attributs, remplacement d'un element aux attributs identiques.
Rien n'est persiste au-dela de la vie de l'objet.
"""

import threading
from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Optional

from linux_u2f_store.store.exceptions import LockedError
from linux_u2f_store.vault.base import (
    Attributes,
    Vault,
    VaultCollection,
    VaultItem,
)


class UnlockOutcome(StrEnum):
    """Issue simulee du prompt de deverrouillage."""

    ACCEPT = "accept"
    DISMISS = "dismiss"
    REFUSE = "refuse"


class MemoryItem(VaultItem):
    """Element du coffre en memoire."""

    def __init__(
        self,
        collection: "MemoryCollection",
        label: str,
        attributes: Attributes,
        secret: bytes,
        content_type: str,
    ) -> None:
        self._collection = collection
        self.label = label
        self.attributes = dict(attributes)
        self.secret = bytes(secret)
        self.content_type = content_type

    def get_secret(self) -> bytes:
        self._collection.ensure_not_locked()
        return self.secret

    def set_secret(self, secret: bytes, content_type: str) -> None:
        self._collection.ensure_not_locked()
        self.secret = bytes(secret)
        self.content_type = content_type

    def get_attributes(self) -> Attributes:
        return dict(self.attributes)

    def set_attributes(self, attributes: Attributes) -> None:
        self._collection.ensure_not_locked()
        self.attributes = dict(attributes)

    def get_label(self) -> str:
        return self.label


@dataclass
class MemoryCollection(VaultCollection):
    """Collection en memoire.

    Attributes:
        locked: Etat de verrouillage courant.
        unlock_outcome: Issue du prochain prompt de deverrouillage.
        items: Elements dans l'ordre de creation.
        unlock_calls: Nombre de demandes de deverrouillage recues.
    """

    locked: bool = False
    unlock_outcome: UnlockOutcome = UnlockOutcome.ACCEPT
    items: List[MemoryItem] = field(default_factory=list)
    unlock_calls: int = 0
    _mutex: threading.Lock = field(
        default_factory=threading.Lock, repr=False
    )

    def ensure_not_locked(self) -> None:
        """Leve LockedError si la collection est verrouillee."""
        if self.locked:
            raise LockedError("object locked")

    def lock(self) -> None:
        """Verrouille la collection."""
        self.locked = True

    def is_locked(self) -> bool:
        return self.locked

    def unlock(self) -> bool:
        self.unlock_calls += 1
        if self.unlock_outcome is UnlockOutcome.DISMISS:
            return True
        if self.unlock_outcome is UnlockOutcome.ACCEPT:
            self.locked = False
        return False

    def create_item(
        self,
        label: str,
        attributes: Attributes,
        secret: bytes,
        content_type: str,
        replace: bool,
    ) -> VaultItem:
        self.ensure_not_locked()
        with self._mutex:
            if replace:
                for existing in self.items:
                    if existing.attributes == attributes:
                        existing.label = label
                        existing.secret = bytes(secret)
                        existing.content_type = content_type
                        return existing
            item = MemoryItem(self, label, attributes, secret, content_type)
            self.items.append(item)
            return item

    def search_items(self, attributes: Attributes) -> List[VaultItem]:
        with self._mutex:
            return [
                item for item in self.items
                if all(
                    item.attributes.get(key) == value
                    for key, value in attributes.items()
                )
            ]


class MemoryVault(Vault):
    """Coffre en memoire a collection unique."""

    def __init__(self, collection: Optional[MemoryCollection] = None) -> None:
        self.collection = collection or MemoryCollection()

    def default_collection(self) -> MemoryCollection:
        return self.collection
