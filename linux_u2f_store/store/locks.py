"""Verrous de processus par couple (application, key handle)."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Tuple


class PairLockRegistry:
    """Attribue un threading.Lock a chaque couple (application, handle).

    Serialise les lectures-modifications-ecritures concurrentes d'un
    meme credential au sein du processus. Les couples differents ne
    se bloquent pas entre eux.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[Tuple[bytes, bytes], threading.Lock] = {}

    def lock_for(self, application: bytes, handle: bytes) -> threading.Lock:
        """Retourne le verrou du couple, cree au premier appel."""
        key = (bytes(application), bytes(handle))
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, application: bytes, handle: bytes) -> Iterator[None]:
        """Detient le verrou du couple pendant le bloc."""
        with self.lock_for(application, handle):
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
