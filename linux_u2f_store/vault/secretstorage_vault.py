"""Coffre FreeDesktop Secret Service via secretstorage (D-Bus).

Compatibilites :
- GNOME Keyring
- KWallet (KDE Plasma 6)
- KeePassXC (avec "Enable Secret Service" active)

Toutes les exceptions levees pendant un appel au Secret Service
(secretstorage, jeepney, socket) sont converties en SecretStoreError
par translate_errors().
"""

import threading
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

import secretstorage
from jeepney import DBusErrorResponse
from secretstorage.exceptions import (
    ItemNotFoundException,
    LockedException,
    PromptDismissedException,
    SecretServiceNotAvailableException,
    SecretStorageException,
)

from linux_u2f_store.logging.base import Logger
from linux_u2f_store.store.exceptions import (
    BackendError,
    CryptoError,
    LockedError,
    NoResultError,
    PromptDismissedError,
)
from linux_u2f_store.vault.base import (
    Attributes,
    Vault,
    VaultCollection,
    VaultItem,
)

SERVICE_UNKNOWN = "org.freedesktop.DBus.Error.ServiceUnknown"


def _dbus_message(error: DBusErrorResponse) -> str:
    data = getattr(error, "data", ())
    if data and isinstance(data[0], str):
        return data[0]
    return ""


@contextmanager
def translate_errors(operation: str, secret_io: bool = False) -> Iterator[None]:
    """Convertit les erreurs du Secret Service en SecretStoreError.

    Args:
        operation: Nom de l'operation, repris dans les messages.
        secret_io: True si l'operation chiffre ou dechiffre un
            secret : un ValueError y signale alors un echec de la
            session chiffree (CryptoError), sinon un echange D-Bus
            invalide (BackendError).
    """
    try:
        yield
    except PromptDismissedException as exc:
        raise PromptDismissedError(f"{operation}: prompt dismissed") from exc
    except LockedException as exc:
        raise LockedError(f"{operation}: object locked") from exc
    except ItemNotFoundException as exc:
        raise NoResultError(f"{operation}: {exc}") from exc
    except SecretServiceNotAvailableException as exc:
        raise BackendError(SERVICE_UNKNOWN, f"{operation}: {exc}") from exc
    except SecretStorageException as exc:
        raise BackendError(type(exc).__name__, f"{operation}: {exc}") from exc
    except DBusErrorResponse as exc:
        raise BackendError(
            exc.name or "", _dbus_message(exc)
        ) from exc
    except OSError as exc:
        raise BackendError(type(exc).__name__, f"{operation}: {exc}") from exc
    except ValueError as exc:
        if secret_io:
            raise CryptoError(f"{operation}: {exc}") from exc
        raise BackendError(type(exc).__name__, f"{operation}: {exc}") from exc


class SecretServiceItem(VaultItem):
    """Element secretstorage.

    Chaque appel D-Bus est fait sous le verrou de la connexion.
    """

    def __init__(self, item: Any, lock: Optional[Any] = None) -> None:
        self._item = item
        self._lock = lock or threading.RLock()

    def get_secret(self) -> bytes:
        with self._lock, translate_errors("get_secret", secret_io=True):
            return bytes(self._item.get_secret())

    def set_secret(self, secret: bytes, content_type: str) -> None:
        with self._lock, translate_errors("set_secret", secret_io=True):
            self._item.set_secret(secret, content_type)

    def get_attributes(self) -> Attributes:
        with self._lock, translate_errors("get_attributes"):
            return dict(self._item.get_attributes())

    def set_attributes(self, attributes: Attributes) -> None:
        with self._lock, translate_errors("set_attributes"):
            self._item.set_attributes(dict(attributes))

    def get_label(self) -> str:
        with self._lock, translate_errors("get_label"):
            return self._item.get_label()


class SecretServiceCollection(VaultCollection):
    """Collection secretstorage."""

    def __init__(
        self,
        collection: Any,
        lock: Optional[Any] = None,
    ) -> None:
        self._collection = collection
        self._lock = lock or threading.RLock()

    def is_locked(self) -> bool:
        with self._lock, translate_errors("is_locked"):
            return bool(self._collection.is_locked())

    def unlock(self) -> bool:
        with self._lock, translate_errors("unlock"):
            return bool(self._collection.unlock())

    def create_item(
        self,
        label: str,
        attributes: Attributes,
        secret: bytes,
        content_type: str,
        replace: bool,
    ) -> VaultItem:
        with self._lock, translate_errors("create_item", secret_io=True):
            item = self._collection.create_item(
                label, dict(attributes), secret, replace, content_type
            )
        return SecretServiceItem(item, self._lock)

    def search_items(self, attributes: Attributes) -> List[VaultItem]:
        with self._lock, translate_errors("search_items"):
            return [
                SecretServiceItem(item, self._lock)
                for item in self._collection.search_items(dict(attributes))
            ]


class SecretServiceVault(Vault):
    """Acces au Secret Service du bus de session.

    La connexion D-Bus est ouverte au premier usage puis conservee
    jusqu'a close(). Elle est bloquante et non thread-safe : tous les
    appels qui la traversent, depuis le coffre, ses collections et
    ses elements, sont serialises par un meme verrou.

    Attributes:
        _connection: Connexion jeepney injectee ou ouverte a la demande.
        _owns_connection: True si close() doit fermer la connexion.
        _lock: Verrou de la connexion.
        _logger: Logger optionnel.
    """

    def __init__(
        self,
        connection: Optional[Any] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        """Initialise le coffre.

        Args:
            connection: Connexion D-Bus existante (tests ou partage).
            logger: Logger optionnel (injection de dependance).
        """
        self._connection = connection
        self._owns_connection = False
        self._lock = threading.RLock()
        self._logger = logger

    def _get_connection(self) -> Any:
        if self._connection is None:
            with translate_errors("dbus_init"):
                connection = secretstorage.dbus_init()
                try:
                    available = secretstorage.check_service_availability(
                        connection
                    )
                except Exception:
                    connection.close()
                    raise
            if not available:
                connection.close()
                raise BackendError(
                    SERVICE_UNKNOWN,
                    "org.freedesktop.secrets n'est pas disponible "
                    "sur le bus de session",
                )
            self._connection = connection
            self._owns_connection = True
            if self._logger:
                self._logger.log_debug("Connexion au Secret Service ouverte")
        return self._connection

    def default_collection(self) -> VaultCollection:
        with self._lock:
            connection = self._get_connection()
            with translate_errors("get_default_collection"):
                collection = secretstorage.get_default_collection(connection)
        return SecretServiceCollection(collection, self._lock)

    def close(self) -> None:
        with self._lock:
            if self._connection is not None and self._owns_connection:
                self._connection.close()
                if self._logger:
                    self._logger.log_debug(
                        "Connexion au Secret Service fermee"
                    )
            self._connection = None
            self._owns_connection = False
