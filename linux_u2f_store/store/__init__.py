"""Store de credentials U2F.

Persiste les credentials d'un authentificateur U2F logiciel dans le
trousseau FreeDesktop Secret Service :

    application + key handle -> cle privee + compteur anti-rejeu

Exemple d'utilisation :

    from linux_u2f_store.store import ApplicationKey, SecretServiceStore

    with SecretServiceStore.open() as store:
        store.add_application_key(ApplicationKey(app, handle, pem))
        key = store.retrieve_application_key(app, handle)
        counter = store.get_and_increment_counter(app, handle)
"""

from linux_u2f_store.store.exceptions import (
    BackendError,
    CryptoError,
    DuplicateItemError,
    LockedError,
    NoResultError,
    ParseError,
    PromptDismissedError,
    SecretStoreError,
    StoreErrorKind,
)
from linux_u2f_store.store.models import (
    ApplicationKey,
    SecretRecord,
    deserialize,
    serialize,
)
from linux_u2f_store.store.app_ids import app_id_digest, try_reverse_app_id
from linux_u2f_store.store.attributes import (
    build_label,
    build_registration_attributes,
    build_search_attributes,
)
from linux_u2f_store.store.base import SecretStore, UserSecretStore
from linux_u2f_store.store.locks import PairLockRegistry
from linux_u2f_store.store.secret_service import SecretServiceStore

__all__ = [
    # ABCs
    "SecretStore",
    "UserSecretStore",
    # Modeles
    "ApplicationKey",
    "SecretRecord",
    "serialize",
    "deserialize",
    # Attributs
    "build_search_attributes",
    "build_registration_attributes",
    "build_label",
    "app_id_digest",
    "try_reverse_app_id",
    # Exceptions
    "StoreErrorKind",
    "SecretStoreError",
    "CryptoError",
    "BackendError",
    "LockedError",
    "NoResultError",
    "ParseError",
    "DuplicateItemError",
    "PromptDismissedError",
    # Implementation
    "PairLockRegistry",
    "SecretServiceStore",
]
