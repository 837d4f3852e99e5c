"""
Linux U2F Store - persistance des credentials d'un authentificateur
U2F logiciel dans le trousseau FreeDesktop Secret Service.

Modules disponibles:
- store: Modeles, schema d'attributs et SecretServiceStore
- vault: Coffre securise (SecretServiceVault, MemoryVault)
- config: Parametres du store (StoreSettings, load_settings)
- logging: Journalisation (Logger, FileLogger, SecurityLogger)
- errors: Exceptions de base et handlers d'erreurs
"""

__version__ = "1.0.0"

from linux_u2f_store.logging import Logger, FileLogger, SecurityLogger
from linux_u2f_store.config import StoreSettings, load_settings
from linux_u2f_store.store import (
    ApplicationKey,
    SecretRecord,
    SecretStore,
    UserSecretStore,
    SecretServiceStore,
    SecretStoreError,
    StoreErrorKind,
)
from linux_u2f_store.vault import MemoryVault, SecretServiceVault

__all__ = [
    # Logging
    "Logger",
    "FileLogger",
    "SecurityLogger",
    # Config
    "StoreSettings",
    "load_settings",
    # Store
    "ApplicationKey",
    "SecretRecord",
    "SecretStore",
    "UserSecretStore",
    "SecretServiceStore",
    "SecretStoreError",
    "StoreErrorKind",
    # Vault
    "MemoryVault",
    "SecretServiceVault",
]
