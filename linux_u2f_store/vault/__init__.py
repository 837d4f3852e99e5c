"""Capacite de coffre securise : interfaces et implementations."""

from linux_u2f_store.vault.base import (
    Attributes,
    Vault,
    VaultCollection,
    VaultItem,
)
from linux_u2f_store.vault.memory import (
    MemoryCollection,
    MemoryItem,
    MemoryVault,
    UnlockOutcome,
)
from linux_u2f_store.vault.secretstorage_vault import (
    SecretServiceCollection,
    SecretServiceItem,
    SecretServiceVault,
    translate_errors,
)

__all__ = [
    "Attributes",
    "Vault",
    "VaultCollection",
    "VaultItem",
    "MemoryCollection",
    "MemoryItem",
    "MemoryVault",
    "UnlockOutcome",
    "SecretServiceCollection",
    "SecretServiceItem",
    "SecretServiceVault",
    "translate_errors",
]
