"""Journal d'audit structuré des opérations sur les credentials U2F.

Chaque enregistrement, lecture, incrément de compteur et
déverrouillage du trousseau produit un événement JSON transmis au
Logger injecté. Les identifiants (application, key handle) ne sont
jamais écrits en clair : seule une empreinte courte est journalisée,
et le matériel de clé privée n'est jamais transmis à ce module.
"""

import base64
import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from linux_u2f_store.logging.base import Logger


class SecurityEventType(StrEnum):
    """Types d'événements d'audit du store."""

    CREDENTIAL_REGISTERED = "credential.registered"
    CREDENTIAL_RETRIEVED = "credential.retrieved"
    CREDENTIAL_DUPLICATE = "credential.duplicate"
    COUNTER_INCREMENTED = "counter.incremented"
    VAULT_UNLOCKED = "vault.unlocked"
    VAULT_UNLOCK_FAILED = "vault.unlock_failed"
    PAYLOAD_CORRUPTED = "payload.corrupted"


def fingerprint(data: bytes) -> str:
    """Empreinte courte et non réversible d'un identifiant binaire.

    Args:
        data: Identifiant d'application ou key handle.

    Returns:
        12 caractères base64 url-safe du SHA-256 de data.
    """
    digest = hashlib.sha256(data).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")[:12]


@dataclass(frozen=True)
class SecurityEvent:
    """Événement d'audit structuré.

    Attributes:
        event_type: Type d'événement (SecurityEventType).
        resource: Ressource concernée (empreinte du couple, collection).
        details: Contexte additionnel de l'événement.
        severity: Niveau de sévérité (info, warning, error, critical).
        timestamp: Horodatage ISO 8601 UTC (auto-généré).
    """

    event_type: SecurityEventType
    resource: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    severity: str = "info"
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class SecurityLogger:
    """Logger spécialisé pour l'audit du store.

    Utilisation :
        audit = SecurityLogger(file_logger)
        audit.log_event(SecurityEvent(
            event_type=SecurityEventType.COUNTER_INCREMENTED,
            resource=audit.pair_resource(application, handle),
            details={"counter": 4},
        ))
    """

    def __init__(self, logger: Logger) -> None:
        """Initialise le logger d'audit.

        Args:
            logger: Instance de Logger pour l'émission des messages.
        """
        self._logger = logger

    @staticmethod
    def pair_resource(application: bytes, handle: bytes) -> str:
        """Ressource d'audit d'un couple (application, key handle)."""
        return f"{fingerprint(application)}/{fingerprint(handle)}"

    def log_event(self, event: SecurityEvent) -> None:
        """Enregistre un événement en JSON structuré.

        Args:
            event: Événement à journaliser.
        """
        payload: dict[str, Any] = {
            "security_event": str(event.event_type),
            "timestamp": event.timestamp,
            "resource": event.resource,
            "severity": event.severity,
            "details": event.details,
        }
        message = json.dumps(payload, ensure_ascii=False, default=str)

        if event.severity in ("error", "critical"):
            self._logger.log_error(message)
        elif event.severity == "warning":
            self._logger.log_warning(message)
        else:
            self._logger.log_info(message)
