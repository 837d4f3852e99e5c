"""Module de logging."""

from linux_u2f_store.logging.base import Logger
from linux_u2f_store.logging.file_logger import FileLogger
from linux_u2f_store.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
    fingerprint,
)

__all__ = [
    "Logger",
    "FileLogger",
    "SecurityEvent",
    "SecurityEventType",
    "SecurityLogger",
    "fingerprint",
]
