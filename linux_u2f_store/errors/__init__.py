"""Module de gestion des erreurs."""

from linux_u2f_store.errors.base import (ErrorHandler,
                                         ErrorHandlerChain,
                                         default_exit_codes)
from linux_u2f_store.errors.exceptions import (ApplicationError,
                                               ConfigurationError,
                                               FileConfigurationError)
from linux_u2f_store.errors.console_handler import ConsoleErrorHandler
from linux_u2f_store.errors.logger_handler import LoggerErrorHandler


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "FileConfigurationError",
    "ErrorHandler",
    "ConsoleErrorHandler",
    "LoggerErrorHandler",
    "ErrorHandlerChain",
    "default_exit_codes",
]
