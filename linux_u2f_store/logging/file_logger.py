"""Logger fichier du store de credentials U2F."""

import logging
import os
from typing import Any, List

from linux_u2f_store.logging.base import Logger

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class FileLogger(Logger):
    """
    Logger qui écrit dans un fichier, avec sortie console optionnelle.

    - Un logger stdlib par fichier : deux instances sur le même
      fichier partagent leurs handlers
    - Répertoire de logs créé en 0o700 (le journal d'audit y est écrit)
    - Fichier en UTF-8, flush après chaque message
    - Pas de propagation vers le logger racine
    """

    def __init__(
        self,
        log_file: str,
        level: str = "INFO",
        log_format: str = DEFAULT_FORMAT,
        console_output: bool = False
    ) -> None:
        """
        Initialise le logger.

        Args:
            log_file: Chemin du fichier de log (~ accepté)
            level: Nom du niveau (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_format: Format logging.Formatter
            console_output: Dupliquer les messages sur stderr
        """
        self.log_file = os.path.expanduser(log_file)
        log_dir = os.path.dirname(self.log_file)
        if log_dir:
            os.makedirs(log_dir, mode=0o700, exist_ok=True)

        log_level = getattr(logging, level.upper(), logging.INFO)
        self.logger = logging.getLogger(f"linux_u2f_store:{self.log_file}")
        self.logger.setLevel(log_level)
        self.logger.propagate = False

        if not self.logger.handlers:
            formatter = logging.Formatter(log_format)
            for handler in self._build_handlers(console_output):
                handler.setLevel(log_level)
                handler.setFormatter(formatter)
                self.logger.addHandler(handler)
        self.handler = self.logger.handlers[0]

    def _build_handlers(self, console_output: bool) -> List[logging.Handler]:
        handlers: List[logging.Handler] = [
            logging.FileHandler(self.log_file, encoding="utf-8")
        ]
        if console_output:
            handlers.append(logging.StreamHandler())
        return handlers

    @classmethod
    def from_settings(cls, settings: Any) -> "FileLogger":
        """
        Crée un logger depuis un StoreSettings.

        Args:
            settings: Instance de StoreSettings (log_file, log_level,
                      log_format, console_output)

        Returns:
            Instance de FileLogger configurée
        """
        return cls(
            settings.log_file,
            level=settings.log_level,
            log_format=settings.log_format,
            console_output=settings.console_output,
        )

    def _emit(self, level: int, message: str) -> None:
        self.logger.log(level, message)
        self.handler.flush()

    def log_info(self, message: str) -> None:
        self._emit(logging.INFO, message)

    def log_warning(self, message: str) -> None:
        self._emit(logging.WARNING, message)

    def log_error(self, message: str) -> None:
        self._emit(logging.ERROR, message)

    def log_debug(self, message: str) -> None:
        self._emit(logging.DEBUG, message)
