"""Interfaces abstraites pour la gestion des erreurs."""

import os
import sys
from abc import ABC, abstractmethod


class ErrorHandler(ABC):
    """Interface de base pour les handlers d'erreurs.

    Chaque implementation concrete definit une strategie de
    traitement (affichage console, journalisation, etc.).
    """

    @abstractmethod
    def handle(self, error: Exception) -> None:
        """Traite une erreur.

        Args:
            error: L'exception a traiter.
        """
        pass


class ErrorHandlerChain:
    """Diffuse les erreurs a tous les handlers enregistres.

    Le code de sortie de handle_and_exit() est resolu a partir
    du type de l'erreur : la premiere entree de exit_codes dont
    l'erreur est une instance l'emporte.

    Attributes:
        handlers: Handlers dans l'ordre d'ajout.
        exit_codes: Correspondance {TypeException: code de sortie}.
    """

    def __init__(
        self,
        exit_codes: dict[type[Exception], int] | None = None
    ) -> None:
        """Initialise la chaine.

        Args:
            exit_codes: Codes de sortie par type d'exception.
        """
        self.handlers: list[ErrorHandler] = []
        self.exit_codes = exit_codes or {}

    def add_handler(self, handler: ErrorHandler) -> None:
        """Ajoute un handler a la chaine."""
        self.handlers.append(handler)

    def handle(self, error: Exception) -> None:
        """Fait passer l'erreur a travers tous les handlers."""
        for handler in self.handlers:
            handler.handle(error)

    def exit_code_for(self, error: Exception, default: int = 1) -> int:
        """Retourne le code de sortie associe au type de l'erreur.

        Args:
            error: L'exception traitee.
            default: Code retourne si aucun type ne correspond.

        Returns:
            Code de sortie du programme.
        """
        for error_type, code in self.exit_codes.items():
            if isinstance(error, error_type):
                return code
        return default

    def handle_and_exit(
        self,
        error: Exception,
        exit_code: int | None = None
    ) -> None:
        """Gere l'erreur et termine le programme.

        Args:
            error: L'exception a traiter avant la sortie.
            exit_code: Code de sortie force. Si None, il est resolu
                via exit_codes (defaut: 1).
        """
        self.handle(error)
        if exit_code is None:
            exit_code = self.exit_code_for(error)
        sys.exit(exit_code)


def default_exit_codes() -> dict[type[Exception], int]:
    """Codes de sortie sysexits pour les erreurs du store.

    Un coffre verrouille ou un prompt annule est temporaire
    (EX_TEMPFAIL), un contenu illisible est une erreur de donnees
    (EX_DATAERR), un Secret Service injoignable est EX_UNAVAILABLE.
    """
    from linux_u2f_store.errors.exceptions import ConfigurationError
    from linux_u2f_store.store.exceptions import (
        BackendError,
        LockedError,
        ParseError,
        PromptDismissedError,
    )

    return {
        LockedError: os.EX_TEMPFAIL,
        PromptDismissedError: os.EX_TEMPFAIL,
        ParseError: os.EX_DATAERR,
        BackendError: os.EX_UNAVAILABLE,
        ConfigurationError: os.EX_CONFIG,
    }
