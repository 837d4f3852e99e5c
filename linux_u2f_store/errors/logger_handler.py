"""
    LoggerErrorHandler
"""
from linux_u2f_store.errors.base import ErrorHandler
from linux_u2f_store.errors.exceptions import ApplicationError
from linux_u2f_store.logging.base import Logger


class LoggerErrorHandler(ErrorHandler):
    """Handler pour journaliser les erreurs via le Logger injecté.

    Les erreurs du store sont préfixées par leur catégorie
    (ex: "[locked]") pour faciliter le filtrage des journaux.
    """

    def __init__(self, logger: Logger) -> None:
        """Initialise le handler avec un logger.

        Args:
            logger: Instance de Logger pour l'enregistrement des erreurs.
        """
        self.logger = logger

    def handle(self, error: Exception) -> None:
        """Journalise l'erreur.

        Args:
            error: L'exception à journaliser.
        """
        kind = getattr(error, "kind", None)
        if isinstance(error, ApplicationError) and kind is not None:
            self.logger.log_error(
                f"[{kind}] {type(error).__name__}: {str(error)}"
            )
        elif isinstance(error, ApplicationError):
            self.logger.log_error(f"{type(error).__name__}: {str(error)}")
        else:
            self.logger.log_error(
                f"Erreur inattendue: {type(error).__name__}: {str(error)}"
            )
