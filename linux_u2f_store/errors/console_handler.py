"""
    ConsoleErrorHandler (remedes par categorie d'erreur du store)
"""
from linux_u2f_store.errors.base import ErrorHandler
from linux_u2f_store.errors.exceptions import (ApplicationError,
                                               ConfigurationError)

# Cles : valeurs de StoreErrorKind (linux_u2f_store.store.exceptions)
_KIND_SOLUTIONS: dict[str, str] = {
    "locked": (
        "Déverrouillez votre trousseau (GNOME Keyring, KWallet, "
        "KeePassXC) puis réessayez."
    ),
    "prompt_dismissed": (
        "Acceptez la demande de déverrouillage du trousseau."
    ),
    "backend": (
        "Vérifiez qu'un fournisseur Secret Service est démarré "
        "sur le bus de session."
    ),
    "crypto": (
        "Relancez le service de trousseau : la session chiffrée "
        "a échoué."
    ),
    "parse_failure": (
        "Inspectez l'élément du trousseau (ex: seahorse) : "
        "son contenu est illisible ou dupliqué."
    ),
    "not_found": (
        "Aucun credential n'est enregistré pour ce couple "
        "application / key handle."
    ),
}


class ConsoleErrorHandler(ErrorHandler):
    """Handler pour afficher les erreurs dans la console.

    Distingue les erreurs connues (ApplicationError) des erreurs
    inattendues, et affiche un remède adapté à la catégorie
    d'erreur du store.
    """

    def __init__(
        self,
        solutions: dict[type[Exception], str] | None = None
    ) -> None:
        """Initialise le handler console.

        Args:
            solutions: Dictionnaire {TypeException: "message solution"}
                prioritaire sur les remèdes par défaut.
        """
        self.solutions = solutions or {}

    def handle(self, error: Exception) -> None:
        """Affiche l'erreur dans la console avec un remède.

        Args:
            error: L'exception à afficher.
        """
        if isinstance(error, ApplicationError):
            self._handle_known_error(error)
        else:
            self._handle_unknown_error(error)

    def _solution_for(self, error: ApplicationError) -> str:
        for error_type, solution in self.solutions.items():
            if isinstance(error, error_type):
                return solution
        kind = getattr(error, "kind", None)
        if kind in _KIND_SOLUTIONS:
            return _KIND_SOLUTIONS[kind]
        if isinstance(error, ConfigurationError):
            return "Vérifiez votre fichier de configuration."
        return "Voir les suggestions ci-dessus."

    def _handle_known_error(self, error: ApplicationError) -> None:
        print(f"\n🛑 {type(error).__name__}: {str(error)}")
        print(f"\n🔧 Solution : {self._solution_for(error)}")

    def _handle_unknown_error(self, error: Exception) -> None:
        print(f"\n💥 Erreur inattendue: {str(error)}")
        print(f"Type: {type(error).__name__}")
        print(
            "\n📋 Cela peut être un bug. Veuillez ouvrir une issue "
            "avec ces informations."
        )
