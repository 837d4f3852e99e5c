"""Interface abstraite pour le logging."""

from abc import ABC, abstractmethod


class Logger(ABC):
    """Journal injecte dans le store, le coffre et les handlers d'erreurs.

    Les appelants ne transmettent jamais de materiel de cle privee,
    seulement des empreintes d'identifiants.
    """

    @abstractmethod
    def log_info(self, message: str) -> None:
        """Operation reussie (enregistrement, deverrouillage...)."""

    @abstractmethod
    def log_warning(self, message: str) -> None:
        """Anomalie non bloquante (metadonnee non mise a jour...)."""

    @abstractmethod
    def log_error(self, message: str) -> None:
        """Echec d'une operation du store."""

    def log_debug(self, message: str) -> None:
        """Detail de connexion D-Bus. Ignore par defaut."""
