"""
Module contenant les exceptions de base de linux_u2f_store.

Ce module suit le principe SRP en isolant la gestion des exceptions.
Les erreurs du store de secrets (linux_u2f_store.store.exceptions)
heritent de ApplicationError.
"""


class ApplicationError(Exception):
    """Exception de base pour toutes les erreurs du paquet."""
    pass


class ConfigurationError(ApplicationError):
    """Exception de base pour toutes les Configurations."""
    pass


class FileConfigurationError(ConfigurationError):
    """Fichier de configuration illisible ou invalide."""
    pass

