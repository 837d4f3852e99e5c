"""Chargement de la configuration du store.

Ordre de priorite (du plus faible au plus fort) :
    valeurs par defaut -> fichier TOML/JSON -> fichier .env lu par
    python-dotenv -> variables d'environnement U2F_STORE_*
"""

import json
import os
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import dotenv_values
from pydantic import BaseModel, ValidationError

from linux_u2f_store.config.settings import StoreSettings
from linux_u2f_store.errors.exceptions import FileConfigurationError

ENV_PREFIX = "U2F_STORE_"

DEFAULT_SEARCH_PATHS = (
    Path("~/.config/linux-u2f-store/config.toml"),
    Path("/etc/linux-u2f-store/config.toml"),
)

# Sections du fichier -> champs de StoreSettings
_SECTION_FIELDS: Dict[str, Dict[str, str]] = {
    "store": {
        "schema_tag": "schema_tag",
        "label_prefix": "label_prefix",
        "content_type": "content_type",
    },
    "logging": {
        "file": "log_file",
        "level": "log_level",
        "format": "log_format",
        "console": "console_output",
    },
}


class ConfigLoader(ABC):
    """
    Interface abstraite pour le chargement de configuration.

    Permet l'injection de dépendance et facilite les tests
    en permettant de substituer l'implémentation réelle par un mock.
    """

    @abstractmethod
    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        """
        Charge un fichier de configuration.

        Args:
            config_path: Chemin vers le fichier de configuration
            schema: Classe Pydantic BaseModel optionnelle. Si fourni,
                retourne une instance du modèle, sinon un dict brut.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            ValueError: Si le format n'est pas supporté
        """
        pass


class FileConfigLoader(ConfigLoader):
    """
    Chargeur de configuration depuis fichiers TOML ou JSON.

    Le format est détecté par l'extension du fichier.
    """

    def load(
        self,
        config_path: Union[str, Path],
        schema: type | None = None
    ) -> Union[Dict[str, Any], Any]:
        path = Path(config_path).expanduser()

        if not path.exists():
            raise FileNotFoundError(
                f"Fichier de configuration non trouvé: {path}"
            )

        suffix = path.suffix.lower()

        if suffix == ".toml":
            with open(path, "rb") as f:
                raw_config = tomllib.load(f)
        elif suffix == ".json":
            with open(path, "r", encoding="utf-8") as f:
                raw_config = json.load(f)
        else:
            raise ValueError(
                f"Extension non supportée: {suffix}. "
                "Utilisez .toml ou .json"
            )

        if schema is None:
            return raw_config

        return self._validate_with_schema(raw_config, schema)

    @staticmethod
    def _validate_with_schema(data: Dict[str, Any], schema: type) -> Any:
        """Valide un dict via un modèle Pydantic.

        Raises:
            TypeError: Si schema n'est pas un BaseModel.
        """
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise TypeError(
                f"Le schema doit être une sous-classe de "
                f"pydantic.BaseModel, reçu: {schema}"
            )
        return schema.model_validate(data)


def flatten_sections(raw_config: Mapping[str, Any]) -> Dict[str, Any]:
    """Convertit les sections [store] et [logging] en champs plats.

    Les cles de premier niveau qui sont deja des noms de champs de
    StoreSettings sont conservees telles quelles.

    Raises:
        FileConfigurationError: Si le document n'est pas une table, ou
            si une section ou une cle est inconnue.
    """
    if not isinstance(raw_config, Mapping):
        raise FileConfigurationError(
            "La configuration doit être une table, reçu: "
            f"{type(raw_config).__name__}"
        )
    flat: Dict[str, Any] = {}
    for key, value in raw_config.items():
        if key in _SECTION_FIELDS:
            if not isinstance(value, dict):
                raise FileConfigurationError(
                    f"La section [{key}] doit être une table"
                )
            mapping = _SECTION_FIELDS[key]
            for option, option_value in value.items():
                if option not in mapping:
                    raise FileConfigurationError(
                        f"Option inconnue dans [{key}]: {option!r}"
                    )
                flat[mapping[option]] = option_value
        elif key in StoreSettings.model_fields:
            flat[key] = value
        else:
            raise FileConfigurationError(
                f"Section de configuration inconnue: {key!r}"
            )
    return flat


def environment_overrides(environ: Mapping[str, str]) -> Dict[str, str]:
    """Extrait les variables U2F_STORE_<CHAMP> connues."""
    overrides: Dict[str, str] = {}
    for name in StoreSettings.model_fields:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None and value != "":
            overrides[name] = value
    return overrides


def _find_config_file() -> Optional[Path]:
    for candidate in DEFAULT_SEARCH_PATHS:
        path = candidate.expanduser()
        if path.exists():
            return path
    return None


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    dotenv_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_loader: Optional[ConfigLoader] = None,
) -> StoreSettings:
    """
    Construit les StoreSettings effectifs.

    Args:
        config_path: Fichier TOML/JSON. Si None, le premier fichier
            existant de DEFAULT_SEARCH_PATHS est utilisé (optionnel).
        dotenv_path: Fichier .env optionnel. Ses valeurs ne
            remplacent pas les variables déjà présentes dans environ.
        environ: Environnement à lire (défaut: os.environ).
        config_loader: Chargeur injectable (défaut: FileConfigLoader).

    Returns:
        Instance validée de StoreSettings.

    Raises:
        FileConfigurationError: Si le fichier explicite est absent
            ou illisible, ou si la configuration est invalide.
    """
    loader = config_loader or FileConfigLoader()
    environ = os.environ if environ is None else environ
    data: Dict[str, Any] = {}

    path = Path(config_path) if config_path is not None \
        else _find_config_file()
    if path is not None:
        try:
            raw_config = loader.load(path)
        except (OSError, ValueError) as exc:
            raise FileConfigurationError(
                f"Configuration illisible ({path}): {exc}"
            ) from exc
        data.update(flatten_sections(raw_config))

    if dotenv_path is not None and Path(dotenv_path).exists():
        dotenv_environ = {
            key: value for key, value in
            dotenv_values(dotenv_path).items() if value is not None
        }
        data.update(environment_overrides(dotenv_environ))

    data.update(environment_overrides(environ))

    try:
        return StoreSettings.model_validate(data)
    except ValidationError as exc:
        raise FileConfigurationError(
            f"Configuration invalide: {exc}"
        ) from exc
