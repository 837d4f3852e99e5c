"""Tests pour le module config."""

import json
from unittest.mock import MagicMock, patch

import pytest
from pydantic import BaseModel

from linux_u2f_store.config import (
    DEFAULT_SCHEMA,
    FileConfigLoader,
    StoreSettings,
    load_settings,
)
from linux_u2f_store.config.loader import (
    environment_overrides,
    flatten_sections,
)
from linux_u2f_store.errors.exceptions import FileConfigurationError


class TestFileConfigLoader:
    """Tests pour FileConfigLoader."""

    def setup_method(self):
        """Initialise le loader avant chaque test."""
        self.loader = FileConfigLoader()

    def test_load_json(self, tmp_path):
        """Test du chargement d'un fichier JSON."""
        config_file = tmp_path / "config.json"
        config_data = {"store": {"schema_tag": "org.example"}}
        config_file.write_text(json.dumps(config_data))

        assert self.loader.load(config_file) == config_data

    def test_load_toml(self, tmp_path):
        """Test du chargement d'un fichier TOML."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[logging]\nlevel = "debug"\n')

        result = self.loader.load(config_file)

        assert result["logging"]["level"] == "debug"

    def test_file_not_found(self):
        """Test avec fichier inexistant."""
        with pytest.raises(FileNotFoundError):
            self.loader.load("/nonexistent/config.toml")

    def test_unsupported_extension(self, tmp_path):
        """Test avec extension non supportée."""
        config_file = tmp_path / "config.xml"
        config_file.write_text("<config></config>")

        with pytest.raises(ValueError, match="Extension non supportée"):
            self.loader.load(config_file)

    def test_load_with_schema(self, tmp_path):
        """Le schema pydantic est applique au contenu brut."""
        config_file = tmp_path / "config.json"
        config_file.write_text('{"schema_tag": "org.example"}')

        settings = self.loader.load(config_file, schema=StoreSettings)

        assert isinstance(settings, StoreSettings)
        assert settings.schema_tag == "org.example"

    def test_invalid_schema_type(self, tmp_path):
        """Un schema qui n'est pas un BaseModel leve TypeError."""
        config_file = tmp_path / "config.json"
        config_file.write_text("{}")

        with pytest.raises(TypeError, match="BaseModel"):
            self.loader.load(config_file, schema=dict)

    def test_custom_schema(self, tmp_path):
        """N'importe quel BaseModel peut servir de schema."""

        class Custom(BaseModel):
            name: str

        config_file = tmp_path / "config.toml"
        config_file.write_text('name = "u2f"\n')

        assert self.loader.load(config_file, schema=Custom).name == "u2f"


class TestStoreSettings:
    """Tests pour StoreSettings."""

    def test_defaults(self):
        """Les valeurs par defaut reprennent le schema historique."""
        settings = StoreSettings()
        assert settings.schema_tag == DEFAULT_SCHEMA
        assert settings.label_prefix == "Universal 2nd Factor token for"
        assert settings.content_type == "application/json"
        assert settings.log_level == "INFO"
        assert settings.console_output is False

    def test_log_level_normalized(self):
        """Le niveau est mis en majuscules."""
        assert StoreSettings(log_level="warning").log_level == "WARNING"

    @pytest.mark.parametrize("kwargs", [
        {"log_level": "verbose"},
        {"schema_tag": "  "},
        {"label_prefix": ""},
        {"unknown": "x"},
    ])
    def test_invalid_values(self, kwargs):
        """Les valeurs invalides sont rejetees."""
        with pytest.raises(ValueError):
            StoreSettings(**kwargs)

    def test_frozen(self):
        """Les parametres sont immuables."""
        settings = StoreSettings()
        with pytest.raises(ValueError):
            settings.schema_tag = "autre"


class TestFlattenSections:
    """Tests pour flatten_sections et environment_overrides."""

    def test_sections(self):
        """Les sections sont converties en champs plats."""
        flat = flatten_sections({
            "store": {"schema_tag": "org.example", "label_prefix": "U2F"},
            "logging": {"file": "/tmp/u2f.log", "console": True},
        })
        assert flat == {
            "schema_tag": "org.example",
            "label_prefix": "U2F",
            "log_file": "/tmp/u2f.log",
            "console_output": True,
        }

    def test_top_level_field(self):
        """Un nom de champ au premier niveau est accepte."""
        assert flatten_sections({"log_level": "ERROR"}) == \
            {"log_level": "ERROR"}

    def test_unknown_section(self):
        """Une section inconnue leve FileConfigurationError."""
        with pytest.raises(FileConfigurationError, match="inconnue"):
            flatten_sections({"network": {}})

    def test_unknown_option(self):
        """Une option inconnue leve FileConfigurationError."""
        with pytest.raises(FileConfigurationError, match="Option inconnue"):
            flatten_sections({"store": {"replace": True}})

    def test_section_not_a_table(self):
        """Une section doit etre une table."""
        with pytest.raises(FileConfigurationError):
            flatten_sections({"store": "org.example"})

    def test_environment_overrides(self):
        """Seules les variables U2F_STORE_<CHAMP> non vides sont lues."""
        overrides = environment_overrides({
            "U2F_STORE_SCHEMA_TAG": "org.example",
            "U2F_STORE_LOG_LEVEL": "",
            "U2F_STORE_UNKNOWN": "x",
            "HOME": "/root",
        })
        assert overrides == {"schema_tag": "org.example"}


class TestLoadSettings:
    """Tests pour load_settings."""

    def test_no_file(self):
        """Sans fichier ni environnement, les valeurs par defaut."""
        with patch(
            "linux_u2f_store.config.loader.DEFAULT_SEARCH_PATHS", ()
        ):
            settings = load_settings(environ={})
        assert settings == StoreSettings()

    def test_search_paths(self, tmp_path):
        """Le premier fichier existant des chemins par defaut est lu."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[store]\nschema_tag = "org.found"\n')
        with patch(
            "linux_u2f_store.config.loader.DEFAULT_SEARCH_PATHS",
            (tmp_path / "absent.toml", config_file),
        ):
            settings = load_settings(environ={})
        assert settings.schema_tag == "org.found"

    def test_toml_file(self, tmp_path):
        """Les sections TOML alimentent les parametres."""
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            '[store]\n'
            'label_prefix = "Cle U2F"\n'
            '[logging]\n'
            'level = "debug"\n'
            'console = true\n'
        )

        settings = load_settings(config_file, environ={})

        assert settings.label_prefix == "Cle U2F"
        assert settings.log_level == "DEBUG"
        assert settings.console_output is True
        assert settings.schema_tag == DEFAULT_SCHEMA

    def test_environ_overrides_file(self, tmp_path):
        """L'environnement l'emporte sur le fichier."""
        config_file = tmp_path / "config.json"
        config_file.write_text('{"logging": {"level": "ERROR"}}')

        settings = load_settings(
            config_file, environ={"U2F_STORE_LOG_LEVEL": "warning"}
        )

        assert settings.log_level == "WARNING"

    def test_dotenv(self, tmp_path):
        """Le fichier .env l'emporte sur le fichier de configuration."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[store]\nschema_tag = "org.file"\n')
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text(
            "U2F_STORE_SCHEMA_TAG=org.dotenv\n"
            "U2F_STORE_CONSOLE_OUTPUT=true\n"
        )

        settings = load_settings(config_file, dotenv_file, environ={})

        assert settings.schema_tag == "org.dotenv"
        assert settings.console_output is True

    def test_environ_overrides_dotenv(self, tmp_path):
        """Les variables deja definies ne sont pas remplacees par .env."""
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text("U2F_STORE_SCHEMA_TAG=org.dotenv\n")

        with patch(
            "linux_u2f_store.config.loader.DEFAULT_SEARCH_PATHS", ()
        ):
            settings = load_settings(
                dotenv_path=dotenv_file,
                environ={"U2F_STORE_SCHEMA_TAG": "org.environ"},
            )

        assert settings.schema_tag == "org.environ"

    def test_missing_dotenv_ignored(self, tmp_path):
        """Un fichier .env absent est ignore."""
        with patch(
            "linux_u2f_store.config.loader.DEFAULT_SEARCH_PATHS", ()
        ):
            settings = load_settings(
                dotenv_path=tmp_path / ".env", environ={}
            )
        assert settings == StoreSettings()

    def test_missing_explicit_file(self, tmp_path):
        """Un fichier explicite absent leve FileConfigurationError."""
        with pytest.raises(FileConfigurationError, match="illisible"):
            load_settings(tmp_path / "absent.toml", environ={})

    def test_invalid_toml(self, tmp_path):
        """Un TOML mal forme leve FileConfigurationError."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[store\n")

        with pytest.raises(FileConfigurationError):
            load_settings(config_file, environ={})

    def test_invalid_value(self, tmp_path):
        """Une valeur invalide leve FileConfigurationError."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[logging]\nlevel = "bavard"\n')

        with pytest.raises(FileConfigurationError, match="invalide"):
            load_settings(config_file, environ={})

    @pytest.mark.parametrize("content", ["[]", '"texte"', "42"])
    def test_json_not_an_object(self, tmp_path, content):
        """Une racine JSON autre qu'un objet leve FileConfigurationError."""
        config_file = tmp_path / "config.json"
        config_file.write_text(content)

        with pytest.raises(FileConfigurationError, match="table"):
            load_settings(config_file, environ={})

    def test_unknown_section(self, tmp_path):
        """Une section inconnue leve FileConfigurationError."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[network]\nhost = "x"\n')

        with pytest.raises(FileConfigurationError):
            load_settings(config_file, environ={})

    def test_injected_loader(self):
        """Le chargeur injecte est utilise."""
        loader = MagicMock()
        loader.load.return_value = {"store": {"content_type": "text/plain"}}

        settings = load_settings(
            "/etc/u2f.toml", environ={}, config_loader=loader
        )

        loader.load.assert_called_once()
        assert settings.content_type == "text/plain"
