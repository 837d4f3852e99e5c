"""Schema de configuration du store de credentials U2F."""

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_SCHEMA = "com.github.danstiner.rust-u2f"
DEFAULT_LABEL_PREFIX = "Universal 2nd Factor token for"
DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_LOG_FILE = "~/.local/state/linux-u2f-store/store.log"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StoreSettings(BaseModel):
    """Parametres du store, valides par pydantic.

    Attributes:
        schema_tag: Valeur des attributs "application" et "xdg:schema"
            de chaque element. La modifier rend les credentials
            existants introuvables.
        label_prefix: Prefixe du libelle affiche dans le trousseau.
        content_type: Type MIME du contenu stocke.
        log_file: Fichier de journalisation.
        log_level: Niveau de journalisation.
        log_format: Format logging.Formatter.
        console_output: Dupliquer les journaux sur la console.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_tag: str = DEFAULT_SCHEMA
    label_prefix: str = DEFAULT_LABEL_PREFIX
    content_type: str = DEFAULT_CONTENT_TYPE
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    console_output: bool = False

    @field_validator("schema_tag", "label_prefix", "content_type")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("la valeur ne peut pas etre vide")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"niveau inconnu: {value!r}, attendus: {_LOG_LEVELS}"
            )
        return level
