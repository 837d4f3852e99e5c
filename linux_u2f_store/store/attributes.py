"""Schema d'attributs des elements du trousseau.

Les attributs de recherche sont l'unique cle de localisation d'un
credential : ils doivent etre recalculables a l'identique a partir
du couple (application, key handle). Les metadonnees ajoutees a
l'enregistrement sont descriptives et ne servent jamais a la
recherche.
"""

import base64
import time
from typing import Dict, Optional

from linux_u2f_store.config.settings import DEFAULT_SCHEMA
from linux_u2f_store.store.app_ids import try_reverse_app_id

ATTR_APPLICATION = "application"
ATTR_SCHEMA = "xdg:schema"
ATTR_APP_ID_HASH = "u2f_app_id_hash"
ATTR_KEY_HANDLE = "u2f_key_handle"
ATTR_TIMES_USED = "times_used"
ATTR_DATE_REGISTERED = "date_registered"
ATTR_APP_ID = "u2f_app_id"


def build_search_attributes(
    application: bytes,
    handle: bytes,
    schema: str = DEFAULT_SCHEMA,
) -> Dict[str, str]:
    """Attributs de recherche d'un couple (application, key handle).

    Args:
        application: Identifiant d'application (deja un SHA-256).
        handle: Key handle.
        schema: Etiquette de schema du store.

    Returns:
        Nouveau dictionnaire d'attributs, identique pour des entrees
        identiques.
    """
    return {
        ATTR_APPLICATION: schema,
        ATTR_APP_ID_HASH: base64.b64encode(application).decode("ascii"),
        ATTR_KEY_HANDLE: base64.b64encode(handle).decode("ascii"),
        ATTR_SCHEMA: schema,
    }


def build_registration_attributes(
    application: bytes,
    handle: bytes,
    schema: str = DEFAULT_SCHEMA,
    registered_at: Optional[int] = None,
) -> Dict[str, str]:
    """Attributs de recherche completes des metadonnees d'enregistrement.

    Args:
        application: Identifiant d'application.
        handle: Key handle.
        schema: Etiquette de schema du store.
        registered_at: Date d'enregistrement en secondes Unix
            (defaut: maintenant).

    Returns:
        Attributs a attacher au nouvel element.
    """
    attributes = build_search_attributes(application, handle, schema)
    attributes[ATTR_TIMES_USED] = "0"
    if registered_at is None:
        registered_at = int(time.time())
    attributes[ATTR_DATE_REGISTERED] = str(registered_at)

    app_id = try_reverse_app_id(application)
    if app_id is not None:
        attributes[ATTR_APP_ID] = app_id
    return attributes


def build_label(application: bytes, prefix: str) -> str:
    """Libelle lisible de l'element (AppID connu ou base64 brut)."""
    app_id = try_reverse_app_id(application)
    if app_id is None:
        app_id = base64.b64encode(application).decode("ascii")
    return f"{prefix} {app_id}"
