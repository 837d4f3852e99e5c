"""Resolution des identifiants d'application U2F connus.

Un identifiant d'application U2F est le SHA-256 de l'AppID (URL) du
relying party. L'empreinte n'est pas reversible : seuls les AppID
de la table ci-dessous sont reconnus.
"""

import hashlib
from typing import Dict, Optional

KNOWN_APP_IDS = (
    "https://github.com/u2f/trusted_facets",
    "https://www.gstatic.com/securitykey/origins.json",
    "https://www.dropbox.com/u2f-app-id.json",
    "https://demo.yubico.com",
    "https://vault.bitwarden.com/app-id.json",
    "https://keepersecurity.com",
    "https://api-9dcf9b83.duosecurity.com",
    "https://dashboard.stripe.com",
    "https://id.fedoraproject.org/u2f-origins.json",
    "https://bitbucket.org",
    "https://gitlab.com",
    "https://login.launchpad.net",
    "https://twitter.com/account/login_verification/u2f_trusted_facets.json",
)

_REVERSE_TABLE: Dict[bytes, str] = {
    hashlib.sha256(app_id.encode("utf-8")).digest(): app_id
    for app_id in KNOWN_APP_IDS
}


def app_id_digest(app_id: str) -> bytes:
    """Identifiant d'application (32 octets) d'un AppID texte."""
    return hashlib.sha256(app_id.encode("utf-8")).digest()


def try_reverse_app_id(application: bytes) -> Optional[str]:
    """Retourne l'AppID lisible d'un identifiant connu, sinon None."""
    return _REVERSE_TABLE.get(bytes(application))
