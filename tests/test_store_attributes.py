"""Tests unitaires du schema d'attributs et des AppID connus."""

import base64

import pytest

from linux_u2f_store.config.settings import DEFAULT_SCHEMA
from linux_u2f_store.store.app_ids import (
    KNOWN_APP_IDS,
    app_id_digest,
    try_reverse_app_id,
)
from linux_u2f_store.store.attributes import (
    ATTR_APP_ID,
    ATTR_DATE_REGISTERED,
    ATTR_TIMES_USED,
    build_label,
    build_registration_attributes,
    build_search_attributes,
)

GITHUB = "https://github.com/u2f/trusted_facets"
KNOWN_APP = app_id_digest(GITHUB)
UNKNOWN_APP = bytes(range(32))
HANDLE = b"key-handle"


class TestAppIds:
    """Tests de la resolution des AppID connus."""

    def test_digest_est_sha256(self) -> None:
        """app_id_digest() retourne 32 octets."""
        assert len(app_id_digest(GITHUB)) == 32

    @pytest.mark.parametrize("app_id", KNOWN_APP_IDS)
    def test_reverse_app_id_connu(self, app_id: str) -> None:
        """Chaque AppID de la table est resolu."""
        assert try_reverse_app_id(app_id_digest(app_id)) == app_id

    def test_reverse_app_id_inconnu(self) -> None:
        """Un identifiant inconnu retourne None."""
        assert try_reverse_app_id(UNKNOWN_APP) is None


class TestSearchAttributes:
    """Tests de build_search_attributes()."""

    def test_contenu(self) -> None:
        """Les attributs contiennent schema et empreintes base64."""
        attributes = build_search_attributes(UNKNOWN_APP, HANDLE)
        assert attributes == {
            "application": DEFAULT_SCHEMA,
            "u2f_app_id_hash": base64.b64encode(UNKNOWN_APP).decode(),
            "u2f_key_handle": base64.b64encode(HANDLE).decode(),
            "xdg:schema": DEFAULT_SCHEMA,
        }

    def test_deterministe(self) -> None:
        """Deux appels identiques donnent le meme resultat."""
        assert build_search_attributes(KNOWN_APP, HANDLE) == \
            build_search_attributes(KNOWN_APP, HANDLE)

    def test_schema_personnalise(self) -> None:
        """Le schema est repris dans application et xdg:schema."""
        attributes = build_search_attributes(KNOWN_APP, HANDLE, "org.test")
        assert attributes["application"] == "org.test"
        assert attributes["xdg:schema"] == "org.test"

    def test_couples_distincts(self) -> None:
        """Deux key handles differents donnent des attributs differents."""
        assert build_search_attributes(KNOWN_APP, b"a") != \
            build_search_attributes(KNOWN_APP, b"b")


class TestRegistrationAttributes:
    """Tests de build_registration_attributes()."""

    def test_sur_ensemble_des_attributs_de_recherche(self) -> None:
        """Les attributs de recherche sont un sous-ensemble."""
        search = build_search_attributes(KNOWN_APP, HANDLE)
        registration = build_registration_attributes(KNOWN_APP, HANDLE)
        assert search.items() <= registration.items()

    def test_metadonnees(self) -> None:
        """times_used, date_registered et u2f_app_id sont presents."""
        attributes = build_registration_attributes(
            KNOWN_APP, HANDLE, registered_at=1700000000
        )
        assert attributes[ATTR_TIMES_USED] == "0"
        assert attributes[ATTR_DATE_REGISTERED] == "1700000000"
        assert attributes[ATTR_APP_ID] == GITHUB

    def test_date_par_defaut(self) -> None:
        """Sans registered_at, la date est un entier de secondes."""
        attributes = build_registration_attributes(KNOWN_APP, HANDLE)
        assert attributes[ATTR_DATE_REGISTERED].isdigit()

    def test_app_id_inconnu_omis(self) -> None:
        """u2f_app_id est omis si l'AppID n'est pas resolu."""
        attributes = build_registration_attributes(UNKNOWN_APP, HANDLE)
        assert ATTR_APP_ID not in attributes

    def test_valeurs_de_type_str(self) -> None:
        """Toutes les valeurs sont des chaines (contrainte D-Bus)."""
        attributes = build_registration_attributes(KNOWN_APP, HANDLE)
        assert all(isinstance(v, str) for v in attributes.values())


class TestLabel:
    """Tests de build_label()."""

    def test_label_app_id_connu(self) -> None:
        """Le libelle reprend l'AppID lisible."""
        assert build_label(KNOWN_APP, "Token pour") == f"Token pour {GITHUB}"

    def test_label_app_id_inconnu(self) -> None:
        """Le libelle reprend le base64 de l'identifiant sinon."""
        label = build_label(UNKNOWN_APP, "Token pour")
        assert label == f"Token pour {base64.b64encode(UNKNOWN_APP).decode()}"
