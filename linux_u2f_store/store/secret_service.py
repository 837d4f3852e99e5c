"""Store de credentials U2F adosse au Secret Service.

Chaque credential est un element de la collection par defaut du
trousseau, localise par ses attributs de recherche (voir
linux_u2f_store.store.attributes) et dont le secret est
l'enregistrement JSON (voir linux_u2f_store.store.models).

Avant toute lecture ou ecriture, la collection est deverrouillee si
necessaire. Si la collection se reverrouille pendant une operation,
elle est deverrouillee une seconde fois et l'operation est rejouee
une seule fois.
"""

from typing import Callable, Optional, TypeVar

from linux_u2f_store.config.settings import StoreSettings
from linux_u2f_store.logging.base import Logger
from linux_u2f_store.logging.security_logger import (
    SecurityEvent,
    SecurityEventType,
    SecurityLogger,
)
from linux_u2f_store.store.attributes import (
    ATTR_TIMES_USED,
    build_label,
    build_registration_attributes,
    build_search_attributes,
)
from linux_u2f_store.store.base import UserSecretStore
from linux_u2f_store.store.exceptions import (
    DuplicateItemError,
    LockedError,
    NoResultError,
    ParseError,
    PromptDismissedError,
    SecretStoreError,
)
from linux_u2f_store.store.locks import PairLockRegistry
from linux_u2f_store.store.models import (
    ApplicationKey,
    SecretRecord,
    deserialize,
    serialize,
)
from linux_u2f_store.vault.base import Vault, VaultCollection, VaultItem

T = TypeVar("T")


class SecretServiceStore(UserSecretStore):
    """Stocke les credentials U2F dans le trousseau du bureau.

    Le coffre est injecte a la construction : SecretServiceVault en
    production, MemoryVault pour les tests.

    Usage typique :

        with SecretServiceStore.open(settings=load_settings()) as store:
            store.add_application_key(key)
            counter = store.get_and_increment_counter(
                key.application, key.handle
            )

    Attributes:
        _vault: Coffre securise.
        _settings: Parametres (schema, libelle, type de contenu).
        _logger: Logger optionnel.
        _audit: Journal d'audit, actif si un logger est fourni.
        _locks: Verrous par couple (application, key handle).
    """

    def __init__(
        self,
        vault: Vault,
        settings: Optional[StoreSettings] = None,
        logger: Optional[Logger] = None,
        lock_registry: Optional[PairLockRegistry] = None,
    ) -> None:
        """Initialise le store.

        Args:
            vault: Coffre securise (injection de dependance).
            settings: Parametres du store (defaut: StoreSettings()).
            logger: Logger optionnel.
            lock_registry: Registre de verrous partage entre plusieurs
                stores du meme processus (defaut: registre propre).
        """
        self._vault = vault
        self._settings = settings or StoreSettings()
        self._logger = logger
        self._audit = SecurityLogger(logger) if logger else None
        self._locks = lock_registry or PairLockRegistry()

    @classmethod
    def open(
        cls,
        settings: Optional[StoreSettings] = None,
        logger: Optional[Logger] = None,
    ) -> "SecretServiceStore":
        """Cree un store connecte au Secret Service du bus de session.

        La connexion D-Bus n'est ouverte qu'a la premiere operation.
        """
        from linux_u2f_store.vault.secretstorage_vault import (
            SecretServiceVault,
        )

        return cls(SecretServiceVault(logger=logger), settings, logger)

    @staticmethod
    def is_supported() -> bool:
        """Indique si un Secret Service est utilisable sur cet hote.

        S'appuie sur la detection du backend SecretService de keyring
        (secretstorage installe et service joignable).
        """
        from keyring.backends import SecretService

        return bool(SecretService.Keyring.viable)

    def close(self) -> None:
        """Ferme la connexion au coffre."""
        self._vault.close()

    def __enter__(self) -> "SecretServiceStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Contrat SecretStore
    # ------------------------------------------------------------------

    def add_application_key(self, key: ApplicationKey) -> None:
        self.add_secret(SecretRecord(application_key=key, counter=0))

    def add_secret(self, record: SecretRecord) -> None:
        key = record.application_key
        schema = self._settings.schema_tag
        search = build_search_attributes(key.application, key.handle, schema)
        attributes = build_registration_attributes(
            key.application, key.handle, schema
        )
        label = build_label(key.application, self._settings.label_prefix)
        payload = serialize(record)
        content_type = self._settings.content_type

        def write(collection: VaultCollection) -> str:
            existing = collection.search_items(search)
            if len(existing) > 1:
                raise self._duplicate_error(
                    key.application, key.handle, len(existing)
                )
            if existing:
                # Remplacement sur place : le couple reste unique et
                # son compteur ne redescend jamais
                item = existing[0]
                written = record.with_counter(
                    max(self._stored_counter(item), record.counter)
                )
                item.set_secret(serialize(written), content_type)
                item.set_attributes(
                    {**attributes, ATTR_TIMES_USED: str(written.counter)}
                )
                return "replaced"
            collection.create_item(
                label,
                {**attributes, ATTR_TIMES_USED: str(record.counter)},
                payload,
                content_type,
                True,
            )
            return "created"

        with self._locks.hold(key.application, key.handle):
            outcome = self._run(write)

        self._log_info(
            f"Credential enregistre ({outcome}) : "
            f"{SecurityLogger.pair_resource(key.application, key.handle)}"
        )
        self._audit_event(
            SecurityEventType.CREDENTIAL_REGISTERED,
            key.application,
            key.handle,
            {"outcome": outcome, "counter": record.counter},
        )

    def retrieve_application_key(
        self,
        application: bytes,
        handle: bytes,
    ) -> Optional[ApplicationKey]:
        def read(collection: VaultCollection) -> Optional[SecretRecord]:
            item = self._find_item(collection, application, handle)
            if item is None:
                return None
            return self._read_record(item, application, handle)

        record = self._run(read)
        if record is None:
            return None
        self._audit_event(
            SecurityEventType.CREDENTIAL_RETRIEVED, application, handle
        )
        return record.application_key

    def get_and_increment_counter(
        self,
        application: bytes,
        handle: bytes,
    ) -> int:
        content_type = self._settings.content_type

        def increment(collection: VaultCollection) -> int:
            item = self._find_item(collection, application, handle)
            if item is None:
                raise NoResultError(
                    "Aucun credential pour "
                    f"{SecurityLogger.pair_resource(application, handle)}"
                )
            record = self._read_record(item, application, handle)
            updated = record.with_counter(record.counter + 1)
            item.set_secret(serialize(updated), content_type)
            self._refresh_times_used(item, updated.counter)
            return record.counter

        with self._locks.hold(application, handle):
            counter = self._run(increment)

        self._audit_event(
            SecurityEventType.COUNTER_INCREMENTED,
            application,
            handle,
            {"counter": counter},
        )
        return counter

    # ------------------------------------------------------------------
    # Verrouillage
    # ------------------------------------------------------------------

    def _run(self, operation: Callable[[VaultCollection], T]) -> T:
        """Execute operation sur la collection par defaut deverrouillee."""
        collection = self._vault.default_collection()
        self._unlock_if_locked(collection)
        try:
            return operation(collection)
        except LockedError:
            self._log_warning(
                "Collection verrouillee pendant l'operation, "
                "deverrouillage puis nouvel essai"
            )
            self._unlock_if_locked(collection)
            return operation(collection)

    def _unlock_if_locked(self, collection: VaultCollection) -> None:
        """Deverrouille la collection si elle est verrouillee.

        Raises:
            PromptDismissedError: si le prompt a ete annule.
            LockedError: si la collection reste verrouillee.
        """
        if not collection.is_locked():
            return
        self._log_info("Collection verrouillee, demande de deverrouillage")
        dismissed = collection.unlock()
        if dismissed:
            self._audit_unlock_failure("prompt_dismissed")
            raise PromptDismissedError("prompt dismissed")
        if collection.is_locked():
            self._audit_unlock_failure("still_locked")
            raise LockedError("object locked")
        if self._audit:
            self._audit.log_event(SecurityEvent(
                event_type=SecurityEventType.VAULT_UNLOCKED,
                resource="collection:default",
            ))

    # ------------------------------------------------------------------
    # Lecture
    # ------------------------------------------------------------------

    def _find_item(
        self,
        collection: VaultCollection,
        application: bytes,
        handle: bytes,
    ) -> Optional[VaultItem]:
        """Retourne l'unique element du couple, ou None.

        Raises:
            DuplicateItemError: si plusieurs elements correspondent.
        """
        items = collection.search_items(build_search_attributes(
            application, handle, self._settings.schema_tag
        ))
        if not items:
            return None
        if len(items) > 1:
            raise self._duplicate_error(application, handle, len(items))
        return items[0]

    def _read_record(
        self,
        item: VaultItem,
        application: bytes,
        handle: bytes,
    ) -> SecretRecord:
        """Lit et decode l'enregistrement d'un element.

        Raises:
            ParseError: si le contenu est illisible ou ne correspond
                pas au couple recherche.
        """
        try:
            record = deserialize(item.get_secret())
            key = record.application_key
            if key.application != application or key.handle != handle:
                raise ParseError(
                    "Le contenu stocke ne correspond pas au couple "
                    "(application, key handle) recherche."
                )
        except ParseError as exc:
            self._log_error(f"Contenu illisible : {exc}")
            self._audit_event(
                SecurityEventType.PAYLOAD_CORRUPTED,
                application,
                handle,
                {"reason": str(exc)},
                severity="error",
            )
            raise
        return record

    def _stored_counter(self, item: VaultItem) -> int:
        """Compteur de l'element remplace (0 si son contenu est illisible)."""
        try:
            return deserialize(item.get_secret()).counter
        except ParseError as exc:
            self._log_warning(
                f"Element remplace illisible, compteur repris a 0 : {exc}"
            )
            return 0

    def _refresh_times_used(self, item: VaultItem, counter: int) -> None:
        """Met a jour la metadonnee times_used (descriptive seulement)."""
        try:
            attributes = item.get_attributes()
            attributes[ATTR_TIMES_USED] = str(counter)
            item.set_attributes(attributes)
        except SecretStoreError as exc:
            self._log_warning(
                f"Metadonnee {ATTR_TIMES_USED} non mise a jour : {exc}"
            )

    def _duplicate_error(
        self,
        application: bytes,
        handle: bytes,
        count: int,
    ) -> DuplicateItemError:
        """Journalise un doublon et retourne l'erreur a lever."""
        resource = SecurityLogger.pair_resource(application, handle)
        self._log_error(f"{count} elements pour le couple {resource}")
        self._audit_event(
            SecurityEventType.CREDENTIAL_DUPLICATE,
            application,
            handle,
            {"items": count},
            severity="error",
        )
        return DuplicateItemError(
            f"{count} elements du trousseau correspondent a {resource}"
        )

    # ------------------------------------------------------------------
    # Journalisation
    # ------------------------------------------------------------------

    def _audit_event(
        self,
        event_type: SecurityEventType,
        application: bytes,
        handle: bytes,
        details: Optional[dict] = None,
        severity: str = "info",
    ) -> None:
        if self._audit:
            self._audit.log_event(SecurityEvent(
                event_type=event_type,
                resource=SecurityLogger.pair_resource(application, handle),
                details=details or {},
                severity=severity,
            ))

    def _audit_unlock_failure(self, reason: str) -> None:
        if self._audit:
            self._audit.log_event(SecurityEvent(
                event_type=SecurityEventType.VAULT_UNLOCK_FAILED,
                resource="collection:default",
                details={"reason": reason},
                severity="warning",
            ))

    def _log_info(self, message: str) -> None:
        if self._logger:
            self._logger.log_info(message)

    def _log_warning(self, message: str) -> None:
        if self._logger:
            self._logger.log_warning(message)

    def _log_error(self, message: str) -> None:
        if self._logger:
            self._logger.log_error(message)
