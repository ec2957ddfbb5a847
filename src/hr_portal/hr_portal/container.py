from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .core.constants import DEFAULT_REQUEST_TIMEOUT, KNOWN_TABLES
from .core.enums import StoreBackend
from .core.exceptions import ConfigurationError
from .database.connection import DatabaseConnection, DBConfig
from .discovery.service import SchemaProber
from .health.service import TableHealthChecker
from .records.service import RecordService
from .seed.accounts import AccountRegistry, GoTrueAccountRegistry, StoreAccountRegistry
from .seed.service import SeedLoader
from .smoke.service import CrudSmokeTester
from .store.memory_store import InMemoryCollectionStore, TableSchema
from .store.mysql_store import MySQLCollectionStore
from .store.repository import CollectionStore
from .store.rest_store import RestCollectionStore


@dataclass(frozen=True)
class Container:
    backend: StoreBackend
    store: CollectionStore
    conn: Optional[DatabaseConnection]
    accounts: AccountRegistry

    prober: SchemaProber
    smoke_tester: CrudSmokeTester
    seed_loader: SeedLoader
    health_checker: TableHealthChecker
    record_service: RecordService

    def close(self) -> None:
        self.accounts.close()
        self.store.close()


def build_store(settings: Any) -> tuple[StoreBackend, CollectionStore, Optional[DatabaseConnection]]:
    try:
        backend = StoreBackend(str(getattr(settings, "STORE_BACKEND", "memory")).lower())
    except ValueError:
        raise ConfigurationError(f"Unsupported STORE_BACKEND: {getattr(settings, 'STORE_BACKEND', None)!r}")

    if backend == StoreBackend.REST:
        url = getattr(settings, "STORE_URL", None)
        key = getattr(settings, "STORE_SERVICE_KEY", None)
        if not url or not key:
            raise ConfigurationError("STORE_URL and STORE_SERVICE_KEY must be set for the rest backend")
        timeout = float(getattr(settings, "REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT))
        return backend, RestCollectionStore(url, key, timeout=timeout), None

    if backend == StoreBackend.MYSQL:
        conn = DatabaseConnection(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
        return backend, MySQLCollectionStore(conn), conn

    store = InMemoryCollectionStore({table: TableSchema() for table in KNOWN_TABLES + ("accounts",)})
    return backend, store, None


def build_account_registry(settings: Any, backend: StoreBackend, store: CollectionStore) -> AccountRegistry:
    if backend == StoreBackend.REST:
        return GoTrueAccountRegistry(
            settings.STORE_URL,
            settings.STORE_SERVICE_KEY,
            timeout=float(getattr(settings, "REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        )
    return StoreAccountRegistry(store)


def build_container(*, settings: Any) -> Container:
    backend, store, conn = build_store(settings)

    accounts = build_account_registry(settings, backend, store)
    seed_loader = SeedLoader(
        store,
        accounts,
        password=getattr(settings, "DEMO_PASSWORD", None) or None,
    )

    return Container(
        backend=backend,
        store=store,
        conn=conn,
        accounts=accounts,
        prober=SchemaProber(store),
        smoke_tester=CrudSmokeTester(store),
        seed_loader=seed_loader,
        health_checker=TableHealthChecker(store),
        record_service=RecordService(store),
    )
