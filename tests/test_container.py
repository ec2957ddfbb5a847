from __future__ import annotations

import pytest

from src.hr_portal.hr_portal.container import build_container, build_store
from src.hr_portal.hr_portal.core.enums import StoreBackend
from src.hr_portal.hr_portal.core.exceptions import ConfigurationError
from src.hr_portal.hr_portal.seed.accounts import GoTrueAccountRegistry
from src.hr_portal.hr_portal.store.memory_store import InMemoryCollectionStore
from src.hr_portal.hr_portal.store.rest_store import RestCollectionStore


def test_memory_backend_builds_every_service(test_settings):
    container = build_container(settings=test_settings)

    assert container.backend == StoreBackend.MEMORY
    assert isinstance(container.store, InMemoryCollectionStore)
    assert container.conn is None
    assert container.store.select("profiles") == []
    container.close()


def test_rest_backend_requires_url_and_key(test_settings):
    test_settings.STORE_BACKEND = "rest"
    test_settings.STORE_URL = "https://db.example.test"

    with pytest.raises(ConfigurationError):
        build_store(test_settings)


def test_rest_backend(test_settings):
    test_settings.STORE_BACKEND = "REST"
    test_settings.STORE_URL = "https://db.example.test"
    test_settings.STORE_SERVICE_KEY = "service-key"

    container = build_container(settings=test_settings)

    assert isinstance(container.store, RestCollectionStore)
    assert isinstance(container.accounts, GoTrueAccountRegistry)
    container.close()

    assert container.store._client.is_closed
    assert container.accounts._client.is_closed


def test_unknown_backend(test_settings):
    test_settings.STORE_BACKEND = "sqlite"

    with pytest.raises(ConfigurationError, match="sqlite"):
        build_store(test_settings)
