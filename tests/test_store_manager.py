"""
Tests for the process-wide store and validator lifecycle.
"""

import pytest

from app.core import store_manager
from app.core.setting import settings


@pytest.fixture
def configured_file(tmp_path, monkeypatch):
    path = tmp_path / "urlmapping.json"
    monkeypatch.setattr(settings, "MAPPING_FILE", path)
    monkeypatch.setattr(store_manager, "_store", None)
    monkeypatch.setattr(store_manager, "_validator", None)
    return path


class TestStoreManager:

    def test_singletons_are_shared(self, configured_file):
        assert store_manager.get_mapping_store() is store_manager.get_mapping_store()
        assert store_manager.get_mapping_store().path == configured_file
        assert (
            store_manager.get_reachability_validator()
            is store_manager.get_reachability_validator()
        )

    @pytest.mark.asyncio
    async def test_startup_creates_file_when_enabled(self, configured_file, monkeypatch):
        monkeypatch.setattr(settings, "CREATE_MAPPING_FILE", True)

        await store_manager.initialize_store()

        assert configured_file.exists()
        assert await store_manager.get_mapping_store().load() == {}
        await store_manager.shutdown_store()

    @pytest.mark.asyncio
    async def test_startup_tolerates_missing_file(self, configured_file, monkeypatch):
        monkeypatch.setattr(settings, "CREATE_MAPPING_FILE", False)

        await store_manager.initialize_store()

        assert not configured_file.exists()
        await store_manager.shutdown_store()

    @pytest.mark.asyncio
    async def test_shutdown_closes_validator(self, configured_file):
        validator = store_manager.get_reachability_validator()

        await store_manager.shutdown_store()

        assert validator.client.is_closed
        assert store_manager._validator is None
        assert store_manager._store is None
