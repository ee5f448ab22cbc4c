"""
Tests for short code encoding and the shorten/redirect services.

The services run against a real MappingStore on a temporary file and a
ReachabilityValidator backed by the mock transport from conftest.py.
"""

import pytest

from app.core.exceptions import UnreachableURLError, MappingFileMissingError
from app.db.mapping_store import MappingStore
from app.services.encoder import encode_short_code
from app.services.redirect_service import RedirectService
from app.services.url_service import URLShorteningService


class TestShortCodeEncoding:
    """Test base64 short code derivation."""

    def test_encode_known_url(self):
        assert encode_short_code(b"https://example.com") == "aHR0cHM6Ly"
        assert encode_short_code(b"https://www.wikipedia.org") == "aHR0cHM6Ly"
        assert encode_short_code(b"http://www.google.com") == "aHR0cDovL3"

    def test_encoding_is_deterministic(self):
        url = "https://www.example.com/some/long/path?with=query".encode("utf-8")
        assert encode_short_code(url) == encode_short_code(url)

    def test_fixed_length_encoding(self):
        """Test that codes for URL-sized inputs are 10 characters."""
        for url in (b"http://a.b", b"https://example.com", b"https://x.org/" + b"p" * 500):
            assert len(encode_short_code(url)) == 10

    def test_short_input_keeps_whole_encoding(self):
        assert encode_short_code(b"abc") == "YWJj"

    def test_custom_length(self):
        assert encode_short_code(b"https://example.com", length=4) == "aHR0"

    def test_uses_standard_alphabet(self):
        assert encode_short_code(b"\xfb\xff\xbf\xfb\xff\xbf\xfb\xff") == "+/+/+/+/+/"


class TestURLShorteningService:
    """Shortening validates, encodes, then persists."""

    @pytest.mark.asyncio
    async def test_create_stores_mapping(self, store, validator):
        service = URLShorteningService(store, validator)

        short_code = await service.create_short_url("https://example.com")

        assert short_code == "aHR0cHM6Ly"
        assert await store.load() == {"aHR0cHM6Ly": "https://example.com"}

    @pytest.mark.asyncio
    async def test_create_twice_gives_same_code(self, store, validator):
        service = URLShorteningService(store, validator)

        first = await service.create_short_url("https://www.google.com")
        second = await service.create_short_url("https://www.google.com")

        assert first == second
        assert await store.load() == {first: "https://www.google.com"}

    @pytest.mark.asyncio
    async def test_colliding_code_is_overwritten(self, store, validator):
        service = URLShorteningService(store, validator)

        first = await service.create_short_url("https://example.com")
        second = await service.create_short_url("https://www.wikipedia.org")

        assert first == second
        assert await store.load() == {first: "https://www.wikipedia.org"}

    @pytest.mark.asyncio
    async def test_unreachable_url_is_not_stored(self, store, validator, mapping_file):
        mapping_file.write_text('{"urlMap":{"existing00":"https://example.com"}}')
        before = mapping_file.read_bytes()
        service = URLShorteningService(store, validator)

        with pytest.raises(UnreachableURLError):
            await service.create_short_url("https://missing.example.com")

        assert mapping_file.read_bytes() == before

    @pytest.mark.asyncio
    async def test_missing_store_file_propagates(self, tmp_path, validator):
        service = URLShorteningService(MappingStore(tmp_path / "absent.json"), validator)

        with pytest.raises(MappingFileMissingError):
            await service.create_short_url("https://example.com")


class TestRedirectService:
    """Stored codes resolve from the store; anything else passes through."""

    @pytest.mark.asyncio
    async def test_round_trip(self, store, validator):
        short_code = await URLShorteningService(store, validator).create_short_url(
            "https://example.com"
        )

        target = await RedirectService(store, validator).get_redirect_url(short_code)

        assert target == "https://example.com"

    @pytest.mark.asyncio
    async def test_stored_code_skips_reachability_check(self, store, validator, probed):
        await store.save({"aHR0cHM6Ly": "https://missing.example.com"})

        target = await RedirectService(store, validator).get_redirect_url("aHR0cHM6Ly")

        assert target == "https://missing.example.com"
        assert probed == []

    @pytest.mark.asyncio
    async def test_live_url_passes_through(self, store, validator):
        target = await RedirectService(store, validator).get_redirect_url(
            "https://www.wikipedia.org"
        )

        assert target == "https://www.wikipedia.org"

    @pytest.mark.asyncio
    async def test_unknown_code_is_rejected(self, store, validator):
        with pytest.raises(UnreachableURLError):
            await RedirectService(store, validator).get_redirect_url("aHR0cHM6Lyyy")

    @pytest.mark.asyncio
    async def test_unreachable_url_is_rejected(self, store, validator):
        with pytest.raises(UnreachableURLError):
            await RedirectService(store, validator).get_redirect_url(
                "https://missing.example.com"
            )

    @pytest.mark.asyncio
    async def test_missing_store_file_propagates(self, tmp_path, validator):
        service = RedirectService(MappingStore(tmp_path / "absent.json"), validator)

        with pytest.raises(MappingFileMissingError):
            await service.get_redirect_url("https://example.com")
