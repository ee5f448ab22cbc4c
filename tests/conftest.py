"""
Shared fixtures for the URL shortener tests.

Outbound reachability probes never hit the network: the validator's
httpx client runs on an httpx.MockTransport that answers per host.
"""

import asyncio
from pathlib import Path
from typing import List

import httpx
import pytest

from app.db.mapping_store import MappingStore
from app.services.reachability import ReachabilityValidator

REACHABLE_HOSTS = {"example.com", "www.example.com", "www.wikipedia.org", "www.google.com"}
NOT_FOUND_HOST = "missing.example.com"
SLOW_HOST = "slow.example.com"
MOVED_HOST = "moved.example.com"
CHAIN_HOST = "chain.example.com"
MALFORMED_HOST = "xn--.com"

# each hop of the redirect chain stalls this long before answering
CHAIN_HOP_DELAY = 0.25
CHAIN_HOPS = 3


async def probe_handler(request: httpx.Request) -> httpx.Response:
    """Answer a probe the way the live hosts would."""
    if request.url.scheme not in ("http", "https"):
        raise httpx.UnsupportedProtocol(
            "Request URL is missing an 'http://' or 'https://' protocol.",
            request=request,
        )

    host = request.url.host
    if host in REACHABLE_HOSTS:
        return httpx.Response(200, text="<html>ok</html>")
    if host == NOT_FOUND_HOST:
        return httpx.Response(404, text="not found")
    if host == MOVED_HOST:
        return httpx.Response(301, headers={"Location": "https://example.com/"})
    if host == CHAIN_HOST:
        hop = int(request.url.path.rsplit("/", 1)[-1] or 0)
        await asyncio.sleep(CHAIN_HOP_DELAY)
        if hop < CHAIN_HOPS - 1:
            return httpx.Response(302, headers={"Location": f"/hop/{hop + 1}"})
        return httpx.Response(200, text="finally")
    if host == MALFORMED_HOST:
        # what the idna codec raises when the transport encodes this host
        raise UnicodeError("Malformed A-label, no Punycode eligible characters")
    if host == SLOW_HOST:
        raise httpx.ReadTimeout("timed out", request=request)

    raise httpx.ConnectError("Name or service not known", request=request)


@pytest.fixture
def probed() -> List[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def http_client(probed) -> httpx.AsyncClient:
    async def handler(request: httpx.Request) -> httpx.Response:
        probed.append(request)
        return await probe_handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def validator(http_client) -> ReachabilityValidator:
    return ReachabilityValidator(client=http_client, timeout=1.0)


@pytest.fixture
def mapping_file(tmp_path) -> Path:
    """An existing, empty mapping file."""
    path = tmp_path / "urlmapping.json"
    path.touch()
    return path


@pytest.fixture
def store(mapping_file) -> MappingStore:
    return MappingStore(mapping_file)
