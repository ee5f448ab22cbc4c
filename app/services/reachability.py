"""
Reachability Validator

Checks that a URL is live before it is shortened or used as a passthrough
redirect target.

A URL is reachable when a GET request to it answers with status 200 within
the timeout. The timeout is one deadline for the whole exchange, redirect
hops included. Redirects are followed and the response body is never read.
Results are not cached; every call probes the URL again.
"""

import asyncio
import logging
from typing import Optional

import httpx

from app.core.exceptions import UnreachableURLError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1.0


class ReachabilityValidator:
    """
    Probes URLs with an outbound GET request.

    The validator can share an existing httpx.AsyncClient. When none is
    given it creates its own and closes it in aclose(). Redirects are
    followed on every probe, whatever the client's own default.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.timeout = timeout
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient()

    async def validate(self, url: str) -> None:
        """
        Verify that url answers a GET request with status 200.

        Args:
            url: The candidate URL

        Raises:
            UnreachableURLError: On transport errors, timeouts, unusable
                URLs or any status other than 200
        """
        try:
            status_code = await asyncio.wait_for(self._probe(url), self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.info(f"Reachability check timed out for {url}")
            raise UnreachableURLError(
                url, reason=f"request timed out after {self.timeout}s"
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.info(f"Reachability check failed for {url}: {e}")
            raise UnreachableURLError(url, reason=str(e) or type(e).__name__)
        except ValueError as e:
            # malformed hosts surface as idna/UnicodeError from the transport
            logger.info(f"Reachability check rejected malformed url {url}: {e}")
            raise UnreachableURLError(url, reason=f"malformed url ({e})")

        if status_code != 200:
            logger.info(f"Reachability check for {url} returned {status_code}")
            raise UnreachableURLError(
                url, reason=f"url returned a non 200 status ({status_code})"
            )

    async def _probe(self, url: str) -> int:
        async with self.client.stream(
            "GET", url, timeout=self.timeout, follow_redirects=True
        ) as response:
            return response.status_code

    async def aclose(self) -> None:
        """Close the HTTP client if this validator created it."""
        if self._owns_client:
            await self.client.aclose()
