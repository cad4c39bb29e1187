"""HTTPS transport routed through a Tor HTTP tunnel proxy."""
from __future__ import annotations

import asyncio
import logging
import ssl
from collections.abc import Sequence

import aiohttp
import certifi

from ..config import TorConfig
from ..models import RequestDescriptor

logger = logging.getLogger(__name__)


class TorTransport:
    """Execute batches of GET requests through Tor, all at once."""

    def __init__(self, config: TorConfig) -> None:
        self.proxy_url = config.proxy_url or None
        self.timeout = config.timeout
        if self.proxy_url is None:
            logger.warning("No Tor proxy configured, requests will not be anonymized")

    async def perform_requests(self, requests: Sequence[RequestDescriptor]) -> bool:
        """Fill every descriptor's output buffer; False if any request failed."""
        if not requests:
            return True

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as session:
                results = await asyncio.gather(
                    *(self._fetch(session, request) for request in requests),
                    return_exceptions=True,
                )
        except Exception as e:
            logger.error("Performing requests failed: %s", e)
            return False

        ok = True
        for request, result in zip(requests, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, BaseException):
                logger.error("Request to %s failed: %s", request.url, result)
                ok = False
            elif not result:
                ok = False
        return ok

    async def _fetch(
        self, session: aiohttp.ClientSession, request: RequestDescriptor
    ) -> bool:
        async with session.get(request.url, proxy=self.proxy_url) as response:
            if response.status != 200:
                logger.error("Request to %s failed: HTTP %s", request.url, response.status)
                return False

            body = await response.read()
            request.output_buffer.extend(body)
            logger.debug("Received %d bytes from %s", len(body), request.url)
            return True
