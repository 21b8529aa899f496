"""
Shared HTTP client utilities: configured AsyncClient and managed lifecycle.

Verification calls are never retried here; retry policy belongs to the caller.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from bankproof.core.config import settings


def get_async_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """Create a configured AsyncClient with shared limits/timeouts."""
    return httpx.AsyncClient(
        timeout=timeout or settings.VERIFICATION_TIMEOUT_MS / 1000,
        limits=httpx.Limits(
            max_keepalive_connections=settings.HTTP_MAX_KEEPALIVE_CONNECTIONS,
            max_connections=settings.HTTP_MAX_CONNECTIONS,
        ),
    )


@asynccontextmanager
async def get_managed_client(
    persistent_client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None
) -> AsyncIterator[httpx.AsyncClient]:
    """
    Context manager for HTTP client lifecycle.

    Reuses persistent client if provided, creates temporary otherwise and
    closes it on exit.

    Example:
        async with get_managed_client(self._client, timeout) as client:
            response = await client.post(url, ...)
    """
    should_close = persistent_client is None
    client = persistent_client or get_async_client(timeout=timeout)
    try:
        yield client
    finally:
        if should_close:
            await client.aclose()
