"""HTTP client helpers for the resolver CLI."""
from __future__ import annotations

import httpx


def create_client(
    *, timeout: float = 20.0, transport: httpx.AsyncBaseTransport | None = None
) -> httpx.AsyncClient:
    """Instantiate the HTTPX client providers fetch through."""

    return httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True)
