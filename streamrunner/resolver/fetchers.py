"""HTTPX-backed request accessors handed to providers."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from .base import Fetcher


def make_full_url(url: str, *, base_url: Optional[str] = None) -> str:
    """Join ``base_url`` and ``url`` with exactly one slash between them."""

    left = base_url or ""
    right = url
    if left and not left.endswith("/"):
        left += "/"
    if left and right.startswith("/"):
        right = right[1:]

    full_url = left + right
    if not full_url.startswith(("http://", "https://")):
        raise ValueError(f"Invalid URL -- URL doesn't start with a http scheme: {full_url!r}")
    return full_url


def _body_arguments(body: Any) -> Dict[str, Any]:
    if body is None:
        return {}
    if isinstance(body, (dict, list)):
        return {"json": body}
    return {"content": body}


def _decode(response: httpx.Response) -> Any:
    content_type = response.headers.get("content-type", "").lower()
    if "application/json" in content_type:
        return response.json()
    return response.text


def make_standard_fetcher(client: httpx.AsyncClient) -> Fetcher:
    """Build a fetcher issuing requests straight from ``client``."""

    async def fetcher(
        url: str,
        *,
        base_url: Optional[str] = None,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        query: Optional[Dict[str, str]] = None,
        body: Any = None,
    ) -> Any:
        response = await client.request(
            method,
            make_full_url(url, base_url=base_url),
            params=query,
            headers=headers,
            **_body_arguments(body),
        )
        response.raise_for_status()
        return _decode(response)

    return fetcher  # type: ignore[return-value]


def make_simple_proxied_fetcher(proxy_url: str, client: httpx.AsyncClient) -> Fetcher:
    """Build a fetcher that routes every request through ``proxy_url``.

    The proxy receives the full destination URL, query string included, as
    its ``destination`` parameter.
    """

    async def fetcher(
        url: str,
        *,
        base_url: Optional[str] = None,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        query: Optional[Dict[str, str]] = None,
        body: Any = None,
    ) -> Any:
        destination = httpx.URL(make_full_url(url, base_url=base_url))
        if query:
            destination = destination.copy_merge_params(query)

        response = await client.request(
            method,
            proxy_url,
            params={"destination": str(destination)},
            headers=headers,
            **_body_arguments(body),
        )
        response.raise_for_status()
        return _decode(response)

    return fetcher  # type: ignore[return-value]
