"""Tests for the HTTPX-backed fetchers."""
from __future__ import annotations

import asyncio
import json
from typing import Any, List

import httpx
import pytest

from streamrunner.resolver.fetchers import (
    make_full_url,
    make_simple_proxied_fetcher,
    make_standard_fetcher,
)


def _recording_transport(requests: List[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith(".json"):
            return httpx.Response(200, json={"ok": True})
        if request.url.path.endswith("/missing"):
            return httpx.Response(404, text="nope")
        return httpx.Response(200, text="<html></html>")

    return httpx.MockTransport(handler)


def _fetch(factory, *args: Any, **kwargs: Any) -> tuple[Any, List[httpx.Request]]:
    requests: List[httpx.Request] = []

    async def _main() -> Any:
        async with httpx.AsyncClient(transport=_recording_transport(requests)) as client:
            fetcher = factory(client)
            return await fetcher(*args, **kwargs)

    return asyncio.run(_main()), requests


@pytest.mark.parametrize(
    ("url", "base_url", "expected"),
    [
        ("https://site.example/a", None, "https://site.example/a"),
        ("/a", "https://site.example", "https://site.example/a"),
        ("a", "https://site.example/", "https://site.example/a"),
        ("/a", "https://site.example/api/", "https://site.example/api/a"),
    ],
)
def test_make_full_url_joins_with_single_slash(url: str, base_url: str | None, expected: str) -> None:
    assert make_full_url(url, base_url=base_url) == expected


def test_make_full_url_requires_http_scheme() -> None:
    with pytest.raises(ValueError):
        make_full_url("/relative/only")


def test_standard_fetcher_decodes_json_and_sends_query() -> None:
    result, requests = _fetch(
        make_standard_fetcher,
        "/api/data.json",
        base_url="https://site.example",
        query={"q": "movie"},
        headers={"Referer": "https://site.example/"},
    )

    assert result == {"ok": True}
    [request] = requests
    assert str(request.url) == "https://site.example/api/data.json?q=movie"
    assert request.headers["referer"] == "https://site.example/"


def test_standard_fetcher_returns_text_and_posts_json_bodies() -> None:
    result, requests = _fetch(
        make_standard_fetcher,
        "https://site.example/page",
        method="POST",
        body={"id": 5},
    )

    assert result == "<html></html>"
    assert requests[0].method == "POST"
    assert json.loads(requests[0].content) == {"id": 5}


def test_standard_fetcher_raises_on_http_errors() -> None:
    with pytest.raises(httpx.HTTPStatusError):
        _fetch(make_standard_fetcher, "https://site.example/missing")


def test_proxied_fetcher_sends_destination_to_proxy() -> None:
    result, requests = _fetch(
        lambda client: make_simple_proxied_fetcher("https://proxy.example/fetch.json", client),
        "/search",
        base_url="https://site.example",
        query={"q": "show"},
    )

    assert result == {"ok": True}
    [request] = requests
    assert request.url.host == "proxy.example"
    assert request.url.params["destination"] == "https://site.example/search?q=show"
