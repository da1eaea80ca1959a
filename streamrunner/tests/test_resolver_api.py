"""Tests for the FastAPI resolver service."""
from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from streamrunner.resolver import (
    Embed,
    EmbedRef,
    ProviderTable,
    Sourcerer,
    SourcererOutput,
)
from streamrunner.resolver_api import create_app
from streamrunner.resolver_api.settings import RunnerSettings
from streamrunner.resolver_api.state import admitted_providers
from streamrunner.tests.stubs import FILE_STREAM, HLS_STREAM, TABLE, raising, returning

MOVIE = {"type": "movie", "title": "Example Movie", "release_year": 2024, "tmdb_id": "100"}
SHOW = {
    "type": "show",
    "title": "Example Show",
    "release_year": 2019,
    "tmdb_id": "200",
    "season": {"number": 1, "tmdb_id": "201"},
    "episode": {"number": 2, "tmdb_id": "202"},
}


def _client(table: ProviderTable = TABLE, **settings: object) -> TestClient:
    return TestClient(create_app(settings=RunnerSettings(**settings), table=table))


@pytest.fixture()
def client() -> Iterator[TestClient]:
    """Provide a test client backed by the stub provider table."""

    with _client() as test_client:
        yield test_client


def test_health_reports_provider_counts(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "0.1.0", "sources": 2, "embeds": 1}


def test_providers_lists_admitted_sources_and_embeds(client: TestClient) -> None:
    response = client.get("/providers")

    assert response.status_code == 200
    payload = response.json()
    assert [item["id"] for item in payload["sources"]] == ["alpha", "beta"]
    assert payload["sources"][1]["mediaTypes"] == ["movie", "show"]
    assert payload["embeds"] == [
        {"type": "embed", "id": "hoster", "name": "Hoster", "rank": 50, "mediaTypes": []}
    ]


def test_provider_metadata_lookup(client: TestClient) -> None:
    assert client.get("/providers/beta").json()["rank"] == 200
    assert client.get("/providers/locked").status_code == 404


def test_consistent_ip_setting_admits_locked_sources() -> None:
    with _client(consistent_ip=True) as client:
        response = client.get("/providers")

    assert [item["id"] for item in response.json()["sources"]] == ["alpha", "beta", "locked"]


def test_resolve_movie_returns_embed_stream_and_events(client: TestClient) -> None:
    response = client.post("/resolve", json={"media": MOVIE})

    assert response.status_code == 200
    payload = response.json()
    assert payload["result"] == {
        "sourceId": "beta",
        "embedId": "hoster",
        "stream": FILE_STREAM.to_dict(),
    }
    assert [entry["event"] for entry in payload["events"]] == [
        "init",
        "start",
        "update",
        "start",
        "discoverEmbeds",
        "start",
    ]
    assert payload["events"][2] == {
        "event": "update",
        "id": "alpha",
        "percentage": 100,
        "status": "notfound",
        "reason": "no match on alpha",
    }


def test_resolve_show_omits_embed_id_for_direct_streams(client: TestClient) -> None:
    response = client.post("/resolve", json={"media": SHOW})

    assert response.status_code == 200
    assert response.json()["result"] == {"sourceId": "beta", "stream": HLS_STREAM.to_dict()}


def test_resolve_uses_configured_source_order_unless_overridden() -> None:
    with _client(consistent_ip=True, source_order=["locked"]) as client:
        configured = client.post("/resolve", json={"media": MOVIE}).json()
        overridden = client.post("/resolve", json={"media": MOVIE, "source_order": ["beta"]}).json()

    assert configured["result"]["sourceId"] == "locked"
    assert overridden["result"]["sourceId"] == "beta"


def test_resolve_returns_404_when_nothing_is_found() -> None:
    table = ProviderTable(
        sources=[Sourcerer(id="empty", name="Empty", rank=1, scrape_movie=raising(RuntimeError("down")))]
    )

    with _client(table) as client:
        response = client.post("/resolve", json={"media": MOVIE})

    assert response.status_code == 404
    assert response.json()["detail"] == "no stream found"


def test_resolve_returns_500_on_structural_fault() -> None:
    table = ProviderTable(
        sources=[
            Sourcerer(
                id="src",
                name="Source",
                rank=1,
                scrape_movie=returning(SourcererOutput(embeds=[EmbedRef(embed_id="ghost", url="https://g/1")])),
            )
        ],
        embeds=[Embed(id="real", name="Real", rank=1, scrape=returning(None))],
    )

    with _client(table) as client:
        response = client.post("/resolve", json={"media": MOVIE})

    assert response.status_code == 500
    assert "ghost" in response.json()["detail"]


def test_resolve_validates_show_payload(client: TestClient) -> None:
    response = client.post("/resolve", json={"media": {**SHOW, "episode": None}})

    assert response.status_code == 422


def test_scrape_source_endpoint(client: TestClient) -> None:
    response = client.post("/resolve/source/beta", json={"media": MOVIE})

    assert response.status_code == 200
    assert response.json() == {
        "embeds": [{"embedId": "hoster", "url": "https://hoster.example/e/1"}]
    }


def test_scrape_source_endpoint_maps_errors(client: TestClient) -> None:
    assert client.post("/resolve/source/alpha", json={"media": MOVIE}).status_code == 404
    assert client.post("/resolve/source/alpha", json={"media": SHOW}).status_code == 404
    assert client.post("/resolve/source/nope", json={"media": MOVIE}).status_code == 404


def test_scrape_source_endpoint_reports_provider_failures() -> None:
    table = ProviderTable(
        sources=[Sourcerer(id="flaky", name="Flaky", rank=1, scrape_movie=raising(RuntimeError("boom")))]
    )

    with _client(table) as client:
        response = client.post("/resolve/source/flaky", json={"media": MOVIE})

    assert response.status_code == 502
    assert "boom" in response.json()["detail"]


def test_scrape_embed_endpoint(client: TestClient) -> None:
    response = client.post("/resolve/embed/hoster", json={"url": "https://hoster.example/e/1"})

    assert response.status_code == 200
    assert response.json() == {"stream": FILE_STREAM.to_dict()}
    assert client.post("/resolve/embed/ghost", json={"url": "https://x/1"}).status_code == 404


def test_create_app_requires_a_provider_table() -> None:
    with pytest.raises(ValueError, match="provider table"):
        create_app(settings=RunnerSettings(provider_table=None))


def test_create_app_loads_configured_table() -> None:
    app = create_app(settings=RunnerSettings(provider_table="streamrunner.tests.stubs:TABLE"))

    with TestClient(app) as client:
        response = client.get("/health")

    assert response.json()["sources"] == 2


def test_lifespan_closes_the_shared_http_client() -> None:
    app = create_app(settings=RunnerSettings(), table=TABLE)
    http_client = app.state.app_state.client

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert not http_client.is_closed

    assert http_client.is_closed


def test_admitted_providers_follow_target_settings() -> None:
    default = admitted_providers(RunnerSettings(), TABLE)
    locked = admitted_providers(RunnerSettings(consistent_ip=True), TABLE)

    assert [source.id for source in default.sources] == ["alpha", "beta"]
    assert [source.id for source in locked.sources] == ["alpha", "beta", "locked"]
    assert [embed.id for embed in locked.embeds] == ["hoster"]
