"""Shared state container for the resolver API."""
from __future__ import annotations

import httpx

from ..resolver.controls import ProviderControls, ProviderMakerOptions, make_providers
from ..resolver.fetchers import make_simple_proxied_fetcher, make_standard_fetcher
from ..resolver.registry import ProviderList, ProviderTable, get_providers, load_provider_table
from ..resolver.targets import get_target_features
from .settings import RunnerSettings


def build_controls(
    settings: RunnerSettings, table: ProviderTable, client: httpx.AsyncClient
) -> ProviderControls:
    """Assemble provider controls for ``settings`` on top of ``client``."""

    fetcher = make_standard_fetcher(client)
    proxied_fetcher = (
        make_simple_proxied_fetcher(settings.proxy_url, client) if settings.proxy_url else None
    )
    return make_providers(
        ProviderMakerOptions(
            fetcher=fetcher,
            proxied_fetcher=proxied_fetcher,
            target=settings.target,
            consistent_ip_for_requests=settings.consistent_ip,
            table=table,
        )
    )


def resolve_table(settings: RunnerSettings, table: ProviderTable | None = None) -> ProviderTable:
    """Return ``table`` or load the one configured in ``settings``."""

    if table is not None:
        return table
    if not settings.provider_table:
        raise ValueError(
            "No provider table configured; set STREAMRUNNER_PROVIDER_TABLE to 'module:attribute'"
        )
    return load_provider_table(settings.provider_table)


def admitted_providers(settings: RunnerSettings, table: ProviderTable | None = None) -> ProviderList:
    """Providers the configured target admits, without any HTTP setup."""

    table = resolve_table(settings, table)
    features = get_target_features(settings.target, settings.consistent_ip)
    return get_providers(features, table.sources, table.embeds)


class AppState:
    """Encapsulates the state shared across routers."""

    def __init__(
        self,
        settings: RunnerSettings,
        table: ProviderTable | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        table = resolve_table(settings, table)
        self.client = httpx.AsyncClient(
            timeout=settings.request_timeout, transport=transport, follow_redirects=True
        )
        self.controls = build_controls(settings, table, self.client)

    async def aclose(self) -> None:
        await self.client.aclose()
