"""Public entry point bundling the registry, fetchers and resolver."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Tuple

from .base import EmbedOutput, Fetcher, SourcererOutput
from .events import ScraperEvents
from .individual import EmbedRunnerOptions, SourceRunnerOptions, run_embed_scraper, run_source_scraper
from .media import ScrapeMedia
from .registry import ProviderList, ProviderTable, get_providers
from .runner import ProviderRunnerOptions, RunOutput, run_all_providers
from .targets import FeatureMap, Targets, get_target_features


@dataclass
class ProviderMakerOptions:
    fetcher: Fetcher
    target: Targets | str
    table: ProviderTable
    proxied_fetcher: Optional[Fetcher] = None
    consistent_ip_for_requests: bool = False


@dataclass(frozen=True)
class MetaOutput:
    type: Literal["source", "embed"]
    id: str
    name: str
    rank: int
    media_types: Tuple[str, ...] = field(default_factory=tuple)


class ProviderControls:
    """Runs providers admitted for one target."""

    def __init__(self, options: ProviderMakerOptions) -> None:
        self._features = get_target_features(options.target, options.consistent_ip_for_requests)
        self._list: ProviderList = get_providers(
            self._features, options.table.sources, options.table.embeds
        )
        self._fetcher = options.fetcher
        self._proxied_fetcher = options.proxied_fetcher or options.fetcher

    @property
    def features(self) -> FeatureMap:
        return self._features

    async def run_all(
        self,
        media: ScrapeMedia,
        *,
        source_order: Optional[Sequence[str]] = None,
        embed_order: Optional[Sequence[str]] = None,
        events: Optional[ScraperEvents] = None,
    ) -> Optional[RunOutput]:
        """Resolve the first acceptable stream for ``media``."""

        return await run_all_providers(
            self._list,
            ProviderRunnerOptions(
                fetcher=self._fetcher,
                proxied_fetcher=self._proxied_fetcher,
                features=self._features,
                media=media,
                source_order=source_order,
                embed_order=embed_order,
                events=events,
            ),
        )

    async def run_source_scraper(
        self, id: str, media: ScrapeMedia, *, events: Optional[ScraperEvents] = None
    ) -> SourcererOutput:
        return await run_source_scraper(
            self._list,
            SourceRunnerOptions(
                fetcher=self._fetcher,
                proxied_fetcher=self._proxied_fetcher,
                features=self._features,
                media=media,
                id=id,
                events=events,
            ),
        )

    async def run_embed_scraper(
        self, id: str, url: str, *, events: Optional[ScraperEvents] = None
    ) -> EmbedOutput:
        return await run_embed_scraper(
            self._list,
            EmbedRunnerOptions(
                fetcher=self._fetcher,
                proxied_fetcher=self._proxied_fetcher,
                features=self._features,
                url=url,
                id=id,
                events=events,
            ),
        )

    def list_sources(self) -> List[MetaOutput]:
        """Admitted sources, highest rank first."""

        return source_metadata(self._list)

    def list_embeds(self) -> List[MetaOutput]:
        """Registered embeds, highest rank first."""

        return embed_metadata(self._list)

    def get_metadata(self, id: str) -> Optional[MetaOutput]:
        for meta in self.list_sources() + self.list_embeds():
            if meta.id == id:
                return meta
        return None


def source_metadata(provider_list: ProviderList) -> List[MetaOutput]:
    return sorted(
        (
            MetaOutput(
                type="source",
                id=source.id,
                name=source.name,
                rank=source.rank,
                media_types=source.media_types,
            )
            for source in provider_list.sources
        ),
        key=lambda meta: meta.rank,
        reverse=True,
    )


def embed_metadata(provider_list: ProviderList) -> List[MetaOutput]:
    return sorted(
        (
            MetaOutput(type="embed", id=embed.id, name=embed.name, rank=embed.rank)
            for embed in provider_list.embeds
        ),
        key=lambda meta: meta.rank,
        reverse=True,
    )


def make_providers(options: ProviderMakerOptions) -> ProviderControls:
    return ProviderControls(options)
