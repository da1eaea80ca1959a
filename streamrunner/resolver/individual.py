"""Run a single source or embed provider by id."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .base import EmbedOutput, EmbedScrapeContext, Fetcher, SourcererOutput, make_source_context
from .errors import MissingOutputError, NotFoundError, ProviderLookupError
from .events import ScraperEvents
from .media import ScrapeMedia
from .registry import ProviderList
from .runner import progress_reporter, stream_rejection
from .targets import FeatureMap

logger = logging.getLogger(__name__)


@dataclass
class SourceRunnerOptions:
    fetcher: Fetcher
    proxied_fetcher: Fetcher
    features: FeatureMap
    media: ScrapeMedia
    id: str
    events: Optional[ScraperEvents] = None


@dataclass
class EmbedRunnerOptions:
    fetcher: Fetcher
    proxied_fetcher: Fetcher
    features: FeatureMap
    url: str
    id: str
    events: Optional[ScraperEvents] = None


async def run_source_scraper(provider_list: ProviderList, ops: SourceRunnerOptions) -> SourcererOutput:
    """Scrape one source; errors from the provider propagate unchanged.

    A direct stream that is incomplete or uses disabled flags is reported as
    :class:`NotFoundError`, the same way the full resolver treats it.
    """

    source = next((item for item in provider_list.sources if item.id == ops.id), None)
    if source is None:
        raise ProviderLookupError(f"Source with id {ops.id} not found")

    scrape = source.scraper_for(ops.media.type)
    if scrape is None:
        raise ProviderLookupError(f"Source {ops.id} does not support {ops.media.type} media")

    events = ops.events or ScraperEvents()
    context = make_source_context(
        ops.fetcher, ops.proxied_fetcher, progress_reporter(events, source.id), ops.media
    )
    logger.debug("Running source %s for %s", source.id, ops.media.type)
    output = await scrape(context)  # type: ignore[arg-type]
    if output is None:
        raise MissingOutputError(f"Source {source.id} returned no output for {ops.media.type}")

    if output.stream is not None:
        reason = stream_rejection(output.stream, ops.features)
        if reason is not None:
            raise NotFoundError(reason)

    return output


async def run_embed_scraper(provider_list: ProviderList, ops: EmbedRunnerOptions) -> EmbedOutput:
    """Scrape one embed URL with the embed provider named by ``ops.id``."""

    embed = next((item for item in provider_list.embeds if item.id == ops.id), None)
    if embed is None:
        raise ProviderLookupError(f"Embed with id {ops.id} not found")

    events = ops.events or ScraperEvents()
    context = EmbedScrapeContext(
        fetcher=ops.fetcher,
        proxied_fetcher=ops.proxied_fetcher,
        progress=progress_reporter(events, embed.id),
        url=ops.url,
    )
    logger.debug("Running embed %s on %s", embed.id, ops.url)
    output = await embed.scrape(context)
    if output is None:
        raise MissingOutputError(f"Embed {embed.id} returned no output")

    reason = stream_rejection(output.stream, ops.features)
    if reason is not None:
        raise NotFoundError(reason)

    return output
