"""
Fallback resolver across source and embed providers.

Sources are tried one at a time in priority order. A source either hands
back a direct stream, which wins immediately when it is complete and its
flags are enabled, or a list of embed references which are then tried in
embed priority order. The first accepted stream ends the run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, TypeVar, Union

from .base import EmbedRef, EmbedScrapeContext, Fetcher, ScrapeContext, make_source_context
from .errors import MissingOutputError, NotFoundError, UnknownEmbedError
from .events import DiscoverEmbedsEntry, DiscoverEmbedsEvent, InitEvent, ScraperEvents, UpdateEvent
from .media import ScrapeMedia
from .registry import ProviderList
from .streams import Stream, is_valid_stream
from .targets import FeatureMap, flags_allowed_in_features

logger = logging.getLogger(__name__)

# priority given to embed references whose embed id is not registered
UNKNOWN_EMBED_PRIORITY = -1

T = TypeVar("T")


@dataclass(frozen=True)
class RunOutput:
    source_id: str
    stream: Stream
    embed_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"sourceId": self.source_id}
        if self.embed_id is not None:
            data["embedId"] = self.embed_id
        data["stream"] = self.stream.to_dict()
        return data


@dataclass
class ProviderRunnerOptions:
    fetcher: Fetcher
    proxied_fetcher: Fetcher
    features: FeatureMap
    media: ScrapeMedia
    source_order: Optional[Sequence[str]] = None
    embed_order: Optional[Sequence[str]] = None
    events: Optional[ScraperEvents] = None


@dataclass(frozen=True)
class Accepted:
    output: Any


@dataclass(frozen=True)
class Rejected:
    reason: str


@dataclass(frozen=True)
class Faulted:
    error: Exception


AttemptOutcome = Union[Accepted, Rejected, Faulted]


def reorder_on_id_list(order: Sequence[str], items: Sequence[T]) -> List[T]:
    """Move items named in ``order`` to the front, keeping the rest in place order."""

    positions: Dict[str, int] = {}
    for index, item_id in enumerate(order):
        positions.setdefault(item_id, index)
    prioritized = sorted(
        (item for item in items if item.id in positions),  # type: ignore[attr-defined]
        key=lambda item: positions[item.id],  # type: ignore[attr-defined]
    )
    remaining = [item for item in items if item.id not in positions]  # type: ignore[attr-defined]
    return prioritized + remaining


def attempt_id_for(source_id: str, index: int) -> str:
    return f"{source_id}-{index}"


def stream_rejection(stream: Optional[Stream], features: FeatureMap) -> Optional[str]:
    """Return why ``stream`` cannot be accepted, or None when it can."""

    if not is_valid_stream(stream):
        return "stream is incomplete"
    if not flags_allowed_in_features(features, stream.flags):  # type: ignore[union-attr]
        return "stream doesn't satisfy target feature flags"
    return None


def progress_reporter(events: ScraperEvents, attempt_id: str) -> Callable[[float], None]:
    """Bind progress updates to one attempt so late calls stay attributed to it."""

    def _progress(percentage: float) -> None:
        events.notify_update(UpdateEvent(id=attempt_id, percentage=percentage, status="pending"))

    return _progress


async def run_attempt(
    scrape: Callable[[Any], Awaitable[Any]], context: ScrapeContext
) -> AttemptOutcome:
    """Invoke one provider capability and classify how it ended."""

    try:
        output = await scrape(context)
    except NotFoundError as exc:
        return Rejected(exc.reason)
    except Exception as exc:
        return Faulted(exc)
    return Accepted(output)


def report_outcome(events: ScraperEvents, attempt_id: str, outcome: AttemptOutcome) -> None:
    """Emit the terminal update for an attempt that did not produce a stream."""

    if isinstance(outcome, Rejected):
        logger.debug("Attempt %s found nothing: %s", attempt_id, outcome.reason)
        events.notify_update(
            UpdateEvent(id=attempt_id, percentage=100, status="notfound", reason=outcome.reason)
        )
    elif isinstance(outcome, Faulted):
        logger.debug("Attempt %s failed: %r", attempt_id, outcome.error)
        events.notify_update(
            UpdateEvent(id=attempt_id, percentage=100, status="failure", error=outcome.error)
        )


async def run_all_providers(provider_list: ProviderList, ops: ProviderRunnerOptions) -> Optional[RunOutput]:
    """Try every capable source, then its embeds, until one stream is accepted.

    Returns None when every provider came up empty. Structural faults (a
    provider returning no output at all, or an embed reference to an
    unregistered embed) abort the run and propagate.
    """

    media_type = ops.media.type
    sources = [
        source
        for source in reorder_on_id_list(ops.source_order or [], provider_list.sources)
        if source.scraper_for(media_type) is not None
    ]
    embeds = reorder_on_id_list(ops.embed_order or [], provider_list.embeds)
    embed_ids = [embed.id for embed in embeds]
    embeds_by_id = {embed.id: embed for embed in embeds}
    events = ops.events or ScraperEvents()

    events.notify_init(InitEvent(source_ids=[source.id for source in sources]))

    for source in sources:
        events.notify_start(source.id)
        context = make_source_context(
            ops.fetcher, ops.proxied_fetcher, progress_reporter(events, source.id), ops.media
        )
        outcome = await run_attempt(source.scraper_for(media_type), context)  # type: ignore[arg-type]

        if isinstance(outcome, Accepted):
            if outcome.output is None:
                raise MissingOutputError(f"Source {source.id} returned no output for {media_type}")
            if outcome.output.stream is not None:
                reason = stream_rejection(outcome.output.stream, ops.features)
                if reason is not None:
                    outcome = Rejected(reason)

        if not isinstance(outcome, Accepted):
            report_outcome(events, source.id, outcome)
            continue

        output = outcome.output
        if output.stream is not None:
            logger.info("Resolved stream from source %s", source.id)
            return RunOutput(source_id=source.id, stream=output.stream)

        candidates = list(enumerate(output.embeds))
        if candidates:
            events.notify_discover_embeds(
                DiscoverEmbedsEvent(
                    source_id=source.id,
                    embeds=[
                        DiscoverEmbedsEntry(
                            id=attempt_id_for(source.id, index), embed_scraper_id=ref.embed_id
                        )
                        for index, ref in candidates
                    ],
                )
            )

        candidates.sort(key=lambda candidate: _embed_priority(embed_ids, candidate[1]))

        for index, ref in candidates:
            embed = embeds_by_id.get(ref.embed_id)
            if embed is None:
                raise UnknownEmbedError(f"Source {source.id} returned unknown embed {ref.embed_id}")

            attempt_id = attempt_id_for(source.id, index)
            events.notify_start(attempt_id)
            embed_context = EmbedScrapeContext(
                fetcher=ops.fetcher,
                proxied_fetcher=ops.proxied_fetcher,
                progress=progress_reporter(events, attempt_id),
                url=ref.url,
            )
            embed_outcome = await run_attempt(embed.scrape, embed_context)

            if isinstance(embed_outcome, Accepted):
                if embed_outcome.output is None:
                    raise MissingOutputError(f"Embed {embed.id} returned no output")
                reason = stream_rejection(embed_outcome.output.stream, ops.features)
                if reason is not None:
                    embed_outcome = Rejected(reason)

            if not isinstance(embed_outcome, Accepted):
                report_outcome(events, attempt_id, embed_outcome)
                continue

            logger.info("Resolved stream from source %s via embed %s", source.id, embed.id)
            return RunOutput(
                source_id=source.id,
                embed_id=embed.id,
                stream=embed_outcome.output.stream,
            )

        reason = "no embed returned a stream" if candidates else "no stream or embeds found"
        report_outcome(events, source.id, Rejected(reason))

    logger.info("No stream found after trying %d source(s)", len(sources))
    return None


def _embed_priority(embed_ids: List[str], ref: EmbedRef) -> int:
    try:
        return embed_ids.index(ref.embed_id)
    except ValueError:
        return UNKNOWN_EMBED_PRIORITY
