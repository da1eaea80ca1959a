"""Event payloads emitted while the resolver works through its providers."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal, Optional

UpdateStatus = Literal["pending", "notfound", "failure"]


@dataclass(frozen=True)
class InitEvent:
    source_ids: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {"sourceIds": list(self.source_ids)}


@dataclass(frozen=True)
class UpdateEvent:
    id: str
    percentage: float
    status: UpdateStatus
    reason: Optional[str] = None
    error: Optional[BaseException] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "percentage": self.percentage,
            "status": self.status,
        }
        if self.reason is not None:
            data["reason"] = self.reason
        if self.error is not None:
            data["error"] = str(self.error) or type(self.error).__name__
        return data


@dataclass(frozen=True)
class DiscoverEmbedsEntry:
    id: str
    embed_scraper_id: str


@dataclass(frozen=True)
class DiscoverEmbedsEvent:
    source_id: str
    embeds: List[DiscoverEmbedsEntry]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceId": self.source_id,
            "embeds": [
                {"id": entry.id, "embedScraperId": entry.embed_scraper_id}
                for entry in self.embeds
            ],
        }


@dataclass
class ScraperEvents:
    """Optional callbacks invoked by the resolver; unset callbacks are skipped."""

    init: Optional[Callable[[InitEvent], None]] = None
    start: Optional[Callable[[str], None]] = None
    update: Optional[Callable[[UpdateEvent], None]] = None
    discover_embeds: Optional[Callable[[DiscoverEmbedsEvent], None]] = None

    def notify_init(self, event: InitEvent) -> None:
        if self.init is not None:
            self.init(event)

    def notify_start(self, attempt_id: str) -> None:
        if self.start is not None:
            self.start(attempt_id)

    def notify_update(self, event: UpdateEvent) -> None:
        if self.update is not None:
            self.update(event)

    def notify_discover_embeds(self, event: DiscoverEmbedsEvent) -> None:
        if self.discover_embeds is not None:
            self.discover_embeds(event)


@dataclass
class EventLog:
    """Records every event of a run as a JSON-ready dict."""

    entries: List[Dict[str, Any]] = field(default_factory=list)

    def as_events(self) -> ScraperEvents:
        return ScraperEvents(
            init=lambda event: self._record("init", event.to_dict()),
            start=lambda attempt_id: self._record("start", {"id": attempt_id}),
            update=lambda event: self._record("update", event.to_dict()),
            discover_embeds=lambda event: self._record("discoverEmbeds", event.to_dict()),
        )

    def _record(self, name: str, payload: Dict[str, Any]) -> None:
        self.entries.append({"event": name, **payload})


def logging_events(logger: Optional[logging.Logger] = None) -> ScraperEvents:
    """Build a sink that writes every event to ``logger``."""

    log = logger or logging.getLogger("streamrunner.events")

    def _update(event: UpdateEvent) -> None:
        if event.status == "pending":
            log.debug("[%s] %.0f%%", event.id, event.percentage)
        elif event.status == "notfound":
            log.info("[%s] not found: %s", event.id, event.reason)
        else:
            log.warning("[%s] failed: %s", event.id, event.error)

    return ScraperEvents(
        init=lambda event: log.info("Trying sources: %s", ", ".join(event.source_ids)),
        start=lambda attempt_id: log.info("[%s] started", attempt_id),
        update=_update,
        discover_embeds=lambda event: log.info(
            "[%s] found %d embed(s): %s",
            event.source_id,
            len(event.embeds),
            ", ".join(entry.embed_scraper_id for entry in event.embeds),
        ),
    )
