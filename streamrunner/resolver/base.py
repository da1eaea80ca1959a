"""
Provider contracts for the resolver.

Sources take a media description and return either a direct stream or a
list of embed references. Embeds take one of those references and turn it
into a stream. Neither kind is implemented here: providers are supplied by
the caller through a registration table.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Protocol, Tuple, Union

from .media import MediaType, MovieMedia, ScrapeMedia, ShowMedia
from .streams import Stream


class Fetcher(Protocol):
    """Async request accessor handed to providers."""

    def __call__(
        self,
        url: str,
        *,
        base_url: Optional[str] = None,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        query: Optional[dict[str, str]] = None,
        body: Any = None,
    ) -> Awaitable[Any]:
        ...


ProgressCallback = Callable[[float], None]


@dataclass(frozen=True)
class ScrapeContext:
    fetcher: Fetcher
    proxied_fetcher: Fetcher
    progress: ProgressCallback


@dataclass(frozen=True)
class MovieScrapeContext(ScrapeContext):
    media: MovieMedia


@dataclass(frozen=True)
class ShowScrapeContext(ScrapeContext):
    media: ShowMedia


@dataclass(frozen=True)
class EmbedScrapeContext(ScrapeContext):
    url: str


@dataclass(frozen=True)
class EmbedRef:
    """Embed page discovered by a source; ``embed_id`` names the embed provider."""

    embed_id: str
    url: str


@dataclass
class SourcererOutput:
    embeds: List[EmbedRef] = field(default_factory=list)
    stream: Optional[Stream] = None


@dataclass
class EmbedOutput:
    stream: Stream


MovieScraper = Callable[[MovieScrapeContext], Awaitable[Optional[SourcererOutput]]]
ShowScraper = Callable[[ShowScrapeContext], Awaitable[Optional[SourcererOutput]]]
EmbedScraper = Callable[[EmbedScrapeContext], Awaitable[Optional[EmbedOutput]]]


@dataclass(frozen=True)
class Sourcerer:
    """A content source able to scrape movies, shows or both."""

    id: str
    name: str
    rank: int
    flags: Tuple[str, ...] = ()
    disabled: bool = False
    scrape_movie: Optional[MovieScraper] = None
    scrape_show: Optional[ShowScraper] = None

    def __post_init__(self) -> None:
        if self.scrape_movie is None and self.scrape_show is None:
            raise ValueError(f"Source {self.id} must declare scrape_movie or scrape_show")

    @property
    def media_types(self) -> Tuple[MediaType, ...]:
        types: List[MediaType] = []
        if self.scrape_movie is not None:
            types.append("movie")
        if self.scrape_show is not None:
            types.append("show")
        return tuple(types)

    def scraper_for(self, media_type: str) -> Optional[Union[MovieScraper, ShowScraper]]:
        """Return the capability matching ``media_type``, if declared."""

        if media_type == "movie":
            return self.scrape_movie
        if media_type == "show":
            return self.scrape_show
        return None


@dataclass(frozen=True)
class Embed:
    """An embed host able to turn an embed URL into a stream."""

    id: str
    name: str
    rank: int
    scrape: EmbedScraper
    disabled: bool = False


Provider = Union[Sourcerer, Embed]


def make_source_context(
    fetcher: Fetcher,
    proxied_fetcher: Fetcher,
    progress: ProgressCallback,
    media: ScrapeMedia,
) -> Union[MovieScrapeContext, ShowScrapeContext]:
    """Build the context matching the media type of ``media``."""

    if isinstance(media, MovieMedia):
        return MovieScrapeContext(
            fetcher=fetcher, proxied_fetcher=proxied_fetcher, progress=progress, media=media
        )
    if isinstance(media, ShowMedia):
        return ShowScrapeContext(
            fetcher=fetcher, proxied_fetcher=proxied_fetcher, progress=progress, media=media
        )
    raise TypeError(f"Unsupported media: {media!r}")
