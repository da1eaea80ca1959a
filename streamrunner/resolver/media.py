"""Media descriptions handed to source providers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

MediaType = Literal["movie", "show"]


@dataclass(frozen=True)
class MediaPart:
    """Season or episode reference inside a show."""

    number: int
    tmdb_id: str


@dataclass(frozen=True)
class MovieMedia:
    title: str
    release_year: int
    tmdb_id: str
    imdb_id: Optional[str] = None
    type: Literal["movie"] = "movie"


@dataclass(frozen=True)
class ShowMedia:
    title: str
    release_year: int
    tmdb_id: str
    season: MediaPart
    episode: MediaPart
    imdb_id: Optional[str] = None
    type: Literal["show"] = "show"


ScrapeMedia = Union[MovieMedia, ShowMedia]
