"""Pydantic models exposed by the resolver API."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..resolver.media import MediaPart, MovieMedia, ScrapeMedia, ShowMedia


class HealthStatus(BaseModel):
    """Service health payload."""

    status: Literal["ok"] = Field(default="ok")
    version: str = Field(default="0.1.0", description="Semantic version of the API service.")
    sources: int = Field(default=0, description="Number of admitted source providers.")
    embeds: int = Field(default=0, description="Number of registered embed providers.")


class ProviderMetaModel(BaseModel):
    """Describes one registered provider."""

    type: Literal["source", "embed"]
    id: str
    name: str
    rank: int
    media_types: list[str] = Field(
        default_factory=list,
        alias="mediaTypes",
        description="Media types a source can scrape; empty for embeds.",
    )

    model_config = ConfigDict(populate_by_name=True)


class ProviderListModel(BaseModel):
    sources: list[ProviderMetaModel]
    embeds: list[ProviderMetaModel]


class MediaPartModel(BaseModel):
    number: int = Field(ge=0)
    tmdb_id: str


class MediaModel(BaseModel):
    """Title to resolve a stream for."""

    type: Literal["movie", "show"]
    title: str
    release_year: int
    tmdb_id: str
    imdb_id: str | None = None
    season: MediaPartModel | None = None
    episode: MediaPartModel | None = None

    @model_validator(mode="after")
    def _require_episode_for_shows(self) -> "MediaModel":
        if self.type == "show" and (self.season is None or self.episode is None):
            raise ValueError("show media requires season and episode")
        return self

    def to_media(self) -> ScrapeMedia:
        if self.type == "movie":
            return MovieMedia(
                title=self.title,
                release_year=self.release_year,
                tmdb_id=self.tmdb_id,
                imdb_id=self.imdb_id,
            )
        return ShowMedia(
            title=self.title,
            release_year=self.release_year,
            tmdb_id=self.tmdb_id,
            imdb_id=self.imdb_id,
            season=MediaPart(number=self.season.number, tmdb_id=self.season.tmdb_id),  # type: ignore[union-attr]
            episode=MediaPart(number=self.episode.number, tmdb_id=self.episode.tmdb_id),  # type: ignore[union-attr]
        )


class ResolveRequest(BaseModel):
    """Payload accepted by the full resolution endpoint."""

    media: MediaModel
    source_order: list[str] | None = Field(
        default=None, description="Overrides the configured source priority when provided."
    )
    embed_order: list[str] | None = Field(
        default=None, description="Overrides the configured embed priority when provided."
    )


class SourceScrapeRequest(BaseModel):
    media: MediaModel


class EmbedScrapeRequest(BaseModel):
    url: str


class RunOutputModel(BaseModel):
    """Resolved stream; ``embedId`` is absent when the source supplied it directly."""

    source_id: str = Field(alias="sourceId")
    embed_id: str | None = Field(default=None, alias="embedId")
    stream: dict[str, Any]

    model_config = ConfigDict(populate_by_name=True)


class ResolveResponse(BaseModel):
    result: RunOutputModel
    events: list[dict[str, Any]] = Field(
        default_factory=list, description="Every event emitted during the run, in order."
    )


class EmbedRefModel(BaseModel):
    embed_id: str = Field(alias="embedId")
    url: str

    model_config = ConfigDict(populate_by_name=True)


class SourceScrapeResponse(BaseModel):
    stream: dict[str, Any] | None = None
    embeds: list[EmbedRefModel] = Field(default_factory=list)


class EmbedScrapeResponse(BaseModel):
    stream: dict[str, Any]
