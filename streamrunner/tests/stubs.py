"""Stub providers shared by the resolver tests."""
from __future__ import annotations

from typing import Any, List, Optional

from streamrunner.resolver import (
    Embed,
    EmbedOutput,
    EmbedRef,
    FileStream,
    HlsStream,
    MediaPart,
    MovieMedia,
    NotFoundError,
    ProviderTable,
    ShowMedia,
    Sourcerer,
    SourcererOutput,
    StreamFile,
)

HLS_STREAM = HlsStream(playlist="https://cdn.example/master.m3u8", flags=["cors-allowed"])
FILE_STREAM = FileStream(
    qualities={"1080": StreamFile(url="https://cdn.example/movie-1080.mp4")},
    flags=[],
)
EMPTY_FILE_STREAM = FileStream(qualities={}, flags=[])


def movie_media() -> MovieMedia:
    return MovieMedia(title="Example Movie", release_year=2024, tmdb_id="100")


def show_media() -> ShowMedia:
    return ShowMedia(
        title="Example Show",
        release_year=2019,
        tmdb_id="200",
        season=MediaPart(number=1, tmdb_id="201"),
        episode=MediaPart(number=2, tmdb_id="202"),
    )


def returning(value: Any, calls: Optional[List[str]] = None, name: str = ""):
    """Build a scrape coroutine that records its call and returns ``value``."""

    async def _scrape(ctx: Any) -> Any:
        if calls is not None:
            calls.append(name)
        return value

    return _scrape


def raising(error: Exception, calls: Optional[List[str]] = None, name: str = ""):
    """Build a scrape coroutine that records its call and raises ``error``."""

    async def _scrape(ctx: Any) -> Any:
        if calls is not None:
            calls.append(name)
        raise error

    return _scrape


async def unused_fetcher(url: str, **kwargs: Any) -> Any:
    raise AssertionError(f"unexpected fetch of {url}")


def build_table() -> ProviderTable:
    """Small table exercising every path the API and CLI expose.

    Movies: ``alpha`` finds nothing, ``beta`` hands off to the ``hoster``
    embed. Shows: ``beta`` returns a direct HLS stream. ``locked`` is only
    admitted when IP-locked streams are enabled.
    """

    return ProviderTable(
        sources=[
            Sourcerer(
                id="alpha",
                name="Alpha",
                rank=300,
                scrape_movie=raising(NotFoundError("no match on alpha")),
            ),
            Sourcerer(
                id="beta",
                name="Beta",
                rank=200,
                scrape_movie=returning(
                    SourcererOutput(embeds=[EmbedRef(embed_id="hoster", url="https://hoster.example/e/1")])
                ),
                scrape_show=returning(SourcererOutput(stream=HLS_STREAM)),
            ),
            Sourcerer(
                id="locked",
                name="Locked",
                rank=100,
                flags=("ip-locked",),
                scrape_movie=returning(SourcererOutput(stream=FILE_STREAM)),
            ),
        ],
        embeds=[
            Embed(
                id="hoster",
                name="Hoster",
                rank=50,
                scrape=returning(EmbedOutput(stream=FILE_STREAM)),
            ),
        ],
    )


TABLE = build_table()


def broken_embed_table() -> ProviderTable:
    """Table whose only embed fails with an unexpected error."""

    return ProviderTable(
        embeds=[
            Embed(id="broken", name="Broken", rank=10, scrape=raising(RuntimeError("boom"))),
        ],
    )


def empty_table() -> ProviderTable:
    """Table whose only source never finds anything."""

    return ProviderTable(
        sources=[
            Sourcerer(
                id="alpha",
                name="Alpha",
                rank=300,
                scrape_movie=raising(NotFoundError("no match on alpha")),
            ),
        ],
    )
