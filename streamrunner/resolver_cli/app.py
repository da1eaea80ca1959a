"""Command line interface for the streamrunner resolver."""
from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

import typer
import uvicorn

from ..resolver.controls import ProviderControls, embed_metadata, source_metadata
from ..resolver.errors import NotFoundError, RegistryFault, StructuralFault
from ..resolver.events import logging_events
from ..resolver.media import MediaPart, MovieMedia, ScrapeMedia, ShowMedia
from ..resolver.targets import Targets
from ..resolver_api.app import create_app
from ..resolver_api.settings import RunnerSettings
from ..resolver_api.state import admitted_providers, build_controls, resolve_table
from .client import create_client

T = TypeVar("T")

app = typer.Typer(help="Resolve playable streams through the registered providers.")


def _providers_option() -> Any:
    return typer.Option(
        None,
        "--providers",
        help="Provider table to load, as 'module:attribute'.",
        envvar="STREAMRUNNER_PROVIDER_TABLE",
    )


def _target_option() -> Any:
    return typer.Option(
        None,
        "--target",
        help="Playback target used to derive enabled features.",
        case_sensitive=False,
    )


def _load_settings(providers: Optional[str], target: Optional[Targets]) -> RunnerSettings:
    overrides: dict[str, object] = {}
    if providers is not None:
        overrides["provider_table"] = providers
    if target is not None:
        overrides["target"] = target
    return RunnerSettings(**overrides)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _run(settings: RunnerSettings, operation: Callable[[ProviderControls], Awaitable[T]]) -> T:
    """Build controls for ``settings`` and drive ``operation`` to completion."""

    async def _main() -> T:
        table = resolve_table(settings)
        async with create_client(timeout=settings.request_timeout) as client:
            controls = build_controls(settings, table, client)
            return await operation(controls)

    try:
        return asyncio.run(_main())
    except (ValueError, LookupError, NotFoundError, RegistryFault, StructuralFault) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        typer.echo(f"Error: provider failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _resolve(
    settings: RunnerSettings,
    media: ScrapeMedia,
    source_order: Optional[List[str]],
    embed_order: Optional[List[str]],
) -> None:
    async def _operation(controls: ProviderControls):
        return await controls.run_all(
            media,
            source_order=source_order or settings.source_order,
            embed_order=embed_order or settings.embed_order,
            events=logging_events(),
        )

    output = _run(settings, _operation)
    if output is None:
        typer.echo("No stream found.", err=True)
        raise typer.Exit(code=1)
    _echo_json(output.to_dict())


@app.command()
def providers(
    providers: Optional[str] = _providers_option(),
    target: Optional[Targets] = _target_option(),
) -> None:
    """List admitted sources and registered embeds."""

    settings = _load_settings(providers, target)
    try:
        provider_list = admitted_providers(settings)
    except (ValueError, RegistryFault) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    _echo_json(
        {
            "sources": [
                {
                    "id": meta.id,
                    "name": meta.name,
                    "rank": meta.rank,
                    "mediaTypes": list(meta.media_types),
                }
                for meta in source_metadata(provider_list)
            ],
            "embeds": [
                {"id": meta.id, "name": meta.name, "rank": meta.rank}
                for meta in embed_metadata(provider_list)
            ],
        }
    )


@app.command("resolve-movie")
def resolve_movie(
    title: str = typer.Option(..., help="Movie title."),
    year: int = typer.Option(..., help="Release year."),
    tmdb_id: str = typer.Option(..., help="TMDB id of the movie."),
    imdb_id: Optional[str] = typer.Option(None, help="IMDb id of the movie."),
    source_order: Optional[List[str]] = typer.Option(
        None, "--source-order", help="Source id to try first (repeat the flag)."
    ),
    embed_order: Optional[List[str]] = typer.Option(
        None, "--embed-order", help="Embed id to try first (repeat the flag)."
    ),
    providers: Optional[str] = _providers_option(),
    target: Optional[Targets] = _target_option(),
) -> None:
    """Resolve a stream for a movie and print it as JSON."""

    media = MovieMedia(title=title, release_year=year, tmdb_id=tmdb_id, imdb_id=imdb_id)
    _resolve(_load_settings(providers, target), media, source_order, embed_order)


@app.command("resolve-show")
def resolve_show(
    title: str = typer.Option(..., help="Show title."),
    year: int = typer.Option(..., help="Year the show first aired."),
    tmdb_id: str = typer.Option(..., help="TMDB id of the show."),
    season: int = typer.Option(..., min=0, help="Season number."),
    episode: int = typer.Option(..., min=0, help="Episode number."),
    season_tmdb_id: str = typer.Option("", help="TMDB id of the season."),
    episode_tmdb_id: str = typer.Option("", help="TMDB id of the episode."),
    imdb_id: Optional[str] = typer.Option(None, help="IMDb id of the show."),
    source_order: Optional[List[str]] = typer.Option(
        None, "--source-order", help="Source id to try first (repeat the flag)."
    ),
    embed_order: Optional[List[str]] = typer.Option(
        None, "--embed-order", help="Embed id to try first (repeat the flag)."
    ),
    providers: Optional[str] = _providers_option(),
    target: Optional[Targets] = _target_option(),
) -> None:
    """Resolve a stream for one show episode and print it as JSON."""

    media = ShowMedia(
        title=title,
        release_year=year,
        tmdb_id=tmdb_id,
        imdb_id=imdb_id,
        season=MediaPart(number=season, tmdb_id=season_tmdb_id),
        episode=MediaPart(number=episode, tmdb_id=episode_tmdb_id),
    )
    _resolve(_load_settings(providers, target), media, source_order, embed_order)


@app.command("scrape-embed")
def scrape_embed(
    embed_id: str = typer.Argument(..., help="Embed provider id."),
    url: str = typer.Argument(..., help="Embed page URL."),
    providers: Optional[str] = _providers_option(),
    target: Optional[Targets] = _target_option(),
) -> None:
    """Run a single embed provider on a URL and print the stream."""

    settings = _load_settings(providers, target)

    async def _operation(controls: ProviderControls):
        return await controls.run_embed_scraper(embed_id, url, events=logging_events())

    result = _run(settings, _operation)
    _echo_json({"stream": result.stream.to_dict()})


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address; defaults to settings."),
    port: Optional[int] = typer.Option(None, help="Bind port; defaults to settings."),
    providers: Optional[str] = _providers_option(),
    target: Optional[Targets] = _target_option(),
) -> None:
    """Serve the resolver API with Uvicorn."""

    settings = _load_settings(providers, target)
    try:
        application = create_app(settings)
    except (ValueError, RegistryFault) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    uvicorn.run(application, host=host or settings.host, port=port or settings.port)
