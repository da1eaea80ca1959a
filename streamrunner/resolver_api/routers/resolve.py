"""Stream resolution endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ...resolver.controls import ProviderControls
from ...resolver.errors import NotFoundError, ProviderLookupError, StructuralFault
from ...resolver.events import EventLog
from ..dependencies import get_controls, get_settings
from ..schemas import (
    EmbedRefModel,
    EmbedScrapeRequest,
    EmbedScrapeResponse,
    ResolveRequest,
    ResolveResponse,
    RunOutputModel,
    SourceScrapeRequest,
    SourceScrapeResponse,
)
from ..settings import RunnerSettings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resolve", tags=["resolve"])


@router.post(
    "",
    response_model=ResolveResponse,
    response_model_exclude_none=True,
    summary="Resolve one stream across all providers",
)
async def resolve(
    request: ResolveRequest,
    controls: ProviderControls = Depends(get_controls),
    settings: RunnerSettings = Depends(get_settings),
) -> ResolveResponse:
    """Try every admitted provider in priority order and return the first stream."""

    source_order = request.source_order
    if source_order is None:
        source_order = settings.source_order
    embed_order = request.embed_order
    if embed_order is None:
        embed_order = settings.embed_order

    event_log = EventLog()
    try:
        output = await controls.run_all(
            request.media.to_media(),
            source_order=source_order,
            embed_order=embed_order,
            events=event_log.as_events(),
        )
    except StructuralFault as exc:
        logger.error("Resolution aborted: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    if output is None:
        raise HTTPException(status_code=404, detail="no stream found")

    return ResolveResponse(
        result=RunOutputModel.model_validate(output.to_dict()),
        events=event_log.entries,
    )


@router.post(
    "/source/{source_id}",
    response_model=SourceScrapeResponse,
    response_model_exclude_none=True,
    summary="Scrape a single source",
)
async def scrape_source(
    source_id: str,
    request: SourceScrapeRequest,
    controls: ProviderControls = Depends(get_controls),
) -> SourceScrapeResponse:
    """Run one source provider and return its raw output."""

    try:
        output = await controls.run_source_scraper(source_id, request.media.to_media())
    except (ProviderLookupError, NotFoundError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except StructuralFault as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:
        logger.warning("Source %s failed: %r", source_id, exc)
        raise HTTPException(status_code=502, detail=f"Source {source_id} failed: {exc}") from exc

    return SourceScrapeResponse(
        stream=output.stream.to_dict() if output.stream is not None else None,
        embeds=[EmbedRefModel(embed_id=ref.embed_id, url=ref.url) for ref in output.embeds],
    )


@router.post(
    "/embed/{embed_id}",
    response_model=EmbedScrapeResponse,
    summary="Scrape a single embed URL",
)
async def scrape_embed(
    embed_id: str,
    request: EmbedScrapeRequest,
    controls: ProviderControls = Depends(get_controls),
) -> EmbedScrapeResponse:
    """Run one embed provider on the supplied URL."""

    try:
        output = await controls.run_embed_scraper(embed_id, request.url)
    except (ProviderLookupError, NotFoundError) as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except StructuralFault as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except Exception as exc:
        logger.warning("Embed %s failed: %r", embed_id, exc)
        raise HTTPException(status_code=502, detail=f"Embed {embed_id} failed: {exc}") from exc

    return EmbedScrapeResponse(stream=output.stream.to_dict())
