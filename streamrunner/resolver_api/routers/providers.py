"""Provider listing endpoints."""
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from ...resolver.controls import MetaOutput, ProviderControls
from ..dependencies import get_controls
from ..schemas import ProviderListModel, ProviderMetaModel

router = APIRouter(prefix="/providers", tags=["providers"])


def _to_model(meta: MetaOutput) -> ProviderMetaModel:
    return ProviderMetaModel.model_validate(asdict(meta))


@router.get("", response_model=ProviderListModel, summary="List admitted providers")
def list_providers(controls: ProviderControls = Depends(get_controls)) -> ProviderListModel:
    """Return admitted sources and registered embeds, highest rank first."""

    return ProviderListModel(
        sources=[_to_model(meta) for meta in controls.list_sources()],
        embeds=[_to_model(meta) for meta in controls.list_embeds()],
    )


@router.get("/{provider_id}", response_model=ProviderMetaModel, summary="Provider metadata")
def get_provider(
    provider_id: str, controls: ProviderControls = Depends(get_controls)
) -> ProviderMetaModel:
    """Return metadata for a single provider."""

    meta = controls.get_metadata(provider_id)
    if meta is None:
        raise HTTPException(status_code=404, detail=f"Provider {provider_id} not found")
    return _to_model(meta)
