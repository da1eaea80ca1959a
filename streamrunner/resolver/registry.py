"""Provider registry assembly."""
from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from typing import Hashable, Iterable, List, Sequence

from .base import Embed, Sourcerer
from .errors import DuplicateIdentityError, DuplicateRankError
from .targets import FeatureMap, flags_allowed_in_features

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderTable:
    """Static registration table listing every provider known to a deployment."""

    sources: Sequence[Sourcerer] = ()
    embeds: Sequence[Embed] = ()


@dataclass
class ProviderList:
    sources: List[Sourcerer] = field(default_factory=list)
    embeds: List[Embed] = field(default_factory=list)


def has_duplicates(values: Iterable[Hashable]) -> bool:
    seen = set()
    for value in values:
        if value in seen:
            return True
        seen.add(value)
    return False


def get_providers(
    features: FeatureMap,
    sources: Iterable[Sourcerer],
    embeds: Iterable[Embed],
) -> ProviderList:
    """Validate the registration table and admit the providers usable under ``features``.

    Disabled providers are dropped first. Ids must be unique across sources
    and embeds, ranks unique within each kind. Sources whose flags are not
    all enabled are left out; embeds are kept regardless since their stream
    flags are only known once they run.
    """

    active_sources = [source for source in sources if not source.disabled]
    active_embeds = [embed for embed in embeds if not embed.disabled]

    combined_ids = [source.id for source in active_sources] + [embed.id for embed in active_embeds]
    if has_duplicates(combined_ids):
        raise DuplicateIdentityError("Duplicate id found in sources/embeds")
    if has_duplicates(source.rank for source in active_sources):
        raise DuplicateRankError("Duplicate rank found in sources")
    if has_duplicates(embed.rank for embed in active_embeds):
        raise DuplicateRankError("Duplicate rank found in embeds")

    admitted = [
        source for source in active_sources if flags_allowed_in_features(features, source.flags)
    ]
    if len(admitted) != len(active_sources):
        logger.debug(
            "Skipped sources with unsupported flags: %s",
            ", ".join(source.id for source in active_sources if source not in admitted),
        )

    return ProviderList(sources=admitted, embeds=active_embeds)


def load_provider_table(path: str) -> ProviderTable:
    """Import a ``module:attribute`` reference to a table or a table factory."""

    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Provider table path must look like 'module:attribute', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import provider table module {module_name}: {exc}") from exc
    try:
        target = getattr(module, attribute)
    except AttributeError as exc:
        raise ValueError(f"Module {module_name} has no attribute {attribute}") from exc

    table = target() if callable(target) else target
    if not isinstance(table, ProviderTable):
        raise ValueError(f"{path} did not resolve to a ProviderTable")
    return table
