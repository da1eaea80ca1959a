"""Provider fallback resolver."""

from .base import (
    Embed,
    EmbedOutput,
    EmbedRef,
    EmbedScrapeContext,
    MovieScrapeContext,
    ScrapeContext,
    ShowScrapeContext,
    Sourcerer,
    SourcererOutput,
)
from .controls import (
    MetaOutput,
    ProviderControls,
    ProviderMakerOptions,
    embed_metadata,
    make_providers,
    source_metadata,
)
from .errors import (
    DuplicateIdentityError,
    DuplicateRankError,
    MissingOutputError,
    NotFoundError,
    ProviderLookupError,
    RegistryFault,
    StructuralFault,
    UnknownEmbedError,
)
from .events import EventLog, ScraperEvents, logging_events
from .media import MediaPart, MovieMedia, ScrapeMedia, ShowMedia
from .registry import ProviderList, ProviderTable, get_providers, load_provider_table
from .runner import ProviderRunnerOptions, RunOutput, run_all_providers
from .streams import FileStream, HlsStream, Stream, StreamFile, is_valid_stream
from .targets import Flags, Targets, flags_allowed_in_features, get_target_features

__all__ = [
    "DuplicateIdentityError",
    "DuplicateRankError",
    "Embed",
    "EmbedOutput",
    "EmbedRef",
    "EmbedScrapeContext",
    "EventLog",
    "FileStream",
    "Flags",
    "HlsStream",
    "MediaPart",
    "MetaOutput",
    "MissingOutputError",
    "MovieMedia",
    "MovieScrapeContext",
    "NotFoundError",
    "ProviderControls",
    "ProviderList",
    "ProviderLookupError",
    "ProviderMakerOptions",
    "ProviderRunnerOptions",
    "ProviderTable",
    "RegistryFault",
    "RunOutput",
    "ScrapeContext",
    "ScrapeMedia",
    "ScraperEvents",
    "ShowMedia",
    "ShowScrapeContext",
    "Sourcerer",
    "SourcererOutput",
    "Stream",
    "StreamFile",
    "StructuralFault",
    "Targets",
    "UnknownEmbedError",
    "embed_metadata",
    "flags_allowed_in_features",
    "get_providers",
    "get_target_features",
    "is_valid_stream",
    "load_provider_table",
    "logging_events",
    "make_providers",
    "run_all_providers",
    "source_metadata",
]
