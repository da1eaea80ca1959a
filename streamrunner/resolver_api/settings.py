"""Runtime configuration for the resolver service and CLI."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..resolver.targets import Targets


class RunnerSettings(BaseSettings):
    """Environment-aware settings shared by the API service and the CLI."""

    provider_table: str | None = Field(
        default=None,
        description="Dotted 'module:attribute' path to the ProviderTable to load.",
    )
    target: Targets = Field(
        default=Targets.NATIVE, description="Playback target used to derive enabled features."
    )
    consistent_ip: bool = Field(
        default=False,
        description="Whether every request leaves from the player's IP, enabling IP-locked streams.",
    )
    proxy_url: str | None = Field(
        default=None, description="Optional simple proxy used for the proxied fetcher."
    )
    request_timeout: float = Field(
        default=20.0, description="Timeout in seconds applied to provider HTTP requests."
    )
    source_order: list[str] = Field(
        default_factory=list, description="Source ids tried before all others, in order."
    )
    embed_order: list[str] = Field(
        default_factory=list, description="Embed ids tried before all others, in order."
    )
    host: str = Field(default="0.0.0.0", description="Bind address for the API server.")
    port: int = Field(default=8000, description="Bind port for the API server.")

    model_config = SettingsConfigDict(
        env_prefix="STREAMRUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )
