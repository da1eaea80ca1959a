"""Exceptions raised by providers and by the resolver itself."""
from __future__ import annotations


class NotFoundError(Exception):
    """Raised by a provider when the requested media is not available there."""

    def __init__(self, reason: str = "not found") -> None:
        super().__init__(reason)
        self.reason = reason


class StructuralFault(RuntimeError):
    """Raised when provider wiring is broken; aborts the whole run."""


class MissingOutputError(StructuralFault):
    """Raised when a provider capability completes without producing output."""


class UnknownEmbedError(StructuralFault):
    """Raised when a source references an embed id that is not registered."""


class RegistryFault(RuntimeError):
    """Raised when the provider registry cannot be assembled."""


class DuplicateIdentityError(RegistryFault):
    """Raised when two providers share an id."""


class DuplicateRankError(RegistryFault):
    """Raised when two providers of the same kind share a rank."""


class ProviderLookupError(LookupError):
    """Raised when a single provider run targets an unknown or incapable provider."""
