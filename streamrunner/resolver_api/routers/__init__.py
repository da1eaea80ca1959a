"""Router exports for the resolver API."""
from . import health, providers, resolve

__all__ = ["health", "providers", "resolve"]
