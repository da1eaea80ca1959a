"""FastAPI service exposing the provider resolver."""

from .app import create_app

__all__ = ["create_app"]
