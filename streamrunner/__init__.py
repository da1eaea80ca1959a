"""
streamrunner resolves one playable stream for a movie or show episode.

The package bundles the provider fallback resolver, the FastAPI service
that exposes it, and the Typer CLI used to drive it from a terminal.
"""

__all__ = ["resolver", "resolver_api", "resolver_cli"]
