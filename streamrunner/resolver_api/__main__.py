"""CLI entry point for launching the resolver API with Uvicorn."""
import logging

import uvicorn

from .app import create_app
from .settings import RunnerSettings


def main() -> None:
    """Start a development server for the resolver API."""

    logging.basicConfig(level=logging.INFO)
    settings = RunnerSettings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
