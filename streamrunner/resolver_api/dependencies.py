"""FastAPI dependencies for the resolver API."""
from fastapi import Depends, Request

from ..resolver.controls import ProviderControls
from .settings import RunnerSettings
from .state import AppState


def get_app_state(request: Request) -> AppState:
    """Resolve the shared application state from the FastAPI request."""
    return request.app.state.app_state


def get_controls(app_state: AppState = Depends(get_app_state)) -> ProviderControls:
    """Return the provider controls dependency."""
    return app_state.controls


def get_settings(app_state: AppState = Depends(get_app_state)) -> RunnerSettings:
    """Return the runtime settings dependency."""
    return app_state.settings
