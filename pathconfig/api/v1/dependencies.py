"""FastAPI dependencies for v1 routes."""

from fastapi import Request

from pathconfig.routing.dispatcher import Config


def get_config(request: Request) -> Config:
    """Return the Config dispatcher built by the app lifespan."""
    return request.app.state.config
