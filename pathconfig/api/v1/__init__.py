"""API v1: health and config routes."""

from pathconfig.api.v1.router import api_router

__all__ = ["api_router"]
