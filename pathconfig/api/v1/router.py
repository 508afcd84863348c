"""API v1 router aggregation."""

from fastapi import APIRouter

from pathconfig.api.v1.endpoints import config, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(config.router, tags=["config"])
