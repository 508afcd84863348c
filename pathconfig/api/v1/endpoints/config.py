"""Config API: thin routes delegating to the Config dispatcher on app.state."""

import logging
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Body, Depends, Request, Response
from fastapi.encoders import jsonable_encoder

from pathconfig._internal.invoke import invoke_callback
from pathconfig.api.v1.dependencies import get_config
from pathconfig.routing.coercion import is_mapped_instance, record_to_mapping
from pathconfig.routing.dispatcher import Config
from pathconfig.schemas.config import ConfigValueResponse, PathListResponse

logger = logging.getLogger(__name__)

router = APIRouter()

CONFIG_ROUTE = "/config/"


def _config_path(path: str, request: Request) -> str:
    """Rebuild the config path (leading slash, raw query string) from the request.

    The path is taken still percent-encoded from the raw request target;
    the matcher decodes it exactly once. *path* (already decoded by the
    router) is only used when the server does not provide raw_path.
    """
    encoded = quote(path, safe="/")
    raw_path = request.scope.get("raw_path")
    if raw_path:
        target = raw_path.decode("latin-1").partition("?")[0]
        _, sep, tail = target.partition(CONFIG_ROUTE)
        if sep:
            encoded = tail
    query = request.url.query
    return f"/{encoded}?{query}" if query else f"/{encoded}"


async def _to_json(value: Any) -> Any:
    """Make a read result JSON-ready: evaluate Callback values, flatten ORM records."""
    if callable(value):
        value = await invoke_callback(value)
    if isinstance(value, (list, tuple)):
        value = [record_to_mapping(v) if is_mapped_instance(v) else v for v in value]
    elif is_mapped_instance(value):
        value = record_to_mapping(value)
    return jsonable_encoder(value)


@router.get("/paths", response_model=PathListResponse)
def list_paths(config: Config = Depends(get_config)) -> PathListResponse:
    """Registered path templates in registration order."""
    return PathListResponse(paths=config.list_paths())


@router.get(CONFIG_ROUTE + "{path:path}", response_model=ConfigValueResponse)
async def read_config(
    path: str,
    request: Request,
    config: Config = Depends(get_config),
) -> ConfigValueResponse:
    """Resolve a config path; value is null when no handler matches."""
    config_path = _config_path(path, request)
    value = await config.read(config_path)
    return ConfigValueResponse(path=config_path, value=await _to_json(value))


@router.put(CONFIG_ROUTE + "{path:path}", status_code=204)
async def write_config(
    path: str,
    request: Request,
    body: dict[str, Any] | None = Body(default=None),
    config: Config = Depends(get_config),
) -> Response:
    """Send the JSON object body to every handler matching the path."""
    await config.write(_config_path(path, request), body)
    return Response(status_code=204)
