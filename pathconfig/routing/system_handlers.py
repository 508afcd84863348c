"""Built-in paths registered on every Config created by the app lifespan."""

from pathconfig.core.config import Settings
from pathconfig.routing.dispatcher import Config

SYSTEM_VERSION_PATH = "/System/version"
SYSTEM_PATHS_PATH = "/System/paths"


def register_system_handlers(config: Config, settings: Settings) -> None:
    """Register /System/version (app version) and /System/paths (registered templates).

    Neither is cached: the version is constant and the path list changes with
    every registration.
    """
    config.register_read(
        SYSTEM_VERSION_PATH, lambda: settings.app_version, cache_enabled=False
    )
    config.register_read(SYSTEM_PATHS_PATH, config.list_paths, cache_enabled=False)
