"""pathconfig: path-addressed configuration values routed to registered handlers.

Register templates such as ``/System/User/${id}/Name`` with read and write
callbacks, then read and write concrete paths through ``Config``; results
can be cached per handler (Org or Session partition) and converted with a
``?type=<Tag>`` query parameter.
"""

from pathconfig.domain.enums import Scope, TypeTag
from pathconfig.infrastructure.cache.gateway import CacheGateway
from pathconfig.routing.dispatcher import Config
from pathconfig.routing.registry import Handler, HandlerRegistry

__all__ = [
    "CacheGateway",
    "Config",
    "Handler",
    "HandlerRegistry",
    "Scope",
    "TypeTag",
]
