"""Routing: path templates, handler registry, type coercion and the Config façade."""

from pathconfig.routing.coercion import RecordValue, coerce
from pathconfig.routing.dispatcher import Config
from pathconfig.routing.path_matcher import match
from pathconfig.routing.registry import Handler, HandlerRegistry

__all__ = [
    "Config",
    "Handler",
    "HandlerRegistry",
    "RecordValue",
    "coerce",
    "match",
]
