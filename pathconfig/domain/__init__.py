"""Domain: scope and type-tag enums, exceptions. No infrastructure imports."""

from pathconfig.domain.enums import Scope, TypeTag
from pathconfig.domain.exceptions import (
    CoercionException,
    PathConfigException,
    RecordStoreNotConfiguredException,
    ValidationException,
)

__all__ = [
    "CoercionException",
    "PathConfigException",
    "RecordStoreNotConfiguredException",
    "Scope",
    "TypeTag",
    "ValidationException",
]
