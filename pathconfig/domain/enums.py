"""Domain enumerations: cache scope and value type tags."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Scope(_ValuesMixin, str, Enum):
    """Cache partition backing a handler."""

    ORG = "Org"
    SESSION = "Session"

    @classmethod
    def parse(cls, value: "Scope | str | None") -> "Scope":
        """Return SESSION for "Session" (any case), ORG for anything else."""
        if isinstance(value, Scope):
            return value
        if value is not None and value.strip().lower() == cls.SESSION.value.lower():
            return cls.SESSION
        return cls.ORG


class TypeTag(_ValuesMixin, str, Enum):
    """Representations a read result can be coerced to via ?type=<tag>."""

    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    LONG = "Long"
    DOUBLE = "Double"
    DECIMAL = "Decimal"
    STRING = "String"
    LIST = "List"
    SET = "Set"
    MAP = "Map"
    RECORD = "Record"
    DATE = "Date"
    TIME = "Time"
    DATETIME = "DateTime"
    CALLBACK = "Callback"

    @classmethod
    def lookup(cls, tag: str | None) -> "TypeTag | None":
        """Return the tag matching *tag* case-insensitively, or None."""
        if not tag:
            return None
        return _TAGS_BY_LOWER.get(tag.strip().lower())


_TAGS_BY_LOWER: dict[str, TypeTag] = {t.value.lower(): t for t in TypeTag}
