"""Path template matching.

A template is a ``/``-separated path where a ``${name}`` token stands for
one non-empty variable segment, e.g. ``/System/User/${id}/Name``, so
``/System/User//Name`` does not match it. Matching is
all-or-nothing against the whole input; query parameters after the last
``?`` are merged into the result, with placeholder bindings winning on
name collisions.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import unquote

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\$\{([^}/]+)\}")

# One non-empty run of characters inside a single segment
_SEGMENT_CAPTURE = r"([^/]+)"


@dataclass(frozen=True, slots=True)
class CompiledTemplate:
    """A template compiled to a full-match regex plus its placeholder names in order."""

    template: str
    pattern: re.Pattern[str]
    names: tuple[str, ...]

    def bind(self, path: str) -> dict[str, str] | None:
        """Return placeholder bindings for *path*, or None if it does not match."""
        m = self.pattern.fullmatch(path)
        if m is None:
            return None
        params: dict[str, str] = {}
        for name, value in zip(self.names, m.groups()):
            params[name] = value
        return params


@lru_cache(maxsize=1024)
def compile_template(template: str) -> CompiledTemplate:
    """Compile *template*; every character outside ``${...}`` tokens is literal."""
    names: list[str] = []
    parts: list[str] = []
    last = 0
    for m in PLACEHOLDER_RE.finditer(template):
        parts.append(re.escape(template[last : m.start()]))
        parts.append(_SEGMENT_CAPTURE)
        names.append(m.group(1))
        last = m.end()
    parts.append(re.escape(template[last:]))
    return CompiledTemplate(
        template=template,
        pattern=re.compile("".join(parts)),
        names=tuple(names),
    )


def placeholder_names(template: str) -> list[str]:
    """Return placeholder names of *template* in left-to-right order."""
    return PLACEHOLDER_RE.findall(template)


def parse_query(query: str) -> dict[str, str | None]:
    """Parse ``a=1&b&c=x=y`` into ``{"a": "1", "b": None, "c": "x=y"}``.

    Empty tokens are skipped. Values are kept as written (not decoded).
    """
    params: dict[str, str | None] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        name, sep, value = pair.partition("=")
        params[name] = value if sep else None
    return params


def split_input(value: str) -> tuple[str, dict[str, str | None]]:
    """Split an input path at its last ``?``; return (decoded path, query params)."""
    path, sep, query = value.rpartition("?")
    if not sep:
        path, query = value, ""
    return unquote(path), parse_query(query)


def match(template: str, value: str) -> dict[str, str | None] | None:
    """Match *value* against *template*.

    Returns the query parameters merged with placeholder bindings, or None
    when the path does not match (query parameters are then discarded).

    Example:
        >>> match("/System/${name}/${value}", "/System/a/b?type=Map")
        {'type': 'Map', 'name': 'a', 'value': 'b'}
    """
    path, params = split_input(value)
    try:
        compiled = compile_template(template)
    except re.error:
        logger.warning("Unusable path template %r; treating as no match", template)
        return None
    bindings = compiled.bind(path)
    if bindings is None:
        return None
    params.update(bindings)
    return params
