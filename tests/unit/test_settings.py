"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from pathconfig.core.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.cache_namespace == "pathconfig"
    assert settings.cache_ttl_seconds == 900
    assert settings.session_header_name == "X-Session-ID"


@pytest.mark.parametrize("ttl", [0, -5])
def test_non_positive_ttl_rejected(ttl: int) -> None:
    with pytest.raises(ValidationError, match="cache_ttl_seconds"):
        Settings(cache_ttl_seconds=ttl)


def test_blank_namespace_rejected() -> None:
    with pytest.raises(ValidationError, match="cache_namespace"):
        Settings(cache_namespace="  ")


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CACHE_NAMESPACE", "tenant-a")
    monkeypatch.setenv("SESSION_HEADER_NAME", "X-User")
    settings = Settings()
    assert settings.cache_namespace == "tenant-a"
    assert settings.session_header_name == "X-User"
