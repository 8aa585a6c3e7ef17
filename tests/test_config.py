"""Tests for Settings and the Domain enum."""

from __future__ import annotations

import pytest

from seo_extract.config import Settings, get_settings
from seo_extract.domains.registry import Domain

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("LLM_MODEL", "NARRATOR_MAX_TOKENS", "NARRATOR_TEMPERATURE", "API_PORT"):
            monkeypatch.delenv(var, raising=False)
        cfg = Settings(_env_file=None)  # type: ignore[call-arg]
        assert cfg.llm_model == "claude-sonnet-4-20250514"
        assert cfg.narrator_max_tokens == 8192
        assert cfg.narrator_temperature == 0.2
        assert cfg.api_port == 8000

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NARRATOR_MAX_TOKENS", "1024")
        monkeypatch.setenv("NARRATOR_TEMPERATURE", "0.7")
        cfg = Settings(_env_file=None)  # type: ignore[call-arg]
        assert cfg.narrator_max_tokens == 1024
        assert cfg.narrator_temperature == 0.7

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


# ---------------------------------------------------------------------------
# Domain enum
# ---------------------------------------------------------------------------


class TestDomain:
    def test_values(self) -> None:
        assert [d.value for d in Domain] == ["keyword", "content", "technical"]

    def test_from_string(self) -> None:
        assert Domain("technical") is Domain.TECHNICAL

    def test_invalid_raises(self) -> None:
        with pytest.raises(ValueError):
            Domain("backlinks")

    def test_is_str_subclass(self) -> None:
        """Enum values behave as plain strings for JSON serialization."""
        assert isinstance(Domain.KEYWORD, str)
