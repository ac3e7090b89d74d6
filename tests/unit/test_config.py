"""Unit tests for bacmap configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from bacmap.config import AppConfig, MatchingConfig, NormalizationConfig, get_config, reset_config


class TestDefaults:
    """Test default configuration values."""

    def test_from_env_defaults(self) -> None:
        config = AppConfig.from_env()

        assert config.log_level == "INFO"
        assert config.json_logs is False
        assert config.normalization.review_threshold == 0.5
        assert config.normalization.overrides_path is None
        assert config.normalization.infer_vendor is False
        assert config.matching.template_confidence_threshold == 0.7
        assert config.matching.pairing_min_confidence == 0.6
        assert config.matching.type_match_bonus == 0.2
        assert config.matching.create_new_threshold == 0.7
        assert config.matching.suggestion_limit == 3


class TestFromEnv:
    """Test environment overrides."""

    def test_thresholds(self, monkeypatch) -> None:
        monkeypatch.setenv("TEMPLATE_CONFIDENCE_THRESHOLD", "0.8")
        monkeypatch.setenv("PAIRING_MIN_CONFIDENCE", "0.5")
        monkeypatch.setenv("TYPE_MATCH_BONUS", "0.1")
        monkeypatch.setenv("REVIEW_CONFIDENCE_THRESHOLD", "0.4")
        monkeypatch.setenv("SUGGESTION_LIMIT", "5")

        config = AppConfig.from_env()

        assert config.matching.template_confidence_threshold == 0.8
        assert config.matching.pairing_min_confidence == 0.5
        assert config.matching.type_match_bonus == 0.1
        assert config.normalization.review_threshold == 0.4
        assert config.matching.suggestion_limit == 5

    def test_flags_and_paths(self, monkeypatch, tmp_path: Path) -> None:
        overlay = tmp_path / "acronyms.yaml"
        monkeypatch.setenv("ACRONYM_OVERRIDES_PATH", str(overlay))
        monkeypatch.setenv("INFER_VENDOR", "TRUE")
        monkeypatch.setenv("JSON_LOGS", "true")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = AppConfig.from_env()

        assert config.normalization.overrides_path == overlay
        assert config.normalization.infer_vendor is True
        assert config.json_logs is True
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["1.5", "-0.1"])
    def test_out_of_range_threshold_fails(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv("TEMPLATE_CONFIDENCE_THRESHOLD", value)

        with pytest.raises(ValueError, match="template_confidence_threshold"):
            AppConfig.from_env()

    def test_non_numeric_threshold_fails(self, monkeypatch) -> None:
        monkeypatch.setenv("PAIRING_MIN_CONFIDENCE", "high")

        with pytest.raises(ValueError):
            AppConfig.from_env()


class TestValidation:
    """Test dataclass validation."""

    def test_review_threshold_range(self) -> None:
        with pytest.raises(ValueError, match="review_threshold"):
            NormalizationConfig(review_threshold=2.0)

    def test_suggestion_limit(self) -> None:
        with pytest.raises(ValueError, match="suggestion_limit"):
            MatchingConfig(suggestion_limit=0)

    def test_boundaries_accepted(self) -> None:
        config = MatchingConfig(pairing_min_confidence=0.0, type_match_bonus=1.0)
        assert config.pairing_min_confidence == 0.0


class TestSingleton:
    """Test cached configuration."""

    def test_cached_until_reset(self, monkeypatch) -> None:
        first = get_config()
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        assert get_config() is first

        reset_config()
        assert get_config().log_level == "WARNING"
