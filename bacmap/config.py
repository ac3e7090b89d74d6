"""bacmap configuration management.

Loads configuration from environment variables with sensible defaults.
Every threshold is a 0-1 score; values outside that range fail fast.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


def _unit_interval(name: str, value: float) -> float:
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")
    return value


@dataclass
class NormalizationConfig:
    """Point normalization settings."""

    review_threshold: float = 0.5  # requires_manual_review below this
    overrides_path: Path | None = None  # YAML acronym overlay
    infer_vendor: bool = False  # guess vendor from point-name patterns

    def __post_init__(self) -> None:
        _unit_interval("review_threshold", self.review_threshold)


@dataclass
class MatchingConfig:
    """Template and equipment matching thresholds."""

    template_confidence_threshold: float = 0.7
    pairing_min_confidence: float = 0.6
    type_match_bonus: float = 0.2
    create_new_threshold: float = 0.7
    suggestion_limit: int = 3

    def __post_init__(self) -> None:
        _unit_interval("template_confidence_threshold", self.template_confidence_threshold)
        _unit_interval("pairing_min_confidence", self.pairing_min_confidence)
        _unit_interval("type_match_bonus", self.type_match_bonus)
        _unit_interval("create_new_threshold", self.create_new_threshold)
        if self.suggestion_limit < 1:
            raise ValueError("suggestion_limit must be at least 1")


@dataclass
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    json_logs: bool = False

    normalization: NormalizationConfig = field(default_factory=NormalizationConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - TEMPLATE_CONFIDENCE_THRESHOLD (0.7), PAIRING_MIN_CONFIDENCE (0.6),
          TYPE_MATCH_BONUS (0.2), REVIEW_CONFIDENCE_THRESHOLD (0.5),
          CREATE_NEW_THRESHOLD (0.7), SUGGESTION_LIMIT (3)
        - ACRONYM_OVERRIDES_PATH: YAML file merged over built-in dictionaries
        - INFER_VENDOR: "true" to infer vendor from point-name patterns
        - LOG_LEVEL (INFO), JSON_LOGS (false)

        Raises:
            ValueError: If a threshold is not a number in [0, 1]
        """
        overrides = os.getenv("ACRONYM_OVERRIDES_PATH")

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            json_logs=os.getenv("JSON_LOGS", "false").lower() == "true",
            normalization=NormalizationConfig(
                review_threshold=float(os.getenv("REVIEW_CONFIDENCE_THRESHOLD", "0.5")),
                overrides_path=Path(overrides) if overrides else None,
                infer_vendor=os.getenv("INFER_VENDOR", "false").lower() == "true",
            ),
            matching=MatchingConfig(
                template_confidence_threshold=float(
                    os.getenv("TEMPLATE_CONFIDENCE_THRESHOLD", "0.7")
                ),
                pairing_min_confidence=float(os.getenv("PAIRING_MIN_CONFIDENCE", "0.6")),
                type_match_bonus=float(os.getenv("TYPE_MATCH_BONUS", "0.2")),
                create_new_threshold=float(os.getenv("CREATE_NEW_THRESHOLD", "0.7")),
                suggestion_limit=int(os.getenv("SUGGESTION_LIMIT", "3")),
            ),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Returns:
        AppConfig: Application configuration
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
