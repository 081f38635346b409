"""
Centralized configuration with environment variable overrides.

Scheduling knobs, mock data parameters, and voice model settings are
configurable here. Scoring weights live beside the scoring code.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class BusinessConfig:
    """Business-specific settings loaded from environment or defaults."""

    name: str = os.getenv("BUSINESS_NAME", "Springfield Heating & Cooling")
    service_area: str = os.getenv("SERVICE_AREA", "Springfield and surrounding suburbs")


@dataclass(frozen=True)
class SchedulingConfig:
    """Recommendation horizon and mock roster settings."""

    preferred_maintenance_weekday: str = os.getenv(
        "PREFERRED_MAINTENANCE_WEEKDAY", "tuesday"
    ).strip().lower()
    suggestion_days: int = _safe_int("SUGGESTION_DAYS", "7")
    top_suggestions: int = _safe_int("TOP_SUGGESTIONS", "3")
    roster_days: int = _safe_int("ROSTER_DAYS", "14")
    mock_seed: int = _safe_int("MOCK_DATA_SEED", "42")


@dataclass(frozen=True)
class ModelConfig:
    """LLM and voice pipeline model settings."""

    llm_model: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    llm_temperature: float = _safe_float("LLM_TEMPERATURE", "0.3")
    stt_model: str = os.getenv("STT_MODEL", "nova-3")
    stt_language: str = os.getenv("STT_LANGUAGE", "en")
    tts_model: str = os.getenv("TTS_MODEL", "sonic-2")
    tts_voice_id: str = os.getenv("TTS_VOICE_ID", "79a125e8-cd45-4c13-8a67-188112f4dd22")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    business: BusinessConfig = field(default_factory=BusinessConfig)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    agent_name: str = os.getenv("AGENT_NAME", "hvac-scheduler")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.scheduling.preferred_maintenance_weekday not in WEEKDAY_NAMES:
        raise ValueError(
            "PREFERRED_MAINTENANCE_WEEKDAY must be a weekday name, "
            f"got {config.scheduling.preferred_maintenance_weekday!r}"
        )
    if config.scheduling.suggestion_days < 1:
        raise ValueError(
            f"SUGGESTION_DAYS must be >= 1, got {config.scheduling.suggestion_days}"
        )
    if config.scheduling.top_suggestions < 1:
        raise ValueError(
            f"TOP_SUGGESTIONS must be >= 1, got {config.scheduling.top_suggestions}"
        )
    if config.scheduling.roster_days < 1:
        raise ValueError(
            f"ROSTER_DAYS must be >= 1, got {config.scheduling.roster_days}"
        )
    if not 0.0 <= config.model.llm_temperature <= 2.0:
        raise ValueError(
            f"LLM_TEMPERATURE must be between 0.0 and 2.0, got {config.model.llm_temperature}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.business.name)
    return config


# Singleton instance
settings = load_config()
