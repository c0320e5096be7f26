"""
Configuration - Environment-driven settings for the session and the API.

Variables:
    SURPRISE_ENV              development | production (default development)
    SURPRISE_STATE_PATH       Saved session file (default ~/.surprise/state.json)
    SURPRISE_ROUND_PLAN       Comma separated quotas (default 3,3,3,3,2)
    SURPRISE_TARGET_PRIZE_ID  Prize delivered to the participant
    SURPRISE_AUTO_WIN         Deliver the top-ranked prize (1/true/yes)
    SURPRISE_SEED             Seed for reproducible games
    SURPRISE_LOG_LEVEL        Logging level name (default INFO)
    ALLOWED_ORIGINS           CORS origins for the API (default *)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import logging
import os

from .engine_core.state import RoundPlan

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class SurpriseConfig:
    """Settings shared by the CLI and the API."""
    env: str = "development"
    state_path: Path = field(default_factory=lambda: Path.home() / ".surprise" / "state.json")
    round_plan: RoundPlan = field(default_factory=RoundPlan)
    target_prize_id: str | None = None
    auto_win: bool = False
    seed: int | None = None
    log_level: int = logging.INFO
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> SurpriseConfig:
        """
        Build the configuration from environment variables.

        Raises:
            ValueError: If a variable is set to an unusable value
        """
        config = cls()
        config.env = os.getenv("SURPRISE_ENV", config.env)

        state_path = os.getenv("SURPRISE_STATE_PATH")
        if state_path:
            config.state_path = Path(state_path).expanduser()

        plan = os.getenv("SURPRISE_ROUND_PLAN")
        if plan:
            config.round_plan = RoundPlan.parse(plan)

        config.target_prize_id = os.getenv("SURPRISE_TARGET_PRIZE_ID") or None
        config.auto_win = _env_bool("SURPRISE_AUTO_WIN")
        config.seed = _env_int("SURPRISE_SEED")

        level_name = os.getenv("SURPRISE_LOG_LEVEL", "INFO").upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ValueError(f"SURPRISE_LOG_LEVEL is not a logging level: {level_name!r}")
        config.log_level = level

        origins = os.getenv("ALLOWED_ORIGINS", "*")
        config.allowed_origins = [o.strip() for o in origins.split(",") if o.strip()]

        return config

    @property
    def has_directive(self) -> bool:
        return bool(self.target_prize_id) or self.auto_win
