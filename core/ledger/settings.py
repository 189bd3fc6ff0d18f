from __future__ import annotations

import os
from dataclasses import dataclass

from core.types import MarketParameters, ParticipantId

DEFAULT_SKILL_RATE = 1
DEFAULT_SERVICE_FEE_PERCENT = 0
DEFAULT_MAX_SKILLS_PER_USER = 100
DEFAULT_RESERVE_LIMIT = 1_000_000


@dataclass(frozen=True)
class MarketSettings:
    """Marketplace configuration.

    `administrator` is the identity allowed to call configuration setters.
    Values come from the environment (SKILLMARKET_*) when built via
    `from_env`.
    """

    administrator: ParticipantId
    skill_rate: int = DEFAULT_SKILL_RATE
    service_fee_percent: int = DEFAULT_SERVICE_FEE_PERCENT
    max_skills_per_user: int = DEFAULT_MAX_SKILLS_PER_USER
    reserve_limit: int = DEFAULT_RESERVE_LIMIT

    def __post_init__(self) -> None:
        if not self.administrator:
            raise ValueError("administrator identity is required")
        if self.skill_rate <= 0:
            raise ValueError("skill_rate must be positive")
        if not 0 <= self.service_fee_percent <= 100:
            raise ValueError("service_fee_percent must be between 0 and 100")
        if self.max_skills_per_user <= 0:
            raise ValueError("max_skills_per_user must be positive")
        if self.reserve_limit < 0:
            raise ValueError("reserve_limit must not be negative")

    @classmethod
    def from_env(cls) -> MarketSettings:
        """Build settings from SKILLMARKET_* environment variables.

        Raises:
            ValueError: If SKILLMARKET_ADMIN is unset or a value is invalid
        """
        administrator = os.environ.get("SKILLMARKET_ADMIN", "").strip()
        if not administrator:
            raise ValueError("SKILLMARKET_ADMIN environment variable is required")

        return cls(
            administrator=administrator,
            skill_rate=_env_int("SKILLMARKET_SKILL_RATE", DEFAULT_SKILL_RATE),
            service_fee_percent=_env_int("SKILLMARKET_SERVICE_FEE", DEFAULT_SERVICE_FEE_PERCENT),
            max_skills_per_user=_env_int("SKILLMARKET_MAX_SKILLS_PER_USER", DEFAULT_MAX_SKILLS_PER_USER),
            reserve_limit=_env_int("SKILLMARKET_RESERVE_LIMIT", DEFAULT_RESERVE_LIMIT),
        )

    def parameters(self) -> MarketParameters:
        return MarketParameters(
            skill_rate=self.skill_rate,
            service_fee_percent=self.service_fee_percent,
            max_skills_per_user=self.max_skills_per_user,
            reserve_limit=self.reserve_limit,
        )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
