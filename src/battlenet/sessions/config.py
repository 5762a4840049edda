"""Session registry settings."""

from __future__ import annotations

import os
from typing import Any, Dict

from pydantic import BaseModel, Field


class RegistryConfig(BaseModel):
    """How long idle games live and what new players are called."""

    session_ttl_seconds: float | None = Field(default=None, gt=0)
    player1_name: str = "player1"
    player2_name: str = "player2"

    @classmethod
    def from_env(cls, **overrides: Any) -> "RegistryConfig":
        """Construct config from ``BATTLENET_*`` env vars."""
        data: Dict[str, Any] = {}
        ttl = os.getenv("BATTLENET_SESSION_TTL_SECONDS")
        if ttl and ttl.strip():
            data["session_ttl_seconds"] = ttl.strip()
        for key, env_name in (
            ("player1_name", "BATTLENET_PLAYER1_NAME"),
            ("player2_name", "BATTLENET_PLAYER2_NAME"),
        ):
            value = os.getenv(env_name)
            if value:
                data[key] = value
        data.update(overrides)
        return cls(**data)
