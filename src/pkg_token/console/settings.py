from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from ..domain.constants import DEFAULT_TTL_SECONDS
from ..domain.entities import TokenConfig
from ..domain.value_objects import to_int32


@dataclass(slots=True)
class TokenSettings:
    """
    Defaults for the `pkg-token` console tool.

    Host code decides how to construct this (env, CLI flags, etc.).
    """
    issuer: Optional[str] = None
    subject: Optional[str] = None
    audience: Optional[str] = None
    ttl_seconds: int = DEFAULT_TTL_SECONDS

    private_key_path: Optional[str] = None
    public_key_path: Optional[str] = None

    log_level: str = "WARNING"

    def to_config(self, now: Optional[float] = None) -> TokenConfig:
        """
        TokenConfig issued at `now`. A ttl <= 0 leaves the expiration unset.
        """
        issued_at = to_int32(time.time() if now is None else now)
        return TokenConfig(
            issuer=self.issuer or None,
            subject=self.subject or None,
            audience=self.audience or None,
            expiration=issued_at + self.ttl_seconds if self.ttl_seconds > 0 else None,
            issued_at=issued_at,
        )
