from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .constants import DEFAULT_TTL_SECONDS, PAYLOAD_CLAIM, Claim
from .value_objects import JsonValue, is_int32, to_int32


_TEXT_FIELDS = (
    ("issuer", Claim.ISSUER),
    ("subject", Claim.SUBJECT),
    ("audience", Claim.AUDIENCE),
)

_TIME_FIELDS = (
    ("expiration", Claim.EXPIRATION),
    ("not_before", Claim.NOT_BEFORE),
    ("issued_at", Claim.ISSUED_AT),
)


@dataclass(slots=True)
class TokenConfig:
    """
    Standard claims of a token.

    Every field is optional. Text fields count as unset when None or empty;
    temporal fields (seconds since epoch, signed 32-bit) count as unset when
    None or <= 0, so an expiration of 0 is the same as no expiration.
    """
    issuer: Optional[str] = None
    subject: Optional[str] = None
    audience: Optional[str] = None

    expiration: Optional[int] = None
    not_before: Optional[int] = None
    issued_at: Optional[int] = None

    def __post_init__(self) -> None:
        for name, _ in _TIME_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer number of seconds: {value!r}")
            if not is_int32(value):
                raise ValueError(f"{name} does not fit in a signed 32-bit integer: {value!r}")

    def to_claims(self) -> Dict[str, Any]:
        """Standard claims for the fields that are set, keyed by short name."""
        claims: Dict[str, Any] = {}

        for name, claim in _TEXT_FIELDS:
            value = getattr(self, name)
            if value:
                claims[claim.value] = value

        for name, claim in _TIME_FIELDS:
            value = getattr(self, name)
            if value is not None and value > 0:
                claims[claim.value] = value

        return claims

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "TokenConfig":
        """
        Rebuild a config from a decoded claim set. Numeric claims are
        truncated into the 32-bit domain; claims of the wrong type are
        ignored.
        """
        kwargs: Dict[str, Any] = {}

        for name, claim in _TEXT_FIELDS:
            value = claims.get(claim.value)
            if isinstance(value, str):
                kwargs[name] = value

        for name, claim in _TIME_FIELDS:
            value = claims.get(claim.value)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            if isinstance(value, float) and not math.isfinite(value):
                continue
            kwargs[name] = to_int32(value)

        return cls(**kwargs)


def default_config(now: Optional[float] = None) -> TokenConfig:
    """Minimal working claims setup with a 12-hour expiration."""
    if now is None:
        now = time.time()
    return TokenConfig(expiration=to_int32(now + DEFAULT_TTL_SECONDS))


@dataclass(slots=True)
class Token:
    """
    A token before serialization or after parsing.

    `config` is present on freshly built tokens; the payload-only parse
    leaves it as None.
    """
    config: Optional[TokenConfig] = None
    payload: Dict[str, JsonValue] = field(default_factory=dict)

    @classmethod
    def new(cls, config: Optional[TokenConfig] = None) -> "Token":
        return cls(config=config, payload={})

    def set(self, key: str, value: JsonValue) -> None:
        """
        Set a property within the custom `payload` claim, e.g. permissions
        or other metadata.
        """
        self.payload[key] = value

    def get(self, key: str, default: JsonValue = None) -> JsonValue:
        return self.payload.get(key, default)

    def claims(self) -> Dict[str, Any]:
        """Full claim set as it will be serialized."""
        claims = self.config.to_claims() if self.config is not None else {}
        claims[PAYLOAD_CLAIM] = self.payload
        return claims
