from __future__ import annotations

import os

from ..domain.constants import DEFAULT_TTL_SECONDS
from .settings import TokenSettings


def settings_from_env() -> TokenSettings:
    def _int(key: str, default: int) -> int:
        raw = os.getenv(key)
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise RuntimeError(f"Invalid integer for {key}: {raw!r}") from exc

    def _str(key: str) -> str | None:
        raw = os.getenv(key)
        return raw.strip() if raw and raw.strip() else None

    return TokenSettings(
        issuer=_str("TOKEN_ISSUER"),
        subject=_str("TOKEN_SUBJECT"),
        audience=_str("TOKEN_AUDIENCE"),
        ttl_seconds=_int("TOKEN_TTL_SECONDS", DEFAULT_TTL_SECONDS),
        private_key_path=_str("TOKEN_PRIVATE_KEY_PATH"),
        public_key_path=_str("TOKEN_PUBLIC_KEY_PATH"),
        log_level=(_str("TOKEN_LOG_LEVEL") or "WARNING").upper(),
    )
