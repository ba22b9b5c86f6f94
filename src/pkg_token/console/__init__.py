"""
pkg_token.console

Command-line helpers around the token core:

- TokenSettings: defaults for issuer / subject / audience / ttl and key paths.
- settings_from_env: build TokenSettings from TOKEN_* environment variables.
- main: `pkg-token encode` / `pkg-token decode` entry point.
"""

from __future__ import annotations

from .cli import main
from .env import settings_from_env
from .settings import TokenSettings

__all__ = [
    "TokenSettings",
    "settings_from_env",
    "main",
]
