# src/pkg_token/console/cli.py

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from ..adapters.pyjwt.rsa import load_private_key, load_public_key
from ..domain.exceptions import TokenError
from ..integrations.common.token_factory import create_token_service
from .env import settings_from_env
from .settings import TokenSettings

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-token",
        description="Encode and decode compact, optionally RS256-signed tokens",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (default from env TOKEN_LOG_LEVEL, else WARNING).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="Build a token and print its wire form.")
    enc.add_argument("--issuer", help="`iss` claim (default from env TOKEN_ISSUER).")
    enc.add_argument("--subject", help="`sub` claim (default from env TOKEN_SUBJECT).")
    enc.add_argument("--audience", help="`aud` claim (default from env TOKEN_AUDIENCE).")
    enc.add_argument(
        "--ttl",
        type=int,
        help="Seconds until expiration; 0 disables `exp` "
             "(default from env TOKEN_TTL_SECONDS, else 12 hours).",
    )
    enc.add_argument(
        "--private-key",
        help="PEM file used to sign the token with RS256 "
             "(default from env TOKEN_PRIVATE_KEY_PATH; unsigned if absent).",
    )
    enc.add_argument(
        "--set",
        "-s",
        dest="fields",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Payload field; VALUE is parsed as JSON, else kept as a string. Repeatable.",
    )

    dec = sub.add_parser("decode", help="Parse a token and print its payload.")
    dec.add_argument("token", help="Wire token, or '-' to read it from stdin.")
    dec.add_argument(
        "--public-key",
        help="PEM file used to verify the signature "
             "(default from env TOKEN_PUBLIC_KEY_PATH; unverified if absent).",
    )
    dec.add_argument(
        "--full",
        action="store_true",
        help="Also print the standard claims (iss, sub, aud, exp, nbf, iat).",
    )

    return parser.parse_args(args=argv)


def _parse_field(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise ValueError(f"Expected KEY=VALUE, got {raw!r}")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


def _read(path: str) -> bytes:
    with open(path, "rb") as fh:
        return fh.read()


def _merge(settings: TokenSettings, args: argparse.Namespace) -> TokenSettings:
    for name in ("issuer", "subject", "audience"):
        value = getattr(args, name, None)
        if value is not None:
            setattr(settings, name, value)
    if getattr(args, "ttl", None) is not None:
        settings.ttl_seconds = args.ttl
    if getattr(args, "private_key", None):
        settings.private_key_path = args.private_key
    if getattr(args, "public_key", None):
        settings.public_key_path = args.public_key
    if args.log_level:
        settings.log_level = args.log_level.upper()
    return settings


def _encode(settings: TokenSettings, args: argparse.Namespace) -> dict[str, Any]:
    private_key = None
    if settings.private_key_path:
        private_key = load_private_key(_read(settings.private_key_path))

    service = create_token_service(private_key=private_key)
    token = service.new_token(settings.to_config())
    for raw in args.fields:
        key, value = _parse_field(raw)
        token.set(key, value)

    return {"token": service.encode(token), "signed": private_key is not None}


def _decode(settings: TokenSettings, args: argparse.Namespace) -> dict[str, Any]:
    public_key = None
    if settings.public_key_path:
        public_key = load_public_key(_read(settings.public_key_path))

    wire = sys.stdin.read().strip() if args.token == "-" else args.token
    service = create_token_service(public_key=public_key)

    if args.full:
        token = service.parse_full(wire)
        return {
            "payload": token.payload,
            "claims": token.config.to_claims(),
            "verified": public_key is not None,
        }

    token = service.parse(wire)
    return {"payload": token.payload, "verified": public_key is not None}


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)

    try:
        settings = _merge(settings_from_env(), args)
        logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

        run = _encode if args.command == "encode" else _decode
        summary = run(settings, args)
        json.dump({"ok": True, **summary}, sys.stdout, indent=2)
        sys.stdout.write("\n")
    except (TokenError, RuntimeError, OSError, ValueError) as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        json.dump(
            {"ok": False, "error": str(exc), "kind": type(exc).__name__},
            sys.stdout,
            indent=2,
        )
        sys.stdout.write("\n")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
