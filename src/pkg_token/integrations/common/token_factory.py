from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from ...adapters.codec.base64_json import Base64JSONCodec
from ...adapters.pyjwt.rsa import PrivateKeyLike, PublicKeyLike, RS256Signer, RS256Verifier
from ...application.use_cases.encode import EncodeTokenUseCase
from ...application.use_cases.parse import ParseTokenUseCase
from ...domain.entities import Token, TokenConfig, default_config
from ...domain.ports import SegmentCodec, Signer, Verifier


@dataclass(slots=True)
class TokenService:
    """
    Framework-agnostic token facade.

    Bundles the encode / parse use cases with an optional signer and
    verifier, so host code only deals with Tokens and wire strings.
    """

    encode_use_case: EncodeTokenUseCase
    parse_use_case: ParseTokenUseCase
    signer: Optional[Signer] = None
    verifier: Optional[Verifier] = None

    # --- Core operations --------------------------------------------------

    def new_token(self, config: Optional[TokenConfig] = None) -> Token:
        """New token with an empty payload; defaults to a 12-hour expiry."""
        if config is None:
            config = default_config(self.parse_use_case.now())
        return Token.new(config)

    def encode(self, token: Token) -> str:
        """Token -> wire string, signed when a signer is bound."""
        return self.encode_use_case.execute(token, self.signer)

    def parse(self, token: str) -> Token:
        """Wire string -> Token (payload only), verified when a verifier is bound."""
        return self.parse_use_case.execute(token, self.verifier)

    def parse_full(self, token: str) -> Token:
        """Wire string -> Token with payload and rebuilt standard claims."""
        return self.parse_use_case.execute_full(token, self.verifier)


def create_token_service(
        *,
        private_key: PrivateKeyLike | None = None,
        public_key: PublicKeyLike | None = None,
        now: Callable[[], float] | None = None,
        codec: SegmentCodec | None = None,
) -> TokenService:
    """
    High-level factory: keys -> TokenService.

    - builds the base64/JSON codec
    - wraps the keys (objects or PEM) in RS256 signer / verifier adapters
    - wires EncodeTokenUseCase + ParseTokenUseCase
    """
    codec = codec or Base64JSONCodec()

    return TokenService(
        encode_use_case=EncodeTokenUseCase(codec=codec),
        parse_use_case=ParseTokenUseCase(codec=codec, now=now or time.time),
        signer=RS256Signer(private_key) if private_key is not None else None,
        verifier=RS256Verifier(public_key) if public_key is not None else None,
    )


# --- Module-level helpers, keys passed per call ---------------------------

_codec = Base64JSONCodec()
_encoder = EncodeTokenUseCase(codec=_codec)
_parser = ParseTokenUseCase(codec=_codec)


def new(config: Optional[TokenConfig] = None) -> Token:
    return Token.new(config if config is not None else default_config())


def encode(token: Token, private_key: PrivateKeyLike | None = None) -> str:
    """
    Encode `token`; with a private key it is signed with RS256, without one
    it is unsigned and ends with an empty signature segment.
    """
    signer = RS256Signer(private_key) if private_key is not None else None
    return _encoder.execute(token, signer)


def parse(token: str, public_key: PublicKeyLike | None = None) -> Token:
    """
    Parse `token`, verifying it when a public key is given. Only the
    payload survives; the returned token's `config` is None.
    """
    verifier = RS256Verifier(public_key) if public_key is not None else None
    return _parser.execute(token, verifier)


def parse_full(token: str, public_key: PublicKeyLike | None = None) -> Token:
    """Like `parse`, but also rebuilds the token's standard claims."""
    verifier = RS256Verifier(public_key) if public_key is not None else None
    return _parser.execute_full(token, verifier)
