"""
pkg_token

Compact, self-contained security tokens: claim assembly, canonical
base64/JSON serialization, optional RS256 signing, and parsing with
signature and expiration checks.
"""

import logging

__version__ = "0.1.0"

from .domain.entities import Token, TokenConfig, default_config
from .domain.constants import Algorithm, Claim, PAYLOAD_CLAIM, TOKEN_TYPE
from .domain.exceptions import (
    TokenError,
    EncodeError,
    SignError,
    InvalidKeyError,
    DecodeError,
    InvalidTokenError,
    MalformedTokenError,
    InvalidPayloadError,
    SignatureVerificationError,
    ExpiredTokenError,
)
from .domain.value_objects import Header, JsonValue, WireToken
from .domain.ports import SegmentCodec, Signer, Verifier

from .application.use_cases.encode import EncodeTokenUseCase
from .application.use_cases.parse import ParseTokenUseCase

from .adapters.codec.base64_json import Base64JSONCodec
from .adapters.pyjwt.rsa import RS256Signer, RS256Verifier, load_private_key, load_public_key

from .integrations.common.token_factory import (
    TokenService,
    create_token_service,
    new,
    encode,
    parse,
    parse_full,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # domain core
    "Token",
    "TokenConfig",
    "default_config",
    "Algorithm",
    "Claim",
    "PAYLOAD_CLAIM",
    "TOKEN_TYPE",
    "Header",
    "JsonValue",
    "WireToken",
    "SegmentCodec",
    "Signer",
    "Verifier",
    # exceptions
    "TokenError",
    "EncodeError",
    "SignError",
    "InvalidKeyError",
    "DecodeError",
    "InvalidTokenError",
    "MalformedTokenError",
    "InvalidPayloadError",
    "SignatureVerificationError",
    "ExpiredTokenError",
    # use cases
    "EncodeTokenUseCase",
    "ParseTokenUseCase",
    # adapters
    "Base64JSONCodec",
    "RS256Signer",
    "RS256Verifier",
    "load_private_key",
    "load_public_key",
    # facade
    "TokenService",
    "create_token_service",
    "new",
    "encode",
    "parse",
    "parse_full",
]
