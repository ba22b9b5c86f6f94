from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ...domain.constants import PAYLOAD_CLAIM, Claim
from ...domain.entities import Token, TokenConfig
from ...domain.exceptions import (
    DecodeError,
    ExpiredTokenError,
    InvalidPayloadError,
    SignatureVerificationError,
)
from ...domain.ports import SegmentCodec, Verifier
from ...domain.value_objects import Header, WireToken, to_int32

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ParseTokenUseCase:
    """
    Application use case:
    - Split the wire string into segments
    - Verify the signature via the Verifier port (when one is given)
    - Decode header + claims via the SegmentCodec port
    - Reject expired tokens

    Only `exp` is enforced; `nbf` and `iat` are carried but not checked,
    and audience/issuer checks are left to the caller.

    `now` returns the current time in seconds since epoch.
    """

    codec: SegmentCodec
    now: Callable[[], float] = field(default=time.time)

    def execute(self, token: str, verifier: Optional[Verifier] = None) -> Token:
        """
        Parse a wire token and return a Token holding only its payload.
        The returned token's `config` is None; use `execute_full` to also
        rebuild the standard claims.

        Raises:
            MalformedTokenError
            SignatureVerificationError
            InvalidPayloadError
            ExpiredTokenError
        """
        _, claims = self._decode(token, verifier)
        return Token(payload=self._extract_payload(claims))

    def execute_full(self, token: str, verifier: Optional[Verifier] = None) -> Token:
        """
        Same pipeline and errors as `execute`, but the returned Token also
        carries a TokenConfig rebuilt from `iss`, `sub`, `aud`, `exp`,
        `nbf` and `iat`.
        """
        _, claims = self._decode(token, verifier)
        return Token(
            config=TokenConfig.from_claims(claims),
            payload=self._extract_payload(claims),
        )

    # ------------------------------------------------------------------ #
    # Internal pipeline
    # ------------------------------------------------------------------ #

    def _decode(
            self,
            token: str,
            verifier: Optional[Verifier],
    ) -> Tuple[Optional[Header], Mapping[str, Any]]:
        wire = WireToken.from_string(token)

        if verifier is not None:
            self._verify(wire, verifier)

        header = self._decode_header(wire.header_segment, strict=verifier is not None)
        claims = self._decode_object(wire.claims_segment, "claims")
        self._check_expiration(claims)

        logger.debug("Parsed %s token", header.alg.value if header is not None else "unknown-alg")
        return header, claims

    def _verify(self, wire: WireToken, verifier: Verifier) -> None:
        try:
            signature = self.codec.decode_bytes(wire.signature_segment)
        except DecodeError as exc:
            logger.warning("Rejected token: signature segment is not valid base64")
            raise SignatureVerificationError("token signature verification failed") from exc

        if not signature or not verifier.verify(wire.signing_input, signature):
            logger.warning("Rejected token: signature verification failed")
            raise SignatureVerificationError("token signature verification failed")

    def _decode_object(self, segment: str, name: str) -> Dict[str, Any]:
        try:
            value = self.codec.decode(segment)
        except DecodeError as exc:
            raise InvalidPayloadError(f"token contains invalid JSON in {name} segment") from exc

        if not isinstance(value, dict):
            raise InvalidPayloadError(f"token {name} segment is not a JSON object")
        return value

    def _decode_header(self, segment: str, strict: bool) -> Optional[Header]:
        # Unverified tokens only need a JSON object header; an unknown `alg`
        # is rejected only when a signature is being checked.
        data = self._decode_object(segment, "header")
        try:
            return Header.from_mapping(data)
        except ValueError as exc:
            if not strict:
                logger.debug("Ignoring unrecognised token header: %s", exc)
                return None
            raise InvalidPayloadError(f"token header is invalid: {exc}") from exc

    def _check_expiration(self, claims: Mapping[str, Any]) -> None:
        exp = claims.get(Claim.EXPIRATION.value)
        if exp is None:
            return

        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidPayloadError(f"token expiration is not a number: {exp!r}")
        if isinstance(exp, float) and not math.isfinite(exp):
            raise InvalidPayloadError(f"token expiration is out of range: {exp!r}")

        if to_int32(exp) <= to_int32(self.now()):
            logger.warning("Rejected token: expired")
            raise ExpiredTokenError("token has expired")

    def _extract_payload(self, claims: Mapping[str, Any]) -> Dict[str, Any]:
        payload = claims.get(PAYLOAD_CLAIM)
        if not isinstance(payload, dict):
            raise InvalidPayloadError(f"token claims do not contain a `{PAYLOAD_CLAIM}` object")
        return payload
