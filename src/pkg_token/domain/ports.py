from __future__ import annotations

from typing import Protocol

from .constants import Algorithm
from .value_objects import JsonValue


class SegmentCodec(Protocol):
    """
    Port for turning claim structures into wire segments and back.

    Implementations live in the adapters layer (e.g. base64 + JSON codec).
    """

    def encode(self, value: JsonValue) -> str:
        """
        Serialize a JSON-representable value into a segment.

        Raises:
          - EncodeError
        """
        ...

    def decode(self, segment: str) -> JsonValue:
        """
        Parse a segment back into a JSON value.

        Raises:
          - DecodeError
        """
        ...

    def encode_bytes(self, raw: bytes) -> str:
        ...

    def decode_bytes(self, segment: str) -> bytes:
        ...


class Signer(Protocol):
    """Port for producing a signature over the signing input."""

    algorithm: Algorithm

    def sign(self, signing_input: bytes) -> bytes:
        """
        Raises:
          - SignError
        """
        ...


class Verifier(Protocol):
    """Port for checking a signature against the signing input."""

    algorithm: Algorithm

    def verify(self, signing_input: bytes, signature: bytes) -> bool:
        """Return True only if `signature` authenticates `signing_input`."""
        ...
