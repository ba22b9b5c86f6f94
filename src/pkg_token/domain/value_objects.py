# src/pkg_token/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Union

from .constants import INT32_MAX, INT32_MIN, TOKEN_TYPE, Algorithm
from .exceptions import MalformedTokenError


JsonValue = Union[str, int, float, bool, None, List["JsonValue"], Dict[str, "JsonValue"]]


def to_int32(value: int | float) -> int:
    """
    Truncate a number toward zero and wrap it into the signed 32-bit range.

    JSON numbers may come back as floats; temporal claims are always
    compared in the 32-bit domain they were emitted in.
    """
    n = int(value) & 0xFFFFFFFF
    return n - 0x100000000 if n > INT32_MAX else n


def is_int32(value: int) -> bool:
    return INT32_MIN <= value <= INT32_MAX


# --- Header ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Header:
    """
    Token header. `typ` is always the token-type marker; `alg` tells
    whether the token carries a signature.
    """
    alg: Algorithm = Algorithm.NONE
    typ: str = TOKEN_TYPE

    @property
    def is_signed(self) -> bool:
        return self.alg is not Algorithm.NONE

    def to_dict(self) -> Dict[str, str]:
        return {"typ": self.typ, "alg": self.alg.value}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Header":
        """
        Build a header from decoded JSON. Unknown algorithms raise ValueError.
        """
        return cls(
            alg=Algorithm(data.get("alg", Algorithm.NONE.value)),
            typ=str(data.get("typ", TOKEN_TYPE)),
        )


# --- Wire token -----------------------------------------------------------


@dataclass(frozen=True, slots=True)
class WireToken:
    """
    The three period-separated segments of a serialized token.

    Segments use the standard base64 alphabet, so `+`, `/` and `=` may
    appear; `.` never does.
    """
    header_segment: str
    claims_segment: str
    signature_segment: str = ""

    @classmethod
    def from_string(cls, token: str) -> "WireToken":
        if not isinstance(token, str) or token.count(".") != 2:
            raise MalformedTokenError("malformed token")
        header, claims, signature = token.split(".")
        return cls(header, claims, signature)

    @property
    def signing_input(self) -> bytes:
        return f"{self.header_segment}.{self.claims_segment}".encode("utf-8")

    @property
    def is_signed(self) -> bool:
        return bool(self.signature_segment)

    def __str__(self) -> str:
        return f"{self.header_segment}.{self.claims_segment}.{self.signature_segment}"
