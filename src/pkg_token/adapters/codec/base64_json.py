import base64
import binascii
import json
import math
from typing import Any

from ...domain.exceptions import DecodeError, EncodeError
from ...domain.ports import SegmentCodec
from ...domain.value_objects import JsonValue


def _reject_constant(name: str) -> Any:
    # json.loads accepts NaN / Infinity by default; they are not JSON.
    raise ValueError(f"Invalid JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    # 1e400 parses to inf, which is not a usable JSON number.
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


class Base64JSONCodec(SegmentCodec):
    """
    Adapter implementing the SegmentCodec port with canonical JSON and the
    standard base64 alphabet.

    Canonical JSON: compact separators, sorted keys, ASCII-only output.
    The standard alphabet may produce `+`, `/` and `=`, never `.`.
    """

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def encode(self, value: JsonValue) -> str:
        try:
            text = json.dumps(
                value,
                separators=(",", ":"),
                sort_keys=True,
                ensure_ascii=True,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise EncodeError(f"Value is not JSON serializable: {exc}") from exc

        return self.encode_bytes(text.encode("ascii"))

    def decode(self, segment: str) -> JsonValue:
        raw = self.decode_bytes(segment)
        try:
            return json.loads(
                raw.decode("utf-8"),
                parse_constant=_reject_constant,
                parse_float=_parse_finite_float,
            )
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise DecodeError(f"Segment contains invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise DecodeError("Segment JSON is nested too deeply") from exc

    def encode_bytes(self, raw: bytes) -> str:
        return base64.b64encode(raw).decode("ascii")

    def decode_bytes(self, segment: str) -> bytes:
        try:
            return base64.b64decode(segment, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"Segment is not valid base64: {exc}") from exc
