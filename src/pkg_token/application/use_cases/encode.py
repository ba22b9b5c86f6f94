from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ...domain.entities import Token
from ...domain.ports import SegmentCodec, Signer
from ...domain.value_objects import Header, WireToken

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EncodeTokenUseCase:
    """
    Application use case:
    - Build header + claim set from a Token
    - Encode both via the SegmentCodec port
    - Optionally sign them via the Signer port

    Holds no per-call state; safe to share between threads.
    """

    codec: SegmentCodec

    def execute(self, token: Token, signer: Optional[Signer] = None) -> str:
        """
        Serialize `token` into its wire form. Without a signer the token is
        unsigned (`alg=none`) and the signature segment is empty.

        Raises:
            EncodeError
            SignError
        """
        header = Header(alg=signer.algorithm) if signer is not None else Header()

        wire = WireToken(
            header_segment=self.codec.encode(header.to_dict()),
            claims_segment=self.codec.encode(token.claims()),
        )

        if signer is None:
            logger.debug("Encoded unsigned token with %d payload field(s)", len(token.payload))
            return str(wire)

        signature = signer.sign(wire.signing_input)
        wire = WireToken(
            header_segment=wire.header_segment,
            claims_segment=wire.claims_segment,
            signature_segment=self.codec.encode_bytes(signature),
        )
        logger.debug(
            "Encoded %s token with %d payload field(s)",
            header.alg.value,
            len(token.payload),
        )
        return str(wire)
