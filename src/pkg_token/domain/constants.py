from enum import Enum


class Claim(Enum):
    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    EXPIRATION = "exp"
    NOT_BEFORE = "nbf"
    ISSUED_AT = "iat"


class Algorithm(Enum):
    NONE = "none"
    RS256 = "RS256"


TOKEN_TYPE = "jwt"

# Application claims live under this key, never next to the standard claims.
PAYLOAD_CLAIM = "payload"

DEFAULT_TTL_SECONDS = 12 * 60 * 60

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
