class TokenError(Exception):
    """Base class for every error raised by pkg_token."""
    pass


class EncodeError(TokenError):
    """Raised when the claim set or payload cannot be serialized."""
    pass


class SignError(TokenError):
    """Raised when a signature cannot be produced."""
    pass


class InvalidKeyError(TokenError):
    """Raised when key material cannot be loaded or used."""
    pass


class DecodeError(TokenError):
    """Raised when a segment is not valid base64 or JSON."""
    pass


class InvalidTokenError(TokenError):
    """Raised when token is malformed or invalid."""
    pass


class MalformedTokenError(InvalidTokenError):
    """Raised when token does not have exactly three segments."""
    pass


class InvalidPayloadError(InvalidTokenError, DecodeError):
    """Raised when the header or claims segment cannot be decoded."""
    pass


class SignatureVerificationError(TokenError):
    """Raised when the token signature does not match the verification key."""
    pass


class ExpiredTokenError(TokenError):
    """Raised when token has expired."""
    pass
