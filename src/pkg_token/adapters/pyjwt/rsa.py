import logging
from typing import Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey
from jwt.algorithms import RSAAlgorithm
from jwt.exceptions import InvalidKeyError as JWTInvalidKeyError

from ...domain.constants import Algorithm
from ...domain.exceptions import InvalidKeyError, SignError
from ...domain.ports import Signer, Verifier

logger = logging.getLogger(__name__)

PrivateKeyLike = Union[RSAPrivateKey, str, bytes]
PublicKeyLike = Union[RSAPublicKey, RSAPrivateKey, str, bytes]

_RS256 = RSAAlgorithm(RSAAlgorithm.SHA256)


def load_private_key(pem: Union[str, bytes], password: Optional[bytes] = None) -> RSAPrivateKey:
    """
    Load an RSA private key from PEM text.

    Raises:
        InvalidKeyError
    """
    data = pem.encode("utf-8") if isinstance(pem, str) else pem
    try:
        key = serialization.load_pem_private_key(data, password=password)
    except (TypeError, ValueError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError(f"Could not load private key: {exc}") from exc

    if not isinstance(key, RSAPrivateKey):
        raise InvalidKeyError(f"Expected an RSA private key, got {type(key).__name__}")
    return key


def load_public_key(pem: Union[str, bytes]) -> RSAPublicKey:
    """
    Load an RSA public key from PEM text (SubjectPublicKeyInfo or PKCS#1).
    A private key PEM yields its public half.

    Raises:
        InvalidKeyError
    """
    try:
        key = _RS256.prepare_key(pem)
    except (JWTInvalidKeyError, TypeError, ValueError, UnsupportedAlgorithm) as exc:
        raise InvalidKeyError(f"Could not load public key: {exc}") from exc

    if isinstance(key, RSAPrivateKey):
        key = key.public_key()
    if not isinstance(key, RSAPublicKey):
        raise InvalidKeyError(f"Expected an RSA public key, got {type(key).__name__}")
    return key


class RS256Signer(Signer):
    """
    Adapter implementing the Signer port with PyJWT's RSA algorithm:
    RSA PKCS#1 v1.5 over a SHA-256 digest of the signing input.

    The key is read-only; one instance can be shared between threads.
    """

    algorithm = Algorithm.RS256

    def __init__(self, private_key: PrivateKeyLike) -> None:
        if isinstance(private_key, (str, bytes)):
            private_key = load_private_key(private_key)
        if not isinstance(private_key, RSAPrivateKey):
            raise SignError(
                f"RS256 signing requires an RSA private key, got {type(private_key).__name__}"
            )
        self._key = private_key

    def sign(self, signing_input: bytes) -> bytes:
        try:
            return _RS256.sign(signing_input, self._key)
        except (TypeError, ValueError) as exc:
            raise SignError(f"Could not sign token: {exc}") from exc


class RS256Verifier(Verifier):
    """
    Adapter implementing the Verifier port with PyJWT's RSA algorithm.

    A private key is accepted too; its public half is used.
    """

    algorithm = Algorithm.RS256

    def __init__(self, public_key: PublicKeyLike) -> None:
        if isinstance(public_key, (str, bytes)):
            public_key = load_public_key(public_key)
        if isinstance(public_key, RSAPrivateKey):
            public_key = public_key.public_key()
        if not isinstance(public_key, RSAPublicKey):
            raise InvalidKeyError(
                f"RS256 verification requires an RSA public key, got {type(public_key).__name__}"
            )
        self._key = public_key

    def verify(self, signing_input: bytes, signature: bytes) -> bool:
        ok = _RS256.verify(signing_input, self._key, signature)
        if not ok:
            logger.debug("RS256 signature did not match (%d signature bytes)", len(signature))
        return ok
