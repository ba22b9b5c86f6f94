import time

import pytest

import pkg_token
from pkg_token import (
    ExpiredTokenError,
    MalformedTokenError,
    SignError,
    SignatureVerificationError,
    Token,
    TokenConfig,
    create_token_service,
)
from pkg_token.domain.constants import DEFAULT_TTL_SECONDS


NOW = 1_700_000_000


def test_module_level_example():
    token = pkg_token.new(TokenConfig(audience="Merchants"))
    token.set("name", "Test")

    output = pkg_token.encode(token)
    assert output.count(".") == 2
    assert output.endswith(".")

    result = pkg_token.parse(output)
    assert result.payload["name"] == "Test"
    assert result.config is None


def test_module_level_default_config_expires_in_twelve_hours():
    before = int(time.time())
    token = pkg_token.new()
    assert before + DEFAULT_TTL_SECONDS <= token.config.expiration <= int(time.time()) + DEFAULT_TTL_SECONDS


def test_module_level_signed(private_key, public_key, other_private_key):
    token = pkg_token.new()
    token.set("name", "Test")

    output = pkg_token.encode(token, private_key)
    assert not output.endswith(".")
    assert pkg_token.parse(output, public_key).payload == {"name": "Test"}

    with pytest.raises(SignatureVerificationError):
        pkg_token.parse(output, other_private_key.public_key())


def test_module_level_pem_keys(private_pem, public_pem):
    token = pkg_token.new(TokenConfig(issuer="issuer"))
    output = pkg_token.encode(token, private_pem)
    result = pkg_token.parse_full(output, public_pem)
    assert result.config.issuer == "issuer"


def test_module_level_expiration():
    now = int(time.time())

    expired = pkg_token.new(TokenConfig(expiration=now - 3600))
    with pytest.raises(ExpiredTokenError):
        pkg_token.parse(pkg_token.encode(expired))

    fresh = pkg_token.new(TokenConfig(expiration=now + 3600))
    fresh.set("name", "Test")
    assert pkg_token.parse(pkg_token.encode(fresh)).payload == {"name": "Test"}


def test_module_level_sign_with_public_key_fails(public_key):
    with pytest.raises(SignError):
        pkg_token.encode(pkg_token.new(), public_key)


def test_service_round_trip(private_key, public_key):
    service = create_token_service(
        private_key=private_key,
        public_key=public_key,
        now=lambda: NOW,
    )

    token = service.new_token()
    assert token.config.expiration == NOW + DEFAULT_TTL_SECONDS
    token.set("roles", ["admin"])

    output = service.encode(token)
    assert service.parse(output).payload == {"roles": ["admin"]}

    full = service.parse_full(output)
    assert full.config == TokenConfig(expiration=NOW + DEFAULT_TTL_SECONDS)


def test_service_without_keys():
    service = create_token_service(now=lambda: NOW)
    token = service.new_token(TokenConfig(subject="user-1"))
    output = service.encode(token)

    assert output.endswith(".")
    assert service.parse_full(output).config == TokenConfig(subject="user-1")
    with pytest.raises(MalformedTokenError):
        service.parse("abc")


def test_service_verifier_only(private_key, other_private_key):
    issuer = create_token_service(private_key=private_key, now=lambda: NOW)
    relying_party = create_token_service(public_key=other_private_key.public_key(), now=lambda: NOW)

    output = issuer.encode(Token.new(TokenConfig()))
    with pytest.raises(SignatureVerificationError):
        relying_party.parse(output)


def test_service_clock_drives_expiration():
    service = create_token_service(now=lambda: NOW)
    output = service.encode(service.new_token(TokenConfig(expiration=NOW + 10)))
    assert service.parse(output).payload == {}

    later = create_token_service(now=lambda: NOW + 10)
    with pytest.raises(ExpiredTokenError):
        later.parse(output)
