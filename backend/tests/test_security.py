"""Password hashing, token and bearer-header tests."""
from datetime import timedelta

import pytest
from jose import jwt

from book_catalog.core.exceptions import AuthenticationError
from book_catalog.core.security import PasswordHasher, TokenService, authenticate_headers


def test_hash_uses_fresh_salt(hasher: PasswordHasher):
    first = hasher.hash("password123")
    second = hasher.hash("password123")

    assert first != second
    assert hasher.verify("password123", first)
    assert hasher.verify("password123", second)


def test_hash_is_self_describing(hasher: PasswordHasher):
    hashed = hasher.hash("secret")
    assert hashed.startswith("$2b$10$")


def test_wrong_password_does_not_verify(hasher: PasswordHasher):
    hashed = hasher.hash("password123")
    assert not hasher.verify("wrongpassword", hashed)


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$2b$10$short"])
def test_malformed_hash_fails_closed(hasher: PasswordHasher, bad_hash: str):
    assert hasher.verify("password123", bad_hash) is False


def test_token_resolves_to_its_subject(tokens: TokenService):
    token_a = tokens.create_access_token("user-a")
    token_b = tokens.create_access_token("user-b")

    assert tokens.decode_token(token_a) == "user-a"
    assert tokens.decode_token(token_b) == "user-b"


def test_token_carries_issue_and_expiry(tokens: TokenService):
    token = tokens.create_access_token("user-a")
    claims = jwt.get_unverified_claims(token)

    assert claims["sub"] == "user-a"
    assert claims["exp"] - claims["iat"] == 3600


def test_expired_token_is_invalid(tokens: TokenService):
    token = tokens.create_access_token("user-a", expires_delta=timedelta(seconds=-5))
    assert tokens.decode_token(token) is None


def test_token_signed_with_other_secret_is_invalid(tokens: TokenService):
    forged = TokenService("another-secret").create_access_token("user-a")
    assert tokens.decode_token(forged) is None


def test_tampered_token_is_invalid(tokens: TokenService):
    token = tokens.create_access_token("user-a")
    header, payload, signature = token.split(".")
    other_payload = TokenService("x").create_access_token("user-b").split(".")[1]

    assert tokens.decode_token(f"{header}.{other_payload}.{signature}") is None


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c"])
def test_malformed_token_is_invalid(tokens: TokenService, garbage: str):
    assert tokens.decode_token(garbage) is None


def test_token_service_refuses_empty_secret():
    with pytest.raises(ValueError):
        TokenService("")


def test_authenticate_headers_accepts_bearer(tokens: TokenService):
    token = tokens.create_access_token("user-a")
    assert authenticate_headers({"Authorization": f"Bearer {token}"}, tokens) == "user-a"


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": ""},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer "},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Bearer a b"},
        {"Authorization": "bearer abc.def.ghi"},
        {"Authorization": "BEARER abc.def.ghi"},
    ],
)
def test_authenticate_headers_requires_bearer(tokens: TokenService, headers: dict):
    with pytest.raises(AuthenticationError) as exc_info:
        authenticate_headers(headers, tokens)
    assert exc_info.value.message == "No token provided"


def test_authenticate_headers_rejects_invalid_token(tokens: TokenService):
    with pytest.raises(AuthenticationError) as exc_info:
        authenticate_headers({"Authorization": "Bearer not.a.token"}, tokens)
    assert exc_info.value.message == "Invalid token"
