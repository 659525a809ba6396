from datetime import timedelta

import jwt
import pytest

from errors import InvalidToken
from security import TokenIssuer, hash_password, verify_password


def test_hash_is_salted_and_verifies():
    first = hash_password("correct horse")
    second = hash_password("correct horse")

    assert first != second
    assert first != "correct horse"
    assert verify_password("correct horse", first)
    assert not verify_password("wrong horse", first)


def test_verify_rejects_garbage_hash():
    assert not verify_password("anything", "not-a-hash")


def test_access_token_round_trip(issuer):
    token = issuer.issue_access_token("ada@example.com")
    assert issuer.validate_access_token(token) == "ada@example.com"


def test_access_token_carries_subject_and_expiry(issuer):
    token = issuer.issue_access_token("ada@example.com")
    claims = jwt.decode(token, options={"verify_signature": False})

    assert claims["sub"] == "ada@example.com"
    assert claims["exp"] > claims["iat"]


def test_expired_token_is_rejected():
    issuer = TokenIssuer("unit-test-secret-key-with-enough-length", access_ttl=timedelta(seconds=-5))
    token = issuer.issue_access_token("ada@example.com")

    with pytest.raises(InvalidToken):
        issuer.validate_access_token(token)


def test_token_signed_with_other_secret_is_rejected(issuer):
    other = TokenIssuer("some-other-secret-key-with-enough-length")
    token = other.issue_access_token("ada@example.com")

    with pytest.raises(InvalidToken):
        issuer.validate_access_token(token)


def test_malformed_token_is_rejected(issuer):
    with pytest.raises(InvalidToken):
        issuer.validate_access_token("not.a.jwt")


def test_token_without_subject_is_rejected(issuer):
    token = jwt.encode({"exp": 4102444800}, issuer.secret_key, algorithm="HS256")

    with pytest.raises(InvalidToken):
        issuer.validate_access_token(token)


def test_refresh_tokens_are_random(issuer):
    tokens = {issuer.issue_refresh_token() for _ in range(20)}

    assert len(tokens) == 20
    assert all(len(t) >= 32 for t in tokens)
