"""Tests for password hashing and token helpers."""

import pytest

from utils.passwords import hash_password, is_too_long, verify_password
from utils.tokens import issue_verification_token


def test_hash_and_verify_round():
    hashed = hash_password("s3cret", rounds=4)

    assert verify_password("s3cret", hashed) is True
    assert verify_password("S3cret", hashed) is False


def test_hashes_are_salted():
    assert hash_password("same", rounds=4) != hash_password("same", rounds=4)


def test_empty_password_rejected():
    with pytest.raises(ValueError):
        hash_password("")


@pytest.mark.parametrize("hashed", [None, "", "not-a-bcrypt-hash"])
def test_verify_tolerates_bad_hashes(hashed):
    assert verify_password("anything", hashed) is False


def test_length_limit_is_in_bytes():
    assert is_too_long("a" * 73) is True
    assert is_too_long("a" * 72) is False
    assert is_too_long("é" * 37) is True


def test_verification_tokens_are_256_bit_hex():
    tokens = {issue_verification_token() for _ in range(50)}

    assert len(tokens) == 50
    for token in tokens:
        assert len(token) == 64
        int(token, 16)
