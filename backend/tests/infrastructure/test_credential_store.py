"""Credential Store — bcrypt hashing and verification.

Tests cover:
    - digest is not the plaintext and verifies against it
    - wrong password fails
    - unusable digest or over-long input returns False instead of raising
"""

import pytest

from app.infrastructure.credential_store import CredentialStore


@pytest.fixture
def store():
    return CredentialStore(rounds=4)


def test_hash_is_not_plaintext(store):
    digest = store.hash("hunter22")
    assert digest != "hunter22"
    assert digest.startswith("$2")


def test_verify_accepts_matching_password(store):
    assert store.verify("hunter22", store.hash("hunter22"))


def test_verify_rejects_wrong_password(store):
    assert not store.verify("hunter23", store.hash("hunter22"))


def test_same_password_hashes_differently(store):
    assert store.hash("hunter22") != store.hash("hunter22")


def test_malformed_digest_is_a_mismatch(store):
    assert store.verify("hunter22", "not-a-bcrypt-digest") is False


def test_multibyte_password_within_limit_round_trips(store):
    password = "é" * 36
    assert store.verify(password, store.hash(password))


def test_verify_rejects_input_over_72_bytes(store):
    digest = store.hash("a" * 72)
    assert store.verify("a" * 73, digest) is False
