"""Password hashing — salted, verifiable, never plaintext."""

from taskboard.infrastructure.passwords import hash_password, verify_password


def test_hash_is_not_plaintext_and_is_salted():
    first = hash_password("secret")
    second = hash_password("secret")
    assert "secret" not in first
    assert first != second


def test_verify_password():
    hashed = hash_password("secret")
    assert verify_password("secret", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_malformed_hash_does_not_verify():
    assert verify_password("secret", "not-a-hash") is False
    assert verify_password("secret", "secret") is False
