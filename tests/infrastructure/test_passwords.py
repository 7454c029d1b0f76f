"""Password hashing — format, verification, malformed input."""

import pytest

from invoicer.infrastructure.passwords import check_password_hash, generate_password_hash


def test_hash_round_trip():
    pwhash = generate_password_hash("123456", iterations=1000)
    assert pwhash.startswith("pbkdf2:sha256:1000$")
    assert check_password_hash(pwhash, "123456")
    assert not check_password_hash(pwhash, "654321")


def test_same_password_gets_distinct_salts():
    assert generate_password_hash("secret", iterations=1000) != generate_password_hash(
        "secret", iterations=1000,
    )


@pytest.mark.parametrize("pwhash", [
    "", "plain-text", "pbkdf2:sha256:abc$salt$digest", "pbkdf2:md5:1000$s$d",
    "pbkdf2:sha256:1000$only-two",
])
def test_malformed_hash_is_rejected(pwhash):
    assert check_password_hash(pwhash, "123456") is False


def test_empty_password_cannot_be_hashed():
    with pytest.raises(ValueError):
        generate_password_hash("")
