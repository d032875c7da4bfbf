"""Password Hasher — SHA-256, uppercase hex, stable."""

from courier.core.password import Sha256Hasher


def test_hash_is_uppercase_sha256_hex():
    digest = Sha256Hasher().hash("password")
    assert digest == (
        "5E884898DA28047151D0E56F8DC6292773603D0D6AABBDD62A11EF721D1542D8"
    )


def test_hash_is_stable_across_instances():
    assert Sha256Hasher().hash("pw") == Sha256Hasher().hash("pw")


def test_different_secrets_have_different_digests():
    hasher = Sha256Hasher()
    assert hasher.hash("pw") != hasher.hash("pw ")


def test_hash_handles_non_ascii():
    digest = Sha256Hasher().hash("contraseña")
    assert len(digest) == 64
    assert digest == digest.upper()
