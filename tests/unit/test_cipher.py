import os

import pytest

from gocri_crypto.cipher import (
    encrypt,
    decrypt,
    max_plaintext_length,
    label_for,
    LABEL,
    COMPATIBLE_LABELS,
)
from gocri_crypto.errors import EncryptionFailed, DecryptionFailed


def test_label_is_version_tagged():
    assert LABEL == b"Encoded by Gocri(v0.0.1) RSA"
    assert LABEL in COMPATIBLE_LABELS


def test_max_plaintext_length_2048(rsa_key):
    assert max_plaintext_length(rsa_key.public_key()) == 190
    assert max_plaintext_length(rsa_key) == 190


def test_roundtrip(rsa_key):
    ciphertext = encrypt(rsa_key.public_key(), b"secret")
    assert len(ciphertext) == 256
    assert decrypt(rsa_key, ciphertext) == b"secret"


def test_encryption_is_randomised(rsa_key):
    pub = rsa_key.public_key()
    assert encrypt(pub, b"same") != encrypt(pub, b"same")


def test_exact_limit_is_accepted(rsa_key):
    data = os.urandom(190)
    assert decrypt(rsa_key, encrypt(rsa_key.public_key(), data)) == data


def test_over_limit_fails(rsa_key):
    with pytest.raises(EncryptionFailed, match="at most 190"):
        encrypt(rsa_key.public_key(), b"x" * 191)


def test_wrong_key_fails(rsa_key, other_rsa_key):
    ciphertext = encrypt(rsa_key.public_key(), b"secret")
    with pytest.raises(DecryptionFailed):
        decrypt(other_rsa_key, ciphertext)


def test_label_mismatch_fails(rsa_key):
    ciphertext = encrypt(rsa_key.public_key(), b"secret", label=label_for("9.9.9"))
    with pytest.raises(DecryptionFailed):
        decrypt(rsa_key, ciphertext)
    assert decrypt(rsa_key, ciphertext, labels=(LABEL, label_for("9.9.9"))) == b"secret"


@pytest.mark.parametrize("mangle", [
    lambda c: c[:-1],
    lambda c: c + b"\x00",
    lambda c: bytes([c[0] ^ 0x01]) + c[1:],
    lambda c: b"",
])
def test_corrupted_ciphertext_fails_with_same_error(rsa_key, mangle):
    ciphertext = encrypt(rsa_key.public_key(), b"secret")
    with pytest.raises(DecryptionFailed) as exc:
        decrypt(rsa_key, mangle(ciphertext))
    assert str(exc.value) == str(DecryptionFailed())
