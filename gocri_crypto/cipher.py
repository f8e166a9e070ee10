import logging
from typing import Sequence

from cryptography.hazmat.primitives.asymmetric import rsa, padding
from cryptography.hazmat.primitives import hashes

from .errors import EncryptionFailed, DecryptionFailed

# Pinned independently of __version__. Append the previous label to
# COMPATIBLE_LABELS when bumping LABEL_VERSION.
LABEL_VERSION = "0.0.1"


def label_for(version: str) -> bytes:
    return f"Encoded by Gocri(v{version}) RSA".encode('ascii')


LABEL = label_for(LABEL_VERSION)
COMPATIBLE_LABELS = (LABEL,)

_HASH_LEN = hashes.SHA256.digest_size

log = logging.getLogger(__name__)


def _oaep(label: bytes) -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=label,
    )


def max_plaintext_length(key) -> int:
    """Largest message OAEP/SHA-256 can carry under ``key`` (public or private)."""
    key_bytes = (key.key_size + 7) // 8
    return key_bytes - 2 * _HASH_LEN - 2


def encrypt(public_key: rsa.RSAPublicKey, data: bytes, label: bytes = LABEL) -> bytes:
    """RSA-OAEP encrypt ``data``; the result is exactly key_size/8 bytes long."""
    limit = max_plaintext_length(public_key)
    if len(data) > limit:
        raise EncryptionFailed(
            f"Failed to encode your file(s) by RSA: payload is {len(data)} bytes, "
            f"a {public_key.key_size}-bit key allows at most {limit}."
        )
    try:
        ciphertext = public_key.encrypt(data, _oaep(label))
    except ValueError as e:
        raise EncryptionFailed("Failed to encode your file(s) by RSA.") from e
    log.debug("Encrypted %d bytes into %d", len(data), len(ciphertext))
    return ciphertext


def decrypt(private_key: rsa.RSAPrivateKey, ciphertext: bytes,
            labels: Sequence[bytes] = COMPATIBLE_LABELS) -> bytes:
    """RSA-OAEP decrypt ``ciphertext`` trying each accepted label in turn.

    Every failure cause is reported as the same DecryptionFailed.
    """
    for label in labels:
        try:
            return private_key.decrypt(ciphertext, _oaep(label))
        except ValueError:
            continue
    raise DecryptionFailed()
