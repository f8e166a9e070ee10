import os
import sys

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives import serialization


def pytest_configure():
    # Ensure the repo root is importable for `gocri` / `gocri_crypto`
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    if root not in sys.path:
        sys.path.insert(0, root)


def _pem_pair(key):
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def pem_pair(rsa_key):
    """(private_pem, public_pem) for the session 2048-bit key."""
    return _pem_pair(rsa_key)


@pytest.fixture(scope="session")
def other_pem_pair(other_rsa_key):
    return _pem_pair(other_rsa_key)


@pytest.fixture
def key_files(tmp_path, pem_pair):
    """Write the session keypair to disk; returns (private_path, public_path)."""
    private_pem, public_pem = pem_pair
    priv = tmp_path / "id_rsa"
    pub = tmp_path / "id_rsa.pub"
    priv.write_bytes(private_pem)
    pub.write_bytes(public_pem)
    return str(priv), str(pub)
