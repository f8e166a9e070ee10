import os
import re
import stat
import base64
import binascii
import logging
from typing import Iterator, Tuple

from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.backends import default_backend
from cryptography.exceptions import UnsupportedAlgorithm

from .errors import NoPEMData, KeyParseFailed, WrongKeyType, MissingKey
from .files import read_file

PUBLIC_KEY_BLOCK = "PUBLIC KEY"
PRIVATE_KEY_BLOCK = "RSA PRIVATE KEY"

DEFAULT_KEY_SIZE = 4096
PUBLIC_EXPONENT = 65537

_PEM_BLOCK = re.compile(
    rb"-----BEGIN (?P<type>[^-\r\n]+)-----\r?\n"
    rb"(?P<body>.*?)"
    rb"-----END (?P=type)-----",
    re.DOTALL,
)
# RFC 1421 headers ("Proc-Type: ...") may precede the base64 body.
_PEM_HEADER = re.compile(rb"^[A-Za-z0-9-]+:.*$", re.MULTILINE)

log = logging.getLogger(__name__)


# --- PEM decoding ---

def iter_pem_blocks(data: bytes) -> Iterator[Tuple[str, bytes]]:
    """Yield ``(type, base64_body)`` for each PEM block in ``data``, in order."""
    for m in _PEM_BLOCK.finditer(data):
        yield m.group('type').decode('ascii', errors='replace'), m.group('body')


def _find_block(data: bytes, block_type: str) -> bytes:
    for found, body in iter_pem_blocks(data):
        if found != block_type:
            log.debug("Skipping PEM block '%s'", found)
            continue
        body = _PEM_HEADER.sub(b"", body)
        try:
            return base64.b64decode(b"".join(body.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise KeyParseFailed(f"Malformed base64 in '{block_type}' PEM block.") from e
    raise NoPEMData(block_type)


# --- Key parsing ---

def load_public_key(data: bytes) -> rsa.RSAPublicKey:
    """Parse the first "PUBLIC KEY" PEM block of ``data`` as a PKIX RSA public key."""
    der = _find_block(data, PUBLIC_KEY_BLOCK)
    try:
        key = serialization.load_der_public_key(der, backend=default_backend())
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyParseFailed("File does not contain a valid PKIX public key.") from e
    if not isinstance(key, rsa.RSAPublicKey):
        raise WrongKeyType()
    return key


def _der_length(der: bytes, pos: int) -> Tuple[int, int]:
    """Return (content_length, header_length) of the DER TLV at ``pos``."""
    first = der[pos + 1]
    if first < 0x80:
        return first, 2
    n = first & 0x7f
    return int.from_bytes(der[pos + 2:pos + 2 + n], 'big'), 2 + n


def _is_pkcs1(der: bytes) -> bool:
    # RSAPrivateKey is SEQUENCE { INTEGER version, INTEGER modulus, ... };
    # PKCS8 PrivateKeyInfo has an AlgorithmIdentifier SEQUENCE second.
    try:
        if der[0] != 0x30:
            return False
        _, header = _der_length(der, 0)
        if der[header] != 0x02:
            return False
        length, version_header = _der_length(der, header)
        return der[header + version_header + length] == 0x02
    except IndexError:
        return False


def _pem_wrap(der: bytes, block_type: str) -> bytes:
    body = base64.b64encode(der)
    lines = [body[i:i + 64] for i in range(0, len(body), 64)]
    begin = f"-----BEGIN {block_type}-----".encode('ascii')
    end = f"-----END {block_type}-----".encode('ascii')
    return b"\n".join([begin] + lines + [end]) + b"\n"


def load_private_key(data: bytes) -> rsa.RSAPrivateKey:
    """Parse the first "RSA PRIVATE KEY" PEM block of ``data`` as a PKCS1 private key."""
    der = _find_block(data, PRIVATE_KEY_BLOCK)
    if not _is_pkcs1(der):
        raise KeyParseFailed("File does not contain a valid PKCS1 RSA private key.")
    try:
        key = serialization.load_pem_private_key(
            _pem_wrap(der, PRIVATE_KEY_BLOCK), password=None, backend=default_backend()
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyParseFailed("File does not contain a valid RSA private key.") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyParseFailed("File does not contain a valid RSA private key.")
    return key


def read_public_key(path: str) -> rsa.RSAPublicKey:
    if not path:
        raise MissingKey("Public")
    return load_public_key(read_file(path, "public key"))


def read_private_key(path: str) -> rsa.RSAPrivateKey:
    if not path:
        raise MissingKey("Private")
    return load_private_key(read_file(path, "private key"))


# --- Key generation ---

def generate_rsa_keys(output_prefix: str, key_size: int = DEFAULT_KEY_SIZE) -> Tuple[str, str]:
    """Generate an RSA keypair and save to '<prefix>_private.pem' & '<prefix>_public.pem'.

    The private key is written as PKCS1 ("RSA PRIVATE KEY") readable only by
    the owner, the public key as PKIX ("PUBLIC KEY"). Returns
    (private_path, public_path). Raises FileExistsError if either exists.
    """
    private_key_file = f"{output_prefix}_private.pem"
    public_key_file = f"{output_prefix}_public.pem"

    if os.path.exists(private_key_file) or os.path.exists(public_key_file):
        raise FileExistsError(
            f"File '{private_key_file}' or '{public_key_file}' already exists."
        )

    key = rsa.generate_private_key(
        public_exponent=PUBLIC_EXPONENT, key_size=key_size, backend=default_backend()
    )
    private_key = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_key = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )

    private_fd = os.open(
        private_key_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, stat.S_IRUSR | stat.S_IWUSR
    )
    with os.fdopen(private_fd, 'wb') as priv_file:
        priv_file.write(private_key)

    with open(public_key_file, 'wb') as pub_file:
        pub_file.write(public_key)

    log.info("Generated %d-bit RSA keypair '%s' / '%s'", key_size, private_key_file, public_key_file)
    return private_key_file, public_key_file
