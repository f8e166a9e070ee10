"""
RSA-OAEP batch file encryption.

High-level API:
- encrypt_files(public_key_path, file_paths, output_path=None) -> ciphertext bytes
- decrypt_files(private_key_path, encrypted_paths, output_dir=None) -> [written paths]
- generate_rsa_keys(output_prefix, key_size=4096) -> (private_path, public_path)
- load_public_key(pem_bytes) / load_private_key(pem_bytes) -> RSA key
- encrypt(public_key, data) / decrypt(private_key, ciphertext) -> bytes
- encode_payload(payload) / decode_payload(data)

Exceptions derive from GocriError and are raised on errors instead of printing.
"""

__version__ = "0.1.0"

from .errors import (
    GocriError,
    PathResolutionFailed,
    FileNotFound,
    ReadFailed,
    WriteFailed,
    UnsafePath,
    MissingKey,
    NoPEMData,
    KeyParseFailed,
    WrongKeyType,
    EncodeError,
    DecodeError,
    EncryptionFailed,
    DecryptionFailed,
)
from .keys import (
    generate_rsa_keys,
    load_public_key,
    load_private_key,
    read_public_key,
    read_private_key,
    DEFAULT_KEY_SIZE,
)
from .payload import FileEntry, Payload, encode_payload, decode_payload
from .cipher import encrypt, decrypt, max_plaintext_length, LABEL, LABEL_VERSION
from .commands import encrypt_files, decrypt_files

__all__ = [
    "__version__",
    "GocriError",
    "PathResolutionFailed",
    "FileNotFound",
    "ReadFailed",
    "WriteFailed",
    "UnsafePath",
    "MissingKey",
    "NoPEMData",
    "KeyParseFailed",
    "WrongKeyType",
    "EncodeError",
    "DecodeError",
    "EncryptionFailed",
    "DecryptionFailed",
    "generate_rsa_keys",
    "load_public_key",
    "load_private_key",
    "read_public_key",
    "read_private_key",
    "DEFAULT_KEY_SIZE",
    "FileEntry",
    "Payload",
    "encode_payload",
    "decode_payload",
    "encrypt",
    "decrypt",
    "max_plaintext_length",
    "LABEL",
    "LABEL_VERSION",
    "encrypt_files",
    "decrypt_files",
]
