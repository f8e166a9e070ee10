"""Encrypt a batch of files into one ciphertext, and restore them from it."""

import sys
import logging
from typing import BinaryIO, List, Optional, Sequence

from .keys import read_public_key, read_private_key
from .files import read_file, write_file
from .payload import FileEntry, Payload, encode_payload, decode_payload
from .cipher import encrypt, decrypt
from .errors import WriteFailed

log = logging.getLogger(__name__)


def encrypt_files(public_key_path: str, file_paths: Sequence[str], output_path: Optional[str] = None,
                  *, stdout: Optional[BinaryIO] = None) -> bytes:
    """Bundle ``file_paths`` and encrypt them under the public key.

    The ciphertext goes to ``output_path`` when given, else to ``stdout``
    (the process's binary stdout by default). Stored paths are the strings
    passed in, unchanged. Nothing is written unless every step succeeded.
    """
    public_key = read_public_key(public_key_path)

    payload = Payload()
    for path in file_paths:
        payload.contents.append(FileEntry(path, read_file(path)))

    ciphertext = encrypt(public_key, encode_payload(payload))

    if output_path:
        out = write_file(output_path, ciphertext)
        log.info("Encrypted %d file(s) to '%s'", len(payload.contents), out)
    else:
        stream = stdout if stdout is not None else sys.stdout.buffer
        try:
            stream.write(ciphertext)
            stream.flush()
        except OSError as e:
            raise WriteFailed() from e
        log.info("Encrypted %d file(s) to stdout", len(payload.contents))
    return ciphertext


def decrypt_files(private_key_path: str, encrypted_paths: Sequence[str],
                  output_dir: Optional[str] = None) -> List[str]:
    """Decrypt each file and write every embedded entry back to its stored path.

    With ``output_dir`` entries are confined beneath that directory. Files are
    processed in order with no rollback: entries written before a failure stay
    on disk. Returns the absolute paths written.
    """
    private_key = read_private_key(private_key_path)

    written = []
    for path in encrypted_paths:
        plaintext = decrypt(private_key, read_file(path))
        payload = decode_payload(plaintext)
        for entry in payload.contents:
            written.append(write_file(entry.path, entry.body, output_dir))
        log.info("Decrypted '%s' (%d file(s))", path, len(payload.contents))
    return written
