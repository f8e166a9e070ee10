"""Exceptions raised by gocri_crypto.

Every error is fatal to the current invocation; the CLI prints ``str(err)``.
"""

from typing import Optional


class GocriError(Exception):
    """Base class for all gocri errors."""


# --- File errors ---

class PathResolutionFailed(GocriError):
    def __init__(self, path: str, what: str = "file"):
        super().__init__(f"Underlying fs didn't provide absolute path of your {what} ({path})")
        self.path = path


class FileNotFound(GocriError):
    def __init__(self, path: str, what: str = "File"):
        super().__init__(f"{what} ({path}) was not found.")
        self.path = path


class ReadFailed(GocriError):
    def __init__(self, path: str):
        super().__init__(f"Failed to read your file ({path})")
        self.path = path


class WriteFailed(GocriError):
    def __init__(self, path: Optional[str] = None):
        if path is None:
            super().__init__("Failed to output to stdout.")
        else:
            super().__init__(f"Failed to output to file('{path}').")
        self.path = path


class UnsafePath(GocriError):
    def __init__(self, path: str, output_dir: str):
        super().__init__(f"Refusing to write '{path}' outside of '{output_dir}'.")
        self.path = path
        self.output_dir = output_dir


# --- Key errors ---

class MissingKey(GocriError):
    def __init__(self, kind: str):
        super().__init__(f"{kind} key is required.")


class NoPEMData(GocriError):
    def __init__(self, block_type: str):
        super().__init__(f"No PEM data is found (expected a '{block_type}' block)")
        self.block_type = block_type


class KeyParseFailed(GocriError):
    pass


class WrongKeyType(GocriError):
    def __init__(self):
        super().__init__("Not RSA Format data.")


# --- Payload / cipher errors ---

class EncodeError(GocriError):
    def __init__(self, reason: str = ""):
        msg = "Failed to marshal to Json format."
        super().__init__(f"{msg} ({reason})" if reason else msg)


class DecodeError(GocriError):
    def __init__(self, reason: str = ""):
        msg = "Failed to unmarshal binary."
        super().__init__(f"{msg} ({reason})" if reason else msg)


class EncryptionFailed(GocriError):
    pass


class DecryptionFailed(GocriError):
    def __init__(self):
        super().__init__("Failed to decrypt: incorrect key or corrupted file.")
