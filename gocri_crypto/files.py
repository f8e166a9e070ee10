import os
import logging
from typing import Optional

from .errors import (
    PathResolutionFailed,
    FileNotFound,
    ReadFailed,
    WriteFailed,
    UnsafePath,
)

OUTPUT_FILE_MODE = 0o644

log = logging.getLogger(__name__)


def abs_path(path: str, what: str = "file") -> str:
    """Return the absolute form of ``path`` without checking that it exists."""
    try:
        return os.path.abspath(path)
    except (OSError, ValueError) as e:
        raise PathResolutionFailed(path, what) from e


def read_file(path: str, what: str = "file") -> bytes:
    """Read the whole of ``path``.

    Raises PathResolutionFailed, FileNotFound, or ReadFailed. Nothing is
    returned unless the complete content was read.
    """
    resolved = abs_path(path, what)
    if not os.path.exists(resolved):
        raise FileNotFound(path, what.capitalize())

    try:
        with open(resolved, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise ReadFailed(resolved) from e
    log.debug("Read %d bytes from '%s'", len(data), resolved)
    return data


def confine(path: str, output_dir: str) -> str:
    """Map a stored relative ``path`` under ``output_dir``.

    Absolute paths and paths whose normalised form leaves ``output_dir`` are
    rejected with UnsafePath.
    """
    if os.path.isabs(path) or os.path.splitdrive(path)[0]:
        raise UnsafePath(path, output_dir)
    base = abs_path(output_dir, "output directory")
    target = os.path.normpath(os.path.join(base, path))
    if target == base or os.path.commonpath([base, target]) != base:
        raise UnsafePath(path, output_dir)
    return target


def write_file(path: str, data: bytes, output_dir: Optional[str] = None) -> str:
    """Write ``data`` to ``path``, overwriting, and return the absolute path written."""
    target = confine(path, output_dir) if output_dir is not None else abs_path(path)

    try:
        if output_dir is not None:
            os.makedirs(os.path.dirname(target), exist_ok=True)
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, OUTPUT_FILE_MODE)
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise WriteFailed(path) from e
    log.info("Wrote %d bytes to '%s'", len(data), target)
    return target
