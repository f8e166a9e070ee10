"""Serialization of the file bundle that gets encrypted.

Wire form (UTF-8 JSON, compact)::

    {"contents": [{"path": "hello.txt", "body": "aGk="}, ...]}

``body`` is standard padded base64. A missing or ``null`` ``contents`` reads
as an empty bundle, and a missing or ``null`` ``body`` as an empty file.
"""

import json
import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import List

from .errors import EncodeError, DecodeError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    path: str
    body: bytes


@dataclass
class Payload:
    contents: List[FileEntry] = field(default_factory=list)


def encode_payload(payload: Payload) -> bytes:
    try:
        doc = {
            "contents": [
                {"path": entry.path, "body": base64.b64encode(entry.body).decode('ascii')}
                for entry in payload.contents
            ]
        }
        return json.dumps(doc, separators=(',', ':'), ensure_ascii=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise EncodeError(str(e)) from e


def _decode_entry(item) -> FileEntry:
    if not isinstance(item, dict):
        raise DecodeError("entry is not an object")
    path = item.get("path")
    body = item.get("body")
    if not isinstance(path, str):
        raise DecodeError("entry path is not a string")
    if body is None:
        return FileEntry(path, b"")
    if not isinstance(body, str):
        raise DecodeError("entry body is not a string")
    try:
        return FileEntry(path, base64.b64decode(body, validate=True))
    except (binascii.Error, ValueError) as e:
        raise DecodeError("entry body is not valid base64") from e


def decode_payload(data: bytes) -> Payload:
    """Parse bytes produced by encode_payload. Stored paths are not validated."""
    try:
        doc = json.loads(data.decode('utf-8'))
    except (UnicodeDecodeError, ValueError, RecursionError) as e:
        raise DecodeError() from e

    if not isinstance(doc, dict):
        raise DecodeError("not an object")
    contents = doc.get("contents")
    if contents is None:
        contents = []
    if not isinstance(contents, list):
        raise DecodeError("contents is not a list")

    payload = Payload([_decode_entry(item) for item in contents])
    log.debug("Decoded payload with %d entries", len(payload.contents))
    return payload
