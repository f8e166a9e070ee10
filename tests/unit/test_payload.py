import json
import os

import pytest

from gocri_crypto.payload import FileEntry, Payload, encode_payload, decode_payload
from gocri_crypto.errors import DecodeError, EncodeError


def test_encode_wire_format():
    data = encode_payload(Payload([FileEntry("hello.txt", b"hi")]))
    assert data == b'{"contents":[{"path":"hello.txt","body":"aGk="}]}'


def test_roundtrip_preserves_order_and_bytes():
    payload = Payload([
        FileEntry("z.bin", bytes(range(256))),
        FileEntry("a/b.txt", b""),
        FileEntry("z.bin", b"duplicate paths are kept"),
        FileEntry("ünïcode.txt", "héllo".encode("utf-8")),
    ])
    assert decode_payload(encode_payload(payload)) == payload


def test_empty_payload_roundtrip():
    assert decode_payload(encode_payload(Payload())) == Payload([])


def test_missing_or_null_fields_read_as_empty():
    assert decode_payload(b'{"contents":null}') == Payload([])
    assert decode_payload(b"{}") == Payload([])
    assert decode_payload(b'{"contents":[{"path":"x"}]}') == Payload([FileEntry("x", b"")])
    assert decode_payload(b'{"contents":[{"path":"x","body":null}]}') == Payload([FileEntry("x", b"")])


def test_paths_are_not_validated():
    payload = decode_payload(b'{"contents":[{"path":"../../etc/passwd","body":""}]}')
    assert payload.contents[0].path == "../../etc/passwd"


@pytest.mark.parametrize("data", [
    b"",
    b"\xff\xfe\x00garbage",
    b"not json",
    b"[]",
    b"[" * 100000,
    b'{"contents":' * 5000,
    b'{"contents":"nope"}',
    b'{"contents":[1]}',
    b'{"contents":[{"path":1,"body":""}]}',
    b'{"contents":[{"body":""}]}',
    b'{"contents":[{"path":"x","body":5}]}',
    b'{"contents":[{"path":"x","body":"***"}]}',
])
def test_decode_rejects_malformed(data):
    with pytest.raises(DecodeError):
        decode_payload(data)


def test_decode_random_bytes():
    for _ in range(20):
        with pytest.raises(DecodeError):
            decode_payload(b"\x80" + os.urandom(64))


def test_encode_unrepresentable_path():
    with pytest.raises(EncodeError):
        encode_payload(Payload([FileEntry("\udcff", b"x")]))


def test_encoded_body_is_base64_text():
    doc = json.loads(encode_payload(Payload([FileEntry("p", b"\x00\xff")])))
    assert doc == {"contents": [{"path": "p", "body": "AP8="}]}
