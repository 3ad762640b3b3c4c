from datetime import datetime, timezone

import pytest

from dtlswire.ecc import Curve, SupportedEllipticCurves
from dtlswire.errors import (
    BufferTooSmallError,
    CipherSuiteUnsetError,
    CompressionMethodUnsetError,
    CookieTooLongError,
    InvalidCompressionMethodError,
)
from dtlswire.extension import ServerName
from dtlswire.handshake_header import HandshakeType
from dtlswire.hello import MessageClientHello, MessageServerHello
from dtlswire.protocol import CompressionMethod, Version
from dtlswire.random import HandshakeRandom

CLIENT_RANDOM_PREFIX = bytes.fromhex(
    "fe fd b6 2f ce 5c 42 54 ff 86 e1 24 41 91 42"
    " 62 15 ad 16 c9 15 8d 95 71 8a bb 22 d7 47 ec"
    " d8 3d dc 4b"
)
COOKIE = bytes.fromhex("e6 14 3a 1b 04 ea 9e 7a 14 d6 6c 57 d0 0e 32 85 76 18 de d8")
CLIENT_TAIL = bytes.fromhex("00 04 c0 2b c0 0a 01 00 00 08 00 0a 00 04 00 02 00 1d")

RAW_CLIENT_HELLO = CLIENT_RANDOM_PREFIX + b"\x00" + b"\x14" + COOKIE + CLIENT_TAIL

SESSION_ID = bytes(range(0xE0, 0x100))
RAW_CLIENT_HELLO_SESSION = (
    CLIENT_RANDOM_PREFIX + b"\x20" + SESSION_ID + b"\x14" + COOKIE + CLIENT_TAIL
)

RAW_SERVER_HELLO = bytes.fromhex(
    "fe fd 21 63 32 21 81 0e 98 6c"
    " 85 3d a4 39 af 5f d6 5c cc 20"
    " 7f 7c 78 f1 5f 7e 1c b7 a1 1e"
    " cf 63 84 28 00 c0 2b 00 00 00"
)
RAW_SERVER_HELLO_SESSION = RAW_SERVER_HELLO[:34] + b"\x20" + SESSION_ID + bytes.fromhex(
    "c0 2b 00 00 00"
)


def client_random():
    return HandshakeRandom(
        datetime.fromtimestamp(3056586332, tz=timezone.utc),
        bytes.fromhex(
            "42 54 ff 86 e1 24 41 91 42 62 15 ad 16 c9 15 8d"
            " 95 71 8a bb 22 d7 47 ec d8 3d dc 4b"
        ),
    )


def server_random():
    return HandshakeRandom(
        datetime.fromtimestamp(560149025, tz=timezone.utc),
        bytes.fromhex(
            "81 0e 98 6c 85 3d a4 39 af 5f d6 5c cc 20 7f 7c"
            " 78 f1 5f 7e 1c b7 a1 1e cf 63 84 28"
        ),
    )


def test_client_hello_unmarshal_and_marshal():
    expected = MessageClientHello(
        version=Version(0xFE, 0xFD),
        random=client_random(),
        session_id=b"",
        cookie=COOKIE,
        cipher_suite_ids=[0xC02B, 0xC00A],
        compression_methods=[CompressionMethod()],
        extensions=[SupportedEllipticCurves([Curve.X25519])],
    )
    parsed = MessageClientHello.unmarshal(RAW_CLIENT_HELLO)
    assert parsed == expected
    assert parsed.marshal() == RAW_CLIENT_HELLO


def test_client_hello_session_id():
    parsed = MessageClientHello.unmarshal(RAW_CLIENT_HELLO_SESSION)
    assert parsed.session_id == SESSION_ID
    assert parsed.marshal() == RAW_CLIENT_HELLO_SESSION


def test_client_hello_type():
    assert MessageClientHello().type() == HandshakeType.CLIENT_HELLO


def test_client_hello_cookie_too_long():
    with pytest.raises(CookieTooLongError):
        MessageClientHello(cookie=bytes(256)).marshal()


def test_client_hello_round_trip_with_server_name():
    hello = MessageClientHello(
        version=Version(0xFE, 0xFD),
        random=client_random(),
        cookie=b"\x01\x02",
        session_id=b"\x09",
        cipher_suite_ids=[0xC02B],
        compression_methods=[CompressionMethod()],
        extensions=[ServerName("example.com")],
    )
    assert MessageClientHello.unmarshal(hello.marshal()) == hello


@pytest.mark.parametrize(
    "raw",
    [b"", RAW_CLIENT_HELLO[:20], RAW_CLIENT_HELLO[:34], RAW_CLIENT_HELLO[:40]],
)
def test_client_hello_truncated(raw):
    with pytest.raises(BufferTooSmallError):
        MessageClientHello.unmarshal(raw)


def test_server_hello_unmarshal_and_marshal():
    expected = MessageServerHello(
        version=Version(0xFE, 0xFD),
        random=server_random(),
        session_id=b"",
        cipher_suite_id=0xC02B,
        compression_method=CompressionMethod(),
        extensions=[],
    )
    parsed = MessageServerHello.unmarshal(RAW_SERVER_HELLO)
    assert parsed == expected
    assert parsed.marshal() == RAW_SERVER_HELLO


def test_server_hello_session_id():
    parsed = MessageServerHello.unmarshal(RAW_SERVER_HELLO_SESSION)
    assert parsed.session_id == SESSION_ID
    assert parsed.marshal() == RAW_SERVER_HELLO_SESSION


def test_server_hello_without_extensions_block():
    parsed = MessageServerHello.unmarshal(RAW_SERVER_HELLO[:-2])
    assert parsed.extensions == []
    assert parsed.cipher_suite_id == 0xC02B


def test_server_hello_type():
    assert MessageServerHello().type() == HandshakeType.SERVER_HELLO


def test_server_hello_cipher_suite_unset():
    with pytest.raises(CipherSuiteUnsetError):
        MessageServerHello(compression_method=CompressionMethod()).marshal()


def test_server_hello_compression_method_unset():
    with pytest.raises(CompressionMethodUnsetError):
        MessageServerHello(cipher_suite_id=0xC02B).marshal()


def test_server_hello_invalid_compression_method():
    raw = RAW_SERVER_HELLO[:37] + b"\x01" + RAW_SERVER_HELLO[38:]
    with pytest.raises(InvalidCompressionMethodError):
        MessageServerHello.unmarshal(raw)


@pytest.mark.parametrize("length", [0, 10, 34, 36])
def test_server_hello_truncated(length):
    with pytest.raises(BufferTooSmallError):
        MessageServerHello.unmarshal(RAW_SERVER_HELLO[:length])