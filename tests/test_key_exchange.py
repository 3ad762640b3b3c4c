import pytest

from dtlswire.ecc import Curve, CurveType
from dtlswire.errors import (
    BufferTooSmallError,
    CipherSuiteUnsetError,
    InvalidClientKeyExchangeError,
    InvalidEllipticCurveTypeError,
    InvalidHashAlgorithmError,
    InvalidNamedCurveError,
    InvalidSignatureAlgorithmError,
    LengthMismatchError,
)
from dtlswire.handshake_header import HandshakeType
from dtlswire.key_exchange import (
    KeyExchangeAlgorithm,
    MessageClientKeyExchange,
    MessageServerKeyExchange,
)
from dtlswire.sigalgs import HashAlgorithm, SignatureAlgorithm

RAW_CLIENT_KEY_EXCHANGE = bytes.fromhex(
    "20 26 78 4a 78 70 c1 f9 71 ea 50 4a b5 bb 00 76"
    " 02 05 da f7 d0 3f e3 f7 4e 8a 14 6f b7 e0 c0 ff"
    " 54"
)

RAW_SKE_ANONYMOUS = bytes.fromhex(
    "03 00 1d 41 04 0c b9 a3 b9 90 71 35 4a 08 66 af"
    " d6 88 58 29 69 98 f1 87 0f b5 a8 cd 92 f6 2b 08"
    " 0c d4 16 5b cc 81 f2 58 91 8e 62 df c1 ec 72 e8"
    " 47 24 42 96 b8 7b ee e7 0d dc 44 ec f3 97 6b 1b"
    " 45 28 ac 3f 35"
)
RAW_SKE_SIGNED = RAW_SKE_ANONYMOUS + bytes.fromhex(
    "02 03 00 47 30 45 02 21 00 b2 0b"
    " 22 95 3d 56 57 6a 3f 85 30 6f 55 c3 f4 24 1b 21"
    " 07 e5 df ba 24 02 68 95 1f 6e 13 bd 9f aa 02 20"
    " 49 9c 9d df 84 60 33 27 96 9e 58 6d 72 13 e7 3a"
    " e8 df 43 75 c7 b9 37 6e 90 e5 3b 81 d4 da 68 cd"
)


def test_client_key_exchange_ecdhe():
    parsed = MessageClientKeyExchange.unmarshal(
        RAW_CLIENT_KEY_EXCHANGE, KeyExchangeAlgorithm.ECDHE
    )
    assert parsed == MessageClientKeyExchange(public_key=RAW_CLIENT_KEY_EXCHANGE[1:])
    assert parsed.marshal() == RAW_CLIENT_KEY_EXCHANGE


def test_client_key_exchange_psk():
    raw = b"\x00\x04hint"
    parsed = MessageClientKeyExchange.unmarshal(raw, KeyExchangeAlgorithm.PSK)
    assert parsed.identity_hint == b"hint"
    assert parsed.public_key is None
    assert parsed.marshal() == raw


def test_client_key_exchange_psk_and_ecdhe():
    raw = b"\x00\x02hi\x02\xaa\xbb"
    parsed = MessageClientKeyExchange.unmarshal(
        raw, KeyExchangeAlgorithm.PSK | KeyExchangeAlgorithm.ECDHE
    )
    assert parsed == MessageClientKeyExchange(identity_hint=b"hi", public_key=b"\xaa\xbb")
    assert parsed.marshal() == raw


def test_client_key_exchange_type():
    assert MessageClientKeyExchange().type() == HandshakeType.CLIENT_KEY_EXCHANGE


def test_client_key_exchange_marshal_empty():
    with pytest.raises(InvalidClientKeyExchangeError):
        MessageClientKeyExchange().marshal()


def test_client_key_exchange_requires_algorithm():
    with pytest.raises(CipherSuiteUnsetError):
        MessageClientKeyExchange.unmarshal(RAW_CLIENT_KEY_EXCHANGE, KeyExchangeAlgorithm.NONE)


@pytest.mark.parametrize(
    "raw, algorithm",
    [
        (b"\x01", KeyExchangeAlgorithm.ECDHE),
        (b"\x00\x09ab", KeyExchangeAlgorithm.PSK),
        (b"\x05\x01\x02", KeyExchangeAlgorithm.ECDHE),
    ],
)
def test_client_key_exchange_too_small(raw, algorithm):
    with pytest.raises(BufferTooSmallError):
        MessageClientKeyExchange.unmarshal(raw, algorithm)


def test_server_key_exchange_signed():
    expected = MessageServerKeyExchange(
        elliptic_curve_type=CurveType.NAMED_CURVE,
        named_curve=Curve.X25519,
        public_key=RAW_SKE_SIGNED[4:69],
        hash_algorithm=HashAlgorithm.SHA1,
        signature_algorithm=SignatureAlgorithm.ECDSA,
        signature=RAW_SKE_SIGNED[73:144],
    )
    parsed = MessageServerKeyExchange.unmarshal(RAW_SKE_SIGNED, KeyExchangeAlgorithm.ECDHE)
    assert parsed == expected
    assert parsed.marshal() == RAW_SKE_SIGNED


def test_server_key_exchange_anonymous():
    expected = MessageServerKeyExchange(
        elliptic_curve_type=CurveType.NAMED_CURVE,
        named_curve=Curve.X25519,
        public_key=RAW_SKE_ANONYMOUS[4:69],
        hash_algorithm=HashAlgorithm.NONE,
        signature_algorithm=SignatureAlgorithm.ANONYMOUS,
    )
    parsed = MessageServerKeyExchange.unmarshal(RAW_SKE_ANONYMOUS, KeyExchangeAlgorithm.ECDHE)
    assert parsed == expected
    assert parsed.marshal() == RAW_SKE_ANONYMOUS


def test_server_key_exchange_type():
    assert MessageServerKeyExchange().type() == HandshakeType.SERVER_KEY_EXCHANGE


def test_server_key_exchange_psk_hint_only():
    parsed = MessageServerKeyExchange.unmarshal(b"\x00\x04hint", KeyExchangeAlgorithm.PSK)
    assert parsed.identity_hint == b"hint"
    assert parsed.marshal() == b"\x00\x04hint"


def test_server_key_exchange_psk_trailing_data():
    with pytest.raises(LengthMismatchError):
        MessageServerKeyExchange.unmarshal(b"\x00\x01ab", KeyExchangeAlgorithm.PSK)


def test_server_key_exchange_ecdhe_psk():
    raw = b"\x00\x02hi" + bytes.fromhex("03 00 1d 01 aa")
    parsed = MessageServerKeyExchange.unmarshal(
        raw, KeyExchangeAlgorithm.PSK | KeyExchangeAlgorithm.ECDHE
    )
    assert parsed.identity_hint == b"hi"
    assert parsed.named_curve == Curve.X25519
    assert parsed.public_key == b"\xaa"
    assert parsed.marshal() == raw


def test_server_key_exchange_requires_algorithm():
    with pytest.raises(CipherSuiteUnsetError):
        MessageServerKeyExchange.unmarshal(RAW_SKE_SIGNED, KeyExchangeAlgorithm.NONE)


def test_server_key_exchange_invalid_curve_type():
    with pytest.raises(InvalidEllipticCurveTypeError):
        MessageServerKeyExchange.unmarshal(b"\x04" + RAW_SKE_ANONYMOUS[1:], KeyExchangeAlgorithm.ECDHE)


def test_server_key_exchange_invalid_named_curve():
    with pytest.raises(InvalidNamedCurveError):
        MessageServerKeyExchange.unmarshal(bytes.fromhex("03 00 99 01 00"), KeyExchangeAlgorithm.ECDHE)


def test_server_key_exchange_invalid_hash():
    raw = RAW_SKE_ANONYMOUS + bytes.fromhex("07 03 00 00")
    with pytest.raises(InvalidHashAlgorithmError):
        MessageServerKeyExchange.unmarshal(raw, KeyExchangeAlgorithm.ECDHE)


def test_server_key_exchange_invalid_signature_algorithm():
    raw = RAW_SKE_ANONYMOUS + bytes.fromhex("02 02 00 00")
    with pytest.raises(InvalidSignatureAlgorithmError):
        MessageServerKeyExchange.unmarshal(raw, KeyExchangeAlgorithm.ECDHE)


def test_server_key_exchange_truncated_public_key():
    with pytest.raises(BufferTooSmallError):
        MessageServerKeyExchange.unmarshal(RAW_SKE_ANONYMOUS[:30], KeyExchangeAlgorithm.ECDHE)


def test_server_key_exchange_marshal_hash_without_signature():
    message = MessageServerKeyExchange(
        elliptic_curve_type=CurveType.NAMED_CURVE,
        named_curve=Curve.X25519,
        public_key=b"\x01",
        hash_algorithm=HashAlgorithm.SHA256,
        signature_algorithm=SignatureAlgorithm.ECDSA,
    )
    with pytest.raises(InvalidHashAlgorithmError):
        message.marshal()


def test_server_key_exchange_marshal_signature_without_hash():
    message = MessageServerKeyExchange(
        elliptic_curve_type=CurveType.NAMED_CURVE,
        named_curve=Curve.X25519,
        public_key=b"\x01",
        signature=b"\x02",
    )
    with pytest.raises(InvalidHashAlgorithmError):
        message.marshal()


def test_server_key_exchange_marshal_anonymous_with_signature():
    message = MessageServerKeyExchange(
        elliptic_curve_type=CurveType.NAMED_CURVE,
        named_curve=Curve.X25519,
        public_key=b"\x01",
        hash_algorithm=HashAlgorithm.SHA1,
        signature_algorithm=SignatureAlgorithm.ANONYMOUS,
        signature=b"\x02",
    )
    with pytest.raises(InvalidSignatureAlgorithmError):
        message.marshal()