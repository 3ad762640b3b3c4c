"""The ClientKeyExchange and ServerKeyExchange handshake messages."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntFlag

from .ecc import Curve, CurveType
from .errors import (
    BufferTooSmallError,
    CipherSuiteUnsetError,
    InvalidClientKeyExchangeError,
    InvalidEllipticCurveTypeError,
    InvalidHashAlgorithmError,
    InvalidNamedCurveError,
    InvalidSignatureAlgorithmError,
    LengthMismatchError,
)
from .handshake_header import HandshakeType
from .sigalgs import (
    SUPPORTED_HASH_ALGORITHMS,
    SUPPORTED_SIGNATURE_ALGORITHMS,
    HashAlgorithm,
    SignatureAlgorithm,
)

_CURVE_TYPES = {value.value: value for value in CurveType}
_CURVES = {value.value: value for value in Curve}
_HASHES = {alg.value: alg for alg in SUPPORTED_HASH_ALGORITHMS}
_SIGNATURES = {alg.value: alg for alg in SUPPORTED_SIGNATURE_ALGORITHMS}


class KeyExchangeAlgorithm(IntFlag):
    """Key exchange mechanisms a cipher suite uses; may be combined."""

    NONE = 0
    PSK = 1
    ECDHE = 2


def _identity_hint_field(hint: bytes) -> bytes:
    return struct.pack(">H", len(hint) & 0xFFFF) + bytes(hint)


@dataclass
class MessageClientKeyExchange:
    """Carries the client's PSK identity and/or ephemeral public key."""

    identity_hint: bytes | None = None
    public_key: bytes | None = None

    def type(self) -> HandshakeType:
        return HandshakeType.CLIENT_KEY_EXCHANGE

    def marshal(self) -> bytes:
        if self.identity_hint is None and self.public_key is None:
            raise InvalidClientKeyExchangeError()
        out = b""
        if self.identity_hint is not None:
            out += _identity_hint_field(self.identity_hint)
        if self.public_key is not None:
            out += bytes([len(self.public_key) & 0xFF]) + bytes(self.public_key)
        return out

    @classmethod
    def unmarshal(
        cls, data: bytes, key_exchange_algorithm: KeyExchangeAlgorithm
    ) -> MessageClientKeyExchange:
        data = bytes(data)
        if len(data) < 2:
            raise BufferTooSmallError()
        if key_exchange_algorithm == KeyExchangeAlgorithm.NONE:
            raise CipherSuiteUnsetError()

        identity_hint = None
        public_key = None
        offset = 0
        if KeyExchangeAlgorithm.PSK in key_exchange_algorithm:
            psk_length = int.from_bytes(data[:2], "big")
            if psk_length > len(data) - 2:
                raise BufferTooSmallError()
            identity_hint = data[2 : psk_length + 2]
            offset += psk_length + 2

        if KeyExchangeAlgorithm.ECDHE in key_exchange_algorithm:
            if offset >= len(data):
                raise BufferTooSmallError()
            if data[offset] > len(data) - 1 - offset:
                raise BufferTooSmallError()
            public_key = data[offset + 1 :]

        return cls(identity_hint=identity_hint, public_key=public_key)


@dataclass
class MessageServerKeyExchange:
    """Server key exchange parameters for ECDHE and/or PSK suites."""

    identity_hint: bytes | None = None
    elliptic_curve_type: CurveType | int = 0
    named_curve: Curve | int = 0
    public_key: bytes = b""
    hash_algorithm: HashAlgorithm = HashAlgorithm.NONE
    signature_algorithm: SignatureAlgorithm = SignatureAlgorithm.ANONYMOUS
    signature: bytes = b""

    def type(self) -> HandshakeType:
        return HandshakeType.SERVER_KEY_EXCHANGE

    def marshal(self) -> bytes:
        out = b""
        if self.identity_hint is not None:
            out += _identity_hint_field(self.identity_hint)

        if int(self.elliptic_curve_type) == 0 or not self.public_key:
            return out

        out += struct.pack(">BH", int(self.elliptic_curve_type), int(self.named_curve) & 0xFFFF)
        out += bytes([len(self.public_key) & 0xFF]) + bytes(self.public_key)

        has_hash = self.hash_algorithm != HashAlgorithm.NONE
        has_signature = len(self.signature) > 0
        if has_hash != has_signature:
            raise InvalidHashAlgorithmError()
        if self.signature_algorithm == SignatureAlgorithm.ANONYMOUS:
            if has_hash or has_signature:
                raise InvalidSignatureAlgorithmError()
            return out

        out += struct.pack(
            ">BBH",
            int(self.hash_algorithm),
            int(self.signature_algorithm),
            len(self.signature) & 0xFFFF,
        )
        return out + bytes(self.signature)

    @classmethod
    def unmarshal(
        cls, data: bytes, key_exchange_algorithm: KeyExchangeAlgorithm
    ) -> MessageServerKeyExchange:
        data = bytes(data)
        if len(data) < 2:
            raise BufferTooSmallError()
        if key_exchange_algorithm == KeyExchangeAlgorithm.NONE:
            raise CipherSuiteUnsetError()

        message = cls()
        hint_length = int.from_bytes(data[:2], "big")
        if hint_length <= len(data) - 2 and KeyExchangeAlgorithm.PSK in key_exchange_algorithm:
            message.identity_hint = data[2 : 2 + hint_length]
            data = data[2 + hint_length :]

        if key_exchange_algorithm == KeyExchangeAlgorithm.PSK:
            if not data:
                return message
            raise LengthMismatchError()

        if KeyExchangeAlgorithm.ECDHE not in key_exchange_algorithm:
            raise LengthMismatchError()

        if not data:
            raise BufferTooSmallError()
        curve_type = _CURVE_TYPES.get(data[0])
        if curve_type is None:
            raise InvalidEllipticCurveTypeError()
        message.elliptic_curve_type = curve_type

        if len(data) < 3:
            raise BufferTooSmallError()
        curve = _CURVES.get(int.from_bytes(data[1:3], "big"))
        if curve is None:
            raise InvalidNamedCurveError()
        message.named_curve = curve

        if len(data) < 4:
            raise BufferTooSmallError()
        offset = 4 + data[3]
        if len(data) < offset:
            raise BufferTooSmallError()
        message.public_key = data[4:offset]

        # Anonymous exchanges carry no hash, signature algorithm or signature.
        if len(data) == offset:
            return message

        hash_algorithm = _HASHES.get(data[offset])
        if hash_algorithm is None:
            raise InvalidHashAlgorithmError()
        message.hash_algorithm = hash_algorithm
        offset += 1

        if len(data) <= offset:
            raise BufferTooSmallError()
        signature_algorithm = _SIGNATURES.get(data[offset])
        if signature_algorithm is None:
            raise InvalidSignatureAlgorithmError()
        message.signature_algorithm = signature_algorithm
        offset += 1

        if len(data) < offset + 2:
            raise BufferTooSmallError()
        signature_length = int.from_bytes(data[offset : offset + 2], "big")
        offset += 2
        if len(data) < offset + signature_length:
            raise BufferTooSmallError()
        message.signature = data[offset : offset + signature_length]
        return message