"""Simple handshake messages and cipher suite id lists."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .errors import (
    BufferTooSmallError,
    CookieTooLongError,
    InvalidHashAlgorithmError,
    InvalidSignatureAlgorithmError,
    LengthMismatchError,
)
from .handshake_header import HandshakeType
from .protocol import Version
from .sigalgs import (
    SUPPORTED_HASH_ALGORITHMS,
    SUPPORTED_SIGNATURE_ALGORITHMS,
    HashAlgorithm,
    SignatureAlgorithm,
)

_CERTIFICATE_LENGTH_FIELD_SIZE = 3
_CERTIFICATE_VERIFY_MIN_LENGTH = 4
_MAX_COOKIE_LENGTH = 255


def decode_cipher_suite_ids(buf: bytes) -> list[int]:
    """Decode a two byte length followed by two byte cipher suite ids."""
    buf = bytes(buf)
    if len(buf) < 2:
        raise BufferTooSmallError()
    count = int.from_bytes(buf[:2], "big") // 2
    if len(buf) < 2 + count * 2:
        raise BufferTooSmallError()
    return [int.from_bytes(buf[pos : pos + 2], "big") for pos in range(2, 2 + count * 2, 2)]


def encode_cipher_suite_ids(cipher_suite_ids: list[int]) -> bytes:
    """Encode cipher suite ids with a two byte length prefix."""
    header = struct.pack(">H", (len(cipher_suite_ids) * 2) & 0xFFFF)
    return header + b"".join(struct.pack(">H", suite_id) for suite_id in cipher_suite_ids)


@dataclass
class MessageCertificate:
    """A client or server certificate chain, each entry in DER form."""

    certificate: list[bytes] = field(default_factory=list)

    def type(self) -> HandshakeType:
        return HandshakeType.CERTIFICATE

    def marshal(self) -> bytes:
        body = b"".join(
            len(cert).to_bytes(_CERTIFICATE_LENGTH_FIELD_SIZE, "big") + bytes(cert)
            for cert in self.certificate
        )
        return len(body).to_bytes(_CERTIFICATE_LENGTH_FIELD_SIZE, "big") + body

    @classmethod
    def unmarshal(cls, data: bytes) -> MessageCertificate:
        data = bytes(data)
        if len(data) < _CERTIFICATE_LENGTH_FIELD_SIZE:
            raise BufferTooSmallError()
        declared = int.from_bytes(data[:_CERTIFICATE_LENGTH_FIELD_SIZE], "big")
        if declared + _CERTIFICATE_LENGTH_FIELD_SIZE != len(data):
            raise LengthMismatchError()

        certificates = []
        offset = _CERTIFICATE_LENGTH_FIELD_SIZE
        while offset < len(data):
            if offset + _CERTIFICATE_LENGTH_FIELD_SIZE > len(data):
                raise BufferTooSmallError()
            cert_len = int.from_bytes(
                data[offset : offset + _CERTIFICATE_LENGTH_FIELD_SIZE], "big"
            )
            offset += _CERTIFICATE_LENGTH_FIELD_SIZE
            if offset + cert_len > len(data):
                raise LengthMismatchError()
            certificates.append(data[offset : offset + cert_len])
            offset += cert_len
        return cls(certificates)


@dataclass
class MessageCertificateVerify:
    """Explicit verification of a client certificate."""

    hash_algorithm: HashAlgorithm = HashAlgorithm.NONE
    signature_algorithm: SignatureAlgorithm = SignatureAlgorithm.ANONYMOUS
    signature: bytes = b""

    def type(self) -> HandshakeType:
        return HandshakeType.CERTIFICATE_VERIFY

    def marshal(self) -> bytes:
        return (
            struct.pack(
                ">BBH",
                int(self.hash_algorithm),
                int(self.signature_algorithm),
                len(self.signature) & 0xFFFF,
            )
            + bytes(self.signature)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> MessageCertificateVerify:
        data = bytes(data)
        if len(data) < _CERTIFICATE_VERIFY_MIN_LENGTH:
            raise BufferTooSmallError()
        hashes = {alg.value: alg for alg in SUPPORTED_HASH_ALGORITHMS}
        signatures = {alg.value: alg for alg in SUPPORTED_SIGNATURE_ALGORITHMS}
        if data[0] not in hashes:
            raise InvalidHashAlgorithmError()
        if data[1] not in signatures:
            raise InvalidSignatureAlgorithmError()
        if int.from_bytes(data[2:4], "big") + 4 != len(data):
            raise BufferTooSmallError()
        return cls(hashes[data[0]], signatures[data[1]], data[4:])


@dataclass
class MessageFinished:
    """The first message protected with the negotiated keys."""

    verify_data: bytes = b""

    def type(self) -> HandshakeType:
        return HandshakeType.FINISHED

    def marshal(self) -> bytes:
        return bytes(self.verify_data)

    @classmethod
    def unmarshal(cls, data: bytes) -> MessageFinished:
        return cls(bytes(data))


@dataclass
class MessageHelloVerifyRequest:
    """A stateless cookie the client must echo in a new ClientHello."""

    version: Version = Version(0, 0)
    cookie: bytes = b""

    def type(self) -> HandshakeType:
        return HandshakeType.HELLO_VERIFY_REQUEST

    def marshal(self) -> bytes:
        if len(self.cookie) > _MAX_COOKIE_LENGTH:
            raise CookieTooLongError()
        return (
            bytes([self.version.major, self.version.minor, len(self.cookie)])
            + bytes(self.cookie)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> MessageHelloVerifyRequest:
        data = bytes(data)
        if len(data) < 3:
            raise BufferTooSmallError()
        cookie_length = data[2]
        if len(data) < cookie_length + 3:
            raise BufferTooSmallError()
        return cls(Version(data[0], data[1]), data[3 : 3 + cookie_length])


@dataclass
class MessageServerHelloDone:
    """Marks the end of the server's hello flight."""

    def type(self) -> HandshakeType:
        return HandshakeType.SERVER_HELLO_DONE

    def marshal(self) -> bytes:
        return b""

    @classmethod
    def unmarshal(cls, data: bytes) -> MessageServerHelloDone:
        return cls()