"""Handshake message types and the fixed header in front of each message."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum

from .errors import BufferTooSmallError

HEADER_LENGTH = 12

_UINT24_MASK = 0xFFFFFF


class HandshakeType(IntEnum):
    """Identifier of each handshake message."""

    HELLO_REQUEST = 0
    CLIENT_HELLO = 1
    SERVER_HELLO = 2
    HELLO_VERIFY_REQUEST = 3
    CERTIFICATE = 11
    SERVER_KEY_EXCHANGE = 12
    CERTIFICATE_REQUEST = 13
    SERVER_HELLO_DONE = 14
    CERTIFICATE_VERIFY = 15
    CLIENT_KEY_EXCHANGE = 16
    FINISHED = 20

    def __str__(self) -> str:
        return _TYPE_LABELS[self]


_TYPE_LABELS = {
    HandshakeType.HELLO_REQUEST: "HelloRequest",
    HandshakeType.CLIENT_HELLO: "ClientHello",
    HandshakeType.SERVER_HELLO: "ServerHello",
    HandshakeType.HELLO_VERIFY_REQUEST: "HelloVerifyRequest",
    HandshakeType.CERTIFICATE: "TypeCertificate",
    HandshakeType.SERVER_KEY_EXCHANGE: "ServerKeyExchange",
    HandshakeType.CERTIFICATE_REQUEST: "CertificateRequest",
    HandshakeType.SERVER_HELLO_DONE: "ServerHelloDone",
    HandshakeType.CERTIFICATE_VERIFY: "CertificateVerify",
    HandshakeType.CLIENT_KEY_EXCHANGE: "ClientKeyExchange",
    HandshakeType.FINISHED: "Finished",
}


def _handshake_type(value: int) -> HandshakeType | int:
    try:
        return HandshakeType(value)
    except ValueError:
        return value


def _uint24(value: int) -> bytes:
    return (value & _UINT24_MASK).to_bytes(3, "big")


@dataclass
class HandshakeHeader:
    """The 12 byte header that allows for loss, reordering and fragmentation.

    Unknown message types are kept as plain integers.
    """

    type: HandshakeType | int = HandshakeType.HELLO_REQUEST
    length: int = 0
    message_sequence: int = 0
    fragment_offset: int = 0
    fragment_length: int = 0

    def marshal(self) -> bytes:
        return (
            bytes([int(self.type) & 0xFF])
            + _uint24(self.length)
            + struct.pack(">H", self.message_sequence & 0xFFFF)
            + _uint24(self.fragment_offset)
            + _uint24(self.fragment_length)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> HandshakeHeader:
        data = bytes(data)
        if len(data) < HEADER_LENGTH:
            raise BufferTooSmallError()
        return cls(
            type=_handshake_type(data[0]),
            length=int.from_bytes(data[1:4], "big"),
            message_sequence=int.from_bytes(data[4:6], "big"),
            fragment_offset=int.from_bytes(data[6:9], "big"),
            fragment_length=int.from_bytes(data[9:12], "big"),
        )