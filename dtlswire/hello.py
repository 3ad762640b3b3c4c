"""The ClientHello and ServerHello handshake messages."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .errors import (
    BufferTooSmallError,
    CipherSuiteUnsetError,
    CompressionMethodUnsetError,
    CookieTooLongError,
    InvalidCompressionMethodError,
)
from .extension import Extension, marshal_extensions, unmarshal_extensions
from .handshake_header import HandshakeType
from .messages import decode_cipher_suite_ids, encode_cipher_suite_ids
from .protocol import (
    CompressionMethod,
    Version,
    compression_methods,
    decode_compression_methods,
    encode_compression_methods,
)
from .random import RANDOM_LENGTH, HandshakeRandom

_VARIABLE_WIDTH_START = 2 + RANDOM_LENGTH
_MAX_COOKIE_LENGTH = 255


def _read_opaque8(data: bytes, offset: int) -> tuple[bytes, int]:
    """Read a one byte length-prefixed field at ``offset``.

    Returns the field and the offset just past it.  Like the hello layouts
    require, at least one byte must follow the field.
    """
    offset += 1
    if len(data) <= offset:
        raise BufferTooSmallError()
    length = data[offset - 1]
    if len(data) <= offset + length:
        raise BufferTooSmallError()
    return data[offset : offset + length], offset + length


def _read_version_and_random(data: bytes) -> tuple[Version, HandshakeRandom]:
    if len(data) < 2 + RANDOM_LENGTH:
        raise BufferTooSmallError()
    version = Version(data[0], data[1])
    random = HandshakeRandom.unmarshal_fixed(data[2 : 2 + RANDOM_LENGTH])
    return version, random


@dataclass
class MessageClientHello:
    """The first message a client sends, offering its parameters."""

    version: Version = Version(0, 0)
    random: HandshakeRandom = field(default_factory=HandshakeRandom)
    cookie: bytes = b""
    session_id: bytes = b""
    cipher_suite_ids: list[int] = field(default_factory=list)
    compression_methods: list[CompressionMethod] = field(default_factory=list)
    extensions: list[Extension] = field(default_factory=list)

    def type(self) -> HandshakeType:
        return HandshakeType.CLIENT_HELLO

    def marshal(self) -> bytes:
        if len(self.cookie) > _MAX_COOKIE_LENGTH:
            raise CookieTooLongError()
        return b"".join(
            [
                bytes([self.version.major, self.version.minor]),
                self.random.marshal_fixed(),
                bytes([len(self.session_id) & 0xFF]),
                bytes(self.session_id),
                bytes([len(self.cookie)]),
                bytes(self.cookie),
                encode_cipher_suite_ids(self.cipher_suite_ids),
                encode_compression_methods(self.compression_methods),
                marshal_extensions(self.extensions),
            ]
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> MessageClientHello:
        data = bytes(data)
        version, random = _read_version_and_random(data)

        session_id, offset = _read_opaque8(data, _VARIABLE_WIDTH_START)
        cookie, offset = _read_opaque8(data, offset)

        cipher_suite_ids = decode_cipher_suite_ids(data[offset:])
        if len(data) < offset + 2:
            raise BufferTooSmallError()
        offset += int.from_bytes(data[offset : offset + 2], "big") + 2

        if len(data) < offset:
            raise BufferTooSmallError()
        methods = decode_compression_methods(data[offset:])
        offset += data[offset] + 1

        extensions = unmarshal_extensions(data[offset:])
        return cls(
            version=version,
            random=random,
            cookie=cookie,
            session_id=session_id,
            cipher_suite_ids=cipher_suite_ids,
            compression_methods=methods,
            extensions=extensions,
        )


@dataclass
class MessageServerHello:
    """The server's answer to a ClientHello, with the chosen parameters."""

    version: Version = Version(0, 0)
    random: HandshakeRandom = field(default_factory=HandshakeRandom)
    session_id: bytes = b""
    cipher_suite_id: int | None = None
    compression_method: CompressionMethod | None = None
    extensions: list[Extension] = field(default_factory=list)

    def type(self) -> HandshakeType:
        return HandshakeType.SERVER_HELLO

    def marshal(self) -> bytes:
        if self.cipher_suite_id is None:
            raise CipherSuiteUnsetError()
        if self.compression_method is None:
            raise CompressionMethodUnsetError()
        return b"".join(
            [
                bytes([self.version.major, self.version.minor]),
                self.random.marshal_fixed(),
                bytes([len(self.session_id) & 0xFF]),
                bytes(self.session_id),
                struct.pack(">H", self.cipher_suite_id & 0xFFFF),
                bytes([int(self.compression_method.id)]),
                marshal_extensions(self.extensions),
            ]
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> MessageServerHello:
        data = bytes(data)
        version, random = _read_version_and_random(data)

        session_id, offset = _read_opaque8(data, _VARIABLE_WIDTH_START)

        if len(data) < offset + 2:
            raise BufferTooSmallError()
        cipher_suite_id = int.from_bytes(data[offset : offset + 2], "big")
        offset += 2

        if len(data) <= offset:
            raise BufferTooSmallError()
        method = compression_methods().get(data[offset])
        if method is None:
            raise InvalidCompressionMethodError()
        offset += 1

        extensions = unmarshal_extensions(data[offset:]) if len(data) > offset else []
        return cls(
            version=version,
            random=random,
            session_id=session_id,
            cipher_suite_id=cipher_suite_id,
            compression_method=method,
            extensions=extensions,
        )