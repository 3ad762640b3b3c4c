"""Core DTLS wire types: content types, versions and simple content."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .errors import BufferTooSmallError, InvalidCipherSpecError


class ContentType(IntEnum):
    """IANA registered record content types."""

    CHANGE_CIPHER_SPEC = 20
    ALERT = 21
    HANDSHAKE = 22
    APPLICATION_DATA = 23


@dataclass(frozen=True)
class Version:
    """Major/minor protocol version carried in records and hellos."""

    major: int
    minor: int


VERSION_1_0 = Version(major=0xFE, minor=0xFF)
VERSION_1_2 = Version(major=0xFE, minor=0xFD)


@dataclass
class ApplicationData:
    """Opaque application payload carried by the record layer."""

    data: bytes = b""

    def content_type(self) -> ContentType:
        return ContentType.APPLICATION_DATA

    def marshal(self) -> bytes:
        return bytes(self.data)

    @classmethod
    def unmarshal(cls, data: bytes) -> ApplicationData:
        return cls(bytes(data))


@dataclass
class ChangeCipherSpec:
    """Signals a transition to the newly negotiated cipher state."""

    def content_type(self) -> ContentType:
        return ContentType.CHANGE_CIPHER_SPEC

    def marshal(self) -> bytes:
        return b"\x01"

    @classmethod
    def unmarshal(cls, data: bytes) -> ChangeCipherSpec:
        if bytes(data) == b"\x01":
            return cls()
        raise InvalidCipherSpecError()


class CompressionMethodID(IntEnum):
    NULL = 0


@dataclass(frozen=True)
class CompressionMethod:
    """A TLS compression method."""

    id: CompressionMethodID = CompressionMethodID.NULL


def compression_methods() -> dict[CompressionMethodID, CompressionMethod]:
    """All supported compression methods, keyed by id."""
    return {CompressionMethodID.NULL: CompressionMethod(CompressionMethodID.NULL)}


def decode_compression_methods(buf: bytes) -> list[CompressionMethod]:
    """Decode a length-prefixed list of compression methods, skipping unknown ones."""
    if len(buf) < 1:
        raise BufferTooSmallError()
    count = buf[0]
    if len(buf) < count + 1:
        raise BufferTooSmallError()
    supported = compression_methods()
    return [supported[method_id] for method_id in buf[1 : count + 1] if method_id in supported]


def encode_compression_methods(methods: list[CompressionMethod]) -> bytes:
    """Encode compression methods as a count byte followed by ids in reverse order."""
    return bytes([len(methods)]) + bytes(method.id for method in reversed(methods))