"""TLS hello extensions and encoding of extension lists."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Union

from .ecc import SupportedEllipticCurves, SupportedPointFormats
from .errors import (
    ALPNInvalidFormatError,
    BufferTooSmallError,
    InvalidExtensionTypeError,
    InvalidSNIFormatError,
    LengthMismatchError,
    NoApplicationProtocolError,
)
from .extension_type import ExtensionType
from .sigalgs import SupportedSignatureAlgorithms
from .srtp import SRTPProtectionProfile, srtp_protection_profiles

_SERVER_NAME_TYPE_DNS_HOST_NAME = 0
_RENEGOTIATION_INFO_HEADER_SIZE = 5
_USE_EXTENDED_MASTER_SECRET_HEADER_SIZE = 4
_USE_SRTP_HEADER_SIZE = 6
_SUPPORTED_GROUPS_HEADER_SIZE = 6


class _Reader:
    """Reads big-endian integers and length-prefixed fields from bytes."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def empty(self) -> bool:
        return self._pos >= len(self._data)

    def read_uint(self, size: int) -> int | None:
        if len(self._data) - self._pos < size:
            return None
        value = int.from_bytes(self._data[self._pos : self._pos + size], "big")
        self._pos += size
        return value

    def read_prefixed(self, size: int) -> _Reader | None:
        start = self._pos
        length = self.read_uint(size)
        if length is None:
            return None
        if len(self._data) - self._pos < length:
            self._pos = start
            return None
        chunk = self._data[self._pos : self._pos + length]
        self._pos += length
        return _Reader(chunk)

    def rest(self) -> bytes:
        return self._data[self._pos :]


def _prefixed(size: int, payload: bytes) -> bytes:
    if len(payload) >= 1 << (8 * size):
        raise ValueError("field too long for its length prefix")
    return len(payload).to_bytes(size, "big") + payload


def _encode_text(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8", "surrogateescape")


def _read_extension_body(data: bytes, expected: ExtensionType) -> _Reader:
    reader = _Reader(data)
    ext_type = reader.read_uint(2)
    if (ext_type or 0) != expected:
        raise InvalidExtensionTypeError()
    body = reader.read_prefixed(2)
    return body if body is not None else _Reader(b"")


def _check_type(data: bytes, expected: ExtensionType) -> None:
    if int.from_bytes(data[:2], "big") != expected:
        raise InvalidExtensionTypeError()


@dataclass
class ALPN:
    """Application-layer protocol negotiation."""

    protocol_name_list: list[str] = field(default_factory=list)

    def type_value(self) -> ExtensionType:
        return ExtensionType.ALPN

    def marshal(self) -> bytes:
        names = b"".join(_prefixed(1, _encode_text(name)) for name in self.protocol_name_list)
        return struct.pack(">H", self.type_value()) + _prefixed(2, _prefixed(2, names))

    @classmethod
    def unmarshal(cls, data: bytes) -> ALPN:
        body = _read_extension_body(data, ExtensionType.ALPN)
        proto_list = body.read_prefixed(2)
        if proto_list is None or proto_list.empty():
            raise ALPNInvalidFormatError()
        names = []
        while not proto_list.empty():
            proto = proto_list.read_prefixed(1)
            if proto is None or proto.empty():
                raise ALPNInvalidFormatError()
            names.append(_decode_text(proto.rest()))
        return cls(names)


def alpn_protocol_selection(
    supported_protocols: list[str], peer_supported_protocols: list[str]
) -> str:
    """Pick the first of our protocols the peer also supports.

    Returns an empty string when either side offers nothing.
    """
    if not supported_protocols or not peer_supported_protocols:
        return ""
    peer = set(peer_supported_protocols)
    for protocol in supported_protocols:
        if protocol in peer:
            return protocol
    raise NoApplicationProtocolError()


@dataclass
class ServerName:
    """Server name indication: the host name the client wants to reach."""

    server_name: str = ""

    def type_value(self) -> ExtensionType:
        return ExtensionType.SERVER_NAME

    def marshal(self) -> bytes:
        entry = bytes([_SERVER_NAME_TYPE_DNS_HOST_NAME]) + _prefixed(
            2, _encode_text(self.server_name)
        )
        return struct.pack(">H", self.type_value()) + _prefixed(2, _prefixed(2, entry))

    @classmethod
    def unmarshal(cls, data: bytes) -> ServerName:
        body = _read_extension_body(data, ExtensionType.SERVER_NAME)
        name_list = body.read_prefixed(2)
        if name_list is None or name_list.empty():
            raise InvalidSNIFormatError()
        server_name = ""
        while not name_list.empty():
            name_type = name_list.read_uint(1)
            name = name_list.read_prefixed(2) if name_type is not None else None
            if name is None or name.empty():
                raise InvalidSNIFormatError()
            if name_type != _SERVER_NAME_TYPE_DNS_HOST_NAME:
                continue
            if server_name:
                raise InvalidSNIFormatError()
            server_name = _decode_text(name.rest())
            if server_name.endswith("."):
                raise InvalidSNIFormatError()
        return cls(server_name)


@dataclass
class RenegotiationInfo:
    """Signals renegotiation support."""

    renegotiated_connection: int = 0

    def type_value(self) -> ExtensionType:
        return ExtensionType.RENEGOTIATION_INFO

    def marshal(self) -> bytes:
        return struct.pack(">HHB", self.type_value(), 1, self.renegotiated_connection)

    @classmethod
    def unmarshal(cls, data: bytes) -> RenegotiationInfo:
        data = bytes(data)
        if len(data) < _RENEGOTIATION_INFO_HEADER_SIZE:
            raise BufferTooSmallError()
        _check_type(data, ExtensionType.RENEGOTIATION_INFO)
        return cls(data[4])


@dataclass
class UseExtendedMasterSecret:
    """Binds the master secret to the full handshake log."""

    supported: bool = False

    def type_value(self) -> ExtensionType:
        return ExtensionType.USE_EXTENDED_MASTER_SECRET

    def marshal(self) -> bytes:
        if not self.supported:
            return b""
        return struct.pack(">HH", self.type_value(), 0)

    @classmethod
    def unmarshal(cls, data: bytes) -> UseExtendedMasterSecret:
        data = bytes(data)
        if len(data) < _USE_EXTENDED_MASTER_SECRET_HEADER_SIZE:
            raise BufferTooSmallError()
        _check_type(data, ExtensionType.USE_EXTENDED_MASTER_SECRET)
        return cls(True)


@dataclass
class UseSRTP:
    """Negotiates the SRTP protection profiles."""

    protection_profiles: list[SRTPProtectionProfile] = field(default_factory=list)

    def type_value(self) -> ExtensionType:
        return ExtensionType.USE_SRTP

    def marshal(self) -> bytes:
        count = len(self.protection_profiles)
        header = struct.pack(">HHH", self.type_value(), 2 + count * 2 + 1, count * 2)
        profiles = b"".join(struct.pack(">H", profile) for profile in self.protection_profiles)
        return header + profiles + b"\x00"

    @classmethod
    def unmarshal(cls, data: bytes) -> UseSRTP:
        data = bytes(data)
        if len(data) <= _USE_SRTP_HEADER_SIZE:
            raise BufferTooSmallError()
        _check_type(data, ExtensionType.USE_SRTP)
        count = int.from_bytes(data[4:6], "big") // 2
        if _SUPPORTED_GROUPS_HEADER_SIZE + count * 2 > len(data):
            raise LengthMismatchError()
        known = srtp_protection_profiles()
        values = (
            int.from_bytes(data[pos : pos + 2], "big")
            for pos in range(_USE_SRTP_HEADER_SIZE, _USE_SRTP_HEADER_SIZE + count * 2, 2)
        )
        return cls([SRTPProtectionProfile(value) for value in values if value in known])


Extension = Union[
    ALPN,
    ServerName,
    RenegotiationInfo,
    UseExtendedMasterSecret,
    UseSRTP,
    SupportedEllipticCurves,
    SupportedPointFormats,
    SupportedSignatureAlgorithms,
]

_DECODERS = {
    ExtensionType.SERVER_NAME: ServerName,
    ExtensionType.SUPPORTED_ELLIPTIC_CURVES: SupportedEllipticCurves,
    ExtensionType.USE_SRTP: UseSRTP,
    ExtensionType.ALPN: ALPN,
    ExtensionType.USE_EXTENDED_MASTER_SECRET: UseExtendedMasterSecret,
    ExtensionType.RENEGOTIATION_INFO: RenegotiationInfo,
}


def unmarshal_extensions(buf: bytes) -> list[Extension]:
    """Decode a length-prefixed block of extensions, skipping unknown types."""
    buf = bytes(buf)
    if not buf:
        return []
    if len(buf) < 2:
        raise BufferTooSmallError()
    if len(buf) - 2 != int.from_bytes(buf[:2], "big"):
        raise LengthMismatchError()

    extensions: list[Extension] = []
    offset = 2
    while offset < len(buf):
        if len(buf) < offset + 2:
            raise BufferTooSmallError()
        decoder = _DECODERS.get(int.from_bytes(buf[offset : offset + 2], "big"))
        if decoder is not None:
            extensions.append(decoder.unmarshal(buf[offset:]))
        if len(buf) < offset + 4:
            raise BufferTooSmallError()
        offset += 4 + int.from_bytes(buf[offset + 2 : offset + 4], "big")
    return extensions


def marshal_extensions(extensions: list[Extension]) -> bytes:
    """Encode extensions as a two byte length followed by their encodings."""
    body = b"".join(extension.marshal() for extension in extensions)
    return struct.pack(">H", len(body)) + body