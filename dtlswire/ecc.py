"""Elliptic curve identifiers and the extensions that negotiate them."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from .errors import BufferTooSmallError, InvalidExtensionTypeError, LengthMismatchError
from .extension_type import ExtensionType

_SUPPORTED_GROUPS_HEADER_SIZE = 6
_SUPPORTED_POINT_FORMATS_SIZE = 5


class Curve(IntEnum):
    """Named curves (supported groups)."""

    P256 = 0x0017
    P384 = 0x0018
    X25519 = 0x001D


class CurveType(IntEnum):
    """How the curve is described in a ServerKeyExchange."""

    NAMED_CURVE = 0x03


class CurvePointFormat(IntEnum):
    """Encoding of elliptic curve points."""

    UNCOMPRESSED = 0


_CURVES = {curve.value: curve for curve in Curve}
_POINT_FORMATS = {fmt.value: fmt for fmt in CurvePointFormat}


def _check_type(data: bytes, expected: ExtensionType) -> None:
    if int.from_bytes(data[:2], "big") != expected:
        raise InvalidExtensionTypeError()


@dataclass
class SupportedEllipticCurves:
    """The curves a peer supports."""

    elliptic_curves: list[Curve] = field(default_factory=list)

    def type_value(self) -> ExtensionType:
        return ExtensionType.SUPPORTED_ELLIPTIC_CURVES

    def marshal(self) -> bytes:
        count = len(self.elliptic_curves)
        header = struct.pack(">HHH", self.type_value(), 2 + count * 2, count * 2)
        return header + b"".join(struct.pack(">H", curve) for curve in self.elliptic_curves)

    @classmethod
    def unmarshal(cls, data: bytes) -> SupportedEllipticCurves:
        data = bytes(data)
        if len(data) <= _SUPPORTED_GROUPS_HEADER_SIZE:
            raise BufferTooSmallError()
        _check_type(data, ExtensionType.SUPPORTED_ELLIPTIC_CURVES)
        count = int.from_bytes(data[4:6], "big") // 2
        end = _SUPPORTED_GROUPS_HEADER_SIZE + count * 2
        if end > len(data):
            raise LengthMismatchError()
        ids = (
            int.from_bytes(data[pos : pos + 2], "big")
            for pos in range(_SUPPORTED_GROUPS_HEADER_SIZE, end, 2)
        )
        return cls([_CURVES[value] for value in ids if value in _CURVES])


@dataclass
class SupportedPointFormats:
    """The point formats a peer supports."""

    point_formats: list[CurvePointFormat] = field(default_factory=list)

    def type_value(self) -> ExtensionType:
        return ExtensionType.SUPPORTED_POINT_FORMATS

    def marshal(self) -> bytes:
        count = len(self.point_formats)
        header = struct.pack(">HHB", self.type_value(), 1 + count, count)
        return header + bytes(int(fmt) for fmt in self.point_formats)

    @classmethod
    def unmarshal(cls, data: bytes) -> SupportedPointFormats:
        data = bytes(data)
        if len(data) <= _SUPPORTED_POINT_FORMATS_SIZE:
            raise BufferTooSmallError()
        _check_type(data, ExtensionType.SUPPORTED_POINT_FORMATS)
        count = data[4]
        end = _SUPPORTED_POINT_FORMATS_SIZE + count
        if end > len(data):
            raise LengthMismatchError()
        formats = data[_SUPPORTED_POINT_FORMATS_SIZE:end]
        return cls([_POINT_FORMATS[value] for value in formats if value in _POINT_FORMATS])