"""The DTLS record layer: record headers, records and datagram splitting."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Union

from .alert import Alert
from .errors import (
    BufferTooSmallError,
    InvalidContentTypeError,
    InvalidPacketLengthError,
    SequenceNumberOverflowError,
    UnsupportedProtocolVersionError,
)
from .handshake import Handshake
from .protocol import (
    VERSION_1_0,
    VERSION_1_2,
    ApplicationData,
    ChangeCipherSpec,
    ContentType,
    Version,
)

HEADER_SIZE = 13
MAX_SEQUENCE_NUMBER = 0x0000FFFFFFFFFFFF

Content = Union[ChangeCipherSpec, Alert, Handshake, ApplicationData]

_SUPPORTED_VERSIONS = (VERSION_1_0, VERSION_1_2)


def _content_type(value: int) -> ContentType | int:
    try:
        return ContentType(value)
    except ValueError:
        return value


@dataclass
class RecordHeader:
    """The 13 byte header in front of every DTLS record.

    Decoding does not read the length field; it is filled in when a record
    is encoded.
    """

    content_type: ContentType | int = 0
    content_len: int = 0
    version: Version = Version(0, 0)
    epoch: int = 0
    sequence_number: int = 0

    def marshal(self) -> bytes:
        if self.sequence_number > MAX_SEQUENCE_NUMBER:
            raise SequenceNumberOverflowError()
        return (
            struct.pack(
                ">BBBH",
                int(self.content_type) & 0xFF,
                self.version.major,
                self.version.minor,
                self.epoch & 0xFFFF,
            )
            + self.sequence_number.to_bytes(6, "big")
            + struct.pack(">H", self.content_len & 0xFFFF)
        )

    @classmethod
    def unmarshal(cls, data: bytes) -> RecordHeader:
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise BufferTooSmallError()
        version = Version(data[1], data[2])
        header = cls(
            content_type=_content_type(data[0]),
            version=version,
            epoch=int.from_bytes(data[3:5], "big"),
            sequence_number=int.from_bytes(data[5:11], "big"),
        )
        if version not in _SUPPORTED_VERSIONS:
            raise UnsupportedProtocolVersionError()
        return header


_DECODERS = {
    ContentType.CHANGE_CIPHER_SPEC: ChangeCipherSpec,
    ContentType.ALERT: Alert,
    ContentType.HANDSHAKE: Handshake,
    ContentType.APPLICATION_DATA: ApplicationData,
}


@dataclass
class RecordLayer:
    """A record: a header and the content it carries."""

    header: RecordHeader = field(default_factory=RecordHeader)
    content: Content | None = None

    def marshal(self) -> bytes:
        """Encode the record; the header's length and content type are updated."""
        if self.content is None:
            raise ValueError("record has no content to marshal")
        raw = self.content.marshal()
        self.header.content_len = len(raw)
        self.header.content_type = self.content.content_type()
        return self.header.marshal() + raw

    @classmethod
    def unmarshal(cls, data: bytes) -> RecordLayer:
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise BufferTooSmallError()
        header = RecordHeader.unmarshal(data)
        decoder = _DECODERS.get(data[0])
        if decoder is None:
            raise InvalidContentTypeError()
        return cls(header=header, content=decoder.unmarshal(data[HEADER_SIZE:]))


def unpack_datagram(buf: bytes) -> list[bytes]:
    """Split a datagram into the records it holds, without decoding them."""
    buf = bytes(buf)
    records = []
    offset = 0
    while offset != len(buf):
        if len(buf) - offset <= HEADER_SIZE:
            raise InvalidPacketLengthError()
        packet_length = HEADER_SIZE + int.from_bytes(buf[offset + 11 : offset + 13], "big")
        if offset + packet_length > len(buf):
            raise InvalidPacketLengthError()
        records.append(buf[offset : offset + packet_length])
        offset += packet_length
    return records