"""TLS alert protocol messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .errors import BufferTooSmallError
from .protocol import ContentType


class AlertLevel(IntEnum):
    WARNING = 1
    FATAL = 2

    def __str__(self) -> str:
        return self.name.capitalize()


_DESCRIPTION_LABELS = {"UNKNOWN_CA": "UnknownCA"}


class AlertDescription(IntEnum):
    CLOSE_NOTIFY = 0
    UNEXPECTED_MESSAGE = 10
    BAD_RECORD_MAC = 20
    DECRYPTION_FAILED = 21
    RECORD_OVERFLOW = 22
    DECOMPRESSION_FAILURE = 30
    HANDSHAKE_FAILURE = 40
    NO_CERTIFICATE = 41
    BAD_CERTIFICATE = 42
    UNSUPPORTED_CERTIFICATE = 43
    CERTIFICATE_REVOKED = 44
    CERTIFICATE_EXPIRED = 45
    CERTIFICATE_UNKNOWN = 46
    ILLEGAL_PARAMETER = 47
    UNKNOWN_CA = 48
    ACCESS_DENIED = 49
    DECODE_ERROR = 50
    DECRYPT_ERROR = 51
    EXPORT_RESTRICTION = 60
    PROTOCOL_VERSION = 70
    INSUFFICIENT_SECURITY = 71
    INTERNAL_ERROR = 80
    USER_CANCELED = 90
    NO_RENEGOTIATION = 100
    UNSUPPORTED_EXTENSION = 110
    NO_APPLICATION_PROTOCOL = 120

    def __str__(self) -> str:
        label = _DESCRIPTION_LABELS.get(self.name)
        if label is None:
            label = "".join(part.capitalize() for part in self.name.split("_"))
        return label


def _level(value: int) -> AlertLevel | int:
    try:
        return AlertLevel(value)
    except ValueError:
        return value


def _description(value: int) -> AlertDescription | int:
    try:
        return AlertDescription(value)
    except ValueError:
        return value


@dataclass
class Alert:
    """An alert: a severity level and a description.

    Values outside the known enums are kept as plain integers.
    """

    level: AlertLevel | int = 0
    description: AlertDescription | int = 0

    def content_type(self) -> ContentType:
        return ContentType.ALERT

    def marshal(self) -> bytes:
        return bytes([int(self.level), int(self.description)])

    @classmethod
    def unmarshal(cls, data: bytes) -> Alert:
        if len(data) != 2:
            raise BufferTooSmallError()
        return cls(level=_level(data[0]), description=_description(data[1]))

    def __str__(self) -> str:
        level = str(self.level) if isinstance(self.level, AlertLevel) else "Invalid alert level"
        if isinstance(self.description, AlertDescription):
            description = str(self.description)
        else:
            description = "Invalid alert description"
        return f"Alert {level}: {description}"