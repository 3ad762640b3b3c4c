"""IANA registered TLS extension type values."""

from __future__ import annotations

from enum import IntEnum


class ExtensionType(IntEnum):
    """The two byte type value that starts every TLS extension."""

    SERVER_NAME = 0
    SUPPORTED_ELLIPTIC_CURVES = 10
    SUPPORTED_POINT_FORMATS = 11
    SUPPORTED_SIGNATURE_ALGORITHMS = 13
    USE_SRTP = 14
    ALPN = 16
    USE_EXTENDED_MASTER_SECRET = 23
    RENEGOTIATION_INFO = 65281