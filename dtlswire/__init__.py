"""Encoding and decoding of the DTLS wire format: records, handshake messages, alerts and extensions."""

__version__ = "0.1.0"