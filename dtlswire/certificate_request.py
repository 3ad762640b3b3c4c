"""The CertificateRequest handshake message."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from .errors import BufferTooSmallError
from .handshake_header import HandshakeType
from .sigalgs import (
    SUPPORTED_HASH_ALGORITHMS,
    SUPPORTED_SIGNATURE_ALGORITHMS,
    SignatureHashAlgorithm,
)

_MIN_LENGTH = 5


class ClientCertificateType(IntEnum):
    """Kinds of certificate a server may ask the client for."""

    RSA_SIGN = 1
    ECDSA_SIGN = 64


@dataclass
class MessageCertificateRequest:
    """Sent by a server that wants the client to authenticate with a certificate."""

    certificate_types: list[ClientCertificateType] = field(default_factory=list)
    signature_hash_algorithms: list[SignatureHashAlgorithm] = field(default_factory=list)
    certificate_authorities_names: list[bytes] = field(default_factory=list)

    def type(self) -> HandshakeType:
        return HandshakeType.CERTIFICATE_REQUEST

    def marshal(self) -> bytes:
        out = bytearray([len(self.certificate_types) & 0xFF])
        out += bytes(int(cert_type) for cert_type in self.certificate_types)

        out += struct.pack(">H", (len(self.signature_hash_algorithms) * 2) & 0xFFFF)
        for alg in self.signature_hash_algorithms:
            out += bytes([int(alg.hash), int(alg.signature)])

        names = b"".join(
            struct.pack(">H", len(name)) + bytes(name)
            for name in self.certificate_authorities_names
        )
        out += struct.pack(">H", len(names) & 0xFFFF)
        out += names
        return bytes(out)

    @classmethod
    def unmarshal(cls, data: bytes) -> MessageCertificateRequest:
        data = bytes(data)
        if len(data) < _MIN_LENGTH:
            raise BufferTooSmallError()

        types_length = data[0]
        offset = 1
        if offset + types_length > len(data):
            raise BufferTooSmallError()
        known_types = {cert_type.value: cert_type for cert_type in ClientCertificateType}
        certificate_types = [
            known_types[value]
            for value in data[offset : offset + types_length]
            if value in known_types
        ]
        offset += types_length

        if len(data) < offset + 2:
            raise BufferTooSmallError()
        algorithms_length = int.from_bytes(data[offset : offset + 2], "big")
        offset += 2
        if offset + algorithms_length > len(data):
            raise BufferTooSmallError()

        hashes = {alg.value: alg for alg in SUPPORTED_HASH_ALGORITHMS}
        signatures = {alg.value: alg for alg in SUPPORTED_SIGNATURE_ALGORITHMS}
        algorithms = []
        for pos in range(offset, offset + algorithms_length, 2):
            if len(data) < pos + 2:
                raise BufferTooSmallError()
            hash_id, sig_id = data[pos], data[pos + 1]
            if hash_id in hashes and sig_id in signatures:
                algorithms.append(SignatureHashAlgorithm(hashes[hash_id], signatures[sig_id]))
        offset += algorithms_length

        if len(data) < offset + 2:
            raise BufferTooSmallError()
        names_length = int.from_bytes(data[offset : offset + 2], "big")
        offset += 2
        if offset + names_length > len(data):
            raise BufferTooSmallError()
        names_block = data[offset : offset + names_length]

        names = []
        pos = 0
        while pos < len(names_block):
            if len(names_block) - pos < 2:
                raise BufferTooSmallError()
            name_length = int.from_bytes(names_block[pos : pos + 2], "big")
            pos += 2
            if len(names_block) - pos < name_length:
                raise BufferTooSmallError()
            names.append(names_block[pos : pos + name_length])
            pos += name_length

        return cls(certificate_types, algorithms, names)