"""Signature and hash algorithms and the extension that negotiates them."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

from .errors import BufferTooSmallError, InvalidExtensionTypeError, LengthMismatchError
from .extension_type import ExtensionType

_HEADER_SIZE = 6


class HashAlgorithm(IntEnum):
    NONE = 0
    MD5 = 1
    SHA1 = 2
    SHA224 = 3
    SHA256 = 4
    SHA384 = 5
    SHA512 = 6
    ED25519 = 8


class SignatureAlgorithm(IntEnum):
    ANONYMOUS = 0
    RSA = 1
    ECDSA = 3
    ED25519 = 7


SUPPORTED_HASH_ALGORITHMS = frozenset(HashAlgorithm)
SUPPORTED_SIGNATURE_ALGORITHMS = frozenset(
    {SignatureAlgorithm.RSA, SignatureAlgorithm.ECDSA, SignatureAlgorithm.ED25519}
)

_HASHES = {alg.value: alg for alg in SUPPORTED_HASH_ALGORITHMS}
_SIGNATURES = {alg.value: alg for alg in SUPPORTED_SIGNATURE_ALGORITHMS}


@dataclass(frozen=True)
class SignatureHashAlgorithm:
    """A pairing of hash and signature algorithm."""

    hash: HashAlgorithm
    signature: SignatureAlgorithm


@dataclass
class SupportedSignatureAlgorithms:
    """The signature/hash pairs a peer supports."""

    signature_hash_algorithms: list[SignatureHashAlgorithm] = field(default_factory=list)

    def type_value(self) -> ExtensionType:
        return ExtensionType.SUPPORTED_SIGNATURE_ALGORITHMS

    def marshal(self) -> bytes:
        count = len(self.signature_hash_algorithms)
        header = struct.pack(">HHH", self.type_value(), 2 + count * 2, count * 2)
        pairs = bytes(
            value
            for alg in self.signature_hash_algorithms
            for value in (int(alg.hash), int(alg.signature))
        )
        return header + pairs

    @classmethod
    def unmarshal(cls, data: bytes) -> SupportedSignatureAlgorithms:
        data = bytes(data)
        if len(data) <= _HEADER_SIZE:
            raise BufferTooSmallError()
        if int.from_bytes(data[:2], "big") != ExtensionType.SUPPORTED_SIGNATURE_ALGORITHMS:
            raise InvalidExtensionTypeError()
        count = int.from_bytes(data[4:6], "big") // 2
        end = _HEADER_SIZE + count * 2
        if end > len(data):
            raise LengthMismatchError()
        body = data[_HEADER_SIZE:end]
        algorithms = [
            SignatureHashAlgorithm(_HASHES[hash_id], _SIGNATURES[sig_id])
            for hash_id, sig_id in zip(body[0::2], body[1::2])
            if hash_id in _HASHES and sig_id in _SIGNATURES
        ]
        return cls(algorithms)