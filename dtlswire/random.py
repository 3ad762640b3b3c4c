"""The random value exchanged in ClientHello and ServerHello."""

from __future__ import annotations

import math
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone

RANDOM_BYTES_LENGTH = 28
RANDOM_LENGTH = RANDOM_BYTES_LENGTH + 4

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class HandshakeRandom:
    """A four byte timestamp followed by 28 random bytes."""

    gmt_unix_time: datetime = _EPOCH
    random_bytes: bytes = bytes(RANDOM_BYTES_LENGTH)

    def __post_init__(self) -> None:
        self.random_bytes = bytes(self.random_bytes)
        if len(self.random_bytes) != RANDOM_BYTES_LENGTH:
            raise ValueError(f"random_bytes must be {RANDOM_BYTES_LENGTH} bytes long")

    def marshal_fixed(self) -> bytes:
        """Encode to exactly RANDOM_LENGTH bytes."""
        seconds = math.floor(self.gmt_unix_time.timestamp())
        return (seconds & 0xFFFFFFFF).to_bytes(4, "big") + self.random_bytes

    @classmethod
    def unmarshal_fixed(cls, data: bytes) -> HandshakeRandom:
        """Decode from exactly RANDOM_LENGTH bytes."""
        data = bytes(data)
        if len(data) != RANDOM_LENGTH:
            raise ValueError(f"handshake random must be {RANDOM_LENGTH} bytes long")
        seconds = int.from_bytes(data[:4], "big")
        return cls(datetime.fromtimestamp(seconds, tz=timezone.utc), data[4:])

    @classmethod
    def generate(cls) -> HandshakeRandom:
        """A fresh random value stamped with the current time."""
        return cls(datetime.now(timezone.utc), secrets.token_bytes(RANDOM_BYTES_LENGTH))