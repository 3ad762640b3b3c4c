"""Handshake records: a header followed by one handshake message."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .certificate_request import MessageCertificateRequest
from .errors import (
    HandshakeMessageUnsetError,
    LengthMismatchError,
    NotImplementedFeatureError,
    UnableToMarshalFragmentedError,
)
from .handshake_header import HEADER_LENGTH, HandshakeHeader, HandshakeType
from .hello import MessageClientHello, MessageServerHello
from .key_exchange import (
    KeyExchangeAlgorithm,
    MessageClientKeyExchange,
    MessageServerKeyExchange,
)
from .messages import (
    MessageCertificate,
    MessageCertificateVerify,
    MessageFinished,
    MessageHelloVerifyRequest,
    MessageServerHelloDone,
)
from .protocol import ContentType

HandshakeMessage = Union[
    MessageClientHello,
    MessageServerHello,
    MessageHelloVerifyRequest,
    MessageCertificate,
    MessageServerKeyExchange,
    MessageCertificateRequest,
    MessageServerHelloDone,
    MessageClientKeyExchange,
    MessageFinished,
    MessageCertificateVerify,
]

_DECODERS = {
    HandshakeType.CLIENT_HELLO: MessageClientHello,
    HandshakeType.HELLO_VERIFY_REQUEST: MessageHelloVerifyRequest,
    HandshakeType.SERVER_HELLO: MessageServerHello,
    HandshakeType.CERTIFICATE: MessageCertificate,
    HandshakeType.CERTIFICATE_REQUEST: MessageCertificateRequest,
    HandshakeType.SERVER_HELLO_DONE: MessageServerHelloDone,
    HandshakeType.FINISHED: MessageFinished,
    HandshakeType.CERTIFICATE_VERIFY: MessageCertificateVerify,
}

_KEY_EXCHANGE_DECODERS = {
    HandshakeType.SERVER_KEY_EXCHANGE: MessageServerKeyExchange,
    HandshakeType.CLIENT_KEY_EXCHANGE: MessageClientKeyExchange,
}


@dataclass
class Handshake:
    """A handshake header together with the message it describes."""

    header: HandshakeHeader = field(default_factory=HandshakeHeader)
    message: HandshakeMessage | None = None

    def content_type(self) -> ContentType:
        return ContentType.HANDSHAKE

    def marshal(self) -> bytes:
        """Encode header and message; the header's lengths and type are updated."""
        if self.message is None:
            raise HandshakeMessageUnsetError()
        if self.header.fragment_offset != 0:
            raise UnableToMarshalFragmentedError()
        body = self.message.marshal()
        self.header.length = len(body)
        self.header.fragment_length = len(body)
        self.header.type = self.message.type()
        return self.header.marshal() + body

    @classmethod
    def unmarshal(
        cls,
        data: bytes,
        key_exchange_algorithm: KeyExchangeAlgorithm = KeyExchangeAlgorithm.NONE,
    ) -> Handshake:
        """Decode a whole, unfragmented handshake message.

        The key exchange algorithm is needed to decode key exchange messages.
        """
        data = bytes(data)
        header = HandshakeHeader.unmarshal(data)
        reported_length = int.from_bytes(data[1:4], "big")
        if len(data) - HEADER_LENGTH != reported_length:
            raise LengthMismatchError()
        if reported_length != header.fragment_length:
            raise LengthMismatchError()

        body = data[HEADER_LENGTH:]
        message_type = data[0]
        key_exchange = _KEY_EXCHANGE_DECODERS.get(message_type)
        if key_exchange is not None:
            message: HandshakeMessage = key_exchange.unmarshal(body, key_exchange_algorithm)
        else:
            decoder = _DECODERS.get(message_type)
            if decoder is None:
                raise NotImplementedFeatureError()
            message = decoder.unmarshal(body)
        return cls(header=header, message=message)