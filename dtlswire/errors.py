"""Error hierarchy for the DTLS wire format.

Every error belongs to one of a few categories (fatal, internal, temporary,
timeout, handshake) that tell the caller whether the connection is still
usable.  Specific errors subclass their category.
"""

from __future__ import annotations


class DTLSError(Exception):
    """Base class of all DTLS errors."""

    prefix = "dtls"
    default_message = ""

    def __init__(self, message: str | None = None) -> None:
        self.message = self.default_message if message is None else message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"

    def timeout(self) -> bool:
        """Whether the error was caused by a timeout."""
        return False

    def temporary(self) -> bool:
        """Whether the connection is still usable after this error."""
        return False


class FatalError(DTLSError):
    """The connection is no longer available, usually due to misconfiguration."""

    prefix = "dtls fatal"


class InternalError(DTLSError):
    """An implementation problem made the connection unusable."""

    prefix = "dtls internal"


class TemporaryError(DTLSError):
    """The request failed, but the connection is still available."""

    prefix = "dtls temporary"

    def temporary(self) -> bool:
        return True


class DTLSTimeoutError(DTLSError):
    """The request timed out."""

    prefix = "dtls timeout"

    def timeout(self) -> bool:
        return True

    def temporary(self) -> bool:
        return True


def _network_cause(err: BaseException | None) -> BaseException | None:
    """Find the first DTLS or timeout error along the cause chain."""
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        if isinstance(err, (DTLSError, TimeoutError)):
            return err
        err = err.__cause__
    return None


class HandshakeError(DTLSError):
    """The handshake failed; wraps the error that caused it."""

    prefix = "handshake error"

    def __init__(self, err: BaseException) -> None:
        self.err = err
        super().__init__(str(err))
        self.__cause__ = err

    def timeout(self) -> bool:
        cause = _network_cause(self.err)
        if isinstance(cause, DTLSError):
            return cause.timeout()
        return isinstance(cause, TimeoutError)

    def temporary(self) -> bool:
        cause = _network_cause(self.err)
        if isinstance(cause, DTLSError):
            return cause.temporary()
        return isinstance(cause, TimeoutError)


class BufferTooSmallError(TemporaryError):
    default_message = "buffer is too small"


class InvalidCipherSpecError(FatalError):
    default_message = "cipher spec invalid"


class ALPNInvalidFormatError(FatalError):
    default_message = "invalid alpn format"


class NoApplicationProtocolError(FatalError):
    default_message = "no application protocol"


class InvalidExtensionTypeError(FatalError):
    default_message = "invalid extension type"


class InvalidSNIFormatError(FatalError):
    default_message = "invalid server name format"


class LengthMismatchError(InternalError):
    default_message = "data length and declared length do not match"


class UnableToMarshalFragmentedError(InternalError):
    default_message = "unable to marshal fragmented handshakes"


class HandshakeMessageUnsetError(InternalError):
    default_message = "handshake message unset, unable to marshal"


class InvalidClientKeyExchangeError(FatalError):
    default_message = "unable to determine if ClientKeyExchange is a public key or PSK Identity"


class InvalidHashAlgorithmError(FatalError):
    default_message = "invalid hash algorithm"


class InvalidSignatureAlgorithmError(FatalError):
    default_message = "invalid signature algorithm"


class CookieTooLongError(FatalError):
    default_message = "cookie must not be longer then 255 bytes"


class InvalidEllipticCurveTypeError(FatalError):
    default_message = "invalid or unknown elliptic curve type"


class InvalidNamedCurveError(FatalError):
    default_message = "invalid named curve"


class CipherSuiteUnsetError(FatalError):
    default_message = "server hello can not be created without a cipher suite"


class CompressionMethodUnsetError(FatalError):
    default_message = "server hello can not be created without a compression method"


class InvalidCompressionMethodError(FatalError):
    default_message = "invalid or unknown compression method"


class NotImplementedFeatureError(InternalError):
    default_message = "feature has not been implemented yet"


class InvalidPacketLengthError(TemporaryError):
    default_message = "packet length and declared length do not match"


class SequenceNumberOverflowError(InternalError):
    default_message = "sequence number overflow"


class UnsupportedProtocolVersionError(FatalError):
    default_message = "unsupported protocol version"


class InvalidContentTypeError(TemporaryError):
    default_message = "invalid content type"