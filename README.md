# dtlswire

`dtlswire` reads and writes the DTLS wire format. Each message type is a
dataclass. Its `marshal()` method returns bytes, and its `unmarshal()`
class method builds a new instance from bytes.

The package is pure Python and has no dependencies outside the standard library.

## Installation

From a checkout of the project:

```
pip install .
```

To run the tests:

```
pip install ".[test]"
python -m pytest
```

## What is covered

| Module | Contents |
| --- | --- |
| `dtlswire.recordlayer` | `RecordHeader`, `RecordLayer`, `unpack_datagram` |
| `dtlswire.handshake` | `Handshake` (a handshake header together with one message) |
| `dtlswire.handshake_header` | `HandshakeType`, `HandshakeHeader` |
| `dtlswire.hello` | `MessageClientHello`, `MessageServerHello` |
| `dtlswire.key_exchange` | `KeyExchangeAlgorithm`, `MessageClientKeyExchange`, `MessageServerKeyExchange` |
| `dtlswire.messages` | `MessageCertificate`, `MessageCertificateVerify`, `MessageFinished`, `MessageHelloVerifyRequest`, `MessageServerHelloDone`, `encode_cipher_suite_ids`, `decode_cipher_suite_ids` |
| `dtlswire.certificate_request` | `ClientCertificateType`, `MessageCertificateRequest` |
| `dtlswire.random` | `HandshakeRandom` (use `generate()` to make a fresh value) |
| `dtlswire.protocol` | `ContentType`, `Version`, `ApplicationData`, `ChangeCipherSpec`, compression methods |
| `dtlswire.alert` | `Alert`, `AlertLevel`, `AlertDescription` |
| `dtlswire.extension` | `ALPN`, `ServerName`, `RenegotiationInfo`, `UseExtendedMasterSecret`, `UseSRTP`, `marshal_extensions`, `unmarshal_extensions`, `alpn_protocol_selection` |
| `dtlswire.ecc` | `Curve`, `CurveType`, `CurvePointFormat`, `SupportedEllipticCurves`, `SupportedPointFormats` |
| `dtlswire.sigalgs` | `HashAlgorithm`, `SignatureAlgorithm`, `SignatureHashAlgorithm`, `SupportedSignatureAlgorithms` |
| `dtlswire.srtp` | `SRTPProtectionProfile` |
| `dtlswire.extension_type` | `ExtensionType` |
| `dtlswire.util` | `find_matching_srtp_profile`, `split_bytes` |
| `dtlswire.session` | `Session`, `SessionStore`, `MemorySessionStore` |
| `dtlswire.errors` | the error classes |

## Usage

### Splitting a datagram into records

```python
from dtlswire.recordlayer import RecordLayer, unpack_datagram

for raw in unpack_datagram(datagram):
    record = RecordLayer.unmarshal(raw)
    print(record.header.epoch, record.header.sequence_number, record.content)
```

`unpack_datagram` splits a datagram into records using the length field of
each record header. It does not decode the records. `RecordHeader.unmarshal`
raises `UnsupportedProtocolVersionError` for any version other than DTLS 1.0
(`fe ff`) or DTLS 1.2 (`fe fd`). It does not read the length field. That
field is filled in when `RecordLayer.marshal()` runs.

### Handshake messages

```python
from dtlswire.handshake import Handshake
from dtlswire.key_exchange import KeyExchangeAlgorithm

handshake = Handshake.unmarshal(raw, KeyExchangeAlgorithm.ECDHE)
print(handshake.header.type, handshake.message)
encoded = handshake.marshal()
```

`MessageServerKeyExchange` and `MessageClientKeyExchange` can only be
decoded once the negotiated key exchange algorithm is known. Their
`unmarshal` class methods take that algorithm as a second argument.
`Handshake.unmarshal` passes its own second argument on to them. That
argument defaults to `KeyExchangeAlgorithm.NONE`, and with that value
decoding a key exchange message raises `CipherSuiteUnsetError`.

`Handshake.marshal()` sets the header's type, length and fragment length
from the message. It raises `UnableToMarshalFragmentedError` if the
header has a non-zero fragment offset. Decoding a HelloRequest, or any
other unknown message type, raises `NotImplementedFeatureError`.

### Extensions

```python
from dtlswire.extension import ALPN, alpn_protocol_selection, marshal_extensions, unmarshal_extensions

raw = marshal_extensions([ALPN(["h2", "http/1.1"])])
extensions = unmarshal_extensions(raw)
chosen = alpn_protocol_selection(["http/1.1"], ["h2", "http/1.1"])  # "http/1.1"
```

`unmarshal_extensions` decodes these extensions:

- server name
- supported groups
- use_srtp
- ALPN
- extended master secret
- renegotiation info

It skips every other type, including supported point formats and signature
algorithms. Call `SupportedPointFormats.unmarshal` or
`SupportedSignatureAlgorithms.unmarshal` directly to decode those two.

`alpn_protocol_selection` returns an empty string when either list is empty.
It raises `NoApplicationProtocolError` when the two lists share no protocol.

### Alerts

```python
from dtlswire.alert import Alert

alert = Alert.unmarshal(b"\x02\x0a")
print(alert)  # Alert Fatal: UnexpectedMessage
```

## Errors

Every decoding or encoding failure raises a subclass of
`dtlswire.errors.DTLSError`. The subclasses fall into these families:

- `FatalError`
- `InternalError`
- `TemporaryError`
- `DTLSTimeoutError`
- `HandshakeError`, which wraps the error that caused it

Call `timeout()` and `temporary()` on an error to decide whether the
failure is worth retrying. For example, input that is too short raises
`BufferTooSmallError`, which is a `TemporaryError`.

## Sessions

`dtlswire.session` defines a `Session` record (`id` and `secret`) and the
abstract `SessionStore` interface, with `set`, `get` and `delete`. It also
provides `MemorySessionStore`, which keeps sessions in a dictionary. Its
`get` raises `KeyError` for an unknown key.

## What this package does not do

The package only turns bytes into objects and objects back into bytes.
It does not do any of the following:

- open sockets or manage connections
- run the handshake state machine
- negotiate or implement cipher suites
- encrypt, decrypt or check record MACs
- derive keys
- detect replayed records
- save or restore connection state for resumption

The session stores hold data but nothing in the package uses them.