import pytest

from dtlswire.extension_type import ExtensionType


@pytest.mark.parametrize(
    ("member", "value"),
    [
        (ExtensionType.SERVER_NAME, 0),
        (ExtensionType.SUPPORTED_ELLIPTIC_CURVES, 10),
        (ExtensionType.SUPPORTED_POINT_FORMATS, 11),
        (ExtensionType.SUPPORTED_SIGNATURE_ALGORITHMS, 13),
        (ExtensionType.USE_SRTP, 14),
        (ExtensionType.ALPN, 16),
        (ExtensionType.USE_EXTENDED_MASTER_SECRET, 23),
        (ExtensionType.RENEGOTIATION_INFO, 65281),
    ],
)
def test_registered_values(member, value):
    assert int(member) == value
    assert ExtensionType(value) is member


def test_unknown_value_rejected():
    with pytest.raises(ValueError):
        ExtensionType(12345)


def test_values_fit_in_two_bytes():
    assert ExtensionType(65281).to_bytes(2, "big") == b"\xff\x01"
    assert ExtensionType(16).to_bytes(2, "big") == b"\x00\x10"