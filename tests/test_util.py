import pytest

from dtlswire.srtp import SRTPProtectionProfile
from dtlswire.util import find_matching_srtp_profile, split_bytes

P80 = SRTPProtectionProfile.SRTP_AES128_CM_HMAC_SHA1_80
P32 = SRTPProtectionProfile.SRTP_AES128_CM_HMAC_SHA1_32
GCM = SRTPProtectionProfile.SRTP_AEAD_AES_128_GCM


def test_matching_profile_follows_first_list_order():
    assert find_matching_srtp_profile([P32, P80], [P80, P32]) is P32
    assert find_matching_srtp_profile([P80, P32], [P32, P80]) is P80


def test_no_matching_profile():
    assert find_matching_srtp_profile([P80], [GCM]) is None
    assert find_matching_srtp_profile([], [GCM]) is None


def test_split_bytes_chunks():
    data = b"abcdefg"
    chunks = split_bytes(data, 3)
    assert chunks == [data[0:3], data[3:6], data[6:]]
    assert b"".join(chunks) == data


def test_split_bytes_exact_multiple():
    data = bytes(range(8))
    chunks = split_bytes(data, 4)
    assert [len(c) for c in chunks] == [4, 4]
    assert b"".join(chunks) == data


def test_split_bytes_empty():
    assert split_bytes(b"", 5) == []


def test_split_bytes_rejects_non_positive_length():
    with pytest.raises(ValueError):
        split_bytes(b"abc", 0)