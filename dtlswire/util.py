"""Small helpers used during negotiation and fragmentation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .srtp import SRTPProtectionProfile


def find_matching_srtp_profile(
    a: Iterable[SRTPProtectionProfile], b: Iterable[SRTPProtectionProfile]
) -> SRTPProtectionProfile | None:
    """Return the first profile of ``a`` that also appears in ``b``, or None."""
    candidates = list(b)
    return next((profile for profile in a if profile in candidates), None)


def split_bytes(data: Sequence[int], split_len: int) -> list[bytes]:
    """Split ``data`` into chunks of ``split_len`` bytes; the last may be shorter."""
    if split_len <= 0:
        raise ValueError("split_len must be positive")
    raw = bytes(data)
    return [raw[start : start + split_len] for start in range(0, len(raw), split_len)]