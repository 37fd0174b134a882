"""Single-byte TLV records as used by the ZATCA invoice QR code."""

from __future__ import annotations

import struct

MAX_VALUE_LENGTH = 255


class TlvEncodingError(ValueError):
    """A value cannot be represented with a 1-byte tag and 1-byte length."""


def encode_tlv(tag: int, value: str) -> bytes:
    """Encode one field as ``tag || length || utf-8 value``.

    Raises ``TlvEncodingError`` when the tag is outside 1-255 or the encoded
    value exceeds 255 bytes. Values are never truncated.
    """
    if not 1 <= tag <= 255:
        raise TlvEncodingError(f"TLV tag out of range: {tag} (must be 1-255)")
    data = value.encode("utf-8")
    length = len(data)
    if length > MAX_VALUE_LENGTH:
        raise TlvEncodingError(
            f"TLV value for tag {tag} too long: {length} bytes (max {MAX_VALUE_LENGTH})"
        )
    return struct.pack("BB", tag, length) + data


def decode_tlv(data: bytes) -> list[tuple[int, str]]:
    """Parse concatenated TLV records back into ``(tag, value)`` pairs, in order."""
    records: list[tuple[int, str]] = []
    pos = 0
    while pos < len(data):
        if pos + 2 > len(data):
            raise TlvEncodingError(f"Truncated TLV header at offset {pos}")
        tag, length = data[pos], data[pos + 1]
        end = pos + 2 + length
        if end > len(data):
            raise TlvEncodingError(
                f"Tag {tag} declares {length} bytes but only {len(data) - pos - 2} remain"
            )
        records.append((tag, data[pos + 2:end].decode("utf-8")))
        pos = end
    return records
