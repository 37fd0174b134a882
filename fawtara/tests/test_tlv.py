"""Unit tests for single-byte TLV encoding."""

from __future__ import annotations

import pytest

from fawtara.app.services.zatca.tlv import TlvEncodingError, decode_tlv, encode_tlv


class TestEncodeTlv:
    def test_record_layout(self) -> None:
        assert encode_tlv(1, "abc") == b"\x01\x03abc"

    def test_length_prefix_counts_utf8_bytes(self) -> None:
        value = "شركة"
        record = encode_tlv(1, value)
        assert record[0] == 1
        assert record[1] == len(value.encode("utf-8")) == 8
        assert len(record) == 2 + 8

    @pytest.mark.parametrize(
        "tag,value",
        [
            (1, ""),
            (2, "310123456700003"),
            (3, "2025-01-01T10:00:00Z"),
            (5, "شركة تجريبية"),
            (255, "x" * 255),
        ],
    )
    def test_round_trip(self, tag: int, value: str) -> None:
        assert decode_tlv(encode_tlv(tag, value)) == [(tag, value)]

    def test_value_over_255_bytes_raises(self) -> None:
        with pytest.raises(TlvEncodingError, match="256 bytes"):
            encode_tlv(1, "a" * 256)

    def test_multibyte_overflow_raises(self) -> None:
        """128 Arabic letters are only 128 characters but 256 UTF-8 bytes."""
        with pytest.raises(TlvEncodingError):
            encode_tlv(1, "ش" * 128)

    @pytest.mark.parametrize("tag", [0, 256, -1])
    def test_tag_out_of_range(self, tag: int) -> None:
        with pytest.raises(TlvEncodingError):
            encode_tlv(tag, "x")

    def test_error_is_value_error(self) -> None:
        assert issubclass(TlvEncodingError, ValueError)


class TestDecodeTlv:
    def test_records_in_order(self) -> None:
        data = encode_tlv(2, "b") + encode_tlv(1, "a")
        assert decode_tlv(data) == [(2, "b"), (1, "a")]

    def test_truncated_header(self) -> None:
        with pytest.raises(TlvEncodingError):
            decode_tlv(b"\x01")

    def test_declared_length_exceeds_data(self) -> None:
        with pytest.raises(TlvEncodingError):
            decode_tlv(b"\x01\x05ab")
