"""Unit tests for formatting helpers."""

import pytest

from explorer.utils.formatters import (
    mask_address,
    mask_tx_hash,
    normalize_address,
    normalize_hex,
    tx_fee,
    wei_to_ether,
)


class TestNormalize:
    """Tests for hex and address normalization."""

    def test_bytes(self):
        assert normalize_hex(b"\x01\xab") == "0x01ab"

    def test_string_without_prefix(self):
        assert normalize_hex("ABCD") == "0xabcd"

    def test_checksum_address(self):
        checksum = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

        assert normalize_address(checksum) == checksum.lower()

    def test_none_address(self):
        assert normalize_address(None) is None


class TestAmounts:
    """Tests for ether conversion and fees."""

    @pytest.mark.parametrize(
        "wei,expected",
        [
            (0, "0"),
            (10**18, "1"),
            (1_500_000_000_000_000_000, "1.5"),
            (100 * 10**18, "100"),
            (1, "0.000000000000000001"),
        ],
    )
    def test_wei_to_ether(self, wei, expected):
        assert wei_to_ether(wei) == expected

    def test_tx_fee_rounded_to_four_places(self):
        """20 gwei * 21000 gas = 0.00042 ether."""
        assert tx_fee(20_000_000_000, 21_000) == "0.0004"

    def test_tx_fee_rounds_half_up(self):
        assert tx_fee(10**9, 50_000_000) == "0.0500"
        assert tx_fee(10**9, 150_000) == "0.0002"

    def test_tx_fee_zero(self):
        assert tx_fee(0, 21_000) == "0.0000"


class TestMasking:
    """Tests for log masking helpers."""

    def test_mask_address(self):
        assert (
            mask_address("0x1234567890abcdef1234567890abcdef12345678")
            == "0x1234...5678"
        )

    def test_mask_short_values(self):
        assert mask_address("0x12") == "***"
        assert mask_tx_hash(None) == "***"

    def test_mask_tx_hash(self):
        assert mask_tx_hash("0x" + "ab" * 32) == "0xabababab...ababab"
