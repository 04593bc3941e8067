"""Unit tests for calldata decoding."""

import pytest
from eth_abi import encode

from explorer.services.decoding.calldata import (
    decode_static_args,
    has_calldata,
    selector_from,
    selector_of,
)
from explorer.utils.exceptions import CalldataError, DecodeError
from tests.factories import address, encode_call


class TestSelectors:
    """Tests for selector computation and extraction."""

    @pytest.mark.parametrize(
        "signature,expected",
        [
            ("transfer(address,uint256)", "0xa9059cbb"),
            ("transferFrom(address,address,uint256)", "0x23b872dd"),
            ("burn(uint256)", "0x42966c68"),
            ("approve(address,uint256)", "0x095ea7b3"),
        ],
    )
    def test_erc20_selectors(self, signature, expected):
        assert selector_of(signature) == expected

    def test_selector_from_input(self):
        data = encode_call("burn(uint256)", ["uint256"], [5])

        assert selector_from(data) == "0x42966c68"

    def test_selector_from_short_input(self):
        assert selector_from("0x1234") is None
        assert selector_from(None) is None

    def test_has_calldata(self):
        assert has_calldata("0xa9059cbb") is True
        assert has_calldata(b"\x01") is True
        assert has_calldata("0x") is False
        assert has_calldata("") is False
        assert has_calldata(None) is False


class TestDecodeStaticArgs:
    """Tests for fixed-width argument decoding."""

    def test_decode_launch(self):
        order = address(0xD0)
        data = encode_call(
            "launch(address,uint256)", ["address", "uint256"], [order, 2]
        )

        assert decode_static_args(data, ["address", "uint256"]) == (order, 2)

    def test_decode_update_order_code(self):
        order = "0x" + "Ab" * 20
        code = 2**200 + 1
        data = encode_call(
            "updateOrderCode(address,uint256,uint256)",
            ["address", "uint256", "uint256"],
            [order.lower(), 1, code],
        )

        assert decode_static_args(data, ["address", "uint256", "uint256"]) == (
            order.lower(),
            1,
            code,
        )

    def test_extra_bytes_ignored(self):
        """Only the leading static layout is read."""
        data = encode_call("burn(uint256)", ["uint256"], [1]) + "ff" * 40

        assert decode_static_args(data, ["uint256"]) == (1,)

    def test_truncated_raises(self):
        """Calldata shorter than the layout is rejected."""
        data = "0xedfb6516" + encode(["address"], [address(1)]).hex()

        with pytest.raises(CalldataError):
            decode_static_args(data, ["address", "uint256"])

    def test_selector_only_raises(self):
        with pytest.raises(CalldataError, match="truncated"):
            decode_static_args("0x35e646ea", ["address"])

    def test_dynamic_type_rejected(self):
        with pytest.raises(CalldataError):
            decode_static_args("0x" + "00" * 68, ["string"])

    def test_calldata_error_is_decode_error(self):
        assert issubclass(CalldataError, DecodeError)
