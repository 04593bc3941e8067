"""Unit tests for domain enums."""

import pytest

from explorer.models.enums import ContractFamily, TxType


class TestTxType:
    """Tests for transaction type categories."""

    @pytest.mark.parametrize(
        "tx_type",
        [
            TxType.ADD_OPERATOR,
            TxType.REMOVE_OPERATOR,
            TxType.SET_NAME,
            TxType.SET_URL,
            TxType.SET_RECIPIENT,
            TxType.SET_ORDER_URL,
        ],
    )
    def test_management_category(self, tx_type):
        assert tx_type.is_management is True
        assert tx_type.category == "MANAGEMENT"

    @pytest.mark.parametrize(
        "tx_type", [TxType.DEPLOY, TxType.ORDER_UPDATE, TxType.TRANSFER]
    )
    def test_other_types_are_their_own_category(self, tx_type):
        assert tx_type.is_management is False
        assert tx_type.category == tx_type.value

    def test_wire_values(self):
        assert TxType.MARK_PAYMENT.value == "MARK-PAYMENT"
        assert TxType.SET_ORDER_URL.value == "setOrderUrl"


class TestContractFamily:
    def test_from_tag(self):
        assert ContractFamily.from_tag("order") == ContractFamily.ORDER
        assert ContractFamily.from_tag("ORDER") is None
        assert ContractFamily.from_tag("") is None
