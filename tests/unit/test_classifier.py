"""Unit tests for TransactionClassifier."""

import pytest

from explorer.models.enums import ContractFamily, TxType
from explorer.services.classifier.classifier import build_base_fields
from explorer.services.classifier.service import ServiceHandler
from explorer.utils.exceptions import ChainCallError
from tests.factories import (
    GAS_PRICE,
    SHIPPER,
    address,
    encode_call,
    make_log,
    make_receipt,
    make_tx,
    recognized,
    tx_hash,
)

SERVICE = address(0x5E)
COMPANY = address(0xC0)
STRANGER = address(0x99)


def register_tx(n: int = 1, to: str = SERVICE) -> tuple[dict, dict]:
    tx = make_tx(n, to, encode_call("register(address)", ["address"], [COMPANY]))
    receipt = make_receipt(tx, logs=[make_log("CompanyRegistered", to, company=COMPANY)])
    tx["blockNumber"] = 12
    return tx, receipt


class TestBuildBaseFields:
    """Tests for the shared blockchain columns."""

    def test_values(self):
        tx, receipt = register_tx()
        tx["value"] = 1_500_000_000_000_000_000

        fields = build_base_fields(tx, receipt, 1_700_000_012)

        assert fields["hash"] == tx_hash(1)
        assert fields["block_number"] == 12
        assert fields["timestamp"] == 1_700_000_012
        assert fields["from_address"] == SHIPPER
        assert fields["to_address"] == SERVICE
        assert fields["gas_price"] == str(GAS_PRICE)
        assert fields["value"] == "1.5"
        assert fields["tx_fee"] == "0.0010"
        assert fields["status"] == 1

    def test_effective_gas_price_fallback(self):
        tx, receipt = register_tx()
        tx["gasPrice"] = None
        receipt["effectiveGasPrice"] = 7

        assert build_base_fields(tx, receipt, 0)["gas_price"] == "7"

    def test_checksummed_addresses_lowercased(self):
        tx, receipt = register_tx()
        tx["from"] = "0x00000000000000000000000000000000000000A1"

        assert build_base_fields(tx, receipt, 0)["from_address"] == SHIPPER


class TestTransactionClassifier:
    """Tests for recognition and dispatch."""

    @pytest.mark.asyncio
    async def test_no_calldata_ignored(self, chain, logistics_classifier):
        """Plain value transfers are never probed."""
        chain.add_contract(SERVICE, recognized("service"))
        tx = make_tx(1, SERVICE, "0x")
        tx["blockNumber"] = 12

        assert await logistics_classifier.classify(tx, make_receipt(tx), 0) is None
        assert chain.calls == []

    @pytest.mark.asyncio
    async def test_unrecognised_contract(self, chain, logistics_classifier):
        tx, receipt = register_tx(to=STRANGER)

        assert await logistics_classifier.classify(tx, receipt, 0) is None

    @pytest.mark.asyncio
    async def test_family_not_handled(self, chain, logistics_classifier):
        chain.add_contract(SERVICE, recognized("token"))
        tx, receipt = register_tx()

        assert await logistics_classifier.classify(tx, receipt, 0) is None

    @pytest.mark.asyncio
    async def test_recognised_call(self, chain, logistics_classifier):
        chain.add_contract(SERVICE, recognized("service"))
        chain.add_contract(COMPANY, recognized("company", name="Acme"))
        tx, receipt = register_tx()

        result = await logistics_classifier.classify(tx, receipt, 1_700_000_012)

        assert result.tx_type == TxType.REGISTER
        assert result.hash == tx_hash(1)
        assert result.block_number == 12
        assert result.fields["tx_fee"] == "0.0010"

    @pytest.mark.asyncio
    async def test_deploy_without_contract_address(self, chain, logistics_classifier):
        tx = make_tx(2, None, "0x6080604052")
        tx["blockNumber"] = 12

        assert await logistics_classifier.classify(tx, make_receipt(tx), 0) is None

    @pytest.mark.asyncio
    async def test_chain_read_failure_propagates(self, chain, logistics_classifier):
        chain.add_contract(SERVICE, recognized("service"))
        tx, receipt = register_tx()

        with pytest.raises(ChainCallError):
            await logistics_classifier.classify(tx, receipt, 0)

    def test_families(self, logistics_classifier, token_classifier):
        assert logistics_classifier.families == {
            ContractFamily.SERVICE,
            ContractFamily.COMPANY,
            ContractFamily.ORDER,
        }
        assert token_classifier.families == {ContractFamily.TOKEN}

    def test_register_handler_overwrites(self, logistics_classifier, contracts):
        replacement = ServiceHandler(contracts)

        logistics_classifier.register_handler(replacement)

        assert logistics_classifier.get_handler(ContractFamily.SERVICE) is replacement

    def test_selectors(self, logistics_classifier):
        handler = logistics_classifier.get_handler(ContractFamily.SERVICE)

        assert handler.can_handle(encode_call("settle(address)", ["address"], [COMPANY])[:10])
        assert not handler.can_handle(None)
