"""Unit tests for the service contract handler."""

import pytest

from explorer.models.enums import TxType
from explorer.services.decoding.calldata import selector_of
from explorer.utils.exceptions import CalldataError, ChainCallError
from tests.factories import (
    DEPLOYER,
    SHIPPER,
    address,
    deploy_tx,
    encode_call,
    make_log,
    make_receipt,
    make_tx,
    order_contract,
    recognized,
)

SERVICE = address(0x5E)
COMPANY = "0x" + "ab" * 19 + "c0"
ORDER = address(0x0D)


@pytest.fixture
def world(chain):
    chain.add_contract(SERVICE, recognized("service"))
    chain.add_contract(COMPANY, recognized("company", name="Acme Logistics"))
    chain.add_contract(ORDER, order_contract(77, []))
    return chain


async def classify(chain, classifier, tx, receipt):
    chain.add_block(20, [(tx, receipt)])
    return await classifier.classify(tx, receipt, 1_700_000_020)


class TestServiceHandler:
    """Tests for ServiceHandler through the logistics classifier."""

    @pytest.mark.asyncio
    async def test_deploy(self, world, logistics_classifier):
        tx = deploy_tx(1)
        receipt = make_receipt(tx, contract_address=SERVICE)

        result = await classify(world, logistics_classifier, tx, receipt)

        assert result.tx_type == TxType.DEPLOY
        assert result.fields["deployed_type"] == "service"
        assert result.fields["deployed_addr"] == SERVICE
        assert result.fields["service_addr"] == SERVICE
        assert result.fields["creator"] == DEPLOYER
        assert result.fields["to_address"] is None

    @pytest.mark.asyncio
    async def test_register(self, world, logistics_classifier):
        """register + CompanyRegistered gives a REGISTER record."""
        tx = make_tx(2, SERVICE, encode_call("register(address)", ["address"], [COMPANY]))
        receipt = make_receipt(
            tx, logs=[make_log("CompanyRegistered", SERVICE, company=COMPANY)]
        )

        result = await classify(world, logistics_classifier, tx, receipt)

        assert result.tx_type == TxType.REGISTER
        assert result.fields["company_addr"] == COMPANY
        assert result.fields["company_name"] == "Acme Logistics"
        assert result.fields["creator"] == SERVICE
        assert [e.name for e in result.events] == ["CompanyRegistered"]

    @pytest.mark.asyncio
    async def test_register_without_event(self, world, logistics_classifier):
        """A reverted register emits nothing and yields no record."""
        tx = make_tx(3, SERVICE, encode_call("register(address)", ["address"], [COMPANY]))
        receipt = make_receipt(tx, status=0)

        assert await classify(world, logistics_classifier, tx, receipt) is None

    @pytest.mark.asyncio
    async def test_unregister(self, world, logistics_classifier):
        tx = make_tx(4, SERVICE, encode_call("unregister(address)", ["address"], [COMPANY]))
        receipt = make_receipt(
            tx, logs=[make_log("CompanyUnregistered", SERVICE, company=COMPANY)]
        )

        result = await classify(world, logistics_classifier, tx, receipt)

        assert result.tx_type == TxType.UNREGISTER
        assert result.fields["company_addr"] == COMPANY

    @pytest.mark.asyncio
    async def test_company_name_read_fails(self, world, logistics_classifier):
        """A failed chain read propagates to the caller."""
        world.contracts[COMPANY].pop("name")
        tx = make_tx(5, SERVICE, encode_call("register(address)", ["address"], [COMPANY]))
        receipt = make_receipt(
            tx, logs=[make_log("CompanyRegistered", SERVICE, company=COMPANY)]
        )

        with pytest.raises(ChainCallError):
            await classify(world, logistics_classifier, tx, receipt)

    @pytest.mark.asyncio
    async def test_mark_order_payed(self, world, logistics_classifier):
        tx = make_tx(
            6, SERVICE, encode_call("markOrderPayed(address)", ["address"], [ORDER])
        )
        receipt = make_receipt(tx, logs=[make_log("OrderPayed", SERVICE, order=ORDER)])

        result = await classify(world, logistics_classifier, tx, receipt)

        assert result.tx_type == TxType.MARK_PAYMENT
        assert result.fields["order_addr"] == ORDER
        assert result.fields["order_id"] == "77"
        assert result.fields["creator"] == SERVICE

    @pytest.mark.asyncio
    async def test_mark_order_payed_truncated(self, world, logistics_classifier):
        tx = make_tx(7, SERVICE, selector_of("markOrderPayed(address)") + "00" * 10)
        receipt = make_receipt(tx)

        with pytest.raises(CalldataError):
            await classify(world, logistics_classifier, tx, receipt)

    @pytest.mark.asyncio
    async def test_settle(self, world, logistics_classifier):
        recipient = address(0xFEE)
        tx = make_tx(8, SERVICE, encode_call("settle(address)", ["address"], [COMPANY]))
        receipt = make_receipt(
            tx,
            logs=[
                make_log(
                    "Settled", SERVICE, recipient=recipient, payment=10**21, rest=5
                )
            ],
        )

        result = await classify(world, logistics_classifier, tx, receipt)

        assert result.tx_type == TxType.SETTLEMENT
        assert result.fields["recipient"] == recipient
        assert result.fields["payment"] == str(10**21)
        assert result.fields["rest"] == "5"

    @pytest.mark.asyncio
    async def test_unknown_selector(self, world, logistics_classifier):
        """Unmapped selectors of a known family are ignored."""
        tx = make_tx(9, SERVICE, "0xdeadbeef", sender=SHIPPER)

        assert await classify(world, logistics_classifier, tx, make_receipt(tx)) is None
