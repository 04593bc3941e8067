"""Unit tests for ChainClient over a stubbed AsyncWeb3."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from web3.exceptions import ContractLogicError

from explorer.services.chain.abis import COMPANY_ABI, INTERFACE_ABI
from explorer.services.chain.client import ChainClient, with_timeout
from explorer.utils.exceptions import ChainCallError
from tests.factories import address


async def hang():
    await asyncio.sleep(5)


@pytest.fixture
def w3():
    """AsyncWeb3 stand-in returning a distinct contract object per call."""
    mock = MagicMock()
    mock.eth.contract = MagicMock(side_effect=lambda address, abi: MagicMock())
    return mock


def stub_function(client: ChainClient, addr: str, abi, name: str, call) -> None:
    contract = client._contract(addr, abi)
    getattr(contract.functions, name).return_value.call = call


class TestWithTimeout:
    @pytest.mark.asyncio
    async def test_timeout_becomes_chain_error(self):
        with pytest.raises(ChainCallError, match="timed out"):
            await with_timeout(hang(), timeout=0.01, operation_name="eth_call")

    @pytest.mark.asyncio
    async def test_result_passes_through(self):
        async def answer():
            return 42

        assert await with_timeout(answer(), timeout=1) == 42


class TestChainClient:
    @pytest.mark.asyncio
    async def test_head_timeout(self, w3):
        w3.eth.get_block_number = hang
        client = ChainClient(w3, timeout=0.01)

        with pytest.raises(ChainCallError):
            await client.get_block_number()

    @pytest.mark.asyncio
    async def test_call_returns_value(self, w3):
        client = ChainClient(w3)
        company = address(0xC0)
        stub_function(client, company, COMPANY_ABI, "name", AsyncMock(return_value="Acme"))

        assert await client.call(company, COMPANY_ABI, "name") == "Acme"

    @pytest.mark.asyncio
    async def test_call_revert_wrapped(self, w3):
        client = ChainClient(w3)
        company = address(0xC0)
        stub_function(
            client,
            company,
            COMPANY_ABI,
            "name",
            AsyncMock(side_effect=ContractLogicError("execution reverted")),
        )

        with pytest.raises(ChainCallError, match="execution reverted"):
            await client.call(company, COMPANY_ABI, "name")

    @pytest.mark.asyncio
    async def test_call_value_error_wrapped(self, w3):
        client = ChainClient(w3)
        company = address(0xC0)
        stub_function(
            client,
            company,
            COMPANY_ABI,
            "name",
            AsyncMock(side_effect=ValueError("Could not decode output")),
        )

        with pytest.raises(ChainCallError):
            await client.call(company, COMPANY_ABI, "name")

    @pytest.mark.asyncio
    async def test_call_timeout_wrapped(self, w3):
        client = ChainClient(w3, timeout=0.01)
        company = address(0xC0)
        stub_function(client, company, COMPANY_ABI, "name", hang)

        with pytest.raises(ChainCallError, match="timed out"):
            await client.call(company, COMPANY_ABI, "name")

    def test_contract_cache_reused(self, w3):
        client = ChainClient(w3)
        company = address(0xC0)

        first = client._contract(company, COMPANY_ABI)
        again = client._contract(company.upper().replace("0X", "0x"), COMPANY_ABI)

        assert first is again
        assert w3.eth.contract.call_count == 1

    def test_contract_cache_bounded(self, w3):
        """The oldest contract object is dropped once the cache is full."""
        client = ChainClient(w3, cache_size=3)

        for n in range(1, 6):
            client._contract(address(n), INTERFACE_ABI)

        assert len(client._contracts) == 3
        assert (address(1), id(INTERFACE_ABI)) not in client._contracts
        assert (address(5), id(INTERFACE_ABI)) in client._contracts

    @pytest.mark.asyncio
    async def test_subscribe_new_heads(self, w3):
        async def payloads():
            for number in (7, 8):
                yield {"subscription": "0x1", "result": {"number": number}}

        w3.eth.subscribe = AsyncMock(return_value="0x1")
        w3.socket.process_subscriptions = payloads
        client = ChainClient(w3)

        headers = [header async for header in client.subscribe_new_heads()]

        assert [h["number"] for h in headers] == [7, 8]
        w3.eth.subscribe.assert_awaited_once_with("newHeads")
