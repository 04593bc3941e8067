"""
Chain client.

Thin async facade over AsyncWeb3 used by the scanner, the prober and
the contract readers. Every RPC is bounded by a timeout.
"""

import asyncio
from collections.abc import AsyncIterator
from typing import Any

from eth_utils import to_checksum_address
from loguru import logger
from web3 import AsyncWeb3, WebSocketProvider
from web3.contract import AsyncContract
from web3.exceptions import Web3Exception
from web3.middleware import ExtraDataToPOAMiddleware

from explorer.config.constants import (
    BLOCKCHAIN_LONG_TIMEOUT,
    BLOCKCHAIN_TIMEOUT,
    CONTRACT_CACHE_SIZE,
)
from explorer.utils.exceptions import ChainCallError


def build_web3(ws_url: str, poa_chain: bool = True) -> AsyncWeb3:
    """
    Create an AsyncWeb3 bound to a WebSocket endpoint.

    The instance connects when entered with ``async with``.

    Args:
        ws_url: WebSocket RPC endpoint
        poa_chain: Inject the extra-data PoA middleware

    Returns:
        AsyncWeb3 instance (not yet connected)
    """
    w3 = AsyncWeb3(WebSocketProvider(ws_url))
    if poa_chain:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


async def with_timeout(
    coro: Any,
    timeout: float = BLOCKCHAIN_TIMEOUT,
    operation_name: str = "RPC call",
) -> Any:
    """
    Execute async coroutine with timeout.

    Raises:
        ChainCallError: If operation times out
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout)
    except TimeoutError as e:
        error_msg = f"{operation_name} timed out after {timeout}s"
        logger.error(f"[Chain] {error_msg}")
        raise ChainCallError(error_msg) from e


class ChainClient:
    """
    Read-only access to one chain.

    Features:
    - Block, receipt and head queries
    - Read-only contract calls by ABI and function name
    - newHeads subscription over the WebSocket provider
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        timeout: float = BLOCKCHAIN_TIMEOUT,
        cache_size: int = CONTRACT_CACHE_SIZE,
    ) -> None:
        """
        Initialize client.

        Args:
            w3: Connected AsyncWeb3 instance
            timeout: Per-call timeout in seconds
            cache_size: Max contract objects kept
        """
        self.w3 = w3
        self.timeout = timeout
        self.cache_size = cache_size
        self._contracts: dict[tuple[str, int], AsyncContract] = {}

    async def get_block_number(self) -> int:
        """Get current head block number."""
        return await with_timeout(
            self.w3.eth.get_block_number(),
            self.timeout,
            "get_block_number",
        )

    async def get_block(
        self, block_id: int | str | bytes, full_transactions: bool = True
    ) -> Any:
        """
        Get block by number or hash.

        Args:
            block_id: Block number or block hash
            full_transactions: Include transaction objects instead of hashes

        Returns:
            Block data (AttributeDict)
        """
        return await with_timeout(
            self.w3.eth.get_block(block_id, full_transactions=full_transactions),
            BLOCKCHAIN_LONG_TIMEOUT,
            f"get_block({block_id!r})",
        )

    async def get_transaction_receipt(self, tx_hash: str | bytes) -> Any:
        """Get receipt of a mined transaction."""
        return await with_timeout(
            self.w3.eth.get_transaction_receipt(tx_hash),
            self.timeout,
            "get_transaction_receipt",
        )

    def _contract(self, address: str, abi: list[dict]) -> AsyncContract:
        key = (address.lower(), id(abi))
        contract = self._contracts.get(key)
        if contract is None:
            contract = self.w3.eth.contract(
                address=to_checksum_address(address), abi=abi
            )
            if len(self._contracts) >= self.cache_size:
                self._contracts.pop(next(iter(self._contracts)))
            self._contracts[key] = contract
        return contract

    async def call(
        self, address: str, abi: list[dict], function: str, *args: Any
    ) -> Any:
        """
        Call a read-only contract function.

        Args:
            address: Contract address
            abi: Interface description containing the function
            function: Function name
            *args: Function arguments

        Returns:
            Decoded return value

        Raises:
            ChainCallError: If the call fails or times out
        """
        contract = self._contract(address, abi)
        try:
            return await with_timeout(
                getattr(contract.functions, function)(*args).call(),
                self.timeout,
                f"{function}() on {address}",
            )
        except ChainCallError:
            raise
        except (Web3Exception, ValueError, ConnectionError) as e:
            raise ChainCallError(f"{function}() on {address} failed: {e}") from e

    async def subscribe_new_heads(self) -> AsyncIterator[Any]:
        """
        Yield new block headers as they arrive.

        Headers are delivered one at a time, in arrival order.
        """
        subscription_id = await self.w3.eth.subscribe("newHeads")
        logger.info(f"[Chain] Subscribed to newHeads (id={subscription_id})")

        async for payload in self.w3.socket.process_subscriptions():
            yield payload["result"]
