"""
Logistics contract readers.

Read-only accessors of the company and order contracts used while
building transaction records and order tracking legs.
"""

from typing import Any, NamedTuple

from loguru import logger

from explorer.services.chain.abis import COMPANY_ABI, ORDER_ABI
from explorer.services.chain.client import ChainClient
from explorer.utils.formatters import mask_address, normalize_address


class TrackingEntry(NamedTuple):
    """One row of an order's on-chain tracking table."""

    time: int
    addr: str
    code: int
    incentives: int


class LogisticsContracts:
    """
    Reads state of company and order contracts.

    Every method propagates ChainCallError from the client.
    """

    def __init__(self, chain: ChainClient) -> None:
        """
        Initialize readers.

        Args:
            chain: Chain client
        """
        self.chain = chain

    async def company_name(self, company_addr: str) -> str:
        """Get company name."""
        return await self.chain.call(company_addr, COMPANY_ABI, "name")

    async def order_id(self, order_addr: str) -> str:
        """Get order id as a decimal string."""
        value = await self.chain.call(order_addr, ORDER_ABI, "orderid")
        return str(value)

    async def tracking_count(self, order_addr: str) -> int:
        """Get number of tracking entries."""
        return int(await self.chain.call(order_addr, ORDER_ABI, "trackingCount"))

    async def is_complete(self, order_addr: str) -> bool:
        """Check if the order reached its terminal leg."""
        return bool(await self.chain.call(order_addr, ORDER_ABI, "isComplete"))

    async def tracking(self, order_addr: str, index: int) -> TrackingEntry:
        """Get tracking entry at index."""
        raw: Any = await self.chain.call(order_addr, ORDER_ABI, "tracking", index)
        time, addr, code, incentives = raw
        return TrackingEntry(
            time=int(time),
            addr=normalize_address(addr),
            code=int(code),
            incentives=int(incentives),
        )

    async def tracking_table(self, order_addr: str) -> list[TrackingEntry]:
        """
        Read the open legs of an order.

        When the order is complete, the terminal entry is not a leg
        and is left out.

        Args:
            order_addr: Order contract address

        Returns:
            Tracking entries in transport id order
        """
        count = await self.tracking_count(order_addr)
        if await self.is_complete(order_addr):
            count -= 1

        entries = []
        for index in range(max(count, 0)):
            entries.append(await self.tracking(order_addr, index))

        logger.debug(
            f"[Contracts] Order {mask_address(order_addr)}: "
            f"{len(entries)} tracking legs"
        )
        return entries
