"""
Order Track repository.

Data access layer for order tracking legs.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.models.order_track import OrderTrack
from explorer.repositories.base import BaseRepository


class OrderTrackRepository(BaseRepository[OrderTrack]):
    """Repository for order tracking legs."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(OrderTrack, session)

    async def has_legs(self, order_addr: str) -> bool:
        """Check if legs were already seeded for an order."""
        return await self.exists(order_addr=order_addr.lower())

    async def get_legs(self, order_addr: str) -> list[OrderTrack]:
        """Get legs of an order ordered by transport id."""
        return await self.find_all(
            order_by=OrderTrack.transport_id,
            order_addr=order_addr.lower(),
        )

    async def seed(self, legs: list[dict[str, Any]]) -> list[OrderTrack]:
        """
        Insert the legs of an order unless it already has some.

        Args:
            legs: Leg data dicts, all for the same order

        Returns:
            Created legs (empty if the order was already seeded)
        """
        if not legs:
            return []
        if await self.has_legs(legs[0]["order_addr"]):
            return []
        return await self.bulk_create(legs)

    async def set_tx_hash_by_code(
        self, order_addr: str, code: str, tx_hash: str
    ) -> int:
        """
        Attach the completing transaction to the leg(s) with a code.

        Args:
            order_addr: Order contract address
            code: Leg code (decimal string)
            tx_hash: ORDER-UPDATE transaction hash

        Returns:
            Number of updated legs
        """
        return await self.update_by(
            {"tx_hash": tx_hash},
            order_addr=order_addr.lower(),
            code=code,
        )

    async def delete_by_block(self, block_number: int) -> int:
        """Delete legs created in one block."""
        return await self.delete_by(block_number=block_number)
