"""
Transaction repositories.

Data access layer for recognised logistics and token transactions.
"""

from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.models.logistics_transaction import LogisticsTransaction
from explorer.models.token_transaction import TokenTransaction
from explorer.repositories.base import BaseRepository

TxModel = TypeVar("TxModel", LogisticsTransaction, TokenTransaction)


class ChainTransactionRepository(BaseRepository[TxModel]):
    """Shared queries of the transaction tables."""

    async def get_by_hash(self, tx_hash: str) -> TxModel | None:
        """
        Get transaction record by hash.

        Args:
            tx_hash: Transaction hash (with or without 0x prefix)

        Returns:
            Transaction record or None
        """
        normalized = tx_hash.lower()
        if not normalized.startswith("0x"):
            normalized = f"0x{normalized}"

        return await self.get_by(hash=normalized)

    async def delete_by_block(self, block_number: int) -> int:
        """Delete records of one block."""
        return await self.delete_by(block_number=block_number)


class LogisticsTransactionRepository(
    ChainTransactionRepository[LogisticsTransaction]
):
    """Repository for logistics transactions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(LogisticsTransaction, session)


class TokenTransactionRepository(ChainTransactionRepository[TokenTransaction]):
    """Repository for token transactions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(TokenTransaction, session)
