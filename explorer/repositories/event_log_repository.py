"""
Event Log repositories.

Data access layer for decoded event logs.
"""

from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.models.event_log import LogisticsEventLog, TokenEventLog
from explorer.repositories.base import BaseRepository

EventLogModel = TypeVar("EventLogModel", LogisticsEventLog, TokenEventLog)


class EventLogRepository(BaseRepository[EventLogModel]):
    """Shared queries of the event log tables."""

    async def find_by_tx(self, tx_hash: str) -> list[EventLogModel]:
        """Get event logs of a transaction ordered by log index."""
        return await self.find_all(
            order_by=self.model.log_index,
            tx_hash=tx_hash.lower(),
        )

    async def delete_by_block(self, block_number: int) -> int:
        """Delete event logs of one block."""
        return await self.delete_by(block_number=block_number)


class LogisticsEventLogRepository(EventLogRepository[LogisticsEventLog]):
    """Repository for logistics event logs."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(LogisticsEventLog, session)


class TokenEventLogRepository(EventLogRepository[TokenEventLog]):
    """Repository for token event logs."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(TokenEventLog, session)
