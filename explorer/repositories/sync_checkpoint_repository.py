"""
Sync Checkpoint repository.

Data access layer for per-flavor scanning checkpoints.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from explorer.models.sync_checkpoint import SyncCheckpoint
from explorer.repositories.base import BaseRepository


class SyncCheckpointRepository(BaseRepository[SyncCheckpoint]):
    """Repository for sync checkpoints."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(SyncCheckpoint, session)

    async def get_for_flavor(self, flavor: str) -> SyncCheckpoint | None:
        """Get checkpoint of a network flavor."""
        return await self.get_by(flavor=flavor)

    async def upsert(self, flavor: str, block_number: int) -> SyncCheckpoint:
        """
        Create or move the checkpoint of a flavor.

        Args:
            flavor: Network flavor
            block_number: Block being processed

        Returns:
            Checkpoint entity
        """
        checkpoint = await self.get_for_flavor(flavor)
        if checkpoint is None:
            return await self.create(flavor=flavor, block_number=block_number)

        checkpoint.block_number = block_number
        await self.session.flush()
        return checkpoint
