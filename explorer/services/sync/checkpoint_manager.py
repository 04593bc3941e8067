"""
Checkpoint / resume manager.

Validates the genesis block and decides where the scanner starts,
rolling back the partially processed checkpoint block on restart.
"""

from typing import TYPE_CHECKING

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from explorer.repositories.order_track_repository import OrderTrackRepository
from explorer.repositories.sync_checkpoint_repository import (
    SyncCheckpointRepository,
)
from explorer.services.chain.client import ChainClient
from explorer.services.chain.prober import CapabilityProber
from explorer.services.decoding.calldata import has_calldata
from explorer.utils.exceptions import FatalConfigError
from explorer.utils.formatters import mask_address, normalize_address

if TYPE_CHECKING:
    from explorer.services.sync.flavors import FlavorSpec


class CheckpointManager:
    """
    Start block resolution for one flavor.

    Features:
    - Genesis check: the root contract is deployed in the start block
    - Consistency check between checkpoint and stored records
    - Rollback of the checkpoint block before it is reprocessed
    """

    def __init__(
        self,
        spec: "FlavorSpec",
        chain: ChainClient,
        prober: CapabilityProber,
        session_maker: async_sessionmaker[AsyncSession],
    ) -> None:
        """
        Initialize manager.

        Args:
            spec: Flavor description
            chain: Chain client
            prober: Capability prober
            session_maker: Store session factory
        """
        self.spec = spec
        self.chain = chain
        self.prober = prober
        self.session_maker = session_maker

    async def validate_genesis(self, root_addr: str, block_number: int) -> bool:
        """
        Check the root contract was deployed in the given block.

        Args:
            root_addr: Root contract address (service or token)
            block_number: Expected genesis block

        Returns:
            True only if a deployment in that block created root_addr
            and it probes as the flavor's root family
        """
        root = normalize_address(root_addr)
        try:
            block = await self.chain.get_block(block_number, full_transactions=True)
            for tx in block["transactions"]:
                if tx.get("to") is not None or not has_calldata(tx.get("input")):
                    continue
                receipt = await self.chain.get_transaction_receipt(tx["hash"])
                if normalize_address(receipt.get("contractAddress")) != root:
                    continue
                family = await self.prober.probe(root)
                if family == self.spec.root_family:
                    return True
                logger.error(
                    f"[Checkpoint] {mask_address(root)} deployed in block "
                    f"{block_number} is {family}, expected {self.spec.root_family}"
                )
        except Exception as e:
            logger.error(f"[Checkpoint] Genesis check of block {block_number} failed: {e}")
            return False

        return False

    async def _has_derived_records(self, session: AsyncSession) -> bool:
        if await self.spec.transaction_repository(session).count() > 0:
            return True
        if await self.spec.event_log_repository(session).count() > 0:
            return True
        if self.spec.tracks_orders:
            return await OrderTrackRepository(session).count() > 0
        return False

    async def _rollback_block(self, session: AsyncSession, block_number: int) -> dict:
        deleted = {
            "transactions": await self.spec.transaction_repository(
                session
            ).delete_by_block(block_number),
            "event_logs": await self.spec.event_log_repository(
                session
            ).delete_by_block(block_number),
        }
        if self.spec.tracks_orders:
            deleted["order_tracks"] = await OrderTrackRepository(
                session
            ).delete_by_block(block_number)
        return deleted

    async def resolve_start_block(self, root_addr: str, default_block: int) -> int:
        """
        Decide the first block to process.

        Args:
            root_addr: Root contract address
            default_block: Genesis block (first run start)

        Returns:
            Block number to start scanning from

        Raises:
            FatalConfigError: Invalid genesis, records without checkpoint,
                or checkpoint before genesis
        """
        flavor = self.spec.flavor.value

        if not await self.validate_genesis(root_addr, default_block):
            raise FatalConfigError(
                f"Block {default_block} does not deploy {self.spec.root_family.value} "
                f"contract {root_addr}"
            )

        async with self.session_maker() as session:
            async with session.begin():
                checkpoint = await SyncCheckpointRepository(session).get_for_flavor(
                    flavor
                )

                if checkpoint is None:
                    if await self._has_derived_records(session):
                        raise FatalConfigError(
                            f"{flavor} records exist without a checkpoint, "
                            "reset the database"
                        )
                    logger.info(
                        f"[Checkpoint] No {flavor} checkpoint, "
                        f"starting at genesis block {default_block}"
                    )
                    return default_block

                resume_block = checkpoint.block_number
                if resume_block < default_block:
                    raise FatalConfigError(
                        f"{flavor} checkpoint {resume_block} is before "
                        f"genesis block {default_block}"
                    )

                deleted = await self._rollback_block(session, resume_block)

        logger.info(
            f"[Checkpoint] Resuming {flavor} at block {resume_block}, "
            f"rolled back {deleted}"
        )
        return resume_block
