"""
Block scanner.

Walks blocks from the start block to the head, then follows new
heads, writing the derived records of every recognised transaction.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from explorer.models.enums import NetworkFlavor
from explorer.repositories.sync_checkpoint_repository import (
    SyncCheckpointRepository,
)
from explorer.services.chain.client import ChainClient
from explorer.services.classifier.classifier import TransactionClassifier
from explorer.services.decoding.calldata import has_calldata
from explorer.services.sync.writer import RecordWriter
from explorer.utils.exceptions import is_fatal, is_recoverable
from explorer.utils.formatters import mask_tx_hash, normalize_hex

if TYPE_CHECKING:
    from explorer.services.sync.flavors import FlavorSpec


@dataclass(frozen=True)
class ScannerState:
    """Position of a scanner, passed through the scanning loop."""

    flavor: NetworkFlavor
    last_block: int | None = None  # last block processed or skipped


class BlockScanner:
    """
    Sequential block processor.

    Blocks are processed in increasing order and transactions in
    block order. Each block is one store transaction (checkpoint and
    derived records); each recognised transaction is written inside
    a savepoint so a failing one is rolled back alone.
    """

    def __init__(
        self,
        spec: "FlavorSpec",
        chain: ChainClient,
        classifier: TransactionClassifier,
        session_maker: async_sessionmaker[AsyncSession],
    ) -> None:
        """
        Initialize scanner.

        Args:
            spec: Flavor description
            chain: Chain client
            classifier: Transaction classifier of the flavor
            session_maker: Store session factory
        """
        self.spec = spec
        self.chain = chain
        self.classifier = classifier
        self.session_maker = session_maker

    def initial_state(self) -> ScannerState:
        return ScannerState(flavor=self.spec.flavor)

    async def _process_transaction(
        self,
        session: AsyncSession,
        writer: RecordWriter,
        tx: Mapping[str, Any],
        timestamp: int,
    ) -> bool:
        if not has_calldata(tx.get("input")):
            return False

        tx_hash = normalize_hex(tx["hash"])
        try:
            receipt = await self.chain.get_transaction_receipt(tx["hash"])
            classified = await self.classifier.classify(tx, receipt, timestamp)
            if classified is None:
                return False

            async with session.begin_nested():
                return await writer.write(classified)

        except Exception as e:
            if is_fatal(e):
                raise
            if is_recoverable(e):
                logger.error(f"[Scanner] Skipping tx {mask_tx_hash(tx_hash)}: {e}")
                return False
            logger.exception(
                f"[Scanner] Unexpected error on tx {mask_tx_hash(tx_hash)}: {e}"
            )
        return False

    async def process_block(
        self, state: ScannerState, block_id: int | str | bytes
    ) -> ScannerState:
        """
        Process one block.

        Args:
            state: Current scanner state
            block_id: Block number or hash

        Returns:
            State advanced to the processed block
        """
        block = await self.chain.get_block(block_id, full_transactions=True)
        number = int(block["number"])
        timestamp = int(block["timestamp"])
        transactions = block["transactions"]

        recorded = 0
        async with self.session_maker() as session:
            async with session.begin():
                await SyncCheckpointRepository(session).upsert(
                    self.spec.flavor.value, number
                )
                writer = RecordWriter(self.spec, session)
                for tx in transactions:
                    if await self._process_transaction(session, writer, tx, timestamp):
                        recorded += 1

        log = logger.info if recorded else logger.debug
        log(
            f"[Scanner] {self.spec.flavor.value} block {number}: "
            f"{len(transactions)} txs, {recorded} recorded"
        )
        return replace(state, last_block=number)

    async def _process_or_skip(
        self,
        state: ScannerState,
        block_id: int | str | bytes,
        number: int,
    ) -> ScannerState:
        try:
            return await self.process_block(state, block_id)
        except Exception as e:
            if is_fatal(e):
                raise
            logger.error(f"[Scanner] Block {number} failed, skipping: {e}")
            return replace(state, last_block=number)

    async def sync_historical(
        self, state: ScannerState, start_block: int
    ) -> ScannerState:
        """
        Process blocks from start_block up to the chain head.

        The head is re-read after every block since it keeps moving.

        Args:
            state: Current scanner state
            start_block: First block to process

        Returns:
            State after the last processed block
        """
        logger.info(
            f"[Scanner] Backfilling {self.spec.flavor.value} from block {start_block}"
        )
        number = start_block
        while number <= await self.chain.get_block_number():
            state = await self._process_or_skip(state, number, number)
            number += 1

        logger.success(
            f"[Scanner] {self.spec.flavor.value} caught up at block {state.last_block}"
        )
        return state

    async def tail_live(self, state: ScannerState) -> ScannerState:
        """
        Follow new heads until the subscription ends.

        Blocks mined between the end of the backfill and a header are
        processed first. Headers at or below the last processed block
        are ignored.

        Args:
            state: Scanner state after the backfill

        Returns:
            State when the subscription stream ends
        """
        async for header in self.chain.subscribe_new_heads():
            number = int(header["number"])
            if state.last_block is not None and number <= state.last_block:
                logger.warning(
                    f"[Scanner] Ignoring header {number}, "
                    f"already at block {state.last_block}"
                )
                continue

            if state.last_block is not None:
                for missing in range(state.last_block + 1, number):
                    state = await self._process_or_skip(state, missing, missing)

            logger.debug(f"[Scanner] New block detected: {number}")
            state = await self._process_or_skip(state, header["hash"], number)

        return state

    async def run(self, start_block: int) -> ScannerState:
        """Backfill from start_block, then follow the chain head."""
        state = await self.sync_historical(self.initial_state(), start_block)
        return await self.tail_live(state)
