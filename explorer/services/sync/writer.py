"""
Derived record writer.

Persists a classified transaction: the transaction record, its event
logs, the seeded order legs and the leg hash backfill.
"""

from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from explorer.config.constants import EVENT_LOG_MAX_PARAMS
from explorer.repositories.order_track_repository import OrderTrackRepository
from explorer.services.classifier.base import ClassifiedTransaction
from explorer.services.decoding.log_decoder import EventOccurrence
from explorer.utils.formatters import mask_address, mask_tx_hash

if TYPE_CHECKING:
    from explorer.services.sync.flavors import FlavorSpec


def format_param_value(value: Any) -> str:
    """String form of a decoded value as stored in param_data columns."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return "[" + ",".join(format_param_value(v) for v in value) + "]"
    return str(value)


def event_log_row(
    occurrence: EventOccurrence, tx_hash: str, block_number: int
) -> dict[str, Any]:
    """
    Column values of one event log row.

    Only the first EVENT_LOG_MAX_PARAMS parameters are kept,
    param_count reports all of them.
    """
    row: dict[str, Any] = {
        "tx_hash": tx_hash,
        "block_number": block_number,
        "log_index": occurrence.log_index,
        "event_name": occurrence.name,
        "param_count": len(occurrence.params),
    }
    for index, param in enumerate(occurrence.params[:EVENT_LOG_MAX_PARAMS], start=1):
        row[f"param_name_{index:02d}"] = param.name
        row[f"param_type_{index:02d}"] = param.type
        row[f"param_data_{index:02d}"] = format_param_value(param.value)
    return row


class RecordWriter:
    """Writes derived records of one flavor inside the caller's transaction."""

    def __init__(self, spec: "FlavorSpec", session: AsyncSession) -> None:
        """
        Initialize writer.

        Args:
            spec: Flavor whose tables are written
            session: Session with an open transaction
        """
        self.spec = spec
        self.transactions = spec.transaction_repository(session)
        self.event_logs = spec.event_log_repository(session)
        self.order_tracks = (
            OrderTrackRepository(session) if spec.tracks_orders else None
        )

    async def write(self, classified: ClassifiedTransaction) -> bool:
        """
        Persist a classified transaction.

        Args:
            classified: Handler result

        Returns:
            False if a record with the same hash already exists
        """
        tx_hash = classified.hash
        if await self.transactions.get_by_hash(tx_hash) is not None:
            logger.warning(f"[Writer] Tx {mask_tx_hash(tx_hash)} already recorded")
            return False

        await self.transactions.create(**classified.fields)
        await self.event_logs.bulk_create(
            [
                event_log_row(occurrence, tx_hash, classified.block_number)
                for occurrence in classified.events
            ]
        )

        if self.order_tracks is not None:
            if classified.seed_legs:
                created = await self.order_tracks.seed(classified.seed_legs)
                if created:
                    logger.info(
                        f"[Writer] Seeded {len(created)} legs for order "
                        f"{mask_address(created[0].order_addr)}"
                    )
            if classified.leg_backfill is not None:
                order_addr, code = classified.leg_backfill
                updated = await self.order_tracks.set_tx_hash_by_code(
                    order_addr, code, tx_hash
                )
                if not updated:
                    logger.warning(
                        f"[Writer] No leg with code {code} on order "
                        f"{mask_address(order_addr)}"
                    )

        logger.debug(
            f"[Writer] {classified.tx_type.value} {mask_tx_hash(tx_hash)} "
            f"({len(classified.events)} events)"
        )
        return True
