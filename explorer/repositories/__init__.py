"""Data access layer."""

from explorer.repositories.base import BaseRepository
from explorer.repositories.event_log_repository import (
    LogisticsEventLogRepository,
    TokenEventLogRepository,
)
from explorer.repositories.order_track_repository import OrderTrackRepository
from explorer.repositories.sync_checkpoint_repository import (
    SyncCheckpointRepository,
)
from explorer.repositories.transaction_repository import (
    LogisticsTransactionRepository,
    TokenTransactionRepository,
)

__all__ = [
    "BaseRepository",
    "LogisticsEventLogRepository",
    "LogisticsTransactionRepository",
    "OrderTrackRepository",
    "SyncCheckpointRepository",
    "TokenEventLogRepository",
    "TokenTransactionRepository",
]
