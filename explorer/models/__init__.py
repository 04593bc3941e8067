"""
Database models.

Importing this package registers every table on Base.metadata.
"""

from explorer.models.base import Base
from explorer.models.enums import ContractFamily, NetworkFlavor, TxType
from explorer.models.event_log import LogisticsEventLog, TokenEventLog
from explorer.models.logistics_transaction import LogisticsTransaction
from explorer.models.order_track import OrderTrack
from explorer.models.sync_checkpoint import SyncCheckpoint
from explorer.models.token_transaction import TokenTransaction

__all__ = [
    "Base",
    "ContractFamily",
    "LogisticsEventLog",
    "LogisticsTransaction",
    "NetworkFlavor",
    "OrderTrack",
    "SyncCheckpoint",
    "TokenEventLog",
    "TokenTransaction",
    "TxType",
]
