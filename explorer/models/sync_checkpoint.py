"""
Sync Checkpoint model.

Tracks the last fully processed block per network flavor.
"""

from datetime import UTC, datetime

from sqlalchemy import BigInteger, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from explorer.models.base import Base


class SyncCheckpoint(Base):
    """
    Block scanning checkpoint.

    Used to:
    - Resume scanning after restart
    - Detect the block that may have been processed partially

    At most one row exists per flavor.
    """

    __tablename__ = "sync_checkpoints"

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    flavor: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True
    )  # logistics, token

    block_number: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=0
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<SyncCheckpoint(flavor={self.flavor}, "
            f"block_number={self.block_number})>"
        )
