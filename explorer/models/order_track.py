"""
Order Track model.

One row per leg of an order's on-chain tracking table.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    BigInteger,
    DateTime,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from explorer.models.base import Base


class OrderTrack(Base):
    """
    Order tracking leg.

    Created when an order is deployed or submitted. Only tx_hash is
    filled in later, by the ORDER-UPDATE transaction that completes
    the leg's code.
    """

    __tablename__ = "order_tracks"
    __table_args__ = (
        UniqueConstraint(
            "order_addr", "transport_id", name="uq_order_tracks_order_transport"
        ),
        Index("ix_order_tracks_order_code", "order_addr", "code"),
    )

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    order_addr: Mapped[str] = mapped_column(String(42), nullable=False)
    order_id: Mapped[str] = mapped_column(String(80), nullable=False)
    transport_id: Mapped[int] = mapped_column(Integer, nullable=False)

    company_addr: Mapped[str] = mapped_column(String(42), nullable=False)
    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    code: Mapped[str] = mapped_column(String(80), nullable=False)
    incentives: Mapped[str] = mapped_column(String(80), nullable=False, default="0")

    block_number: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True
    )
    tx_hash: Mapped[str | None] = mapped_column(String(66), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<OrderTrack(order={self.order_addr}, "
            f"transport_id={self.transport_id}, code={self.code})>"
        )
