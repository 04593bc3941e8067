"""
Event Log models.

Decoded event occurrences of recognised transactions.
"""

from datetime import UTC, datetime

from sqlalchemy import BigInteger, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from explorer.models.base import Base


class EventLogMixin:
    """
    Decoded event columns.

    Only the first four parameters are kept; param_count holds the
    real number of parameters of the event.
    """

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    tx_hash: Mapped[str] = mapped_column(String(66), nullable=False, index=True)
    block_number: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True
    )
    log_index: Mapped[int] = mapped_column(Integer, nullable=False)
    event_name: Mapped[str] = mapped_column(String(100), nullable=False)
    param_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    param_name_01: Mapped[str | None] = mapped_column(String(100), nullable=True)
    param_type_01: Mapped[str | None] = mapped_column(String(50), nullable=True)
    param_data_01: Mapped[str | None] = mapped_column(Text, nullable=True)

    param_name_02: Mapped[str | None] = mapped_column(String(100), nullable=True)
    param_type_02: Mapped[str | None] = mapped_column(String(50), nullable=True)
    param_data_02: Mapped[str | None] = mapped_column(Text, nullable=True)

    param_name_03: Mapped[str | None] = mapped_column(String(100), nullable=True)
    param_type_03: Mapped[str | None] = mapped_column(String(50), nullable=True)
    param_data_03: Mapped[str | None] = mapped_column(Text, nullable=True)

    param_name_04: Mapped[str | None] = mapped_column(String(100), nullable=True)
    param_type_04: Mapped[str | None] = mapped_column(String(50), nullable=True)
    param_data_04: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )


class LogisticsEventLog(EventLogMixin, Base):
    """Event log of a logistics network transaction."""

    __tablename__ = "logistics_event_logs"


class TokenEventLog(EventLogMixin, Base):
    """Event log of a token network transaction."""

    __tablename__ = "token_event_logs"
