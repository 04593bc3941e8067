"""
Common blockchain fields of a recognised transaction.

Shared by the logistics and token transaction tables.
"""

from datetime import UTC, datetime

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column


class ChainTransactionMixin:
    """
    Blockchain columns copied from the transaction and its receipt.

    Quantities that may exceed 64 bits (gas price, value, fee) are
    stored as decimal strings. Addresses and hashes are lowercase.
    """

    # Primary key
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Transaction identification
    hash: Mapped[str] = mapped_column(
        String(66), nullable=False, unique=True, index=True
    )
    block_number: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True
    )
    timestamp: Mapped[int] = mapped_column(
        BigInteger, nullable=False
    )  # block epoch seconds

    # Addresses
    from_address: Mapped[str] = mapped_column(
        String(42), nullable=False, index=True
    )
    to_address: Mapped[str | None] = mapped_column(
        String(42), nullable=True, index=True
    )  # null for contract deployments

    # Execution
    gas: Mapped[int] = mapped_column(BigInteger, nullable=False)
    gas_used: Mapped[int] = mapped_column(BigInteger, nullable=False)
    gas_price: Mapped[str] = mapped_column(String(80), nullable=False)  # wei
    nonce: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False)  # 1 ok, 0 reverted

    # Amounts (ether, decimal strings)
    value: Mapped[str] = mapped_column(String(80), nullable=False, default="0")
    tx_fee: Mapped[str] = mapped_column(String(80), nullable=False, default="0")

    # Classification
    tx_type: Mapped[str] = mapped_column(
        String(32), nullable=False, index=True
    )
    creator: Mapped[str | None] = mapped_column(String(42), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
