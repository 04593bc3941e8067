"""
Logistics Transaction model.

Recognised transactions of the service, company and order contracts.
"""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from explorer.models.base import Base
from explorer.models.chain_transaction import ChainTransactionMixin


class LogisticsTransaction(ChainTransactionMixin, Base):
    """
    Logistics network transaction record.

    Only the columns relevant to the transaction type are filled.
    Management operations keep their subject in param01 and,
    for before/after changes, the new value in param02.
    """

    __tablename__ = "logistics_transactions"

    # Deployments
    deployed_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    deployed_addr: Mapped[str | None] = mapped_column(String(42), nullable=True)

    # Participants
    service_addr: Mapped[str | None] = mapped_column(String(42), nullable=True)
    company_addr: Mapped[str | None] = mapped_column(
        String(42), nullable=True, index=True
    )
    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Orders
    order_addr: Mapped[str | None] = mapped_column(
        String(42), nullable=True, index=True
    )
    order_id: Mapped[str | None] = mapped_column(String(80), nullable=True)
    transport_id: Mapped[str | None] = mapped_column(String(80), nullable=True)
    code: Mapped[str | None] = mapped_column(String(80), nullable=True)

    # Management parameters
    param01: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    param02: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Settlement
    recipient: Mapped[str | None] = mapped_column(String(42), nullable=True)
    payment: Mapped[str | None] = mapped_column(String(80), nullable=True)
    rest: Mapped[str | None] = mapped_column(String(80), nullable=True)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<LogisticsTransaction(hash={self.hash[:16]}..., "
            f"type={self.tx_type}, block={self.block_number})>"
        )
