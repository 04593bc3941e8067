"""
Token Transaction model.

Recognised transactions of the token contract.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from explorer.models.base import Base
from explorer.models.chain_transaction import ChainTransactionMixin


class TokenTransaction(ChainTransactionMixin, Base):
    """Token network transaction record."""

    __tablename__ = "token_transactions"

    deployed_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    token_addr: Mapped[str | None] = mapped_column(String(42), nullable=True)

    # Movement
    origin: Mapped[str | None] = mapped_column(
        String(42), nullable=True, index=True
    )
    dest: Mapped[str | None] = mapped_column(
        String(42), nullable=True, index=True
    )
    amount: Mapped[str | None] = mapped_column(String(80), nullable=True)  # raw units

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<TokenTransaction(hash={self.hash[:16]}..., "
            f"type={self.tx_type}, amount={self.amount})>"
        )
