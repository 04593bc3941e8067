"""
Domain enumerations.

String-valued enums are stored as plain strings in the database.
"""

from enum import StrEnum

from explorer.config.constants import MANAGEMENT_CATEGORY


class NetworkFlavor(StrEnum):
    """Network a scanner instance is bound to."""

    LOGISTICS = "logistics"
    TOKEN = "token"


class ContractFamily(StrEnum):
    """Family tag reported by getDkargoPrefix()."""

    SERVICE = "service"
    COMPANY = "company"
    ORDER = "order"
    TOKEN = "token"

    @classmethod
    def from_tag(cls, tag: str) -> "ContractFamily | None":
        """Map an on-chain family tag to a family, None if unknown."""
        try:
            return cls(tag)
        except ValueError:
            return None


class TxType(StrEnum):
    """Transaction type written to TransactionRecord.tx_type."""

    DEPLOY = "DEPLOY"
    REGISTER = "REGISTER"
    UNREGISTER = "UNREGISTER"
    MARK_PAYMENT = "MARK-PAYMENT"
    SETTLEMENT = "SETTLEMENT"
    ORDER_LAUNCH = "ORDER-LAUNCH"
    ORDER_UPDATE = "ORDER-UPDATE"
    SUBMIT = "SUBMIT"
    TRANSFER = "TRANSFER"
    BURN = "BURN"
    APPROVE = "APPROVE"

    # Management operations
    ADD_OPERATOR = "addOperator"
    REMOVE_OPERATOR = "removeOperator"
    SET_NAME = "setName"
    SET_URL = "setUrl"
    SET_RECIPIENT = "setRecipient"
    SET_ORDER_URL = "setOrderUrl"

    @property
    def is_management(self) -> bool:
        """Check if type is a management operation."""
        return self in _MANAGEMENT_TYPES

    @property
    def category(self) -> str:
        """Category reported to clients (MANAGEMENT or the type itself)."""
        if self.is_management:
            return MANAGEMENT_CATEGORY
        return self.value


_MANAGEMENT_TYPES = frozenset(
    {
        TxType.ADD_OPERATOR,
        TxType.REMOVE_OPERATOR,
        TxType.SET_NAME,
        TxType.SET_URL,
        TxType.SET_RECIPIENT,
        TxType.SET_ORDER_URL,
    }
)
