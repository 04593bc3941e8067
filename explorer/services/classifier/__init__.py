"""Transaction classification and contract family handlers."""

from explorer.services.classifier.base import (
    ClassifiedTransaction,
    FamilyHandler,
    TxContext,
)
from explorer.services.classifier.classifier import TransactionClassifier
from explorer.services.classifier.company import CompanyHandler
from explorer.services.classifier.order import OrderHandler
from explorer.services.classifier.service import ServiceHandler
from explorer.services.classifier.token import TokenHandler

__all__ = [
    "ClassifiedTransaction",
    "CompanyHandler",
    "FamilyHandler",
    "OrderHandler",
    "ServiceHandler",
    "TokenHandler",
    "TransactionClassifier",
    "TxContext",
]
