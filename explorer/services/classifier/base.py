"""Base classes and types for the transaction classifier.

A family handler turns a transaction of one contract family into a
ClassifiedTransaction. Handlers only read the chain: every store
write derived from their result is performed by the scanner.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from explorer.models.enums import ContractFamily, TxType
from explorer.services.chain.contracts import LogisticsContracts
from explorer.services.decoding.log_decoder import EventOccurrence
from explorer.utils.formatters import normalize_address

__all__ = [
    "TxContext",
    "ClassifiedTransaction",
    "FamilyHandler",
    "CallHandler",
]


@dataclass
class TxContext:
    """Everything a handler needs to classify one transaction.

    Attributes:
        tx: Transaction as returned by the chain client.
        receipt: Receipt of the transaction.
        target: Lowercase address of the contract called or deployed.
        selector: 4-byte selector as 0x-hex, None for deployments.
        events: Event occurrences decoded from the receipt.
        base_fields: Blockchain columns shared by every record.
    """
    tx: Mapping[str, Any]
    receipt: Mapping[str, Any]
    target: str
    selector: str | None
    events: list[EventOccurrence]
    base_fields: dict[str, Any]

    @property
    def is_deploy(self) -> bool:
        return self.tx.get("to") is None

    @property
    def hash(self) -> str:
        return self.base_fields["hash"]

    @property
    def block_number(self) -> int:
        return self.base_fields["block_number"]

    @property
    def sender(self) -> str:
        """Externally owned account that sent the transaction."""
        return self.base_fields["from_address"]

    @property
    def receipt_sender(self) -> str | None:
        return normalize_address(self.receipt.get("from"))

    @property
    def input(self) -> Any:
        return self.tx.get("input")

    def event(self, name: str) -> EventOccurrence | None:
        """First occurrence of an event in the receipt."""
        for occurrence in self.events:
            if occurrence.name == name:
                return occurrence
        return None

    def record(self, tx_type: TxType, **fields: Any) -> "ClassifiedTransaction":
        """Build a classified transaction on top of the blockchain columns."""
        return ClassifiedTransaction(
            fields={**self.base_fields, "tx_type": tx_type.value, **fields},
            events=list(self.events),
        )


@dataclass
class ClassifiedTransaction:
    """Result of classifying a recognised transaction.

    Attributes:
        fields: Column values of the transaction record.
        events: Event occurrences to persist alongside the record.
        seed_legs: Order tracking legs, written only if the order has none.
        leg_backfill: (order_addr, code) of the leg completed by this tx.
    """
    fields: dict[str, Any]
    events: list[EventOccurrence] = field(default_factory=list)
    seed_legs: list[dict[str, Any]] = field(default_factory=list)
    leg_backfill: tuple[str, str] | None = None

    @property
    def tx_type(self) -> TxType:
        return TxType(self.fields["tx_type"])

    @property
    def hash(self) -> str:
        return self.fields["hash"]

    @property
    def block_number(self) -> int:
        return self.fields["block_number"]


CallHandler = Callable[[TxContext], Awaitable[ClassifiedTransaction | None]]


class FamilyHandler(ABC):
    """Abstract base class for contract family handlers.

    Subclasses declare their family, handle deployments and map
    function selectors to call handlers.

    Attributes:
        contracts: Readers of logistics contract state.
    """

    family: ContractFamily

    def __init__(self, contracts: LogisticsContracts | None = None) -> None:
        """Initialize the handler.

        Args:
            contracts: Contract readers, needed by the logistics families.
        """
        self.contracts = contracts

    @abstractmethod
    async def on_deploy(self, ctx: TxContext) -> ClassifiedTransaction | None:
        """Classify a deployment of a contract of this family."""

    @abstractmethod
    def get_call_handlers(self) -> dict[str, CallHandler]:
        """Map 0x-hex selectors to call handlers."""

    def get_selectors(self) -> set[str]:
        """Selectors this handler recognises."""
        return set(self.get_call_handlers())

    def can_handle(self, selector: str | None) -> bool:
        return selector in self.get_selectors()

    async def on_call(self, ctx: TxContext) -> ClassifiedTransaction | None:
        """Dispatch a call by selector; unknown selectors produce nothing."""
        handler = self.get_call_handlers().get(ctx.selector or "")
        if handler is None:
            return None
        return await handler(ctx)

    async def handle(self, ctx: TxContext) -> ClassifiedTransaction | None:
        if ctx.is_deploy:
            return await self.on_deploy(ctx)
        return await self.on_call(ctx)

    def management(
        self,
        ctx: TxContext,
        tx_type: TxType,
        event_name: str,
        *param_names: str,
    ) -> ClassifiedTransaction | None:
        """Record a management operation from its emitted event.

        The event values land in param01 and, for before/after
        changes, param02. No event (reverted call) means no record.
        """
        occurrence = ctx.event(event_name)
        if occurrence is None:
            return None
        args = occurrence.args
        fields = {}
        for index, name in enumerate(param_names, start=1):
            value = args.get(name)
            fields[f"param{index:02d}"] = None if value is None else str(value)
        return ctx.record(tx_type, creator=ctx.sender, **fields)
