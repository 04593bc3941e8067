"""
Transaction classifier.

Recognises transactions of the known contract families and hands
them to the handler registered for the family.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from explorer.models.enums import ContractFamily
from explorer.services.chain.prober import CapabilityProber
from explorer.services.classifier.base import (
    ClassifiedTransaction,
    FamilyHandler,
    TxContext,
)
from explorer.services.decoding.calldata import has_calldata, selector_from
from explorer.services.decoding.log_decoder import LogDecoder
from explorer.utils.formatters import (
    normalize_address,
    normalize_hex,
    tx_fee,
    wei_to_ether,
)


def build_base_fields(
    tx: Mapping[str, Any], receipt: Mapping[str, Any], timestamp: int
) -> dict[str, Any]:
    """
    Blockchain columns of a transaction record.

    Args:
        tx: Transaction
        receipt: Receipt of the transaction
        timestamp: Block timestamp (epoch seconds)

    Returns:
        Column values common to every transaction type
    """
    gas_price = int(tx.get("gasPrice") or receipt.get("effectiveGasPrice") or 0)
    gas_used = int(receipt["gasUsed"])
    return {
        "hash": normalize_hex(tx["hash"]),
        "block_number": int(tx["blockNumber"]),
        "timestamp": int(timestamp),
        "from_address": normalize_address(tx["from"]),
        "to_address": normalize_address(tx.get("to")),
        "gas": int(tx["gas"]),
        "gas_used": gas_used,
        "gas_price": str(gas_price),
        "nonce": int(tx["nonce"]),
        "status": int(receipt.get("status", 1)),
        "value": wei_to_ether(int(tx.get("value") or 0)),
        "tx_fee": tx_fee(gas_price, gas_used),
    }


class TransactionClassifier:
    """
    Classifies transactions of one network flavor.

    Features:
    - Family resolved once per transaction through the prober
    - Dictionary-based dispatch to the family handler
    - Deploy vs call branching and selector dispatch in the handler
    """

    def __init__(
        self,
        prober: CapabilityProber,
        decoder: LogDecoder,
        handlers: Iterable[FamilyHandler],
    ) -> None:
        """
        Initialize classifier.

        Args:
            prober: Capability prober
            decoder: Log decoder of the flavor's event table
            handlers: One handler per family handled by the flavor
        """
        self.prober = prober
        self.decoder = decoder
        self._handlers: dict[ContractFamily, FamilyHandler] = {}
        for handler in handlers:
            self.register_handler(handler)

    def register_handler(self, handler: FamilyHandler) -> None:
        """Register a handler for its family."""
        if handler.family in self._handlers:
            logger.warning(
                f"[Classifier] Family {handler.family} already registered to "
                f"{self._handlers[handler.family].__class__.__name__}, "
                f"overwriting with {handler.__class__.__name__}"
            )
        self._handlers[handler.family] = handler

    def get_handler(self, family: ContractFamily) -> FamilyHandler | None:
        return self._handlers.get(family)

    @property
    def families(self) -> set[ContractFamily]:
        return set(self._handlers)

    async def classify(
        self,
        tx: Mapping[str, Any],
        receipt: Mapping[str, Any],
        timestamp: int,
    ) -> ClassifiedTransaction | None:
        """
        Classify one transaction.

        Args:
            tx: Transaction (full object from the block)
            receipt: Receipt of the transaction
            timestamp: Block timestamp

        Returns:
            Classified transaction, or None when the transaction is not
            a recognised operation of a handled family

        Raises:
            ChainCallError: A chain read needed by the handler failed
            CalldataError: Calldata is truncated or malformed
        """
        if not has_calldata(tx.get("input")):
            return None

        is_deploy = tx.get("to") is None
        target = normalize_address(
            receipt.get("contractAddress") if is_deploy else tx.get("to")
        )
        if target is None:
            return None

        family = await self.prober.probe(target)
        if family is None:
            return None

        handler = self.get_handler(family)
        if handler is None:
            logger.debug(f"[Classifier] Family {family} not handled here")
            return None

        ctx = TxContext(
            tx=tx,
            receipt=receipt,
            target=target,
            selector=None if is_deploy else selector_from(tx.get("input")),
            events=self.decoder.decode(receipt),
            base_fields=build_base_fields(tx, receipt, timestamp),
        )
        return await handler.handle(ctx)
