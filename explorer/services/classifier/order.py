"""
Order contract handler.

Order deployment and submission seed the order tracking legs.
"""

from typing import Any

from loguru import logger

from explorer.models.enums import ContractFamily, TxType
from explorer.services.classifier.base import (
    CallHandler,
    ClassifiedTransaction,
    FamilyHandler,
    TxContext,
)
from explorer.services.decoding.calldata import selector_of
from explorer.utils.formatters import mask_address

SUBMIT_ORDER_CREATE = selector_of("submitOrderCreate()")
SET_URL = selector_of("setUrl(string)")


class OrderHandler(FamilyHandler):
    """Handler for order contracts."""

    family = ContractFamily.ORDER

    def get_call_handlers(self) -> dict[str, CallHandler]:
        return {
            SUBMIT_ORDER_CREATE: self._submit,
            SET_URL: self._set_url,
        }

    async def tracking_legs(
        self, ctx: TxContext, order_addr: str, order_id: str
    ) -> list[dict[str, Any]]:
        """
        Build leg rows from the order's tracking table.

        Leg 0 belongs to the shipper: it carries this transaction's
        hash and no company name.

        Args:
            ctx: Transaction context
            order_addr: Order contract address
            order_id: Order id (decimal string)

        Returns:
            Leg data dicts in transport id order
        """
        legs = []
        entries = await self.contracts.tracking_table(order_addr)
        for transport_id, entry in enumerate(entries):
            company_name = None
            if transport_id > 0:
                company_name = await self.contracts.company_name(entry.addr)
            legs.append(
                {
                    "order_addr": order_addr,
                    "order_id": order_id,
                    "transport_id": transport_id,
                    "company_addr": entry.addr,
                    "company_name": company_name,
                    "code": str(entry.code),
                    "incentives": str(entry.incentives),
                    "block_number": ctx.block_number,
                    "tx_hash": ctx.hash if transport_id == 0 else None,
                }
            )
        return legs

    async def on_deploy(self, ctx: TxContext) -> ClassifiedTransaction:
        order_addr = ctx.target
        order_id = await self.contracts.order_id(order_addr)
        result = ctx.record(
            TxType.DEPLOY,
            deployed_type=self.family.value,
            deployed_addr=order_addr,
            order_addr=order_addr,
            order_id=order_id,
            creator=ctx.receipt_sender or ctx.sender,
        )
        result.seed_legs = await self.tracking_legs(ctx, order_addr, order_id)
        logger.info(
            f"[Order] Order {order_id} deployed at {mask_address(order_addr)} "
            f"with {len(result.seed_legs)} legs"
        )
        return result

    async def _submit(self, ctx: TxContext) -> ClassifiedTransaction:
        order_addr = ctx.target
        order_id = await self.contracts.order_id(order_addr)
        result = ctx.record(
            TxType.SUBMIT,
            order_addr=order_addr,
            order_id=order_id,
            creator=ctx.sender,
        )
        result.seed_legs = await self.tracking_legs(ctx, order_addr, order_id)
        return result

    async def _set_url(self, ctx: TxContext) -> ClassifiedTransaction | None:
        return self.management(
            ctx, TxType.SET_ORDER_URL, "OrderUrlSet", "oldUrl", "newUrl"
        )
