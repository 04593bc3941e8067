"""
Service contract handler.

Company registration, order payment and settlement.
"""

from loguru import logger

from explorer.models.enums import ContractFamily, TxType
from explorer.services.classifier.base import (
    CallHandler,
    ClassifiedTransaction,
    FamilyHandler,
    TxContext,
)
from explorer.services.decoding.calldata import decode_static_args, selector_of
from explorer.utils.formatters import mask_address

REGISTER = selector_of("register(address)")
UNREGISTER = selector_of("unregister(address)")
MARK_ORDER_PAYED = selector_of("markOrderPayed(address)")
SETTLE = selector_of("settle(address)")


class ServiceHandler(FamilyHandler):
    """Handler for the service (root) contract."""

    family = ContractFamily.SERVICE

    def get_call_handlers(self) -> dict[str, CallHandler]:
        return {
            REGISTER: self._register,
            UNREGISTER: self._unregister,
            MARK_ORDER_PAYED: self._mark_order_payed,
            SETTLE: self._settle,
        }

    async def on_deploy(self, ctx: TxContext) -> ClassifiedTransaction:
        logger.info(f"[Service] Service deployed at {mask_address(ctx.target)}")
        return ctx.record(
            TxType.DEPLOY,
            deployed_type=self.family.value,
            deployed_addr=ctx.target,
            service_addr=ctx.target,
            creator=ctx.receipt_sender or ctx.sender,
        )

    async def _company_change(
        self, ctx: TxContext, tx_type: TxType, event_name: str
    ) -> ClassifiedTransaction | None:
        occurrence = ctx.event(event_name)
        if occurrence is None:
            return None
        company = occurrence.args["company"]
        return ctx.record(
            tx_type,
            company_addr=company,
            company_name=await self.contracts.company_name(company),
            creator=ctx.target,
        )

    async def _register(self, ctx: TxContext) -> ClassifiedTransaction | None:
        return await self._company_change(ctx, TxType.REGISTER, "CompanyRegistered")

    async def _unregister(self, ctx: TxContext) -> ClassifiedTransaction | None:
        return await self._company_change(
            ctx, TxType.UNREGISTER, "CompanyUnregistered"
        )

    async def _mark_order_payed(self, ctx: TxContext) -> ClassifiedTransaction:
        (order_addr,) = decode_static_args(ctx.input, ["address"])
        return ctx.record(
            TxType.MARK_PAYMENT,
            order_addr=order_addr,
            order_id=await self.contracts.order_id(order_addr),
            creator=ctx.target,
        )

    async def _settle(self, ctx: TxContext) -> ClassifiedTransaction | None:
        occurrence = ctx.event("Settled")
        if occurrence is None:
            return None
        args = occurrence.args
        return ctx.record(
            TxType.SETTLEMENT,
            recipient=args["recipient"],
            payment=str(args["payment"]),
            rest=str(args["rest"]),
            creator=ctx.target,
        )
