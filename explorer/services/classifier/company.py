"""
Company contract handler.

Order launch and code updates, and company management operations.
"""

from explorer.models.enums import ContractFamily, TxType
from explorer.services.classifier.base import (
    CallHandler,
    ClassifiedTransaction,
    FamilyHandler,
    TxContext,
)
from explorer.services.decoding.calldata import decode_static_args, selector_of

LAUNCH = selector_of("launch(address,uint256)")
UPDATE_ORDER_CODE = selector_of("updateOrderCode(address,uint256,uint256)")
ADD_OPERATOR = selector_of("addOperator(address)")
REMOVE_OPERATOR = selector_of("removeOperator(address)")
SET_NAME = selector_of("setName(string)")
SET_URL = selector_of("setUrl(string)")
SET_RECIPIENT = selector_of("setRecipient(address)")


class CompanyHandler(FamilyHandler):
    """Handler for logistics company contracts."""

    family = ContractFamily.COMPANY

    def get_call_handlers(self) -> dict[str, CallHandler]:
        return {
            LAUNCH: self._launch,
            UPDATE_ORDER_CODE: self._update_order_code,
            ADD_OPERATOR: self._add_operator,
            REMOVE_OPERATOR: self._remove_operator,
            SET_NAME: self._set_name,
            SET_URL: self._set_url,
            SET_RECIPIENT: self._set_recipient,
        }

    async def on_deploy(self, ctx: TxContext) -> ClassifiedTransaction:
        return ctx.record(
            TxType.DEPLOY,
            deployed_type=self.family.value,
            deployed_addr=ctx.target,
            company_addr=ctx.target,
            company_name=await self.contracts.company_name(ctx.target),
            creator=ctx.receipt_sender or ctx.sender,
        )

    async def _order_fields(
        self, ctx: TxContext, order_addr: str, transport_id: int
    ) -> dict:
        return {
            "order_addr": order_addr,
            "order_id": await self.contracts.order_id(order_addr),
            "company_addr": ctx.target,
            "company_name": await self.contracts.company_name(ctx.target),
            "transport_id": str(transport_id),
            "creator": ctx.target,
        }

    async def _launch(self, ctx: TxContext) -> ClassifiedTransaction:
        order_addr, transport_id = decode_static_args(
            ctx.input, ["address", "uint256"]
        )
        fields = await self._order_fields(ctx, order_addr, transport_id)
        return ctx.record(TxType.ORDER_LAUNCH, **fields)

    async def _update_order_code(self, ctx: TxContext) -> ClassifiedTransaction:
        order_addr, transport_id, code = decode_static_args(
            ctx.input, ["address", "uint256", "uint256"]
        )
        fields = await self._order_fields(ctx, order_addr, transport_id)
        result = ctx.record(TxType.ORDER_UPDATE, code=str(code), **fields)
        result.leg_backfill = (order_addr, str(code))
        return result

    async def _add_operator(self, ctx: TxContext) -> ClassifiedTransaction | None:
        return self.management(ctx, TxType.ADD_OPERATOR, "OperatorAdded", "operator")

    async def _remove_operator(self, ctx: TxContext) -> ClassifiedTransaction | None:
        return self.management(
            ctx, TxType.REMOVE_OPERATOR, "OperatorRemoved", "operator"
        )

    async def _set_name(self, ctx: TxContext) -> ClassifiedTransaction | None:
        return self.management(
            ctx, TxType.SET_NAME, "CompanyNameSet", "oldName", "newName"
        )

    async def _set_url(self, ctx: TxContext) -> ClassifiedTransaction | None:
        return self.management(
            ctx, TxType.SET_URL, "CompanyUrlSet", "oldUrl", "newUrl"
        )

    async def _set_recipient(self, ctx: TxContext) -> ClassifiedTransaction | None:
        return self.management(
            ctx, TxType.SET_RECIPIENT, "RecipientSet", "oldRecipient", "newRecipient"
        )
