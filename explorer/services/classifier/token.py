"""
Token contract handler.

Transfers, burns and approvals of the token network.
"""

from explorer.models.enums import ContractFamily, TxType
from explorer.services.classifier.base import (
    CallHandler,
    ClassifiedTransaction,
    FamilyHandler,
    TxContext,
)
from explorer.services.decoding.calldata import selector_of

TRANSFER = selector_of("transfer(address,uint256)")
TRANSFER_FROM = selector_of("transferFrom(address,address,uint256)")
BURN = selector_of("burn(uint256)")
APPROVE = selector_of("approve(address,uint256)")


class TokenHandler(FamilyHandler):
    """Handler for the token contract."""

    family = ContractFamily.TOKEN

    def get_call_handlers(self) -> dict[str, CallHandler]:
        return {
            TRANSFER: self._transfer,
            TRANSFER_FROM: self._transfer,
            BURN: self._burn,
            APPROVE: self._approve,
        }

    async def on_deploy(self, ctx: TxContext) -> ClassifiedTransaction:
        return ctx.record(
            TxType.DEPLOY,
            deployed_type=self.family.value,
            token_addr=ctx.target,
            creator=ctx.receipt_sender or ctx.sender,
        )

    async def _transfer(self, ctx: TxContext) -> ClassifiedTransaction | None:
        occurrence = ctx.event("Transfer")
        if occurrence is None:
            return None
        args = occurrence.args
        return ctx.record(
            TxType.TRANSFER,
            origin=args["from"],
            dest=args["to"],
            amount=str(args["value"]),
        )

    async def _burn(self, ctx: TxContext) -> ClassifiedTransaction | None:
        occurrence = ctx.event("Transfer")
        if occurrence is None:
            return None
        args = occurrence.args
        return ctx.record(
            TxType.BURN,
            origin=args["from"],
            amount=str(args["value"]),
        )

    async def _approve(self, ctx: TxContext) -> ClassifiedTransaction | None:
        occurrence = ctx.event("Approval")
        if occurrence is None:
            return None
        args = occurrence.args
        return ctx.record(
            TxType.APPROVE,
            origin=args["owner"],
            dest=args["spender"],
            amount=str(args["value"]),
        )
