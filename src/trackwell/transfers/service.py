"""Transfer workflow: pending -> completed | rejected | cancelled."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trackwell.checkpoints.service import CheckpointService
from trackwell.common.digest import digest_text
from trackwell.common.exceptions import (
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from trackwell.common.security import CallContext
from trackwell.products.queries import load_product
from trackwell.products.status import CheckpointType
from trackwell.transfers.models import TransferModel, TransferStatus

logger = logging.getLogger(__name__)


class TransferService:
    """Ownership-change state machine, one record per transfer attempt."""

    def __init__(self, checkpoints: CheckpointService, event_log=None):
        self.checkpoints = checkpoints
        self.event_log = event_log

    async def initiate(
        self,
        session: AsyncSession,
        ctx: CallContext,
        product_id: int,
        transferee: str,
        conditions: str | None = None,
    ) -> TransferModel:
        product = await load_product(session, product_id)
        if ctx.caller != product.current_owner:
            logger.warning(
                "Transfer of product %s refused for %s", product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError("Only the current owner can initiate a transfer")
        if product.is_recalled:
            raise InvalidStateError(f"Product {product_id} has been recalled")

        transfer = TransferModel(
            product_id=product_id,
            transfer_id=product.next_transfer_id,
            transferor=ctx.caller,
            transferee=transferee,
            initiated_at=ctx.now,
            status=TransferStatus.PENDING.value,
            conditions=conditions,
        )
        session.add(transfer)
        product.next_transfer_id += 1
        await session.flush()

        await self._record(session, ctx, transfer, "transfer.initiated")
        logger.info(
            "Transfer %s of product %s initiated: %s -> %s",
            transfer.transfer_id, product_id, ctx.caller, transferee,
        )
        return transfer

    async def accept(
        self, session: AsyncSession, ctx: CallContext, product_id: int, transfer_id: int,
    ) -> TransferModel:
        """Complete the transfer, hand over ownership and log the handover."""
        transfer = await self.get(session, product_id, transfer_id)
        if ctx.caller != transfer.transferee:
            logger.warning(
                "Transfer %s accept on product %s refused for %s",
                transfer_id, product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError("Only the transferee can accept a transfer")
        self._require_pending(transfer)

        product = await load_product(session, product_id)
        if product.is_recalled:
            raise InvalidStateError(f"Product {product_id} has been recalled")
        previous_owner = product.current_owner
        transfer.status = TransferStatus.COMPLETED.value
        transfer.completed_at = ctx.now
        product.current_owner = ctx.caller

        await self.checkpoints.record(
            session, ctx, product,
            location="Transfer",
            checkpoint_type=CheckpointType.TRANSFER,
            attestation_hash=digest_text(
                f"{product_id}:{transfer_id}:{previous_owner}:{ctx.caller}"
            ),
            notes=f"Ownership transferred from {previous_owner} to {ctx.caller}",
        )
        await self._record(session, ctx, transfer, "transfer.completed")
        logger.info(
            "Transfer %s of product %s completed, owner is now %s",
            transfer_id, product_id, ctx.caller,
        )
        return transfer

    async def reject(
        self,
        session: AsyncSession,
        ctx: CallContext,
        product_id: int,
        transfer_id: int,
        reason: str,
    ) -> TransferModel:
        transfer = await self.get(session, product_id, transfer_id)
        if ctx.caller != transfer.transferee:
            logger.warning(
                "Transfer %s reject on product %s refused for %s",
                transfer_id, product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError("Only the transferee can reject a transfer")
        self._require_pending(transfer)

        transfer.status = TransferStatus.REJECTED.value
        transfer.completed_at = ctx.now
        transfer.conditions = reason
        await session.flush()

        await self._record(session, ctx, transfer, "transfer.rejected")
        logger.info("Transfer %s of product %s rejected", transfer_id, product_id)
        return transfer

    async def cancel(
        self, session: AsyncSession, ctx: CallContext, product_id: int, transfer_id: int,
    ) -> TransferModel:
        transfer = await self.get(session, product_id, transfer_id)
        if ctx.caller != transfer.transferor:
            logger.warning(
                "Transfer %s cancel on product %s refused for %s",
                transfer_id, product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError("Only the transferor can cancel a transfer")
        self._require_pending(transfer)

        transfer.status = TransferStatus.CANCELLED.value
        transfer.completed_at = ctx.now
        await session.flush()

        await self._record(session, ctx, transfer, "transfer.cancelled")
        logger.info("Transfer %s of product %s cancelled", transfer_id, product_id)
        return transfer

    async def get(
        self, session: AsyncSession, product_id: int, transfer_id: int,
    ) -> TransferModel:
        transfer = await session.get(TransferModel, (product_id, transfer_id))
        if transfer is None:
            raise NotFoundError(
                f"Transfer {transfer_id} of product {product_id} not found"
            )
        return transfer

    async def list_for_product(
        self, session: AsyncSession, product_id: int,
    ) -> list[TransferModel]:
        await load_product(session, product_id)
        result = await session.execute(
            select(TransferModel)
            .where(TransferModel.product_id == product_id)
            .order_by(TransferModel.transfer_id.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    def _require_pending(transfer: TransferModel) -> None:
        if not transfer.is_pending:
            raise InvalidStateError(
                f"Transfer {transfer.transfer_id} is already {transfer.status}"
            )

    async def _record(
        self, session: AsyncSession, ctx: CallContext, transfer: TransferModel, event_type: str,
    ) -> None:
        if self.event_log:
            await self.event_log.record_event(
                session, transfer.product_id, event_type, ctx.caller, ctx.now,
                {
                    "transfer_id": transfer.transfer_id,
                    "transferor": transfer.transferor,
                    "transferee": transfer.transferee,
                    "conditions": transfer.conditions,
                },
            )
