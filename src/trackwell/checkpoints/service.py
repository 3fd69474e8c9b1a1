"""Checkpoint ledger: append-only, per-product sequence of handling events."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trackwell.authorization.service import AuthorizationService
from trackwell.checkpoints.models import CheckpointModel
from trackwell.common.exceptions import (
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from trackwell.common.security import CallContext
from trackwell.products.models import ProductModel
from trackwell.products.queries import load_product
from trackwell.products.status import CheckpointType, derive_status

logger = logging.getLogger(__name__)


class CheckpointService:
    """Checkpoint append and lookup.

    ``append`` is the public, authorization-gated entry point. ``record``
    is the shared write path used by registration, transfer acceptance and
    recall; it is the only place that recomputes product status.
    """

    def __init__(self, authorization: AuthorizationService, event_log=None):
        self.authorization = authorization
        self.event_log = event_log

    async def append(
        self,
        session: AsyncSession,
        ctx: CallContext,
        product_id: int,
        location: str,
        checkpoint_type: CheckpointType | str,
        attestation_hash: str,
        temperature: float | None = None,
        humidity: float | None = None,
        notes: str | None = None,
    ) -> CheckpointModel:
        product = await load_product(session, product_id)
        if not await self.authorization.acts_for(
            session, product.current_owner, ctx.caller
        ):
            logger.warning(
                "Checkpoint on product %s refused for %s", product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError(
                "Caller is neither the current owner nor one of its active verifiers"
            )
        return await self.record(
            session, ctx, product,
            location=location,
            checkpoint_type=checkpoint_type,
            attestation_hash=attestation_hash,
            temperature=temperature,
            humidity=humidity,
            notes=notes,
        )

    async def record(
        self,
        session: AsyncSession,
        ctx: CallContext,
        product: ProductModel,
        location: str,
        checkpoint_type: CheckpointType | str,
        attestation_hash: str,
        temperature: float | None = None,
        humidity: float | None = None,
        notes: str | None = None,
    ) -> CheckpointModel:
        """Write the next checkpoint for ``product`` without a caller check."""
        checkpoint_type = CheckpointType(checkpoint_type)
        if product.is_recalled:
            raise InvalidStateError(f"Product {product.product_id} has been recalled")

        checkpoint = CheckpointModel(
            product_id=product.product_id,
            checkpoint_id=product.next_checkpoint_id,
            location=location,
            timestamp=ctx.now,
            operator=product.current_owner,
            verified_by=ctx.caller,
            checkpoint_type=checkpoint_type.value,
            temperature=temperature,
            humidity=humidity,
            notes=notes,
            attestation_hash=attestation_hash.lower(),
        )
        session.add(checkpoint)
        product.status = derive_status(product.status, checkpoint_type).value
        product.next_checkpoint_id += 1
        await session.flush()

        if self.event_log:
            await self.event_log.record_event(
                session, product.product_id, "checkpoint.added", ctx.caller, ctx.now,
                {
                    "checkpoint_id": checkpoint.checkpoint_id,
                    "checkpoint_type": checkpoint.checkpoint_type,
                    "location": location,
                    "attestation_hash": checkpoint.attestation_hash,
                    "status": product.status,
                },
            )

        logger.info(
            "Checkpoint %s (%s) appended to product %s",
            checkpoint.checkpoint_id, checkpoint.checkpoint_type, product.product_id,
        )
        return checkpoint

    async def get(
        self, session: AsyncSession, product_id: int, checkpoint_id: int,
    ) -> CheckpointModel:
        checkpoint = await session.get(CheckpointModel, (product_id, checkpoint_id))
        if checkpoint is None:
            raise NotFoundError(
                f"Checkpoint {checkpoint_id} of product {product_id} not found"
            )
        return checkpoint

    async def list_for_product(
        self,
        session: AsyncSession,
        product_id: int,
        limit: int = 50,
        offset: int = 0,
    ) -> list[CheckpointModel]:
        """Product history in append order."""
        await load_product(session, product_id)
        result = await session.execute(
            select(CheckpointModel)
            .where(CheckpointModel.product_id == product_id)
            .order_by(CheckpointModel.checkpoint_id.asc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_for_product(self, session: AsyncSession, product_id: int) -> int:
        product = await load_product(session, product_id)
        return product.next_checkpoint_id
