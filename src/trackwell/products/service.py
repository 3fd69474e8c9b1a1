"""Product store: registration, delivery info, recall and authenticity."""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from trackwell.authorization.service import AuthorizationService
from trackwell.checkpoints.service import CheckpointService
from trackwell.common.digest import digest_text
from trackwell.common.exceptions import InvalidStateError, UnauthorizedError
from trackwell.common.models import SequenceModel
from trackwell.common.security import CallContext
from trackwell.products.models import ProductModel
from trackwell.products.queries import load_product
from trackwell.products.status import CheckpointType, ProductStatus

logger = logging.getLogger(__name__)

PRODUCT_SEQUENCE = "product"


class ProductService:
    """Canonical product records.

    Product ids come from the ``product`` row of the sequences table. The
    row is advanced in the registering transaction, so a failed
    registration never consumes an id.
    """

    def __init__(
        self,
        authorization: AuthorizationService,
        checkpoints: CheckpointService,
        event_log=None,
    ):
        self.authorization = authorization
        self.checkpoints = checkpoints
        self.event_log = event_log

    async def register(
        self,
        session: AsyncSession,
        ctx: CallContext,
        name: str,
        description: str,
        batch_number: str,
        product_type: str,
        origin_location: str,
        product_uri: str | None = None,
    ) -> ProductModel:
        """Create a product owned by its manufacturer plus its manufacture checkpoint."""
        sequence = await self._product_sequence(session)
        product = ProductModel(
            product_id=sequence.next_value,
            name=name,
            description=description,
            manufacturer=ctx.caller,
            batch_number=batch_number,
            registered_at=ctx.now,
            status=ProductStatus.CREATED.value,
            product_type=product_type,
            origin_location=origin_location,
            current_owner=ctx.caller,
            product_uri=product_uri,
            next_checkpoint_id=0,
            next_transfer_id=0,
        )
        session.add(product)
        await session.flush()

        if self.event_log:
            await self.event_log.record_event(
                session, product.product_id, "product.registered", ctx.caller, ctx.now,
                {"batch_number": batch_number, "product_type": product_type},
            )

        await self.checkpoints.record(
            session, ctx, product,
            location=origin_location,
            checkpoint_type=CheckpointType.MANUFACTURE,
            attestation_hash=digest_text(batch_number),
            notes="Product manufactured",
        )
        sequence.next_value += 1
        await session.flush()

        logger.info(
            "Product %s registered by %s (batch %s)",
            product.product_id, ctx.caller, batch_number,
        )
        return product

    async def get_details(self, session: AsyncSession, product_id: int) -> ProductModel:
        return await load_product(session, product_id)

    async def get_product_count(self, session: AsyncSession) -> int:
        sequence = await session.get(SequenceModel, PRODUCT_SEQUENCE)
        return sequence.next_value if sequence else 0

    async def set_delivery_info(
        self,
        session: AsyncSession,
        ctx: CallContext,
        product_id: int,
        location: str,
        expected_time: int,
    ) -> ProductModel:
        product = await load_product(session, product_id)
        if not await self.authorization.acts_for(
            session, product.current_owner, ctx.caller
        ):
            logger.warning(
                "Delivery update on product %s refused for %s", product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError(
                "Caller is neither the current owner nor one of its active verifiers"
            )
        if product.is_recalled:
            raise InvalidStateError(f"Product {product_id} has been recalled")

        product.delivery_location = location
        product.expected_delivery_time = expected_time
        await session.flush()

        if self.event_log:
            await self.event_log.record_event(
                session, product_id, "delivery.updated", ctx.caller, ctx.now,
                {"location": location, "expected_time": expected_time},
            )
        logger.info("Delivery info for product %s set by %s", product_id, ctx.caller)
        return product

    async def recall(
        self, session: AsyncSession, ctx: CallContext, product_id: int, reason: str,
    ) -> ProductModel:
        """Recall a product. Only its manufacturer may; the state is terminal."""
        product = await load_product(session, product_id)
        if ctx.caller != product.manufacturer:
            logger.warning(
                "Recall of product %s refused for %s", product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError("Only the manufacturer can recall a product")
        if product.is_recalled:
            raise InvalidStateError(f"Product {product_id} is already recalled")

        await self.checkpoints.record(
            session, ctx, product,
            location="Recall",
            checkpoint_type=CheckpointType.RECALL,
            attestation_hash=digest_text(reason),
            notes=reason,
        )

        if self.event_log:
            await self.event_log.record_event(
                session, product_id, "product.recalled", ctx.caller, ctx.now,
                {"reason": reason},
            )
        logger.info("Product %s recalled by %s: %s", product_id, ctx.caller, reason)
        return product

    async def verify_authenticity(
        self, session: AsyncSession, product_id: int,
    ) -> dict[str, Any]:
        """Existence check plus metadata echo. No cryptographic proof."""
        product = await load_product(session, product_id)
        return {
            "authentic": True,
            "product_id": product.product_id,
            "manufacturer": product.manufacturer,
            "batch_number": product.batch_number,
            "status": product.status,
        }

    async def _product_sequence(self, session: AsyncSession) -> SequenceModel:
        sequence = await session.get(SequenceModel, PRODUCT_SEQUENCE)
        if sequence is None:
            sequence = SequenceModel(name=PRODUCT_SEQUENCE, next_value=0)
            session.add(sequence)
            await session.flush()
        return sequence
