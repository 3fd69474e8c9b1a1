"""Event log service: record, verify, and query the per-product event chain."""

import hashlib
import hmac as hmac_mod
import json
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trackwell.common.config import TrackwellSettings
from trackwell.events.models import ProductEventModel
from trackwell.products.queries import load_product

EVENT_TYPES: frozenset[str] = frozenset({
    "product.registered",
    "product.recalled",
    "delivery.updated",
    "checkpoint.added",
    "transfer.initiated",
    "transfer.completed",
    "transfer.rejected",
    "transfer.cancelled",
    "certification.added",
    "certification.revoked",
})


class EventLogService:
    """Immutable, hash-chained event log per product.

    Events are written in the same session as the mutation they describe,
    so a rolled-back operation leaves no event behind.
    """

    def __init__(self, settings: TrackwellSettings):
        self.settings = settings

    # ── Write ──

    async def record_event(
        self,
        session: AsyncSession,
        product_id: int,
        event_type: str,
        actor: str,
        logical_time: int,
        detail: dict[str, Any] | None = None,
    ) -> ProductEventModel:
        """Append a new event to the product's chain."""
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {event_type}")
        detail = detail or {}

        head = await self.get_chain_head(session, product_id)
        prev_hash = head.event_hash if head else None
        sequence = head.sequence + 1 if head else 0

        event_hash = self._compute_event_hash(
            sequence, event_type, actor, logical_time, detail, prev_hash,
        )

        event = ProductEventModel(
            product_id=product_id,
            sequence=sequence,
            event_type=event_type,
            actor=actor,
            logical_time=logical_time,
            detail=detail,
            prev_hash=prev_hash,
            event_hash=event_hash,
            signature=self._sign(event_hash),
        )
        session.add(event)
        await session.flush()
        return event

    # ── Read ──

    async def get_chain_head(
        self, session: AsyncSession, product_id: int,
    ) -> ProductEventModel | None:
        result = await session.execute(
            select(ProductEventModel)
            .where(ProductEventModel.product_id == product_id)
            .order_by(ProductEventModel.sequence.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_events(
        self,
        session: AsyncSession,
        product_id: int,
        event_type: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[ProductEventModel]:
        """Paginated event list, oldest first."""
        await load_product(session, product_id)
        query = (
            select(ProductEventModel)
            .where(ProductEventModel.product_id == product_id)
        )
        if event_type:
            query = query.where(ProductEventModel.event_type == event_type)
        query = (
            query.order_by(ProductEventModel.sequence.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(query)
        return list(result.scalars().all())

    # ── Verify ──

    async def verify_chain(
        self, session: AsyncSession, product_id: int,
    ) -> dict[str, Any]:
        """Walk the chain oldest to newest, verify linkage, hashes and signatures."""
        await load_product(session, product_id)
        result = await session.execute(
            select(ProductEventModel)
            .where(ProductEventModel.product_id == product_id)
            .order_by(ProductEventModel.sequence.asc())
        )
        events = list(result.scalars().all())

        prev_hash = None
        for index, event in enumerate(events):
            expected_hash = self._compute_event_hash(
                event.sequence, event.event_type, event.actor,
                event.logical_time, event.detail, event.prev_hash,
            )
            if (
                event.sequence != index
                or event.prev_hash != prev_hash
                or event.event_hash != expected_hash
                or not hmac_mod.compare_digest(
                    self._sign(event.event_hash), event.signature
                )
            ):
                return {"valid": False, "events_checked": index, "break_at": event.id}
            prev_hash = event.event_hash

        return {"valid": True, "events_checked": len(events), "break_at": None}

    # ── Internal helpers ──

    @staticmethod
    def _compute_event_hash(
        sequence: int,
        event_type: str,
        actor: str,
        logical_time: int,
        detail: dict[str, Any],
        prev_hash: str | None,
    ) -> str:
        """SHA-256 of canonical JSON of the event fields."""
        canonical = json.dumps(
            {
                "sequence": sequence,
                "event_type": event_type,
                "actor": actor,
                "logical_time": logical_time,
                "detail": detail,
                "prev_hash": prev_hash,
            },
            sort_keys=True,
            separators=(",", ":"),
        )
        return hashlib.sha256(canonical.encode()).hexdigest()

    def _sign(self, event_hash: str) -> str:
        return hmac_mod.new(
            self.settings.signing_key.encode(),
            event_hash.encode(),
            hashlib.sha256,
        ).hexdigest()
