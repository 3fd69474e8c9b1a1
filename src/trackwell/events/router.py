"""Product event log API router."""

from fastapi import APIRouter, Depends, Query

from trackwell.common.schemas import RecordId
from trackwell.common.security import require_api_key
from trackwell.events.schemas import EventChainVerification, ProductEventResponse

router = APIRouter()


def _get_service():
    from trackwell.deps import get_event_log_service
    return get_event_log_service()


def _get_db():
    from trackwell.deps import get_db
    return get_db()


@router.get("/products/{product_id}/events", response_model=list[ProductEventResponse])
async def get_product_events(
    product_id: RecordId,
    event_type: str | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    _=Depends(require_api_key),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        events = await svc.get_events(
            session, product_id, event_type=event_type,
            limit=limit, offset=offset,
        )
        return [ProductEventResponse.model_validate(e) for e in events]


@router.get(
    "/products/{product_id}/events/verify", response_model=EventChainVerification,
)
async def verify_event_chain(product_id: RecordId, _=Depends(require_api_key)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        result = await svc.verify_chain(session, product_id)
        return EventChainVerification(**result)
