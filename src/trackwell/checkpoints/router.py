"""Checkpoint ledger API router."""

from fastapi import APIRouter, Depends, Query

from trackwell.checkpoints.schemas import CheckpointCreate, CheckpointResponse
from trackwell.common.schemas import RecordId
from trackwell.common.security import CallContext, require_api_key, require_call_context

router = APIRouter()


def _get_service():
    from trackwell.deps import get_checkpoint_service
    return get_checkpoint_service()


def _get_db():
    from trackwell.deps import get_db
    return get_db()


@router.post(
    "/products/{product_id}/checkpoints",
    response_model=CheckpointResponse,
    status_code=201,
)
async def append_checkpoint(
    product_id: RecordId,
    body: CheckpointCreate,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        checkpoint = await svc.append(
            session, ctx, product_id,
            location=body.location,
            checkpoint_type=body.checkpoint_type,
            attestation_hash=body.attestation_hash,
            temperature=body.temperature,
            humidity=body.humidity,
            notes=body.notes,
        )
        return CheckpointResponse.model_validate(checkpoint)


@router.get(
    "/products/{product_id}/checkpoints",
    response_model=list[CheckpointResponse],
)
async def list_checkpoints(
    product_id: RecordId,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    _=Depends(require_api_key),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        checkpoints = await svc.list_for_product(
            session, product_id, limit=limit, offset=offset,
        )
        return [CheckpointResponse.model_validate(c) for c in checkpoints]


@router.get(
    "/products/{product_id}/checkpoints/{checkpoint_id}",
    response_model=CheckpointResponse,
)
async def get_checkpoint(
    product_id: RecordId, checkpoint_id: RecordId, _=Depends(require_api_key),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        checkpoint = await svc.get(session, product_id, checkpoint_id)
        return CheckpointResponse.model_validate(checkpoint)
