"""Transfer workflow API router."""

from fastapi import APIRouter, Depends

from trackwell.common.schemas import RecordId
from trackwell.common.security import CallContext, require_api_key, require_call_context
from trackwell.transfers.schemas import TransferInitiate, TransferReject, TransferResponse

router = APIRouter(prefix="/products/{product_id}/transfers", tags=["transfers"])


def _get_service():
    from trackwell.deps import get_transfer_service
    return get_transfer_service()


def _get_db():
    from trackwell.deps import get_db
    return get_db()


@router.post("", response_model=TransferResponse, status_code=201)
async def initiate_transfer(
    product_id: RecordId,
    body: TransferInitiate,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        transfer = await svc.initiate(
            session, ctx, product_id, body.transferee, body.conditions,
        )
        return TransferResponse.model_validate(transfer)


@router.get("", response_model=list[TransferResponse])
async def list_transfers(product_id: RecordId, _=Depends(require_api_key)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        transfers = await svc.list_for_product(session, product_id)
        return [TransferResponse.model_validate(t) for t in transfers]


@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(
    product_id: RecordId, transfer_id: RecordId, _=Depends(require_api_key),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        transfer = await svc.get(session, product_id, transfer_id)
        return TransferResponse.model_validate(transfer)


@router.post("/{transfer_id}/accept", response_model=TransferResponse)
async def accept_transfer(
    product_id: RecordId,
    transfer_id: RecordId,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        transfer = await svc.accept(session, ctx, product_id, transfer_id)
        return TransferResponse.model_validate(transfer)


@router.post("/{transfer_id}/reject", response_model=TransferResponse)
async def reject_transfer(
    product_id: RecordId,
    transfer_id: RecordId,
    body: TransferReject,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        transfer = await svc.reject(session, ctx, product_id, transfer_id, body.reason)
        return TransferResponse.model_validate(transfer)


@router.post("/{transfer_id}/cancel", response_model=TransferResponse)
async def cancel_transfer(
    product_id: RecordId,
    transfer_id: RecordId,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        transfer = await svc.cancel(session, ctx, product_id, transfer_id)
        return TransferResponse.model_validate(transfer)
