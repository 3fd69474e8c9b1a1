"""Product API router."""

from fastapi import APIRouter, Depends

from trackwell.common.schemas import RecordId
from trackwell.common.security import CallContext, require_api_key, require_call_context
from trackwell.products.schemas import (
    AuthenticityResponse,
    DeliveryInfoUpdate,
    ProductCountResponse,
    ProductRegister,
    ProductResponse,
    RecallRequest,
)

router = APIRouter()


def _get_service():
    from trackwell.deps import get_product_service
    return get_product_service()


def _get_db():
    from trackwell.deps import get_db
    return get_db()


@router.post("/products", response_model=ProductResponse, status_code=201)
async def register_product(
    body: ProductRegister, ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        product = await svc.register(
            session, ctx,
            name=body.name,
            description=body.description,
            batch_number=body.batch_number,
            product_type=body.product_type,
            origin_location=body.origin_location,
            product_uri=body.product_uri,
        )
        return ProductResponse.model_validate(product)


@router.get("/products/count", response_model=ProductCountResponse)
async def product_count(_=Depends(require_api_key)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        return ProductCountResponse(count=await svc.get_product_count(session))


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: RecordId, _=Depends(require_api_key)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        product = await svc.get_details(session, product_id)
        return ProductResponse.model_validate(product)


@router.put("/products/{product_id}/delivery", response_model=ProductResponse)
async def set_delivery_info(
    product_id: RecordId,
    body: DeliveryInfoUpdate,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        product = await svc.set_delivery_info(
            session, ctx, product_id, body.location, body.expected_time,
        )
        return ProductResponse.model_validate(product)


@router.post("/products/{product_id}/recall", response_model=ProductResponse)
async def recall_product(
    product_id: RecordId,
    body: RecallRequest,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        product = await svc.recall(session, ctx, product_id, body.reason)
        return ProductResponse.model_validate(product)


@router.get("/products/{product_id}/authenticity", response_model=AuthenticityResponse)
async def verify_authenticity(product_id: RecordId, _=Depends(require_api_key)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        return AuthenticityResponse(**await svc.verify_authenticity(session, product_id))
