"""Certification registry API router."""

from fastapi import APIRouter, Depends

from trackwell.certifications.schemas import (
    CertificationAdd,
    CertificationResponse,
    CertificationValidity,
)
from trackwell.common.schemas import RecordId
from trackwell.common.security import CallContext, require_api_key, require_call_context

router = APIRouter(
    prefix="/products/{product_id}/certifications", tags=["certifications"],
)


def _get_service():
    from trackwell.deps import get_certification_service
    return get_certification_service()


def _get_db():
    from trackwell.deps import get_db
    return get_db()


@router.put("/{cert_type}", response_model=CertificationResponse)
async def add_certification(
    product_id: RecordId,
    cert_type: str,
    body: CertificationAdd,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        cert = await svc.add(
            session, ctx, product_id, cert_type,
            expiration_time=body.expiration_time,
            cert_hash=body.cert_hash,
            cert_uri=body.cert_uri,
        )
        return CertificationResponse.model_validate(cert)


@router.delete("/{cert_type}", response_model=CertificationResponse)
async def revoke_certification(
    product_id: RecordId, cert_type: str, ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        cert = await svc.revoke(session, ctx, product_id, cert_type)
        return CertificationResponse.model_validate(cert)


@router.get("/{cert_type}", response_model=CertificationResponse)
async def get_certification(
    product_id: RecordId, cert_type: str, _=Depends(require_api_key),
):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        cert = await svc.get(session, product_id, cert_type)
        return CertificationResponse.model_validate(cert)


@router.get("/{cert_type}/validity", response_model=CertificationValidity)
async def certification_validity(
    product_id: RecordId, cert_type: str, _=Depends(require_api_key),
):
    from trackwell.deps import get_clock

    svc = _get_service()
    db = _get_db()
    now = get_clock().now()
    async with db.get_session() as session:
        valid = await svc.is_valid(session, product_id, cert_type, now)
        return CertificationValidity(
            product_id=product_id, cert_type=cert_type, valid=valid, checked_at=now,
        )
