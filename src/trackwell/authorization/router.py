"""Verifier authorization API router.

The calling organization is always the caller identity; an organization
can only grant or revoke its own verifiers.
"""

from fastapi import APIRouter, Depends

from trackwell.authorization.schemas import (
    VerifierAuthorize,
    VerifierResponse,
    VerifierStatusResponse,
)
from trackwell.common.exceptions import NotFoundError
from trackwell.common.security import CallContext, require_api_key, require_call_context

router = APIRouter(prefix="/verifiers", tags=["verifiers"])


def _get_service():
    from trackwell.deps import get_authorization_service
    return get_authorization_service()


def _get_db():
    from trackwell.deps import get_db
    return get_db()


@router.put("/{verifier}", response_model=VerifierResponse)
async def authorize_verifier(
    verifier: str,
    body: VerifierAuthorize,
    ctx: CallContext = Depends(require_call_context),
):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        entry = await svc.authorize(session, ctx, verifier, body.name, body.role)
        return VerifierResponse.model_validate(entry)


@router.delete("/{verifier}", response_model=VerifierResponse)
async def revoke_verifier(verifier: str, ctx: CallContext = Depends(require_call_context)):
    svc = _get_service()
    db = _get_db()
    async with db.write_session() as session:
        entry = await svc.revoke(session, ctx, verifier)
        return VerifierResponse.model_validate(entry)


@router.get("/{organization}", response_model=list[VerifierResponse])
async def list_verifiers(organization: str, _=Depends(require_api_key)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        entries = await svc.list_verifiers(session, organization)
        return [VerifierResponse.model_validate(e) for e in entries]


@router.get("/{organization}/{verifier}", response_model=VerifierStatusResponse)
async def verifier_status(organization: str, verifier: str, _=Depends(require_api_key)):
    svc = _get_service()
    db = _get_db()
    async with db.get_session() as session:
        try:
            entry = await svc.get_entry(session, organization, verifier)
        except NotFoundError:
            entry = None
        return VerifierStatusResponse(
            organization=organization,
            verifier=verifier,
            authorized=entry is not None and entry.is_active,
            entry=VerifierResponse.model_validate(entry) if entry else None,
        )
