"""Authorization registry: per-organization allow-list of verifiers."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trackwell.authorization.models import AuthorizationModel
from trackwell.common.exceptions import NotFoundError
from trackwell.common.security import CallContext

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Organizations grant and revoke verifiers acting on their behalf.

    Entries are never deleted. Revocation flips ``is_active`` so the
    record stays available as an audit trail.
    """

    async def authorize(
        self,
        session: AsyncSession,
        ctx: CallContext,
        verifier: str,
        name: str = "",
        role: str = "",
    ) -> AuthorizationModel:
        """Grant (or re-grant) ``verifier`` for the calling organization."""
        entry = await session.get(AuthorizationModel, (ctx.caller, verifier))
        if entry is None:
            entry = AuthorizationModel(organization=ctx.caller, verifier=verifier)
            session.add(entry)
        entry.verifier_name = name
        entry.role = role
        entry.authorized_at = ctx.now
        entry.authorized_by = ctx.caller
        entry.is_active = True
        await session.flush()
        logger.info("Verifier %s authorized by %s", verifier, ctx.caller)
        return entry

    async def revoke(
        self, session: AsyncSession, ctx: CallContext, verifier: str,
    ) -> AuthorizationModel:
        entry = await session.get(AuthorizationModel, (ctx.caller, verifier))
        if entry is None:
            raise NotFoundError(
                f"Verifier '{verifier}' is not registered for '{ctx.caller}'"
            )
        entry.is_active = False
        await session.flush()
        logger.info("Verifier %s revoked by %s", verifier, ctx.caller)
        return entry

    async def is_authorized(
        self, session: AsyncSession, organization: str, verifier: str,
    ) -> bool:
        entry = await session.get(AuthorizationModel, (organization, verifier))
        return entry is not None and entry.is_active

    async def get_entry(
        self, session: AsyncSession, organization: str, verifier: str,
    ) -> AuthorizationModel:
        entry = await session.get(AuthorizationModel, (organization, verifier))
        if entry is None:
            raise NotFoundError(
                f"Verifier '{verifier}' is not registered for '{organization}'"
            )
        return entry

    async def list_verifiers(
        self, session: AsyncSession, organization: str,
    ) -> list[AuthorizationModel]:
        result = await session.execute(
            select(AuthorizationModel)
            .where(AuthorizationModel.organization == organization)
            .order_by(AuthorizationModel.verifier)
        )
        return list(result.scalars().all())

    async def acts_for(
        self, session: AsyncSession, principal: str, caller: str,
    ) -> bool:
        """True if ``caller`` is ``principal`` or one of its active verifiers."""
        if caller == principal:
            return True
        return await self.is_authorized(session, principal, caller)
