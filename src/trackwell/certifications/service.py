"""Certification registry: compliance records per product and type."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from trackwell.authorization.service import AuthorizationService
from trackwell.certifications.models import CertificationModel, CertificationStatus
from trackwell.common.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from trackwell.common.security import CallContext
from trackwell.products.queries import load_product

logger = logging.getLogger(__name__)


class CertificationService:
    """Certifications are issued under the manufacturer's authority.

    The manufacturer, or a verifier it has authorized, may certify; only
    the certifier of the current record may revoke it.
    """

    def __init__(self, authorization: AuthorizationService, event_log=None):
        self.authorization = authorization
        self.event_log = event_log

    async def add(
        self,
        session: AsyncSession,
        ctx: CallContext,
        product_id: int,
        cert_type: str,
        expiration_time: int,
        cert_hash: str,
        cert_uri: str | None = None,
    ) -> CertificationModel:
        """Issue, or re-issue, the ``cert_type`` certification of a product."""
        product = await load_product(session, product_id)
        if not await self.authorization.acts_for(
            session, product.manufacturer, ctx.caller
        ):
            logger.warning(
                "Certification of product %s refused for %s", product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError(
                "Caller is neither the manufacturer nor one of its active verifiers"
            )
        if expiration_time <= ctx.now:
            raise InvalidArgumentError("Expiration time must be in the future")
        if product.is_recalled:
            raise InvalidStateError(f"Product {product_id} has been recalled")

        cert = await session.get(CertificationModel, (product_id, cert_type))
        if cert is None:
            cert = CertificationModel(product_id=product_id, cert_type=cert_type)
            session.add(cert)
        cert.certifier = ctx.caller
        cert.issued_at = ctx.now
        cert.expiration_time = expiration_time
        cert.cert_hash = cert_hash.lower()
        cert.cert_uri = cert_uri
        cert.cert_status = CertificationStatus.VALID.value
        await session.flush()

        if self.event_log:
            await self.event_log.record_event(
                session, product_id, "certification.added", ctx.caller, ctx.now,
                {
                    "cert_type": cert_type,
                    "expiration_time": expiration_time,
                    "cert_hash": cert.cert_hash,
                },
            )
        logger.info(
            "Certification %s added to product %s by %s", cert_type, product_id, ctx.caller
        )
        return cert

    async def revoke(
        self, session: AsyncSession, ctx: CallContext, product_id: int, cert_type: str,
    ) -> CertificationModel:
        cert = await self.get(session, product_id, cert_type)
        if ctx.caller != cert.certifier:
            logger.warning(
                "Revocation of %s on product %s refused for %s",
                cert_type, product_id, ctx.caller,
                extra={"product_id": product_id, "caller": ctx.caller},
            )
            raise UnauthorizedError("Only the certifier can revoke a certification")
        if cert.cert_status == CertificationStatus.REVOKED.value:
            raise InvalidStateError(f"Certification {cert_type} is already revoked")

        cert.cert_status = CertificationStatus.REVOKED.value
        await session.flush()

        if self.event_log:
            await self.event_log.record_event(
                session, product_id, "certification.revoked", ctx.caller, ctx.now,
                {"cert_type": cert_type},
            )
        logger.info(
            "Certification %s of product %s revoked by %s", cert_type, product_id, ctx.caller
        )
        return cert

    async def get(
        self, session: AsyncSession, product_id: int, cert_type: str,
    ) -> CertificationModel:
        cert = await session.get(CertificationModel, (product_id, cert_type))
        if cert is None:
            raise NotFoundError(
                f"Certification {cert_type} of product {product_id} not found"
            )
        return cert

    async def is_valid(
        self, session: AsyncSession, product_id: int, cert_type: str, now: int,
    ) -> bool:
        cert = await session.get(CertificationModel, (product_id, cert_type))
        return cert is not None and cert.is_valid_at(now)
