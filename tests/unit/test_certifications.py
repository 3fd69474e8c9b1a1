"""Tests for the certification registry."""

import logging

import pytest

from trackwell.common.digest import digest_text
from trackwell.common.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)

MAKER = "org:acme-foods"
CARRIER = "org:northwind-freight"
VERIFIER = "person:inspector-v"
OTHER_VERIFIER = "person:inspector-w"
CERT_HASH = digest_text("organic-certificate-2024.pdf")


async def _add(db, services, ctx, product_id, cert_type="organic", expiration_time=10_000, **kwargs):
    async with db.write_session() as session:
        return await services.certifications.add(
            session, ctx, product_id, cert_type, expiration_time, CERT_HASH, **kwargs,
        )


class TestAdd:
    async def test_manufacturer_adds(self, db, services, register, as_caller, clock):
        product = await register()
        cert = await _add(
            db, services, as_caller(MAKER), product.product_id,
            cert_uri="https://certs.example/organic/881",
        )
        assert cert.certifier == MAKER
        assert cert.issued_at == clock.now()
        assert cert.expiration_time == 10_000
        assert cert.cert_hash == CERT_HASH
        assert cert.cert_uri == "https://certs.example/organic/881"
        assert cert.cert_status == "valid"

    async def test_manufacturer_verifier_adds(self, db, services, register, as_caller):
        product = await register()
        async with db.write_session() as session:
            await services.authorization.authorize(session, as_caller(MAKER), VERIFIER)
        cert = await _add(db, services, as_caller(VERIFIER), product.product_id)
        assert cert.certifier == VERIFIER

    async def test_current_owner_is_not_enough(self, db, services, register, as_caller):
        product = await register()
        async with db.write_session() as session:
            await services.transfers.initiate(session, as_caller(MAKER), product.product_id, CARRIER)
        async with db.write_session() as session:
            await services.transfers.accept(session, as_caller(CARRIER), product.product_id, 0)
        with pytest.raises(UnauthorizedError):
            await _add(db, services, as_caller(CARRIER), product.product_id)
        cert = await _add(db, services, as_caller(MAKER), product.product_id)
        assert cert.certifier == MAKER

    async def test_expiration_must_be_in_future(self, db, services, register, as_caller, clock):
        product = await register()
        with pytest.raises(InvalidArgumentError):
            await _add(db, services, as_caller(MAKER), product.product_id, expiration_time=clock.now())
        with pytest.raises(InvalidArgumentError):
            await _add(db, services, as_caller(MAKER), product.product_id, expiration_time=10)

    async def test_readd_overwrites_revoked_record(self, db, services, register, as_caller):
        product = await register()
        async with db.write_session() as session:
            await services.authorization.authorize(session, as_caller(MAKER), VERIFIER)
            await services.authorization.authorize(session, as_caller(MAKER), OTHER_VERIFIER)
        await _add(db, services, as_caller(VERIFIER), product.product_id)
        async with db.write_session() as session:
            await services.certifications.revoke(
                session, as_caller(VERIFIER), product.product_id, "organic",
            )
        cert = await _add(
            db, services, as_caller(OTHER_VERIFIER), product.product_id, expiration_time=20_000,
        )
        assert cert.certifier == OTHER_VERIFIER
        assert cert.cert_status == "valid"
        assert cert.expiration_time == 20_000

    async def test_unknown_product(self, db, services, as_caller):
        with pytest.raises(NotFoundError):
            await _add(db, services, as_caller(MAKER), 4)

    async def test_recalled_product(self, db, services, register, as_caller):
        product = await register()
        async with db.write_session() as session:
            await services.products.recall(session, as_caller(MAKER), product.product_id, "mould")
        with pytest.raises(InvalidStateError):
            await _add(db, services, as_caller(MAKER), product.product_id)


class TestRevoke:
    async def test_certifier_revokes(self, db, services, register, as_caller):
        product = await register()
        await _add(db, services, as_caller(MAKER), product.product_id)
        async with db.write_session() as session:
            cert = await services.certifications.revoke(
                session, as_caller(MAKER), product.product_id, "organic",
            )
            assert cert.cert_status == "revoked"

    async def test_only_certifier_revokes(self, db, services, register, as_caller, caplog):
        product = await register()
        async with db.write_session() as session:
            await services.authorization.authorize(session, as_caller(MAKER), VERIFIER)
        await _add(db, services, as_caller(VERIFIER), product.product_id)
        with pytest.raises(UnauthorizedError):
            async with db.write_session() as session:
                await services.certifications.revoke(
                    session, as_caller(MAKER), product.product_id, "organic",
                )
        refusals = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert refusals[-1].caller == MAKER
        assert refusals[-1].product_id == product.product_id

    async def test_revoke_missing(self, db, services, register, as_caller):
        product = await register()
        with pytest.raises(NotFoundError):
            async with db.write_session() as session:
                await services.certifications.revoke(
                    session, as_caller(MAKER), product.product_id, "organic",
                )

    async def test_revoke_twice(self, db, services, register, as_caller):
        product = await register()
        await _add(db, services, as_caller(MAKER), product.product_id)
        async with db.write_session() as session:
            await services.certifications.revoke(session, as_caller(MAKER), product.product_id, "organic")
        with pytest.raises(InvalidStateError):
            async with db.write_session() as session:
                await services.certifications.revoke(
                    session, as_caller(MAKER), product.product_id, "organic",
                )

    async def test_revoke_after_recall(self, db, services, register, as_caller):
        product = await register()
        await _add(db, services, as_caller(MAKER), product.product_id)
        async with db.write_session() as session:
            await services.products.recall(session, as_caller(MAKER), product.product_id, "mould")
        async with db.write_session() as session:
            cert = await services.certifications.revoke(
                session, as_caller(MAKER), product.product_id, "organic",
            )
            assert cert.cert_status == "revoked"


class TestIsValid:
    async def test_valid_until_expiry(self, db, services, register, as_caller):
        product = await register()
        await _add(db, services, as_caller(MAKER), product.product_id, expiration_time=5_000)
        async with db.get_session() as session:
            assert await services.certifications.is_valid(session, product.product_id, "organic", 4_999) is True
            assert await services.certifications.is_valid(session, product.product_id, "organic", 5_000) is False
            assert await services.certifications.is_valid(session, product.product_id, "organic", 9_000) is False

    async def test_revoked_is_invalid_before_expiry(self, db, services, register, as_caller, clock):
        product = await register()
        await _add(db, services, as_caller(MAKER), product.product_id)
        async with db.write_session() as session:
            await services.certifications.revoke(session, as_caller(MAKER), product.product_id, "organic")
        async with db.get_session() as session:
            assert await services.certifications.is_valid(
                session, product.product_id, "organic", clock.now(),
            ) is False

    async def test_missing_is_invalid(self, db, services):
        async with db.get_session() as session:
            assert await services.certifications.is_valid(session, 0, "organic", 0) is False

    async def test_get_missing(self, db, services, register):
        product = await register()
        async with db.get_session() as session:
            with pytest.raises(NotFoundError):
                await services.certifications.get(session, product.product_id, "halal")
