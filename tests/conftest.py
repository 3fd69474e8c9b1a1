"""Shared test fixtures for Trackwell."""

from dataclasses import dataclass

import pytest
from httpx import ASGITransport, AsyncClient

from trackwell.authorization.service import AuthorizationService
from trackwell.certifications.service import CertificationService
from trackwell.checkpoints.service import CheckpointService
from trackwell.common.clock import ManualClock
from trackwell.common.config import TrackwellSettings
from trackwell.common.database import DatabaseManager
from trackwell.common.security import CallContext
from trackwell.events.service import EventLogService
from trackwell.products.service import ProductService
from trackwell.transfers.service import TransferService

API_KEY = "test-host-api-key"
SIGNING_KEY = "test-signing-key-for-unit-tests"

MAKER = "org:acme-foods"


def make_settings(**overrides) -> TrackwellSettings:
    defaults = {
        "api_key": API_KEY,
        "signing_key": SIGNING_KEY,
        "db_url": "sqlite+aiosqlite://",
        "clock": "manual",
    }
    defaults.update(overrides)
    return TrackwellSettings(**defaults)


@dataclass
class Services:
    authorization: AuthorizationService
    checkpoints: CheckpointService
    products: ProductService
    transfers: TransferService
    certifications: CertificationService
    event_log: EventLogService


@pytest.fixture
def clock():
    return ManualClock(start=1_000)


@pytest.fixture
def as_caller(clock):
    """Build the call context the host would supply for ``caller``."""
    def _ctx(caller: str) -> CallContext:
        return CallContext(caller=caller, now=clock.now())
    return _ctx


@pytest.fixture
async def db():
    manager = DatabaseManager(make_settings())
    await manager.init()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def services():
    event_log = EventLogService(make_settings())
    authorization = AuthorizationService()
    checkpoints = CheckpointService(authorization, event_log=event_log)
    return Services(
        authorization=authorization,
        checkpoints=checkpoints,
        products=ProductService(authorization, checkpoints, event_log=event_log),
        transfers=TransferService(checkpoints, event_log=event_log),
        certifications=CertificationService(authorization, event_log=event_log),
        event_log=event_log,
    )


@pytest.fixture
def register(db, services, as_caller):
    """Register a product as ``caller`` in its own committed transaction."""
    async def _register(caller: str = MAKER, batch_number: str = "B1", **overrides):
        fields = {
            "name": "Oat Milk 1L",
            "description": "Chilled oat drink",
            "batch_number": batch_number,
            "product_type": "beverage",
            "origin_location": "Plant 7, Uppsala",
        }
        fields.update(overrides)
        async with db.write_session() as session:
            return await services.products.register(session, as_caller(caller), **fields)
    return _register


# ── HTTP fixtures ──


@pytest.fixture
def app(monkeypatch):
    """Create a test app with in-memory DB and a manual clock."""
    monkeypatch.setenv("TRACKWELL_DB_URL", "sqlite+aiosqlite://")
    monkeypatch.setenv("TRACKWELL_API_KEY", API_KEY)
    monkeypatch.setenv("TRACKWELL_SIGNING_KEY", SIGNING_KEY)
    monkeypatch.setenv("TRACKWELL_CLOCK", "manual")

    # Clear caches and singletons so new env vars take effect
    from trackwell.common.config import get_settings
    get_settings.cache_clear()

    from trackwell.deps import reset_singletons
    reset_singletons()

    from trackwell.app import create_app
    return create_app()


@pytest.fixture
def http_clock(app):
    from trackwell.deps import set_clock
    clock = ManualClock(start=1_000)
    set_clock(clock)
    return clock


@pytest.fixture
async def client(app, http_clock):
    # Manually init DB since ASGITransport doesn't run lifespan
    from trackwell.deps import get_db
    db = get_db()
    await db.init()
    await db.create_all()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await db.close()


@pytest.fixture
def headers_for():
    def _headers(caller: str | None = None) -> dict[str, str]:
        headers = {"X-Trackwell-Api-Key": API_KEY}
        if caller:
            headers["X-Trackwell-Caller"] = caller
        return headers
    return _headers
