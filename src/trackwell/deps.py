"""Dependency injection singletons for Trackwell."""

from trackwell.common.clock import LogicalClock, build_clock
from trackwell.common.config import get_settings
from trackwell.common.database import DatabaseManager
from trackwell.authorization.service import AuthorizationService
from trackwell.checkpoints.service import CheckpointService
from trackwell.products.service import ProductService
from trackwell.transfers.service import TransferService
from trackwell.certifications.service import CertificationService
from trackwell.events.service import EventLogService

_db: DatabaseManager | None = None
_clock: LogicalClock | None = None
_authorization: AuthorizationService | None = None
_checkpoints: CheckpointService | None = None
_products: ProductService | None = None
_transfers: TransferService | None = None
_certifications: CertificationService | None = None
_event_log: EventLogService | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_clock() -> LogicalClock:
    global _clock
    if _clock is None:
        _clock = build_clock(get_settings().clock)
    return _clock


def set_clock(clock: LogicalClock) -> None:
    """Install a host-supplied clock (replays, tests)."""
    global _clock
    _clock = clock


def get_event_log_service() -> EventLogService:
    global _event_log
    if _event_log is None:
        _event_log = EventLogService(get_settings())
    return _event_log


def get_authorization_service() -> AuthorizationService:
    global _authorization
    if _authorization is None:
        _authorization = AuthorizationService()
    return _authorization


def get_checkpoint_service() -> CheckpointService:
    global _checkpoints
    if _checkpoints is None:
        _checkpoints = CheckpointService(
            get_authorization_service(), event_log=get_event_log_service(),
        )
    return _checkpoints


def get_product_service() -> ProductService:
    global _products
    if _products is None:
        _products = ProductService(
            get_authorization_service(),
            get_checkpoint_service(),
            event_log=get_event_log_service(),
        )
    return _products


def get_transfer_service() -> TransferService:
    global _transfers
    if _transfers is None:
        _transfers = TransferService(
            get_checkpoint_service(), event_log=get_event_log_service(),
        )
    return _transfers


def get_certification_service() -> CertificationService:
    global _certifications
    if _certifications is None:
        _certifications = CertificationService(
            get_authorization_service(), event_log=get_event_log_service(),
        )
    return _certifications


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db, _clock, _authorization, _checkpoints, _products
    global _transfers, _certifications, _event_log
    _db = None
    _clock = None
    _authorization = None
    _checkpoints = None
    _products = None
    _transfers = None
    _certifications = None
    _event_log = None
