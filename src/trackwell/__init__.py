"""Trackwell: product lifecycle tracking with authorization-gated records."""

from trackwell.common.clock import ManualClock, SystemClock
from trackwell.common.digest import digest_text
from trackwell.common.security import CallContext
from trackwell.products.status import CheckpointType, ProductStatus, derive_status

__all__ = [
    "CallContext",
    "CheckpointType",
    "ManualClock",
    "ProductStatus",
    "SystemClock",
    "derive_status",
    "digest_text",
]
__version__ = "0.1.0"
