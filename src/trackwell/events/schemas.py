"""Pydantic schemas for event log API responses."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ProductEventResponse(BaseModel):
    id: str
    product_id: int
    sequence: int
    event_type: str
    actor: str
    logical_time: int
    detail: dict[str, Any] = {}
    prev_hash: Optional[str] = None
    event_hash: str
    signature: str
    created_at: datetime

    model_config = {"from_attributes": True}


class EventChainVerification(BaseModel):
    valid: bool
    events_checked: int
    break_at: Optional[str] = None
