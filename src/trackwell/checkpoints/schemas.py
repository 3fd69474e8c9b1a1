"""Pydantic schemas for checkpoint endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from trackwell.common.schemas import Digest
from trackwell.products.status import CheckpointType


class CheckpointCreate(BaseModel):
    location: str = Field(..., min_length=1, max_length=255)
    checkpoint_type: CheckpointType
    attestation_hash: Digest
    temperature: Optional[float] = None
    humidity: Optional[float] = Field(default=None, ge=0, le=100)
    notes: Optional[str] = None


class CheckpointResponse(BaseModel):
    product_id: int
    checkpoint_id: int
    location: str
    timestamp: int
    operator: str
    verified_by: str
    checkpoint_type: str
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    notes: Optional[str] = None
    attestation_hash: str

    model_config = {"from_attributes": True}
