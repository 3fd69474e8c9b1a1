"""Pydantic schemas for transfer endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from trackwell.common.schemas import Identity


class TransferInitiate(BaseModel):
    transferee: Identity
    conditions: Optional[str] = None


class TransferReject(BaseModel):
    reason: str = Field(..., min_length=1)


class TransferResponse(BaseModel):
    product_id: int
    transfer_id: int
    transferor: str
    transferee: str
    initiated_at: int
    completed_at: Optional[int] = None
    status: str
    conditions: Optional[str] = None

    model_config = {"from_attributes": True}
