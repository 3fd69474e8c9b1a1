"""Pydantic schemas for product endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from trackwell.common.schemas import LogicalTime


class ProductRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    batch_number: str = Field(..., min_length=1, max_length=255)
    product_type: str = Field(default="", max_length=100)
    origin_location: str = Field(..., min_length=1, max_length=255)
    product_uri: Optional[str] = Field(default=None, max_length=2048)


class DeliveryInfoUpdate(BaseModel):
    location: str = Field(..., min_length=1, max_length=255)
    expected_time: LogicalTime


class RecallRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class ProductResponse(BaseModel):
    product_id: int
    name: str
    description: str
    manufacturer: str
    batch_number: str
    registered_at: int
    status: str
    product_type: str
    origin_location: str
    current_owner: str
    delivery_location: Optional[str] = None
    expected_delivery_time: Optional[int] = None
    product_uri: Optional[str] = None

    model_config = {"from_attributes": True}


class ProductCountResponse(BaseModel):
    count: int


class AuthenticityResponse(BaseModel):
    authentic: bool
    product_id: int
    manufacturer: str
    batch_number: str
    status: str
