"""Pydantic schemas for certification endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from trackwell.common.schemas import Digest, LogicalTime


class CertificationAdd(BaseModel):
    expiration_time: LogicalTime
    cert_hash: Digest
    cert_uri: Optional[str] = Field(default=None, max_length=2048)


class CertificationResponse(BaseModel):
    product_id: int
    cert_type: str
    certifier: str
    issued_at: int
    expiration_time: int
    cert_hash: str
    cert_uri: Optional[str] = None
    cert_status: str

    model_config = {"from_attributes": True}


class CertificationValidity(BaseModel):
    product_id: int
    cert_type: str
    valid: bool
    checked_at: int
