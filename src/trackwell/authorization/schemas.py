"""Pydantic schemas for verifier authorization endpoints."""

from pydantic import BaseModel, Field


class VerifierAuthorize(BaseModel):
    name: str = Field(default="", max_length=255)
    role: str = Field(default="", max_length=100)


class VerifierResponse(BaseModel):
    organization: str
    verifier: str
    verifier_name: str
    role: str
    authorized_at: int
    authorized_by: str
    is_active: bool

    model_config = {"from_attributes": True}


class VerifierStatusResponse(BaseModel):
    organization: str
    verifier: str
    authorized: bool
    entry: VerifierResponse | None = None
