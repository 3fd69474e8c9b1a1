"""Shared Pydantic schemas for Trackwell."""

from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field, StringConstraints

from trackwell.common.models import UINT64_MAX

Identity = Annotated[str, StringConstraints(min_length=1, max_length=255)]
Digest = Annotated[
    str,
    StringConstraints(to_lower=True, pattern=r"^[0-9a-fA-F]{64}$"),
]
LogicalTime = Annotated[int, Field(ge=0, le=UINT64_MAX)]
# Product, checkpoint and transfer ids in URL paths.
RecordId = Annotated[int, Path(ge=0, le=UINT64_MAX)]


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "trackwell"


class ErrorResponse(BaseModel):
    error: str
    code: str
    detail: str = ""
