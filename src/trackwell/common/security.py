"""Host authentication and per-request call context."""

import hmac
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException


@dataclass(frozen=True)
class CallContext:
    """Identity and logical time the host supplies for one operation."""
    caller: str
    now: int


async def require_api_key(
    x_trackwell_api_key: str = Header(..., alias="X-Trackwell-Api-Key"),
) -> str:
    """FastAPI dependency that validates the host API key from header."""
    from trackwell.common.config import get_settings

    settings = get_settings()
    if not hmac.compare_digest(x_trackwell_api_key, settings.api_key):
        raise HTTPException(status_code=403, detail="Invalid API key")
    return x_trackwell_api_key


async def require_call_context(
    x_trackwell_caller: str = Header(
        ..., alias="X-Trackwell-Caller", min_length=1, max_length=255
    ),
    _: str = Depends(require_api_key),
) -> CallContext:
    """Resolve caller identity and read the clock once for this request."""
    from trackwell.deps import get_clock

    return CallContext(caller=x_trackwell_caller, now=get_clock().now())
