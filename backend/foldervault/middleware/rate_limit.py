"""
Rate Limiting - Protect the API from abuse.

Requests are counted per calling owner when the owner header is present,
otherwise per client IP address.
"""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..core.config import OWNER_HEADER, RATE_LIMIT_ENABLED, RATE_LIMIT_PER_MINUTE
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Get rate limit key for request."""
    owner_id = request.headers.get(OWNER_HEADER)
    if owner_id:
        return f"owner:{owner_id}"

    # Fall back to IP address
    return get_remote_address(request)


def create_limiter() -> Limiter:
    return Limiter(
        key_func=get_rate_limit_key,
        default_limits=[f"{RATE_LIMIT_PER_MINUTE}/minute"],
        enabled=RATE_LIMIT_ENABLED
    )
