"""
Rate limiting for API endpoints.

Uses slowapi; storage comes from settings (in-memory by default, a Redis URI
when several backend instances share limits).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from ...core.config import get_settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200/minute"],
    storage_uri=get_settings().rate_limit_storage_uri,
)


def rate_limit_expensive(func):
    """
    Restrictive rate limit for operations that hit every quote feed.

    Allows 10 requests per minute.

    Usage:
        @router.post("/refresh")
        @rate_limit_expensive
        async def refresh_portfolio(request: Request):
            pass
    """
    return limiter.limit("10/minute")(func)


def rate_limit_write(func):
    """
    Moderate rate limit for state-changing operations.

    Allows 30 requests per minute.
    """
    return limiter.limit("30/minute")(func)
