"""
Simple in-memory rate limiter for the chat endpoints.
"""
import logging
import time
from collections import defaultdict
from typing import Dict, List
from fastapi import Request, HTTPException, status

logger = logging.getLogger(__name__)

# {ip: [timestamps of accepted requests]}
rate_limit_store: Dict[str, List[float]] = defaultdict(list)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # First hop is the original client
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


def check_rate_limit(request: Request, max_requests: int = 10, window_seconds: int = 60) -> None:
    """
    Check if client has exceeded rate limit.

    Raises:
        HTTPException: 429 if rate limit exceeded
    """
    ip = get_client_ip(request)
    now = time.time()

    cutoff = now - window_seconds
    rate_limit_store[ip] = [
        timestamp for timestamp in rate_limit_store[ip]
        if timestamp > cutoff
    ]

    request_count = len(rate_limit_store[ip])

    if request_count >= max_requests:
        logger.warning(f"Rate limit exceeded for IP: {ip} ({request_count} requests in {window_seconds}s)")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds."
        )

    rate_limit_store[ip].append(now)


def rate_limited(max_requests: int, window_seconds: int = 60):
    """Dependency factory applying check_rate_limit to a route."""
    def dependency(request: Request) -> None:
        check_rate_limit(request, max_requests=max_requests, window_seconds=window_seconds)

    return dependency


def reset_rate_limits() -> None:
    rate_limit_store.clear()
