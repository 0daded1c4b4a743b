"""
Client IP resolution for FastAPI requests.

Takes an explicit ``Request`` parameter so the function is testable without
a running server.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

_PROXY_HEADERS: tuple[str, ...] = (
    "CF-Connecting-IP",
    "True-Client-IP",
    "X-Forwarded-For",
    "X-Real-IP",
)


def get_client_ip(request: Request) -> Optional[str]:
    """Extract the real client IP from a FastAPI ``Request``.

    Proxy headers are checked in priority order (first address of a
    comma-separated list) before falling back to the socket peer.

    Returns:
        The resolved client IP string, or ``None`` if none can be found.
    """
    for header in _PROXY_HEADERS:
        ip_value: Optional[str] = request.headers.get(header)
        if ip_value:
            client_ip = ip_value.split(",")[0].strip()
            if client_ip:
                return client_ip

    return request.client.host if request.client else None
