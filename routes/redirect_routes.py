"""
Short link redirect.

GET /r/{slug} - 302 to the original URL, recording a click event.
Rules:
- Unknown slug → 404.
- Inactive or expired link → 410, nothing recorded.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from dependencies import get_redirect_service
from schemas.dto.responses.common import ErrorResponse
from services.redirect import RedirectService
from shared.ip_utils import get_client_ip

router = APIRouter(tags=["redirect"])


@router.get(
    "/r/{slug}",
    status_code=302,
    response_class=RedirectResponse,
    responses={404: {"model": ErrorResponse}, 410: {"model": ErrorResponse}},
)
async def redirect(
    slug: str,
    request: Request,
    redirects: RedirectService = Depends(get_redirect_service),
) -> RedirectResponse:
    link = redirects.follow(
        slug,
        referrer=request.headers.get("referer"),
        user_agent=request.headers.get("user-agent"),
        ip_address=get_client_ip(request),
    )
    return RedirectResponse(url=link.original_url, status_code=302)
