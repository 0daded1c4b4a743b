"""
Link management endpoints.

GET    /urls          - all links, newest first
POST   /urls          - create a link (201)
GET    /urls/{slug}   - look a link up by slug
PATCH  /urls/{url_id} - activate / deactivate a link
DELETE /urls/{url_id} - delete a link (204)

Non-numeric ``url_id`` values fail path validation and are reported as 400.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from dependencies import get_registry
from schemas.dto.requests.url import CreateUrlRequest, UpdateUrlRequest
from schemas.dto.responses.common import ErrorResponse
from schemas.models.link import ShortLink
from services.registry import SlugRegistry

router = APIRouter(prefix="/urls", tags=["urls"])


@router.get("", response_model=list[ShortLink])
async def list_urls(registry: SlugRegistry = Depends(get_registry)) -> list[ShortLink]:
    return registry.list_all()


@router.post(
    "",
    response_model=ShortLink,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_url(
    body: CreateUrlRequest, registry: SlugRegistry = Depends(get_registry)
) -> ShortLink:
    return registry.create(body.original_url, body.slug, body.expires_at)


@router.get(
    "/{slug}",
    response_model=ShortLink,
    responses={404: {"model": ErrorResponse}},
)
async def get_url(slug: str, registry: SlugRegistry = Depends(get_registry)) -> ShortLink:
    return registry.get_by_slug(slug)


@router.patch(
    "/{url_id}",
    response_model=ShortLink,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_url(
    url_id: int,
    body: UpdateUrlRequest,
    registry: SlugRegistry = Depends(get_registry),
) -> ShortLink:
    return registry.set_active(url_id, body.active)


@router.delete(
    "/{url_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_url(url_id: int, registry: SlugRegistry = Depends(get_registry)) -> Response:
    registry.delete(url_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
