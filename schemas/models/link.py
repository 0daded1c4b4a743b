"""
ShortLink record model.

``slug`` is unique across the store; ``clicks`` is only ever advanced by the
redirect path through the registry.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.models.base import RecordModel


class ShortLink(RecordModel):
    original_url: str
    slug: str = Field(min_length=1, max_length=50)
    clicks: int = Field(default=0, ge=0)
    active: bool = True
    created_at: datetime
    expires_at: Optional[datetime] = None
