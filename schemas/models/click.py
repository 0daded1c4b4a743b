"""
Click event record model.

One event is appended per successful redirect and never modified
afterwards. ``device`` is nullable so events without a recognised
category are simply left out of the device breakdown.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.models.base import RecordModel
from shared.device import DeviceType


class ClickEvent(RecordModel):
    short_url_id: int
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    device: Optional[DeviceType] = None
    timestamp: datetime
