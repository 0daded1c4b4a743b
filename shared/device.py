"""
Device classification from the ``User-Agent`` header.

A substring heuristic, not a full UA parser: good enough for the
mobile/desktop/tablet split shown on the dashboard.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

_TABLET_MARKERS = ("ipad",)
_MOBILE_MARKERS = ("mobile", "android", "iphone", "ipod")


class DeviceType(str, Enum):
    MOBILE = "mobile"
    DESKTOP = "desktop"
    TABLET = "tablet"


def classify_device(user_agent: Optional[str]) -> DeviceType:
    """Classify a raw user-agent string.

    iPad wins over the mobile markers (iPad UAs also contain "Mobile").
    Missing or unrecognised user agents count as desktop.
    """
    if not user_agent:
        return DeviceType.DESKTOP
    ua = user_agent.lower()
    if any(marker in ua for marker in _TABLET_MARKERS):
        return DeviceType.TABLET
    if any(marker in ua for marker in _MOBILE_MARKERS):
        return DeviceType.MOBILE
    return DeviceType.DESKTOP
