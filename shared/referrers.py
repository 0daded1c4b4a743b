"""
Referrer normalisation for the analytics referrer breakdown.

Raw ``Referer`` headers are collapsed into a handful of buckets so the
dashboard chart stays readable.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

DIRECT = "direct"
OTHER = "other"

# Checked in order; first substring hit wins
_SOURCE_BUCKETS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("facebook", ("facebook",)),
    ("twitter", ("twitter", "x.com")),
    ("instagram", ("instagram",)),
    ("linkedin", ("linkedin",)),
)


def referrer_domain(referrer: str) -> str:
    """Return the lower-cased hostname of *referrer*.

    Values without a scheme and host (e.g. ``"not a url"``) are returned
    as-is (lower-cased) and treated as the domain.

    Raises:
        ValueError: if the value looks like a URL but cannot be parsed
            (e.g. an unterminated IPv6 literal).
    """
    raw = referrer.lower()
    parts = urlsplit(raw)
    if not parts.scheme or not parts.netloc:
        return raw
    return parts.hostname or ""


def normalize_referrer(referrer: Optional[str]) -> str:
    """Collapse a raw referrer into one of the analytics buckets.

    Buckets: ``facebook``, ``twitter``, ``instagram``, ``linkedin``,
    ``direct`` (absent or empty) and ``other``. Unparseable values fall into
    ``other``.
    """
    if not referrer:
        return DIRECT
    try:
        domain = referrer_domain(referrer)
    except ValueError:
        return OTHER

    for bucket, markers in _SOURCE_BUCKETS:
        if any(marker in domain for marker in markers):
            return bucket
    if domain in ("", DIRECT):
        return DIRECT
    return OTHER
