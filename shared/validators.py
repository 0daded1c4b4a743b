"""
URL and slug validators - framework-agnostic, pure functions.
"""

from __future__ import annotations

import re

import validators as _validators

SLUG_MAX_LENGTH = 50

_SLUG_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % SLUG_MAX_LENGTH)


def validate_url(url: str) -> bool:
    """Return True if *url* is a well-formed absolute HTTP/S URL.

    Relative references, scheme-less hostnames and non-web schemes are
    rejected. Single-label hosts such as ``localhost`` are accepted.
    """
    if not isinstance(url, str) or not url:
        return False
    if not url.lower().startswith(("http://", "https://")):
        return False
    return bool(_validators.url(url, simple_host=True))


def validate_slug(slug: str) -> bool:
    """Return True if *slug* is 1–50 characters of ``[A-Za-z0-9_-]``."""
    return bool(_SLUG_PATTERN.match(slug))
