"""
Random slug generator - pure, side-effect-free.

Slugs are drawn from the ``secrets`` CSPRNG so generated slugs cannot be
predicted from previously issued ones.
"""

from __future__ import annotations

import secrets
import string

SLUG_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def generate_slug(length: int = 8) -> str:
    """Generate an alphanumeric slug of configurable length.

    Args:
        length: Number of characters (default 8).

    Returns:
        Random alphanumeric string of the requested length.
    """
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))
