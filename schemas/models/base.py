"""
Base model for all stored records.

Records are immutable snapshots: the store replaces them wholesale
(``model_copy(update=...)``) instead of mutating in place, so a record a
caller holds never changes underneath it.

Python attributes are snake_case; the JSON wire format is camelCase via
the alias generator (``original_url`` ↔ ``originalUrl``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: int
