"""
adapters/schemas.py - Store-side record shapes

The shared editor store keeps records in a slightly different shape than
the local Paragraph/Container dataclasses: containers carry timestamps,
original_id may be absent, and keys arrive in camelCase from persisted
editor state. Both spellings are accepted.

order is strict: numeric strings and booleans fail validation and are
handed to the converters' salvage path instead of being coerced silently.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

from folio.core.records import utc_now

Order = Union[StrictInt, StrictFloat]


def _non_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("id must not be blank")
    return v


class ParagraphBlock(BaseModel):
    """Paragraph as held by the editor store."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    id: str = Field(..., min_length=1)
    content: str = ""
    container_id: Optional[str] = Field(default=None, alias="containerId")
    order: Order = 0
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")
    original_id: Optional[str] = Field(default=None, alias="originalId")

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v):
        return _non_blank(v)

    @field_validator("container_id")
    @classmethod
    def blank_container_is_unassigned(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class ContainerBlock(BaseModel):
    """Container as held by the editor store."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    id: str = Field(..., min_length=1)
    name: str = ""
    order: Order = 0
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v):
        return _non_blank(v)
