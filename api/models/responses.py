"""Response models for API endpoints. JSON field names are camelCase."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from key_handler.utils.datetime_utils import format_iso


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class KeySummary(CamelModel):
    """Public view of an unclaimed key. Has no secret field."""
    id: int
    title: str
    image_url: str


class KeyRecord(CamelModel):
    """Operator view of a key, secret and claim state included."""
    id: int
    title: str
    image_url: str
    secret: str
    claimed: bool
    claimed_at: Optional[datetime] = None

    @field_serializer("claimed_at")
    def serialize_claimed_at(self, value: Optional[datetime]) -> Optional[str]:
        return format_iso(value)


class ClaimResponse(CamelModel):
    secret: str


class OkResponse(CamelModel):
    ok: bool = True


class AddKeyResponse(OkResponse):
    id: int


class CoverResponse(CamelModel):
    app_id: int
    matched_title: str
    header_image_url: str
