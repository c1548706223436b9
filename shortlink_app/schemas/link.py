from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime, timezone


class LinkCreate(BaseModel):
    """Create request body: ``{"targetUrl": ..., "customCode": ...}``

    Both fields are optional at the schema level so that a missing URL is
    reported by the validator ("URL is required") rather than as a generic
    body error.
    """
    target_url: Optional[str] = Field(None, description="Destination URL (http/https)")
    custom_code: Optional[str] = Field(
        None, description="Optional 6-8 character alphanumeric code"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LinkResponse(BaseModel):
    """Serialized Link, read straight from the SQLAlchemy model.

    - from_attributes=True enables ORM mode (reads from model attributes)
    - camelCase aliases on the wire, snake_case in Python
    """
    id: int
    code: str
    target_url: str
    total_clicks: int
    last_clicked_at: Optional[datetime] = None
    created_at: datetime

    @field_serializer("last_clicked_at", "created_at")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        """ISO-8601, UTC. SQLite hands timestamps back without tzinfo."""
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LinkDeleted(BaseModel):
    message: str
    code: str


class HealthResponse(BaseModel):
    ok: bool
    version: str


class ErrorResponse(BaseModel):
    error: str
