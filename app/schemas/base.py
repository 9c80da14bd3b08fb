from datetime import datetime, timezone
from typing import Annotated
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

def as_utc(value: datetime) -> datetime:
    # Naive values are UTC, both in storage and in requests without an offset
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]

class CamelModel(BaseModel):
    """Snake-case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class MessageResponse(BaseModel):
    message: str
