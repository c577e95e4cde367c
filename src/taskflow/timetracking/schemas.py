"""Time log and time-tracker session schemas.

Time-tracker sessions use camelCase on the wire.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class TimeLogCreate(BaseModel):
    day: date | None = None
    category: str | None = None
    minutes: int | None = None


class TimeLogResponse(BaseModel):
    id: int
    user_id: int | None = None
    day: date
    category: str
    minutes: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TimeSessionCreate(_CamelModel):
    type: str | None = None
    description: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration: int | None = None


class TimeSessionResponse(_CamelModel):
    id: int
    type: str
    description: str
    start_time: datetime
    end_time: datetime
    duration: int
    created_at: datetime
