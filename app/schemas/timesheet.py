"""
Timesheet & Client Schemas
=====================================
Pydantic models for timesheet request validation and response serialization.

- AddTimesheetEntryRequest: New entry input. Rejects future dates and times,
  intervals that leave the selected day (in the entry time zone), end times
  not after the start, and intervals shorter than a minute or longer than a day.
- TimesheetEntryResponse: Stored entry with its client embedded
- ClientResponse: Client reference data
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo
from pydantic import field_validator, model_validator
from app.core.config import ENTRY_TIMEZONE
from app.models.timesheet import TimesheetEntryStatus
from app.schemas.base import CamelModel, UtcDatetime

MIN_ENTRY_DURATION = timedelta(minutes=1)
MAX_ENTRY_DURATION = timedelta(hours=24)

class AddTimesheetEntryRequest(CamelModel):
    client: str
    position: str
    date: UtcDatetime
    start_time: UtcDatetime
    end_time: UtcDatetime
    site_address: str
    remarks: Optional[str] = None

    @field_validator("client", "position", "site_address")
    @classmethod
    def check_required_text(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            label = info.field_name.replace("_", " ").capitalize()
            raise ValueError(f"{label} is required.")
        return value

    @field_validator("remarks")
    @classmethod
    def trim_remarks(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

    @model_validator(mode="after")
    def check_interval(self):
        now = datetime.now(timezone.utc)
        tz = ZoneInfo(ENTRY_TIMEZONE)

        if self.date > now:
            raise ValueError("Date cannot be in the future.")
        if self.start_time > now:
            raise ValueError("Start time cannot be in the future.")
        if self.end_time > now:
            raise ValueError("End time cannot be in the future.")
        if self.start_time >= self.end_time:
            raise ValueError("End time must be after the start time.")

        day = self.date.astimezone(tz).date()
        if self.start_time.astimezone(tz).date() != day:
            raise ValueError("Start time must be on the selected date.")
        if self.end_time.astimezone(tz).date() != day:
            raise ValueError("End time must be on the selected date.")

        duration = self.end_time - self.start_time
        if duration < MIN_ENTRY_DURATION:
            raise ValueError("End time must be at least 1 minute after start time.")
        if duration > MAX_ENTRY_DURATION:
            raise ValueError("Time entry cannot exceed 24 hours.")
        return self

class ClientResponse(CamelModel):
    id: str
    name: str
    created_at: UtcDatetime
    updated_at: UtcDatetime

class TimesheetEntryResponse(CamelModel):
    id: str
    user_id: str
    client_id: str
    date: UtcDatetime
    start_time: UtcDatetime
    end_time: UtcDatetime
    total_hrs: float
    remarks: Optional[str] = None
    position: str
    site_address: str
    status: TimesheetEntryStatus
    created_at: UtcDatetime
    updated_at: UtcDatetime
    client: Optional[ClientResponse] = None
