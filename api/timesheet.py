"""
Timesheet API
========================
- GET  /timesheet           : Current user's entries with their client, newest day first
- POST /timesheet/add-entry : Adds an entry; 404 for an unknown client, 409 on overlap
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from app.db.database import get_db
from app.models.user import User
from app.schemas.timesheet import AddTimesheetEntryRequest, TimesheetEntryResponse
from app.services.timesheet_service import add_entry, list_entries
from app.core.security import get_current_user

router = APIRouter(prefix="/timesheet", tags=["Timesheet"])

@router.get("", response_model=List[TimesheetEntryResponse])
def get_timesheet(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return list_entries(db, current_user)

@router.post("/add-entry", response_model=TimesheetEntryResponse, status_code=status.HTTP_201_CREATED)
def create_entry(
    entry: AddTimesheetEntryRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return add_entry(
        db,
        current_user,
        client_id=entry.client,
        date=entry.date,
        start_time=entry.start_time,
        end_time=entry.end_time,
        position=entry.position,
        site_address=entry.site_address,
        remarks=entry.remarks
    )
