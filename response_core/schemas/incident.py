from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel


class Incident(BaseModel):
    id: UUID
    title: str
    category: Optional[str] = None
    reporter_email: str
    coordinates: Optional[Any] = None
    barangay: Optional[str] = None
    status: str
    priority: str
    scheduled_response_time: Optional[str] = None
    estimated_arrival_time: Optional[str] = None
    actual_response_started: Optional[datetime] = None
    actual_resolved_time: Optional[datetime] = None
    current_eta_minutes: Optional[int] = None
    response_route_data: Optional[Dict[str, Any]] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ScheduleRequest(BaseModel):
    scheduled_time: str


class UpdateRequest(BaseModel):
    title: str
    message: str


class Notification(BaseModel):
    id: UUID
    user_email: str
    title: str
    message: str
    type: str
    read: bool
    is_automated: bool
    trigger_type: str
    related_report_id: Optional[UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True
