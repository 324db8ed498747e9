from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel


class RouteRequest(BaseModel):
    destination: Any
    incident_id: Optional[UUID] = None
    origin: Optional[Any] = None


class RouteOut(BaseModel):
    distance_km: float
    duration_minutes: float
    eta_minutes: int
    waypoints: List[List[float]]
    estimated_arrival_time: str
    route_id: Optional[str] = None


class ResponseRouteRecord(BaseModel):
    id: UUID
    incident_report_id: UUID
    route_coordinates: List[List[float]]
    calculated_distance_km: float
    calculated_duration_minutes: float
    calculated_eta_minutes: int
    created_at: datetime

    class Config:
        from_attributes = True
