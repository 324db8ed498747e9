from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, TimestampMixin, UUIDMixin
from ..geo.coordinates import Coordinate, parse_coordinate
from .enums import IncidentStatus, Priority


class IncidentReport(Base, UUIDMixin, TimestampMixin):
    """
    Citizen hazard report.
    Created by report submission; this core only mutates lifecycle and ETA fields.
    """
    __tablename__ = "incident_reports"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    reporter_email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    reporter_name: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    # {"lat": ..., "lng": ...} as written by the submission form; may be null.
    coordinates: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    barangay: Mapped[Optional[str]] = mapped_column(String, nullable=True)  # resolved zone name

    status: Mapped[str] = mapped_column(String, default=IncidentStatus.PENDING.value, nullable=False, index=True)
    priority: Mapped[str] = mapped_column(String, default=Priority.MEDIUM.value, nullable=False)

    # Admin-entered and router-written ISO-8601 text; parsed by the scheduler.
    scheduled_response_time: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    estimated_arrival_time: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    actual_response_started: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_resolved_time: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    current_eta_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    response_route_data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    @property
    def coordinate(self) -> Optional[Coordinate]:
        result = parse_coordinate(self.coordinates)
        return result.coordinate if result.ok else None

    def __repr__(self):
        return f"<IncidentReport(id={self.id}, status={self.status})>"
