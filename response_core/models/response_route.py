from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, Float, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, CreatedAtMixin, UUIDMixin


class ResponseRoute(Base, UUIDMixin, CreatedAtMixin):
    """
    Append-only route record. Every recalculation inserts a new row; rows are
    never updated or deleted.
    """
    __tablename__ = "incident_response_routes"

    incident_report_id: Mapped[UUID] = mapped_column(ForeignKey("incident_reports.id"), nullable=False, index=True)
    origin: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    route_coordinates: Mapped[list] = mapped_column(JSON, default=list)  # [[lat, lng], ...]
    calculated_distance_km: Mapped[float] = mapped_column(Float, nullable=False)
    calculated_duration_minutes: Mapped[float] = mapped_column(Float, nullable=False)
    calculated_eta_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
