from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, UUIDMixin


class ZoneRecord(Base, UUIDMixin):
    """Persisted zone; ``position`` preserves catalog order."""
    __tablename__ = "zones"

    name: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    polygons: Mapped[list] = mapped_column(JSON, default=list)  # [[[lat, lng], ...], ...]
    centroid: Mapped[list] = mapped_column(JSON, nullable=False)  # [lat, lng]
