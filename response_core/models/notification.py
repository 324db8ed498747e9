from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from ..database.base import Base, CreatedAtMixin, UUIDMixin


class Notification(Base, UUIDMixin, CreatedAtMixin):
    """
    Notification record.
    At most one eta_reminder may exist per related report; the partial unique
    index backs the scheduler's existence check.
    """
    __tablename__ = "notifications"
    __table_args__ = (
        Index(
            "uq_notifications_eta_reminder",
            "related_report_id",
            "trigger_type",
            unique=True,
            postgresql_where=text("trigger_type = 'eta_reminder'"),
            sqlite_where=text("trigger_type = 'eta_reminder'"),
        ),
    )

    user_email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String, default="info", nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_automated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    trigger_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    related_report_id: Mapped[Optional[UUID]] = mapped_column(ForeignKey("incident_reports.id"), nullable=True)
