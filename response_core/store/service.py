import logging
from contextlib import asynccontextmanager
from typing import Iterable, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import desc, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..errors import PersistenceError
from ..messaging.change_stream import ChangeEvent, ChangeStream, LocalChangeStream
from ..models.incident import IncidentReport
from ..models.notification import Notification
from ..models.response_route import ResponseRoute
from ..models.zone import ZoneRecord

logger = logging.getLogger("response-core.store")

_IMMUTABLE_INCIDENT_FIELDS = {"id", "created_at"}


class DataStore:
    """
    Data Store.
    Responsibility: Durable reads and single-record writes over incidents,
    routes, notifications and zones. Every committed write is announced on the
    change stream.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], change_stream: Optional[ChangeStream] = None):
        self._session_factory = session_factory
        self.change_stream = change_stream or LocalChangeStream()

    @asynccontextmanager
    async def _session(self, action: str):
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Store failure during {action}: {e}")
            raise PersistenceError(f"{action} failed: {e}") from e

    async def _announce(self, table: str, operation: str, record_id) -> None:
        await self.change_stream.publish(ChangeEvent(table=table, operation=operation, record_id=str(record_id)))

    # ------------------------------------------------------------------
    # Incidents
    # ------------------------------------------------------------------

    async def add_incident(self, incident: IncidentReport) -> IncidentReport:
        async with self._session("add_incident") as session:
            session.add(incident)
            await session.commit()
        await self._announce(IncidentReport.__tablename__, "insert", incident.id)
        return incident

    async def get_incident(self, incident_id: UUID) -> Optional[IncidentReport]:
        async with self._session("get_incident") as session:
            return await session.get(IncidentReport, incident_id)

    async def list_incidents(self, statuses: Optional[Iterable[str]] = None) -> List[IncidentReport]:
        stmt = select(IncidentReport).order_by(IncidentReport.created_at)
        if statuses is not None:
            stmt = stmt.where(IncidentReport.status.in_([getattr(s, "value", s) for s in statuses]))
        async with self._session("list_incidents") as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def update_incident(self, incident_id: UUID, **fields) -> bool:
        """Overwrite the given fields. Last write wins."""
        illegal = _IMMUTABLE_INCIDENT_FIELDS.intersection(fields)
        if illegal:
            raise ValueError(f"Cannot update immutable incident fields: {sorted(illegal)}")
        async with self._session("update_incident") as session:
            result = await session.execute(
                update(IncidentReport).where(IncidentReport.id == incident_id).values(**fields)
            )
            await session.commit()
        changed = result.rowcount > 0
        if changed:
            await self._announce(IncidentReport.__tablename__, "update", incident_id)
        return changed

    async def transition_status(self, incident_id: UUID, from_status: str, to_status: str, **fields) -> bool:
        """
        Conditional status change: applies only while the row still holds
        ``from_status``. Returns whether the row changed.
        """
        from_value = getattr(from_status, "value", from_status)
        to_value = getattr(to_status, "value", to_status)
        async with self._session("transition_status") as session:
            result = await session.execute(
                update(IncidentReport)
                .where(IncidentReport.id == incident_id, IncidentReport.status == from_value)
                .values(status=to_value, **fields)
            )
            await session.commit()
        changed = result.rowcount > 0
        if changed:
            await self._announce(IncidentReport.__tablename__, "update", incident_id)
        return changed

    # ------------------------------------------------------------------
    # Response routes (append-only)
    # ------------------------------------------------------------------

    async def add_route(self, route: ResponseRoute) -> ResponseRoute:
        async with self._session("add_route") as session:
            session.add(route)
            await session.commit()
        await self._announce(ResponseRoute.__tablename__, "insert", route.id)
        return route

    async def list_routes(self, incident_id: UUID) -> List[ResponseRoute]:
        stmt = (
            select(ResponseRoute)
            .where(ResponseRoute.incident_report_id == incident_id)
            .order_by(desc(ResponseRoute.created_at))
        )
        async with self._session("list_routes") as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Notifications (append-only apart from the read flag)
    # ------------------------------------------------------------------

    async def add_notification(self, notification: Notification) -> Notification:
        async with self._session("add_notification") as session:
            session.add(notification)
            await session.commit()
        await self._announce(Notification.__tablename__, "insert", notification.id)
        return notification

    async def notification_exists(self, related_report_id: UUID, trigger_type: str) -> bool:
        stmt = (
            select(Notification.id)
            .where(
                Notification.related_report_id == related_report_id,
                Notification.trigger_type == getattr(trigger_type, "value", trigger_type),
            )
            .limit(1)
        )
        async with self._session("notification_exists") as session:
            result = await session.execute(stmt)
            return result.first() is not None

    async def list_notifications(self, recipient: Optional[str] = None, unread_only: bool = False,
                                 related_report_id: Optional[UUID] = None) -> List[Notification]:
        stmt = select(Notification).order_by(desc(Notification.created_at))
        if recipient is not None:
            stmt = stmt.where(Notification.user_email == recipient)
        if unread_only:
            stmt = stmt.where(Notification.read.is_(False))
        if related_report_id is not None:
            stmt = stmt.where(Notification.related_report_id == related_report_id)
        async with self._session("list_notifications") as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def mark_notification_read(self, notification_id: UUID) -> bool:
        async with self._session("mark_notification_read") as session:
            result = await session.execute(
                update(Notification).where(Notification.id == notification_id).values(read=True)
            )
            await session.commit()
        changed = result.rowcount > 0
        if changed:
            await self._announce(Notification.__tablename__, "update", notification_id)
        return changed

    # ------------------------------------------------------------------
    # Zones
    # ------------------------------------------------------------------

    async def list_zones(self) -> List[ZoneRecord]:
        async with self._session("list_zones") as session:
            result = await session.execute(select(ZoneRecord).order_by(ZoneRecord.position))
            return list(result.scalars().all())

    async def save_zones(self, zones: Sequence) -> None:
        records = []
        for position, zone in enumerate(zones):
            data = zone.to_dict()
            records.append(ZoneRecord(
                name=data["name"],
                position=position,
                polygons=data["polygons"],
                centroid=data["centroid"],
            ))
        async with self._session("save_zones") as session:
            session.add_all(records)
            await session.commit()
        for record in records:
            await self._announce(ZoneRecord.__tablename__, "insert", record.id)
