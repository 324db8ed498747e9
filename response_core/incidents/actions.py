"""
Admin incident actions.

The operations an MDRRMO dispatcher performs from the console: schedule a
response, start it by hand, resolve the incident, and post a free-text update
to the reporter. Status only moves forward; every transition is a conditional
update so a concurrent scheduler pass cannot be overwritten.
"""
import logging
from datetime import datetime
from typing import Any, Callable
from uuid import UUID

from ..errors import IncidentNotFound, StateConflict, ValidationError
from ..geo.coordinates import format_timestamp, parse_timestamp
from ..models.enums import IncidentStatus, TriggerType
from ..models.incident import IncidentReport
from ..notifier.service import NotificationDispatcher
from ..store.service import DataStore
from ..utils import utcnow

logger = logging.getLogger("response-core.incident-actions")


def _display_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M")


class IncidentActions:
    def __init__(self, store: DataStore, notifier: NotificationDispatcher,
                 clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.notifier = notifier
        self._clock = clock

    async def _load(self, incident_id: UUID) -> IncidentReport:
        incident = await self.store.get_incident(incident_id)
        if incident is None:
            raise IncidentNotFound(incident_id)
        return incident

    async def schedule_response(self, incident_id: UUID, when: Any) -> IncidentReport:
        """Set the time at which the scheduler should auto-start the response."""
        scheduled = parse_timestamp(when)
        incident = await self._load(incident_id)
        if incident.status != IncidentStatus.PENDING.value:
            raise StateConflict(f"Only pending incidents can be scheduled (status={incident.status})")

        await self.store.update_incident(incident_id, scheduled_response_time=format_timestamp(scheduled))
        await self.notifier.notify(
            incident.reporter_email,
            "Response Scheduled",
            f'Your incident report "{incident.title}" has been scheduled for response at '
            f"{_display_time(scheduled)}.",
            TriggerType.SCHEDULED_RESPONSE,
            incident_id,
        )
        logger.info(f"Response scheduled for incident {incident_id} at {scheduled.isoformat()}")
        return await self._load(incident_id)

    async def start_response(self, incident_id: UUID) -> IncidentReport:
        incident = await self._load(incident_id)
        changed = await self.store.transition_status(
            incident_id, IncidentStatus.PENDING, IncidentStatus.ACTIVE,
            actual_response_started=self._clock(),
        )
        if not changed:
            current = await self._load(incident_id)
            raise StateConflict(f"Cannot start response for incident in status {current.status}")

        await self.notifier.notify(
            incident.reporter_email,
            "Response Started",
            f'Your incident report "{incident.title}" is now being actively addressed by our response team.',
            TriggerType.RESPONSE_STARTED,
            incident_id,
        )
        logger.info(f"Response started manually for incident {incident_id}")
        return await self._load(incident_id)

    async def resolve(self, incident_id: UUID) -> IncidentReport:
        incident = await self._load(incident_id)
        if incident.status == IncidentStatus.RESOLVED.value:
            raise StateConflict(f"Incident {incident_id} is already resolved")

        resolved_at = self._clock()
        changed = await self.store.transition_status(
            incident_id, incident.status, IncidentStatus.RESOLVED,
            actual_resolved_time=resolved_at,
        )
        if not changed:
            raise StateConflict(f"Incident {incident_id} changed status while resolving")

        await self.notifier.notify(
            incident.reporter_email,
            "Incident Resolved",
            f'Your incident report "{incident.title}" has been successfully resolved at '
            f"{_display_time(resolved_at)}.",
            TriggerType.INCIDENT_RESOLVED,
            incident_id,
        )
        logger.info(f"Incident {incident_id} resolved")
        return await self._load(incident_id)

    async def send_update(self, incident_id: UUID, title: str, message: str):
        if not title or not message:
            raise ValidationError("Update title and message are required")
        incident = await self._load(incident_id)
        return await self.notifier.notify(
            incident.reporter_email,
            title,
            message,
            TriggerType.UPDATE,
            incident_id,
            automated=False,
        )
