"""
Dispatch session.

One operator's live view of the incident map: an arena of marker handles
indexed by incident id, and at most one displayed response route. The session
is created, opened, and closed explicitly; nothing about it is global.
"""
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, List, Optional
from uuid import UUID

from ..geo.coordinates import Coordinate
from ..messaging.change_stream import ChangeEvent, ChangeStream
from ..models.enums import IncidentStatus, NON_TERMINAL_STATUSES
from ..models.incident import IncidentReport

logger = logging.getLogger("response-core.dispatch-session")

IncidentAction = Callable[[UUID], Awaitable[None]]


@dataclass
class SessionEventHandlers:
    """Callbacks the rendering layer wires to marker buttons."""
    on_route_requested: Optional[IncidentAction] = None
    on_resolve_requested: Optional[IncidentAction] = None


@dataclass
class MarkerHandle:
    incident_id: UUID
    position: Coordinate
    status: str
    priority: str
    title: str
    live: bool = True


@dataclass
class DisplayedRoute:
    incident_id: Optional[UUID]
    result: object


@dataclass
class DispatchSession:
    store: object
    change_stream: Optional[ChangeStream] = None
    handlers: SessionEventHandlers = field(default_factory=SessionEventHandlers)

    def __post_init__(self):
        if self.change_stream is None:
            self.change_stream = self.store.change_stream
        self._arena: List[MarkerHandle] = []
        self._index: Dict[UUID, int] = {}
        self._free: List[int] = []
        self._displayed: Optional[DisplayedRoute] = None
        self._unsubscribe = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def open(self):
        for incident in await self.store.list_incidents(statuses=NON_TERMINAL_STATUSES):
            self._place(incident)
        self._unsubscribe = await self.change_stream.subscribe(self._on_change)
        logger.info(f"Dispatch session opened with {len(self._index)} markers")

    async def close(self):
        if self._unsubscribe is not None:
            await self._unsubscribe()
            self._unsubscribe = None
        self._arena.clear()
        self._index.clear()
        self._free.clear()
        self._displayed = None
        logger.info("Dispatch session closed")

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    # ------------------------------------------------------------------
    # Markers
    # ------------------------------------------------------------------

    def marker(self, incident_id: UUID) -> Optional[MarkerHandle]:
        slot = self._index.get(incident_id)
        return self._arena[slot] if slot is not None else None

    def markers(self) -> List[MarkerHandle]:
        return [self._arena[slot] for slot in self._index.values()]

    def _place(self, incident: IncidentReport):
        position = incident.coordinate
        if position is None or incident.status == IncidentStatus.RESOLVED.value:
            self._remove(incident.id)
            return

        slot = self._index.get(incident.id)
        if slot is None:
            handle = MarkerHandle(
                incident_id=incident.id,
                position=position,
                status=incident.status,
                priority=incident.priority,
                title=incident.title,
            )
            if self._free:
                slot = self._free.pop()
                self._arena[slot] = handle
            else:
                slot = len(self._arena)
                self._arena.append(handle)
            self._index[incident.id] = slot
            return

        handle = self._arena[slot]
        handle.position = position
        handle.status = incident.status
        handle.priority = incident.priority
        handle.title = incident.title

    def _remove(self, incident_id: UUID):
        slot = self._index.pop(incident_id, None)
        if slot is not None:
            self._arena[slot].live = False
            self._free.append(slot)
        if self._displayed is not None and self._displayed.incident_id == incident_id:
            self.clear_route()

    async def _on_change(self, event: ChangeEvent):
        if event.table != IncidentReport.__tablename__:
            return
        incident = await self.store.get_incident(UUID(event.record_id))
        if incident is None:
            self._remove(UUID(event.record_id))
            return
        self._place(incident)

    # ------------------------------------------------------------------
    # Route display
    # ------------------------------------------------------------------

    def show_route(self, incident_id: Optional[UUID], result) -> None:
        self._displayed = DisplayedRoute(incident_id=incident_id, result=result)

    def clear_route(self) -> None:
        self._displayed = None

    @property
    def is_route_displayed(self) -> bool:
        return self._displayed is not None

    @property
    def displayed_route(self) -> Optional[DisplayedRoute]:
        return self._displayed

    # ------------------------------------------------------------------
    # Marker buttons
    # ------------------------------------------------------------------

    async def request_route(self, incident_id: UUID):
        if self.handlers.on_route_requested is not None:
            await self.handlers.on_route_requested(incident_id)

    async def request_resolve(self, incident_id: UUID):
        if self.handlers.on_resolve_requested is not None:
            await self.handlers.on_resolve_requested(incident_id)
