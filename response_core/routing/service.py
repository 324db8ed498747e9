import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional, Tuple
from uuid import UUID

from ..errors import IncidentNotFound, InvalidDestination, StateConflict
from ..geo.coordinates import Coordinate, format_timestamp, parse_coordinate, require_coordinate
from ..models.enums import IncidentStatus
from ..models.response_route import ResponseRoute
from ..store.service import DataStore
from ..utils import utcnow
from .osrm_client import OsrmClient

logger = logging.getLogger("response-core.dispatch-router")


@dataclass(frozen=True)
class CommandCenter:
    name: str
    location: Coordinate


@dataclass(frozen=True)
class RouteResult:
    distance_km: float
    duration_minutes: float
    waypoints: List[Tuple[float, float]]  # (lat, lng)
    estimated_arrival_time: datetime
    route_id: Optional[UUID] = None

    @property
    def eta_minutes(self) -> int:
        return round(self.duration_minutes)

    def to_dict(self) -> dict:
        return {
            "distance_km": self.distance_km,
            "duration_minutes": self.duration_minutes,
            "eta_minutes": self.eta_minutes,
            "waypoints": [list(w) for w in self.waypoints],
            "estimated_arrival_time": format_timestamp(self.estimated_arrival_time),
            "route_id": str(self.route_id) if self.route_id else None,
        }


class DispatchRouter:
    """
    Dispatch Router.
    Responsibility: Compute a driving route and ETA from the command center to
    an incident and, when an incident is named, persist it.

    No automatic retry: failures surface as typed errors and the caller decides.
    """

    def __init__(
        self,
        store: DataStore,
        client: OsrmClient,
        command_center: CommandCenter,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.client = client
        self.command_center = command_center
        self._clock = clock

    async def compute_route(
        self,
        destination: Any,
        incident_id: Optional[UUID] = None,
        origin: Any = None,
        session=None,
    ) -> RouteResult:
        parsed = parse_coordinate(destination)
        if not parsed.ok:
            raise InvalidDestination(parsed.failure.value, destination)
        target = parsed.coordinate
        start = require_coordinate(origin) if origin is not None else self.command_center.location

        if incident_id is not None:
            await self._require_routable(incident_id)

        logger.info(f"Calculating route from {start.as_tuple()} to {target.as_tuple()} incident={incident_id}")
        invoked_at = self._clock()
        raw = await self.client.fetch_route(start, target)

        distance_km = raw.distance_m / 1000
        duration_minutes = raw.duration_s / 60
        # GeoJSON order is (lng, lat)
        waypoints = [(lat, lng) for lng, lat in raw.coordinates_lnglat]
        result = RouteResult(
            distance_km=distance_km,
            duration_minutes=duration_minutes,
            waypoints=waypoints,
            estimated_arrival_time=invoked_at + timedelta(minutes=duration_minutes),
        )

        if incident_id is not None:
            result = await self._persist(incident_id, start, result)

        if session is not None:
            session.show_route(incident_id, result)

        logger.info(
            f"Route calculated: {distance_km:.1f} km, ETA {result.eta_minutes} min, "
            f"{len(waypoints)} waypoints"
        )
        return result

    def clear_displayed_route(self, session) -> None:
        """Reset the caller session's displayed route; the router keeps no display state."""
        session.clear_route()

    async def _require_routable(self, incident_id: UUID):
        incident = await self.store.get_incident(incident_id)
        if incident is None:
            raise IncidentNotFound(incident_id)
        if incident.status == IncidentStatus.RESOLVED.value:
            raise StateConflict(f"Cannot calculate route for resolved incident {incident_id}")
        return incident

    async def _persist(self, incident_id: UUID, origin: Coordinate, result: RouteResult) -> RouteResult:
        # The incident may have been resolved while the routing call was in flight.
        try:
            await self._require_routable(incident_id)
        except StateConflict:
            logger.warning(f"Incident {incident_id} resolved during route calculation; discarding result")
            raise

        route = ResponseRoute(
            incident_report_id=incident_id,
            origin=origin.to_dict(),
            route_coordinates=[list(w) for w in result.waypoints],
            calculated_distance_km=result.distance_km,
            calculated_duration_minutes=result.duration_minutes,
            calculated_eta_minutes=result.eta_minutes,
        )
        await self.store.add_route(route)
        await self.store.update_incident(
            incident_id,
            estimated_arrival_time=format_timestamp(result.estimated_arrival_time),
            current_eta_minutes=result.eta_minutes,
            response_route_data={
                "last_calculated": format_timestamp(self._clock()),
                "distance_km": result.distance_km,
                "duration_minutes": result.eta_minutes,
            },
        )
        logger.info(f"Route data saved for incident {incident_id}")
        return RouteResult(
            distance_km=result.distance_km,
            duration_minutes=result.duration_minutes,
            waypoints=result.waypoints,
            estimated_arrival_time=result.estimated_arrival_time,
            route_id=route.id,
        )
