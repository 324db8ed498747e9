import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import httpx

from ..errors import NetworkError, RouteUnavailable
from ..geo.coordinates import Coordinate

logger = logging.getLogger("response-core.osrm")


@dataclass(frozen=True)
class RawRoute:
    """First candidate route; geometry kept in the service's (lng, lat) order."""
    distance_m: float
    duration_s: float
    coordinates_lnglat: List[Tuple[float, float]]


class OsrmClient:
    """
    OSRM HTTP client.
    Requests ``/route/v1/{profile}/{lng},{lat};{lng},{lat}`` with full GeoJSON geometry.
    """

    def __init__(
        self,
        base_url: str = "https://router.project-osrm.org",
        profile: str = "driving",
        timeout: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": "MDRRMO-ResponseCore/1.0"},
        )

    async def aclose(self):
        if self._owns_client:
            await self._http_client.aclose()

    def route_url(self, origin: Coordinate, destination: Coordinate) -> str:
        return (
            f"{self.base_url}/route/v1/{self.profile}/"
            f"{origin.lng},{origin.lat};{destination.lng},{destination.lat}"
        )

    async def fetch_route(self, origin: Coordinate, destination: Coordinate) -> RawRoute:
        url = self.route_url(origin, destination)
        try:
            response = await self._http_client.get(
                url,
                params={"overview": "full", "geometries": "geojson"},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Routing service timed out after {self.timeout}s")
            raise NetworkError(f"Routing service timed out: {e}") from e
        except httpx.TransportError as e:
            logger.warning(f"Routing service unreachable: {e}")
            raise NetworkError(f"Routing service unreachable: {e}") from e

        if response.status_code != 200:
            logger.error(f"OSRM API error: {response.status_code} {response.text[:200]}")
            raise RouteUnavailable(f"Route calculation failed: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise RouteUnavailable("Routing service returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise RouteUnavailable("Invalid route data received")

        routes = data.get("routes") or []
        if data.get("code", "Ok") != "Ok" or not routes:
            raise RouteUnavailable(f"No route found between these points (code={data.get('code')})")

        try:
            route = routes[0]
            coordinates = [_lnglat(pair) for pair in route["geometry"]["coordinates"]]
            if not coordinates:
                raise ValueError("empty geometry")
            return RawRoute(
                distance_m=float(route["distance"]),
                duration_s=float(route["duration"]),
                coordinates_lnglat=coordinates,
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise RouteUnavailable(f"Invalid route data received: {e}") from e


def _lnglat(pair) -> Tuple[float, float]:
    if not isinstance(pair, (list, tuple)) or len(pair) != 2:
        raise ValueError(f"bad coordinate {pair!r}")
    lng, lat = pair
    if isinstance(lng, bool) or isinstance(lat, bool):
        raise TypeError(f"bad coordinate {pair!r}")
    return float(lng), float(lat)
