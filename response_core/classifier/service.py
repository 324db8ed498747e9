import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..geo.coordinates import Coordinate, haversine_km, require_coordinate
from ..zone_catalog.catalog import BoundingBox, Polygon, ZoneCatalog

logger = logging.getLogger("response-core.classifier")

UNCLASSIFIED = "Unclassified"


def point_in_polygon(point: Coordinate, polygon: Polygon) -> bool:
    """Ray-casting test; the ring is treated as closed."""
    inside = False
    ring = polygon.ring
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i].lat, ring[i].lng
        xj, yj = ring[j].lat, ring[j].lng
        if (yi > point.lng) != (yj > point.lng):
            x_cross = (xj - xi) * (point.lng - yi) / (yj - yi) + xi
            if point.lat < x_cross:
                inside = not inside
        j = i
    return inside


@dataclass(frozen=True)
class Classification:
    zone: str
    method: str  # polygon, nearest_centroid, unclassified
    distance_km: Optional[float] = None

    @property
    def classified(self) -> bool:
        return self.zone != UNCLASSIFIED


class GeolocationClassifier:
    """
    Geolocation Classifier.
    Responsibility: Map a coordinate to a named zone of the catalog.

    Polygons are tested in catalog order and a later containing zone overrides
    an earlier one. When no polygon contains the point, the nearest centroid
    within ``fallback_max_km`` is used.
    """

    def __init__(self, catalog: ZoneCatalog, fallback_max_km: float = 5.0, bounds: Optional[BoundingBox] = None):
        self.catalog = catalog
        self.fallback_max_km = fallback_max_km
        self.bounds = bounds or catalog.bounding_box(padding_km=fallback_max_km)

    def classify(self, raw: Any) -> str:
        return self.classify_detailed(raw).zone

    def classify_detailed(self, raw: Any) -> Classification:
        point = require_coordinate(raw)

        if not self.bounds.contains(point):
            logger.debug(f"{point.as_tuple()} outside municipal bounds")
            return Classification(zone=UNCLASSIFIED, method="unclassified")

        match = self._polygon_match(point)
        if match is not None:
            return Classification(zone=match, method="polygon")

        nearest, distance = self._nearest_centroid(point)
        if nearest is not None and distance <= self.fallback_max_km:
            logger.debug(f"{point.as_tuple()} assigned to nearest zone {nearest} ({distance:.2f} km)")
            return Classification(zone=nearest, method="nearest_centroid", distance_km=distance)

        return Classification(zone=UNCLASSIFIED, method="unclassified", distance_km=distance)

    def _polygon_match(self, point: Coordinate) -> Optional[str]:
        match = None
        for zone in self.catalog:
            if any(point_in_polygon(point, polygon) for polygon in zone.polygons):
                match = zone.name
        return match

    def _nearest_centroid(self, point: Coordinate):
        nearest, best = None, None
        for zone in self.catalog:
            distance = haversine_km(point, zone.centroid)
            if best is None or distance < best:
                nearest, best = zone.name, distance
        return nearest, best
