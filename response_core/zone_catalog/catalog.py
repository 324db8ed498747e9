import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..geo.coordinates import Coordinate
from .barangays import BARANGAYS, MUNICIPALITY

logger = logging.getLogger("response-core.zone-catalog")

KM_PER_DEGREE_LAT = 111.32


@dataclass(frozen=True)
class Polygon:
    """Closed ring of (lat, lng) vertices; the closing edge is implicit."""
    ring: tuple[Coordinate, ...]

    def __post_init__(self):
        if len(self.ring) < 3:
            raise ValueError(f"Polygon ring needs at least 3 vertices, got {len(self.ring)}")


@dataclass(frozen=True)
class Zone:
    name: str
    polygons: tuple[Polygon, ...]
    centroid: Coordinate

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "polygons": [[[v.lat, v.lng] for v in p.ring] for p in self.polygons],
            "centroid": [self.centroid.lat, self.centroid.lng],
        }


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    min_lng: float
    max_lat: float
    max_lng: float

    def contains(self, point: Coordinate) -> bool:
        return (self.min_lat <= point.lat <= self.max_lat
                and self.min_lng <= point.lng <= self.max_lng)


def _coord(pair) -> Coordinate:
    if isinstance(pair, Coordinate):
        return pair
    return Coordinate(lat=float(pair[0]), lng=float(pair[1]))


def zone_from_dict(entry: dict) -> Zone:
    """
    Build a Zone from a plain entry. ``polygons`` (list of rings) or a single
    ``ring`` are both accepted.
    """
    rings = entry.get("polygons") or [entry["ring"]]
    polygons = tuple(Polygon(ring=tuple(_coord(v) for v in ring)) for ring in rings)
    return Zone(name=entry["name"], polygons=polygons, centroid=_coord(entry["centroid"]))


@dataclass
class ZoneCatalog:
    """
    Static table of named zones, loaded once at startup.
    Iteration order is insertion order and never changes after construction.
    """
    zones: list[Zone] = field(default_factory=list)

    def __post_init__(self):
        names = [z.name for z in self.zones]
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise ValueError(f"Duplicate zone names in catalog: {sorted(duplicates)}")
        self._by_name = {z.name: z for z in self.zones}

    def __iter__(self):
        return iter(self.zones)

    def __len__(self):
        return len(self.zones)

    def names(self) -> list[str]:
        return [z.name for z in self.zones]

    def get(self, name: str) -> Optional[Zone]:
        return self._by_name.get(name)

    def bounding_box(self, padding_km: float = 0.0) -> BoundingBox:
        """Extent of every polygon vertex and centroid, padded on each side."""
        points = [z.centroid for z in self.zones]
        points += [v for z in self.zones for p in z.polygons for v in p.ring]
        if not points:
            raise ValueError("Cannot compute the bounding box of an empty catalog")

        min_lat = min(p.lat for p in points)
        max_lat = max(p.lat for p in points)
        pad_lat = padding_km / KM_PER_DEGREE_LAT
        widest = max(abs(min_lat), abs(max_lat))
        pad_lng = padding_km / (KM_PER_DEGREE_LAT * max(math.cos(math.radians(widest)), 1e-6))
        return BoundingBox(
            min_lat=min_lat - pad_lat,
            min_lng=min(p.lng for p in points) - pad_lng,
            max_lat=max_lat + pad_lat,
            max_lng=max(p.lng for p in points) + pad_lng,
        )

    @classmethod
    def from_dicts(cls, entries: Iterable[dict]) -> "ZoneCatalog":
        return cls(zones=[zone_from_dict(e) for e in entries])

    @classmethod
    def from_records(cls, records: Iterable) -> "ZoneCatalog":
        """Build from ``ZoneRecord`` rows, honouring their stored position."""
        ordered = sorted(records, key=lambda r: r.position)
        return cls(zones=[
            zone_from_dict({"name": r.name, "polygons": r.polygons, "centroid": r.centroid})
            for r in ordered
        ])

    @classmethod
    def default(cls) -> "ZoneCatalog":
        return cls.from_dicts(BARANGAYS)


async def load_zone_catalog(store) -> ZoneCatalog:
    """
    Load the catalog from the store, seeding it with the bundled barangay
    dataset on first run.
    """
    records = await store.list_zones()
    if records:
        catalog = ZoneCatalog.from_records(records)
        logger.info(f"Loaded {len(catalog)} zones from the data store")
        return catalog

    catalog = ZoneCatalog.default()
    await store.save_zones(catalog.zones)
    logger.info(f"Seeded data store with {len(catalog)} bundled {MUNICIPALITY} zones")
    return catalog
