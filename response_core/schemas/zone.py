from typing import Any, List, Optional

from pydantic import BaseModel


class ClassifyRequest(BaseModel):
    # Accepts {"lat": .., "lng": ..}, a JSON string, or a [lat, lng] pair
    coordinates: Any


class ClassifyResponse(BaseModel):
    zone: str
    method: str
    distance_km: Optional[float] = None


class ZoneOut(BaseModel):
    name: str
    centroid: List[float]
    polygons: List[List[List[float]]]
