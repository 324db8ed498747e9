"""
Zones Router.
Classifies coordinates into barangays and lists the zone catalog.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from ..deps import get_core
from ...schemas.zone import ClassifyRequest, ClassifyResponse, ZoneOut

router = APIRouter()
logger = logging.getLogger("response-core.zones-router")


@router.get("", response_model=List[ZoneOut])
async def list_zones(core=Depends(get_core)):
    return [zone.to_dict() for zone in core.catalog]


@router.post("/classify", response_model=ClassifyResponse)
async def classify(req: ClassifyRequest, core=Depends(get_core)):
    result = core.classifier.classify_detailed(req.coordinates)
    return ClassifyResponse(zone=result.zone, method=result.method, distance_km=result.distance_km)
