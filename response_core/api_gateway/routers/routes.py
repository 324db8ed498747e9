"""
Routes Router.
Computes dispatch routes from the command center and lists the route history
of an incident.
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from ..deps import get_core
from ...errors import IncidentNotFound
from ...schemas.routing import ResponseRouteRecord, RouteOut, RouteRequest

router = APIRouter()
logger = logging.getLogger("response-core.routes-router")


@router.post("", response_model=RouteOut)
async def compute_route(req: RouteRequest, core=Depends(get_core)):
    result = await core.router.compute_route(req.destination, incident_id=req.incident_id, origin=req.origin)
    return result.to_dict()


@router.get("/{incident_id}", response_model=List[ResponseRouteRecord])
async def list_routes(incident_id: UUID, core=Depends(get_core)):
    if await core.store.get_incident(incident_id) is None:
        raise IncidentNotFound(incident_id)
    return await core.store.list_routes(incident_id)
