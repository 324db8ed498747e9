"""
Incidents Router.
Admin lifecycle actions: schedule, start, resolve and free-text updates.
"""
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from ..deps import get_core
from ...errors import IncidentNotFound
from ...schemas.incident import Incident, Notification, ScheduleRequest, UpdateRequest

router = APIRouter()
logger = logging.getLogger("response-core.incidents-router")


@router.get("", response_model=List[Incident])
async def list_incidents(status: Optional[List[str]] = Query(None), core=Depends(get_core)):
    return await core.store.list_incidents(statuses=status)


@router.get("/{incident_id}", response_model=Incident)
async def get_incident(incident_id: UUID, core=Depends(get_core)):
    incident = await core.store.get_incident(incident_id)
    if incident is None:
        raise IncidentNotFound(incident_id)
    return incident


@router.post("/{incident_id}/schedule", response_model=Incident)
async def schedule_response(incident_id: UUID, req: ScheduleRequest, core=Depends(get_core)):
    return await core.actions.schedule_response(incident_id, req.scheduled_time)


@router.post("/{incident_id}/start", response_model=Incident)
async def start_response(incident_id: UUID, core=Depends(get_core)):
    return await core.actions.start_response(incident_id)


@router.post("/{incident_id}/resolve", response_model=Incident)
async def resolve(incident_id: UUID, core=Depends(get_core)):
    return await core.actions.resolve(incident_id)


@router.post("/{incident_id}/updates", response_model=Notification)
async def send_update(incident_id: UUID, req: UpdateRequest, core=Depends(get_core)):
    return await core.actions.send_update(incident_id, req.title, req.message)
