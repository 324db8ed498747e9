import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_core
from ...schemas.incident import Notification

router = APIRouter()
logger = logging.getLogger("response-core.notifications-router")


@router.get("", response_model=List[Notification])
async def list_notifications(
        recipient: Optional[str] = None,
        unread_only: bool = False,
        incident_id: Optional[UUID] = None,
        core=Depends(get_core),
):
    return await core.store.list_notifications(
        recipient=recipient, unread_only=unread_only, related_report_id=incident_id
    )


@router.post("/{notification_id}/read")
async def mark_read(notification_id: UUID, core=Depends(get_core)):
    if not await core.store.mark_notification_read(notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
    return {"status": "read", "id": str(notification_id)}
