import logging
from typing import Optional
from uuid import UUID

from ..errors import ValidationError
from ..models.enums import TriggerType
from ..models.notification import Notification
from ..store.service import DataStore

logger = logging.getLogger("response-core.notifier")


class NotificationDispatcher:
    """
    Notification Dispatcher.
    Responsibility: Build a Notification record and write it to the data store.
    Deduplication is the caller's job.
    """

    def __init__(self, store: DataStore):
        self.store = store

    async def notify(
        self,
        recipient: str,
        title: str,
        message: str,
        trigger_type,
        related_incident_id: Optional[UUID] = None,
        *,
        automated: bool = True,
    ) -> Notification:
        try:
            trigger = TriggerType(getattr(trigger_type, "value", trigger_type))
        except ValueError:
            raise ValidationError(f"Unknown trigger type: {trigger_type!r}") from None
        if not recipient:
            raise ValidationError("Notification recipient is required")

        notification = Notification(
            user_email=recipient,
            title=title,
            message=message,
            type="info" if automated else "update",
            read=False,
            is_automated=automated,
            trigger_type=trigger.value,
            related_report_id=related_incident_id,
        )
        await self.store.add_notification(notification)
        logger.info(
            f"{'Automated' if automated else 'Manual'} notification sent: {trigger.value} "
            f"to={recipient} incident={related_incident_id}"
        )
        return notification
