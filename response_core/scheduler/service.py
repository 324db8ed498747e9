import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..geo.coordinates import parse_timestamp
from ..models.enums import IncidentStatus, NON_TERMINAL_STATUSES, TriggerType
from ..models.incident import IncidentReport
from ..notifier.service import NotificationDispatcher
from ..service_manager.base_service import BaseService
from ..store.service import DataStore
from ..utils import utcnow

logger = logging.getLogger("response-core.scheduler")


@dataclass
class PassReport:
    activated: int = 0
    reminders: int = 0
    failures: int = 0
    skipped: bool = False


class LifecycleScheduler(BaseService):
    """
    Lifecycle Scheduler.
    Responsibility: On a fixed interval, activate pending incidents whose
    scheduled response time has passed and send a single ETA reminder to
    reporters of active incidents whose responders are about to arrive.

    Passes are single-flight: a tick that lands while a pass is still running
    is skipped, never queued.
    """

    def __init__(
        self,
        store: DataStore,
        notifier: NotificationDispatcher,
        interval_seconds: float = 60,
        eta_lead_minutes: int = 3,
        clock: Callable[[], datetime] = utcnow,
    ):
        super().__init__("LifecycleScheduler")
        self.store = store
        self.notifier = notifier
        self.interval_seconds = interval_seconds
        self.eta_lead = timedelta(minutes=eta_lead_minutes)
        self._clock = clock
        self._ticker_task: Optional[asyncio.Task] = None
        self._pass_task: Optional[asyncio.Task] = None
        self._pass_lock = asyncio.Lock()

    async def start(self):
        if self._running:
            return
        self._running = True
        self._ticker_task = asyncio.create_task(self._tick_loop())
        logger.info(f"LifecycleScheduler started. Interval: {self.interval_seconds}s")

    async def stop(self):
        self._running = False
        if self._ticker_task:
            self._ticker_task.cancel()
            try:
                await self._ticker_task
            except asyncio.CancelledError:
                pass
            self._ticker_task = None
        # Let an in-flight pass finish its current writes
        if self._pass_task and not self._pass_task.done():
            await asyncio.wait([self._pass_task])
        self._pass_task = None
        logger.info("LifecycleScheduler stopped.")

    # ------------------------------------------------------------------
    # Ticker
    # ------------------------------------------------------------------

    async def _tick_loop(self):
        while self._running:
            if self._pass_task is not None and not self._pass_task.done():
                logger.warning("Previous scheduler pass still running; skipping tick")
            else:
                self._pass_task = asyncio.create_task(self._guarded_pass())
            await asyncio.sleep(self.interval_seconds)

    async def _guarded_pass(self):
        try:
            await self.run_pass()
        except Exception as e:
            logger.error(f"Scheduler pass failed: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Pass
    # ------------------------------------------------------------------

    async def run_pass(self) -> PassReport:
        if self._pass_lock.locked():
            logger.warning("Scheduler pass already in progress; skipping")
            return PassReport(skipped=True)

        async with self._pass_lock:
            report = PassReport()
            now = self._clock()
            incidents = await self.store.list_incidents(statuses=NON_TERMINAL_STATUSES)
            for incident in incidents:
                try:
                    await self._process(incident, now, report)
                except Exception as e:
                    report.failures += 1
                    logger.error(f"Failed to process incident {incident.id}: {e}", exc_info=True)

            if report.activated or report.reminders or report.failures:
                logger.info(
                    f"Scheduler pass: {len(incidents)} incidents, {report.activated} activated, "
                    f"{report.reminders} reminders, {report.failures} failures"
                )
            return report

    async def _process(self, incident: IncidentReport, now: datetime, report: PassReport):
        if incident.status == IncidentStatus.PENDING.value and incident.scheduled_response_time:
            scheduled = parse_timestamp(incident.scheduled_response_time)
            if scheduled <= now:
                changed = await self.store.transition_status(
                    incident.id,
                    IncidentStatus.PENDING,
                    IncidentStatus.ACTIVE,
                    actual_response_started=now,
                )
                if changed:
                    report.activated += 1
                    logger.info(f"Auto-started response for incident {incident.id}")
                    await self.notifier.notify(
                        incident.reporter_email,
                        "Response Started",
                        f'Your incident report "{incident.title}" is now being actively '
                        f"addressed by our response team.",
                        TriggerType.RESPONSE_STARTED,
                        incident.id,
                    )

        # The snapshot may be stale; an admin can resolve or reschedule mid-pass.
        current = await self.store.get_incident(incident.id)
        if current is None or current.status != IncidentStatus.ACTIVE.value:
            return
        if not current.estimated_arrival_time:
            return

        eta = parse_timestamp(current.estimated_arrival_time)
        if eta - self.eta_lead <= now < eta:
            if await self.store.notification_exists(current.id, TriggerType.ETA_REMINDER):
                return
            minutes = int(self.eta_lead.total_seconds() // 60)
            await self.notifier.notify(
                current.reporter_email,
                "Response Team Arriving Soon",
                f"Our response team will arrive at your incident location in "
                f"approximately {minutes} minutes.",
                TriggerType.ETA_REMINDER,
                current.id,
            )
            report.reminders += 1
            logger.info(f"ETA reminder sent for incident {current.id}")
