"""
Component wiring.

``build_core`` constructs every component from a ``Settings`` instance and
hands them back in one container, so ``main.py``, the HTTP layer and the test
suite all share the same assembly.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from .classifier.service import GeolocationClassifier
from .config import Settings, settings as default_settings
from .console.session import DispatchSession, SessionEventHandlers
from .database.session import create_engine, create_schema, create_session_factory
from .geo.coordinates import Coordinate
from .incidents.actions import IncidentActions
from .messaging.change_stream import ChangeStream
from .notifier.service import NotificationDispatcher
from .routing.osrm_client import OsrmClient
from .routing.service import CommandCenter, DispatchRouter
from .scheduler.service import LifecycleScheduler
from .store.service import DataStore
from .utils import utcnow
from .zone_catalog.catalog import ZoneCatalog, load_zone_catalog

logger = logging.getLogger("response-core.bootstrap")


@dataclass
class ResponseCore:
    engine: AsyncEngine
    store: DataStore
    catalog: ZoneCatalog
    classifier: GeolocationClassifier
    osrm_client: OsrmClient
    router: DispatchRouter
    notifier: NotificationDispatcher
    scheduler: LifecycleScheduler
    actions: IncidentActions

    def open_session(self, handlers: Optional[SessionEventHandlers] = None) -> DispatchSession:
        """New dispatch session; the caller owns it and must open and close it."""
        return DispatchSession(store=self.store, handlers=handlers or SessionEventHandlers())

    async def aclose(self):
        await self.scheduler.stop()
        await self.osrm_client.aclose()
        await self.engine.dispose()


async def build_core(
    config: Settings = default_settings,
    *,
    engine: Optional[AsyncEngine] = None,
    change_stream: Optional[ChangeStream] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    clock: Callable[[], datetime] = utcnow,
    create_tables: bool = False,
) -> ResponseCore:
    engine = engine or create_engine(config.DATABASE_URL, echo=config.DEBUG)
    if create_tables:
        await create_schema(engine)

    store = DataStore(create_session_factory(engine), change_stream)
    catalog = await load_zone_catalog(store)
    classifier = GeolocationClassifier(catalog, fallback_max_km=config.ZONE_FALLBACK_MAX_KM)

    osrm_client = OsrmClient(
        base_url=config.OSRM_URL,
        profile=config.ROUTING_PROFILE,
        timeout=config.ROUTING_TIMEOUT_SECONDS,
        http_client=http_client,
    )
    command_center = CommandCenter(
        name=config.COMMAND_CENTER_NAME,
        location=Coordinate(config.COMMAND_CENTER_LAT, config.COMMAND_CENTER_LNG),
    )
    router = DispatchRouter(store, osrm_client, command_center, clock=clock)

    notifier = NotificationDispatcher(store)
    scheduler = LifecycleScheduler(
        store,
        notifier,
        interval_seconds=config.SCHEDULER_INTERVAL_SECONDS,
        eta_lead_minutes=config.ETA_REMINDER_LEAD_MINUTES,
        clock=clock,
    )
    actions = IncidentActions(store, notifier, clock=clock)

    logger.info(
        f"Response core assembled: {len(catalog)} zones, command center "
        f"{command_center.name} at {command_center.location.as_tuple()}"
    )
    return ResponseCore(
        engine=engine,
        store=store,
        catalog=catalog,
        classifier=classifier,
        osrm_client=osrm_client,
        router=router,
        notifier=notifier,
        scheduler=scheduler,
        actions=actions,
    )
