from datetime import datetime, timedelta

import httpx
import pytest
import pytest_asyncio

from response_core.database.session import create_engine, create_schema, create_session_factory
from response_core.geo.coordinates import Coordinate
from response_core.models.incident import IncidentReport
from response_core.notifier.service import NotificationDispatcher
from response_core.routing.osrm_client import OsrmClient
from response_core.routing.service import CommandCenter, DispatchRouter
from response_core.store.service import DataStore

NOW = datetime(2026, 3, 2, 9, 30, 0)
COMMAND_CENTER = CommandCenter(name="MDRRMO", location=Coordinate(8.371646, 124.857026))


class FixedClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta):
        self.now += timedelta(**delta)


def osrm_payload(distance=2300.0, duration=360.0, coordinates=None, code="Ok"):
    if coordinates is None:
        coordinates = [[124.857026, 8.371646], [124.8632, 8.3761], [124.87, 8.38]]
    return {
        "code": code,
        "routes": [{"distance": distance, "duration": duration, "geometry": {"coordinates": coordinates}}],
    }


class RecordingOsrm:
    """httpx mock transport handler that records requests and replays one response."""

    def __init__(self, response=None, error=None):
        self.requests = []
        self.response = response if response is not None else httpx.Response(200, json=osrm_payload())
        self.error = error
        self.before_response = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.before_response is not None:
            await self.before_response()
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.response.status_code,
            headers=self.response.headers,
            content=self.response.content,
        )

    def client(self) -> OsrmClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return OsrmClient(base_url="http://osrm.test", http_client=http_client)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'response_core.db'}")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine):
    return DataStore(create_session_factory(engine))


@pytest.fixture
def notifier(store):
    return NotificationDispatcher(store)


@pytest.fixture
def osrm():
    return RecordingOsrm()


@pytest.fixture
def router(store, osrm, clock):
    return DispatchRouter(store, osrm.client(), COMMAND_CENTER, clock=clock)


@pytest.fixture
def make_incident(store):
    async def _make(**fields):
        values = {
            "title": "Flooded road",
            "reporter_email": "juan@example.com",
            "coordinates": {"lat": 8.38, "lng": 124.87},
            "status": "pending",
            "priority": "high",
        }
        values.update(fields)
        return await store.add_incident(IncidentReport(**values))
    return _make
