from datetime import timedelta

import httpx
import pytest

from conftest import COMMAND_CENTER, NOW, RecordingOsrm, osrm_payload
from response_core.console.session import DispatchSession
from response_core.errors import InvalidDestination, NetworkError, RouteUnavailable, StateConflict
from response_core.routing.service import DispatchRouter


@pytest.mark.asyncio
async def test_scenario_route_from_command_center(router, osrm):
    result = await router.compute_route({"lat": 8.38, "lng": 124.87})

    assert result.distance_km == pytest.approx(2.3)
    assert result.duration_minutes == pytest.approx(6.0)
    assert result.eta_minutes == 6
    assert result.estimated_arrival_time == NOW + timedelta(minutes=6)
    assert result.route_id is None

    request = osrm.requests[0]
    assert request.url.path == "/route/v1/driving/124.857026,8.371646;124.87,8.38"
    assert request.url.params["overview"] == "full"
    assert request.url.params["geometries"] == "geojson"


@pytest.mark.asyncio
async def test_waypoints_are_normalised_to_lat_lng(router):
    result = await router.compute_route((8.38, 124.87))
    assert result.waypoints[0] == (8.371646, 124.857026)
    assert result.waypoints[-1] == (8.38, 124.87)
    assert len(result.waypoints) == 3


@pytest.mark.asyncio
async def test_route_without_incident_persists_nothing(router, store, make_incident):
    incident = await make_incident()
    await router.compute_route((8.38, 124.87))
    assert await store.list_routes(incident.id) == []
    assert (await store.get_incident(incident.id)).estimated_arrival_time is None


@pytest.mark.asyncio
async def test_route_for_incident_appends_record_and_overwrites_eta(router, store, make_incident, clock):
    incident = await make_incident(status="active")

    first = await router.compute_route(incident.coordinates, incident_id=incident.id)
    clock.advance(minutes=2)
    second = await router.compute_route(incident.coordinates, incident_id=incident.id)

    routes = await store.list_routes(incident.id)
    assert len(routes) == 2
    assert {r.id for r in routes} == {first.route_id, second.route_id}
    assert routes[0].calculated_distance_km == pytest.approx(2.3)
    assert routes[0].calculated_eta_minutes == 6
    assert routes[0].route_coordinates[0] == [8.371646, 124.857026]

    stored = await store.get_incident(incident.id)
    assert stored.current_eta_minutes == 6
    assert stored.estimated_arrival_time == (NOW + timedelta(minutes=8)).isoformat()
    assert stored.response_route_data["distance_km"] == pytest.approx(2.3)
    assert stored.response_route_data["duration_minutes"] == 6


@pytest.mark.asyncio
async def test_resolved_incident_rejected_without_network_call(router, osrm, store, make_incident):
    incident = await make_incident(status="resolved")
    with pytest.raises(StateConflict):
        await router.compute_route(incident.coordinates, incident_id=incident.id)
    assert osrm.requests == []
    assert await store.list_routes(incident.id) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("destination", [(0, 0), (95, 124.8), {"lat": 8.3}, "garbage", None])
async def test_invalid_destination(router, osrm, destination):
    with pytest.raises(InvalidDestination):
        await router.compute_route(destination)
    assert osrm.requests == []


@pytest.mark.asyncio
async def test_incident_resolved_while_routing_discards_result(store, clock, make_incident):
    incident = await make_incident(status="active")
    osrm = RecordingOsrm()

    async def resolve_meanwhile():
        await store.transition_status(incident.id, "active", "resolved")

    osrm.before_response = resolve_meanwhile
    router = DispatchRouter(store, osrm.client(), COMMAND_CENTER, clock=clock)

    with pytest.raises(StateConflict):
        await router.compute_route(incident.coordinates, incident_id=incident.id)
    assert len(osrm.requests) == 1
    assert await store.list_routes(incident.id) == []
    assert (await store.get_incident(incident.id)).estimated_arrival_time is None


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    httpx.ConnectTimeout("timed out"),
    httpx.ReadTimeout("timed out"),
    httpx.ConnectError("connection refused"),
])
async def test_transport_failures_are_network_errors(store, clock, error):
    router = DispatchRouter(store, RecordingOsrm(error=error).client(), COMMAND_CENTER, clock=clock)
    with pytest.raises(NetworkError):
        await router.compute_route((8.38, 124.87))


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(500, text="upstream down"),
    httpx.Response(400, json={"code": "InvalidQuery"}),
    httpx.Response(200, json={"code": "NoRoute", "routes": []}),
    httpx.Response(200, json={"code": "Ok", "routes": []}),
    httpx.Response(200, json=osrm_payload(coordinates=[])),
    httpx.Response(200, text="<html>"),
    httpx.Response(200, json=[]),
    httpx.Response(200, json=osrm_payload(coordinates=[[124.8]])),
    httpx.Response(200, json=osrm_payload(coordinates=[[124.8, 8.3, 10.0]])),
    httpx.Response(200, json=osrm_payload(coordinates=[[124.8, "north"]])),
    httpx.Response(200, json=osrm_payload(coordinates=[[124.8, None]])),
    httpx.Response(200, json={"code": "Ok", "routes": [{"distance": 10, "duration": 5}]}),
])
async def test_unusable_responses_are_route_unavailable(store, clock, response):
    router = DispatchRouter(store, RecordingOsrm(response=response).client(), COMMAND_CENTER, clock=clock)
    with pytest.raises(RouteUnavailable):
        await router.compute_route((8.38, 124.87))


@pytest.mark.asyncio
async def test_failed_route_leaves_incident_untouched(store, clock, make_incident):
    incident = await make_incident(status="active")
    osrm = RecordingOsrm(response=httpx.Response(503))
    router = DispatchRouter(store, osrm.client(), COMMAND_CENTER, clock=clock)
    with pytest.raises(RouteUnavailable):
        await router.compute_route(incident.coordinates, incident_id=incident.id)
    assert await store.list_routes(incident.id) == []
    assert (await store.get_incident(incident.id)).current_eta_minutes is None


@pytest.mark.asyncio
async def test_session_shows_one_route_and_clear_resets_it(router, store, make_incident):
    first = await make_incident(status="active")
    second = await make_incident(status="active", title="Landslide")
    session = DispatchSession(store=store)

    await router.compute_route(first.coordinates, incident_id=first.id, session=session)
    assert session.is_route_displayed
    assert session.displayed_route.incident_id == first.id

    await router.compute_route(second.coordinates, incident_id=second.id, session=session)
    assert session.displayed_route.incident_id == second.id

    router.clear_displayed_route(session)
    assert not session.is_route_displayed


@pytest.mark.asyncio
async def test_explicit_origin_overrides_command_center(router, osrm):
    await router.compute_route((8.38, 124.87), origin={"lat": 8.36, "lng": 124.85})
    assert osrm.requests[0].url.path == "/route/v1/driving/124.85,8.36;124.87,8.38"


@pytest.mark.asyncio
async def test_malformed_geometry_for_incident_persists_nothing(store, clock, make_incident):
    incident = await make_incident(status="active")
    osrm = RecordingOsrm(response=httpx.Response(200, json=osrm_payload(coordinates=[[124.86, 8.37], [124.8]])))
    router = DispatchRouter(store, osrm.client(), COMMAND_CENTER, clock=clock)
    with pytest.raises(RouteUnavailable, match="Invalid route data received"):
        await router.compute_route(incident.coordinates, incident_id=incident.id)
    assert await store.list_routes(incident.id) == []
