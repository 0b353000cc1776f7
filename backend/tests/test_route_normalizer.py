# backend/tests/test_route_normalizer.py
import polyline
import pytest

from core.exceptions import EmptyRouteError, MalformedPolylineError
from data_toy import A, B, C, D, directions_ok
from services.response_decoder import decode_directions
from services.route_normalizer import normalize_directions


def _normalize(payload, **kw):
    return normalize_directions(decode_directions(payload), **kw)


def _pairs(coords):
    return [(c.lat, c.lng) for c in coords]


def test_totals_are_sum_of_leg_values():
    payload = directions_ok()
    route = _normalize(payload)
    legs = payload["routes"][0]["legs"]
    assert route.total_distance_meters == sum(l["distance"]["value"] for l in legs) == 8200
    assert route.total_duration_seconds == sum(l["duration"]["value"] for l in legs) == 1020
    assert route.distance_text == "8.2 km"
    assert route.duration_text == "17 mins"
    assert route.flagged_legs == []


def test_path_concatenates_steps_without_duplicate_boundaries():
    route = _normalize(directions_ok())
    assert _pairs(route.path) == [
        pytest.approx(A),
        pytest.approx(B),
        pytest.approx(C),
        pytest.approx(D),
    ]
    assert len(route.overview_path) == 4


def test_non_shared_boundary_is_kept():
    payload = directions_ok()
    # second step starts somewhere else than where the first one ended
    off = (40.8, -121.0)
    payload["routes"][0]["legs"][0]["steps"][1]["polyline"]["points"] = polyline.encode([off, C])
    route = _normalize(payload)
    assert len(route.path) == 5


def test_instructions_are_plain_text_lines():
    route = _normalize(directions_ok())
    assert route.instructions == [
        "Head north on Main St",
        "Turn left onto Main St",
        "then continue",
        "Continue straight",
        "Destination will be on the right",
    ]
    assert route.steps[1].instruction == "Turn left onto Main St then continue"
    assert route.steps[1].instruction_lines == ["Turn left onto Main St", "then continue"]


def test_addresses_and_legs():
    route = _normalize(directions_ok())
    assert route.start_address == "Hualien Station"
    assert route.end_address == "Taroko Gate"
    assert [l.index for l in route.legs] == [0, 1]
    assert route.steps[2].leg_index == 1


def test_zero_legs_is_empty_route():
    payload = directions_ok()
    payload["routes"][0]["legs"] = []
    with pytest.raises(EmptyRouteError):
        _normalize(payload)


def test_zero_routes_is_empty_route():
    with pytest.raises(EmptyRouteError):
        _normalize({"status": "OK", "routes": []})


def test_route_index_out_of_range():
    with pytest.raises(IndexError):
        _normalize(directions_ok(), route_index=3)


def test_leg_with_bad_status_is_flagged_not_fatal():
    payload = directions_ok()
    payload["routes"][0]["legs"][1]["status"] = "ZERO_RESULTS"
    route = _normalize(payload)
    assert route.total_distance_meters == 5200
    assert route.total_duration_seconds == 720
    assert len(route.flagged_legs) == 1
    assert route.flagged_legs[0].leg_index == 1
    assert route.flagged_legs[0].status == "ZERO_RESULTS"
    assert route.legs[1].ok is False
    # geometry of the flagged leg is still drawn
    assert len(route.path) == 4


def test_leg_missing_value_is_flagged_incomplete():
    payload = directions_ok()
    del payload["routes"][0]["legs"][0]["distance"]["value"]
    route = _normalize(payload)
    assert route.total_distance_meters == 3000
    assert route.total_duration_seconds == 300
    assert route.flagged_legs[0].status == "INCOMPLETE"
    assert "distance" in route.flagged_legs[0].reason


def test_malformed_step_polyline_aborts_with_path():
    payload = directions_ok()
    payload["routes"][0]["legs"][1]["steps"][0]["polyline"]["points"] = "_p~iF~ps|U_u"
    with pytest.raises(MalformedPolylineError) as ei:
        _normalize(payload)
    assert ei.value.path == "routes[0].legs[1].steps[0].polyline.points"


def test_overview_used_when_steps_have_no_geometry():
    payload = directions_ok()
    for leg in payload["routes"][0]["legs"]:
        for step in leg["steps"]:
            step["polyline"]["points"] = ""
    route = _normalize(payload)
    assert _pairs(route.path)[-1] == pytest.approx(D)
    assert len(route.path) == 4


def test_output_is_immutable():
    route = _normalize(directions_ok())
    with pytest.raises(Exception):
        route.total_distance_meters = 0
