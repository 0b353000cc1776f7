# backend/tests/test_adapters.py
import asyncio

import httpx
import pytest
import respx

from adapters.offline.haversine_adapter import HaversineAdapter
from adapters.online.google_directions_adapter import GoogleDirectionsAdapter
from adapters.online.google_matrix_adapter import GoogleMatrixAdapter
from conftest import GOOGLE_BASE
from core.exceptions import (
    APIKeyMissingError,
    DirectionsRequestError,
    DistanceMatrixRequestError,
    MatrixShapeError,
)
from data_toy import directions_ok, matrix_1x2
from models.directions import DirectionsRequest
from models.distance_matrix import MatrixRequest

MATRIX_URL = f"{GOOGLE_BASE}/maps/api/distancematrix/json"
DIRECTIONS_URL = f"{GOOGLE_BASE}/maps/api/directions/json"


def _req_1x2(**kw):
    return MatrixRequest(
        origins=[[23.99, 121.60]],
        destinations=[[24.15, 121.62], [24.2, 121.7]],
        **kw,
    )


@pytest.mark.parametrize(
    "o,d,expected_range_km",
    [
        ((37.7749, -122.4194), (34.0522, -118.2437), (500, 700)),  # SF→LA ~560 km
    ],
)
def test_haversine_adapter(o, d, expected_range_km):
    req = MatrixRequest(origins=[o], destinations=[d])
    matrix = asyncio.run(HaversineAdapter().get_matrix(req))
    km = matrix.cell(0, 0).distance_meters / 1000.0
    lo, hi = expected_range_km
    assert lo <= km <= hi, f"expected {lo}..{hi} km, got {km}"
    assert matrix.errors == []


def test_google_adapters_require_key(monkeypatch):
    monkeypatch.setattr("config.Settings.GOOGLE_API_KEY", "")
    with pytest.raises(APIKeyMissingError):
        GoogleMatrixAdapter()
    with pytest.raises(APIKeyMissingError):
        GoogleDirectionsAdapter()


@respx.mock
def test_google_matrix_query_params():
    route = respx.get(MATRIX_URL).mock(return_value=httpx.Response(200, json=matrix_1x2()))
    adapter = GoogleMatrixAdapter(api_key="abc", base_url=GOOGLE_BASE)
    matrix = asyncio.run(adapter.get_matrix(_req_1x2(parameters={"language": "en"})))

    params = route.calls.last.request.url.params
    assert params["origins"] == "23.99,121.6"
    assert params["mode"] == "driving"
    assert params["units"] == "metric"
    assert params["language"] == "en"
    assert params["key"] == "abc"

    assert matrix.cell(0, 0).duration_seconds == 300
    assert matrix.cell(0, 1).status == "NOT_FOUND"


@respx.mock
def test_google_matrix_transport_error():
    respx.get(MATRIX_URL).mock(side_effect=httpx.ConnectTimeout("slow"))
    adapter = GoogleMatrixAdapter(api_key="abc", base_url=GOOGLE_BASE)
    with pytest.raises(DistanceMatrixRequestError):
        asyncio.run(adapter.get_matrix(_req_1x2()))


@respx.mock
def test_google_matrix_shape_checked_against_request():
    respx.get(MATRIX_URL).mock(return_value=httpx.Response(200, json=matrix_1x2()))
    adapter = GoogleMatrixAdapter(api_key="abc", base_url=GOOGLE_BASE)
    req = MatrixRequest(origins=[[23.99, 121.60]], destinations=[[24.15, 121.62]])
    with pytest.raises(MatrixShapeError):
        asyncio.run(adapter.get_matrix(req))


@respx.mock
def test_google_directions_route_index():
    payload = directions_ok()
    payload["routes"].append(dict(payload["routes"][0], summary="Hwy 9"))
    route = respx.get(DIRECTIONS_URL).mock(return_value=httpx.Response(200, json=payload))
    adapter = GoogleDirectionsAdapter(api_key="abc", base_url=GOOGLE_BASE)
    req = DirectionsRequest(
        origin=[23.99, 121.60], destination=[24.15, 121.62], alternatives=True, route_index=1
    )
    result = asyncio.run(adapter.get_directions(req))

    assert result.summary == "Hwy 9"
    assert route.calls.last.request.url.params["alternatives"] == "true"


@respx.mock
def test_google_directions_http_error():
    respx.get(DIRECTIONS_URL).mock(return_value=httpx.Response(503))
    adapter = GoogleDirectionsAdapter(api_key="abc", base_url=GOOGLE_BASE)
    req = DirectionsRequest(origin=[23.99, 121.60], destination=[24.15, 121.62])
    with pytest.raises(DirectionsRequestError):
        asyncio.run(adapter.get_directions(req))


@pytest.mark.online
def test_google_matrix_live(client, has_google_key):
    if not has_google_key:
        pytest.skip("GOOGLE_API_KEY not set")

    payload = {
        "adapter": "google",
        "origins": [{"lat": 23.9917, "lng": 121.6016}],
        "destinations": [{"lat": 24.1577, "lng": 121.6219}],
    }
    r = client.post("/distance-matrix", json=payload)
    assert r.status_code == 200, r.text
    assert len(r.json()["data"]["matrix"]["distances"]) == 1
