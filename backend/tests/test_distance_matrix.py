# backend/tests/test_distance_matrix.py
import math

import pytest

from core.exceptions import ApiStatusError, EmptyRouteError, MatrixShapeError
from data_toy import matrix_1x2
from models.distance_matrix import MatrixRequest
from services.response_decoder import decode_distance_matrix
from services.route_normalizer import normalize_distance_matrix


def _normalize(payload, **kw):
    return normalize_distance_matrix(decode_distance_matrix(payload), **kw)


def test_one_origin_two_destinations_with_not_found():
    matrix = _normalize(matrix_1x2(), origin_count=1, destination_count=2)

    ok = matrix.ok_cells()
    assert list(ok) == [(0, 0)]
    assert ok[(0, 0)].distance_meters == 3000
    assert ok[(0, 0)].duration_seconds == 300

    assert len(matrix.errors) == 1
    err = matrix.errors[0]
    assert (err.origin_index, err.destination_index) == (0, 1)
    assert err.status == "NOT_FOUND"

    failed = matrix.cell(0, 1)
    assert failed.status == "NOT_FOUND"
    assert failed.distance_meters is None and failed.duration_seconds is None


def test_every_position_indexed():
    matrix = _normalize(matrix_1x2())
    assert set(matrix.cells) == {(0, 0), (0, 1)}
    assert matrix.origin_count == 1 and matrix.destination_count == 2
    assert list(matrix.row(0)) == [0, 1]
    assert list(matrix.column(1)) == [0]
    assert matrix.destination_addresses == ["Taroko Gate", "Nowhere"]


def test_dense_view_uses_inf_for_failed_cells():
    dense = _normalize(matrix_1x2()).to_matrix_result()
    assert dense.distances[0][0] == pytest.approx(3.0)  # km
    assert dense.durations[0][0] == 300
    assert math.isinf(dense.distances[0][1])
    assert math.isinf(dense.durations[0][1])


def test_ok_element_without_values_is_incomplete():
    payload = matrix_1x2()
    del payload["rows"][0]["elements"][0]["duration"]["value"]
    matrix = _normalize(payload)
    assert matrix.ok_cells() == {}
    assert [e.status for e in matrix.errors] == ["INCOMPLETE", "NOT_FOUND"]


@pytest.mark.parametrize(
    "kw,path",
    [
        ({"destination_count": 3}, "rows[0].elements"),
        ({"origin_count": 2}, "rows"),
    ],
)
def test_shape_checked_against_request(kw, path):
    with pytest.raises(MatrixShapeError) as ei:
        _normalize(matrix_1x2(), **kw)
    assert ei.value.path == path


def test_ragged_rows_rejected():
    payload = matrix_1x2()
    payload["rows"].append({"elements": [{"status": "OK", "distance": {"text": "1 m", "value": 1}, "duration": {"text": "1 s", "value": 1}}]})
    with pytest.raises(MatrixShapeError):
        _normalize(payload)


def test_zero_rows_is_empty():
    with pytest.raises(EmptyRouteError):
        _normalize({"status": "OK", "rows": []})


def test_top_level_failure():
    with pytest.raises(ApiStatusError) as ei:
        _normalize({"status": "MAX_ELEMENTS_EXCEEDED", "error_message": "too many"})
    assert ei.value.status == "MAX_ELEMENTS_EXCEEDED"


def test_payload_shape_for_json():
    payload = _normalize(matrix_1x2()).as_payload()
    assert payload["cells"][0]["origin"] == 0
    assert payload["cells"][1]["destination"] == 1
    assert payload["errors"][0]["status"] == "NOT_FOUND"


@pytest.mark.parametrize(
    "body",
    [
        {"origins": [{"lat": 23.99, "lng": 121.6}], "destinations": [[24.0, 121.61]]},
        {"origins": [{"lat": 23.99, "lon": 121.6}], "destinations": [[121.61, 24.0]]},
        {"coordinates": [[23.99, 121.6], [24.0, 121.61]]},
    ],
)
def test_matrix_request_coordinate_shapes(body):
    req = MatrixRequest(**body)
    assert req.origins[0].lat == pytest.approx(23.99)
    assert req.destinations[-1].lng == pytest.approx(121.61)


def test_matrix_request_requires_points():
    with pytest.raises(ValueError):
        MatrixRequest(origins=[{"lat": 1, "lng": 2}])
