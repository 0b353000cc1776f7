# api/adapters_routes.py
import math
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Query

from adapters.adapter_factory import create_adapter
from api._resp import fail, fail_from, ok
from core.exceptions import AppError
from models.distance_matrix import MatrixRequest
from services.response_decoder import decode_distance_matrix
from services.route_normalizer import normalize_distance_matrix

router = APIRouter()


def _json_safe(dense: Dict[str, Any]) -> Dict[str, Any]:
    # JSON has no Infinity; unreachable cells go out as null
    return {
        k: None if v is None else [[x if math.isfinite(x) else None for x in row] for row in v]
        for k, v in dense.items()
    }


@router.post(
    "/distance-matrix", summary="Compute a distance/duration matrix via adapter"
)
async def get_distance_matrix(req: MatrixRequest):
    try:
        adapter = create_adapter(req.adapter)
    except ValueError as e:
        fail(400, str(e))
    try:
        matrix = await adapter.get_matrix(req)
    except AppError as e:
        fail_from(e)
    return ok(
        {
            **matrix.as_payload(),
            "matrix": _json_safe(matrix.to_matrix_result().model_dump()),
        },
        adapter=req.adapter,
    )


@router.post(
    "/distance-matrix/normalize",
    summary="Normalize a raw Distance Matrix API response",
)
def normalize_matrix_payload(
    payload: Dict[str, Any] = Body(...),
    origin_count: Optional[int] = Query(None, ge=1),
    destination_count: Optional[int] = Query(None, ge=1),
):
    try:
        matrix = normalize_distance_matrix(
            decode_distance_matrix(payload),
            origin_count=origin_count,
            destination_count=destination_count,
        )
    except AppError as e:
        fail_from(e)
    return ok(matrix.as_payload())
