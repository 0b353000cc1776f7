# api/directions_routes.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Query

from adapters.adapter_factory import create_directions_adapter
from api._resp import fail, fail_from, ok
from core.exceptions import AppError
from models.directions import DirectionsRequest
from services.response_decoder import decode_directions
from services.route_normalizer import normalize_directions

router = APIRouter(prefix="/directions", tags=["directions"])


@router.post("/normalize", summary="Normalize a raw Directions API response")
def normalize_directions_payload(
    payload: Dict[str, Any] = Body(...),
    route_index: int = Query(0, ge=0),
):
    try:
        route = normalize_directions(decode_directions(payload), route_index=route_index)
    except AppError as e:
        fail_from(e)
    except IndexError as e:
        fail(404, str(e))
    return ok(route.model_dump())


@router.post("", summary="Fetch and normalize a route via the configured provider")
async def get_directions(req: DirectionsRequest, provider: str = Query("google")):
    try:
        adapter = create_directions_adapter(provider)
    except ValueError as e:
        fail(400, str(e))
    try:
        route = await adapter.get_directions(req)
    except AppError as e:
        fail_from(e)
    except IndexError as e:
        fail(404, str(e))
    return ok(route.model_dump(), provider=provider)
