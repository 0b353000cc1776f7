# api/dispatch_routes.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from adapters.adapter_factory import create_adapter
from api._resp import fail, fail_from, ok
from core.exceptions import AppError
from models.waypoints import Coordinate, DriversRequest
from services.dispatch_eta import enrich_drivers_with_eta, order_distances

router = APIRouter(prefix="/dispatch", tags=["dispatch"])


class OrderDistancesRequest(BaseModel):
    driver: Coordinate
    orders: List[Coordinate] = Field(default_factory=list)
    adapter: str = "google"


def _adapter(name: str):
    try:
        return create_adapter(name)
    except ValueError as e:
        fail(400, str(e))


@router.post("/best-driver", summary="Rank nearby drivers by ETA to the passenger")
async def best_driver(req: DriversRequest, radius_m: Optional[float] = None):
    ranked = await enrich_drivers_with_eta(
        req.drivers, req.passenger, _adapter(req.adapter), radius_m=radius_m
    )
    best = next((d for d in ranked if d.reachable), None)
    return ok(
        {
            "best": best.model_dump() if best else None,
            "ranked": [d.model_dump() for d in ranked],
        }
    )


@router.post("/order-distances", summary="Distances from a driver to open orders")
async def order_distance_lookup(req: OrderDistancesRequest):
    try:
        cells = await order_distances(req.driver, req.orders, _adapter(req.adapter))
    except AppError as e:
        fail_from(e)
    return ok([{"order": i, **c.model_dump()} for i, c in sorted(cells.items())])
