# services/dispatch_eta.py
"""
Driver ETA ranking for dispatch.

Passenger side: rank nearby drivers by road ETA to the pickup point. Driver
side: distances from the driver to each open order. Road figures come from a
distance-matrix adapter; if that provider fails, straight-line distance at a
fixed speed stands in so dispatch keeps working.
"""
from __future__ import annotations
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from adapters.offline.haversine_adapter import HaversineAdapter
from config import settings
from core.coords import haversine_m
from core.exceptions import AppError
from core.interfaces import DistanceMatrixAdapter
from core.logger import get_logger
from models.distance_matrix import MatrixRequest
from models.normalized import NormalizedMatrix, NormalizedMatrixCell
from models.waypoints import Coordinate, Driver

logger = get_logger(__name__)


class DriverETA(BaseModel):
    driver: Driver
    status: str = "OK"
    distance_meters: Optional[int] = None
    distance_text: Optional[str] = None
    eta_seconds: Optional[int] = None
    eta_text: Optional[str] = None
    source: Literal["matrix", "straight_line"] = "matrix"

    @property
    def reachable(self) -> bool:
        return self.eta_seconds is not None

    @classmethod
    def from_cell(cls, driver: Driver, cell: NormalizedMatrixCell, source: str = "matrix") -> "DriverETA":
        return cls(
            driver=driver,
            status=cell.status,
            distance_meters=cell.distance_meters,
            distance_text=cell.distance_text,
            eta_seconds=cell.duration_seconds if cell.ok else None,
            eta_text=cell.duration_text,
            source=source,
        )


def driver_etas(matrix: NormalizedMatrix) -> Dict[int, NormalizedMatrixCell]:
    """N drivers x 1 passenger matrix -> {driver_index: cell}."""
    return matrix.column(0)


def _eta_key(d: DriverETA):
    # unreachable drivers sort last
    return (d.eta_seconds is None, d.eta_seconds or 0)


def rank_drivers(drivers: List[Driver], matrix: NormalizedMatrix) -> List[DriverETA]:
    cells = driver_etas(matrix)
    ranked = [
        DriverETA.from_cell(driver, cells[i])
        for i, driver in enumerate(drivers)
        if i in cells
    ]
    return sorted(ranked, key=_eta_key)


def within_radius(
    drivers: List[Driver], passenger: Coordinate, radius_m: Optional[float] = None
) -> List[Driver]:
    radius = radius_m if radius_m is not None else settings.DISPATCH_RADIUS_M
    return [d for d in drivers if haversine_m(d.location, passenger) <= radius]


def straight_line_etas(
    drivers: List[Driver], passenger: Coordinate, speed_mps: Optional[float] = None
) -> List[DriverETA]:
    fallback = HaversineAdapter(speed_mps=speed_mps)
    ranked = [
        DriverETA.from_cell(d, fallback.cell(haversine_m(d.location, passenger)), "straight_line")
        for d in drivers
    ]
    return sorted(ranked, key=lambda d: d.distance_meters)


async def enrich_drivers_with_eta(
    drivers: List[Driver],
    passenger: Coordinate,
    adapter: DistanceMatrixAdapter,
    radius_m: Optional[float] = None,
    mode: Optional[str] = None,
) -> List[DriverETA]:
    nearby = within_radius(drivers, passenger, radius_m)
    if not nearby:
        logger.warning(f"no drivers within {radius_m or settings.DISPATCH_RADIUS_M:.0f} m")
        return []

    request = MatrixRequest(
        origins=[d.location for d in nearby],
        destinations=[passenger],
        mode=mode or settings.TRAVEL_MODE,
    )
    try:
        matrix = await adapter.get_matrix(request)
    except AppError as e:
        logger.error(f"driver ETA lookup failed, using straight-line estimate: {e}")
        return straight_line_etas(nearby, passenger)

    ranked = rank_drivers(nearby, matrix)
    logger.debug(f"ranked {len(ranked)} drivers by ETA")
    return ranked


async def find_best_driver(
    drivers: List[Driver],
    passenger: Coordinate,
    adapter: DistanceMatrixAdapter,
    radius_m: Optional[float] = None,
) -> Optional[DriverETA]:
    ranked = await enrich_drivers_with_eta(drivers, passenger, adapter, radius_m)
    best = next((d for d in ranked if d.reachable), None)
    if best is not None:
        logger.info(f"best driver {best.driver.id}: {best.eta_text}")
    return best


async def order_distances(
    driver_location: Coordinate,
    order_locations: List[Coordinate],
    adapter: DistanceMatrixAdapter,
) -> Dict[int, NormalizedMatrixCell]:
    """1 driver x N orders -> {order_index: cell}."""
    if not order_locations:
        return {}
    matrix = await adapter.get_matrix(
        MatrixRequest(origins=[driver_location], destinations=order_locations)
    )
    return matrix.row(0)
