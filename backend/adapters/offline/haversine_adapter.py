from typing import Dict, Optional, Tuple

from config import settings
from core.coords import format_distance, format_duration, haversine_m
from core.interfaces import DistanceMatrixAdapter
from models.distance_matrix import MatrixRequest
from models.normalized import NormalizedMatrix, NormalizedMatrixCell


class HaversineAdapter(DistanceMatrixAdapter):
    """
    Offline adapter. Straight-line distances in **meters**; durations assume a
    constant speed (FALLBACK_SPEED_MPS). Used when the online provider is down.
    """

    def __init__(self, speed_mps: Optional[float] = None):
        self.speed_mps = speed_mps or settings.FALLBACK_SPEED_MPS

    def cell(self, meters: float) -> NormalizedMatrixCell:
        seconds = int(meters / self.speed_mps)
        return NormalizedMatrixCell(
            status="OK",
            distance_meters=int(meters),
            duration_seconds=seconds,
            distance_text=format_distance(meters),
            duration_text=format_duration(seconds),
        )

    async def get_matrix(self, request: MatrixRequest) -> NormalizedMatrix:
        cells: Dict[Tuple[int, int], NormalizedMatrixCell] = {}
        for oi, o in enumerate(request.origins):
            for di, d in enumerate(request.destinations):
                cells[(oi, di)] = self.cell(haversine_m(o, d))

        return NormalizedMatrix(
            origin_count=len(request.origins),
            destination_count=len(request.destinations),
            cells=cells,
        )
