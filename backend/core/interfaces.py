from __future__ import annotations
from abc import ABC, abstractmethod
from models.directions import DirectionsRequest
from models.distance_matrix import MatrixRequest
from models.normalized import NormalizedMatrix, NormalizedRoute


class DistanceMatrixAdapter(ABC):
    """All online/offline distance matrix providers must implement this."""

    @abstractmethod
    async def get_matrix(self, request: MatrixRequest) -> NormalizedMatrix: ...


class DirectionsAdapter(ABC):
    """Providers that return a full route (path + turn-by-turn)."""

    @abstractmethod
    async def get_directions(self, request: DirectionsRequest) -> NormalizedRoute: ...
