# models/normalized.py
from __future__ import annotations
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from models.distance_matrix import MatrixResult
from models.waypoints import Coordinate


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---- soft failures: collected next to the good items, never raised ----
class LegStatusError(_Frozen):
    leg_index: int
    status: str
    reason: str


class ElementStatusError(_Frozen):
    origin_index: int
    destination_index: int
    status: str
    reason: str


# ---- directions ----
class NormalizedStep(_Frozen):
    leg_index: int
    instruction: str
    instruction_lines: List[str] = Field(default_factory=list)
    distance_meters: Optional[int] = None
    duration_seconds: Optional[int] = None
    distance_text: Optional[str] = None
    duration_text: Optional[str] = None
    start_location: Coordinate
    end_location: Coordinate
    path: List[Coordinate] = Field(default_factory=list)


class NormalizedLeg(_Frozen):
    index: int
    start_address: str
    end_address: str
    distance_meters: Optional[int] = None
    duration_seconds: Optional[int] = None
    distance_text: Optional[str] = None
    duration_text: Optional[str] = None
    ok: bool = True


class NormalizedRoute(_Frozen):
    total_distance_meters: int
    total_duration_seconds: int
    distance_text: str
    duration_text: str
    start_address: str
    end_address: str
    summary: str = ""
    path: List[Coordinate]
    overview_path: List[Coordinate] = Field(default_factory=list)
    instructions: List[str]
    legs: List[NormalizedLeg] = Field(default_factory=list)
    steps: List[NormalizedStep] = Field(default_factory=list)
    flagged_legs: List[LegStatusError] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


# ---- distance matrix ----
class NormalizedMatrixCell(_Frozen):
    status: str
    distance_meters: Optional[int] = None
    duration_seconds: Optional[int] = None
    distance_text: Optional[str] = None
    duration_text: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "OK" and self.distance_meters is not None


class NormalizedMatrix(_Frozen):
    origin_count: int
    destination_count: int
    cells: Dict[Tuple[int, int], NormalizedMatrixCell]
    errors: List[ElementStatusError] = Field(default_factory=list)
    origin_addresses: List[str] = Field(default_factory=list)
    destination_addresses: List[str] = Field(default_factory=list)

    def cell(self, origin: int, destination: int) -> NormalizedMatrixCell:
        return self.cells[(origin, destination)]

    def ok_cells(self) -> Dict[Tuple[int, int], NormalizedMatrixCell]:
        return {k: c for k, c in self.cells.items() if c.ok}

    def row(self, origin: int) -> Dict[int, NormalizedMatrixCell]:
        return {d: c for (o, d), c in self.cells.items() if o == origin}

    def column(self, destination: int) -> Dict[int, NormalizedMatrixCell]:
        return {o: c for (o, d), c in self.cells.items() if d == destination}

    def to_matrix_result(self) -> MatrixResult:
        inf = float("inf")
        distances = [[inf] * self.destination_count for _ in range(self.origin_count)]
        durations = [[inf] * self.destination_count for _ in range(self.origin_count)]
        for (o, d), c in self.cells.items():
            if c.ok:
                distances[o][d] = c.distance_meters / 1000.0  # km
                if c.duration_seconds is not None:
                    durations[o][d] = float(c.duration_seconds)
        return MatrixResult(distances=distances, durations=durations)

    def as_payload(self) -> dict:
        """JSON-friendly shape: tuple keys become a flat cell list."""
        return {
            "origin_count": self.origin_count,
            "destination_count": self.destination_count,
            "cells": [
                {"origin": o, "destination": d, **c.model_dump()}
                for (o, d), c in sorted(self.cells.items())
            ],
            "errors": [e.model_dump() for e in self.errors],
            "origin_addresses": self.origin_addresses,
            "destination_addresses": self.destination_addresses,
        }
