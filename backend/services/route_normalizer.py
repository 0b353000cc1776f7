# services/route_normalizer.py
from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

from core.coords import format_distance, format_duration
from core.exceptions import EmptyRouteError, MalformedPolylineError, MatrixShapeError
from core.html_text import html_to_lines
from core.logger import get_logger
from core.polyline import decode_polyline
from models.directions import (
    ApiStatus,
    DirectionsResult,
    DistanceMatrixResult,
    Element,
    Leg,
    ResponseKind,
    TextValue,
)
from models.normalized import (
    ElementStatusError,
    LegStatusError,
    NormalizedLeg,
    NormalizedMatrix,
    NormalizedMatrixCell,
    NormalizedRoute,
    NormalizedStep,
)
from models.waypoints import Coordinate

logger = get_logger(__name__)


def _decode_at(points: str, path: str) -> Tuple[Coordinate, ...]:
    try:
        return decode_polyline(points)
    except MalformedPolylineError as e:
        raise e.at(path) from e


def _extend_path(path: List[Coordinate], segment: Sequence[Coordinate]) -> None:
    """Append a segment, skipping its first point when it repeats the last one."""
    if not segment:
        return
    start = 1 if path and path[-1] == segment[0] else 0
    path.extend(segment[start:])


def _pair(tv: Optional[TextValue]) -> Tuple[Optional[int], Optional[str]]:
    if tv is None:
        return None, None
    return tv.value, tv.text


def _leg_problem(leg: Leg) -> Optional[Tuple[str, str]]:
    if leg.status != ApiStatus.OK.value:
        return leg.status, f"leg status {leg.status}"
    missing = [
        name
        for name, tv in (("distance", leg.distance), ("duration", leg.duration))
        if not tv.is_complete
    ]
    if missing:
        return "INCOMPLETE", f"{' and '.join(missing)} lacks text/value pair"
    return None


def normalize_directions(result: DirectionsResult, route_index: int = 0) -> NormalizedRoute:
    """
    Collapse one route of a decoded Directions result into a NormalizedRoute.

    Totals only count healthy legs; legs with a non-OK status or a half-filled
    distance/duration pair are reported in `flagged_legs` instead. The path is
    every step polyline in order with shared boundary points de-duplicated,
    falling back to the overview polyline when no step carries geometry.
    """
    if not result.routes:
        raise EmptyRouteError("directions response contains no routes", ResponseKind.DIRECTIONS.value)
    if route_index < 0 or route_index >= len(result.routes):
        raise IndexError(f"route_index {route_index} out of range (0..{len(result.routes) - 1})")

    route = result.routes[route_index]
    base = f"routes[{route_index}]"
    if not route.legs:
        raise EmptyRouteError("route has no legs", ResponseKind.DIRECTIONS.value)

    overview_path = list(_decode_at(route.overview_polyline.points, f"{base}.overview_polyline.points"))

    total_distance = 0
    total_duration = 0
    path: List[Coordinate] = []
    instructions: List[str] = []
    legs: List[NormalizedLeg] = []
    steps: List[NormalizedStep] = []
    flagged: List[LegStatusError] = []

    for li, leg in enumerate(route.legs):
        problem = _leg_problem(leg)
        if problem is None:
            total_distance += leg.distance.value
            total_duration += leg.duration.value
        else:
            status, reason = problem
            logger.warning(f"leg {li} excluded from totals: {reason}")
            flagged.append(LegStatusError(leg_index=li, status=status, reason=reason))

        leg_path: List[Coordinate] = []
        for si, step in enumerate(leg.steps):
            step_path = _decode_at(step.polyline.points, f"{base}.legs[{li}].steps[{si}].polyline.points")
            _extend_path(leg_path, step_path)
            _extend_path(path, step_path)

            lines = html_to_lines(step.html_instructions)
            instructions.extend(lines)
            distance_m, distance_text = _pair(step.distance)
            duration_s, duration_text = _pair(step.duration)
            steps.append(
                NormalizedStep(
                    leg_index=li,
                    instruction=" ".join(lines),
                    instruction_lines=lines,
                    distance_meters=distance_m,
                    duration_seconds=duration_s,
                    distance_text=distance_text,
                    duration_text=duration_text,
                    start_location=step.start_location,
                    end_location=step.end_location,
                    path=list(step_path),
                )
            )

        if len(leg_path) < 2:
            logger.debug(f"leg {li} path is degenerate ({len(leg_path)} points)")

        legs.append(
            NormalizedLeg(
                index=li,
                start_address=leg.start_address,
                end_address=leg.end_address,
                distance_meters=leg.distance.value,
                duration_seconds=leg.duration.value,
                distance_text=leg.distance.text,
                duration_text=leg.duration.text,
                ok=problem is None,
            )
        )

    if not path:
        path = list(overview_path)

    return NormalizedRoute(
        total_distance_meters=total_distance,
        total_duration_seconds=total_duration,
        distance_text=format_distance(total_distance),
        duration_text=format_duration(total_duration),
        start_address=route.legs[0].start_address,
        end_address=route.legs[-1].end_address,
        summary=route.summary,
        path=path,
        overview_path=overview_path,
        instructions=instructions,
        legs=legs,
        steps=steps,
        flagged_legs=flagged,
        warnings=list(route.warnings),
    )


def _element_cell(element: Element) -> Tuple[NormalizedMatrixCell, Optional[Tuple[str, str]]]:
    distance_m, distance_text = _pair(element.distance)
    duration_s, duration_text = _pair(element.duration)
    if not element.is_ok:
        return NormalizedMatrixCell(status=element.status), (
            element.status,
            f"element status {element.status}",
        )
    if not (element.distance and element.distance.is_complete and element.duration and element.duration.is_complete):
        return NormalizedMatrixCell(status="INCOMPLETE"), (
            "INCOMPLETE",
            "distance/duration lacks text/value pair",
        )
    return (
        NormalizedMatrixCell(
            status=element.status,
            distance_meters=distance_m,
            duration_seconds=duration_s,
            distance_text=distance_text,
            duration_text=duration_text,
        ),
        None,
    )


def normalize_distance_matrix(
    result: DistanceMatrixResult,
    origin_count: Optional[int] = None,
    destination_count: Optional[int] = None,
) -> NormalizedMatrix:
    """
    Index a decoded Distance Matrix by (origin, destination).

    Every position gets a cell; failed elements keep their status with empty
    distance/duration and add an ElementStatusError entry. When the request's
    origin/destination counts are known the response shape is checked against them.
    """
    if not result.rows:
        raise EmptyRouteError("distance matrix response contains no rows", ResponseKind.DISTANCE_MATRIX.value)
    if origin_count is not None and len(result.rows) != origin_count:
        raise MatrixShapeError(
            f"expected {origin_count} rows, got {len(result.rows)}", "rows"
        )

    width = destination_count if destination_count is not None else len(result.rows[0].elements)
    cells: Dict[Tuple[int, int], NormalizedMatrixCell] = {}
    errors: List[ElementStatusError] = []

    for oi, row in enumerate(result.rows):
        if len(row.elements) != width:
            raise MatrixShapeError(
                f"expected {width} elements, got {len(row.elements)}", f"rows[{oi}].elements"
            )
        for di, element in enumerate(row.elements):
            cell, problem = _element_cell(element)
            cells[(oi, di)] = cell
            if problem is not None:
                status, reason = problem
                errors.append(
                    ElementStatusError(
                        origin_index=oi, destination_index=di, status=status, reason=reason
                    )
                )

    if errors:
        logger.info(f"distance matrix: {len(errors)} of {len(cells)} cells unavailable")

    return NormalizedMatrix(
        origin_count=len(result.rows),
        destination_count=width,
        cells=cells,
        errors=errors,
        origin_addresses=list(result.origin_addresses),
        destination_addresses=list(result.destination_addresses),
    )
