# services/grid_cell.py
# Finds the grid cell around a query point and classifies its shape

from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Sequence, Set, Union

from config import COORDINATE_TOLERANCE
from errors import DataIntegrityError, NotFoundError
from models import GridPoint, Region


class SearchBox(NamedTuple):
    """Inclusive lat/lon window handed to the grid-point fetch."""
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


@dataclass(frozen=True)
class ExactMatch:
    """The query point is a grid node."""
    point: GridPoint


@dataclass(frozen=True)
class EdgePair:
    """
    The query point sits on a grid line between two nodes.

    `axis` is the coordinate that varies between them: 'longitude' when
    both share a latitude, 'latitude' when both share a longitude.
    """
    first: GridPoint
    second: GridPoint
    axis: str


@dataclass(frozen=True)
class Quad:
    """
    The query point is inside a cell.

    Row 0 is (p0, p1) at the lower latitude, row 1 is (p2, p3).
    Within a row the lower longitude comes first.
    """
    p0: GridPoint
    p1: GridPoint
    p2: GridPoint
    p3: GridPoint


GridCell = Union[ExactMatch, EdgePair, Quad]

# Returns all grid points inside the box for the selected dataset
GridPointFetch = Callable[[SearchBox], Sequence[GridPoint]]


def search_box(region: Region, latitude: float, longitude: float) -> SearchBox:
    """One grid spacing around the point in every direction."""
    step = region.grid_spacing
    return SearchBox(
        min_latitude=latitude - step,
        max_latitude=latitude + step,
        min_longitude=longitude - step,
        max_longitude=longitude + step,
    )


def _sort_key(point: GridPoint):
    return (point.latitude, point.longitude)


def build_cell(points: Sequence[GridPoint]) -> GridCell:
    """
    Turn 1, 2 or 4 grid points into a cell.

    Points are sorted by latitude then longitude before the rows are
    assigned, so fetch order never matters.
    """
    ordered = sorted(points, key=_sort_key)

    if len(ordered) == 1:
        return ExactMatch(ordered[0])

    if len(ordered) == 2:
        a, b = ordered
        if a.latitude == b.latitude:
            return EdgePair(a, b, axis="longitude")
        if a.longitude == b.longitude:
            return EdgePair(a, b, axis="latitude")
        raise DataIntegrityError(
            f"Grid points ({a.latitude}, {a.longitude}) and ({b.latitude}, {b.longitude}) "
            "do not share a grid line")

    if len(ordered) == 4:
        p0, p1, p2, p3 = ordered
        rows_ok = p0.latitude == p1.latitude and p2.latitude == p3.latitude
        cols_ok = p0.longitude == p2.longitude and p1.longitude == p3.longitude
        if not (rows_ok and cols_ok):
            raise DataIntegrityError("Four grid points do not form a rectangular cell")
        return Quad(p0, p1, p2, p3)

    raise DataIntegrityError(f"Expected 1, 2 or 4 grid points, got {len(ordered)}")


def _bracket(target: float, values: Set[float], tolerance: float) -> Set[float]:
    """Grid coordinates to keep on one axis: the match, or one on each side."""
    on_line = [v for v in values if abs(v - target) <= tolerance]
    if on_line:
        return {min(on_line, key=lambda v: abs(v - target))}

    below = [v for v in values if v < target]
    above = [v for v in values if v > target]
    if not below or not above:
        raise NotFoundError("Point is outside model coverage")
    return {max(below), min(above)}


def select_cell(latitude: float, longitude: float, candidates: Sequence[GridPoint],
                tolerance: float = COORDINATE_TOLERANCE) -> GridCell:
    """
    Narrow the fetched candidates down to the enclosing cell.

    A box of one grid spacing can hold a 3x3 block of nodes when the point
    lies on a grid line; only the nodes bounding the point are kept.
    """
    if not candidates:
        raise NotFoundError("Curves not found")

    lats = _bracket(latitude, {p.latitude for p in candidates}, tolerance)
    lons = _bracket(longitude, {p.longitude for p in candidates}, tolerance)
    selected = [p for p in candidates if p.latitude in lats and p.longitude in lons]
    return build_cell(selected)


def resolve(region: Region, latitude: float, longitude: float,
            fetch: GridPointFetch) -> GridCell:
    """Fetch candidates around the point and return its grid cell."""
    if not region.covers(latitude, longitude):
        raise NotFoundError(
            f"Point ({latitude}, {longitude}) is outside region {region.value}")

    candidates: List[GridPoint] = list(fetch(search_box(region, latitude, longitude)))
    return select_cell(latitude, longitude, candidates)
