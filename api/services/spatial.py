# services/spatial.py
# Reduces a grid cell to one curve at the query point

from typing import List, Sequence

from errors import DataIntegrityError
from models import GridPoint
from services.grid_cell import EdgePair, ExactMatch, GridCell, Quad, build_cell
from services.interpolation import interpolate_curve


def interpolate_cell(latitude: float, longitude: float, cell: GridCell) -> List[float]:
    """
    Estimate the AFE curve at (latitude, longitude).

    - ExactMatch: the node's curve, untouched
    - EdgePair: linear along the axis the pair spans
    - Quad: bilinear, as two longitude passes then one latitude pass
    """
    if isinstance(cell, ExactMatch):
        return cell.point.afe

    if isinstance(cell, EdgePair):
        a, b = cell.first, cell.second
        if cell.axis == "longitude":
            return interpolate_curve(a.longitude, a.afe, b.longitude, b.afe, longitude)
        return interpolate_curve(a.latitude, a.afe, b.latitude, b.afe, latitude)

    if isinstance(cell, Quad):
        p0, p1, p2, p3 = cell.p0, cell.p1, cell.p2, cell.p3
        top = interpolate_curve(p0.longitude, p0.afe, p1.longitude, p1.afe, longitude)
        bottom = interpolate_curve(p2.longitude, p2.afe, p3.longitude, p3.afe, longitude)
        return interpolate_curve(p0.latitude, top, p2.latitude, bottom, latitude)

    raise DataIntegrityError(f"Unsupported grid cell: {type(cell).__name__}")


def spatially_interpolate(latitude: float, longitude: float,
                          points: Sequence[GridPoint]) -> List[float]:
    """Same as interpolate_cell, starting from the raw 1, 2 or 4 points."""
    return interpolate_cell(latitude, longitude, build_cell(points))
