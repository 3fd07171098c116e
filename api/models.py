# models.py
# Pydantic models for the grid data and request/response validation

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from shapely.geometry import Point, box


# --- Grid Data Models ---

class GridPoint(BaseModel):
    """One precomputed hazard curve on the grid."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    afe: List[float]  # index-aligned with the dataset's IML axis


class Region(BaseModel):
    """Bounding box and grid step of a hazard model region."""
    model_config = ConfigDict(frozen=True)

    value: str
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float
    grid_spacing: float = Field(..., gt=0)

    def covers(self, latitude: float, longitude: float) -> bool:
        """True if the point is inside the region, edges included."""
        bounds = box(self.min_longitude, self.min_latitude,
                     self.max_longitude, self.max_latitude)
        return bounds.covers(Point(longitude, latitude))


class Dataset(BaseModel):
    """One curve family: edition + region + vs30 + spectral period."""
    model_config = ConfigDict(frozen=True)

    id: int
    edition: str
    region: str
    vs30: str
    spectral_period: str
    iml: List[float]


# --- Hazard Curve Models ---

class HazardCurveQuery(BaseModel):
    """A fully resolved query. Echoed back as curve metadata."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    edition: str
    region: str
    spectral_period: str = Field(..., alias="spectralPeriod")
    vs30: str
    latitude: float
    longitude: float


class CurvePoint(BaseModel):
    x: float
    y: float


class InterpolatedCurve(BaseModel):
    """Hazard curve estimated at the query point."""
    metadata: HazardCurveQuery
    date: datetime
    data: List[CurvePoint]


class ResponseMetadata(BaseModel):
    date: str
    status: str  # 'success' or 'error'
    url: str


class HazardCurveResponse(BaseModel):
    metadata: ResponseMetadata
    data: List[InterpolatedCurve]


# --- System Models ---

class ServiceStatus(BaseModel):
    """Service health/status response."""
    status: str
    store_ready: bool
    regions_loaded: int
    datasets_loaded: int
    curves_loaded: int
    default_region: Optional[str] = None
