# routes/hazard_curve.py
# Endpoint for hazard curve queries

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from config import MOUNT_PATH
from models import HazardCurveResponse, ResponseMetadata
from services.hazard_curve import HazardCurveService

router = APIRouter(prefix=MOUNT_PATH, tags=["Hazard Curve"])

# This gets set by main.py on startup
service: HazardCurveService = None


def set_dependencies(svc: HazardCurveService):
    """Called by main.py to inject dependencies."""
    global service
    service = svc


def response_metadata(request: Request, success: bool) -> ResponseMetadata:
    """Timestamp, status and request url attached to every response."""
    return ResponseMetadata(
        date=datetime.now(timezone.utc).isoformat(),
        status="success" if success else "error",
        url=str(request.url),
    )


@router.get("/curve.json", response_model=HazardCurveResponse)
async def hazard_curve(
    request: Request,
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    edition: Optional[str] = Query(None),
    region: Optional[str] = Query(None, description="Defaults to the Conterminous US region"),
    spectral_period: Optional[str] = Query(
        None, alias="spectralPeriod", description="Omit to get every available period"),
    vs30: Optional[str] = Query(None),
):
    """
    Get the hazard curve at a point.

    Curves are interpolated from the precomputed grid: a grid node returns
    its own curve, a point on a grid line is interpolated between two
    nodes, and anything else is bilinear over the four cell corners.
    """
    if service is None:
        raise HTTPException(503, "Service starting up, try again shortly")

    curves = await service.get_curves(
        latitude=latitude,
        longitude=longitude,
        edition=edition,
        region=region,
        spectral_period=spectral_period,
        vs30=vs30,
    )
    return HazardCurveResponse(metadata=response_metadata(request, True), data=curves)
