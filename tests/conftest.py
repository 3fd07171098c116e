import pandas as pd
import pytest
from fastapi.testclient import TestClient

from models import GridPoint
from services.curve_store import HazardCurveStore
from services.hazard_curve import HazardCurveService


IML = [0.1, 0.2, 0.3]


def afe_at(lat, lon, scale=1.0):
    """Affine in lat and lon, so bilinear interpolation reproduces it."""
    base = 1.0 + lat + 2.0 * lon
    return [scale * base, scale * base / 10, scale * base / 100]


def point(lat, lon, afe):
    return GridPoint(latitude=lat, longitude=lon, afe=afe)


@pytest.fixture
def frames():
    regions = pd.DataFrame([
        {"value": "TEST1P00", "min_latitude": 0.0, "max_latitude": 2.0,
         "min_longitude": 0.0, "max_longitude": 2.0, "grid_spacing": 1.0},
        {"value": "COUS0P05", "min_latitude": 34.0, "max_latitude": 36.0,
         "min_longitude": -119.0, "max_longitude": -117.0, "grid_spacing": 0.05},
    ])
    datasets = pd.DataFrame([
        {"id": 1, "edition": "E2014", "region": "TEST1P00", "vs30": "760",
         "spectral_period": "PGA", "iml": IML},
        {"id": 2, "edition": "E2014", "region": "TEST1P00", "vs30": "760",
         "spectral_period": "SA1P0", "iml": IML},
        {"id": 3, "edition": "E2014", "region": "COUS0P05", "vs30": "760",
         "spectral_period": "PGA", "iml": IML},
        # curves shorter than the IML axis
        {"id": 4, "edition": "E2008", "region": "TEST1P00", "vs30": "760",
         "spectral_period": "PGA", "iml": IML},
        # one corner missing
        {"id": 5, "edition": "E2008", "region": "TEST1P00", "vs30": "1150",
         "spectral_period": "PGA", "iml": IML},
    ])

    rows = []
    for lat in (0.0, 1.0, 2.0):
        for lon in (0.0, 1.0, 2.0):
            rows.append({"dataset_id": 1, "latitude": lat, "longitude": lon,
                         "afe": afe_at(lat, lon)})
            rows.append({"dataset_id": 2, "latitude": lat, "longitude": lon,
                         "afe": afe_at(lat, lon, scale=2.0)})
            rows.append({"dataset_id": 4, "latitude": lat, "longitude": lon,
                         "afe": afe_at(lat, lon)[:2]})
    for lat, lon in ((0.0, 0.0), (0.0, 1.0), (1.0, 0.0)):
        rows.append({"dataset_id": 5, "latitude": lat, "longitude": lon,
                     "afe": afe_at(lat, lon)})
    for lat in (35.0, 35.05):
        for lon in (-118.0, -117.95):
            rows.append({"dataset_id": 3, "latitude": lat, "longitude": lon,
                         "afe": [1e-2, 1e-3, 1e-4]})
    curves = pd.DataFrame(rows)
    return regions, datasets, curves


@pytest.fixture
def store(frames):
    return HazardCurveStore(*frames)


@pytest.fixture
def service(store):
    return HazardCurveService(store)


@pytest.fixture
def client(service):
    from main import app
    from routes import hazard_curve

    hazard_curve.set_dependencies(service)
    yield TestClient(app)
    hazard_curve.set_dependencies(None)
