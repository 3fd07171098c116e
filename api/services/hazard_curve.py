# services/hazard_curve.py
# Turns a caller's query into one or more interpolated hazard curves

import asyncio
import logging
from functools import partial
from typing import List, Optional

from config import DEFAULT_REGION
from errors import DataIntegrityError, ValidationError
from models import HazardCurveQuery, InterpolatedCurve
from services.assembler import assemble
from services.curve_store import HazardCurveStore
from services.grid_cell import resolve
from services.spatial import interpolate_cell

logger = logging.getLogger(__name__)


class HazardCurveService:
    """
    Glue between the curve store and the interpolation engine.

    A request may leave out the region (defaults to DEFAULT_REGION) and the
    spectral period (expands to every period the dataset family has). Each
    expanded query is computed independently.
    """

    def __init__(self, store: HazardCurveStore, default_region: str = DEFAULT_REGION):
        self.store = store
        self.default_region = default_region

    def expand_query(self, latitude: Optional[float], longitude: Optional[float],
                     edition: Optional[str], region: Optional[str],
                     spectral_period: Optional[str], vs30: Optional[str]) -> List[HazardCurveQuery]:
        required = {
            "latitude": latitude,
            "longitude": longitude,
            "edition": edition,
            "vs30": vs30,
        }
        missing = [name for name, value in required.items() if value is None or value == ""]
        if missing:
            raise ValidationError(f"Missing required parameter(s): {', '.join(missing)}")

        region = region or self.default_region
        datasets = self.store.find_datasets(edition, region, vs30, spectral_period or None)

        return [
            HazardCurveQuery(
                edition=edition,
                region=region,
                spectral_period=d.spectral_period,
                vs30=vs30,
                latitude=latitude,
                longitude=longitude,
            )
            for d in datasets
        ]

    async def get_curve(self, query: HazardCurveQuery) -> InterpolatedCurve:
        region = self.store.get_region(query.region)
        dataset = self.store.find_datasets(
            query.edition, query.region, query.vs30, query.spectral_period)[0]

        fetch = partial(self.store.fetch_grid_points, dataset.id)
        cell = await asyncio.to_thread(resolve, region, query.latitude, query.longitude, fetch)
        afe = interpolate_cell(query.latitude, query.longitude, cell)

        if len(afe) != len(dataset.iml):
            raise DataIntegrityError(
                f"Dataset {dataset.id} has {len(dataset.iml)} IML values but curves of length {len(afe)}")

        logger.debug("Interpolated %s curve at (%s, %s)",
                     type(cell).__name__, query.latitude, query.longitude)
        return assemble(dataset.iml, afe, query)

    async def get_curves(self, latitude: Optional[float] = None, longitude: Optional[float] = None,
                         edition: Optional[str] = None, region: Optional[str] = None,
                         spectral_period: Optional[str] = None,
                         vs30: Optional[str] = None) -> List[InterpolatedCurve]:
        """Expand the query and compute every curve; results keep expansion order."""
        queries = self.expand_query(latitude, longitude, edition, region, spectral_period, vs30)
        curves = await asyncio.gather(*(self.get_curve(q) for q in queries))
        return list(curves)
