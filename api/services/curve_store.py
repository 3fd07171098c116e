# services/curve_store.py
# In-memory store of precomputed hazard curves with R-tree spatial indexing

import logging
import os
import time
from typing import Dict, List, Optional

import pandas as pd
from rtree import index

from errors import NotFoundError
from models import Dataset, GridPoint, Region
from services.grid_cell import SearchBox

logger = logging.getLogger(__name__)


class HazardCurveStore:
    """
    Holds regions, datasets and their grid curves.

    Each dataset gets its own R-tree with every grid node stored as a
    degenerate box, so a search box query is O(log n) instead of a scan.
    The tables mirror the relational layout the curves are exported from:
    regions, datasets (one per edition/region/vs30/period, carrying the
    IML axis) and curves (one AFE list per grid node).
    """

    def __init__(self, regions: pd.DataFrame, datasets: pd.DataFrame, curves: pd.DataFrame):
        start = time.time()

        self.regions: Dict[str, Region] = {}
        for row in regions.itertuples(index=False):
            self.regions[row.value] = Region(
                value=row.value,
                min_latitude=row.min_latitude,
                max_latitude=row.max_latitude,
                min_longitude=row.min_longitude,
                max_longitude=row.max_longitude,
                grid_spacing=row.grid_spacing,
            )

        self.datasets: Dict[int, Dataset] = {}
        for row in datasets.itertuples(index=False):
            self.datasets[int(row.id)] = Dataset(
                id=int(row.id),
                edition=str(row.edition),
                region=str(row.region),
                vs30=str(row.vs30),
                spectral_period=str(row.spectral_period),
                iml=[float(x) for x in row.iml],
            )

        self.points: Dict[int, List[GridPoint]] = {d: [] for d in self.datasets}
        self.rtrees: Dict[int, index.Index] = {d: index.Index() for d in self.datasets}

        skipped = 0
        for row in curves.itertuples(index=False):
            dataset_id = int(row.dataset_id)
            if dataset_id not in self.datasets:
                skipped += 1
                continue

            # No curve at this node - nothing to interpolate from
            afe = row.afe
            if afe is None or (not hasattr(afe, "__len__") and pd.isna(afe)):
                skipped += 1
                continue

            point = GridPoint(
                latitude=float(row.latitude),
                longitude=float(row.longitude),
                afe=[float(y) for y in afe],
            )
            bucket = self.points[dataset_id]
            self.rtrees[dataset_id].insert(
                len(bucket), (point.longitude, point.latitude, point.longitude, point.latitude))
            bucket.append(point)

        if skipped:
            logger.warning("Skipped %d curve rows without a dataset or AFE values", skipped)
        logger.info("Indexed %d curves across %d datasets in %.2fs",
                    self.curve_count, len(self.datasets), time.time() - start)

    @classmethod
    def from_parquet(cls, data_dir: str) -> "HazardCurveStore":
        """Load regions.parquet, datasets.parquet and curves.parquet from a directory."""
        logger.info("Loading data from %s...", data_dir)
        start = time.time()
        regions = pd.read_parquet(os.path.join(data_dir, "regions.parquet"))
        datasets = pd.read_parquet(os.path.join(data_dir, "datasets.parquet"))
        curves = pd.read_parquet(os.path.join(data_dir, "curves.parquet"))
        logger.info("  Loaded %s curve rows in %.2fs", f"{len(curves):,}", time.time() - start)
        return cls(regions, datasets, curves)

    @property
    def curve_count(self) -> int:
        return sum(len(p) for p in self.points.values())

    def get_region(self, value: str) -> Region:
        region = self.regions.get(value)
        if region is None:
            raise NotFoundError(f"Unknown region: {value}")
        return region

    def find_datasets(self, edition: str, region: str, vs30: str,
                      spectral_period: Optional[str] = None) -> List[Dataset]:
        """
        Datasets matching the selector, ordered by id.

        Leaving out the spectral period matches every period available.
        """
        found = [
            d for _, d in sorted(self.datasets.items())
            if d.edition == edition and d.region == region and d.vs30 == vs30
            and (spectral_period is None or d.spectral_period == spectral_period)
        ]
        if not found:
            raise NotFoundError(
                f"No dataset for edition={edition}, region={region}, vs30={vs30}"
                + (f", spectralPeriod={spectral_period}" if spectral_period is not None else ""))
        return found

    def fetch_grid_points(self, dataset_id: int, bounds: SearchBox) -> List[GridPoint]:
        """All grid points of a dataset inside the box, edges included."""
        if dataset_id not in self.datasets:
            raise NotFoundError(f"Unknown dataset: {dataset_id}")

        hits = self.rtrees[dataset_id].intersection(
            (bounds.min_longitude, bounds.min_latitude, bounds.max_longitude, bounds.max_latitude))
        bucket = self.points[dataset_id]
        return [bucket[i] for i in sorted(hits)]

    def summary(self) -> dict:
        return {
            "regions": len(self.regions),
            "datasets": len(self.datasets),
            "curves": self.curve_count,
        }
