import pandas as pd
import pytest

from errors import NotFoundError
from services.curve_store import HazardCurveStore
from services.grid_cell import SearchBox


def test_store_loads_tables(store):
    assert store.summary() == {"regions": 2, "datasets": 5, "curves": 9 * 3 + 3 + 4}
    assert store.get_region("TEST1P00").grid_spacing == 1.0
    assert store.datasets[1].iml == [0.1, 0.2, 0.3]


def test_unknown_region(store):
    with pytest.raises(NotFoundError):
        store.get_region("NOPE")


def test_find_datasets_all_periods(store):
    found = store.find_datasets("E2014", "TEST1P00", "760")
    assert [d.spectral_period for d in found] == ["PGA", "SA1P0"]


def test_find_datasets_one_period(store):
    found = store.find_datasets("E2014", "TEST1P00", "760", "SA1P0")
    assert [d.id for d in found] == [2]


def test_find_datasets_not_found(store):
    with pytest.raises(NotFoundError):
        store.find_datasets("E2014", "TEST1P00", "180")


def test_fetch_grid_points_includes_box_edges(store):
    points = store.fetch_grid_points(1, SearchBox(0.0, 1.0, 0.0, 1.0))
    assert sorted((p.latitude, p.longitude) for p in points) == [
        (0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)]


def test_fetch_grid_points_keeps_datasets_apart(store):
    points = store.fetch_grid_points(5, SearchBox(-1.0, 3.0, -1.0, 3.0))
    assert len(points) == 3


def test_fetch_grid_points_empty_box(store):
    assert store.fetch_grid_points(1, SearchBox(10.0, 11.0, 10.0, 11.0)) == []


def test_fetch_grid_points_unknown_dataset(store):
    with pytest.raises(NotFoundError):
        store.fetch_grid_points(99, SearchBox(0.0, 1.0, 0.0, 1.0))


def test_rows_without_afe_or_dataset_are_skipped(frames):
    regions, datasets, curves = frames
    extra = pd.DataFrame([
        {"dataset_id": 1, "latitude": 5.0, "longitude": 5.0, "afe": None},
        {"dataset_id": 42, "latitude": 0.0, "longitude": 0.0, "afe": [1.0, 1.0, 1.0]},
    ])
    store = HazardCurveStore(regions, datasets, pd.concat([curves, extra], ignore_index=True))
    assert store.curve_count == len(curves)


def test_from_parquet(frames, tmp_path):
    regions, datasets, curves = frames
    regions.to_parquet(tmp_path / "regions.parquet")
    datasets.to_parquet(tmp_path / "datasets.parquet")
    curves.to_parquet(tmp_path / "curves.parquet")

    store = HazardCurveStore.from_parquet(str(tmp_path))
    assert store.summary()["curves"] == len(curves)
    assert store.datasets[3].iml == [0.1, 0.2, 0.3]
    [p] = store.fetch_grid_points(1, SearchBox(2.0, 2.0, 2.0, 2.0))
    assert p.afe == pytest.approx([7.0, 0.7, 0.07])
