import pytest

from response_core.geo.coordinates import Coordinate
from response_core.zone_catalog.catalog import ZoneCatalog, load_zone_catalog, zone_from_dict


def test_default_catalog_is_stable_and_ordered():
    catalog = ZoneCatalog.default()
    assert len(catalog) == 22
    assert catalog.names()[0] == "Agusan Canyon"
    assert catalog.names()[-1] == "Ticala"
    assert catalog.names() == ZoneCatalog.default().names()
    assert catalog.get("San Miguel").centroid == Coordinate(8.3923, 124.8878)
    assert catalog.get("Nowhere") is None


def test_zone_from_dict_accepts_ring_or_polygons():
    ring = [(1.0, 1.0), (1.0, 2.0), (2.0, 2.0)]
    single = zone_from_dict({"name": "A", "ring": ring, "centroid": (1.5, 1.5)})
    multi = zone_from_dict({"name": "B", "polygons": [ring, ring], "centroid": [1.5, 1.5]})
    assert len(single.polygons) == 1
    assert len(multi.polygons) == 2
    assert multi.to_dict()["polygons"][1][2] == [2.0, 2.0]


def test_degenerate_polygon_and_duplicate_names_rejected():
    with pytest.raises(ValueError):
        zone_from_dict({"name": "A", "ring": [(1, 1), (2, 2)], "centroid": (1, 1)})
    zone = {"name": "A", "ring": [(1, 1), (1, 2), (2, 2)], "centroid": (1.5, 1.5)}
    with pytest.raises(ValueError):
        ZoneCatalog.from_dicts([zone, zone])


def test_bounding_box_padding():
    catalog = ZoneCatalog.from_dicts([
        {"name": "A", "ring": [(10.0, 120.0), (10.0, 120.1), (10.1, 120.1), (10.1, 120.0)], "centroid": (10.05, 120.05)},
    ])
    tight = catalog.bounding_box()
    padded = catalog.bounding_box(padding_km=5)
    assert tight.contains(Coordinate(10.05, 120.05))
    assert not tight.contains(Coordinate(10.12, 120.05))
    assert padded.contains(Coordinate(10.12, 120.05))
    assert not padded.contains(Coordinate(10.2, 120.05))


@pytest.mark.asyncio
async def test_load_seeds_empty_store_then_reads_back(store):
    seeded = await load_zone_catalog(store)
    assert len(seeded) == 22

    records = await store.list_zones()
    assert [r.name for r in records] == seeded.names()

    reloaded = await load_zone_catalog(store)
    assert reloaded.names() == seeded.names()
    assert reloaded.get("Damilag") == seeded.get("Damilag")
    assert len(await store.list_zones()) == 22
