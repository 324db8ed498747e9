import pytest

from response_core.classifier.service import UNCLASSIFIED, GeolocationClassifier, point_in_polygon
from response_core.errors import InvalidCoordinate
from response_core.geo.coordinates import Coordinate
from response_core.zone_catalog.catalog import BoundingBox, ZoneCatalog


def _square(name, lat, lng, half=0.005):
    return {
        "name": name,
        "ring": [(lat - half, lng - half), (lat - half, lng + half), (lat + half, lng + half), (lat + half, lng - half)],
        "centroid": (lat, lng),
    }


@pytest.fixture
def classifier():
    return GeolocationClassifier(ZoneCatalog.default(), fallback_max_km=5.0)


@pytest.fixture
def two_squares():
    # About 22 km apart, far enough that the midpoint is beyond the fallback radius of both
    return GeolocationClassifier(ZoneCatalog.from_dicts([
        _square("West", 10.0, 120.0),
        _square("East", 10.0, 120.2),
    ]))


def test_point_inside_san_miguel(classifier):
    assert classifier.classify((8.38, 124.88)) == "San Miguel"
    detail = classifier.classify_detailed({"lat": 8.38, "lng": 124.88})
    assert detail.method == "polygon"
    assert detail.classified


def test_nearest_centroid_fallback(classifier):
    detail = classifier.classify_detailed((8.29, 124.76))
    assert detail.zone == "Mambatangan"
    assert detail.method == "nearest_centroid"
    assert detail.distance_km == pytest.approx(1.48, abs=0.05)


def test_far_point_is_unclassified(classifier):
    assert classifier.classify((8.0, 124.0)) == UNCLASSIFIED
    assert not classifier.classify_detailed((8.0, 124.0)).classified


@pytest.mark.parametrize("raw", [(0, 0), (91, 124.8), (-90.5, 124.8), (8.3, 180.5), (8.3, -181), "junk", None])
def test_invalid_coordinates_never_reach_geometry(raw, monkeypatch):
    calls = []
    monkeypatch.setattr(
        "response_core.classifier.service.point_in_polygon",
        lambda *args: calls.append(args) or False,
    )
    classifier = GeolocationClassifier(ZoneCatalog.default())
    with pytest.raises(InvalidCoordinate):
        classifier.classify(raw)
    assert calls == []


def test_every_point_strictly_inside_a_zone_classifies_to_it(two_squares):
    for lat, lng in [(10.0, 120.0), (9.996, 119.996), (10.004, 120.004), (10.0, 120.0049)]:
        assert two_squares.classify((lat, lng)) == "West"
    for lat, lng in [(10.0, 120.2), (10.003, 120.197)]:
        assert two_squares.classify((lat, lng)) == "East"


def test_fallback_threshold(two_squares):
    # ~2.9 km east of West's centroid, outside its square
    near = two_squares.classify_detailed((10.0, 120.027))
    assert near.zone == "West"
    assert near.method == "nearest_centroid"
    assert near.distance_km < 5

    # Midpoint: ~11 km from both centroids, still inside the padded bounding box
    far = two_squares.classify_detailed((10.0, 120.1))
    assert far.zone == UNCLASSIFIED
    assert far.distance_km > 5


def test_outside_bounds_short_circuits(monkeypatch):
    catalog = ZoneCatalog.from_dicts([_square("Only", 10.0, 120.0)])
    classifier = GeolocationClassifier(catalog, bounds=BoundingBox(9.9, 119.9, 10.1, 120.1))
    monkeypatch.setattr(
        "response_core.classifier.service.haversine_km",
        lambda *args: pytest.fail("distance computed for out-of-bounds point"),
    )
    assert classifier.classify((10.2, 120.0)) == UNCLASSIFIED


def test_overlapping_zones_resolve_to_later_catalog_entry():
    overlapping = ZoneCatalog.from_dicts([_square("First", 10.0, 120.0), _square("Second", 10.0, 120.004)])
    classifier = GeolocationClassifier(overlapping)
    assert classifier.classify((10.0, 120.002)) == "Second"
    assert classifier.classify((10.0, 119.998)) == "First"


def test_point_in_polygon_concave_ring():
    catalog = ZoneCatalog.from_dicts([{
        "name": "U",
        "ring": [(0, 1), (0, 4), (3, 4), (3, 3), (1, 3), (1, 2), (3, 2), (3, 1)],
        "centroid": (1, 2.5),
    }])
    polygon = catalog.get("U").polygons[0]
    assert point_in_polygon(Coordinate(0.5, 2.5), polygon)
    assert not point_in_polygon(Coordinate(2, 2.5), polygon)
    assert point_in_polygon(Coordinate(2, 3.5), polygon)
