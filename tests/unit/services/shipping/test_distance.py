# tests/unit/services/shipping/test_distance.py
import pytest

from app.schemas.shipping import GeoCoordinate
from app.services.shipping.distance import haversine, distance_between

LONDON = (51.5074, -0.1278)
PARIS = (48.8566, 2.3522)
SYDNEY = (-33.8688, 151.2093)


def test_distance_to_same_point_is_zero():
    assert haversine(*LONDON, *LONDON) == 0


def test_distance_is_symmetric():
    assert haversine(*LONDON, *SYDNEY) == pytest.approx(haversine(*SYDNEY, *LONDON))


def test_known_city_distance():
    # London to Paris is roughly 344 km as the crow flies
    assert haversine(*LONDON, *PARIS) == pytest.approx(344, abs=2)


def test_antipodal_points_are_half_the_circumference():
    assert haversine(0, 0, 0, 180) == pytest.approx(3.141592653589793 * 6371.0)


def test_distance_between_geo_coordinates():
    london = GeoCoordinate(latitude=LONDON[0], longitude=LONDON[1])
    paris = GeoCoordinate(latitude=PARIS[0], longitude=PARIS[1])

    assert distance_between(london, paris) == pytest.approx(haversine(*LONDON, *PARIS))
    assert distance_between(paris, london) == pytest.approx(distance_between(london, paris))
