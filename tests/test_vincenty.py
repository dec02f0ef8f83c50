import logging
import math
import threading

from geographiclib.geodesic import Geodesic
import numpy as np
import pytest
from pytest import approx

from geovincenty import (
    Coordinate, DirectResult, Ellipsoid, GeoPoint, GRS80, InverseResult,
    VincentyCalculator, WGS84
)

from tests.functions import assert_coordinates_equal


FLINDERS_PEAK = Coordinate(144.42486789, -37.95103342)
BUNINYONG = Coordinate(143.92649551, -37.65282114)
LONDON = Coordinate(-0.12, 51.5)
NEW_YORK = Coordinate(-74.0, 40.7)


@pytest.fixture
def calc():
    return VincentyCalculator()


def test_init(calc):
    assert calc.ellipsoid is WGS84
    assert calc.max_iterations is None
    assert calc.point_factory == Coordinate.from_lat_lon

    calc = VincentyCalculator(GRS80, 10)
    assert calc.ellipsoid is GRS80
    assert calc.max_iterations == 10

    assert repr(calc) == f'<VincentyCalculator on {GRS80!r}, max_iterations=10>'


def test_init_invalid_configuration():
    with pytest.raises(ValueError):
        VincentyCalculator(max_iterations=0)

    with pytest.raises(ValueError):
        VincentyCalculator(max_iterations=-5)

    with pytest.raises(ValueError):
        VincentyCalculator(ellipsoid='WGS84')

    with pytest.raises(ValueError):
        VincentyCalculator(point_factory='not callable')


def test_reference_vector(calc):
    # Vincenty (1975) test line, Flinders Peak to Buninyong
    assert calc.distance(FLINDERS_PEAK, BUNINYONG) == approx(54_972.271, abs=2e-3)
    assert calc.initial_bearing(FLINDERS_PEAK, BUNINYONG) == approx(306.86816, abs=1e-5)
    assert calc.final_bearing(FLINDERS_PEAK, BUNINYONG) == approx(307.17363, abs=1e-5)

    # The reverse azimuth is the final bearing turned about
    assert calc.initial_bearing(BUNINYONG, FLINDERS_PEAK) == approx(127.17363, abs=1e-5)

    # Published coordinates, in DMS
    start = Coordinate.from_dms((144, 25, 29.52440, 'E'), (37, 57, 3.72030, 'S'))
    end = Coordinate.from_dms((143, 55, 35.38390, 'E'), (37, 39, 10.15610, 'S'))
    assert calc.distance(start, end) == approx(54_972.271, abs=1e-3)


def test_inverse(calc):
    result = calc.inverse(FLINDERS_PEAK, BUNINYONG)
    assert isinstance(result, InverseResult)
    assert result.distance == approx(54_972.272614, abs=1e-6)
    assert result.initial_bearing == approx(306.86815836, abs=1e-8)
    assert result.final_bearing == approx(307.17362980, abs=1e-8)
    assert result.iterations == 4
    assert result.converged


def test_inverse_radians(calc):
    result = calc.inverse_radians(
        math.radians(-37.95103342), math.radians(144.42486789),
        math.radians(-37.65282114), math.radians(143.92649551),
    )
    assert result == calc.inverse(FLINDERS_PEAK, BUNINYONG)


def test_distance(calc):
    # Checked against geographiclib results
    expected = 156.903469
    actual = calc.distance(Coordinate(0.0, 0.0), Coordinate(0.001, 0.001))
    assert actual == approx(expected, abs=1e-6)

    expected = 156_899.568291
    actual = calc.distance(Coordinate(0.0, 0.0), Coordinate(1.0, 1.0))
    assert actual == approx(expected, abs=1e-6)

    # Antimeridian test
    expected = 222_638.981586
    actual = calc.distance(Coordinate(179., 0.), Coordinate(-179., 0.))
    assert actual == approx(expected, abs=1e-6)

    expected = 5_586_501.473074
    actual = calc.distance(LONDON, NEW_YORK)
    assert actual == approx(expected, abs=1e-6)


def test_equatorial_line(calc):
    # Follow equator exactly - cos^2(alpha) is zero
    c1, c2 = Coordinate(0.0, 0.0), Coordinate(1.0, 0.0)
    result = calc.inverse(c1, c2)
    assert result.distance == approx(111_319.490793, abs=1e-6)
    assert result.initial_bearing == approx(90.)
    assert result.final_bearing == approx(90.)
    assert result.converged

    # Westward
    result = calc.inverse(c2, c1)
    assert result.distance == approx(111_319.490793, abs=1e-6)
    assert result.initial_bearing == approx(270.)

    # On the equator, distance is simply the equatorial arc length
    unit = VincentyCalculator(Ellipsoid.from_axes(1.0, 0.99))
    assert unit.distance(Coordinate(0., 0.), Coordinate(90., 0.)) == approx(math.pi / 2, rel=1e-9)


def test_identity(calc):
    for point in (FLINDERS_PEAK, Coordinate(0., 0.), Coordinate(-180., 45.), LONDON):
        result = calc.inverse(point, point)
        assert (result.distance, result.initial_bearing, result.final_bearing) == (0, 0, 0)
        assert result.converged

        assert calc.distance(point, point) == 0
        assert calc.initial_bearing(point, point) == 0
        assert calc.final_bearing(point, point) == 0


def test_symmetry(calc):
    pairs = [
        (FLINDERS_PEAK, BUNINYONG),
        (LONDON, NEW_YORK),
        (Coordinate(179., 0.), Coordinate(-179., 0.)),
        (Coordinate(10., 80.), Coordinate(100., 70.)),
        (Coordinate(0., -60.), Coordinate(120., 45.)),
    ]
    for start, end in pairs:
        assert calc.distance(start, end) == approx(calc.distance(end, start), rel=1e-6)

        forward = calc.inverse(start, end)
        reverse = calc.inverse(end, start)
        assert (forward.final_bearing + 180) % 360 == approx(reverse.initial_bearing, abs=1e-6)


def test_bearings(calc):
    # Due north and due south
    assert calc.initial_bearing(Coordinate(0., 0.), Coordinate(0., 1.)) == 0.
    assert calc.initial_bearing(Coordinate(0., 1.), Coordinate(0., 0.)) == approx(180.)

    expected = 45.19242213
    actual = calc.initial_bearing(Coordinate(0.0, 0.0), Coordinate(0.001, 0.001))
    assert actual == approx(expected, abs=1e-8)

    result = calc.inverse(LONDON, NEW_YORK)
    assert result.initial_bearing == approx(288.36300670, abs=1e-8)
    assert result.final_bearing == approx(231.24160213, abs=1e-8)

    # Always normalized to [0, 360)
    for end in (Coordinate(-1., -1.), Coordinate(1., -1.), Coordinate(-1., 1.), Coordinate(-1., 0.)):
        result = calc.inverse(Coordinate(0., 0.), end)
        assert 0 <= result.initial_bearing < 360
        assert 0 <= result.final_bearing < 360


def test_against_geographiclib(calc):
    geod = Geodesic(WGS84.equatorial_radius, WGS84.flattening)
    pairs = [
        (FLINDERS_PEAK, BUNINYONG),
        (LONDON, NEW_YORK),
        (Coordinate(0., -60.), Coordinate(120., 45.)),
        (Coordinate(-45., 10.), Coordinate(-44., -10.)),
    ]
    for start, end in pairs:
        expected = geod.Inverse(start.latitude, start.longitude, end.latitude, end.longitude)
        result = calc.inverse(start, end)
        assert result.distance == approx(expected['s12'], abs=1e-3)
        assert result.initial_bearing == approx(expected['azi1'] % 360, abs=1e-5)
        assert result.final_bearing == approx(expected['azi2'] % 360, abs=1e-5)


def test_iteration_cap(calc):
    capped = VincentyCalculator(max_iterations=1)

    # Inverse
    result = capped.inverse(FLINDERS_PEAK, BUNINYONG)
    assert result.iterations == 1
    assert not result.converged
    assert result.distance == approx(54_898.811279, abs=1e-6)
    assert capped.distance(FLINDERS_PEAK, BUNINYONG) != calc.distance(FLINDERS_PEAK, BUNINYONG)
    assert capped.distance(LONDON, NEW_YORK) != calc.distance(LONDON, NEW_YORK)

    # Direct
    result = capped.direct(FLINDERS_PEAK, 306.86816, 54_972.271)
    assert result.iterations == 1
    assert not result.converged
    assert result.destination != calc.destination(FLINDERS_PEAK, 306.86816, 54_972.271)
    assert_coordinates_equal(
        result.destination,
        Coordinate(143.9263723004, -37.6527469936),
        abs_tol=1e-8
    )

    # A generous cap doesn't change a converging solution
    generous = VincentyCalculator(max_iterations=100)
    assert generous.inverse(FLINDERS_PEAK, BUNINYONG) == calc.inverse(FLINDERS_PEAK, BUNINYONG)


def test_nearly_antipodal():
    # Fails to converge; the cap bounds the loop and the best estimate is returned
    capped = VincentyCalculator(max_iterations=5)
    result = capped.inverse(Coordinate(0., 0.), Coordinate(179.7, 0.5))
    assert result.iterations == 5
    assert not result.converged
    assert result.distance == approx(19_928_108., rel=1e-3)


def test_non_convergence_warning(caplog):
    capped = VincentyCalculator(max_iterations=3)
    capped.inverse(Coordinate(0., 0.), Coordinate(179.7, 0.5))
    assert 'inverse solution did not converge within 3 iterations' in caplog.text

    # Warns only once
    capped.inverse(Coordinate(0., 0.), Coordinate(179.7, 0.5))
    assert caplog.text.count('did not converge within 3 iterations') == 1


def test_debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger='geovincenty')
    VincentyCalculator().inverse(FLINDERS_PEAK, BUNINYONG)
    assert 'Inverse solution finished after 4 iterations' in caplog.text

    VincentyCalculator().direct(FLINDERS_PEAK, 306.86816, 54_972.271)
    assert 'Direct solution finished after 3 iterations' in caplog.text


def test_direct(calc):
    result = calc.direct(FLINDERS_PEAK, 306.86816, 54_972.271)
    assert isinstance(result, DirectResult)
    assert isinstance(result.destination, Coordinate)
    assert_coordinates_equal(result.destination, Coordinate(143.92649554, -37.65282114), abs_tol=1e-8)
    assert result.final_bearing == approx(307.17363142, abs=1e-8)
    assert result.iterations == 3
    assert result.converged


def test_direct_radians(calc):
    result = calc.direct_radians(
        math.radians(-37.95103342), math.radians(144.42486789),
        math.radians(306.86816), 54_972.271
    )
    lat, lon = result.destination
    assert lat == approx(-37.65282114, abs=1e-8)
    assert lon == approx(143.92649554, abs=1e-8)


def test_destination(calc):
    expected = Coordinate(0.705113, 0.709811)
    actual = calc.destination(Coordinate(0.0, 0.0), 45., 111_000)
    assert_coordinates_equal(expected, actual, abs_tol=1e-6)

    expected = Coordinate(-73.80774298, 40.75512155)
    actual = calc.destination(LONDON, 288.3, 5_570_000)
    assert_coordinates_equal(expected, actual, abs_tol=1e-8)

    # Along the equator
    expected = Coordinate(1., 0.)
    actual = calc.destination(Coordinate(0., 0.), 90., 111_319.490793)
    assert_coordinates_equal(expected, actual)

    # Zero distance stays put
    c1 = Coordinate(20., 10.)
    assert_coordinates_equal(calc.destination(c1, 33., 0.), c1, abs_tol=1e-12)


def test_destination_antimeridian(calc):
    # Longitude is wrapped back into [-180, 180)
    result = calc.direct(Coordinate(179.9, 0.), 90., 50_000)
    assert_coordinates_equal(result.destination, Coordinate(-179.65084236, 0.), abs_tol=1e-8)
    assert result.final_bearing == approx(90.)


def test_destination_against_geographiclib(calc):
    geod = Geodesic(WGS84.equatorial_radius, WGS84.flattening)
    for bearing in (0., 30., 135., 200., 315.):
        expected = geod.Direct(LONDON.latitude, LONDON.longitude, bearing, 750_000)
        result = calc.direct(LONDON, bearing, 750_000)
        assert_coordinates_equal(
            result.destination,
            Coordinate(expected['lon2'], expected['lat2']),
            abs_tol=1e-7
        )
        assert result.final_bearing == approx(expected['azi2'] % 360, abs=1e-5)


def test_round_trip(calc):
    for start in (FLINDERS_PEAK, LONDON, Coordinate(0., 0.)):
        for bearing in range(0, 360, 45):
            for distance in (1., 1_000., 100_000., 2_000_000.):
                destination = calc.destination(start, bearing, distance)
                assert calc.distance(start, destination) == approx(distance, abs=1e-4)


def test_point_aggregates(calc):
    start = GeoPoint(FLINDERS_PEAK, properties={'name': 'Flinders Peak'})
    end = GeoPoint(BUNINYONG, properties={'name': 'Buninyong'})

    assert calc.distance(start, end) == calc.distance(FLINDERS_PEAK, BUNINYONG)
    assert calc.initial_bearing(start, BUNINYONG) == calc.initial_bearing(FLINDERS_PEAK, BUNINYONG)
    assert calc.final_bearing(FLINDERS_PEAK, end) == calc.final_bearing(FLINDERS_PEAK, BUNINYONG)
    assert calc.destination(start, 45., 1000.) == calc.destination(FLINDERS_PEAK, 45., 1000.)


def test_point_factory():
    def factory(latitude, longitude):
        return GeoPoint(Coordinate(longitude, latitude), properties={'derived': True})

    calc = VincentyCalculator(point_factory=factory)
    destination = calc.destination(FLINDERS_PEAK, 306.86816, 54_972.271)
    assert isinstance(destination, GeoPoint)
    assert destination.properties == {'derived': True}
    assert_coordinates_equal(destination.coordinate, Coordinate(143.92649554, -37.65282114), abs_tol=1e-8)

    calc = VincentyCalculator(point_factory=lambda lat, lon: (lat, lon))
    lat, lon = calc.destination(Coordinate(0., 0.), 90., 111_319.490793)
    assert lat == approx(0.)
    assert lon == approx(1.)


def test_other_ellipsoids():
    grs80 = VincentyCalculator(GRS80)
    expected = Geodesic(GRS80.equatorial_radius, GRS80.flattening).Inverse(
        LONDON.latitude, LONDON.longitude, NEW_YORK.latitude, NEW_YORK.longitude
    )['s12']
    assert grs80.distance(LONDON, NEW_YORK) == approx(expected, abs=1e-3)

    # Distances are in the unit of the radii
    km = VincentyCalculator(
        Ellipsoid(
            WGS84.equatorial_radius / 1000,
            WGS84.polar_radius / 1000,
            WGS84.flattening
        )
    )
    assert km.distance(LONDON, NEW_YORK) == approx(5_586.501473, abs=1e-6)


def test_path_distance(calc):
    path = [FLINDERS_PEAK, BUNINYONG, GeoPoint(LONDON)]
    expected = calc.distance(FLINDERS_PEAK, BUNINYONG) + calc.distance(BUNINYONG, LONDON)
    assert calc.path_distance(path) == approx(expected, abs=1e-9)

    assert calc.path_distance([FLINDERS_PEAK]) == 0
    assert calc.path_distance([]) == 0


def test_distance_matrix(calc):
    points = [FLINDERS_PEAK, BUNINYONG, GeoPoint(LONDON)]
    matrix = calc.distance_matrix(points)

    assert isinstance(matrix, np.ndarray)
    assert matrix.shape == (3, 3)
    assert np.all(np.diag(matrix) == 0)
    assert np.array_equal(matrix, matrix.T)
    assert matrix[0, 1] == calc.distance(FLINDERS_PEAK, BUNINYONG)
    assert matrix[1, 2] == calc.distance(BUNINYONG, LONDON)

    assert calc.distance_matrix([]).shape == (0, 0)


def test_thread_safety(calc):
    expected = calc.inverse(LONDON, NEW_YORK)
    results = []

    def worker():
        for _ in range(50):
            results.append(calc.inverse(LONDON, NEW_YORK))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 200
    assert all(x == expected for x in results)
