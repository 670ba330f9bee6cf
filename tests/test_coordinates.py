
from pytest import approx

from geodetics import Cartesian, Coordinate
from geodetics.datums import OSGB36
from tests.functions import assert_coordinates_equal


def test_coordinate_init():
    c = Coordinate(0., 1.)
    assert c.longitude == 0.
    assert c.latitude == 1.

    c = Coordinate('0.0', '1.0')
    assert c.longitude == 0.
    assert c.latitude == 1.

    # Test longitude adjustment
    assert Coordinate(181., 0) == Coordinate(-179., 0)
    assert Coordinate(361., 0) == Coordinate(1., 0.)
    assert Coordinate(-181, 0) == Coordinate(179, 0)
    assert Coordinate(-361, 0) == Coordinate(-1, 0)
    assert Coordinate(180., 0).longitude == -180.
    assert Coordinate(-180., 0).longitude == -180.
    assert Coordinate(-540., 0).longitude == -180.
    assert Coordinate(360_000_001., 0).longitude == 1.
    assert Coordinate(-360_000_001., 0).longitude == -1.
    assert -180. <= Coordinate(1e17, 0).longitude < 180.
    assert -180. <= Coordinate(-1e300, 0).longitude < 180.

    # Test latitude clamping
    assert Coordinate(1, 91).latitude == 90.
    assert Coordinate(1, -95).latitude == -90.
    assert Coordinate(1, 91).longitude == 1.

    # Test unbounded coordinates don't auto-adjust
    assert Coordinate(360, 180, _bounded=False).to_float() == (360, 180)


def test_coordinate_hash():
    coords = [
        Coordinate(0., 0.),
        Coordinate(0., 0.),
        Coordinate(1., 1.)
    ]
    assert len(set(coords)) == 2
    assert Coordinate(0., 0.) in set(coords)
    assert Coordinate(1., 1.) in set(coords)


def test_coordinate_eq():
    assert Coordinate(0., 0.) == Coordinate(0., 0.)
    assert Coordinate(0., 0.) != Coordinate(1., 0.)
    assert Coordinate(0., 0.) != Coordinate(0., 0., 1.)
    assert Coordinate(0., 0.) != (0., 0.)


def test_coordinate_repr():
    assert repr(Coordinate(0., 1.)) == '<Coordinate(0.0, 1.0)>'
    assert repr(Coordinate(0., 1., 2.)) == '<Coordinate(0.0, 1.0, 2.0)>'


def test_coordinate_is_3d():
    assert not Coordinate(0., 1.).is_3d
    assert Coordinate(0., 1., 0.).is_3d


def test_coordinate_to_float():
    assert Coordinate(0., 1.).to_float() == (0.0, 1.0)
    assert Coordinate(0., 1.).to_float(reverse=True) == (1.0, 0.0)
    assert Coordinate(0., 1., 2., 3.).to_float() == (0.0, 1.0, 2.0, 3.0)
    assert Coordinate(0., 1., m=3.).to_float() == (0.0, 1.0, 3.0)


def test_coordinate_dms():
    assert Coordinate(-0.5, 51.5).to_dms() == ((0, 30, 0.0, 'W'), (51, 30, 0.0, 'N'))
    assert Coordinate.from_dms((0, 30, 0, 'W'), (51, 30, 0, 'N')) == Coordinate(-0.5, 51.5)


def test_coordinate_to_utm():
    utm = Coordinate(2.2945, 48.8582).to_utm()
    assert utm.zone == 31
    assert utm.hemisphere == 'N'
    assert utm.easting == approx(448251.795, abs=0.01)
    assert utm.northing == approx(5411932.678, abs=0.01)

    utm = Coordinate(1., 1.).to_utm(zone=30)
    assert utm.zone == 30
    assert utm.easting == approx(945396.68398, abs=1e-5)


def test_coordinate_to_mgrs():
    assert str(Coordinate(2.2945, 48.8582).to_mgrs()) == '31U DQ 48251 11932'
    assert str(Coordinate(0., 0.).to_mgrs()) == '31N AA 66021 00000'


def test_coordinate_from_utm():
    assert_coordinates_equal(
        Coordinate.from_utm('31 N 448251.795 5411932.678'),
        Coordinate(2.2945, 48.8582),
        abs_tol=1e-7
    )


def test_coordinate_from_mgrs():
    # southwest corner of the 1m square
    assert_coordinates_equal(
        Coordinate.from_mgrs('31U DQ 48251 11932'),
        Coordinate(2.2945, 48.8582),
        abs_tol=1e-4
    )
    assert [round(x, 5) for x in Coordinate.from_mgrs('31NAA6602100000').to_float()] == [0., 0.]


def test_coordinate_to_geocentric():
    assert Coordinate(0., 0.).to_geocentric() == Cartesian(6378137.0, 0.0, 0.0)

    c = Coordinate(1., 53., 50.).to_geocentric(OSGB36)
    assert c.to_geographic(OSGB36).to_float() == approx((1., 53., 50.), abs=1e-6)


def test_cartesian_init():
    c = Cartesian(1, '2', 3)
    assert c.x == 1.
    assert c.y == 2.
    assert c.z == 3.
    assert c.m is None

    assert not Cartesian(1., 2.).is_3d
    assert Cartesian(1., 2., 0.).is_3d


def test_cartesian_eq_hash():
    assert Cartesian(1., 2., 3.) == Cartesian(1., 2., 3.)
    assert Cartesian(1., 2., 3.) != Cartesian(1., 2., 3., 4.)
    assert Cartesian(1., 2.) != Coordinate(1., 2.)
    assert len({Cartesian(1., 2.), Cartesian(1., 2.), Cartesian(2., 1.)}) == 2


def test_cartesian_repr():
    assert repr(Cartesian(1., 2., 3.)) == '<Cartesian(1.0, 2.0, 3.0)>'


def test_cartesian_to_float():
    assert Cartesian(1., 2.).to_float() == (1., 2.)
    assert Cartesian(1., 2., 3., 4.).to_float() == (1., 2., 3., 4.)


def test_cartesian_to_geographic():
    assert Cartesian(6378137., 0., 0.).to_geographic() == Coordinate(0., 0., 0.)
