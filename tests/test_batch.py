import numpy as np
import pytest
from pytest import approx

from geodetics import ellipsoids
from geodetics.batch import *
from geodetics.coordinates import Coordinate
from geodetics.datums import ED50, OSGB36, WGS84
from geodetics.ellipsoidal import convert_geographic_across_datums, to_geocentric
from geodetics.exceptions import GeodesyFormatError
from geodetics.utm import UtmZone


POSITIONS = [
    Coordinate(-0.00147, 51.47788, 45.),
    Coordinate(1., 53., 50.),
    Coordinate(13.066317, 52.380957, 0.),
    Coordinate(-179.2, -89.2, -123.552345),
    Coordinate(151.215, -33.857, 10.),
]


def _flatten(positions, dims='xyz'):
    out = []
    for position in positions:
        out.extend(position.to_float()[:len(dims)])
    return out


def test_convert_datum_coords():
    actual = convert_datum_coords(
        [-0.00147, 51.47788],
        source_datum=WGS84,
        target_datum=OSGB36,
    )
    assert isinstance(actual, np.ndarray)
    assert actual.dtype == np.float64
    assert actual.shape == (2,)
    assert actual[0] == approx(0.000150, abs=5e-7)
    assert actual[1] == approx(51.477364, abs=5e-7)


def test_convert_datum_coords_matches_single():
    for source, target in ((WGS84, OSGB36), (OSGB36, WGS84), (OSGB36, ED50), (ED50, ED50)):
        actual = convert_datum_coords(
            _flatten(POSITIONS),
            dims='xyz',
            source_datum=source,
            target_datum=target,
        ).reshape(-1, 3)

        for row, position in zip(actual, POSITIONS):
            expected = convert_geographic_across_datums(position, source, target)
            assert row[0] == approx(expected.longitude, abs=1e-9)
            assert row[1] == approx(expected.latitude, abs=1e-9)
            assert row[2] == approx(expected.z, abs=1e-6)


def test_convert_datum_coords_geocentric():
    actual = convert_datum_coords(
        [4027893.924, 307041.993, 4919474.294],
        dims='xyz',
        source_datum=WGS84,
        target_datum=WGS84,
        source_type='geocentric',
    )
    assert actual[0] == approx(4.3592, abs=5e-5)
    assert actual[1] == approx(50.7978, abs=5e-5)

    actual = convert_datum_coords(
        [0., 0., 0.],
        dims='xyz',
        source_datum=WGS84,
        target_datum=WGS84,
        target_type='geocentric',
    )
    assert actual.tolist() == approx([6378137., 0., 0.])

    actual = convert_datum_coords(
        _flatten(POSITIONS),
        dims='xyz',
        source_datum=OSGB36,
        target_datum=OSGB36,
        target_type='geocentric',
    ).reshape(-1, 3)
    for row, position in zip(actual, POSITIONS):
        expected = to_geocentric(position, OSGB36)
        assert row.tolist() == approx(list(expected.to_float()), abs=1e-6)

    # On the rotation axis
    actual = convert_datum_coords(
        [0., 0., ellipsoids.WGS84.b + 10.],
        dims='xyz',
        source_datum=WGS84,
        target_datum=WGS84,
        source_type='geocentric',
    )
    assert actual[1] == 90.
    assert actual[2] == approx(10., abs=1e-6)


def test_convert_datum_coords_dims():
    # 2D coordinates are treated as having elevation 0
    actual = convert_datum_coords(
        [1., 53., 4.],
        dims='xym',
        source_datum=WGS84,
        target_datum=OSGB36,
    )
    expected = convert_geographic_across_datums(Coordinate(1., 53.), WGS84, OSGB36)
    assert actual[0] == approx(expected.longitude, abs=1e-9)
    assert actual[1] == approx(expected.latitude, abs=1e-9)
    assert actual[2] == 4.

    actual = convert_datum_coords(
        [1., 53., 50., 4., 2., 54., 60., 5.],
        dims='xyzm',
        source_datum=WGS84,
        target_datum=OSGB36,
    )
    assert actual.shape == (8,)
    assert actual[2] == approx(3.99, abs=0.005)
    assert actual[3] == 4.
    assert actual[7] == 5.


def test_convert_datum_coords_identity():
    coords = np.array([1., 53., 2., 54.])
    actual = convert_datum_coords(coords, source_datum=WGS84, target_datum=WGS84)
    assert actual is not coords
    assert actual.tolist() == coords.tolist()

    actual = convert_datum_coords([], source_datum=WGS84, target_datum=OSGB36)
    assert actual.size == 0


def test_convert_datum_coords_split():
    coords = _flatten(POSITIONS)
    whole = convert_datum_coords(coords, dims='xyz', source_datum=WGS84, target_datum=ED50)
    parts = np.concatenate((
        convert_datum_coords(coords[:6], dims='xyz', source_datum=WGS84, target_datum=ED50),
        convert_datum_coords(coords[6:], dims='xyz', source_datum=WGS84, target_datum=ED50),
    ))
    np.testing.assert_allclose(whole, parts, rtol=0, atol=1e-9)


def test_convert_datum_coords_invalid():
    with pytest.raises(GeodesyFormatError):
        convert_datum_coords([1., 2.], dims='xz', source_datum=WGS84, target_datum=OSGB36)

    with pytest.raises(GeodesyFormatError):
        convert_datum_coords([1., 2., 3.], source_datum=WGS84, target_datum=OSGB36)

    with pytest.raises(GeodesyFormatError):
        convert_datum_coords([[1., 2.]], source_datum=WGS84, target_datum=OSGB36)

    with pytest.raises(GeodesyFormatError):
        convert_datum_coords(
            [1., 2.], source_datum=WGS84, target_datum=OSGB36, source_type='projected'
        )


def test_geographic_to_utm_coords():
    actual = geographic_to_utm_coords([2.2945, 48.8582], zone=UtmZone(31, 'N'))
    assert actual[0] == approx(448251.795, abs=0.01)
    assert actual[1] == approx(5411932.678, abs=0.01)

    actual = geographic_to_utm_coords(
        [151.215, -33.857, 10., 2.],
        zone=UtmZone(56, 'S'),
        dims='xyzm',
    )
    assert actual[0] == approx(334873.199, abs=1e-3)
    assert actual[1] == approx(6252266.092, abs=1e-3)
    assert actual[2:].tolist() == [10., 2.]

    # a fixed zone applies to every tuple
    actual = geographic_to_utm_coords([1., 1., 2.2945, 48.8582], zone=UtmZone(30, 'N'))
    assert actual[0] == approx(945396.68398, abs=1e-5)
    assert actual[1] == approx(110801.83255, abs=1e-5)

    with pytest.raises(GeodesyFormatError):
        geographic_to_utm_coords([0., 85.], zone=UtmZone(31, 'N'))


def test_utm_to_geographic_coords():
    actual = utm_to_geographic_coords([448251.795, 5411932.678], zone=UtmZone(31, 'N'))
    assert actual[0] == approx(2.2945, abs=1e-7)
    assert actual[1] == approx(48.8582, abs=1e-7)

    actual = utm_to_geographic_coords(
        [334873.199, 6252266.092, 10.],
        zone=UtmZone(56, 'S'),
        dims='xyz',
    )
    assert actual[0] == approx(151.215, abs=1e-7)
    assert actual[1] == approx(-33.857, abs=1e-7)
    assert actual[2] == 10.

    coords = [1.5, 45.5, 3., 46., 4.5, 44.]
    utm = geographic_to_utm_coords(coords, zone=UtmZone(31, 'N'))
    assert utm_to_geographic_coords(utm, zone=UtmZone(31, 'N')).tolist() == approx(coords, abs=1e-9)
