import pytest
from pytest import approx

from geodetics import ellipsoids
from geodetics.coordinates import Cartesian
from geodetics.datums import *
from geodetics.ellipsoidal import to_geocentric, to_geographic
from geodetics.coordinates import Coordinate


def test_helmert_transform_tuple():
    transform = HelmertTransform(1., 2., 3., 4., 5., 6., 7.)
    assert transform.inverse() == HelmertTransform(-1., -2., -3., -4., -5., -6., -7.)
    assert transform.inverse().inverse() == transform

    assert HelmertTransform().is_null
    assert not transform.is_null


def test_datum_init():
    datum = Datum(ellipsoids.INTL_1924, HelmertTransform(1., 2., 3.), 'Test')
    assert datum.ellipsoid is ellipsoids.INTL_1924
    assert datum.transform == HelmertTransform(1., 2., 3., 0., 0., 0., 0.)
    assert datum.name == 'Test'

    # plain sequences are coerced
    assert Datum(ellipsoids.INTL_1924, [1, 2, 3, 0, 0, 0, 0]).transform == HelmertTransform(1., 2., 3.)

    assert Datum(ellipsoids.GRS80).transform.is_null

    with pytest.raises(ValueError):
        Datum('GRS80')


def test_datum_eq():
    # names are descriptive only
    assert Datum(ellipsoids.WGS84) == WGS84
    assert Datum(ellipsoids.WGS84, name='Other') == WGS84

    # same transform, different ellipsoid
    assert ETRS89 != WGS84
    assert ED50 != Datum(ellipsoids.INTL_1924, name='ED50')
    assert WGS84 != ellipsoids.WGS84


def test_datum_hash():
    assert len({WGS84, Datum(ellipsoids.WGS84), ETRS89}) == 2


def test_datum_repr():
    assert repr(OSGB36) == '<Datum(OSGB36; airy)>'
    assert repr(Datum(ellipsoids.GRS80)) == '<Datum(unnamed; GRS80)>'


def test_datum_catalog():
    assert len(DATUMS) == 11
    assert DATUMS['OSGB36'] is OSGB36
    assert DATUMS['TokyoJapan'] is TOKYO_JAPAN
    assert WGS84.transform.is_null
    assert ETRS89.transform.is_null

    with pytest.raises(TypeError):
        DATUMS['custom'] = WGS84


def test_helmert_transform():
    position = Cartesian(4027893.924, 307041.993, 4919474.294, 5.)

    # null transform is identity
    assert helmert_transform(position, HelmertTransform()) == position

    # translation only
    assert helmert_transform(position, HelmertTransform(8, -160, -176)) == Cartesian(
        4027893.924 + 8, 307041.993 - 160, 4919474.294 - 176, 5.
    )

    # missing z is 0
    assert helmert_transform(Cartesian(1., 2.), HelmertTransform(0., 0., 1.)).z == 1.


def test_convert_geocentric_identity():
    position = Cartesian(4027893.924, 307041.993, 4919474.294, 5.)
    for datum in DATUMS.values():
        assert convert_geocentric(position, datum, datum) is position


def test_convert_geocentric_measure_passthrough():
    position = Cartesian(4027893.924, 307041.993, 4919474.294, 5.)
    assert convert_geocentric(position, WGS84, OSGB36).m == 5.
    assert convert_geocentric(position, OSGB36, WGS84).m == 5.
    assert convert_geocentric(position, OSGB36, ED50).m == 5.


def test_convert_geocentric():
    # WGS84 -> OSGB36
    converted = convert_geocentric(
        to_geocentric(Coordinate(-0.00147, 51.47788)), WGS84, OSGB36
    )
    actual = to_geographic(converted, OSGB36)
    assert actual.latitude == approx(51.477364, abs=5e-7)
    assert actual.longitude == approx(0.000150, abs=5e-7)

    converted = convert_geocentric(
        Cartesian(4027893.924, 307041.993, 4919474.294), WGS84, OSGB36
    )
    actual = to_geographic(converted, OSGB36)
    assert actual.latitude == approx(50.7971, abs=5e-5)
    assert actual.longitude == approx(4.3612, abs=5e-5)


def test_convert_geocentric_inverse_consistency():
    position = Cartesian(4027893.924, 307041.993, 4919474.294)

    for datum in DATUMS.values():
        there = convert_geocentric(position, WGS84, datum)
        back = convert_geocentric(there, datum, WGS84)

        if datum.transform[3:] == (0., 0., 0., 0.):
            # translations invert exactly
            tol = 1e-6
        else:
            # negating scale and rotations inverts to first order only
            tol = 0.05

        assert back.to_float() == approx(position.to_float(), abs=tol)
