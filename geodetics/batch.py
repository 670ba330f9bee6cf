"""
Conversions of flat coordinate buffers, e.g. [x0, y0, x1, y1, ...], laid out as
consecutive 'xy', 'xyz', 'xym' or 'xyzm' tuples. Geographic tuples are ordered
(longitude, latitude[, elevation][, m]).

Datum conversions are vectorised with numpy; UTM conversions run per tuple.
Tuples are independent of each other, so a buffer may be split and converted in
parts with identical results.
"""

__all__ = [
    'convert_datum_coords', 'geographic_to_utm_coords', 'utm_to_geographic_coords',
]

from typing import Iterable, Literal, Tuple

import numpy as np

from geodetics.coordinates import Coordinate
from geodetics.datums import WGS84, Datum, HelmertTransform
from geodetics.ellipsoids import Ellipsoid
from geodetics.exceptions import GeodesyFormatError
from geodetics.utm import Utm, UtmZone, geographic_to_utm, utm_to_geographic

Dims = Literal['xy', 'xyz', 'xym', 'xyzm']
CoordType = Literal['geographic', 'geocentric']

_DIMS = ('xy', 'xyz', 'xym', 'xyzm')


def _as_tuples(coords: Iterable[float], dims: str) -> np.ndarray:
    """Reshapes a flat buffer into one row per tuple"""
    if dims not in _DIMS:
        raise GeodesyFormatError(f'invalid coordinate dimensions {dims!r}; expected one of {_DIMS}')

    arr = np.asarray(list(coords) if not isinstance(coords, np.ndarray) else coords, dtype=np.float64)
    if arr.ndim != 1 or arr.size % len(dims):
        raise GeodesyFormatError(
            f'coordinate buffer of {arr.size} values cannot be split into {dims!r} tuples'
        )

    return arr.reshape(-1, len(dims))


def _split(rows: np.ndarray, dims: str) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """x, y, z (zeros if absent)"""
    z = rows[:, 2] if 'z' in dims else np.zeros(len(rows))
    return rows[:, 0], rows[:, 1], z


def _geocentric_array(lon, lat, h, ellipsoid: Ellipsoid) -> np.ndarray:
    phi, lam = np.radians(lat), np.radians(lon)
    sin_phi, cos_phi = np.sin(phi), np.cos(phi)
    e2 = ellipsoid.eccentricity_squared
    nu = ellipsoid.a / np.sqrt(1. - e2 * sin_phi ** 2)

    return np.column_stack((
        (nu + h) * cos_phi * np.cos(lam),
        (nu + h) * cos_phi * np.sin(lam),
        (nu * (1. - e2) + h) * sin_phi,
    ))


def _geographic_array(x, y, z, ellipsoid: Ellipsoid) -> np.ndarray:
    """Bowring's method, as geodetics.ellipsoidal.to_geographic"""
    a, b = ellipsoid.a, ellipsoid.b
    e2, eps2 = ellipsoid.eccentricity_squared, ellipsoid.second_eccentricity_squared

    p = np.hypot(x, y)
    r = np.hypot(p, z)
    on_axis = p == 0.

    with np.errstate(divide='ignore', invalid='ignore'):
        tan_beta = (b * z) / (a * p) * (1. + eps2 * b / r)
        sin_beta = tan_beta / np.sqrt(1. + tan_beta ** 2)
        cos_beta = np.where(tan_beta == 0., 1., sin_beta / tan_beta)

        phi = np.arctan2(z + eps2 * b * sin_beta ** 3, p - e2 * a * cos_beta ** 3)
        sin_phi, cos_phi = np.sin(phi), np.cos(phi)
        nu = a / np.sqrt(1. - e2 * sin_phi ** 2)
        h = p * cos_phi + z * sin_phi - (a * a / nu)

    lat = np.where(on_axis, np.sign(z) * 90., np.degrees(phi))
    lon = np.where(on_axis, 0., np.degrees(np.arctan2(y, x)))
    # longitudes are bounded to [-180, 180)
    lon = np.where(lon == 180., -180., lon)
    h = np.where(on_axis, np.abs(z) - b, h)

    return np.column_stack((lon, lat, h))


def _helmert_array(xyz: np.ndarray, transform: HelmertTransform) -> np.ndarray:
    s1 = 1. + transform.s * 1e-6
    rx, ry, rz = np.radians(np.array([transform.rx, transform.ry, transform.rz]) / 3600.)
    rotation = np.array([
        [s1, -rz, ry],
        [rz, s1, -rx],
        [-ry, rx, s1],
    ])
    return xyz @ rotation.T + np.array([transform.tx, transform.ty, transform.tz])


def _convert_geocentric_array(xyz: np.ndarray, source: Datum, target: Datum) -> np.ndarray:
    if source == target:
        return xyz

    if source == WGS84:
        return _helmert_array(xyz, target.transform)

    if target == WGS84:
        return _helmert_array(xyz, source.transform.inverse())

    return _helmert_array(_helmert_array(xyz, source.transform.inverse()), target.transform)


def convert_datum_coords(
    coords: Iterable[float],
    *,
    dims: Dims = 'xy',
    source_datum: Datum,
    target_datum: Datum,
    source_type: CoordType = 'geographic',
    target_type: CoordType = 'geographic',
) -> np.ndarray:
    """
    Converts a flat coordinate buffer between datums and/or between geographic and
    geocentric coordinates. Measure values are copied through unchanged.

    Args:
        coords:
            The flat coordinate buffer

        dims: (Default 'xy')
            The tuple layout; 'xy' and 'xym' buffers have no elevation/z, which
            is then treated as 0

        source_datum:
            The datum of the input coordinates

        target_datum:
            The datum to convert to

        source_type: (Default 'geographic')
            'geographic' or 'geocentric'

        target_type: (Default 'geographic')
            'geographic' or 'geocentric'

    Returns:
        A new flat float64 array in the same layout
    """
    for value in (source_type, target_type):
        if value not in ('geographic', 'geocentric'):
            raise GeodesyFormatError(f'invalid coordinate type {value!r}')

    rows = _as_tuples(coords, dims)
    out = rows.copy()
    if not len(rows):
        return out.ravel()

    if source_type == target_type == 'geographic' and source_datum == target_datum:
        return out.ravel()

    x, y, z = _split(rows, dims)
    if source_type == 'geographic':
        xyz = _geocentric_array(x, y, z, source_datum.ellipsoid)
    else:
        xyz = np.column_stack((x, y, z))

    xyz = _convert_geocentric_array(xyz, source_datum, target_datum)

    if target_type == 'geographic':
        xyz = _geographic_array(xyz[:, 0], xyz[:, 1], xyz[:, 2], target_datum.ellipsoid)

    out[:, 0:2] = xyz[:, 0:2]
    if 'z' in dims:
        out[:, 2] = xyz[:, 2]

    return out.ravel()


def geographic_to_utm_coords(
    coords: Iterable[float],
    *,
    zone: UtmZone,
    dims: Dims = 'xy',
    datum: Datum = WGS84,
) -> np.ndarray:
    """
    Projects a flat buffer of geographic coordinates into a fixed UTM zone and
    hemisphere, returning (easting, northing[, z][, m]) tuples.
    """
    rows = _as_tuples(coords, dims)
    out = rows.copy()
    for i, row in enumerate(rows):
        utm = geographic_to_utm(
            Coordinate(row[0], row[1]), zone=zone, datum=datum
        ).position
        out[i, 0:2] = utm.easting, utm.northing

    return out.ravel()


def utm_to_geographic_coords(
    coords: Iterable[float],
    *,
    zone: UtmZone,
    dims: Dims = 'xy',
    datum: Datum = WGS84,
) -> np.ndarray:
    """
    Converts a flat buffer of (easting, northing[, z][, m]) tuples in a fixed UTM
    zone and hemisphere to geographic (longitude, latitude[, z][, m]) tuples.
    """
    rows = _as_tuples(coords, dims)
    out = rows.copy()
    for i, row in enumerate(rows):
        position = utm_to_geographic(
            Utm(zone.zone, zone.hemisphere, row[0], row[1], datum=datum, verify_en=False),
            round_results=False,
        ).position
        out[i, 0:2] = position.longitude, position.latitude

    return out.ravel()
