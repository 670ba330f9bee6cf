"""
Conversions between geographic (lon/lat/elevation) and geocentric (ECEF) positions
on an ellipsoid, and the composite conversion of geographic positions across datums
"""

__all__ = [
    'convert_geographic_across_datums', 'resolve_ellipsoid', 'to_geocentric',
    'to_geographic',
]

import math
from typing import Optional

from geodetics.coordinates import Cartesian, Coordinate
from geodetics.datums import WGS84, Datum, convert_geocentric
from geodetics.ellipsoids import Ellipsoid
from geodetics.exceptions import IncompatibleDatumError


def resolve_ellipsoid(
    datum: Optional[Datum] = None,
    ellipsoid: Optional[Ellipsoid] = None
) -> Ellipsoid:
    """
    Resolves the ellipsoid to compute on from an optional datum and an optional
    ellipsoid. Defaults to WGS84.

    Raises:
        IncompatibleDatumError: both were supplied and the datum is defined on
            another ellipsoid
    """
    if datum is not None and ellipsoid is not None and datum.ellipsoid != ellipsoid:
        raise IncompatibleDatumError(
            f'datum {datum!r} is defined on {datum.ellipsoid!r}, not {ellipsoid!r}'
        )

    if ellipsoid is not None:
        return ellipsoid

    return (datum or WGS84).ellipsoid


def to_geocentric(
    position: Coordinate,
    datum: Optional[Datum] = None,
    ellipsoid: Optional[Ellipsoid] = None,
) -> Cartesian:
    """
    Converts a geographic position to geocentric (ECEF) cartesian coordinates.

    Args:
        position:
            The geographic position. A missing elevation is treated as 0.

        datum: (Default WGS84)
            The datum the position is referenced to

        ellipsoid: (Default None)
            The ellipsoid to compute on, if not the datum's

    Returns:
        Cartesian, in meters
    """
    ell = resolve_ellipsoid(datum, ellipsoid)

    phi = math.radians(position.latitude)
    lam = math.radians(position.longitude)
    h = position.z or 0.

    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    e2 = ell.eccentricity_squared
    # radius of curvature in the prime vertical
    nu = ell.a / math.sqrt(1. - e2 * sin_phi * sin_phi)

    return Cartesian(
        (nu + h) * cos_phi * math.cos(lam),
        (nu + h) * cos_phi * math.sin(lam),
        (nu * (1. - e2) + h) * sin_phi,
        position.m,
    )


def to_geographic(
    position: Cartesian,
    datum: Optional[Datum] = None,
    ellipsoid: Optional[Ellipsoid] = None,
) -> Coordinate:
    """
    Converts geocentric (ECEF) cartesian coordinates to a geographic position using
    Bowring's method, which needs no iteration.

    Positions on the rotation axis (x = y = 0) have no defined longitude and give
    longitude 0. Off the equatorial plane they give latitude ±90° and the height
    above the pole, |z| - b, rather than latitude 0; the geocentre itself gives
    latitude 0 and height -b.

    Args:
        position:
            The geocentric position, in meters. A missing z is treated as 0.

        datum: (Default WGS84)
            The datum the position is referenced to

        ellipsoid: (Default None)
            The ellipsoid to compute on, if not the datum's

    Returns:
        Coordinate, with the ellipsoidal height as z
    """
    ell = resolve_ellipsoid(datum, ellipsoid)
    a, b = ell.a, ell.b
    e2 = ell.eccentricity_squared
    eps2 = ell.second_eccentricity_squared

    x, y, z = position.x, position.y, position.z or 0.
    p = math.sqrt(x * x + y * y)

    if p == 0.:
        # On the rotation axis
        phi = math.copysign(math.pi / 2, z) if z else 0.
        h = abs(z) - b if z else -b
        return Coordinate(0., math.degrees(phi), h, position.m)

    r = math.sqrt(p * p + z * z)

    # parametric latitude
    tan_beta = (b * z) / (a * p) * (1. + eps2 * b / r)
    sin_beta = tan_beta / math.sqrt(1. + tan_beta * tan_beta)
    cos_beta = sin_beta / tan_beta if tan_beta else 1.

    phi = math.atan2(
        z + eps2 * b * sin_beta ** 3,
        p - e2 * a * cos_beta ** 3
    )
    lam = math.atan2(y, x)

    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    nu = a / math.sqrt(1. - e2 * sin_phi * sin_phi)
    h = p * cos_phi + z * sin_phi - (a * a / nu)

    return Coordinate(math.degrees(lam), math.degrees(phi), h, position.m)


def convert_geographic_across_datums(
    position: Coordinate,
    source_datum: Datum,
    target_datum: Datum,
) -> Coordinate:
    """
    Converts a geographic position between datums, by way of geocentric coordinates.

    The output carries an elevation only if the input did; the intermediate
    geocentric step produces a height either way.

    Args:
        position:
            The geographic position, referenced to source_datum

        source_datum:
            The datum of the input position

        target_datum:
            The datum to convert to

    Returns:
        Coordinate
    """
    if source_datum == target_datum:
        return position

    converted = to_geographic(
        convert_geocentric(to_geocentric(position, source_datum), source_datum, target_datum),
        target_datum,
    )
    if position.z is None:
        return Coordinate(converted.longitude, converted.latitude, m=converted.m)

    return converted
