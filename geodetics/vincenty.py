"""
Vincenty's direct and inverse solutions of geodesics on the ellipsoid.

The primitives, inverse() and direct(), raise GeodesyConvergenceError when the
iteration fails (e.g. for nearly antipodal points). The convenience functions
built on them return NaN instead.
"""

__all__ = [
    'GeodeticArcSegment', 'destination_point', 'direct', 'distance',
    'final_bearing', 'final_bearing_on', 'initial_bearing', 'intermediate_point',
    'inverse', 'midpoint',
]

import math
import sys
from typing import NamedTuple

from geodetics import ellipsoids
from geodetics._const import (
    VINCENTY_CONVERGENCE, VINCENTY_DIRECT_MAX_ITERATIONS,
    VINCENTY_INVERSE_MAX_ITERATIONS,
)
from geodetics.coordinates import Coordinate
from geodetics.ellipsoids import Ellipsoid
from geodetics.exceptions import GeodesyConvergenceError, GeodesyFormatError
from geodetics.utils.functions import wrap360
from geodetics.utils.logging import LOGGER

_EPSILON = sys.float_info.epsilon


class GeodeticArcSegment(NamedTuple):
    """
    A geodesic between two positions. Bearings are in degrees [0, 360), or NaN
    where undefined (e.g. between coincident points).
    """
    origin: Coordinate
    destination: Coordinate
    distance: float
    initial_bearing: float
    final_bearing: float


def _series_a_b(cos_sq_alpha: float, ellipsoid: Ellipsoid):
    u_sq = cos_sq_alpha * (ellipsoid.a ** 2 - ellipsoid.b ** 2) / (ellipsoid.b ** 2)
    a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    return a, b


def _delta_sigma(b: float, sin_sigma: float, cos_sigma: float, cos_2_sigma_m: float) -> float:
    return b * sin_sigma * (
        cos_2_sigma_m + b / 4 * (
            cos_sigma * (-1 + 2 * cos_2_sigma_m ** 2) -
            b / 6 * cos_2_sigma_m * (-3 + 4 * sin_sigma ** 2) * (-3 + 4 * cos_2_sigma_m ** 2)
        )
    )


def inverse(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> GeodeticArcSegment:
    """
    Solves the geodesic between two positions.

    Args:
        origin:
            The start position

        destination:
            The end position

        ellipsoid: (Default WGS84)
            The ellipsoid to compute on

    Returns:
        GeodeticArcSegment

    Raises:
        GeodesyConvergenceError: the iteration did not converge within 1000
            iterations, or diverged (λ > π)
    """
    phi1, lambda1 = math.radians(origin.latitude), math.radians(origin.longitude)
    phi2, lambda2 = math.radians(destination.latitude), math.radians(destination.longitude)

    f = ellipsoid.f
    big_l = lambda2 - lambda1

    # reduced latitudes
    tan_u1 = (1 - f) * math.tan(phi1)
    cos_u1 = 1 / math.sqrt(1 + tan_u1 * tan_u1)
    sin_u1 = tan_u1 * cos_u1
    tan_u2 = (1 - f) * math.tan(phi2)
    cos_u2 = 1 / math.sqrt(1 + tan_u2 * tan_u2)
    sin_u2 = tan_u2 * cos_u2

    antipodal = abs(big_l) > math.pi / 2 or abs(phi2 - phi1) > math.pi / 2

    lam = big_l
    sin_lam, cos_lam = math.sin(lam), math.cos(lam)
    sigma = math.pi if antipodal else 0.
    sin_sigma = 0.
    cos_sigma = -1. if antipodal else 1.
    sin_sq_sigma = 0.
    cos_2_sigma_m = 1.
    cos_sq_alpha = 1.

    for iterations in range(1, VINCENTY_INVERSE_MAX_ITERATIONS + 1):
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        sin_sq_sigma = (
            (cos_u2 * sin_lam) ** 2 +
            (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) ** 2
        )
        if abs(sin_sq_sigma) < 1e-24:
            # coincident or antipodal
            break

        sin_sigma = math.sqrt(sin_sq_sigma)
        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos_sq_alpha = 1 - sin_alpha * sin_alpha
        # on the equatorial line cos²α is 0
        cos_2_sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha if cos_sq_alpha != 0 else 0.

        c = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
        lam_prev = lam
        lam = big_l + (1 - c) * f * sin_alpha * (
            sigma + c * sin_sigma * (
                cos_2_sigma_m + c * cos_sigma * (-1 + 2 * cos_2_sigma_m * cos_2_sigma_m)
            )
        )

        if (abs(lam) - math.pi if antipodal else abs(lam)) > math.pi:
            raise GeodesyConvergenceError('Vincenty inverse', iterations, 'diverged (λ > π)')

        if abs(lam - lam_prev) <= VINCENTY_CONVERGENCE:
            break
    else:
        raise GeodesyConvergenceError('Vincenty inverse', VINCENTY_INVERSE_MAX_ITERATIONS)

    big_a, big_b = _series_a_b(cos_sq_alpha, ellipsoid)
    s = ellipsoid.b * big_a * (sigma - _delta_sigma(big_b, sin_sigma, cos_sigma, cos_2_sigma_m))

    # atan2(0, 0) is 0 while atan2(ε, 0) is π/2, so force bearings at the poles
    if abs(sin_sq_sigma) < _EPSILON:
        alpha1, alpha2 = 0., math.pi
    else:
        alpha1 = math.atan2(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
        alpha2 = math.atan2(cos_u1 * sin_lam, -sin_u1 * cos_u2 + cos_u1 * sin_u2 * cos_lam)

    if abs(s) < _EPSILON:
        initial, final = math.nan, math.nan
    else:
        initial, final = wrap360(math.degrees(alpha1)), wrap360(math.degrees(alpha2))

    return GeodeticArcSegment(origin, destination, s, initial, final)


def direct(
    origin: Coordinate,
    distance: float,  # pylint: disable=redefined-outer-name
    bearing: float,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> GeodeticArcSegment:
    """
    Solves the position reached by travelling a distance along the geodesic
    leaving `origin` at `bearing`.

    Args:
        origin:
            The start position

        distance:
            Distance to travel, in meters

        bearing:
            Initial bearing, in degrees clockwise from north

        ellipsoid: (Default WGS84)
            The ellipsoid to compute on

    Returns:
        GeodeticArcSegment; a zero distance gives the origin with a NaN final bearing

    Raises:
        GeodesyFormatError: the distance or the bearing is NaN
        GeodesyConvergenceError: the iteration did not converge within 100 iterations
    """
    if math.isnan(distance):
        raise GeodesyFormatError(f'invalid distance {distance}')

    if distance == 0:
        return GeodeticArcSegment(origin, origin, 0., wrap360(bearing), math.nan)

    if math.isnan(bearing):
        raise GeodesyFormatError(f'invalid bearing {bearing}')

    phi1, lambda1 = math.radians(origin.latitude), math.radians(origin.longitude)
    alpha1 = math.radians(bearing)
    f, b = ellipsoid.f, ellipsoid.b

    sin_alpha1, cos_alpha1 = math.sin(alpha1), math.cos(alpha1)

    tan_u1 = (1 - f) * math.tan(phi1)
    cos_u1 = 1 / math.sqrt(1 + tan_u1 * tan_u1)
    sin_u1 = tan_u1 * cos_u1

    # angular distance on the sphere from the equator to origin
    sigma1 = math.atan2(tan_u1, cos_alpha1)
    # alpha is the azimuth of the geodesic at the equator
    sin_alpha = cos_u1 * sin_alpha1
    cos_sq_alpha = 1 - sin_alpha * sin_alpha
    big_a, big_b = _series_a_b(cos_sq_alpha, ellipsoid)

    sigma = distance / (b * big_a)
    for _ in range(VINCENTY_DIRECT_MAX_ITERATIONS):
        cos_2_sigma_m = math.cos(2 * sigma1 + sigma)
        sin_sigma, cos_sigma = math.sin(sigma), math.cos(sigma)
        sigma_prev = sigma
        sigma = distance / (b * big_a) + _delta_sigma(big_b, sin_sigma, cos_sigma, cos_2_sigma_m)
        if abs(sigma - sigma_prev) <= VINCENTY_CONVERGENCE:
            break
    else:
        raise GeodesyConvergenceError('Vincenty direct', VINCENTY_DIRECT_MAX_ITERATIONS)

    x = sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_alpha1
    phi2 = math.atan2(
        sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_alpha1,
        (1 - f) * math.sqrt(sin_alpha * sin_alpha + x * x)
    )
    lam = math.atan2(
        sin_sigma * sin_alpha1,
        cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_alpha1
    )
    c = f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))
    big_l = lam - (1 - c) * f * sin_alpha * (
        sigma + c * sin_sigma * (
            cos_2_sigma_m + c * cos_sigma * (-1 + 2 * cos_2_sigma_m * cos_2_sigma_m)
        )
    )
    alpha2 = math.atan2(sin_alpha, -x)

    return GeodeticArcSegment(
        origin,
        Coordinate(math.degrees(lambda1 + big_l), math.degrees(phi2)),
        distance,
        wrap360(bearing),
        wrap360(math.degrees(alpha2)),
    )


def _inverse_or_none(origin, destination, ellipsoid):
    try:
        return inverse(origin, destination, ellipsoid)
    except GeodesyConvergenceError as exc:
        LOGGER.debug('No geodesic between %r and %r: %s', origin, destination, exc)
        return None


def distance(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> float:
    """Geodesic distance in meters; NaN if the solver fails"""
    if origin == destination:
        return 0.

    segment = _inverse_or_none(origin, destination, ellipsoid)
    return segment.distance if segment else math.nan


def initial_bearing(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> float:
    """Bearing in degrees leaving origin; NaN for coincident points or if the solver fails"""
    if origin == destination:
        return math.nan

    segment = _inverse_or_none(origin, destination, ellipsoid)
    return segment.initial_bearing if segment else math.nan


def final_bearing(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> float:
    """Bearing in degrees arriving at destination; NaN for coincident points or if the solver fails"""
    if origin == destination:
        return math.nan

    segment = _inverse_or_none(origin, destination, ellipsoid)
    return segment.final_bearing if segment else math.nan


def destination_point(
    origin: Coordinate,
    distance: float,  # pylint: disable=redefined-outer-name
    bearing: float,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> Coordinate:
    if distance == 0:
        return origin

    return direct(origin, distance, bearing, ellipsoid).destination


def final_bearing_on(
    origin: Coordinate,
    distance: float,  # pylint: disable=redefined-outer-name
    bearing: float,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> float:
    """The bearing on arrival after travelling `distance` from origin at `bearing`"""
    if distance == 0:
        return wrap360(bearing)

    return direct(origin, distance, bearing, ellipsoid).final_bearing


def intermediate_point(
    origin: Coordinate,
    destination: Coordinate,
    fraction: float,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> Coordinate:
    """
    The point at a fraction of the geodesic distance between two positions.

    Args:
        origin:
            The start position

        destination:
            The end position

        fraction:
            0 is the origin, 1 the destination

        ellipsoid: (Default WGS84)
            The ellipsoid to compute on

    Returns:
        Coordinate
    """
    if fraction == 0:
        return origin

    if fraction == 1:
        return destination

    if origin == destination:
        return origin

    segment = inverse(origin, destination, ellipsoid)
    if math.isnan(segment.initial_bearing):
        return origin

    return destination_point(
        origin, segment.distance * fraction, segment.initial_bearing, ellipsoid
    )


def midpoint(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> Coordinate:
    return intermediate_point(origin, destination, 0.5, ellipsoid)
