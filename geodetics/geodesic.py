"""
Interchangeable geodesic solvers. Every backend solves the inverse problem (two
positions to a GeodeticArcSegment) and the direct problem (a position, distance
and bearing to a GeodeticArcSegment) on a given ellipsoid:

    'vincenty'   Vincenty's iterative formulae (geodetics.vincenty), the default
    'haversine'  great circles on a sphere of the ellipsoid's mean radius
    'karney'     Karney's algorithm through the optional geographiclib, which
                 also solves nearly antipodal points

distance_meters(), bearing_degrees() and destination_point() run on the backend
chosen with set_geodesic_algorithm().
"""

__all__ = [
    'GeodesicBackend', 'bearing_degrees', 'destination_point', 'distance_meters',
    'geodesic_direct', 'geodesic_inverse', 'get_geodesic_algorithm',
    'haversine_direct', 'haversine_inverse', 'karney_direct', 'karney_inverse',
    'set_geodesic_algorithm',
]

from functools import lru_cache
import math
from typing import Callable, Dict, Literal, NamedTuple

from geodetics import ellipsoids, vincenty
from geodetics.coordinates import Coordinate
from geodetics.ellipsoids import Ellipsoid
from geodetics.exceptions import GeodesyConvergenceError, GeodesyFormatError
from geodetics.utils.functions import wrap360
from geodetics.utils.logging import LOGGER
from geodetics.vincenty import GeodeticArcSegment

Algorithm = Literal['haversine', 'vincenty', 'karney']


def _check_direct_args(distance: float, bearing: float):  # pylint: disable=redefined-outer-name
    if math.isnan(distance):
        raise GeodesyFormatError(f'invalid distance {distance}')

    if math.isnan(bearing):
        raise GeodesyFormatError(f'invalid bearing {bearing}')


# -------------------------------------------------------------------------
# Spherical
# -------------------------------------------------------------------------

def _spherical_bearing(phi1: float, lam1: float, phi2: float, lam2: float) -> float:
    """Initial great circle bearing in degrees, from radians"""
    d_lam = lam2 - lam1
    y = math.sin(d_lam) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lam)
    return wrap360(math.degrees(math.atan2(y, x)))


def haversine_inverse(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> GeodeticArcSegment:
    """
    Solves the great circle between two positions on a sphere of the ellipsoid's
    mean radius. Bearings are NaN between coincident points.
    """
    phi1, lam1 = math.radians(origin.latitude), math.radians(origin.longitude)
    phi2, lam2 = math.radians(destination.latitude), math.radians(destination.longitude)

    hav = (
        math.sin((phi2 - phi1) / 2) ** 2 +
        math.cos(phi1) * math.cos(phi2) * math.sin((lam2 - lam1) / 2) ** 2
    )
    delta = 2 * math.atan2(math.sqrt(hav), math.sqrt(1 - hav))
    if delta == 0.:
        return GeodeticArcSegment(origin, destination, 0., math.nan, math.nan)

    return GeodeticArcSegment(
        origin,
        destination,
        ellipsoid.mean_radius * delta,
        _spherical_bearing(phi1, lam1, phi2, lam2),
        # the reverse of the bearing back from the destination
        wrap360(_spherical_bearing(phi2, lam2, phi1, lam1) + 180.),
    )


def haversine_direct(
    origin: Coordinate,
    distance: float,  # pylint: disable=redefined-outer-name
    bearing: float,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> GeodeticArcSegment:
    """
    Solves the position reached along a great circle on a sphere of the
    ellipsoid's mean radius
    """
    _check_direct_args(distance, bearing)
    if distance == 0:
        return GeodeticArcSegment(origin, origin, 0., wrap360(bearing), math.nan)

    phi1, lam1 = math.radians(origin.latitude), math.radians(origin.longitude)
    theta = math.radians(bearing)
    delta = distance / ellipsoid.mean_radius

    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta) +
        math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    lam2 = lam1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2)
    )

    return GeodeticArcSegment(
        origin,
        Coordinate(math.degrees(lam2), math.degrees(phi2)),
        distance,
        wrap360(bearing),
        wrap360(_spherical_bearing(phi2, lam2, phi1, lam1) + 180.),
    )


# -------------------------------------------------------------------------
# Karney (geographiclib)
# -------------------------------------------------------------------------

@lru_cache(maxsize=None)
def _karney_geodesic(ellipsoid: Ellipsoid):
    from geographiclib.geodesic import Geodesic  # pylint: disable=import-outside-toplevel

    return Geodesic(ellipsoid.a, ellipsoid.f)


def karney_inverse(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> GeodeticArcSegment:
    """
    Solves the geodesic between two positions with Karney's algorithm. Requires
    geographiclib (pip install geodetics[karney]).
    """
    result = _karney_geodesic(ellipsoid).Inverse(
        origin.latitude, origin.longitude,
        destination.latitude, destination.longitude
    )
    if result['s12'] == 0.:
        return GeodeticArcSegment(origin, destination, 0., math.nan, math.nan)

    # geographiclib azimuths are in [-180, 180]
    return GeodeticArcSegment(
        origin,
        destination,
        result['s12'],
        wrap360(result['azi1']),
        wrap360(result['azi2']),
    )


def karney_direct(
    origin: Coordinate,
    distance: float,  # pylint: disable=redefined-outer-name
    bearing: float,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> GeodeticArcSegment:
    """
    Solves the position reached along a geodesic with Karney's algorithm.
    Requires geographiclib (pip install geodetics[karney]).
    """
    _check_direct_args(distance, bearing)
    if distance == 0:
        return GeodeticArcSegment(origin, origin, 0., wrap360(bearing), math.nan)

    result = _karney_geodesic(ellipsoid).Direct(
        origin.latitude, origin.longitude, bearing, distance
    )

    return GeodeticArcSegment(
        origin,
        Coordinate(result['lon2'], result['lat2']),
        distance,
        wrap360(bearing),
        wrap360(result['azi2']),
    )


# -------------------------------------------------------------------------
# Backend selection
# -------------------------------------------------------------------------

class GeodesicBackend(NamedTuple):
    inverse: Callable[[Coordinate, Coordinate, Ellipsoid], GeodeticArcSegment]
    direct: Callable[[Coordinate, float, float, Ellipsoid], GeodeticArcSegment]


_BACKENDS: Dict[str, GeodesicBackend] = {
    'haversine': GeodesicBackend(haversine_inverse, haversine_direct),
    'vincenty': GeodesicBackend(vincenty.inverse, vincenty.direct),
    'karney': GeodesicBackend(karney_inverse, karney_direct),
}

_algorithm = 'vincenty'


def get_geodesic_algorithm() -> str:
    return _algorithm


def set_geodesic_algorithm(algorithm: Algorithm):
    """
    Sets the process-wide geodesic backend.

    Args:
        algorithm: 'haversine', 'vincenty' (the default) or 'karney'
    """
    global _algorithm  # pylint: disable=global-statement

    if algorithm not in _BACKENDS:
        raise ValueError(f"Unknown algorithm '{algorithm}'. Options: {list(_BACKENDS)}")

    LOGGER.debug('Geodesic algorithm set to %s', algorithm)
    _algorithm = algorithm


def geodesic_inverse(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> GeodeticArcSegment:
    """
    Solves the geodesic between two positions with the selected backend.

    Raises:
        GeodesyConvergenceError: the Vincenty backend did not converge
    """
    return _BACKENDS[_algorithm].inverse(origin, destination, ellipsoid)


def geodesic_direct(
    origin: Coordinate,
    distance: float,  # pylint: disable=redefined-outer-name
    bearing: float,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> GeodeticArcSegment:
    """
    Solves the position reached along a geodesic with the selected backend.

    Raises:
        GeodesyFormatError: the distance or the bearing is NaN
        GeodesyConvergenceError: the Vincenty backend did not converge
    """
    return _BACKENDS[_algorithm].direct(origin, distance, bearing, ellipsoid)


def _solve_or_none(origin: Coordinate, destination: Coordinate, ellipsoid: Ellipsoid):
    try:
        return geodesic_inverse(origin, destination, ellipsoid)
    except GeodesyConvergenceError as exc:
        LOGGER.debug('No %s geodesic between %r and %r: %s', _algorithm, origin, destination, exc)
        return None


def distance_meters(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> float:
    """Geodesic distance in meters; NaN if the backend has no solution"""
    if origin == destination:
        return 0.

    segment = _solve_or_none(origin, destination, ellipsoid)
    return segment.distance if segment else math.nan


def bearing_degrees(
    origin: Coordinate,
    destination: Coordinate,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> float:
    """
    Initial bearing in degrees [0, 360); NaN between coincident points or if the
    backend has no solution
    """
    if origin == destination:
        return math.nan

    segment = _solve_or_none(origin, destination, ellipsoid)
    return segment.initial_bearing if segment else math.nan


def destination_point(
    origin: Coordinate,
    distance: float,  # pylint: disable=redefined-outer-name
    bearing: float,
    ellipsoid: Ellipsoid = ellipsoids.WGS84,
) -> Coordinate:
    if distance == 0:
        return origin

    return geodesic_direct(origin, distance, bearing, ellipsoid).destination
