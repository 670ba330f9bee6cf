
import sys

from geodetics._version import __version__  # noqa: F401
from geodetics.utils.logging import LOGGER
from geodetics.coordinates import Cartesian, Coordinate
from geodetics.ellipsoids import Ellipsoid
from geodetics.datums import Datum, HelmertTransform
from geodetics.exceptions import (
    GeodesyConvergenceError, GeodesyError, GeodesyFormatError, IncompatibleDatumError
)
from geodetics.utm import Utm, UtmMeta, UtmZone
from geodetics.mgrs import Mgrs, MgrsGridSquare, MgrsGridZone
from geodetics.vincenty import GeodeticArcSegment
from geodetics.utils.conditional_imports import ConditionalPackageInterceptor


ConditionalPackageInterceptor.permit_packages(
    {
        'geographiclib': 'geodetics[karney]',
    }
)
sys.meta_path.append(ConditionalPackageInterceptor)  # type: ignore

__all__ = [
    'Cartesian',
    'Coordinate',
    'Datum',
    'Ellipsoid',
    'GeodesyConvergenceError',
    'GeodesyError',
    'GeodesyFormatError',
    'GeodeticArcSegment',
    'HelmertTransform',
    'IncompatibleDatumError',
    'Mgrs',
    'MgrsGridSquare',
    'MgrsGridZone',
    'Utm',
    'UtmMeta',
    'UtmZone',
    'LOGGER',
]
