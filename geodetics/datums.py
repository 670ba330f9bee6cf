"""
Geodetic datums (an ellipsoid anchored to WGS84 by a 7-parameter Helmert
transform) and the transformation of geocentric coordinates between them
"""

__all__ = [
    'DATUMS', 'Datum', 'ED50', 'ETRS89', 'HelmertTransform', 'IRL1975',
    'NAD27', 'NAD83', 'NTF', 'OSGB36', 'POTSDAM', 'TOKYO_JAPAN', 'WGS72',
    'WGS84', 'convert_geocentric', 'helmert_transform',
]

import math
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from pydantic import validate_call

from geodetics import ellipsoids
from geodetics.coordinates import Cartesian
from geodetics.ellipsoids import Ellipsoid


class HelmertTransform(NamedTuple):
    """
    A 7-parameter similarity transform from WGS84 to a datum.

    Translations are in meters, the scale in parts per million and the rotations
    in arcseconds.
    """
    tx: float = 0.
    ty: float = 0.
    tz: float = 0.
    s: float = 0.
    rx: float = 0.
    ry: float = 0.
    rz: float = 0.

    def inverse(self) -> 'HelmertTransform':
        """The transform back to WGS84, every parameter negated"""
        return HelmertTransform(*(-x for x in self))

    @property
    def is_null(self) -> bool:
        return not any(self)


class Datum:
    """
    A geodetic datum. Datums compare by ellipsoid and transform; the name is
    descriptive only.

    Args:
        ellipsoid:
            The reference ellipsoid

        transform: (Default None)
            The Helmert transform from WGS84 to this datum. None is equivalent to
            the null transform, i.e. a datum coincident with WGS84 (e.g. ETRS89).

        name: (Default None)
            A descriptive name, e.g. 'OSGB36'
    """

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        ellipsoid: Ellipsoid,
        transform: Optional[HelmertTransform] = None,
        name: Optional[str] = None,
    ):
        self.ellipsoid = ellipsoid
        self.transform = transform or HelmertTransform()
        self.name = name

    def __eq__(self, other):
        if not isinstance(other, Datum):
            return False

        return (
            self.ellipsoid == other.ellipsoid and
            self.transform == other.transform
        )

    def __hash__(self):
        return hash((self.ellipsoid, self.transform))

    def __repr__(self):
        return f'<Datum({self.name or "unnamed"}; {self.ellipsoid.id})>'


ED50 = Datum(
    ellipsoids.INTL_1924,
    HelmertTransform(89.5, 93.8, 123.1, -1.2, 0.0, 0.0, 0.156),
    'ED50',
)

ETRS89 = Datum(ellipsoids.GRS80, name='ETRS89')

IRL1975 = Datum(
    ellipsoids.AIRY_MODIFIED,
    HelmertTransform(-482.530, 130.596, -564.557, -8.150, 1.042, 0.214, 0.631),
    'Irl1975',
)

NAD27 = Datum(ellipsoids.CLARKE_1866, HelmertTransform(8, -160, -176), 'NAD27')

NAD83 = Datum(
    ellipsoids.GRS80,
    HelmertTransform(0.9956, -1.9103, -0.5215, -0.00062, 0.025915, 0.009426, 0.011599),
    'NAD83',
)

NTF = Datum(ellipsoids.CLARKE_1880_IGN, HelmertTransform(168, 60, -320), 'NTF')

OSGB36 = Datum(
    ellipsoids.AIRY_1830,
    HelmertTransform(-446.448, 125.157, -542.060, 20.4894, -0.1502, -0.2470, -0.8421),
    'OSGB36',
)

POTSDAM = Datum(
    ellipsoids.BESSEL_1841,
    HelmertTransform(-582, -105, -414, -8.3, 1.04, 0.35, -3.08),
    'Potsdam',
)

TOKYO_JAPAN = Datum(
    ellipsoids.BESSEL_1841, HelmertTransform(148, -507, -685), 'TokyoJapan'
)

WGS72 = Datum(ellipsoids.WGS72, HelmertTransform(0, 0, -4.5, -0.22, 0, 0, 0.554), 'WGS72')

WGS84 = Datum(ellipsoids.WGS84, name='WGS84')

DATUMS: Mapping[str, Datum] = MappingProxyType({
    x.name: x for x in (
        ED50, ETRS89, IRL1975, NAD27, NAD83, NTF, OSGB36, POTSDAM,
        TOKYO_JAPAN, WGS72, WGS84,
    )
})


def helmert_transform(position: Cartesian, transform: HelmertTransform) -> Cartesian:
    """
    Applies a small-angle 7-parameter Helmert transform to a geocentric position.
    The measure value is copied through unchanged.

    Args:
        position:
            Geocentric (ECEF) position, in meters. A missing z is treated as 0.

        transform:
            The transform parameters

    Returns:
        Cartesian
    """
    x, y, z = position.x, position.y, position.z or 0.

    s1 = 1. + transform.s * 1e-6
    # arcseconds to radians
    rx = math.radians(transform.rx / 3600.)
    ry = math.radians(transform.ry / 3600.)
    rz = math.radians(transform.rz / 3600.)

    return Cartesian(
        transform.tx + x * s1 - y * rz + z * ry,
        transform.ty + x * rz + y * s1 - z * rx,
        transform.tz - x * ry + y * rx + z * s1,
        position.m,
    )


def convert_geocentric(
    position: Cartesian,
    source_datum: Datum,
    target_datum: Datum,
) -> Cartesian:
    """
    Converts a geocentric position between datums. Transforms are stored relative
    to WGS84 only, so any other pair is converted through WGS84.

    Args:
        position:
            Geocentric (ECEF) position referenced to source_datum

        source_datum:
            The datum of the input position

        target_datum:
            The datum to convert to

    Returns:
        Cartesian
    """
    if source_datum == target_datum:
        return position

    if source_datum == WGS84:
        return helmert_transform(position, target_datum.transform)

    if target_datum == WGS84:
        return helmert_transform(position, source_datum.transform.inverse())

    return helmert_transform(
        helmert_transform(position, source_datum.transform.inverse()),
        target_datum.transform,
    )
