"""
Reference ellipsoids: WGS84 plus the historical ellipsoids the catalog datums are
defined on
"""

__all__ = [
    'AIRY_1830', 'AIRY_MODIFIED', 'BESSEL_1841', 'CLARKE_1866', 'CLARKE_1880_IGN',
    'ELLIPSOIDS', 'Ellipsoid', 'GRS80', 'INTL_1924', 'WGS72', 'WGS84',
]

from functools import cached_property
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import validate_call

from geodetics._const import WGS84_A, WGS84_B, WGS84_F
from geodetics.exceptions import GeodesyFormatError


class Ellipsoid:
    """
    A reference ellipsoid, defined by its semi-major axis `a`, semi-minor axis `b`
    and flattening `f`. Ellipsoids compare and hash by value.

    If the flattening is omitted it is derived as (a - b) / a. Published ellipsoids
    usually quote a and 1/f; use Ellipsoid.from_inverse_flattening() for those.
    """

    @validate_call
    def __init__(
        self,
        id: str,  # pylint: disable=redefined-builtin
        name: str,
        a: float,
        b: float,
        f: Optional[float] = None,
    ):
        if not a > b > 0:
            raise GeodesyFormatError(
                f'invalid ellipsoid axes a={a}, b={b}; expected a > b > 0'
            )

        self.id = id
        self.name = name
        self.a = a
        self.b = b
        self.f = f if f is not None else (a - b) / a

    def __eq__(self, other):
        if not isinstance(other, Ellipsoid):
            return False

        return (
            self.id == other.id and
            self.name == other.name and
            self.a == other.a and
            self.b == other.b and
            self.f == other.f
        )

    def __hash__(self):
        return hash((self.id, self.name, self.a, self.b, self.f))

    def __repr__(self):
        return f'<Ellipsoid({self.id}; a={self.a}, b={self.b}, 1/f={self.inverse_flattening})>'

    @classmethod
    def from_inverse_flattening(
        cls,
        id: str,  # pylint: disable=redefined-builtin
        name: str,
        a: float,
        inverse_flattening: float
    ) -> 'Ellipsoid':
        """
        Creates an Ellipsoid from its semi-major axis and inverse flattening (1/f),
        the way most ellipsoids are published.

        Args:
            id:
                Short identifier, e.g. 'intl'

            name:
                Descriptive name

            a:
                The semi-major axis, in meters

            inverse_flattening:
                The reciprocal of the flattening, e.g. 298.257223563

        Returns:
            Ellipsoid
        """
        f = 1. / inverse_flattening
        return cls(id, name, a, a * (1. - f), f)

    @cached_property
    def eccentricity_squared(self) -> float:
        """First eccentricity squared, e² = (a² - b²) / a² = 2f - f²"""
        return 2. * self.f - self.f * self.f

    @cached_property
    def second_eccentricity_squared(self) -> float:
        """Second eccentricity squared, ε² = (a² - b²) / b²"""
        return self.eccentricity_squared / (1. - self.eccentricity_squared)

    @cached_property
    def third_flattening(self) -> float:
        """Third flattening, n = f / (2 - f)"""
        return self.f / (2. - self.f)

    @cached_property
    def mean_radius(self) -> float:
        """IUGG mean radius, R₁ = (2a + b) / 3"""
        return (2. * self.a + self.b) / 3.

    @property
    def inverse_flattening(self) -> float:
        return 1. / self.f


WGS84 = Ellipsoid('WGS84', 'WGS 84', WGS84_A, WGS84_B, WGS84_F)

# f more accurately 1 / 298.257222100882711243
GRS80 = Ellipsoid('GRS80', 'GRS 1980(IUGG, 1980)', 6378137.0, 6356752.314140, 1 / 298.257222101)

AIRY_1830 = Ellipsoid('airy', 'Airy 1830', 6377563.396, 6356256.909, 1 / 299.3249646)

AIRY_MODIFIED = Ellipsoid('mod_airy', 'Modified Airy', 6377340.189, 6356034.448, 1 / 299.3249646)

BESSEL_1841 = Ellipsoid('bessel', 'Bessel 1841', 6377397.155, 6356078.962822, 1 / 299.15281285)

CLARKE_1866 = Ellipsoid('clrk66', 'Clarke 1866', 6378206.4, 6356583.8, 1 / 294.978698214)

CLARKE_1880_IGN = Ellipsoid(
    'clrk80', 'Clarke 1880 mod.', 6378249.2, 6356515.0, 1 / 293.466021294
)

INTL_1924 = Ellipsoid(
    'intl', 'International 1924 (Hayford)', 6378388.0, 6356911.946128, 1 / 297
)

WGS72 = Ellipsoid('WGS72', 'WGS 72', 6378135.0, 6356750.52, 1 / 298.26)

ELLIPSOIDS: Mapping[str, Ellipsoid] = MappingProxyType({
    x.id: x for x in (
        WGS84, GRS80, AIRY_1830, AIRY_MODIFIED, BESSEL_1841,
        CLARKE_1866, CLARKE_1880_IGN, INTL_1924, WGS72,
    )
})
