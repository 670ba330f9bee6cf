"""
Universal Transverse Mercator projection, using Karney's 6th order Krüger series
(accurate to a few nanometers within the zone)
"""

__all__ = [
    'Utm', 'UtmMeta', 'UtmZone', 'geographic_to_utm', 'utm_to_geographic',
]

from functools import lru_cache
import math
from typing import TYPE_CHECKING, Any, NamedTuple, Optional, Tuple, Union

from pydantic import validate_call

from geodetics._const import (
    MGRS_LATITUDE_BANDS, UTM_FALSE_EASTING, UTM_FALSE_NORTHING, UTM_K0,
    UTM_MAX_ITERATIONS, UTM_MAX_LATITUDE, UTM_MAX_NORTHING_NORTH, UTM_MIN_LATITUDE,
    UTM_MIN_NORTHING_SOUTH,
)
from geodetics.coordinates import Coordinate
from geodetics.datums import WGS84, Datum
from geodetics.exceptions import GeodesyConvergenceError, GeodesyFormatError
from geodetics.utils.functions import format_number
from geodetics.utils.logging import warn_once

if TYPE_CHECKING:  # pragma: no cover
    from geodetics.mgrs import Mgrs

# Beyond this distance from the central meridian the series loses accuracy
_MAX_MERIDIAN_DISTANCE = 9.


class UtmMeta(NamedTuple):
    """A converted position along with the meridian convergence and scale factor there"""
    position: Any
    convergence: float
    scale: float


class UtmZone:
    """
    A UTM zone (1-60) and hemisphere ('N' or 'S')

    Args:
        zone:
            The zone number

        hemisphere: (Default 'N')
            'N' for the northern hemisphere, 'S' for the southern
    """

    @validate_call
    def __init__(self, zone: int, hemisphere: str = 'N'):
        if not 1 <= zone <= 60:
            raise GeodesyFormatError(f'invalid UTM zone {zone}')

        if hemisphere not in ('N', 'S'):
            raise GeodesyFormatError(f'invalid UTM hemisphere {hemisphere!r}')

        self.zone = zone
        self.hemisphere = hemisphere

    def __eq__(self, other):
        if not isinstance(other, UtmZone):
            return False

        return self.zone == other.zone and self.hemisphere == other.hemisphere

    def __hash__(self):
        return hash((self.zone, self.hemisphere))

    def __repr__(self):
        return f'<UtmZone({self.zone} {self.hemisphere})>'

    def __str__(self):
        return f'{self.zone}{self.hemisphere}'

    @property
    def central_meridian(self) -> float:
        """Longitude of the zone's central meridian, in degrees"""
        return (self.zone - 1) * 6. - 180. + 3.

    @classmethod
    def from_geographic(cls, position: Coordinate) -> 'UtmZone':
        """
        Resolves the zone a geographic position falls in, including the widened
        zones of southwest Norway and Svalbard.
        """
        return cls(
            _resolve_zone(position.longitude, position.latitude),
            'N' if position.latitude >= 0 else 'S'
        )


class Utm:
    """
    A UTM coordinate.

    Args:
        zone:
            The UTM zone, 1-60

        hemisphere:
            'N' or 'S'

        easting:
            Easting from the zone's false origin, in meters

        northing:
            Northing from the hemisphere's false origin, in meters

        z: (Default None)
            Elevation, in meters

        m: (Default None)
            A measure value

        datum: (Default WGS84)
            The datum this coordinate is referenced to

        verify_en: (Default True)
            Whether to check the easting and northing are within the normal range
            for the hemisphere
    """

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        zone: int,
        hemisphere: str,
        easting: float,
        northing: float,
        z: Optional[float] = None,
        m: Optional[float] = None,
        datum: Datum = WGS84,
        verify_en: bool = True,
    ):
        self.utm_zone = UtmZone(zone, hemisphere)

        if verify_en:
            if not 0. <= easting <= 2 * UTM_FALSE_EASTING:
                raise GeodesyFormatError(f'invalid UTM easting {easting}')

            if hemisphere == 'N' and not 0. <= northing < UTM_MAX_NORTHING_NORTH:
                raise GeodesyFormatError(f'invalid UTM northing {northing}')

            if hemisphere == 'S' and not UTM_MIN_NORTHING_SOUTH < northing <= UTM_FALSE_NORTHING:
                raise GeodesyFormatError(f'invalid UTM northing {northing}')

        self.easting = easting
        self.northing = northing
        self.z = z
        self.m = m
        self.datum = datum

    def __eq__(self, other):
        if not isinstance(other, Utm):
            return False

        return (
            self.utm_zone == other.utm_zone and
            self.easting == other.easting and
            self.northing == other.northing and
            self.z == other.z and
            self.m == other.m and
            self.datum == other.datum
        )

    def __hash__(self):
        return hash((self.utm_zone, self.easting, self.northing, self.z, self.m, self.datum))

    def __repr__(self):
        return f'<Utm({self.to_text(decimals=3, include_elev_m=True)})>'

    def __str__(self):
        return self.to_text(decimals=3)

    @property
    def zone(self) -> int:
        return self.utm_zone.zone

    @property
    def hemisphere(self) -> str:
        return self.utm_zone.hemisphere

    @property
    def is_3d(self) -> bool:
        return self.z is not None

    @classmethod
    def from_geographic(
        cls,
        position: Coordinate,
        zone: Union[int, UtmZone, None] = None,
        datum: Datum = WGS84,
    ) -> 'Utm':
        """Projects a geographic position; see geographic_to_utm()"""
        return geographic_to_utm(position, zone=zone, datum=datum).position

    @classmethod
    def parse(cls, text: str, swap_xy: bool = False, datum: Datum = WGS84) -> 'Utm':
        """
        Parses a UTM coordinate from text, e.g. '31 N 448251.795 5411932.678', with
        optional trailing elevation and measure values.

        Args:
            text:
                The whitespace-delimited text

            swap_xy: (Default False)
                If True, the northing is expected before the easting

            datum: (Default WGS84)
                The datum the coordinate is referenced to

        Returns:
            Utm
        """
        parts = text.split()
        if not 4 <= len(parts) <= 6:
            raise GeodesyFormatError(f'invalid UTM coordinate {text!r}')

        try:
            zone = int(parts[0])
            easting = float(parts[3 if swap_xy else 2])
            northing = float(parts[2 if swap_xy else 3])
            extra = [float(x) for x in parts[4:]]
        except ValueError as exc:
            raise GeodesyFormatError(f'invalid UTM coordinate {text!r}') from exc

        return cls(
            zone,
            parts[1].upper(),
            easting,
            northing,
            *extra,
            datum=datum,
        )

    def to_text(
        self,
        decimals: int = 0,
        delimiter: str = ' ',
        swap_xy: bool = False,
        zero_pad_zone: bool = False,
        include_elev_m: bool = False,
        compact_nums: bool = True,
    ) -> str:
        """
        Formats this coordinate as text, e.g. '31 N 448252 5411933'

        Args:
            decimals: (Default 0)
                Number of decimals for easting, northing and elevation

            delimiter: (Default ' ')
                The separator between values

            swap_xy: (Default False)
                If True, writes the northing before the easting

            zero_pad_zone: (Default False)
                If True, writes single digit zones with a leading zero

            include_elev_m: (Default False)
                If True, appends the elevation and measure values when present

            compact_nums: (Default True)
                If True, integral values are written without decimals

        Returns:
            str
        """
        values = [self.northing, self.easting] if swap_xy else [self.easting, self.northing]
        if include_elev_m:
            values.extend(x for x in (self.z, self.m) if x is not None)

        return delimiter.join((
            f'{self.zone:02d}' if zero_pad_zone else str(self.zone),
            self.hemisphere,
            *(format_number(x, decimals, compact_nums) for x in values),
        ))

    def to_geographic(self, round_results: bool = True) -> Coordinate:
        """Converts to a geographic position, on this coordinate's datum"""
        return utm_to_geographic(self, round_results=round_results).position

    def to_mgrs(self) -> 'Mgrs':
        """Converts to a MGRS grid reference"""
        from geodetics.mgrs import Mgrs  # pylint: disable=import-outside-toplevel

        return Mgrs.from_utm(self)


@lru_cache(maxsize=32)
def _krueger_coefficients(n: float) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    """
    Series coefficients in the third flattening n for the forward (alpha) and
    inverse (beta) projections; index 0 is unused so that alpha[j] pairs with 2j.
    """
    n2, n3, n4, n5, n6 = n ** 2, n ** 3, n ** 4, n ** 5, n ** 6
    alpha = (
        0.,
        1/2*n - 2/3*n2 + 5/16*n3 + 41/180*n4 - 127/288*n5 + 7891/37800*n6,
        13/48*n2 - 3/5*n3 + 557/1440*n4 + 281/630*n5 - 1983433/1935360*n6,
        61/240*n3 - 103/140*n4 + 15061/26880*n5 + 167603/181440*n6,
        49561/161280*n4 - 179/168*n5 + 6601661/7257600*n6,
        34729/80640*n5 - 3418889/1995840*n6,
        212378941/319334400*n6,
    )
    beta = (
        0.,
        1/2*n - 2/3*n2 + 37/96*n3 - 1/360*n4 - 81/512*n5 + 96199/604800*n6,
        1/48*n2 + 1/15*n3 - 437/1440*n4 + 46/105*n5 - 1118711/3870720*n6,
        17/480*n3 - 37/840*n4 - 209/4480*n5 + 5569/90720*n6,
        4397/161280*n4 - 11/504*n5 - 830251/7257600*n6,
        4583/161280*n5 - 108847/3991680*n6,
        20648693/638668800*n6,
    )
    return alpha, beta


def _rectifying_radius(a: float, n: float) -> float:
    """2πA is the circumference of a meridian"""
    return a / (1 + n) * (1 + n ** 2 / 4 + n ** 4 / 64 + n ** 6 / 256)


def _resolve_zone(longitude: float, latitude: float) -> int:
    zone = min(max(math.floor((longitude + 180.) / 6.) + 1, 1), 60)
    band = MGRS_LATITUDE_BANDS[min(max(math.floor(latitude / 8. + 10.), 0), 20)]

    # Norway
    if zone == 31 and band == 'V' and longitude >= 3.:
        return 32

    # Svalbard
    if band == 'X':
        if zone == 32:
            return 31 if longitude < 9. else 33
        if zone == 34:
            return 33 if longitude < 21. else 35
        if zone == 36:
            return 35 if longitude < 33. else 37

    return zone


def geographic_to_utm(
    position: Coordinate,
    zone: Union[int, UtmZone, None] = None,
    datum: Datum = WGS84,
    round_results: bool = True,
    verify_en: Optional[bool] = None,
) -> UtmMeta:
    """
    Projects a geographic position to UTM.

    Args:
        position:
            The geographic position, between 80°S and 84°N

        zone: (Default None)
            Forces the zone, as a zone number or a UtmZone (which also forces the
            hemisphere). If omitted, the zone is resolved from the position
            including the Norway and Svalbard exceptions.

        datum: (Default WGS84)
            The datum the position is referenced to

        round_results: (Default True)
            Rounds easting and northing to nanometers, and the convergence and
            scale to 9 and 12 decimals

        verify_en: (Default None)
            Whether the resulting easting and northing are checked against the
            normal ranges. Defaults to True when the zone is forced.

    Returns:
        UtmMeta of (Utm, convergence in degrees, scale factor)
    """
    lat, lon = position.latitude, position.longitude
    if not UTM_MIN_LATITUDE <= lat <= UTM_MAX_LATITUDE:
        raise GeodesyFormatError(f'latitude {lat} outside UTM limits')

    if isinstance(zone, UtmZone):
        zone_num, hemisphere = zone.zone, zone.hemisphere
    else:
        zone_num = zone if zone is not None else _resolve_zone(lon, lat)
        hemisphere = 'N' if lat >= 0 else 'S'
        if not 1 <= zone_num <= 60:
            raise GeodesyFormatError(f'invalid UTM zone {zone_num}')

    if verify_en is None:
        verify_en = zone is not None

    lambda0 = math.radians((zone_num - 1) * 6. - 180. + 3.)
    phi = math.radians(lat)
    lam = math.radians(lon) - lambda0
    if abs(lam) > math.radians(_MAX_MERIDIAN_DISTANCE):
        warn_once(
            f'UTM conversion more than {_MAX_MERIDIAN_DISTANCE:.0f} degrees from the '
            f'central meridian of zone {zone_num}; accuracy is degraded'
        )

    ell = datum.ellipsoid
    a = ell.a
    e = math.sqrt(ell.eccentricity_squared)
    n = ell.third_flattening
    alpha, _ = _krueger_coefficients(n)
    big_a = _rectifying_radius(a, n)

    cos_lam, sin_lam, tan_lam = math.cos(lam), math.sin(lam), math.tan(lam)

    # conformal latitude
    tau = math.tan(phi)
    sigma = math.sinh(e * math.atanh(e * tau / math.sqrt(1 + tau * tau)))
    tau_p = tau * math.sqrt(1 + sigma * sigma) - sigma * math.sqrt(1 + tau * tau)

    xi_p = math.atan2(tau_p, cos_lam)
    eta_p = math.asinh(sin_lam / math.sqrt(tau_p * tau_p + cos_lam * cos_lam))

    xi, eta = xi_p, eta_p
    p_p, q_p = 1., 0.
    for j in range(1, 7):
        sin_xi, cos_xi = math.sin(2 * j * xi_p), math.cos(2 * j * xi_p)
        sinh_eta, cosh_eta = math.sinh(2 * j * eta_p), math.cosh(2 * j * eta_p)
        xi += alpha[j] * sin_xi * cosh_eta
        eta += alpha[j] * cos_xi * sinh_eta
        p_p += 2 * j * alpha[j] * cos_xi * cosh_eta
        q_p += 2 * j * alpha[j] * sin_xi * sinh_eta

    x = UTM_K0 * big_a * eta
    y = UTM_K0 * big_a * xi

    gamma = (
        math.atan(tau_p / math.sqrt(1 + tau_p * tau_p) * tan_lam) +
        math.atan2(q_p, p_p)
    )

    sin_phi = math.sin(phi)
    k = (
        UTM_K0 *
        math.sqrt(1 - ell.eccentricity_squared * sin_phi * sin_phi) *
        math.sqrt(1 + tau * tau) /
        math.sqrt(tau_p * tau_p + cos_lam * cos_lam) *
        (big_a / a) * math.sqrt(p_p * p_p + q_p * q_p)
    )

    x += UTM_FALSE_EASTING
    if hemisphere == 'S' and (y < 0 or isinstance(zone, UtmZone)):
        y += UTM_FALSE_NORTHING

    convergence = math.degrees(gamma)
    if round_results:
        x, y = round(x, 9), round(y, 9)
        convergence, k = round(convergence, 9), round(k, 12)

    return UtmMeta(
        Utm(
            zone_num, hemisphere, x, y, position.z, position.m,
            datum=datum, verify_en=verify_en,
        ),
        convergence,
        k,
    )


def utm_to_geographic(utm: Utm, round_results: bool = True) -> UtmMeta:
    """
    Converts a UTM coordinate to a geographic position on the same datum.

    Args:
        utm:
            The UTM coordinate

        round_results: (Default True)
            Rounds latitude and longitude to 14 decimals, and the convergence and
            scale to 9 and 12 decimals

    Returns:
        UtmMeta of (Coordinate, convergence in degrees, scale factor)
    """
    ell = utm.datum.ellipsoid
    a = ell.a
    e2 = ell.eccentricity_squared
    e = math.sqrt(e2)
    n = ell.third_flattening
    _, beta = _krueger_coefficients(n)
    big_a = _rectifying_radius(a, n)

    x = utm.easting - UTM_FALSE_EASTING
    y = utm.northing - UTM_FALSE_NORTHING if utm.hemisphere == 'S' else utm.northing

    eta = x / (UTM_K0 * big_a)
    xi = y / (UTM_K0 * big_a)

    xi_p, eta_p = xi, eta
    p, q = 1., 0.
    for j in range(1, 7):
        sin_xi, cos_xi = math.sin(2 * j * xi), math.cos(2 * j * xi)
        sinh_eta, cosh_eta = math.sinh(2 * j * eta), math.cosh(2 * j * eta)
        xi_p -= beta[j] * sin_xi * cosh_eta
        eta_p -= beta[j] * cos_xi * sinh_eta
        p -= 2 * j * beta[j] * cos_xi * cosh_eta
        q += 2 * j * beta[j] * sin_xi * sinh_eta

    sinh_eta_p = math.sinh(eta_p)
    sin_xi_p, cos_xi_p = math.sin(xi_p), math.cos(xi_p)

    tau_p = sin_xi_p / math.sqrt(sinh_eta_p * sinh_eta_p + cos_xi_p * cos_xi_p)

    # Invert the conformal latitude by Newton-Raphson
    tau_i = tau_p
    for iterations in range(1, UTM_MAX_ITERATIONS + 1):
        sigma_i = math.sinh(e * math.atanh(e * tau_i / math.sqrt(1 + tau_i * tau_i)))
        tau_i_p = tau_i * math.sqrt(1 + sigma_i * sigma_i) - sigma_i * math.sqrt(1 + tau_i * tau_i)
        delta_tau_i = (
            (tau_p - tau_i_p) / math.sqrt(1 + tau_i_p * tau_i_p) *
            (1 + (1 - e2) * tau_i * tau_i) / ((1 - e2) * math.sqrt(1 + tau_i * tau_i))
        )
        tau_i += delta_tau_i
        if abs(delta_tau_i) <= 1e-12:
            break
    else:
        raise GeodesyConvergenceError('UTM inverse', iterations)

    tau = tau_i
    phi = math.atan(tau)
    lam = math.atan2(sinh_eta_p, cos_xi_p)
    if abs(lam) > math.radians(_MAX_MERIDIAN_DISTANCE):
        warn_once(
            f'UTM conversion more than {_MAX_MERIDIAN_DISTANCE:.0f} degrees from the '
            f'central meridian of zone {utm.zone}; accuracy is degraded'
        )

    gamma = math.atan(math.tan(xi_p) * math.tanh(eta_p)) + math.atan2(q, p)

    sin_phi = math.sin(phi)
    k = (
        UTM_K0 *
        math.sqrt(1 - e2 * sin_phi * sin_phi) *
        math.sqrt(1 + tau * tau) *
        math.sqrt(sinh_eta_p * sinh_eta_p + cos_xi_p * cos_xi_p) *
        (big_a / a) / math.sqrt(p * p + q * q)
    )

    lat = math.degrees(phi)
    lon = math.degrees(lam) + utm.utm_zone.central_meridian
    convergence = math.degrees(gamma)
    if round_results:
        lat, lon = round(lat, 14), round(lon, 14)
        convergence, k = round(convergence, 9), round(k, 12)

    return UtmMeta(Coordinate(lon, lat, utm.z, utm.m), convergence, k)
