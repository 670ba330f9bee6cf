"""
Representations of positions: geographic (lon/lat on an ellipsoid) and cartesian
(geocentric ECEF or projected x/y)
"""

__all__ = ['Cartesian', 'Coordinate']

import math
from typing import TYPE_CHECKING, Optional, Tuple, Union

from geodetics.utils.functions import round_half_up

if TYPE_CHECKING:  # pragma: no cover
    from geodetics.datums import Datum
    from geodetics.mgrs import Mgrs
    from geodetics.utm import Utm


class Coordinate:
    """
    Representation of a geographic position (i.e., a lon/lat pair in degrees), with
    optional elevation (z, meters) and measure (m) values.

    Longitudes are wrapped to [-180, 180) and latitudes are clamped to [-90, 90];
    out-of-range values are corrected rather than rejected.
    """

    def __init__(
        self,
        longitude: Union[float, int, str],
        latitude: Union[float, int, str],
        z: Optional[float] = None,
        m: Optional[float] = None,
        _bounded: bool = True,
    ):
        lon, lat = float(longitude), float(latitude)
        if _bounded:
            lat = min(max(lat, -90.), 90.)

            if math.isfinite(lon) and not -180 <= lon <= 180:
                # Crosses the antimeridian
                lon = ((lon + 180.) % 360.) - 180.

            # Longitudes are bounded to [-180, 180)
            if lon == 180:
                lon = -180.

        self.longitude = lon
        self.latitude = lat
        self.z = z
        self.m = m

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return False

        return (
            self.latitude == other.latitude and
            self.longitude == other.longitude and
            self.z == other.z and
            self.m == other.m
        )

    def __hash__(self):
        return hash((self.longitude, self.latitude, self.z, self.m))

    def __repr__(self):
        parts = filter(lambda x: x is not None, (self.longitude, self.latitude, self.z, self.m))
        return f'<Coordinate({", ".join(map(str, parts))})>'

    @property
    def is_3d(self) -> bool:
        return self.z is not None

    @classmethod
    def from_dms(cls, lon: Tuple[int, int, float, str], lat: Tuple[int, int, float, str]):
        """
        Creates a Coordinate from a Degree Minutes Seconds (lon, lat) pair.

        The quadrant value should consist of either 'E'/'W' (longitude) or 'N'/'S' (latitude)

        Args:
            lon:
                Longitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str))
            lat:
                Latitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str) )

        Returns:
            Coordinate
        """
        def convert(dms: Tuple[int, int, float, str]):
            mult = -1 if dms[3] in ('S', 'W') else 1
            return mult * (dms[0] + (dms[1] / 60) + (dms[2] / 3600))

        return Coordinate(convert(lon), convert(lat))

    @classmethod
    def from_mgrs(cls, mgrs_str: str, datum: Optional['Datum'] = None) -> 'Coordinate':
        """
        Create a Coordinate from a MGRS grid reference, e.g. '31U DQ 48251 11932'.
        The result is the southwest corner of the referenced grid square.
        """
        from geodetics.mgrs import Mgrs  # pylint: disable=import-outside-toplevel

        kwargs = {'datum': datum} if datum is not None else {}
        return Mgrs.parse(mgrs_str, **kwargs).to_utm().to_geographic()

    @classmethod
    def from_utm(cls, utm_str: str, datum: Optional['Datum'] = None) -> 'Coordinate':
        """Create a Coordinate from a UTM text, e.g. '31 N 448251.795 5411932.678'"""
        from geodetics.utm import Utm  # pylint: disable=import-outside-toplevel

        kwargs = {'datum': datum} if datum is not None else {}
        return Utm.parse(utm_str, **kwargs).to_geographic()

    def to_dms(self) -> Tuple[Tuple[int, int, float, str], Tuple[int, int, float, str]]:
        """
        Convert a value (latitude or longitude) in decimal degrees to a tuple of
        degrees, minutes, seconds, hemisphere

        Returns:
            converted value as (degrees, minutes, seconds, hemisphere)
        """
        def convert(dd: float) -> Tuple[int, int, float]:
            """Converts a Decimal Degree to Degrees Minutes Seconds"""
            minutes, seconds = divmod(abs(dd) * 3600, 60)
            degrees, minutes = divmod(minutes, 60)
            return int(degrees), int(minutes), round_half_up(seconds, 5)

        return (
            (*convert(self.longitude), 'E' if self.longitude >= 0 else 'W'),
            (*convert(self.latitude), 'N' if self.latitude >= 0 else 'S'),
        )

    def to_float(self, reverse: bool = False) -> Tuple:
        """
        Converts the coordinate to a tuple of floats (longitude, latitude).
        If the Coordinate contains Z and/or M datapoints, the tuple will be extended
        to include them (in that order)

        Args:
            reverse: (bool)
                (Default False) If True, reverses the coordinate order to (latitude, longitude)

        Returns:
            Tuple of up to length 4, consisting of (longitude, latitude, altitude, M)
        """
        out = [self.longitude, self.latitude]
        if reverse:
            out = out[::-1]

        if self.z is not None:
            out.append(self.z)
        if self.m is not None:
            out.append(self.m)
        return tuple(out)

    def to_geocentric(self, datum: Optional['Datum'] = None) -> 'Cartesian':
        """Converts this coordinate to geocentric (ECEF) cartesian coordinates"""
        from geodetics.ellipsoidal import to_geocentric  # pylint: disable=import-outside-toplevel

        return to_geocentric(self, datum=datum)

    def to_mgrs(self, datum: Optional['Datum'] = None) -> 'Mgrs':
        """Convert this coordinate to a MGRS grid reference"""
        return self.to_utm(datum=datum).to_mgrs()

    def to_utm(self, zone: Optional[int] = None, datum: Optional['Datum'] = None) -> 'Utm':
        """
        Project this coordinate to UTM.

        Args:
            zone: (int) (Default None)
                Forces the UTM zone instead of resolving it from the longitude

            datum: (Datum) (Default WGS84)
                The datum this coordinate is referenced to

        Returns:
            Utm
        """
        from geodetics.utm import geographic_to_utm  # pylint: disable=import-outside-toplevel

        kwargs = {'datum': datum} if datum is not None else {}
        return geographic_to_utm(self, zone=zone, **kwargs).position


class Cartesian:
    """
    A cartesian position: geocentric (ECEF) X/Y/Z in meters, or a projected x/y
    pair. z and m are optional.
    """

    def __init__(
        self,
        x: Union[float, int, str],
        y: Union[float, int, str],
        z: Optional[float] = None,
        m: Optional[float] = None,
    ):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z) if z is not None else None
        self.m = m

    def __eq__(self, other):
        if not isinstance(other, Cartesian):
            return False

        return (
            self.x == other.x and
            self.y == other.y and
            self.z == other.z and
            self.m == other.m
        )

    def __hash__(self):
        return hash((self.x, self.y, self.z, self.m))

    def __repr__(self):
        parts = filter(lambda x: x is not None, (self.x, self.y, self.z, self.m))
        return f'<Cartesian({", ".join(map(str, parts))})>'

    @property
    def is_3d(self) -> bool:
        return self.z is not None

    def to_float(self) -> Tuple:
        """Returns (x, y), extended with z and m when present"""
        out = [self.x, self.y]
        if self.z is not None:
            out.append(self.z)
        if self.m is not None:
            out.append(self.m)
        return tuple(out)

    def to_geographic(self, datum: Optional['Datum'] = None) -> Coordinate:
        """Converts geocentric (ECEF) cartesian coordinates to a geographic Coordinate"""
        from geodetics.ellipsoidal import to_geographic  # pylint: disable=import-outside-toplevel

        return to_geographic(self, datum=datum)
