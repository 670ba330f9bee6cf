"""
Military Grid Reference System (MGRS) grid references, built on UTM.

A reference such as '31U DQ 48251 11932' consists of the grid zone (UTM zone and
8° latitude band), the 100km grid square (column and row letters), and an easting
and northing within that square. References denote the southwest corner of a
square whose size is implied by the number of digits written.
"""

__all__ = ['Mgrs', 'MgrsGridSquare', 'MgrsGridZone']

import math
import re

from pydantic import validate_call

from geodetics._const import (
    MGRS_E100K_LETTERS, MGRS_LATITUDE_BANDS, MGRS_N100K_LETTERS, MGRS_PRECISIONS,
)
from geodetics.coordinates import Coordinate
from geodetics.datums import WGS84, Datum
from geodetics.exceptions import GeodesyFormatError
from geodetics.utils.logging import LOGGER
from geodetics.utm import Utm, geographic_to_utm, utm_to_geographic

_BANDS = MGRS_LATITUDE_BANDS[:-1]

_MILITARY_REGEX = re.compile(r'^(\d{1,2})([A-Z])([A-Z])([A-Z])(\d*)$')
_GRID_ZONE_REGEX = re.compile(r'^(\d{1,2})([A-Z])$')
_GRID_SQUARE_REGEX = re.compile(r'^([A-Z])([A-Z])$')
_EN_REGEX = re.compile(r'^(\d+)(?:\.(\d+))?$')


class MgrsGridZone:
    """
    A MGRS grid zone: a UTM zone (1-60) and a latitude band letter
    ('CDEFGHJKLMNPQRSTUVWX', 8° each except X which spans 72-84°N)
    """

    @validate_call
    def __init__(self, zone: int, band: str):
        if not 1 <= zone <= 60:
            raise GeodesyFormatError(f'invalid MGRS zone {zone}')

        if len(band) != 1 or band not in _BANDS:
            raise GeodesyFormatError(f'invalid MGRS band {band!r}')

        self.zone = zone
        self.band = band

    def __eq__(self, other):
        if not isinstance(other, MgrsGridZone):
            return False

        return self.zone == other.zone and self.band == other.band

    def __hash__(self):
        return hash((self.zone, self.band))

    def __repr__(self):
        return f'<MgrsGridZone({self.to_text()})>'

    def __str__(self):
        return self.to_text()

    @property
    def hemisphere(self) -> str:
        return 'N' if self.band >= 'N' else 'S'

    def to_text(self, zero_pad_zone: bool = False) -> str:
        return f'{self.zone:02d}{self.band}' if zero_pad_zone else f'{self.zone}{self.band}'


class MgrsGridSquare(MgrsGridZone):
    """
    A 100km grid square within a grid zone.

    The column letter cycles through 'ABCDEFGH', 'JKLMNPQR' and 'STUVWXYZ' in
    successive zones, and the row letter through two alternating 20-letter
    sequences, so each zone only accepts a subset of the letters.
    """

    @validate_call
    def __init__(self, zone: int, band: str, column: str, row: str):
        super().__init__(zone, band)

        if len(column) != 1 or column not in MGRS_E100K_LETTERS[(zone - 1) % 3]:
            raise GeodesyFormatError(f'invalid MGRS 100km grid square column {column!r} for zone {zone}')

        if len(row) != 1 or row not in MGRS_N100K_LETTERS[(zone - 1) % 2]:
            raise GeodesyFormatError(f'invalid MGRS 100km grid square row {row!r} for zone {zone}')

        self.column = column
        self.row = row

    def __eq__(self, other):
        if not isinstance(other, MgrsGridSquare):
            return False

        return (
            self.zone == other.zone and
            self.band == other.band and
            self.column == other.column and
            self.row == other.row
        )

    def __hash__(self):
        return hash((self.zone, self.band, self.column, self.row))

    def __repr__(self):
        return f'<MgrsGridSquare({self.to_text()})>'

    @property
    def grid_zone(self) -> MgrsGridZone:
        return MgrsGridZone(self.zone, self.band)

    def to_text(self, zero_pad_zone: bool = False, military_style: bool = False) -> str:
        return (
            super().to_text(zero_pad_zone) +
            ('' if military_style else ' ') +
            self.column + self.row
        )


class Mgrs:
    """
    A MGRS grid reference.

    Args:
        zone:
            The UTM zone, 1-60

        band:
            The latitude band letter

        column:
            The 100km grid square column letter

        row:
            The 100km grid square row letter

        easting:
            Easting within the grid square, in meters (0-99999)

        northing:
            Northing within the grid square, in meters (0-99999)

        datum: (Default WGS84)
            The datum of the underlying UTM coordinate
    """

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        zone: int,
        band: str,
        column: str,
        row: str,
        easting: int,
        northing: int,
        datum: Datum = WGS84,
    ):
        self.grid_square = MgrsGridSquare(zone, band, column, row)

        if not 0 <= easting <= 99999:
            raise GeodesyFormatError(f'invalid MGRS easting {easting}')

        if not 0 <= northing <= 99999:
            raise GeodesyFormatError(f'invalid MGRS northing {northing}')

        self.easting = easting
        self.northing = northing
        self.datum = datum

    def __eq__(self, other):
        if not isinstance(other, Mgrs):
            return False

        return (
            self.grid_square == other.grid_square and
            self.easting == other.easting and
            self.northing == other.northing and
            self.datum == other.datum
        )

    def __hash__(self):
        return hash((self.grid_square, self.easting, self.northing, self.datum))

    def __repr__(self):
        return f'<Mgrs({self.to_text()})>'

    def __str__(self):
        return self.to_text()

    @property
    def zone(self) -> int:
        return self.grid_square.zone

    @property
    def band(self) -> str:
        return self.grid_square.band

    @property
    def column(self) -> str:
        return self.grid_square.column

    @property
    def row(self) -> str:
        return self.grid_square.row

    @classmethod
    def from_utm(cls, utm: Utm) -> 'Mgrs':
        """
        Converts a UTM coordinate to a grid reference. Easting and northing are
        truncated to the meter within the 100km square.
        """
        lat = utm_to_geographic(utm, round_results=False).position.latitude
        band = MGRS_LATITUDE_BANDS[min(max(math.floor(lat / 8. + 10.), 0), 20)]

        # round to nanometers first so floating noise cannot change the square
        col, easting = divmod(round(utm.easting, 6), 100e3)
        row, northing = divmod(round(utm.northing, 6), 100e3)

        # the column letters start at 100km, as eastings start at 166km
        if not 1 <= col <= 8:
            raise GeodesyFormatError(f'UTM easting {utm.easting} has no MGRS grid square')

        return cls(
            utm.zone,
            band,
            MGRS_E100K_LETTERS[(utm.zone - 1) % 3][int(col) - 1],
            MGRS_N100K_LETTERS[(utm.zone - 1) % 2][int(row) % 20],
            int(easting),
            int(northing),
            datum=utm.datum,
        )

    @classmethod
    def from_geographic(cls, position: Coordinate, datum: Datum = WGS84) -> 'Mgrs':
        return cls.from_utm(geographic_to_utm(position, datum=datum, round_results=False).position)

    @classmethod
    def parse(cls, text: str, datum: Datum = WGS84) -> 'Mgrs':
        """
        Parses a grid reference written either with separators ('31U DQ 48251 11932')
        or in military style ('31UDQ4825111932').

        Easting and northing must have equal numbers of digits; fewer than 5 digits
        are scaled up to meters (e.g. '4825' means 48250m). With separators, a 5 digit
        easting or northing may carry decimals, which are truncated.

        Args:
            text:
                The grid reference

            datum: (Default WGS84)
                The datum of the underlying UTM coordinate

        Returns:
            Mgrs
        """
        text = text.strip().upper()
        parts = text.split()

        if len(parts) == 1:
            match = _MILITARY_REGEX.match(text)
            if not match:
                raise GeodesyFormatError(f'invalid MGRS grid reference {text!r}')

            zone, band, column, row, digits = match.groups()
            if not 2 <= len(digits) <= 10 or len(digits) % 2:
                raise GeodesyFormatError(f'invalid MGRS grid reference {text!r}')

            half = len(digits) // 2
            easting_text, northing_text = digits[:half], digits[half:]

        elif len(parts) == 4:
            zone_match = _GRID_ZONE_REGEX.match(parts[0])
            square_match = _GRID_SQUARE_REGEX.match(parts[1])
            if not zone_match or not square_match:
                raise GeodesyFormatError(f'invalid MGRS grid reference {text!r}')

            zone, band = zone_match.groups()
            column, row = square_match.groups()
            easting_text = _parse_en(parts[2], text)
            northing_text = _parse_en(parts[3], text)
            if len(easting_text) != len(northing_text):
                raise GeodesyFormatError(f'invalid MGRS grid reference {text!r}')

        else:
            raise GeodesyFormatError(f'invalid MGRS grid reference {text!r}')

        return cls(
            int(zone),
            band,
            column,
            row,
            int(easting_text.ljust(5, '0')),
            int(northing_text.ljust(5, '0')),
            datum=datum,
        )

    def to_text(
        self,
        digits: int = 10,
        zero_pad_zone: bool = False,
        military_style: bool = False,
    ) -> str:
        """
        Formats this grid reference, e.g. '31U DQ 48251 11932'. Easting and northing
        are truncated, never rounded, to the requested precision.

        Args:
            digits: (Default 10)
                Total digits of easting and northing; 2 (10km squares), 4, 6, 8 or
                10 (1m squares)

            zero_pad_zone: (Default False)
                If True, writes single digit zones with a leading zero

            military_style: (Default False)
                If True, omits all separators, e.g. '31UDQ4825111932'

        Returns:
            str
        """
        if digits not in MGRS_PRECISIONS:
            raise GeodesyFormatError(f'invalid MGRS precision {digits}')

        easting = str(self.easting).zfill(5)[:digits // 2]
        northing = str(self.northing).zfill(5)[:digits // 2]

        square = self.grid_square.to_text(zero_pad_zone, military_style)
        if military_style:
            return f'{square}{easting}{northing}'

        return f'{square} {easting} {northing}'

    def to_geographic(self) -> Coordinate:
        """The southwest corner of the referenced square, as a geographic position"""
        return self.to_utm().to_geographic()

    def to_utm(self) -> Utm:
        """
        Converts to the UTM coordinate of the southwest corner of the referenced
        square.
        """
        square = self.grid_square
        hemisphere = square.hemisphere

        e100k = (MGRS_E100K_LETTERS[(square.zone - 1) % 3].index(square.column) + 1) * 100e3
        n100k = MGRS_N100K_LETTERS[(square.zone - 1) % 2].index(square.row) * 100e3

        # Lowest northing of the bottom of the band, extended down to the whole
        # bottom-most 100km square. Parallels curve towards the pole away from the
        # central meridian, so south of the equator the lowest point is on the zone
        # edge rather than the central meridian (zone 31 is used for both).
        band_lat = (_BANDS.index(square.band) - 10) * 8.
        band_northing = geographic_to_utm(
            Coordinate(3. if hemisphere == 'N' else 6., band_lat),
            zone=31,
            datum=self.datum,
            round_results=False,
            verify_en=False,
        ).position.northing
        n_band = math.floor(band_northing / 100e3) * 100e3

        # Row letters repeat every 2000km
        n2m = 0.
        while n2m + n100k + self.northing < n_band:
            n2m += 2000e3

        if n2m:
            LOGGER.debug(
                'Added %d 2000km blocks to resolve the northing of %s',
                n2m // 2000e3, self.to_text()
            )

        # the widened Svalbard zones reach past the usual northern limit near 84°N
        return Utm(
            square.zone,
            hemisphere,
            e100k + self.easting,
            n2m + n100k + self.northing,
            datum=self.datum,
            verify_en=False,
        )


def _parse_en(value: str, text: str) -> str:
    """
    Validates a separated easting or northing, returning its integer digits.
    Decimals are only meaningful below the meter, i.e. after 5 integer digits.
    """
    match = _EN_REGEX.match(value)
    if not match:
        raise GeodesyFormatError(f'invalid MGRS grid reference {text!r}')

    integer, decimals = match.groups()
    if len(integer) > 5 or (decimals is not None and len(integer) < 5):
        raise GeodesyFormatError(f'invalid MGRS grid reference {text!r}')

    return integer
