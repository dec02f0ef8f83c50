"""
Representation of a specific point on earth
"""

__all__ = ['Coordinate']

from typing import Tuple, Union

from geovincenty._base import PointLike
from geovincenty.utils.functions import round_half_up


class Coordinate(PointLike):
    """
    Representation of a coordinate on the globe (i.e., a lon/lat pair), in degrees.

    Coordinates are immutable. Values outside of [-180, 180] longitude and [-90, 90]
    latitude are wrapped back onto the globe unless _bounded is False.
    """

    __slots__ = ('_longitude', '_latitude')

    def __init__(
        self,
        longitude: Union[float, int, str],
        latitude: Union[float, int, str],
        _bounded: bool = True,
    ):
        lon, lat = float(longitude), float(latitude)
        if _bounded:
            while not -90 <= lat <= 90:
                # Crosses one of the poles
                lat = 90 - (lat - 90) if lat > 90 else -90 - (lat + 90)
                lon = lon + 180 if lon < 0 else lon - 180

            while not -180 <= lon <= 180:
                # Crosses the antimeridian
                lon = lon - 360 if lon > 180 else lon + 360

            # Longitudes are bounded to [-180, 180)
            if lon == 180:
                lon = -180.

        object.__setattr__(self, '_longitude', lon)
        object.__setattr__(self, '_latitude', lat)

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return False

        return (
            self.latitude == other.latitude and
            self.longitude == other.longitude
        )

    def __hash__(self):
        return hash((self.longitude, self.latitude))

    def __repr__(self):
        return f'<Coordinate({self.longitude}, {self.latitude})>'

    def __reduce__(self):
        return self.__class__, (self.longitude, self.latitude, False)

    @property
    def longitude(self) -> float:
        return self._longitude

    @property
    def latitude(self) -> float:
        return self._latitude

    @classmethod
    def from_lat_lon(cls, latitude: float, longitude: float) -> 'Coordinate':
        """
        Creates a Coordinate from a (latitude, longitude) pair. This is the
        default point factory used by the geodesic calculators.
        """
        return cls(longitude, latitude)

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

    def to_coordinate(self) -> 'Coordinate':
        return self

    def to_dms(self) -> Tuple[Tuple[int, int, float, str], Tuple[int, int, float, str]]:
        """
        Convert this coordinate to a pair of (degrees, minutes, seconds, hemisphere)
        tuples, in (longitude, latitude) order.

        Returns:
            converted values as ((d, m, s, 'E'|'W'), (d, m, s, 'N'|'S'))
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

    def to_float(self, reverse: bool = False) -> Tuple[float, float]:
        """
        Converts the coordinate to a tuple of floats (longitude, latitude).

        Args:
            reverse: (bool)
                (Default False) If True, reverses the coordinate order to (latitude, longitude)

        Returns:
            Tuple of (longitude, latitude)
        """
        if reverse:
            return self.latitude, self.longitude

        return self.longitude, self.latitude

    def to_str(self, reverse: bool = False) -> Tuple[str, str]:
        """
        Converts the coordinate to a tuple of strings (longitude, latitude).

        Args:
            reverse: (bool)
                (Default False) If True, reverses the coordinate order to (latitude, longitude)

        Returns:
            Tuple of (longitude, latitude)
        """
        lon, lat = str(self.longitude), str(self.latitude)
        return (lat, lon) if reverse else (lon, lat)
