"""
Reference ellipsoid models
"""

__all__ = ['Ellipsoid', 'GRS80', 'WGS84', 'get_ellipsoid']

from typing import Union

from geovincenty._const import (
    GRS80_A, GRS80_B, GRS80_F, WGS84_A, WGS84_B, WGS84_F
)


class Ellipsoid:
    """
    An oblate spheroid, described by its equatorial radius (a), polar radius (b)
    and flattening (f = (a - b) / a). The radii may be in any linear unit;
    distances computed on the ellipsoid will be in the same unit.

    Parameters are taken as given and not validated.

    Args:
        equatorial_radius:
            The semi-major axis, a

        polar_radius:
            The semi-minor axis, b

        flattening:
            The flattening, f
    """

    __slots__ = ('_equatorial_radius', '_polar_radius', '_flattening')

    def __init__(self, equatorial_radius: float, polar_radius: float, flattening: float):
        object.__setattr__(self, '_equatorial_radius', float(equatorial_radius))
        object.__setattr__(self, '_polar_radius', float(polar_radius))
        object.__setattr__(self, '_flattening', float(flattening))

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ellipsoid):
            return False

        return self.to_tuple() == other.to_tuple()

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def __repr__(self) -> str:
        return (
            f'<Ellipsoid a={self.equatorial_radius} b={self.polar_radius} '
            f'f={self.flattening}>'
        )

    def __reduce__(self):
        return self.__class__, self.to_tuple()

    @property
    def equatorial_radius(self) -> float:
        return self._equatorial_radius

    @property
    def polar_radius(self) -> float:
        return self._polar_radius

    @property
    def flattening(self) -> float:
        return self._flattening

    @classmethod
    def from_axes(cls, equatorial_radius: float, polar_radius: float) -> 'Ellipsoid':
        """Create an Ellipsoid from its two radii, deriving the flattening."""
        return cls(
            equatorial_radius,
            polar_radius,
            (equatorial_radius - polar_radius) / equatorial_radius
        )

    @classmethod
    def from_inverse_flattening(
        cls,
        equatorial_radius: float,
        inverse_flattening: float
    ) -> 'Ellipsoid':
        """
        Create an Ellipsoid from its equatorial radius and inverse flattening
        (1/f), which is how most geodetic datums publish their parameters.

        Args:
            equatorial_radius:
                The semi-major axis, a

            inverse_flattening:
                The reciprocal of the flattening, e.g. 298.257223563 for WGS84

        Returns:
            Ellipsoid
        """
        flattening = 1 / inverse_flattening
        return cls(
            equatorial_radius,
            equatorial_radius * (1 - flattening),
            flattening
        )

    def to_tuple(self):
        """The (equatorial radius, polar radius, flattening) triple"""
        return self.equatorial_radius, self.polar_radius, self.flattening


WGS84 = Ellipsoid(WGS84_A, WGS84_B, WGS84_F)
GRS80 = Ellipsoid(GRS80_A, GRS80_B, GRS80_F)

_ELLIPSOIDS = {
    'wgs84': WGS84,
    'grs80': GRS80,
}


def get_ellipsoid(ellipsoid: Union[str, Ellipsoid]) -> Ellipsoid:
    """
    Look up a named ellipsoid (case-insensitive). Ellipsoid instances are
    returned unchanged.

    Args:
        ellipsoid:
            'WGS84', 'GRS80', or an Ellipsoid

    Returns:
        Ellipsoid
    """
    if isinstance(ellipsoid, Ellipsoid):
        return ellipsoid

    try:
        return _ELLIPSOIDS[ellipsoid.lower()]
    except KeyError as e:
        raise ValueError(
            f"Unknown ellipsoid '{ellipsoid}'. Options: {[x.upper() for x in _ELLIPSOIDS]}"
        ) from e
