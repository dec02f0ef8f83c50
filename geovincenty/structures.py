"""
Point aggregates, i.e. objects which carry a Coordinate alongside other data
"""

__all__ = ['GeoPoint']

import copy
from datetime import datetime
from typing import Dict, Optional

from geovincenty._base import PointLike
from geovincenty.coordinates import Coordinate
from geovincenty.utils.functions import default_to_zulu


class GeoPoint(PointLike):

    """
    A Coordinate with an optional timestamp and arbitrary properties. Anywhere
    a Coordinate is accepted, a GeoPoint may be used in its place.

    Args:
        coordinate:
            The location of the point

        dt:
            (Optional) The time the point was observed. Naive datetimes are
            assumed to be UTC.

        properties:
            (Optional) A dictionary of arbitrary properties
    """

    def __init__(
        self,
        coordinate: Coordinate,
        dt: Optional[datetime] = None,
        properties: Optional[Dict] = None,
    ):
        self.coordinate = coordinate
        self.dt = default_to_zulu(dt) if dt is not None else None
        self._properties = properties or {}

    def __eq__(self, other) -> bool:
        if not isinstance(other, GeoPoint):
            return False

        return self.coordinate == other.coordinate and self.dt == other.dt

    def __hash__(self) -> int:
        return hash((self.coordinate, self.dt))

    def __repr__(self) -> str:
        return f'<GeoPoint at {self.coordinate.to_float()}>'

    @property
    def properties(self) -> Dict:
        return self._properties

    def copy(self) -> 'GeoPoint':
        return GeoPoint(
            self.coordinate,
            dt=self.dt,
            properties=copy.deepcopy(self._properties)
        )

    def to_coordinate(self) -> Coordinate:
        return self.coordinate
