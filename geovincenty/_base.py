"""
Base class declarations for geovincenty
"""

from __future__ import annotations

__all__ = ['PointLike']

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from geovincenty.coordinates import Coordinate


class PointLike(ABC):  # pylint: disable=too-few-public-methods
    """
    Anything which can be resolved to a single Coordinate. Every geodesic
    operation accepts PointLike inputs, so a bare Coordinate and an object
    wrapping one (e.g. GeoPoint) may be used interchangeably.
    """

    __slots__ = ()

    @abstractmethod
    def to_coordinate(self) -> 'Coordinate':
        """
        The Coordinate this object represents.

        Returns:
            Coordinate
        """
