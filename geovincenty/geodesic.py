"""
Module-level geodesic calculations, dispatched to a default VincentyCalculator.

The default calculator uses the WGS84 ellipsoid with no iteration cap and may
be replaced using set_default_calculator().
"""

__all__ = [
    'bearing_degrees', 'destination_point', 'distance_meters', 'final_bearing_degrees',
    'get_default_calculator', 'set_default_calculator',
]

from typing import Optional, Union

from geovincenty._base import PointLike
from geovincenty.coordinates import Coordinate
from geovincenty.ellipsoid import Ellipsoid, get_ellipsoid
from geovincenty.utils.logging import LOGGER
from geovincenty.vincenty import VincentyCalculator


_CALCULATOR = VincentyCalculator()


def get_default_calculator() -> VincentyCalculator:
    """The calculator currently backing the module-level functions"""
    return _CALCULATOR


def set_default_calculator(
    ellipsoid: Union[str, Ellipsoid] = 'WGS84',
    max_iterations: Optional[int] = None,
) -> VincentyCalculator:
    """
    Replace the calculator backing the module-level functions.

    Args:
        ellipsoid:
            (Default 'WGS84') An ellipsoid name ('WGS84', 'GRS80') or an Ellipsoid

        max_iterations:
            (Optional) The iteration cap for both solvers

    Returns:
        The new default VincentyCalculator
    """
    global _CALCULATOR  # pylint: disable=global-statement

    _CALCULATOR = VincentyCalculator(get_ellipsoid(ellipsoid), max_iterations)
    LOGGER.debug('Default geodesic calculator set to %r', _CALCULATOR)
    return _CALCULATOR


def distance_meters(start: PointLike, end: PointLike) -> float:
    """
    Calculate the geodesic distance between two points. The result is in meters
    for the named ellipsoids, otherwise in the unit of the ellipsoid's radii.
    """
    return _CALCULATOR.distance(start, end)


def bearing_degrees(start: PointLike, end: PointLike) -> float:
    """Calculate the initial bearing from start towards end, in degrees [0, 360)"""
    return _CALCULATOR.initial_bearing(start, end)


def final_bearing_degrees(start: PointLike, end: PointLike) -> float:
    """Calculate the bearing on arrival at end, in degrees [0, 360)"""
    return _CALCULATOR.final_bearing(start, end)


def destination_point(start: PointLike, bearing: float, distance: float) -> Coordinate:
    """
    Calculate the destination reached from start along a geodesic.

    Args:
        start:
            The starting location

        bearing:
            The initial bearing, in degrees clockwise from north

        distance:
            The distance to travel (meters for the named ellipsoids)

    Returns:
        Coordinate
    """
    return _CALCULATOR.destination(start, bearing, distance)
