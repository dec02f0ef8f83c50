from geovincenty._version import __version__  # noqa: F401
from geovincenty.utils.logging import LOGGER
from geovincenty._base import PointLike
from geovincenty.coordinates import Coordinate
from geovincenty.structures import GeoPoint
from geovincenty.ellipsoid import Ellipsoid, GRS80, WGS84, get_ellipsoid
from geovincenty.vincenty import DirectResult, InverseResult, VincentyCalculator


__all__ = [
    'Coordinate',
    'DirectResult',
    'Ellipsoid',
    'GeoPoint',
    'GRS80',
    'InverseResult',
    'PointLike',
    'VincentyCalculator',
    'WGS84',
    'get_ellipsoid',
    'LOGGER',
]
