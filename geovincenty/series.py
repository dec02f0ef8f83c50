"""
Series coefficients shared by the Vincenty inverse and direct solvers.

These follow Vincenty's 1975 formulation, using the modified expansion in
k = (sqrt(1 + u^2) - 1) / (sqrt(1 + u^2) + 1) for the A and B coefficients.
"""

__all__ = [
    'coefficient_a', 'coefficient_b', 'coefficient_c', 'delta_sigma',
    'reduced_latitude', 'reduced_u_squared', 'series_coefficient',
]

import math
from typing import Tuple

from geovincenty.ellipsoid import Ellipsoid


def reduced_latitude(ellipsoid: Ellipsoid, latitude: float) -> Tuple[float, float, float]:
    """
    The reduced (parametric) latitude U of a geodetic latitude.

    Args:
        ellipsoid:
            The reference ellipsoid

        latitude:
            Geodetic latitude, in radians

    Returns:
        (tan U, sin U, cos U)
    """
    tan_u = (1 - ellipsoid.flattening) * math.tan(latitude)
    cos_u = 1 / math.sqrt(1 + tan_u * tan_u)
    return tan_u, tan_u * cos_u, cos_u


def reduced_u_squared(ellipsoid: Ellipsoid, cos_sq_alpha: float) -> float:
    """u^2 = cos^2(alpha) * (a^2 - b^2) / b^2"""
    b_sq = ellipsoid.polar_radius ** 2
    return cos_sq_alpha * (ellipsoid.equatorial_radius ** 2 - b_sq) / b_sq


def series_coefficient(u_sq: float) -> float:
    s = math.sqrt(1 + u_sq)
    return (s - 1) / (s + 1)


def coefficient_a(k: float) -> float:
    return (1 + k ** 2 / 4) / (1 - k)


def coefficient_b(k: float) -> float:
    return k * (1 - 3 * k ** 2 / 8)


def coefficient_c(ellipsoid: Ellipsoid, cos_sq_alpha: float) -> float:
    f = ellipsoid.flattening
    return f / 16 * cos_sq_alpha * (4 + f * (4 - 3 * cos_sq_alpha))


def delta_sigma(b: float, sin_sigma: float, cos_sigma: float, cos_2sigma_m: float) -> float:
    """
    The difference between the angular distance on the auxiliary sphere and
    the ellipsoidal distance scaled by b * A (Vincenty eq. 6).

    Args:
        b:
            The B series coefficient

        sin_sigma:
            sin of the angular distance

        cos_sigma:
            cos of the angular distance

        cos_2sigma_m:
            cos of twice the angular distance from the equator to the midpoint

    Returns:
        float
    """
    return b * sin_sigma * (
        cos_2sigma_m + b / 4 * (
            cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m) -
            b / 6 * cos_2sigma_m * (-3 + 4 * sin_sigma * sin_sigma) *
            (-3 + 4 * cos_2sigma_m * cos_2sigma_m)
        )
    )
