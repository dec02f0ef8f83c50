"""
Vincenty's inverse and direct solutions of geodesics on the ellipsoid.

Reference:
    T. Vincenty, "Direct and Inverse Solutions of Geodesics on the Ellipsoid
    with application of nested equations", Survey Review XXIII (176), 1975.
"""

__all__ = ['DirectResult', 'InverseResult', 'VincentyCalculator']

import math
from typing import Any, Callable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from pydantic import PositiveInt, validate_call

from geovincenty._base import PointLike
from geovincenty._const import CONVERGENCE_TOLERANCE, M_2_PI, M_3_PI
from geovincenty.coordinates import Coordinate
from geovincenty.ellipsoid import WGS84, Ellipsoid
from geovincenty.series import (
    coefficient_a, coefficient_b, coefficient_c, delta_sigma,
    reduced_latitude, reduced_u_squared, series_coefficient,
)
from geovincenty.utils.mixins import LoggingMixin


class InverseResult(NamedTuple):
    """Solution of the inverse problem. Bearings are in degrees, [0, 360)."""
    distance: float
    initial_bearing: float
    final_bearing: float
    iterations: int
    converged: bool


class DirectResult(NamedTuple):
    """
    Solution of the direct problem. The destination is either a
    (latitude, longitude) tuple in degrees or a point built by the
    calculator's point factory, and the final bearing is in degrees, [0, 360).
    """
    destination: Any
    final_bearing: float
    iterations: int
    converged: bool


class VincentyCalculator(LoggingMixin):
    """
    Computes distances, bearings and destinations on a reference ellipsoid
    using Vincenty's iterative formulae.

    A calculator holds no per-call state, so a single instance may be shared
    freely (including across threads).

    Args:
        ellipsoid:
            (Default WGS84) The reference ellipsoid. Distances are in the same
            unit as the ellipsoid's radii.

        max_iterations:
            (Optional) Caps the number of iterations each solver may take. When
            the cap is reached before convergence, the best available estimate
            is returned. If None, iterate until convergence.

        point_factory:
            (Default Coordinate.from_lat_lon) A callable accepting
            (latitude, longitude) in degrees, used to build destination points.
    """

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(
        self,
        ellipsoid: Ellipsoid = WGS84,
        max_iterations: Optional[PositiveInt] = None,
        point_factory: Callable[[float, float], Any] = Coordinate.from_lat_lon,
    ):
        super().__init__()
        self._ellipsoid = ellipsoid
        self._max_iterations = max_iterations
        self._point_factory = point_factory

    def __repr__(self):
        return (
            f'<VincentyCalculator on {self._ellipsoid!r}, '
            f'max_iterations={self._max_iterations}>'
        )

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    @property
    def max_iterations(self) -> Optional[int]:
        return self._max_iterations

    @property
    def point_factory(self) -> Callable[[float, float], Any]:
        return self._point_factory

    @staticmethod
    def _to_radians(point: PointLike) -> Tuple[float, float]:
        """Resolves a PointLike to a (latitude, longitude) pair in radians"""
        coord = point.to_coordinate()
        return math.radians(coord.latitude), math.radians(coord.longitude)

    def _cap_reached(self, iterations: int) -> bool:
        return self._max_iterations is not None and iterations >= self._max_iterations

    def _warn_not_converged(self, problem: str):
        self.warn_once(
            'Vincenty %s solution did not converge within %d iterations; '
            'returning best available estimate.',
            problem,
            self._max_iterations
        )

    def inverse_radians(
        self,
        start_lat: float,
        start_lon: float,
        end_lat: float,
        end_lon: float,
    ) -> InverseResult:
        """
        Solve the inverse problem between two points.

        Args:
            start_lat, start_lon:
                The start point, in radians

            end_lat, end_lon:
                The end point, in radians

        Returns:
            InverseResult; bearings are in degrees
        """
        f = self._ellipsoid.flattening
        L = end_lon - start_lon  # pylint: disable=invalid-name

        _, sin_u1, cos_u1 = reduced_latitude(self._ellipsoid, start_lat)
        _, sin_u2, cos_u2 = reduced_latitude(self._ellipsoid, end_lat)

        lam = L
        iterations = 0
        while True:
            sin_lam, cos_lam = math.sin(lam), math.cos(lam)
            sin_sigma = math.sqrt(
                (cos_u2 * sin_lam) * (cos_u2 * sin_lam) +
                (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) *
                (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
            )

            if sin_sigma == 0:
                # Coincident points
                return InverseResult(0., 0., 0., iterations + 1, True)

            cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
            sigma = math.atan2(sin_sigma, cos_sigma)
            sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
            cos_sq_alpha = 1 - sin_alpha * sin_alpha

            try:
                cos_2sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha
            except ZeroDivisionError:
                # Equatorial line
                cos_2sigma_m = 0.

            C = coefficient_c(self._ellipsoid, cos_sq_alpha)  # pylint: disable=invalid-name
            lam_prev = lam
            lam = L + (1 - C) * f * sin_alpha * (
                sigma + C * sin_sigma * (
                    cos_2sigma_m + C * cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
                )
            )
            iterations += 1

            if abs(lam - lam_prev) <= CONVERGENCE_TOLERANCE:
                converged = True
                break

            if self._cap_reached(iterations):
                converged = False
                self._warn_not_converged('inverse')
                break

        self.logger.debug('Inverse solution finished after %d iterations', iterations)

        k = series_coefficient(reduced_u_squared(self._ellipsoid, cos_sq_alpha))
        A = coefficient_a(k)  # pylint: disable=invalid-name
        B = coefficient_b(k)  # pylint: disable=invalid-name

        distance = self._ellipsoid.polar_radius * A * (
            sigma - delta_sigma(B, sin_sigma, cos_sigma, cos_2sigma_m)
        )

        alpha1 = math.atan2(
            cos_u2 * sin_lam,
            cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam
        )
        alpha2 = math.atan2(
            cos_u1 * sin_lam,
            -sin_u1 * cos_u2 + cos_u1 * sin_u2 * cos_lam
        )

        return InverseResult(
            distance,
            math.degrees((alpha1 + M_2_PI) % M_2_PI),
            math.degrees((alpha2 + M_2_PI) % M_2_PI),
            iterations,
            converged,
        )

    def direct_radians(
        self,
        start_lat: float,
        start_lon: float,
        bearing: float,
        distance: float,
    ) -> DirectResult:
        """
        Solve the direct problem from a start point.

        Args:
            start_lat, start_lon:
                The start point, in radians

            bearing:
                The initial bearing, in radians clockwise from north

            distance:
                The distance to travel, in the ellipsoid's linear unit

        Returns:
            DirectResult with a (latitude, longitude) destination tuple and final
            bearing, all in degrees
        """
        f = self._ellipsoid.flattening
        sin_alpha1, cos_alpha1 = math.sin(bearing), math.cos(bearing)

        tan_u1, sin_u1, cos_u1 = reduced_latitude(self._ellipsoid, start_lat)
        sigma1 = math.atan2(tan_u1, cos_alpha1)
        sin_alpha = cos_u1 * sin_alpha1
        cos_sq_alpha = 1 - sin_alpha * sin_alpha

        k = series_coefficient(reduced_u_squared(self._ellipsoid, cos_sq_alpha))
        A = coefficient_a(k)  # pylint: disable=invalid-name
        B = coefficient_b(k)  # pylint: disable=invalid-name

        sigma_s = distance / (self._ellipsoid.polar_radius * A)
        sigma = sigma_s
        iterations = 0
        while True:
            cos_2sigma_m = math.cos(2 * sigma1 + sigma)
            sin_sigma, cos_sigma = math.sin(sigma), math.cos(sigma)
            sigma_prev = sigma
            sigma = sigma_s + delta_sigma(B, sin_sigma, cos_sigma, cos_2sigma_m)
            iterations += 1

            if abs(sigma - sigma_prev) <= CONVERGENCE_TOLERANCE:
                converged = True
                break

            if self._cap_reached(iterations):
                converged = False
                self._warn_not_converged('direct')
                break

        self.logger.debug('Direct solution finished after %d iterations', iterations)

        tmp = sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_alpha1
        end_lat = math.atan2(
            sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_alpha1,
            (1 - f) * math.sqrt(sin_alpha * sin_alpha + tmp * tmp)
        )
        lam = math.atan2(
            sin_sigma * sin_alpha1,
            cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_alpha1
        )
        C = coefficient_c(self._ellipsoid, cos_sq_alpha)  # pylint: disable=invalid-name
        L = lam - (1 - C) * f * sin_alpha * (  # pylint: disable=invalid-name
            sigma + C * sin_sigma * (
                cos_2sigma_m + C * cos_sigma * (-1 + 2 * cos_2sigma_m * cos_2sigma_m)
            )
        )
        end_lon = (start_lon + L + M_3_PI) % M_2_PI - math.pi

        final_bearing = (math.atan2(sin_alpha, -tmp) + M_2_PI) % M_2_PI

        return DirectResult(
            (math.degrees(end_lat), math.degrees(end_lon)),
            math.degrees(final_bearing),
            iterations,
            converged,
        )

    def inverse(self, start: PointLike, end: PointLike) -> InverseResult:
        """
        Solve the inverse problem between two points.

        Args:
            start:
                The start point (a Coordinate or anything PointLike)

            end:
                The end point (a Coordinate or anything PointLike)

        Returns:
            InverseResult
        """
        return self.inverse_radians(*self._to_radians(start), *self._to_radians(end))

    def direct(self, start: PointLike, bearing: float, distance: float) -> DirectResult:
        """
        Solve the direct problem from a start point. The destination is built
        using this calculator's point factory.

        Args:
            start:
                The start point (a Coordinate or anything PointLike)

            bearing:
                The initial bearing, in degrees clockwise from north

            distance:
                The distance to travel, in the ellipsoid's linear unit

        Returns:
            DirectResult
        """
        result = self.direct_radians(*self._to_radians(start), math.radians(bearing), distance)
        return result._replace(destination=self._point_factory(*result.destination))

    def distance(self, start: PointLike, end: PointLike) -> float:
        """The geodesic distance between two points, in the ellipsoid's linear unit"""
        return self.inverse(start, end).distance

    def initial_bearing(self, start: PointLike, end: PointLike) -> float:
        """The bearing at the start point, in degrees [0, 360)"""
        return self.inverse(start, end).initial_bearing

    def final_bearing(self, start: PointLike, end: PointLike) -> float:
        """The bearing on arrival at the end point, in degrees [0, 360)"""
        return self.inverse(start, end).final_bearing

    def destination(self, start: PointLike, bearing: float, distance: float) -> Any:
        """
        The point reached by travelling a distance along a geodesic from a start
        point with an initial bearing.

        Args:
            start:
                The start point (a Coordinate or anything PointLike)

            bearing:
                The initial bearing, in degrees clockwise from north

            distance:
                The distance to travel, in the ellipsoid's linear unit

        Returns:
            The destination, as built by the point factory (a Coordinate by default)
        """
        return self.direct(start, bearing, distance).destination

    def path_distance(self, points: Sequence[PointLike]) -> float:
        """
        The total length of a path following geodesics between consecutive points.

        Args:
            points:
                An ordered sequence of points

        Returns:
            float; zero when fewer than two points are given
        """
        return sum(
            self.distance(start, end)
            for start, end in zip(points, points[1:])
        )

    def distance_matrix(self, points: Sequence[PointLike]) -> np.ndarray:
        """
        Pairwise geodesic distances between a set of points.

        Args:
            points:
                A sequence of n points

        Returns:
            A symmetric (n, n) array with zeros on the diagonal
        """
        coords: List[Tuple[float, float]] = [self._to_radians(x) for x in points]
        out = np.zeros((len(coords), len(coords)))
        for i, start in enumerate(coords):
            for j in range(i + 1, len(coords)):
                out[i, j] = out[j, i] = self.inverse_radians(*start, *coords[j]).distance

        return out
