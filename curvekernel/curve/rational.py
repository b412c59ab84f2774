"""Rational Bezier curves: weighted control points, evaluated in homogeneous
coordinates. A rational quadratic can represent circular and other conic arcs
exactly."""

import math
import numpy
from scipy import special

from ..interval import Interval, VectorBoundingBox
from . import base
from . import spline

class RationalSpline(base.Curve):
    """Rational Bezier curve of arbitrary degree.

    Parameters:
        control_points: array of shape (n+1, d), n >= 1
        weights: array of n+1 strictly positive weights. Equal weights give the
            same curve as a (non-rational) Spline on the same control points.
    """
    def __init__(self, control_points, weights):
        points = numpy.array(control_points, dtype=float)
        weights = numpy.array(weights, dtype=float)
        if points.ndim != 2 or len(points) < 2:
            raise ValueError('control_points must have shape (n+1, d) with n >= 1.')
        if weights.shape != (len(points),):
            raise ValueError('Expected {} weights, got shape {}.'.format(len(points), weights.shape))
        if not numpy.all(weights > 0):
            raise ValueError('Rational spline weights must be positive.')
        self._check_count(len(points))
        points.flags.writeable = False
        weights.flags.writeable = False
        self._points = points
        self._weights = weights
        self._homogeneous = numpy.column_stack([points * weights[:, numpy.newaxis], weights])

    def _check_count(self, count):
        pass

    def __repr__(self):
        return '{}({}, {})'.format(type(self).__name__, self._points.tolist(), self._weights.tolist())

    @property
    def control_points(self):
        return self._points

    @property
    def weights(self):
        return self._weights

    @property
    def degree(self):
        return len(self._points) - 1

    @property
    def dimension(self):
        return self._points.shape[1]

    @property
    def max_derivative_order(self):
        return self.degree + 1

    def point_on(self, t):
        t, scalar = base.parameter_array(t)
        if scalar:
            if t == 0:
                return self._points[0].copy()
            if t == 1:
                return self._points[-1].copy()
        h = spline.de_casteljau(self._homogeneous, t)
        points = h[..., :-1] / h[..., -1:]
        if not scalar:
            points[t == 0] = self._points[0]
            points[t == 1] = self._points[-1]
        return points

    def derivative(self, t, order=1):
        """Return the derivative of the given order, by the quotient rule
        P^(k) = (A^(k) - sum_{i=1..k} C(k,i) w^(i) P^(k-i)) / w
        where A = w*P is the homogeneous numerator."""
        numerators = []
        weight_derivatives = []
        control = self._homogeneous
        for _ in range(order + 1):
            h = spline.de_casteljau(control, t)
            numerators.append(h[..., :-1])
            weight_derivatives.append(h[..., -1:])
            control = spline.hodograph(control)
        w = weight_derivatives[0]
        derivatives = [numerators[0] / w]
        for k in range(1, order + 1):
            total = numerators[k]
            for i in range(1, k + 1):
                total = total - special.comb(k, i) * weight_derivatives[i] * derivatives[k - i]
            derivatives.append(total / w)
        return derivatives[order]

    def bounding_box(self):
        return VectorBoundingBox.hull(self._points)

    def first_derivative_bounding_box(self, t0=0, t1=1):
        """Return a box containing first_derivative(t) for all t in [t0, t1].

        With A = w*P, P' = (A' - w'P) / w; each of A', w', P and w is bounded over
        [t0, t1] by the convex hull of the corresponding sub-range control
        points, and the bounds are combined with interval arithmetic.
        """
        homogeneous = spline.subrange(self._homogeneous, t0, t1)
        derivatives = spline.subrange(spline.hodograph(self._homogeneous), t0, t1)
        points = VectorBoundingBox.hull(homogeneous[:, :-1] / homogeneous[:, -1:])
        numerator = VectorBoundingBox.hull(derivatives[:, :-1])
        weight_derivative = Interval.hull(derivatives[:, -1])
        weight = Interval.hull(homogeneous[:, -1])
        return numerator.minus(points.times(weight_derivative)).divide_by(weight)

    def num_approximation_segments(self, max_error):
        """Estimate the number of equal-parameter line segments needed to keep
        the polyline within max_error of the curve, from the largest second
        derivative magnitude found at a fixed set of sample parameters."""
        if not max_error > 0:
            raise ValueError('max_error must be positive.')
        ts = numpy.linspace(0, 1, 8 * (self.degree + 1) + 1)
        m = numpy.sqrt((self.second_derivative(ts)**2).sum(axis=1)).max()
        return max(1, int(math.ceil(math.sqrt(m / (8 * max_error)))))

    def split_at(self, t):
        left, right = spline.split(self._homogeneous, float(t))
        return self._from_homogeneous(left), self._from_homogeneous(right)

    def _from_homogeneous(self, homogeneous):
        weights = homogeneous[:, -1]
        return type(self)(homogeneous[:, :-1] / weights[:, numpy.newaxis], weights)

    def reverse(self):
        return type(self)(self._points[::-1], self._weights[::-1])

    def is_degenerate(self):
        return bool(numpy.all(self._points == self._points[0]))

    def _transformed(self, map_point, map_vector, reverses_orientation):
        return type(self)(map_point(self._points), self._weights)


class RationalQuadraticSpline(RationalSpline):
    """Rational quadratic Bezier curve: three weighted control points."""
    def _check_count(self, count):
        if count != 3:
            raise ValueError('A rational quadratic spline needs exactly 3 control points, got {}.'.format(count))

    @classmethod
    def from_arc(cls, arc):
        """Return the rational quadratic exactly representing a circular Arc
        whose swept angle is less than pi in magnitude.

        The middle control point is the intersection of the end tangents, with
        weight cos(swept_angle / 2).
        """
        half_angle = arc.swept_angle / 2
        if not abs(half_angle) < math.pi / 2:
            raise ValueError('Only arcs sweeping less than pi radians are a single rational quadratic.')
        center = arc.center_point
        bisector = arc.midpoint() - center
        middle = center + bisector / math.cos(half_angle)
        return cls([arc.start_point(), middle, arc.end_point()], [1, math.cos(half_angle), 1])


class RationalCubicSpline(RationalSpline):
    """Rational cubic Bezier curve: four weighted control points."""
    def _check_count(self, count):
        if count != 4:
            raise ValueError('A rational cubic spline needs exactly 4 control points, got {}.'.format(count))
