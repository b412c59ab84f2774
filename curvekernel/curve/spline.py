"""Polynomial splines in Bezier form, of any degree and dimension.

Control points are arrays of shape (n+1, d) for a spline of degree n. The
helpers in this module operate on bare control-point arrays so that the
rational splines can reuse them on homogeneous coordinates.
"""

import math
import numpy

from ..interval import VectorBoundingBox
from . import base

def de_casteljau(points, t):
    """Evaluate the Bezier curve with the given control points at parameter t.

    Parameters:
        points: array of shape (k, d)
        t: scalar or array of shape (m,)

    Returns: array of shape (d,) for scalar t, or (m, d).

    The blend (1-t)*a + t*b reproduces the first and last control points
    exactly at t=0 and t=1.
    """
    t, scalar = base.parameter_array(t)
    tt = numpy.atleast_1d(t)[:, numpy.newaxis, numpy.newaxis]
    work = numpy.broadcast_to(points, (len(tt),) + points.shape)
    while work.shape[1] > 1:
        work = (1 - tt) * work[:, :-1] + tt * work[:, 1:]
    result = work[:, 0]
    return result[0] if scalar else result

def split(points, t):
    """Split Bezier control points at parameter t, returning the control
    points of the [0, t] and [t, 1] pieces."""
    left = [points[0]]
    right = [points[-1]]
    work = points
    while len(work) > 1:
        work = (1 - t) * work[:-1] + t * work[1:]
        left.append(work[0])
        right.append(work[-1])
    return numpy.array(left), numpy.array(right[::-1])

def subrange(points, t0, t1):
    """Return the Bezier control points of the piece of the curve on [t0, t1].

    By the convex hull property, these control points bound the curve's values
    over that parameter range."""
    if t0 == 0 and t1 == 1:
        return points
    if t1 == 0:
        return numpy.repeat(points[:1], len(points), axis=0)
    left, _ = split(points, t1)
    _, piece = split(left, t0 / t1)
    return piece

def hodograph(points):
    """Return the control points of the derivative of a Bezier curve.

    The derivative of a constant (single control point) is a zero vector."""
    degree = len(points) - 1
    if degree == 0:
        return numpy.zeros_like(points)
    return degree * numpy.diff(points, axis=0)

def derivative_points(points, order):
    for _ in range(order):
        points = hodograph(points)
    return points


class Spline(base.Curve):
    """Polynomial Bezier curve of arbitrary degree.

    Parameters:
        control_points: array of shape (n+1, d), n >= 1; the curve starts at the
            first control point and ends at the last.
    """
    def __init__(self, control_points):
        points = numpy.array(control_points, dtype=float)
        if points.ndim != 2 or len(points) < 2:
            raise ValueError('control_points must have shape (n+1, d) with n >= 1.')
        self._check_count(len(points))
        points.flags.writeable = False
        self._points = points

    def _check_count(self, count):
        pass

    def __repr__(self):
        return '{}({})'.format(type(self).__name__, self._points.tolist())

    @property
    def control_points(self):
        return self._points

    @property
    def degree(self):
        return len(self._points) - 1

    @property
    def dimension(self):
        return self._points.shape[1]

    @property
    def max_derivative_order(self):
        return self.degree

    def point_on(self, t):
        return de_casteljau(self._points, t)

    def derivative(self, t, order=1):
        return de_casteljau(derivative_points(self._points, order), t)

    def bounding_box(self):
        return VectorBoundingBox.hull(self._points)

    def first_derivative_bounding_box(self, t0=0, t1=1):
        """Return a box containing first_derivative(t) for all t in [t0, t1]."""
        return VectorBoundingBox.hull(subrange(hodograph(self._points), t0, t1))

    def second_derivative_bounding_box(self, t0=0, t1=1):
        return VectorBoundingBox.hull(subrange(derivative_points(self._points, 2), t0, t1))

    def max_second_derivative_magnitude(self):
        """Return an upper bound on the magnitude of the second derivative: the
        largest norm among the second-derivative control points."""
        return numpy.sqrt((derivative_points(self._points, 2)**2).sum(axis=1)).max()

    def num_approximation_segments(self, max_error):
        """Return the number of equal-parameter line segments needed to keep
        the polyline within max_error of the curve.

        Uses the bound error <= M * h**2 / 8 for chords over a parameter step h,
        where M bounds the second derivative magnitude.
        """
        if not max_error > 0:
            raise ValueError('max_error must be positive.')
        m = self.max_second_derivative_magnitude()
        return max(1, int(math.ceil(math.sqrt(m / (8 * max_error)))))

    def split_at(self, t):
        """Return the two splines of the same degree covering [0, t] and [t, 1]."""
        left, right = split(self._points, float(t))
        return type(self)(left), type(self)(right)

    def reverse(self):
        return type(self)(self._points[::-1])

    def is_degenerate(self):
        return bool(numpy.all(self._points == self._points[0]))

    def _transformed(self, map_point, map_vector, reverses_orientation):
        return type(self)(map_point(self._points))


class QuadraticSpline(Spline):
    """Quadratic Bezier curve: three control points."""
    def _check_count(self, count):
        if count != 3:
            raise ValueError('A quadratic spline needs exactly 3 control points, got {}.'.format(count))

    @classmethod
    def from_control_points(cls, first, second, third):
        return cls([first, second, third])

    @property
    def first_control_point(self):
        return self._points[0]

    @property
    def second_control_point(self):
        return self._points[1]

    @property
    def third_control_point(self):
        return self._points[2]

    def max_second_derivative_magnitude(self):
        # the second derivative of a quadratic is constant
        return numpy.linalg.norm(2 * (self._points[0] - 2 * self._points[1] + self._points[2]))


class CubicSpline(Spline):
    """Cubic Bezier curve: four control points."""
    def _check_count(self, count):
        if count != 4:
            raise ValueError('A cubic spline needs exactly 4 control points, got {}.'.format(count))

    @classmethod
    def from_control_points(cls, first, second, third, fourth):
        return cls([first, second, third, fourth])

    @classmethod
    def from_endpoints(cls, start_point, start_derivative, end_point, end_derivative):
        """Construct the cubic (Hermite) spline with the given endpoints and
        first derivatives at those endpoints."""
        start_point = numpy.asarray(start_point, dtype=float)
        end_point = numpy.asarray(end_point, dtype=float)
        return cls([start_point,
                    start_point + numpy.asarray(start_derivative, dtype=float) / 3,
                    end_point - numpy.asarray(end_derivative, dtype=float) / 3,
                    end_point])

    @property
    def first_control_point(self):
        return self._points[0]

    @property
    def second_control_point(self):
        return self._points[1]

    @property
    def third_control_point(self):
        return self._points[2]

    @property
    def fourth_control_point(self):
        return self._points[3]
