import numpy

from .. import errors
from .. import frame
from . import geometry

# relative size below which a derivative is treated as zero, and the number of
# parameter values sampled to find the size of a derivative
ZERO_TOLERANCE = 1e-12
SCALE_SAMPLES = 17

def parameter_array(t):
    """Return (t as a float array, whether t was a scalar)."""
    t = numpy.asarray(t, dtype=float)
    return t, t.ndim == 0

class Curve:
    """Base class of the curve variants: Arc, EllipticalArc, Spline (with
    QuadraticSpline and CubicSpline) and RationalSpline (with
    RationalQuadraticSpline and RationalCubicSpline).

    All curves are immutable and parameterized over [0, 1]. Evaluation methods
    accept a scalar parameter, returning an array of shape (d,), or an array of
    m parameters, returning an array of shape (m, d).

    Subclasses implement point_on, derivative, bounding_box,
    first_derivative_bounding_box, num_approximation_segments, reverse,
    is_degenerate and _transformed; everything else is defined here in terms
    of those.
    """
    # highest derivative order consulted when looking for a tangent direction
    # at a parameter value where the first derivative vanishes
    max_derivative_order = 2

    @property
    def dimension(self):
        raise NotImplementedError()

    def point_on(self, t):
        raise NotImplementedError()

    def derivative(self, t, order=1):
        raise NotImplementedError()

    def first_derivative(self, t):
        return self.derivative(t, 1)

    def second_derivative(self, t):
        return self.derivative(t, 2)

    def start_point(self):
        return self.point_on(0.0)

    def end_point(self):
        return self.point_on(1.0)

    def midpoint(self):
        return self.point_on(0.5)

    def start_derivative(self):
        return self.first_derivative(0.0)

    def end_derivative(self):
        return self.first_derivative(1.0)

    def bounding_box(self):
        raise NotImplementedError()

    def first_derivative_bounding_box(self, t0=0, t1=1):
        raise NotImplementedError()

    def num_approximation_segments(self, max_error):
        raise NotImplementedError()

    def sample(self, num_points):
        """Evaluate the curve at num_points equally-spaced parameter values,
        returning an array of shape (num_points, d)."""
        return self.point_on(numpy.linspace(0, 1, num_points))

    def approximate(self, max_error):
        """Return a polyline, shape (n+1, d), within roughly max_error of the
        curve, where n = num_approximation_segments(max_error)."""
        return self.sample(self.num_approximation_segments(max_error) + 1)

    def approximate_length(self, max_error):
        """Return the length of the polyline from approximate(max_error): a
        quick, non-adaptive underestimate of the arc length. Use
        ArcLengthParameterization for a bounded-error result."""
        return geometry.polyline_length(self.approximate(max_error))

    def reverse(self):
        raise NotImplementedError()

    def is_degenerate(self):
        raise NotImplementedError()

    def nondegenerate(self):
        """Return a Nondegenerate wrapper around this curve, or raise
        DegenerateCurveError if the curve is a single point."""
        return Nondegenerate(self)

    def _transformed(self, map_point, map_vector, reverses_orientation):
        """Return a new curve of the same class, given functions that map
        points and vectors, and whether the map reverses orientation (only
        relevant to curves that store a signed swept angle)."""
        raise NotImplementedError()

    def translate_by(self, displacement):
        displacement = numpy.asarray(displacement, dtype=float)
        return self._transformed(lambda p: frame.translate(p, displacement), lambda v: v, False)

    def rotate_around(self, center_or_axis, angle):
        """Rotate by angle (radians) around a 2D center point or a 3D frame.Axis."""
        return self._transformed(
            lambda p: frame.rotate_points(p, center_or_axis, angle),
            lambda v: frame.rotate_vectors(v, center_or_axis, angle),
            False)

    def scale_about(self, point, factor):
        return self._transformed(
            lambda p: frame.scale_points(p, point, factor),
            lambda v: frame.scale_vectors(v, factor),
            False)

    def mirror_across(self, axis_or_plane):
        """Mirror across a 2D frame.Axis or a 3D frame.Plane."""
        return self._transformed(
            lambda p: frame.mirror_points(p, axis_or_plane),
            lambda v: frame.mirror_vectors(v, axis_or_plane),
            True)

    def place_in(self, reference_frame):
        """Interpret this curve as defined in the local coordinates of the given
        frame and return it in global coordinates."""
        return self._transformed(reference_frame.global_points, reference_frame.global_vectors,
            not reference_frame.is_right_handed)

    def relative_to(self, reference_frame):
        """Return this curve expressed in the local coordinates of the given frame."""
        return self._transformed(reference_frame.local_points, reference_frame.local_vectors,
            not reference_frame.is_right_handed)


class Nondegenerate:
    """A curve whose derivative is not identically zero.

    Construct with curve.nondegenerate(). Only nondegenerate curves can be
    arc-length parameterized. The derivative may still vanish at isolated
    parameter values (cusps); tangent_direction() resolves those from higher
    derivatives.
    """
    def __init__(self, curve):
        if curve.is_degenerate():
            raise errors.DegenerateCurveError('{!r} collapses to a single point.'.format(curve))
        self.curve = curve

    def __repr__(self):
        return 'Nondegenerate({!r})'.format(self.curve)

    def point_on(self, t):
        return self.curve.point_on(t)

    def first_derivative(self, t):
        return self.curve.first_derivative(t)

    def first_derivative_bounding_box(self, t0=0, t1=1):
        return self.curve.first_derivative_bounding_box(t0, t1)

    def derivative_scale(self, order):
        """Return the largest norm of the given derivative at a fixed set of
        sample parameters: the scale against which round-off in that
        derivative is judged."""
        derivatives = self.curve.derivative(numpy.linspace(0, 1, SCALE_SAMPLES), order)
        return numpy.sqrt((derivatives**2).sum(axis=-1)).max()

    def tangent_direction(self, t):
        """Return the unit tangent direction at parameter value t.

        Where the first derivative is zero, the first non-zero higher
        derivative gives the direction of the one-sided limit (from the right,
        or from the left at t = 1). A derivative counts as zero when its norm
        is at most ZERO_TOLERANCE times derivative_scale(order), so that a zero
        computed with round-off (e.g. through trigonometry) is still skipped.
        """
        t = float(t)
        for order in range(1, self.curve.max_derivative_order + 1):
            derivative = self.curve.derivative(t, order)
            norm = numpy.linalg.norm(derivative)
            if norm > ZERO_TOLERANCE * self.derivative_scale(order):
                if t == 1 and order % 2 == 0:
                    derivative = -derivative
                return derivative / norm
        raise errors.DegenerateCurveError('{!r} has no tangent direction at t={}.'.format(self.curve, t))
