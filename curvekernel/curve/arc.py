"""Circular and elliptical arcs.

Both are parameterized by angle: theta(t) = start_angle + t * swept_angle, so
the speed of an arc is constant and that of an elliptical arc varies only with
the ratio of its radii.
"""

import math
import numpy

from ..interval import Interval, VectorBoundingBox
from . import base
from . import geometry

def _angle_interval(start_angle, swept_angle, t0, t1):
    return Interval(start_angle + swept_angle * t0, start_angle + swept_angle * t1)

def _is_2d_point(point):
    return point.shape == (2,)


class Arc(base.Curve):
    """Circular arc in 2D.

    Parameters:
        center_point: array of shape (2,)
        start_point: array of shape (2,); the radius is its distance from the center.
        swept_angle: signed angle in radians; positive values sweep
            counterclockwise.

    Evaluation rotates the start point about the center, written as
    start + (R(theta) - I)(start - center) so that t = 0 gives the start point
    exactly.

    For a circular arc in 3D, use an EllipticalArc whose semi-axis vectors are
    perpendicular and of equal length (the radius).
    """
    def __init__(self, center_point, start_point, swept_angle):
        center_point = numpy.array(center_point, dtype=float)
        start_point = numpy.array(start_point, dtype=float)
        if not (_is_2d_point(center_point) and _is_2d_point(start_point)):
            raise ValueError('Arc center and start points must be 2D.')
        center_point.flags.writeable = False
        start_point.flags.writeable = False
        self._center = center_point
        self._start = start_point
        self._swept = float(swept_angle)

    @classmethod
    def swept_around(cls, center_point, swept_angle, start_point):
        return cls(center_point, start_point, swept_angle)

    @classmethod
    def with_radius(cls, center_point, radius, start_angle, swept_angle):
        center_point = numpy.asarray(center_point, dtype=float)
        start_point = center_point + radius * numpy.array([math.cos(start_angle), math.sin(start_angle)])
        return cls(center_point, start_point, swept_angle)

    @classmethod
    def from_endpoints(cls, start_point, end_point, swept_angle):
        """Construct the arc from start_point to end_point sweeping the given
        signed angle. The center lies on the chord's perpendicular bisector,
        to the left of the chord for swept angles in (0, pi)."""
        start_point = numpy.asarray(start_point, dtype=float)
        end_point = numpy.asarray(end_point, dtype=float)
        chord = end_point - start_point
        chord_length = numpy.linalg.norm(chord)
        if chord_length == 0:
            raise ValueError('Arc endpoints must be distinct.')
        if not 0 < abs(swept_angle) < 2 * math.pi:
            raise ValueError('Swept angle between distinct endpoints must be non-zero and less than 2*pi in magnitude.')
        offset = 0.5 / math.tan(swept_angle / 2)
        center_point = 0.5 * (start_point + end_point) + offset * geometry.perpendiculars(chord)
        return cls(center_point, start_point, swept_angle)

    def __repr__(self):
        return 'Arc({}, {}, {!r})'.format(self._center.tolist(), self._start.tolist(), self._swept)

    @property
    def dimension(self):
        return 2

    @property
    def center_point(self):
        return self._center

    @property
    def radius(self):
        return float(numpy.linalg.norm(self._start - self._center))

    @property
    def start_angle(self):
        offset = self._start - self._center
        return math.atan2(offset[1], offset[0])

    @property
    def swept_angle(self):
        return self._swept

    def point_on(self, t):
        t, scalar = base.parameter_array(t)
        theta = self._swept * t
        rx, ry = self._start - self._center
        c = numpy.cos(theta) - 1
        s = numpy.sin(theta)
        return numpy.stack([self._start[0] + c * rx - s * ry, self._start[1] + s * rx + c * ry], axis=-1)

    def derivative(self, t, order=1):
        t, scalar = base.parameter_array(t)
        phi = self._swept * t + order * math.pi / 2
        offset = numpy.stack([numpy.cos(phi), numpy.sin(phi)], axis=-1)
        rx, ry = self._start - self._center
        # rotate (rx, ry) by phi
        rotated = offset * rx + geometry.perpendiculars(offset) * ry
        return self._swept**order * rotated

    def bounding_box(self):
        angles = _angle_interval(0, self._swept, 0, 1)
        c = Interval.cos_of(angles) - 1
        s = Interval.sin_of(angles)
        rx, ry = self._start - self._center
        return VectorBoundingBox.from_intervals([c * rx - s * ry + self._start[0], s * rx + c * ry + self._start[1]])

    def first_derivative_bounding_box(self, t0=0, t1=1):
        angles = _angle_interval(0, self._swept, t0, t1)
        c = Interval.cos_of(angles)
        s = Interval.sin_of(angles)
        rx, ry = self._start - self._center
        return VectorBoundingBox.from_intervals([(s * -rx - c * ry) * self._swept, (c * rx - s * ry) * self._swept])

    def num_approximation_segments(self, max_error):
        """Return the number of chords needed so that the sagitta of each is at
        most max_error."""
        if not max_error > 0:
            raise ValueError('max_error must be positive.')
        radius = self.radius
        if radius == 0:
            return 1
        max_half_angle = math.acos(max(1 - max_error / radius, -1))
        return max(1, int(math.ceil(abs(self._swept) / (2 * max_half_angle))))

    def reverse(self):
        return Arc(self._center, self.end_point(), -self._swept)

    def is_degenerate(self):
        return self._swept == 0 or bool(numpy.all(self._start == self._center))

    def _transformed(self, map_point, map_vector, reverses_orientation):
        swept = -self._swept if reverses_orientation else self._swept
        return Arc(map_point(self._center), map_point(self._start), swept)


class EllipticalArc(base.Curve):
    """Elliptical arc in 2D or 3D.

    Parameters:
        center_point: array of shape (d,)
        x_axis, y_axis: semi-axis vectors, shape (d,): the ellipse's x and y
            directions scaled by the x and y radii.
        start_angle, swept_angle: angles in radians in the ellipse's own
            coordinates.

    point_on(t) = center + cos(theta) x_axis + sin(theta) y_axis. Since this
    is affine in the center and axis vectors, every transformation is applied
    exactly by mapping the center as a point and the axes as vectors.
    """
    def __init__(self, center_point, x_axis, y_axis, start_angle, swept_angle):
        center_point = numpy.array(center_point, dtype=float)
        x_axis = numpy.array(x_axis, dtype=float)
        y_axis = numpy.array(y_axis, dtype=float)
        if center_point.ndim != 1 or not center_point.shape == x_axis.shape == y_axis.shape:
            raise ValueError('Center point and axis vectors must have the same shape (d,).')
        for array in (center_point, x_axis, y_axis):
            array.flags.writeable = False
        self._center = center_point
        self._x_axis = x_axis
        self._y_axis = y_axis
        self._start_angle = float(start_angle)
        self._swept = float(swept_angle)

    @classmethod
    def with_axes(cls, center_point, x_direction, x_radius, y_radius, start_angle, swept_angle):
        """Construct a 2D elliptical arc from its x direction and radii; the y
        direction is the x direction turned counterclockwise."""
        x_direction = numpy.asarray(x_direction, dtype=float)
        x_direction = x_direction / numpy.linalg.norm(x_direction)
        y_direction = geometry.perpendiculars(x_direction)
        return cls(center_point, x_radius * x_direction, y_radius * y_direction, start_angle, swept_angle)

    def __repr__(self):
        return 'EllipticalArc({}, {}, {}, {!r}, {!r})'.format(self._center.tolist(), self._x_axis.tolist(),
            self._y_axis.tolist(), self._start_angle, self._swept)

    @property
    def dimension(self):
        return len(self._center)

    @property
    def center_point(self):
        return self._center

    @property
    def x_axis(self):
        return self._x_axis

    @property
    def y_axis(self):
        return self._y_axis

    @property
    def x_radius(self):
        return float(numpy.linalg.norm(self._x_axis))

    @property
    def y_radius(self):
        return float(numpy.linalg.norm(self._y_axis))

    @property
    def x_direction(self):
        return self._x_axis / self.x_radius

    @property
    def y_direction(self):
        return self._y_axis / self.y_radius

    @property
    def start_angle(self):
        return self._start_angle

    @property
    def swept_angle(self):
        return self._swept

    def _combine(self, cos_theta, sin_theta):
        return (numpy.multiply.outer(cos_theta, self._x_axis) + numpy.multiply.outer(sin_theta, self._y_axis))

    def point_on(self, t):
        t, scalar = base.parameter_array(t)
        theta = self._start_angle + self._swept * t
        return self._center + self._combine(numpy.cos(theta), numpy.sin(theta))

    def derivative(self, t, order=1):
        t, scalar = base.parameter_array(t)
        phi = self._start_angle + self._swept * t + order * math.pi / 2
        return self._swept**order * self._combine(numpy.cos(phi), numpy.sin(phi))

    def bounding_box(self):
        angles = _angle_interval(self._start_angle, self._swept, 0, 1)
        return (VectorBoundingBox.from_vector_times(self._x_axis, Interval.cos_of(angles))
                .plus(VectorBoundingBox.from_vector_times(self._y_axis, Interval.sin_of(angles)))
                .plus(self._center))

    def first_derivative_bounding_box(self, t0=0, t1=1):
        angles = _angle_interval(self._start_angle, self._swept, t0, t1)
        return (VectorBoundingBox.from_vector_times(self._x_axis, -Interval.sin_of(angles))
                .plus(VectorBoundingBox.from_vector_times(self._y_axis, Interval.cos_of(angles)))
                .multiply_by(self._swept))

    def num_approximation_segments(self, max_error):
        if not max_error > 0:
            raise ValueError('max_error must be positive.')
        m = self._swept**2 * max(self.x_radius, self.y_radius)
        return max(1, int(math.ceil(math.sqrt(m / (8 * max_error)))))

    def reverse(self):
        return EllipticalArc(self._center, self._x_axis, self._y_axis, self._start_angle + self._swept, -self._swept)

    def is_degenerate(self):
        return self._swept == 0 or bool(numpy.all(self._x_axis == 0) and numpy.all(self._y_axis == 0))

    def _transformed(self, map_point, map_vector, reverses_orientation):
        return EllipticalArc(map_point(self._center), map_vector(self._x_axis), map_vector(self._y_axis),
            self._start_angle, self._swept)
