"""Decomposition of B-splines into Bezier segments by knot insertion.

A B-spline of degree p with n control points is defined by a knot vector of
n + p + 1 non-decreasing values; its domain is [knots[p], knots[n]]. Raising
the multiplicity of every distinct knot value in the domain to p removes all
continuity constraints between the knot spans, after which the control
points of each span are exactly the Bezier control points of that piece.

Weighted (rational) control points are handled by blending the weights along
with the points, as in homogeneous coordinates; control points that are not
touched by an insertion are carried over unchanged.
"""

import functools
import logging
import numpy
from scipy import interpolate

from .. import errors
from . import rational
from . import spline

logger = logging.getLogger(__name__)

def validate_knots(knots, num_control_points, degree):
    """Check a knot vector against the number of control points and the degree.

    Returns the knots as a float array; raises InvalidKnotVectorError if
    len(knots) != num_control_points + degree + 1, the knots decrease or are not
    finite, there are fewer than degree + 1 control points, the domain
    [knots[degree], knots[num_control_points]] is empty, or an interior knot
    has multiplicity greater than degree.
    """
    if int(degree) != degree or degree < 1:
        raise errors.InvalidKnotVectorError('Degree must be a positive integer, got {!r}.'.format(degree))
    degree = int(degree)
    knots = numpy.asarray(knots, dtype=float)
    if knots.ndim != 1:
        raise errors.InvalidKnotVectorError('Knots must be a one-dimensional sequence.')
    if num_control_points < degree + 1:
        raise errors.InvalidKnotVectorError('A degree {} B-spline needs at least {} control points, got {}.'
            .format(degree, degree + 1, num_control_points))
    expected = num_control_points + degree + 1
    if len(knots) != expected:
        raise errors.InvalidKnotVectorError('Expected {} knots for {} control points of degree {}, got {}.'
            .format(expected, num_control_points, degree, len(knots)))
    if not numpy.all(numpy.isfinite(knots)):
        raise errors.InvalidKnotVectorError('Knots must be finite.')
    if numpy.any(numpy.diff(knots) < 0):
        raise errors.InvalidKnotVectorError('Knots must be non-decreasing: {}.'.format(knots.tolist()))
    start, end = knots[degree], knots[num_control_points]
    if not start < end:
        raise errors.InvalidKnotVectorError('Knot vector {} has an empty domain.'.format(knots.tolist()))
    values, counts = numpy.unique(knots[(knots > start) & (knots < end)], return_counts=True)
    if numpy.any(counts > degree):
        bad = values[counts > degree][0]
        raise errors.InvalidKnotVectorError('Interior knot {} has multiplicity greater than the degree {}.'
            .format(bad, degree))
    return knots

def insert_knot(knots, control_points, degree, u, weights=None):
    """Insert the knot value u once (Boehm's algorithm).

    Parameters:
        knots: knot vector, shape (n + degree + 1,)
        control_points: array of shape (n, d)
        degree: degree of the B-spline
        u: knot value in the domain [knots[degree], knots[n]]
        weights: optional array of n positive weights

    Returns: (knots, control_points, weights) of the equivalent B-spline with
        one more knot and control point; weights is None if none were given.
        The inputs are not modified.
    """
    knots = numpy.asarray(knots, dtype=float)
    points = numpy.asarray(control_points, dtype=float)
    n = len(points)
    start, end = knots[degree], knots[n]
    if not start <= u <= end:
        raise ValueError('Knot {} is outside the domain [{}, {}].'.format(u, start, end))
    # k: a non-empty span [knots[k], knots[k+1]] containing u, with degree <= k < n
    if u > start:
        k = numpy.searchsorted(knots, u, side='left') - 1
    else:
        k = numpy.searchsorted(knots, u, side='right') - 1
    i = numpy.arange(k - degree + 1, k + 1)
    alpha = (u - knots[i]) / (knots[i + degree] - knots[i])
    if weights is None:
        a = alpha[:, numpy.newaxis]
        blended = a * points[i] + (1 - a) * points[i - 1]
        new_weights = None
    else:
        weights = numpy.asarray(weights, dtype=float)
        right = alpha * weights[i]
        left = (1 - alpha) * weights[i - 1]
        blended_weights = right + left
        blended = (right[:, numpy.newaxis] * points[i] + left[:, numpy.newaxis] * points[i - 1]) / blended_weights[:, numpy.newaxis]
        new_weights = numpy.concatenate([weights[:k - degree + 1], blended_weights, weights[k:]])
    new_points = numpy.concatenate([points[:k - degree + 1], blended, points[k:]])
    new_knots = numpy.concatenate([knots[:k + 1], [u], knots[k + 1:]])
    return new_knots, new_points, new_weights

def bspline_intervals(knots, degree):
    """Return the non-empty knot spans (u0, u1) of the domain of a B-spline
    with the given full knot vector and degree."""
    knots = numpy.asarray(knots, dtype=float)
    n = len(knots) - degree - 1
    return [(knots[i], knots[i + 1]) for i in range(degree, n) if knots[i] < knots[i + 1]]


class Segment:
    """One Bezier piece of a decomposed B-spline.

    Attributes:
        curve: the piece as a curve parameterized over [0, 1]
        knot_interval: (u0, u1), the knot span this piece covers

    point_at() and derivative_at() take values of the original knot parameter;
    the derivative is rescaled by 1 / (u1 - u0) accordingly.
    """
    def __init__(self, curve, knot_interval):
        u0, u1 = knot_interval
        self.curve = curve
        self.knot_interval = (float(u0), float(u1))

    def __repr__(self):
        return 'Segment({!r}, {})'.format(self.curve, self.knot_interval)

    @property
    def width(self):
        return self.knot_interval[1] - self.knot_interval[0]

    def local_parameter(self, u):
        return (numpy.asarray(u, dtype=float) - self.knot_interval[0]) / self.width

    def point_at(self, u):
        return self.curve.point_on(self.local_parameter(u))

    def derivative_at(self, u):
        return self.curve.first_derivative(self.local_parameter(u)) / self.width


_SPLINE_TYPES = {2: spline.QuadraticSpline, 3: spline.CubicSpline}
_RATIONAL_TYPES = {2: rational.RationalQuadraticSpline, 3: rational.RationalCubicSpline}

def _segment_curve(points, weights, degree):
    if weights is None:
        return _SPLINE_TYPES.get(degree, spline.Spline)(points)
    return _RATIONAL_TYPES.get(degree, rational.RationalSpline)(points, weights)

def _check_weights(weights, num_control_points):
    weights = numpy.asarray(weights, dtype=float)
    if weights.shape != (num_control_points,):
        raise errors.InvalidKnotVectorError('Expected {} weights, got shape {}.'
            .format(num_control_points, weights.shape))
    if not numpy.all(weights > 0):
        raise ValueError('Weights must be positive.')
    return weights

def bspline_segments(knots, control_points, degree, weights=None):
    """Decompose a B-spline into one Bezier segment per non-empty knot span.

    Parameters:
        knots: full knot vector of len(control_points) + degree + 1 values.
            Clamped (end knots repeated degree + 1 times) and unclamped vectors
            are both accepted.
        control_points: array of shape (n, d)
        degree: positive integer
        weights: optional n positive weights, for a rational B-spline

    Returns: list of Segment objects, in knot order. Their curves are
        QuadraticSpline or CubicSpline for degree 2 or 3 and Spline otherwise;
        for weighted input, the RationalQuadraticSpline, RationalCubicSpline or
        RationalSpline counterparts.

    Consecutive segments share their endpoint exactly in position; their
    rescaled derivatives agree wherever the shared knot's multiplicity is
    below the degree.
    """
    points = numpy.asarray(control_points, dtype=float)
    if points.ndim != 2:
        raise ValueError('control_points must have shape (n, d).')
    knots = validate_knots(knots, len(points), degree)
    degree = int(degree)
    if weights is not None:
        weights = _check_weights(weights, len(points))
    start, end = knots[degree], knots[len(points)]
    values = numpy.unique(knots[(knots >= start) & (knots <= end)])
    insertions = [value for value in values
        for _ in range(degree - numpy.count_nonzero(knots == value))]
    knots, points, weights = functools.reduce(
        lambda state, u: insert_knot(state[0], state[1], degree, u, state[2]),
        insertions, (knots, points, weights))
    segments = []
    for i in range(degree, len(points)):
        if knots[i] < knots[i + 1]:
            piece = slice(i - degree, i + 1)
            piece_weights = None if weights is None else weights[piece]
            segments.append(Segment(_segment_curve(points[piece], piece_weights, degree), (knots[i], knots[i + 1])))
    logger.debug('Decomposed degree %d B-spline: %d knot insertions, %d segments.',
        degree, len(insertions), len(segments))
    return segments

def _pad_knots(knots):
    knots = numpy.asarray(knots, dtype=float)
    if knots.ndim != 1 or len(knots) == 0:
        raise errors.InvalidKnotVectorError('Knots must be a non-empty one-dimensional sequence.')
    return numpy.concatenate([knots[:1], knots, knots[-1:]])

def quadratic_bspline_segments(knots, control_points, weights=None):
    """Decompose a quadratic B-spline given in the reduced knot form.

    The outermost knot at each end never affects the curve, so it is omitted:
    len(knots) == len(control_points) + 1. For example, knots [0, 0, 1, 1]
    with three control points give a single segment. Equivalent to
    bspline_segments with the first and last knots repeated once more.
    """
    return bspline_segments(_pad_knots(knots), control_points, 2, weights)

def cubic_bspline_segments(knots, control_points, weights=None):
    """Decompose a cubic B-spline given in the reduced knot form
    (len(knots) == len(control_points) + 2; e.g. [0, 0, 0, 1, 1, 1] for four
    control points). See quadratic_bspline_segments."""
    return bspline_segments(_pad_knots(knots), control_points, 3, weights)

def bspline_evaluate(knots, control_points, degree, u, weights=None):
    """Evaluate a (possibly rational) B-spline directly at knot parameter
    value(s) u, using scipy.interpolate.BSpline.

    Returns an array of shape (d,) for scalar u or (m, d) for m values; values
    outside the domain evaluate to nan.
    """
    points = numpy.asarray(control_points, dtype=float)
    knots = validate_knots(knots, len(points), degree)
    if weights is not None:
        weights = _check_weights(weights, len(points))
        points = numpy.column_stack([points * weights[:, numpy.newaxis], weights])
    values = interpolate.BSpline(knots, points, int(degree), extrapolate=False)(u)
    if weights is not None:
        values = values[..., :-1] / values[..., -1:]
    return values

def spline_to_bezier(tck):
    """Convert a parametric spline tuple (t, c, k) into a sequence of Bezier
    curves of the same degree.

    c may be an array of shape (n, d), or a list of d coefficient arrays as
    returned by scipy.interpolate.splprep; trailing coefficients beyond
    len(t) - k - 1 (fitpack padding) are ignored.

    Returns a list of arrays of shape (k+1, d): the starting point, the k-1
    internal control points and the endpoint of each Bezier curve.
    """
    t, c, k = tck
    t = numpy.asarray(t, dtype=float)
    if isinstance(c, (list, tuple)):
        c = numpy.transpose(c)
    c = numpy.asarray(c, dtype=float)
    if c.ndim != 2:
        raise TypeError('Only parametric splines are supported.')
    c = c[:len(t) - k - 1]
    return [segment.curve.control_points for segment in bspline_segments(t, c, k)]
