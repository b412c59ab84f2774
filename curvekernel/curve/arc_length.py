"""Arc-length parameterization of curves.

The curve's parameter range [0, 1] is bisected adaptively until, on every
sub-interval [t0, t1], the bounds on the arc length implied by the bounding
box of the first derivative differ by at most 2 * max_error:

    lower = min|c'(t)| * (t1 - t0)     upper = max|c'(t)| * (t1 - t0)

The length of each accepted sub-interval ("leaf") is estimated by quadrature
and clipped into [max(lower, upper - max_error), min(upper, lower + max_error)],
so it is within max_error of the true length. Distances along the curve are
mapped to parameter values by linear interpolation within the leaves.

Tunables:
    DEFAULT_MAX_DEPTH: bisection depth ceiling. Leaves at this depth are
        accepted even if their bounds have not converged (a warning is logged).
        Depth 40 corresponds to parameter intervals of about 1e-12.
    GAUSS_ORDER: number of Gauss-Legendre nodes used to estimate each leaf's
        length within its [lower, upper] bounds.
"""

import collections
import logging
import numpy
from numpy.polynomial import legendre

from .. import errors
from . import base

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 40
GAUSS_ORDER = 5

Leaf = collections.namedtuple('Leaf', ['t0', 't1', 'start_length', 'length'])

def build_leaves(curve, max_error, max_depth=None):
    """Subdivide [0, 1] for the given Nondegenerate curve.

    Returns: list of (t0, t1, length) tuples, ordered by t0 and covering [0, 1].
    """
    if max_depth is None:
        max_depth = DEFAULT_MAX_DEPTH
    nodes, weights = legendre.leggauss(GAUSS_ORDER)
    leaves = []
    truncated = 0
    # depth-first, left half popped first, so leaves come out in order
    stack = [(0.0, 1.0, 0)]
    while stack:
        t0, t1, depth = stack.pop()
        dt = t1 - t0
        speed = curve.first_derivative_bounding_box(t0, t1).length()
        lower = speed.lo * dt
        upper = speed.hi * dt
        if upper - lower > 2 * max_error:
            if depth < max_depth:
                mid = 0.5 * (t0 + t1)
                stack.append((mid, t1, depth + 1))
                stack.append((t0, mid, depth + 1))
                continue
            truncated += 1
            low, high = lower, upper
        else:
            # every value in this window is within max_error of anything in [lower, upper]
            low, high = max(lower, upper - max_error), min(upper, lower + max_error)
        half = 0.5 * dt
        speeds = numpy.linalg.norm(curve.first_derivative(t0 + half * (nodes + 1)), axis=-1)
        estimate = numpy.clip(half * numpy.dot(weights, speeds), low, high)
        leaves.append((t0, t1, float(estimate)))
    if truncated:
        logger.warning('Depth ceiling %d reached on %d of %d intervals of %r; arc length error may exceed %g.',
            max_depth, truncated, len(leaves), curve.curve, max_error)
    logger.debug('Parameterized %r with %d leaves (max_error=%g).', curve.curve, len(leaves), max_error)
    return leaves


class ArcLengthParameterization:
    """Map between distance along a curve and the curve's own parameter.

    Parameters:
        curve: a Nondegenerate curve, or any curve (in which case
            curve.nondegenerate() is called, raising DegenerateCurveError for a
            curve that is a single point).
        max_error: positive length; the arc length of each leaf is known to
            within this tolerance.
        max_depth: bisection depth ceiling; DEFAULT_MAX_DEPTH if None.

    Arc lengths outside [0, arc_length()] are rejected with
    OutOfRangeArcLengthError rather than clamped. The endpoints themselves map
    exactly to the curve's start and end points.

    Example:
        parameterization = ArcLengthParameterization(spline, max_error=1e-3)
        halfway = parameterization.point_along(parameterization.arc_length() / 2)
    """
    def __init__(self, curve, max_error, max_depth=None):
        if not max_error > 0:
            raise ValueError('max_error must be positive, got {!r}.'.format(max_error))
        if max_depth is not None and max_depth < 0:
            raise ValueError('max_depth must be non-negative.')
        if not isinstance(curve, base.Nondegenerate):
            curve = curve.nondegenerate()
        self.nondegenerate_curve = curve
        self.max_error = max_error
        leaves = build_leaves(curve, max_error, max_depth)
        parameters = [t0 for t0, t1, length in leaves] + [1.0]
        lengths = numpy.concatenate([[0], numpy.add.accumulate([length for t0, t1, length in leaves])])
        self._parameters = numpy.array(parameters)
        self._lengths = lengths
        self._parameters.flags.writeable = False
        self._lengths.flags.writeable = False

    def __repr__(self):
        return 'ArcLengthParameterization({!r}, max_error={!r})'.format(self.curve, self.max_error)

    @property
    def curve(self):
        return self.nondegenerate_curve.curve

    @property
    def leaves(self):
        """List of Leaf(t0, t1, start_length, length) records, in order."""
        p, s = self._parameters, self._lengths
        return [Leaf(p[i], p[i+1], s[i], s[i+1] - s[i]) for i in range(len(p) - 1)]

    def arc_length(self):
        return self._lengths[-1]

    def _check_arc_length(self, s):
        total = self._lengths[-1]
        if numpy.any(numpy.isnan(s)) or numpy.any(s < 0) or numpy.any(s > total):
            raise errors.OutOfRangeArcLengthError('Arc length {} is outside [0, {}].'.format(s, total))

    def parameter_value(self, s):
        """Return the curve parameter value(s) at arc length(s) s, measured
        from the start of the curve. Accepts a scalar or an array."""
        s = numpy.asarray(s, dtype=float)
        self._check_arc_length(s)
        return numpy.interp(s, self._lengths, self._parameters)

    def arc_length_at(self, t):
        """Return the arc length from the start of the curve to parameter
        value(s) t in [0, 1]."""
        t = numpy.asarray(t, dtype=float)
        if numpy.any(numpy.isnan(t)) or numpy.any(t < 0) or numpy.any(t > 1):
            raise ValueError('Parameter value {} is outside [0, 1].'.format(t))
        return numpy.interp(t, self._parameters, self._lengths)

    def point_along(self, s):
        return self.curve.point_on(self.parameter_value(s))

    def tangent_direction_along(self, s):
        """Return the unit tangent direction at a (scalar) arc length s."""
        return self.nondegenerate_curve.tangent_direction(self.parameter_value(s))

    def sample_along(self, num_points):
        """Return num_points points equally spaced by arc length along the
        curve, including both endpoints; shape (num_points, d)."""
        return self.point_along(numpy.linspace(0, self.arc_length(), num_points))

    def midpoint(self):
        return self.point_along(self.arc_length() / 2)


def arc_length_parameterized(curve, max_error, max_depth=None):
    """Return ArcLengthParameterization(curve, max_error, max_depth)."""
    return ArcLengthParameterization(curve, max_error, max_depth)
