import math
import numpy

_TWO_PI = 2 * math.pi

class Interval:
    """Closed interval [lo, hi] of real numbers.

    The arithmetic operators return intervals guaranteed to contain the
    result of the corresponding operation applied to any values drawn from
    the operands, so chains of operations give conservative bounds.

    Example:
        speed = Interval(1, 2) * Interval(-3, 0.5)  # Interval(-6, 1)
    """
    __slots__ = ('lo', 'hi')

    def __init__(self, lo, hi):
        lo = float(lo)
        hi = float(hi)
        if lo > hi:
            lo, hi = hi, lo
        self.lo = lo
        self.hi = hi

    @classmethod
    def singleton(cls, value):
        return cls(value, value)

    @classmethod
    def hull(cls, values):
        """Return the smallest interval containing all of the given values."""
        values = numpy.asarray(values, dtype=float)
        return cls(values.min(), values.max())

    @property
    def width(self):
        return self.hi - self.lo

    @property
    def midpoint(self):
        return 0.5 * (self.lo + self.hi)

    def contains(self, value, tolerance=0):
        return self.lo - tolerance <= value <= self.hi + tolerance

    def union(self, other):
        return Interval(min(self.lo, other.lo), max(self.hi, other.hi))

    def __repr__(self):
        return 'Interval({!r}, {!r})'.format(self.lo, self.hi)

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return self.lo == other.lo and self.hi == other.hi

    def __hash__(self):
        return hash((self.lo, self.hi))

    def __neg__(self):
        return Interval(-self.hi, -self.lo)

    def __add__(self, other):
        if isinstance(other, Interval):
            return Interval(self.lo + other.lo, self.hi + other.hi)
        return Interval(self.lo + other, self.hi + other)

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Interval):
            return Interval(self.lo - other.hi, self.hi - other.lo)
        return Interval(self.lo - other, self.hi - other)

    def __rsub__(self, other):
        return Interval(other - self.hi, other - self.lo)

    def __mul__(self, other):
        if isinstance(other, Interval):
            products = (self.lo * other.lo, self.lo * other.hi, self.hi * other.lo, self.hi * other.hi)
            return Interval(min(products), max(products))
        return Interval(self.lo * other, self.hi * other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Interval):
            return self * other.reciprocal()
        if other == 0:
            raise ZeroDivisionError('Interval division by zero.')
        return Interval(self.lo / other, self.hi / other)

    def reciprocal(self):
        """Return the interval of 1/x; the interval must not contain zero."""
        if self.lo <= 0 <= self.hi:
            raise ZeroDivisionError('Reciprocal of {!r}, which contains zero.'.format(self))
        return Interval(1 / self.hi, 1 / self.lo)

    def abs(self):
        if self.lo >= 0:
            return self
        if self.hi <= 0:
            return -self
        return Interval(0, max(-self.lo, self.hi))

    def squared(self):
        """Return the interval of x**2, which is tighter than self * self when
        the interval straddles zero."""
        magnitude = self.abs()
        return Interval(magnitude.lo**2, magnitude.hi**2)

    def sqrt(self):
        if self.hi < 0:
            raise ValueError('Square root of negative interval {!r}.'.format(self))
        return Interval(math.sqrt(max(self.lo, 0)), math.sqrt(self.hi))

    @classmethod
    def sin_of(cls, angles):
        """Return the interval containing sin(x) for every angle x in the given
        interval (in radians), including any interior maxima and minima."""
        return cls._periodic_bounds(math.sin, angles, math.pi / 2, -math.pi / 2)

    @classmethod
    def cos_of(cls, angles):
        """Return the interval containing cos(x) for every angle x in the given
        interval (in radians)."""
        return cls._periodic_bounds(math.cos, angles, 0, math.pi)

    @classmethod
    def _periodic_bounds(cls, function, angles, max_at, min_at):
        if angles.width >= _TWO_PI:
            return cls(-1, 1)
        a, b = function(angles.lo), function(angles.hi)
        lo, hi = min(a, b), max(a, b)
        if _contains_angle(angles, max_at):
            hi = 1
        if _contains_angle(angles, min_at):
            lo = -1
        return cls(lo, hi)


def _contains_angle(angles, angle):
    """Return whether angle + 2*pi*k lies in the interval for some integer k."""
    k = math.ceil((angles.lo - angle) / _TWO_PI)
    return angle + _TWO_PI * k <= angles.hi


class VectorBoundingBox:
    """Axis-aligned box bounding a family of d-dimensional vectors (or points).

    Each axis carries an interval [lower[i], upper[i]]. Arithmetic on boxes
    returns boxes that bound the true result for every combination of input
    vectors drawn from the operand boxes.

    Parameters:
        lower, upper: array-like of shape (d,). Each pair is reordered if
            necessary, so every axis interval has non-negative width.
    """
    def __init__(self, lower, upper):
        lower = numpy.asarray(lower, dtype=float)
        upper = numpy.asarray(upper, dtype=float)
        if lower.shape != upper.shape or lower.ndim != 1:
            raise ValueError('lower and upper must be one-dimensional arrays of the same length.')
        self.lower = numpy.minimum(lower, upper)
        self.upper = numpy.maximum(lower, upper)
        self.lower.flags.writeable = False
        self.upper.flags.writeable = False

    @classmethod
    def hull(cls, vectors):
        """Return the smallest box containing the given vector(s); vectors may
        have shape (d,) or (n, d)."""
        vectors = numpy.asarray(vectors, dtype=float)
        if vectors.ndim == 1:
            return cls(vectors, vectors)
        return cls(vectors.min(axis=0), vectors.max(axis=0))

    @classmethod
    def singleton(cls, vector):
        return cls(vector, vector)

    @classmethod
    def from_intervals(cls, intervals):
        return cls([i.lo for i in intervals], [i.hi for i in intervals])

    @classmethod
    def from_vector_times(cls, vector, interval):
        """Return the box of all vectors v * s, for s in the given interval."""
        vector = numpy.asarray(vector, dtype=float)
        return cls(vector * interval.lo, vector * interval.hi)

    @property
    def dimension(self):
        return len(self.lower)

    @property
    def intervals(self):
        return [Interval(lo, hi) for lo, hi in zip(self.lower, self.upper)]

    @property
    def center(self):
        return 0.5 * (self.lower + self.upper)

    @property
    def widths(self):
        return self.upper - self.lower

    def __repr__(self):
        return 'VectorBoundingBox({}, {})'.format(list(self.lower), list(self.upper))

    def contains(self, vector, tolerance=0):
        """Return whether the vector lies in the box (optionally enlarged by
        tolerance on every side). For an array of vectors, shape (n, d), return
        whether all of them do."""
        vector = numpy.asarray(vector, dtype=float)
        return bool(numpy.all((vector >= self.lower - tolerance) & (vector <= self.upper + tolerance)))

    def contains_box(self, other):
        return bool(numpy.all(other.lower >= self.lower) and numpy.all(other.upper <= self.upper))

    def intersects(self, other):
        return bool(numpy.all(other.lower <= self.upper) and numpy.all(other.upper >= self.lower))

    def union(self, other):
        return VectorBoundingBox(numpy.minimum(self.lower, other.lower), numpy.maximum(self.upper, other.upper))

    def multiply_by(self, scalar):
        return VectorBoundingBox(self.lower * scalar, self.upper * scalar)

    def half(self):
        return self.multiply_by(0.5)

    def twice(self):
        return self.multiply_by(2)

    def times(self, interval):
        """Scale by every scalar in an interval."""
        corners = numpy.array([self.lower * interval.lo, self.lower * interval.hi,
                               self.upper * interval.lo, self.upper * interval.hi])
        return VectorBoundingBox(corners.min(axis=0), corners.max(axis=0))

    def divide_by(self, interval):
        """Divide by every scalar in an interval, which must exclude zero."""
        return self.times(interval.reciprocal())

    def product(self, other):
        """Per-axis product with another box."""
        corners = numpy.array([self.lower * other.lower, self.lower * other.upper,
                               self.upper * other.lower, self.upper * other.upper])
        return VectorBoundingBox(corners.min(axis=0), corners.max(axis=0))

    def plus(self, other):
        if isinstance(other, VectorBoundingBox):
            return VectorBoundingBox(self.lower + other.lower, self.upper + other.upper)
        other = numpy.asarray(other, dtype=float)
        return VectorBoundingBox(self.lower + other, self.upper + other)

    def minus(self, other):
        if isinstance(other, VectorBoundingBox):
            return VectorBoundingBox(self.lower - other.upper, self.upper - other.lower)
        other = numpy.asarray(other, dtype=float)
        return VectorBoundingBox(self.lower - other, self.upper - other)

    def __add__(self, other):
        return self.plus(other)

    __radd__ = __add__

    def __sub__(self, other):
        return self.minus(other)

    def __neg__(self):
        return VectorBoundingBox(-self.upper, -self.lower)

    def __mul__(self, other):
        if isinstance(other, Interval):
            return self.times(other)
        if isinstance(other, VectorBoundingBox):
            return self.product(other)
        return self.multiply_by(other)

    __rmul__ = __mul__

    def dot(self, other):
        """Return the interval containing the dot product of any vector in this
        box with the given vector or with any vector in another box."""
        if isinstance(other, VectorBoundingBox):
            terms = self.product(other)
        else:
            terms = self.times_vector(other)
        return Interval(terms.lower.sum(), terms.upper.sum())

    def times_vector(self, vector):
        vector = numpy.asarray(vector, dtype=float)
        return VectorBoundingBox(self.lower * vector, self.upper * vector)

    def length(self):
        """Return the interval containing the Euclidean norm of every vector in
        the box.

        The lower bound is the distance from the origin to the box (zero if the
        box contains the origin); the upper bound is the norm of the corner
        farthest from the origin.
        """
        nearest = numpy.maximum(numpy.maximum(self.lower, -self.upper), 0)
        farthest = numpy.maximum(numpy.absolute(self.lower), numpy.absolute(self.upper))
        return Interval(numpy.sqrt((nearest**2).sum()), numpy.sqrt((farthest**2).sum()))
