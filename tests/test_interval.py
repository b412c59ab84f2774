import math
import numpy
import pytest

from curvekernel.interval import Interval, VectorBoundingBox

def random_interval(rng, scale=5):
    return Interval(*rng.uniform(-scale, scale, size=2))

def random_box(rng, d=3, scale=5):
    return VectorBoundingBox(rng.uniform(-scale, scale, size=d), rng.uniform(-scale, scale, size=d))

def draw(rng, box, n):
    return rng.uniform(box.lower, box.upper, size=(n, box.dimension))

def test_interval_normalizes_order():
    i = Interval(3, -1)
    assert (i.lo, i.hi) == (-1, 3)
    assert i.width == 4
    assert i.midpoint == 1

def test_interval_arithmetic_contains_results(rng):
    for _ in range(50):
        a = random_interval(rng)
        b = random_interval(rng)
        x = rng.uniform(a.lo, a.hi, size=40)
        y = rng.uniform(b.lo, b.hi, size=40)
        for op, values in [(a + b, x + y), (a - b, x - y), (a * b, x * y), (a * -2.5, x * -2.5)]:
            assert op.lo <= values.min() and values.max() <= op.hi
        assert numpy.all(x**2 >= a.squared().lo) and numpy.all(x**2 <= a.squared().hi)

def test_interval_squared_is_tight_across_zero():
    assert Interval(-2, 1).squared() == Interval(0, 4)
    assert Interval(-2, 1) * Interval(-2, 1) == Interval(-2, 4)

def test_interval_division():
    assert Interval(1, 2) / Interval(2, 4) == Interval(0.25, 1)
    with pytest.raises(ZeroDivisionError):
        Interval(1, 2) / Interval(-1, 1)
    with pytest.raises(ZeroDivisionError):
        Interval(1, 2) / 0

@pytest.mark.parametrize('lo, hi', [(0, 0.1), (-0.3, 0.3), (1, 2), (2, 4), (3, 6), (-7, -5), (0, 7)])
def test_trig_bounds_contain_samples(lo, hi):
    angles = Interval(lo, hi)
    x = numpy.linspace(lo, hi, 2001)
    sin = Interval.sin_of(angles)
    cos = Interval.cos_of(angles)
    assert sin.lo <= numpy.sin(x).min() and numpy.sin(x).max() <= sin.hi
    assert cos.lo <= numpy.cos(x).min() and numpy.cos(x).max() <= cos.hi

def test_trig_bounds_include_interior_extrema():
    assert Interval.sin_of(Interval(1, 2)).hi == 1
    assert Interval.cos_of(Interval(3, 4)).lo == -1
    assert Interval.cos_of(Interval(-0.1, 0.2)).hi == 1
    assert Interval.sin_of(Interval(0.1, 0.2)) == Interval(math.sin(0.1), math.sin(0.2))

def test_box_hull_and_contains():
    box = VectorBoundingBox.hull([[0, 1], [2, -1], [1, 3]])
    assert list(box.lower) == [0, -1]
    assert list(box.upper) == [2, 3]
    assert box.contains([1, 1])
    assert not box.contains([3, 1])
    assert box.contains([2.05, 1], tolerance=0.1)
    assert box.contains([[0, 0], [1, 2]])

def test_box_operators_contain_results(rng):
    for _ in range(50):
        a = random_box(rng)
        b = random_box(rng)
        s = random_interval(rng)
        x = draw(rng, a, 40)
        y = draw(rng, b, 40)
        scalars = rng.uniform(s.lo, s.hi, size=(40, 1))
        v = rng.uniform(-3, 3, size=3)
        assert a.plus(b).contains(x + y)
        assert a.minus(b).contains(x - y)
        assert (a + v).contains(x + v)
        assert (a - v).contains(x - v)
        assert a.product(b).contains(x * y)
        assert a.times(s).contains(x * scalars)
        assert a.multiply_by(-1.5).contains(x * -1.5)
        assert a.half().contains(x / 2)
        assert a.twice().contains(x * 2)
        dots = (x * y).sum(axis=1)
        dot = a.dot(b)
        assert dot.lo <= dots.min() and dots.max() <= dot.hi
        dot = a.dot(v)
        assert dot.lo <= numpy.dot(x, v).min() and numpy.dot(x, v).max() <= dot.hi
        norms = numpy.linalg.norm(x, axis=1)
        length = a.length()
        assert length.lo <= norms.min() and norms.max() <= length.hi

def test_box_divide_by_positive_interval(rng):
    box = random_box(rng)
    divisor = Interval(0.5, 2)
    x = draw(rng, box, 100)
    d = rng.uniform(0.5, 2, size=(100, 1))
    assert box.divide_by(divisor).contains(x / d)
    with pytest.raises(ZeroDivisionError):
        box.divide_by(Interval(-1, 1))

def test_box_length_bounds():
    assert VectorBoundingBox([-1, -1], [1, 1]).length().lo == 0
    length = VectorBoundingBox([3, 4], [6, 8]).length()
    assert length == Interval(5, 10)
    length = VectorBoundingBox([-1, 3], [1, 4]).length()
    assert length.lo == 3

def test_box_from_vector_times():
    box = VectorBoundingBox.from_vector_times([1, -2], Interval(-1, 3))
    assert list(box.lower) == [-1, -6]
    assert list(box.upper) == [3, 2]

def test_box_union_and_intersection():
    a = VectorBoundingBox([0, 0], [1, 1])
    b = VectorBoundingBox([2, 2], [3, 3])
    assert not a.intersects(b)
    union = a.union(b)
    assert union.contains_box(a) and union.contains_box(b)
    assert a.intersects(VectorBoundingBox([0.5, 0.5], [4, 4]))
