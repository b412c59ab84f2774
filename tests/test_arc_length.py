import logging
import math
import numpy
import pytest
from numpy.testing import assert_allclose, assert_array_equal
from scipy import integrate

from curvekernel import errors
from curvekernel.interval import VectorBoundingBox
from curvekernel.curve import arc
from curvekernel.curve import arc_length
from curvekernel.curve import rational
from curvekernel.curve import spline

QUADRATIC = spline.QuadraticSpline([[0, 0], [1, 2], [2, 0]])
CUBIC = spline.CubicSpline([[0.1, 0.2], [1.3, 2.9], [2.2, -1.1], [3.7, 0.3]])
ELLIPTICAL = arc.EllipticalArc.with_axes([1, 2], [1, 1], 3, 1.2, 0.3, 4.1)
RATIONAL = rational.RationalCubicSpline([[0.1, 0.2], [1.3, 2.9], [2.2, -1.1], [3.7, 0.3]], [1, 0.5, 3, 1.7])
CUSP = spline.CubicSpline([[0, 0], [1, 1], [0, 1], [1, 0]])

def numerical_length(curve, t0=0, t1=1):
    speed = lambda t: numpy.linalg.norm(curve.first_derivative(t))
    return integrate.quad(speed, t0, t1, limit=200, epsabs=1e-10)[0]

def quadratic_length(p0, p1, p2):
    # closed form of the integral of |2(A t + B)| over [0, 1]
    a_vec = numpy.subtract(p2, 2 * numpy.asarray(p1)) + p0
    b_vec = numpy.subtract(p1, p0)
    a = a_vec.dot(a_vec)
    b = 2 * a_vec.dot(b_vec)
    c = b_vec.dot(b_vec)
    def antiderivative(t):
        q = a * t**2 + b * t + c
        root = math.sqrt(q)
        return ((2 * a * t + b) * root / (4 * a)
            + (4 * a * c - b**2) / (8 * a**1.5) * math.log(2 * math.sqrt(a) * root + 2 * a * t + b))
    return 2 * (antiderivative(1) - antiderivative(0))

def test_quadratic_length_matches_closed_form():
    max_error = 0.001
    parameterization = arc_length.ArcLengthParameterization(QUADRATIC, max_error)
    expected = quadratic_length(*QUADRATIC.control_points)
    assert abs(parameterization.arc_length() - expected) <= max_error * len(parameterization.leaves)
    assert parameterization.arc_length() == pytest.approx(expected, abs=1e-4)

@pytest.mark.parametrize('curve', [CUBIC, ELLIPTICAL, RATIONAL])
def test_length_matches_quadrature(curve):
    parameterization = arc_length.arc_length_parameterized(curve, 1e-4)
    assert parameterization.arc_length() == pytest.approx(numerical_length(curve), abs=1e-4)

def test_circular_arc_length():
    curve = arc.Arc.with_radius([3, -1], 2.5, 1, -4)
    parameterization = arc_length.ArcLengthParameterization(curve, 1e-6)
    assert parameterization.arc_length() == pytest.approx(10, abs=1e-6)
    # constant speed: arc length is proportional to the parameter
    fractions = numpy.array([0, 0.25, 0.5, 0.75, 1])
    assert_allclose(parameterization.parameter_value(fractions * parameterization.arc_length()), fractions, atol=1e-6)

@pytest.mark.parametrize('curve', [QUADRATIC, CUBIC, ELLIPTICAL, RATIONAL, CUSP])
def test_endpoints_are_exact(curve):
    parameterization = arc_length.ArcLengthParameterization(curve, 1e-3)
    total = parameterization.arc_length()
    assert parameterization.parameter_value(0) == 0
    assert parameterization.parameter_value(total) == 1
    assert_array_equal(parameterization.point_along(0), curve.start_point())
    assert_array_equal(parameterization.point_along(total), curve.end_point())
    samples = parameterization.sample_along(5)
    assert_array_equal(samples[0], curve.start_point())
    assert_array_equal(samples[-1], curve.end_point())

def test_out_of_range_arc_lengths():
    parameterization = arc_length.ArcLengthParameterization(CUBIC, 1e-3)
    total = parameterization.arc_length()
    for s in [-1e-9, total * (1 + 1e-9) + 1e-9, float('nan'), [0, total + 1]]:
        with pytest.raises(errors.OutOfRangeArcLengthError):
            parameterization.parameter_value(s)
    with pytest.raises(errors.OutOfRangeArcLengthError):
        parameterization.point_along(-1)
    # the error is a ValueError, so generic handlers catch it
    with pytest.raises(ValueError):
        parameterization.point_along(total + 1)

def test_invalid_arguments():
    with pytest.raises(errors.DegenerateCurveError):
        arc_length.ArcLengthParameterization(spline.CubicSpline([[1, 1]] * 4), 1e-3)
    with pytest.raises(errors.DegenerateCurveError):
        arc_length.ArcLengthParameterization(arc.Arc([0, 0], [1, 0], 0), 1e-3)
    for max_error in [0, -1e-3]:
        with pytest.raises(ValueError):
            arc_length.ArcLengthParameterization(CUBIC, max_error)
    with pytest.raises(ValueError):
        arc_length.ArcLengthParameterization(CUBIC, 1e-3, max_depth=-1)

def test_accepts_nondegenerate_wrapper():
    parameterization = arc_length.ArcLengthParameterization(CUBIC.nondegenerate(), 1e-3)
    assert parameterization.curve is CUBIC

def test_leaves_are_contiguous_and_accurate():
    max_error = 1e-3
    parameterization = arc_length.ArcLengthParameterization(CUBIC, max_error)
    leaves = parameterization.leaves
    assert leaves[0].t0 == 0
    assert leaves[-1].t1 == 1
    assert leaves[0].start_length == 0
    for previous, leaf in zip(leaves[:-1], leaves[1:]):
        assert previous.t1 == leaf.t0
        assert leaf.start_length == pytest.approx(previous.start_length + previous.length)
    for leaf in leaves:
        assert leaf.t0 < leaf.t1
        assert abs(leaf.length - numerical_length(CUBIC, leaf.t0, leaf.t1)) <= max_error

def test_arc_length_at_inverts_parameter_value():
    parameterization = arc_length.ArcLengthParameterization(ELLIPTICAL, 1e-4)
    ts = numpy.linspace(0, 1, 17)
    lengths = parameterization.arc_length_at(ts)
    assert numpy.all(numpy.diff(lengths) > 0)
    assert_allclose(parameterization.parameter_value(lengths), ts, atol=1e-12)
    for t, s in zip(ts[1:-1], lengths[1:-1]):
        assert s == pytest.approx(numerical_length(ELLIPTICAL, 0, t), abs=5e-4)
    with pytest.raises(ValueError):
        parameterization.arc_length_at(1.5)

def test_samples_are_evenly_spaced():
    parameterization = arc_length.ArcLengthParameterization(CUBIC, 1e-5)
    samples = parameterization.sample_along(9)
    ts = parameterization.parameter_value(numpy.linspace(0, parameterization.arc_length(), 9))
    spacings = [numerical_length(CUBIC, t0, t1) for t0, t1 in zip(ts[:-1], ts[1:])]
    assert_allclose(spacings, parameterization.arc_length() / 8, atol=1e-3)
    assert samples.shape == (9, 2)

def test_midpoint_of_symmetric_curve():
    parameterization = arc_length.ArcLengthParameterization(QUADRATIC, 1e-5)
    assert_allclose(parameterization.midpoint(), [1, 1], atol=1e-4)

def test_tangent_direction_along():
    parameterization = arc_length.ArcLengthParameterization(QUADRATIC, 1e-4)
    assert_allclose(parameterization.tangent_direction_along(0), numpy.array([1, 2]) / math.sqrt(5))
    assert_allclose(parameterization.tangent_direction_along(parameterization.arc_length()),
        numpy.array([1, -2]) / math.sqrt(5))
    middle = parameterization.tangent_direction_along(parameterization.arc_length() / 2)
    assert_allclose(middle, [1, 0], atol=1e-3)

def test_cusp_terminates():
    # the derivative of this cubic vanishes at t = 0.5
    parameterization = arc_length.ArcLengthParameterization(CUSP, 1e-3)
    assert parameterization.arc_length() == pytest.approx(numerical_length(CUSP, 0, 0.5)
        + numerical_length(CUSP, 0.5, 1), abs=2e-3)
    assert_allclose(parameterization.tangent_direction_along(parameterization.arc_length_at(0.5)),
        [0, -1], atol=1e-6)

def test_depth_ceiling_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger='curvekernel.curve.arc_length'):
        parameterization = arc_length.ArcLengthParameterization(CUBIC, 1e-6, max_depth=0)
    assert len(parameterization.leaves) == 1
    assert 'Depth ceiling' in caplog.text
    # the single leaf's estimate still lies within its bounds
    speed = CUBIC.first_derivative_bounding_box().length()
    assert speed.lo <= parameterization.arc_length() <= speed.hi

def test_no_warning_when_converged(caplog):
    with caplog.at_level(logging.WARNING, logger='curvekernel.curve.arc_length'):
        arc_length.ArcLengthParameterization(CUBIC, 1e-3)
    assert caplog.records == []

def test_polyline_approximation_is_shorter():
    parameterization = arc_length.ArcLengthParameterization(CUBIC, 1e-5)
    approximate = CUBIC.approximate_length(1e-3)
    assert approximate <= parameterization.arc_length() + 1e-5
    assert approximate == pytest.approx(parameterization.arc_length(), rel=1e-2)

class LooseSpeedBounds:
    """Speed bounds of [0, 2] on every parameter range, and an actual speed of
    2 everywhere, so quadrature lands at the top of the bounds."""
    curve = 'loose speed bounds'

    def first_derivative_bounding_box(self, t0, t1):
        return VectorBoundingBox([0], [2])

    def first_derivative(self, t):
        return numpy.full((len(t), 1), 2.0)

def test_leaf_estimate_stays_within_max_error_of_bounds():
    # each half has length bounds [0, 1], so only 0.5 is within 0.5 of all of them
    leaves = arc_length.build_leaves(LooseSpeedBounds(), 0.5)
    assert leaves == [(0, 0.5, 0.5), (0.5, 1, 0.5)]

def test_truncated_leaf_estimate_is_clipped_to_bounds():
    leaves = arc_length.build_leaves(LooseSpeedBounds(), 0.5, max_depth=0)
    (t0, t1, length), = leaves
    assert (t0, t1) == (0, 1)
    assert length == pytest.approx(2)

def test_tangent_along_curve_with_rounded_off_zero_speed():
    curve = arc.EllipticalArc([0, 0], [1, 0], [0, 0], 0, 2 * math.pi)
    parameterization = arc_length.ArcLengthParameterization(curve, 1e-4)
    assert parameterization.arc_length() == pytest.approx(4, abs=1e-3)
    assert_allclose(parameterization.tangent_direction_along(0), [-1, 0], atol=1e-12)
    turn = parameterization.arc_length_at(0.5)
    assert_allclose(parameterization.tangent_direction_along(turn), [1, 0], atol=1e-12)
