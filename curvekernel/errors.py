class CurveKernelError(ValueError):
    """Base class for the errors raised by curvekernel."""


class DegenerateCurveError(CurveKernelError):
    """Raised when a curve's derivative is identically zero, i.e. the curve
    collapses to a single point."""


class InvalidKnotVectorError(CurveKernelError):
    """Raised when a knot vector is decreasing, has an empty domain, or does not
    match the number of control points and the degree."""


class OutOfRangeArcLengthError(CurveKernelError):
    """Raised when an arc-length query falls outside [0, arc_length()]."""
