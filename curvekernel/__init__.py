'''
# curvekernel

Parametric curve geometry: arcs and splines sharing one curve interface,
arc-length parameterization with a guaranteed error bound, and B-spline
decomposition into Bezier segments.

Points and vectors are numpy arrays of shape (d,); collections of points are
arrays of shape (n, d).

 - errors: the exception classes raised for degenerate curves, invalid knot
   vectors and out-of-range arc lengths.
 - interval: conservative interval arithmetic on scalars (Interval) and on
   families of vectors (VectorBoundingBox).
 - frame: translations, rotations, scalings, reflections and coordinate frames
   for point and vector arrays.

Curve
-----
 - curve.base: the interface shared by all curves, and the Nondegenerate wrapper.
 - curve.spline: polynomial Bezier curves (Spline, QuadraticSpline, CubicSpline).
 - curve.rational: rational Bezier curves (RationalSpline, RationalQuadraticSpline,
   RationalCubicSpline).
 - curve.arc: circular (Arc) and elliptical (EllipticalArc) arcs.
 - curve.arc_length: adaptive arc-length parameterization of any curve.
 - curve.bspline: knot insertion and B-spline to Bezier decomposition, plus
   evaluation of B-splines and fitpack (t, c, k) tuples via scipy.interpolate.
 - curve.geometry: basic algorithms for polyline curves.
'''
