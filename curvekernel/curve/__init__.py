'''
Curve
-----
Parametric curves over the parameter range [0, 1], and the algorithms built on them.
 - curve.spline, curve.rational, curve.arc: the curve types. All share the
   interface defined in curve.base (evaluation, derivatives, bounding boxes,
   transformations, polyline approximation).
 - curve.arc_length: map distances along a curve to parameter values and back.
 - curve.bspline: decompose B-splines (optionally weighted) into Bezier segments.
 - curve.geometry: basic algorithms for polyline curves.
 '''
