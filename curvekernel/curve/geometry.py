import numpy

def cumulative_distances(points, unit=True):
    """Return cumulative distances along a polyline.

    Parameters:
    points: array of shape (n,m) consisting of n points in m dimensions
    unit: if True, return distances divided by total length of the curve,
          if False, return actual arc lengths."""
    points = numpy.asarray(points)
    distances = numpy.concatenate([[0], numpy.add.accumulate(numpy.sqrt(((points[:-1] - points[1:])**2).sum(axis=1)))])
    if unit:
        distances /= distances[-1]
    return distances

def polyline_length(points):
    """Return the total length of a polyline of shape (n, m)."""
    return cumulative_distances(points, unit=False)[-1]

def perpendiculars(vectors, unit=False):
    """Return 2D vectors rotated a quarter turn counterclockwise.

    Parameters:
        vectors: array of shape (2,) or (n, 2)
        unit: normalize perpendiculars to unit length.
    """
    vectors = numpy.asarray(vectors, dtype=float)
    perps = numpy.empty_like(vectors)
    perps[...,0] = -vectors[...,1]
    perps[...,1] = vectors[...,0]
    if unit:
        perps /= numpy.sqrt((perps**2).sum(axis=-1))[...,numpy.newaxis]
    return perps
