"""Rigid and affine maps of points and vectors, and coordinate frames.

Points and vectors are numpy arrays of shape (d,) or (n, d). Matrices act
on row vectors, so that transformed = numpy.dot(points, matrix), the usual
layout when points are stacked as the rows of an array.
"""

import numpy

def _unit(vector):
    vector = numpy.asarray(vector, dtype=float)
    norm = numpy.linalg.norm(vector)
    if norm == 0:
        raise ValueError('Direction vector must be non-zero.')
    return vector / norm

def _perpendicular(vector):
    return numpy.array([-vector[1], vector[0]])

class Axis:
    """A directed line: origin point plus unit direction. In 2D an Axis is a
    mirror line; in 3D it is a rotation axis."""
    def __init__(self, origin, direction):
        self.origin = numpy.asarray(origin, dtype=float)
        self.direction = _unit(direction)
        if self.origin.shape != self.direction.shape:
            raise ValueError('Axis origin and direction must have the same dimension.')

    def __repr__(self):
        return 'Axis({}, {})'.format(list(self.origin), list(self.direction))


class Plane:
    """A 3D plane: origin point plus unit normal. Used as a mirror plane."""
    def __init__(self, origin, normal):
        self.origin = numpy.asarray(origin, dtype=float)
        self.normal = _unit(normal)
        if self.origin.shape != (3,) or self.normal.shape != (3,):
            raise ValueError('Plane origin and normal must be 3D.')

    def __repr__(self):
        return 'Plane({}, {})'.format(list(self.origin), list(self.normal))


class Frame:
    """Coordinate frame: an origin and orthonormal axis directions.

    Parameters:
        origin: array of shape (d,)
        basis: array of shape (d, d) whose rows are the frame's x, y (and z)
            directions in global coordinates. If None, the global axes are used.
            The basis may be left-handed (i.e. include a reflection).
    """
    def __init__(self, origin, basis=None):
        self.origin = numpy.asarray(origin, dtype=float)
        d = len(self.origin)
        if basis is None:
            basis = numpy.eye(d)
        self.basis = numpy.asarray(basis, dtype=float)
        if self.basis.shape != (d, d):
            raise ValueError('Frame basis must have shape ({0}, {0}).'.format(d))
        if not numpy.allclose(numpy.dot(self.basis, self.basis.T), numpy.eye(d)):
            raise ValueError('Frame basis must be orthonormal.')

    @classmethod
    def with_x_direction(cls, origin, x_direction):
        """Return a right-handed 2D frame with the given x direction."""
        x = _unit(x_direction)
        return cls(origin, [x, _perpendicular(x)])

    @property
    def is_right_handed(self):
        return numpy.linalg.det(self.basis) > 0

    def __repr__(self):
        return 'Frame({}, {})'.format(list(self.origin), self.basis.tolist())

    def global_points(self, points):
        """Convert points given in this frame's local coordinates to global coordinates."""
        return self.origin + numpy.dot(points, self.basis)

    def local_points(self, points):
        """Convert points in global coordinates to this frame's local coordinates."""
        return numpy.dot(numpy.asarray(points, dtype=float) - self.origin, self.basis.T)

    def global_vectors(self, vectors):
        return numpy.dot(vectors, self.basis)

    def local_vectors(self, vectors):
        return numpy.dot(vectors, self.basis.T)


def rotation_matrix(angle, axis_direction=None):
    """Return the matrix rotating row vectors counterclockwise by angle (radians).

    With no axis_direction, return the 2x2 matrix for 2D rotation; otherwise
    the 3x3 matrix for rotation about the given 3D direction (right-hand rule).
    """
    c, s = numpy.cos(angle), numpy.sin(angle)
    if axis_direction is None:
        return numpy.array([[c, s], [-s, c]])
    k = _unit(axis_direction)
    cross = numpy.array([[0, -k[2], k[1]], [k[2], 0, -k[0]], [-k[1], k[0], 0]])
    column_matrix = c * numpy.eye(3) + s * cross + (1 - c) * numpy.outer(k, k)
    return column_matrix.T

def translate(points, displacement):
    return numpy.asarray(points, dtype=float) + numpy.asarray(displacement, dtype=float)

def rotate_points(points, center_or_axis, angle):
    """Rotate points by angle around a 2D center point or a 3D Axis."""
    if isinstance(center_or_axis, Axis):
        origin = center_or_axis.origin
        matrix = rotation_matrix(angle, center_or_axis.direction)
    else:
        origin = numpy.asarray(center_or_axis, dtype=float)
        matrix = rotation_matrix(angle)
    return origin + numpy.dot(numpy.asarray(points, dtype=float) - origin, matrix)

def rotate_vectors(vectors, center_or_axis, angle):
    if isinstance(center_or_axis, Axis):
        matrix = rotation_matrix(angle, center_or_axis.direction)
    else:
        matrix = rotation_matrix(angle)
    return numpy.dot(vectors, matrix)

def scale_points(points, center, factor):
    center = numpy.asarray(center, dtype=float)
    return center + factor * (numpy.asarray(points, dtype=float) - center)

def scale_vectors(vectors, factor):
    return factor * numpy.asarray(vectors, dtype=float)

def _mirror_normal(axis_or_plane):
    if isinstance(axis_or_plane, Plane):
        return axis_or_plane.origin, axis_or_plane.normal
    if len(axis_or_plane.direction) != 2:
        raise ValueError('Mirroring across an Axis is only defined in 2D; use a Plane in 3D.')
    return axis_or_plane.origin, _perpendicular(axis_or_plane.direction)

def mirror_points(points, axis_or_plane):
    """Reflect points across a 2D Axis or a 3D Plane."""
    origin, normal = _mirror_normal(axis_or_plane)
    offsets = numpy.asarray(points, dtype=float) - origin
    return origin + mirror_vectors(offsets, axis_or_plane)

def mirror_vectors(vectors, axis_or_plane):
    origin, normal = _mirror_normal(axis_or_plane)
    vectors = numpy.asarray(vectors, dtype=float)
    distances = numpy.dot(vectors, normal)
    return vectors - 2 * numpy.multiply.outer(distances, normal)
