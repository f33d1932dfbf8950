# vim: set expandtab shiftwidth=4 softtabstop=4:

# === UCSF ChimeraX Copyright ===
# Copyright 2022 Regents of the University of California. All rights reserved.
# This software is provided pursuant to the ChimeraX license agreement, which
# covers academic and commercial uses. For more information, see
# <http://www.rbvi.ucsf.edu/chimerax/docs/licensing.html>
#
# This file is part of the ChimeraX library. You can also redistribute and/or
# modify it under the GNU Lesser General Public License version 2.1 as
# published by the Free Software Foundation. For more details, see
# <https://www.gnu.org/licenses/old-licenses/lgpl-2.1.html>
#
# This file is distributed WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. This notice
# must be embedded in or attached to all copies, including partial copies, of
# the software or any revisions or derivations thereof.
# === UCSF ChimeraX Copyright ===

'''
geometry: Coordinate systems
============================

A coordinate system is represented by a Place object which defines an
origin and three axes specified relative to another coordinate system.
For density maps a Place maps grid indices (i,j,k) to physical xyz
positions.  The transform consists of a linear part (a 3 by 3 matrix,
not necessarily a rotation since crystallographic axes can be skewed)
followed by a shift along the 3 axes.  Place objects use 64-bit
coordinates for axes and origin.

A point or vector is a one-dimensional numpy array of 3 floating point
values.  Multiple points or vectors are represented as two-dimensional
numpy arrays of size N by 3.
'''


class Place:
    '''
    The Place class gives the origin and axes vectors of a coordinate
    system.  A Place is often thought of as a coordinate transformation
    from local to global coordinates.

    The axes can be specified as a sequence of three axis vectors. The
    origin can be specified as a point.  Or both axes and origin can be
    specified as a 3 by 4 array where the first 3 columns are the axes
    and the last column is the origin.
    '''
    def __init__(self, matrix=None, axes=None, origin=None):
        from numpy import array, float64, transpose
        if matrix is None:
            m = array(((1, 0, 0, 0), (0, 1, 0, 0), (0, 0, 1, 0)), float64)
            if axes is not None:
                m[:, :3] = transpose(axes)
            if origin is not None:
                m[:, 3] = origin
        else:
            m = array(matrix, float64, order = 'C')
            if m.shape == (4, 4):
                m = m[:3, :].copy()
            elif m.shape != (3, 4):
                raise ValueError('Place matrix must be 3 by 4 or 4 by 4, got %s' % str(m.shape))

        self._matrix = m
        self._inverse = None    # Cached inverse.

    @property
    def matrix(self):
        '''Returns a copy of the 3x4 float64 transformation matrix as a numpy array.'''
        return self._matrix.copy()

    def m44(self):
        '''
        Return a 4x4 float64 array with last row (0,0,0,1).  Points are
        column vectors so xyz1 = m44 @ (i,j,k,1).
        '''
        from numpy import zeros, float64
        m = zeros((4, 4), float64)
        m[:3, :] = self._matrix
        m[3, 3] = 1
        return m

    def __eq__(self, p):
        '''Are matrix values of this Place equal to matrix values of another Place.'''
        if p is self:
            return True
        if not isinstance(p, Place):
            return NotImplemented
        return bool((p._matrix == self._matrix).all())

    def __mul__(self, p):
        '''
        Multiplication of a Place and a point transforms from local
        point coordinates to global coordinates, the result being a
        new point.  Multiplication of a Place by another Place composes
        the coordinate transforms acting in right to left order producing
        a new Place object.
        '''
        if isinstance(p, Place):
            return Place(_multiply_matrices(self._matrix, p._matrix))

        from numpy import ndarray
        if isinstance(p, (ndarray, tuple, list)):
            return _apply_matrix(self._matrix, p)

        raise TypeError('Cannot multiply Place times "%s"' % str(p))

    def inverse(self):
        '''Return the inverse transform.'''
        if self._inverse is None:
            from numpy.linalg import inv
            self._inverse = Place(inv(self.m44()))
        return self._inverse

    def origin(self):
        '''
        Return the transformation shift vector, or equivalently the
        coordinate system origin.
        '''
        return self._matrix[:, 3].copy()

    def axes(self):
        '''Return the coordinate system axes.'''
        return self._matrix[:, :3].transpose().copy()

    def axes_lengths(self):
        '''Return the lengths of the axes vectors.'''
        from numpy.linalg import norm
        m = self._matrix
        return [norm(m[:,a]) for a in (0,1,2)]

    def determinant(self):
        '''Return the determinant of the linear part of the transformation.'''
        from numpy.linalg import det
        return det(self._matrix[:, :3])

    def same(self, p, tolerance=0):
        '''Are all 3 by 4 matrix elements within tolerance of the other transform.'''
        from numpy import abs as absolute
        return bool((absolute(self._matrix - p._matrix) <= tolerance).all())


'''
The following routines create Place objects representing specific
transformations.
'''

def translation(v):
    '''Return a transform which is a shift by vector v.'''
    return Place(origin=v)


def rotation(axis, angle, center=(0, 0, 0)):
    '''
    Return a transform which is a rotation about the specified center
    and axis by the given angle (degrees).
    '''
    from math import pi, sin, cos, sqrt
    x, y, z = axis
    n = sqrt(x*x + y*y + z*z)
    if n == 0:
        raise ValueError('Rotation axis has zero length')
    x, y, z = x/n, y/n, z/n
    a = angle * pi / 180
    c, s = cos(a), sin(a)
    t = 1 - c
    r = ((t*x*x + c, t*x*y - s*z, t*x*z + s*y),
         (t*x*y + s*z, t*y*y + c, t*y*z - s*x),
         (t*x*z - s*y, t*y*z + s*x, t*z*z + c))
    cx, cy, cz = center
    shift = [c0 - (r0[0]*cx + r0[1]*cy + r0[2]*cz) for c0, r0 in zip(center, r)]
    m = [tuple(r[i]) + (shift[i],) for i in (0,1,2)]
    return Place(m)


def scale(s):
    '''Return a transform which is a scale by factor s.'''
    sx, sy, sz = (s,s,s) if isinstance(s, (float, int)) else s
    return Place(((sx, 0, 0, 0), (0, sy, 0, 0), (0, 0, sz, 0)))


def _multiply_matrices(m1, m2):
    from numpy import dot
    m = dot(m1[:, :3], m2)
    m[:, 3] += m1[:, 3]
    return m

def _apply_matrix(m, p):
    from numpy import array, float64, dot
    a = array(p, float64)
    return dot(a, m[:, :3].transpose()) + m[:, 3]
