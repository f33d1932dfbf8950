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

# -----------------------------------------------------------------------------
# The GridData class defines the data format handed to volume display code.
# It is used as a base class for reading specific 3D data formats, here
# DSN6 and BRIX electron density maps.
#
# GridData defines how the data is positioned in an xyz coordinate space.
# Each data value is thought of as a sample at a particular point in space.
# The data value with index (0,0,0) has xyz postion given by origin.
# The step parameter (3 values) gives the spacing between data values
# along the 3 data axes, and axes gives the unit direction of each data
# axis.  Crystallographic data axes follow the skewed unit cell edges.
#
from numpy import float32
class GridData:
  '''
  3-dimensional array of numeric values representing a density map
  from x-ray crystallography.  The grid points are positioned in space
  with array index (0,0,0) at the xyz origin, and spacing along the i,j,k
  axes given by the step parameter.  The grid axes need not be
  perpendicular, they follow the crystallographic unit cell edges.

  Attributes
  ----------
  size : 3 integers
    The number of grid points along i,j,k axes.
  value_type : numpy.dtype
    Numeric type of the data values.  Default numpy.float32
  origin : 3 floats
    Position of grid index (0,0,0) in physical coordinates (x,y,z) (usually Angstroms).
    Default (0,0,0).
  step : 3 floats
    Grid plane spacing along i,j,k axes.  Default (1,1,1)
  axes : 3 vectors
    Unit vectors along the i,j,k axes in physical coordinates.
    Default ((1,0,0),(0,1,0),(0,0,1)).
  cell_angles : 3 floats
    Angles (alpha,beta,gamma) between jk, ik, and ij axes in degrees.
    Default (90,90,90).
  name : string
    Descriptive name of grid data.  Default ''
  path : string
    File path to location of data file.  Default ''.
  file_type : string
    File format name when data is read from a file.  Default ''.
  '''
  def __init__(self, size,
               value_type = float32,
               origin = (0,0,0),
               step = (1,1,1),
               axes = ((1,0,0),(0,1,0),(0,0,1)),
               cell_angles = (90,90,90),
               name = '',
               path = '',
               file_type = ''):

    self.path = path
    self.file_type = file_type  # 'dsn6', 'brix'

    if name == '':
      name = self.name_from_path(path)
    self.name = str(name)

    self.size = tuple(size)

    from numpy import dtype
    if not isinstance(value_type, dtype):
      value_type = dtype(value_type)
    self.value_type = value_type        # numpy dtype.

    # Parameters defining how data matrix is positioned in space
    self.origin = tuple(origin)
    self.step = tuple(step)
    self.axes = tuple(tuple(a) for a in axes)
    self.cell_angles = tuple(cell_angles)

    self.update_transform()

  # ---------------------------------------------------------------------------
  #
  def name_from_path(self, path):

    from os.path import basename
    return basename(path)

  # ---------------------------------------------------------------------------
  # Compute 3 by 4 matrices mapping index to xyz and back.
  #
  def update_transform(self):

    tf, tf_inv = transformation_and_inverse(self.origin, self.step, self.axes)
    self.ijk_to_xyz_transform = tf
    self.xyz_to_ijk_transform = tf_inv

  # ---------------------------------------------------------------------------
  #
  def xyz_to_ijk(self, xyz):
    '''
    A matrix i,j,k index corresponds to a point in x,y,z space.
    This function maps the xyz point to the matrix index.
    The returned matrix index is floating point and need not be integers.
    '''
    return self.xyz_to_ijk_transform * xyz

  # ---------------------------------------------------------------------------
  #
  def ijk_to_xyz(self, ijk):
    '''
    A matrix i,j,k index corresponds to a point in x,y,z space.
    This function maps the matrix index to the xyz point.
    The index can be floating point, non-integral values.
    '''
    return self.ijk_to_xyz_transform * ijk
    
  # ---------------------------------------------------------------------------
  #
  def voxel_volume(self):
    '''Volume of one voxel including skewing.'''
    return abs(self.ijk_to_xyz_transform.determinant())
    
  # ---------------------------------------------------------------------------
  #
  def voxel_count(self):
    '''Return the total number of voxels.'''
    s = self.size
    return s[0]*s[1]*s[2]

  # ---------------------------------------------------------------------------
  #
  def matrix(self, ijk_origin = (0,0,0), ijk_size = None,
             ijk_step = (1,1,1), progress = None):
    '''
    Return a numpy array for a box shaped subregion of the data with specified
    index origin and size.  Every Nth point can be take along an axis by
    specifying ijk_step.  The returned array is indexed m[k,j,i] and should
    not be modified.
    '''
    if ijk_size is None:
      ijk_size = self.size

    return self.read_matrix(ijk_origin, ijk_size, ijk_step, progress)
    
  # ---------------------------------------------------------------------------
  #
  def read_matrix(self, ijk_origin = (0,0,0), ijk_size = None,
                  ijk_step = (1,1,1), progress = None):
    '''
    Must overide this function in derived class to return a 3 dimensional
    NumPy matrix.  The returned matrix has size ijk_size and
    element ijk is accessed as m[k,j,i].
    '''
    raise NotImplementedError('Grid %s has no read_matrix() routine' % self.name)
  
  # ---------------------------------------------------------------------------
  # Convenience routine.
  #
  def matrix_slice(self, matrix, ijk_origin, ijk_size, ijk_step):

    i1, j1, k1 = ijk_origin
    i2, j2, k2 = [i+s for i,s in zip(ijk_origin, ijk_size)]
    istep, jstep, kstep = ijk_step
    m = matrix[k1:k2:kstep, j1:j2:jstep, i1:i2:istep]
    return m

# -----------------------------------------------------------------------------
# Return 3 by 4 matrix where first 3 columns are the step scaled axes and
# the last column is the origin, and its inverse.
#
def transformation_and_inverse(origin, step, axes):
  
  ox, oy, oz = origin
  d0, d1, d2 = step
  ax, ay, az = axes

  from .geometry import Place
  tf = Place(((d0*ax[0], d1*ay[0], d2*az[0], ox),
              (d0*ax[1], d1*ay[1], d2*az[1], oy),
              (d0*ax[2], d1*ay[2], d2*az[2], oz)))
  tf_inv = tf.inverse()
  
  return tf, tf_inv
