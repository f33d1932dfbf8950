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
# Wrap DSN6 or BRIX map data as a GridData object.
#
from ..griddata import GridData

class DSN6Grid(GridData):

  def __init__(self, header, values, path = '', name = ''):

    self.header = header

    xsize, ysize, zsize = header.extents
    self.array = values.reshape((xsize, ysize, zsize))  # Indexed m[k,j,i]

    # Index axes i,j,k run along unit cell z,y,x.
    from .dsn6_format import map_transform
    tf = map_transform(header)
    step = tf.axes_lengths()
    axes = [a/s for a,s in zip(tf.axes(), step)]

    h = header
    GridData.__init__(self, (zsize, ysize, xsize), values.dtype,
                      origin = tf.origin(), step = step, axes = axes,
                      cell_angles = (h.gamma, h.beta, h.alpha),
                      name = name, path = path, file_type = h.file_type)

  # ---------------------------------------------------------------------------
  #
  def read_matrix(self, ijk_origin, ijk_size, ijk_step, progress):

    return self.matrix_slice(self.array, ijk_origin, ijk_size, ijk_step)
