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
# Unit cell geometry for crystallographic maps.
#
from .errors import UserError

class DegenerateCellError(UserError):
  '''Unit cell lengths and angles do not describe a real parallelepiped.'''
  pass

# -----------------------------------------------------------------------------
# Cartesian edge vectors of a unit cell with edge lengths a, b, c and angles
# alpha (between b and c), beta (a and c), gamma (a and b).  Edge a lies along
# x and edge b in the xy plane.  Angle arguments must be in radians.
#
def unit_cell_axes(a, b, c, alpha, beta, gamma):

  from math import sin, cos, sqrt
  cg = cos(gamma)
  sg = sin(gamma)
  cb = cos(beta)
  sb = sin(beta)
  ca = cos(alpha)
  if sg == 0:
    raise DegenerateCellError('Unit cell angle gamma %.5g degrees gives zero area a,b face'
                              % _degrees(gamma))
  cy = c*(ca - cb*cg)/sg
  r = c*c*sb*sb - cy*cy
  if r <= 0:
    raise DegenerateCellError('Unit cell angles (%.5g, %.5g, %.5g) degrees do not form a cell'
                              % (_degrees(alpha), _degrees(beta), _degrees(gamma)))

  axes = ((a, 0, 0),
          (b*cg, b*sg, 0),
          (c*cb, cy, sqrt(r)))

  return axes

# -----------------------------------------------------------------------------
#
def _degrees(angle):

  from math import pi
  return angle * 180 / pi
