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
# Python readers for DSN6 and BRIX crystallographic density maps.
#
__version__ = '1.0'

from .griddata import GridData
from .geometry import Place
from .errors import UserError
from .unit_cell import DegenerateCellError
from .fileformats import file_formats, MapFileFormat, open_file
from .fileformats import FileFormatError, UnknownFileType
from .progress import ProgressReporter

from .dsn6.dsn6_format import parse, map_transform, DSN6Header
from .dsn6.dsn6_format import MalformedHeaderError, TruncatedDataError
from .dsn6.dsn6_grid import DSN6Grid
