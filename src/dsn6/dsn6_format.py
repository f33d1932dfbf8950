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
# Read DSN6 and BRIX electron density map files.
#
# http://www.uoxray.uoregon.edu/tnt/manual/node104.html
#
# A DSN6 file has a 512 byte header of 16-bit integers followed by one
# unsigned byte per grid point.  The grid points are stored in 8x8x8 cubes
# with cubes ordered x fastest, then y, then z, and within a cube x varies
# fastest.  Cubes at the upper grid edges are padded out to the full 512
# bytes.  BRIX files use the same data layout with a text header.
#
import logging
_logger = logging.getLogger(__name__)

from ..fileformats import FileFormatError

HEADER_BYTES = 512
BLOCK_SIZE = 8
ENDIAN_MARKER = 100     # Header word 18 in file byte order.

class MalformedHeaderError(FileFormatError):
  pass

class TruncatedDataError(FileFormatError):
  pass

# -----------------------------------------------------------------------------
#
class DSN6Header:
  '''
  Decoded DSN6 or BRIX header.  Grid starts, extents and rates are in
  grid index units, cell lengths are in Angstroms times the voxel size
  given when reading, and cell angles are in degrees.  Data bytes b map
  to values (b - summand) / divisor.
  '''
  def __init__(self, starts, extents, rates, cell_size, cell_angles,
               divisor, summand, file_type = 'dsn6', swapped = False,
               sigma = None):

    self.x_start, self.y_start, self.z_start = starts
    self.x_extent, self.y_extent, self.z_extent = extents
    self.x_rate, self.y_rate, self.z_rate = rates
    self.xlen, self.ylen, self.zlen = cell_size
    self.alpha, self.beta, self.gamma = cell_angles
    self.divisor = divisor
    self.summand = summand
    self.file_type = file_type
    self.swapped = swapped      # Whether 16-bit words were byte swapped.
    self.sigma = sigma          # BRIX only.

  @property
  def starts(self):
    return (self.x_start, self.y_start, self.z_start)

  @property
  def extents(self):
    return (self.x_extent, self.y_extent, self.z_extent)

  @property
  def rates(self):
    return (self.x_rate, self.y_rate, self.z_rate)

  @property
  def cell_size(self):
    return (self.xlen, self.ylen, self.zlen)

  @property
  def cell_angles(self):
    return (self.alpha, self.beta, self.gamma)

  def voxel_count(self):
    x, y, z = self.extents
    return x*y*z

  def description(self):
    return ('%s map start %d %d %d, extent %d %d %d, rate %d %d %d, '
            'cell %.5g %.5g %.5g, angles %.5g %.5g %.5g, divisor %.5g, summand %d'
            % ((self.file_type,) + self.starts + self.extents + self.rates
               + self.cell_size + self.cell_angles + (self.divisor, self.summand)))

# -----------------------------------------------------------------------------
# Decode header and map values.  A bytearray or other writable buffer is
# byte swapped in place when the file byte order differs from ours, read-only
# buffers such as bytes are copied first.  A numpy array must be C contiguous.
#
def parse(data, voxel_size = 1.0, name = '', progress = None):

  a = byte_array(data)
  header = read_header(a, voxel_size)
  _logger.debug('%s %s', name, header.description())

  if progress is None:
    from ..progress import ProgressReporter
    operation = ('Reading %s' % name) if name else 'Reading %s map' % header.file_type
    progress = ProgressReporter(operation)
  values = read_blocks(a, header, progress)

  return header, values

# -----------------------------------------------------------------------------
#
def read_dsn6_file(path, voxel_size = 1.0):

  with open(path, 'rb') as f:
    data = bytearray(f.read())

  from os.path import basename
  return parse(data, voxel_size, name = basename(path))

# -----------------------------------------------------------------------------
#
def byte_array(data):

  from numpy import ndarray, frombuffer, uint8
  if isinstance(data, ndarray):
    if not data.flags.c_contiguous:
      raise ValueError('DSN6 data array must be C contiguous to be byte swapped in place')
    a = data.reshape(-1).view(uint8)
  else:
    a = frombuffer(data, uint8)
  if not a.flags.writeable:
    a = a.copy()
  return a

# -----------------------------------------------------------------------------
# Swap the two bytes of every 16-bit word in place.  A trailing odd byte
# is left unchanged.
#
def swap_bytes(a):

  n = 2 * (len(a) // 2)
  from numpy import int16
  a[:n].view(int16).byteswap(inplace = True)
  return a

# -----------------------------------------------------------------------------
#
def read_header(a, voxel_size = 1.0):

  if len(a) < HEADER_BYTES:
    raise MalformedHeaderError('File size %d bytes is less than the %d byte DSN6 header'
                               % (len(a), HEADER_BYTES))

  if a[:3].tobytes() == b':-)':
    header = read_brix_header(a, voxel_size)
  else:
    header = read_dsn6_header(a, voxel_size)

  check_header(header)
  return header

# -----------------------------------------------------------------------------
#
def header_words(a):

  return a[:HEADER_BYTES].view('<i2')

# -----------------------------------------------------------------------------
#
def read_dsn6_header(a, voxel_size):

  w = header_words(a)
  swapped = bool(w[18] != ENDIAN_MARKER)
  if swapped:
    _logger.debug('Swapping DSN6 byte order')
    swap_bytes(a)

  w = [int(v) for v in header_words(a)[:19]]
  if w[17] == 0:
    raise MalformedHeaderError('DSN6 header scale denominator (word 18) is zero')

  factor = 1.0 / w[17]
  scaling = factor * voxel_size
  header = DSN6Header(starts = w[0:3],
                      extents = w[3:6],
                      rates = w[6:9],
                      cell_size = [v * scaling for v in w[9:12]],
                      cell_angles = [v * factor for v in w[12:15]],
                      divisor = w[15] / 100.0,
                      summand = w[16],
                      file_type = 'dsn6',
                      swapped = swapped)
  return header

# -----------------------------------------------------------------------------
# BRIX header is text, for example
#
#   :-) origin -14 -9 -15 extent 53 47 61 grid 64 50 64 cell 49.4 40.4 53.7
#   90.0 102.8 90.0 prod 2.06 plus -118 sigma 0.14
#
brix_fields = (('origin', 3, int), ('extent', 3, int), ('grid', 3, int),
               ('cell', 6, float), ('prod', 1, float), ('plus', 1, float))

def read_brix_header(a, voxel_size):

  text = a[3:HEADER_BYTES].tobytes().decode('latin-1').replace('\0', ' ')
  words = text.lower().split()

  values = {}
  for field, count, value_type in brix_fields + (('sigma', 1, float),):
    if field not in words:
      if field == 'sigma':
        continue
      raise MalformedHeaderError('BRIX header has no "%s" field' % field)
    i = words.index(field)
    fw = words[i+1:i+1+count]
    try:
      values[field] = [value_type(v) for v in fw]
    except ValueError:
      raise MalformedHeaderError('BRIX header field "%s" has non-numeric values %s'
                                 % (field, ' '.join(fw)))
    if len(values[field]) < count:
      raise MalformedHeaderError('BRIX header field "%s" needs %d values, got %d'
                                 % (field, count, len(fw)))

  cell = values['cell']
  header = DSN6Header(starts = values['origin'],
                      extents = values['extent'],
                      rates = values['grid'],
                      cell_size = [v * voxel_size for v in cell[:3]],
                      cell_angles = cell[3:6],
                      divisor = values['prod'][0],
                      summand = int(round(values['plus'][0])),
                      file_type = 'brix',
                      sigma = values['sigma'][0] if 'sigma' in values else None)
  return header

# -----------------------------------------------------------------------------
#
def check_header(h):

  if min(h.extents) <= 0:
    raise MalformedHeaderError('%s map extents must be positive, got %d %d %d'
                               % ((h.file_type.upper(),) + h.extents))
  if min(h.rates) <= 0:
    raise MalformedHeaderError('%s map grid rates must be positive, got %d %d %d'
                               % ((h.file_type.upper(),) + h.rates))
  if min(h.cell_size) <= 0:
    raise MalformedHeaderError('%s map cell lengths must be positive, got %.5g %.5g %.5g'
                               % ((h.file_type.upper(),) + h.cell_size))
  if h.divisor == 0:
    raise MalformedHeaderError('%s map value divisor is zero' % h.file_type.upper())

# -----------------------------------------------------------------------------
# Number of 8x8x8 blocks along x, y and z.
#
def block_counts(extents):

  bs = BLOCK_SIZE
  return tuple((e + bs - 1) // bs for e in extents)

# -----------------------------------------------------------------------------
# Yield payload byte offset and x, y, z grid index ranges for each block
# in file order.  Every block occupies 512 bytes including edge padding.
#
def block_layout(extents):

  bs = BLOCK_SIZE
  xsize, ysize, zsize = extents
  xblocks, yblocks, zblocks = block_counts(extents)
  offset = 0
  for zz in range(zblocks):
    z0 = bs*zz
    for yy in range(yblocks):
      y0 = bs*yy
      for xx in range(xblocks):
        x0 = bs*xx
        yield (offset,
               (x0, min(x0+bs, xsize)),
               (y0, min(y0+bs, ysize)),
               (z0, min(z0+bs, zsize)))
        offset += bs*bs*bs

# -----------------------------------------------------------------------------
# Payload bytes needed to reach the last grid point.  Padding after the last
# grid point of the final block is never read.
#
def required_payload_bytes(extents):

  bs = BLOCK_SIZE
  xb, yb, zb = block_counts(extents)
  last_block = (xb*yb*zb - 1) * bs*bs*bs
  i, j, k = [(e-1) % bs for e in extents]
  return last_block + (k*bs + j)*bs + i + 1

# -----------------------------------------------------------------------------
# Return values as a flat float32 array with index (x*ysize + y)*zsize + z.
#
def read_blocks(a, header, progress = None):

  extents = header.extents
  xsize, ysize, zsize = extents
  payload = a[HEADER_BYTES:]
  needed = required_payload_bytes(extents)
  if len(payload) < needed:
    raise TruncatedDataError('%s map with extents %d %d %d needs %d data bytes, file has %d'
                             % ((header.file_type.upper(),) + extents + (needed, len(payload))))

  bs = BLOCK_SIZE
  bbytes = bs*bs*bs
  if progress:
    # One progress plane per z layer of blocks, sized in payload bytes.
    progress.array_size(block_counts(extents), bbytes)

  from numpy import empty, zeros, uint8, float32, float64
  raw = empty(extents, uint8)
  for offset, (x0,x1), (y0,y1), (z0,z1) in block_layout(extents):
    block = payload[offset:offset+bbytes]
    if len(block) < bbytes:
      padded = zeros((bbytes,), uint8)
      padded[:len(block)] = block
      block = padded
    b = block.reshape((bs,bs,bs))       # Indexed z,y,x within block.
    raw[x0:x1,y0:y1,z0:z1] = b[:z1-z0,:y1-y0,:x1-x0].transpose()
    if progress and x1 == xsize and y1 == ysize:
      progress.plane(z0 // bs)

  values = ((raw.astype(float64) - header.summand) / header.divisor).astype(float32)

  return values.reshape(-1)

# -----------------------------------------------------------------------------
# Transform from grid index (i,j,k) to xyz.  The value array indexed
# m[x,y,z] is treated as m[k,j,i] so i runs along z, j along y and k along x.
# The cell basis vectors divided by the grid rates are followed by a
# rotation, shift by the grid start, and flip that reorder index axes to
# (k + x_start, j + y_start, i + z_start).
#
def map_transform(header):

  from math import pi
  from ..unit_cell import unit_cell_axes
  a, b, c = header.cell_size
  alpha, beta, gamma = [angle * pi / 180 for angle in header.cell_angles]
  axes = unit_cell_axes(a, b, c, alpha, beta, gamma)
  grid_axes = [[v/rate for v in axis] for axis, rate in zip(axes, header.rates)]

  from ..geometry import Place, rotation, translation, scale
  basis = Place(axes = grid_axes)
  xs, ys, zs = header.starts
  tf = basis * rotation((0,1,0), 90) * translation((-zs, ys, xs)) * scale((-1,1,1))

  return tf
