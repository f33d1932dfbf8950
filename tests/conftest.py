import numpy
import pytest


def _block_payload(values, fill = 0):
    '''Store uint8 values indexed [x,y,z] as DSN6 8x8x8 blocks.'''
    values = numpy.asarray(values, numpy.uint8)
    xsize, ysize, zsize = values.shape
    blocks = []
    for z0 in range(0, zsize, 8):
        for y0 in range(0, ysize, 8):
            for x0 in range(0, xsize, 8):
                block = numpy.full((8, 8, 8), fill, numpy.uint8)
                v = values[x0:x0+8, y0:y0+8, z0:z0+8]
                nx, ny, nz = v.shape
                block[:nz, :ny, :nx] = v.transpose()
                blocks.append(block.tobytes())
    return b''.join(blocks)


def _dsn6_bytes(extents, payload = b'', starts = (0, 0, 0), rates = None,
                cell = (32, 32, 32, 90, 90, 90), divisor = 1, summand = 0,
                denominator = 1, big_endian = False, marker = 100):
    '''Build a DSN6 file image with a little endian (or big endian) header.'''
    if rates is None:
        rates = extents
    w = numpy.zeros(256, '<i2')
    w[0:3] = starts
    w[3:6] = extents
    w[6:9] = rates
    w[9:15] = [round(v * denominator) for v in cell]
    w[15] = round(divisor * 100)
    w[16] = summand
    w[17] = denominator
    w[18] = marker
    data = bytearray(w.tobytes() + bytes(payload))
    if big_endian:
        n = 2 * (len(data) // 2)
        a = numpy.frombuffer(data, numpy.uint8)
        a[:n].view(numpy.int16).byteswap(inplace = True)
    return data


def _brix_bytes(extents, payload = b'', starts = (0, 0, 0), rates = None,
                cell = (32, 32, 32, 90, 90, 90), prod = 1.0, plus = 0, sigma = 0.5):
    if rates is None:
        rates = extents
    text = (':-) origin %5d%5d%5d extent %5d%5d%5d grid %5d%5d%5d '
            % (tuple(starts) + tuple(extents) + tuple(rates)))
    text += 'cell %10.3f%10.3f%10.3f%10.3f%10.3f%10.3f ' % tuple(cell)
    text += 'prod %12.5f plus %8d ' % (prod, plus)
    if sigma is not None:
        text += 'sigma %12.5f' % sigma
    header = text.encode('ascii').ljust(512, b' ')
    return bytearray(header + bytes(payload))


@pytest.fixture
def block_payload():
    return _block_payload


@pytest.fixture
def dsn6_bytes():
    return _dsn6_bytes


@pytest.fixture
def brix_bytes():
    return _brix_bytes


@pytest.fixture
def map_file(tmp_path):
    def write(data, filename = 'test.omap'):
        path = tmp_path / filename
        path.write_bytes(bytes(data))
        return str(path)
    return write
