import numpy
import pytest

from dsn6map.dsn6.dsn6_format import (
    read_header, swap_bytes, byte_array, parse, ENDIAN_MARKER,
    MalformedHeaderError,
)
from dsn6map import FileFormatError, UserError


def test_header_fields(dsn6_bytes):
    data = dsn6_bytes((10, 12, 14), starts = (-3, 4, 5), rates = (60, 70, 80),
                      cell = (49.5, 40.25, 53.75, 90, 102.5, 90),
                      divisor = 2.5, summand = -17, denominator = 100)
    h = read_header(byte_array(data))
    assert h.starts == (-3, 4, 5)
    assert h.extents == (10, 12, 14)
    assert h.rates == (60, 70, 80)
    assert h.cell_size == pytest.approx((49.5, 40.25, 53.75))
    assert h.cell_angles == pytest.approx((90, 102.5, 90))
    assert h.divisor == pytest.approx(2.5)
    assert h.summand == -17
    assert h.file_type == 'dsn6'
    assert h.swapped is False
    assert h.sigma is None
    assert h.voxel_count() == 10*12*14


def test_voxel_size_scales_lengths_not_angles(dsn6_bytes):
    data = dsn6_bytes((8, 8, 8), cell = (30, 40, 50, 80, 85, 95), denominator = 10)
    h = read_header(byte_array(data), voxel_size = 0.1)
    assert h.cell_size == pytest.approx((3.0, 4.0, 5.0))
    assert h.cell_angles == pytest.approx((80, 85, 95))


def test_big_endian_header_is_swapped(dsn6_bytes):
    native = dsn6_bytes((10, 12, 14), starts = (1, -2, 3), summand = 300, divisor = 3)
    swapped = dsn6_bytes((10, 12, 14), starts = (1, -2, 3), summand = 300, divisor = 3,
                         big_endian = True)
    assert numpy.frombuffer(bytes(swapped[:512]), '<i2')[18] != ENDIAN_MARKER

    hn = read_header(byte_array(native))
    hs = read_header(byte_array(swapped))
    assert hs.swapped is True
    assert hs.description() == hn.description()


def test_swap_is_whole_buffer_and_in_place(dsn6_bytes):
    payload = bytes(range(256)) * 2
    native = dsn6_bytes((8, 8, 8), payload)
    data = dsn6_bytes((8, 8, 8), payload, big_endian = True)
    assert data != native
    read_header(byte_array(data))
    assert data == native


def test_read_only_input_is_not_modified(dsn6_bytes):
    payload = bytes(range(256)) * 2
    data = bytes(dsn6_bytes((8, 8, 8), payload, big_endian = True))
    copy = bytes(data)
    header, values = parse(data)
    assert data == copy
    assert header.swapped is True
    assert values.reshape((8, 8, 8))[:3, 0, 0].tolist() == [0, 1, 2]


def test_numpy_input_is_swapped_in_place(dsn6_bytes):
    payload = bytes(range(256)) * 2
    native = dsn6_bytes((8, 8, 8), payload)
    a = numpy.frombuffer(dsn6_bytes((8, 8, 8), payload, big_endian = True), numpy.uint8)
    header, values = parse(a)
    assert header.swapped is True
    assert a.tobytes() == bytes(native)


def test_non_contiguous_array_is_rejected(dsn6_bytes):
    data = dsn6_bytes((8, 8, 8), bytes(512))
    a = numpy.zeros(2 * len(data), numpy.uint8)
    a[::2] = numpy.frombuffer(bytes(data), numpy.uint8)
    with pytest.raises(ValueError, match = 'contiguous'):
        parse(a[::2])


def test_swap_twice_restores_bytes():
    original = bytes(range(255))        # odd length
    a = byte_array(bytearray(original))
    swap_bytes(a)
    assert a.tobytes() != original
    assert a.tobytes()[:4] == bytes((1, 0, 3, 2))
    assert a.tobytes()[-1] == original[-1]
    swap_bytes(a)
    assert a.tobytes() == original


def test_native_marker_is_not_swapped(dsn6_bytes):
    data = dsn6_bytes((8, 8, 8), bytes(range(256)) * 2)
    before = bytes(data)
    h = read_header(byte_array(data))
    assert h.swapped is False
    assert bytes(data) == before


def test_short_header():
    with pytest.raises(MalformedHeaderError):
        read_header(byte_array(bytearray(511)))


@pytest.mark.parametrize('extents', [(0, 8, 8), (8, -1, 8), (8, 8, 0)])
def test_non_positive_extents(dsn6_bytes, extents):
    with pytest.raises(MalformedHeaderError, match = 'extents'):
        read_header(byte_array(dsn6_bytes(extents, rates = (8, 8, 8))))


def test_non_positive_rates(dsn6_bytes):
    with pytest.raises(MalformedHeaderError, match = 'rates'):
        read_header(byte_array(dsn6_bytes((8, 8, 8), rates = (8, 0, 8))))


def test_zero_scale_denominator(dsn6_bytes):
    with pytest.raises(MalformedHeaderError, match = 'denominator'):
        read_header(byte_array(dsn6_bytes((8, 8, 8), denominator = 0)))


def test_zero_divisor(dsn6_bytes):
    with pytest.raises(MalformedHeaderError, match = 'divisor'):
        read_header(byte_array(dsn6_bytes((8, 8, 8), divisor = 0)))


@pytest.mark.parametrize('cell', [(0, 10, 10, 90, 90, 90), (10, 10, -5, 90, 90, 90)])
def test_non_positive_cell_lengths(dsn6_bytes, cell):
    with pytest.raises(MalformedHeaderError, match = 'cell lengths'):
        read_header(byte_array(dsn6_bytes((8, 8, 8), cell = cell)))


def test_zero_voxel_size(dsn6_bytes):
    with pytest.raises(MalformedHeaderError, match = 'cell lengths'):
        read_header(byte_array(dsn6_bytes((8, 8, 8))), voxel_size = 0)


def test_header_errors_are_file_format_errors(dsn6_bytes):
    with pytest.raises(FileFormatError):
        read_header(byte_array(dsn6_bytes((8, 8, 8), divisor = 0)))
    assert issubclass(MalformedHeaderError, UserError)


def test_brix_header(brix_bytes):
    data = brix_bytes((53, 47, 61), starts = (-14, -9, -15), rates = (64, 50, 64),
                      cell = (49.41, 40.37, 53.68, 90, 102.79, 90),
                      prod = 2.06, plus = -118, sigma = 0.14)
    h = read_header(byte_array(data), voxel_size = 2.0)
    assert h.file_type == 'brix'
    assert h.starts == (-14, -9, -15)
    assert h.extents == (53, 47, 61)
    assert h.rates == (64, 50, 64)
    assert h.cell_size == pytest.approx((98.82, 80.74, 107.36))
    assert h.cell_angles == pytest.approx((90, 102.79, 90))
    assert h.divisor == pytest.approx(2.06)
    assert h.summand == -118
    assert h.sigma == pytest.approx(0.14)
    assert h.swapped is False


def test_brix_header_without_sigma(brix_bytes):
    h = read_header(byte_array(brix_bytes((8, 8, 8), sigma = None)))
    assert h.sigma is None


def test_brix_header_missing_field():
    header = b':-) origin 0 0 0 extent 8 8 8 grid 8 8 8 prod 1 plus 0'.ljust(512)
    with pytest.raises(MalformedHeaderError, match = 'cell'):
        read_header(byte_array(bytearray(header)))


def test_brix_header_non_numeric_field():
    header = (b':-) origin 0 0 0 extent 8 x 8 grid 8 8 8 '
              b'cell 1 1 1 90 90 90 prod 1 plus 0').ljust(512)
    with pytest.raises(MalformedHeaderError, match = 'extent'):
        read_header(byte_array(bytearray(header)))
