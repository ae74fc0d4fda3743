"""Shared test fixtures for petragrid."""

import struct

import pytest

DATA_OFFSET = 0x119C


def build_grid(
    *,
    version=2,
    name=b"TEST GRID",
    rows=2,
    columns=3,
    size=None,
    xmin=100.0, xmax=120.0, xstep=10.0,
    ymin=50.0, ymax=70.0, ystep=10.0,
    zmin=-1.0, zmax=1.0,
    cm=-98.5, rlat=31.0,
    created=45000.5,
    grid_method=7, projection_code=3,
    xyunits=0, zunits=1,
    n_triangles=0,
    source=b"WELL TOPS",
    unknown=b"C66",
    projection=b"TX-27C",
    datum=b"NAD27",
    pad=b"0",
    payload=None,
):
    """Build a synthetic Petra grid file.

    String fields are right-padded with *pad*; the default pads with the
    ASCII digit the reader treats as the terminator.
    """
    if size is None:
        size = rows * columns
    buf = bytearray(DATA_OFFSET)

    def put_str(offset, value, width):
        buf[offset:offset + width] = value.ljust(width, pad)[:width]

    struct.pack_into("<I", buf, 0x00, version)
    put_str(0x04, name, 81)
    struct.pack_into("<I8d", buf, 0x55, size,
                     xmin, xmax, ymin, ymax, xstep, ystep, zmin, zmax)
    struct.pack_into("<2d", buf, 0xB9, cm, rlat)
    struct.pack_into("<d", buf, 0xE1, created)
    struct.pack_into("<5I", buf, 0x3FD, rows, columns, grid_method,
                     projection_code, xyunits)
    struct.pack_into("<I", buf, 0x429, zunits)
    struct.pack_into("<I", buf, 0x431, n_triangles)
    put_str(0x5B9, source, 246)
    put_str(0x8BF, unknown, 2009)
    put_str(0x8BF + 2009, projection, 65)
    put_str(0x8BF + 2009 + 65, datum, 195)

    if payload is None:
        if n_triangles:
            values = [float(i) for i in range(9 * n_triangles)]
        else:
            values = [float(i) for i in range(size)]
        payload = struct.pack(f"<{len(values)}d", *values)
    return bytes(buf) + payload


@pytest.fixture
def make_grid():
    """Return the synthetic grid builder."""
    return build_grid


@pytest.fixture
def rectangular_bytes():
    """A valid 2 x 3 rectangular grid with values 0..5."""
    return build_grid()


@pytest.fixture
def triangular_bytes():
    """A valid grid holding 4 triangles (size 4 = 2 x 2)."""
    return build_grid(rows=2, columns=2, xmax=110.0, ymax=60.0, n_triangles=4)


@pytest.fixture
def rectangular_file(tmp_path, rectangular_bytes):
    p = tmp_path / "rect.grd"
    p.write_bytes(rectangular_bytes)
    return p


@pytest.fixture
def triangular_file(tmp_path, triangular_bytes):
    p = tmp_path / "tri.grd"
    p.write_bytes(triangular_bytes)
    return p
