"""Reshape the trailing data block into grid arrays.

The block starts at the layout's data offset and runs to the end of the
file as little-endian float64 values.

Rectangular grids are plain row-major ``(rows, columns)``.

Triangular grids store each triangle as 9 floats, coordinate-major::

    x0 x1 x2  y0 y1 y2  z0 z1 z2

so cell ``(t, vertex, coordinate)`` of the ``(n, 3, 3)`` result lives at
byte ``t*72 + vertex*8 + coordinate*24`` of the block.
"""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import as_strided

from petragrid.model import RectangularData, TriangularData

FLOAT64_LE = np.dtype("<f8")
ITEM = FLOAT64_LE.itemsize

# byte strides for (triangle, vertex, coordinate)
TRIANGLE_STRIDES = (9 * ITEM, ITEM, 3 * ITEM)


def _floats(payload: bytes, count: int) -> np.ndarray:
    if len(payload) < count * ITEM:
        raise ValueError(
            f"Payload too short: need {count * ITEM} bytes, got {len(payload)}"
        )
    return np.frombuffer(payload, dtype=FLOAT64_LE, count=count)


def assemble_rectangular(payload: bytes, rows: int, columns: int) -> RectangularData:
    """Interpret *payload* as a row-major ``(rows, columns)`` grid."""
    values = _floats(payload, rows * columns).reshape(rows, columns)
    values.flags.writeable = False
    return RectangularData(values)


def assemble_triangular(payload: bytes, n_triangles: int) -> TriangularData:
    """Interpret *payload* as *n_triangles* coordinate-major triangles."""
    flat = _floats(payload, 9 * n_triangles)
    values = as_strided(flat, shape=(n_triangles, 3, 3),
                        strides=TRIANGLE_STRIDES, writeable=False)
    return TriangularData(values)
