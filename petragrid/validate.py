"""Consistency checks on a grid header.

Each check raises its own :class:`~petragrid.errors.GridError` subclass
carrying the values that failed.  The decoder calls them in file order
and stops at the first failure.
"""

from __future__ import annotations

import logging
import math

from petragrid.errors import (
    InvalidRectangularSize,
    InvalidTriangleCount,
    InvalidXSpec,
    InvalidXYUnitOfMeasure,
    InvalidYSpec,
    InvalidZUnitOfMeasure,
    SizeMismatch,
)
from petragrid.model import UnitOfMeasure

logger = logging.getLogger(__name__)

SPEC_REL_TOLERANCE = 1e-4
RECTANGULAR_CELL_BYTES = 8
TRIANGLE_BYTES = 72


def xy_units(code: int) -> UnitOfMeasure:
    unit = UnitOfMeasure.from_code(code)
    if unit is None:
        raise InvalidXYUnitOfMeasure(code)
    return unit


def z_units(code: int) -> UnitOfMeasure:
    unit = UnitOfMeasure.from_code(code)
    if unit is None:
        raise InvalidZUnitOfMeasure(code)
    return unit


def check_size(size: int, rows: int, columns: int) -> None:
    if rows * columns != size:
        raise SizeMismatch(size, rows, columns)


def axis_relative_error(vmin: float, vmax: float, step: float, count: int) -> float:
    """Relative distance between ``vmin + (count-1)*step`` and ``vmax``.

    Measured against ``|vmax|``.  A zero *vmax* gives 0 for an exact
    match and infinity otherwise.  NaN inputs give NaN, which no check
    rejects.
    """
    error = abs(vmin + (count - 1) * step - vmax)
    if math.isnan(error):
        return error
    if vmax == 0:
        return 0.0 if error == 0 else math.inf
    return error / abs(vmax)


def check_x_spec(xmin: float, xmax: float, xstep: float, columns: int) -> None:
    if axis_relative_error(xmin, xmax, xstep, columns) > SPEC_REL_TOLERANCE:
        raise InvalidXSpec(xmin, xmax, xstep, columns)


def check_y_spec(ymin: float, ymax: float, ystep: float, columns: int) -> None:
    """Check the y extent against its step.

    Uses the column count, as the format's original reader does.  That
    looks like a copy of the x check rather than a property of the files;
    it is kept until a sample with ``rows != columns`` settles it.
    """
    if axis_relative_error(ymin, ymax, ystep, columns) > SPEC_REL_TOLERANCE:
        raise InvalidYSpec(ymin, ymax, ystep, columns)


def check_data_length(size: int, n_triangles: int, actual_bytes: int) -> None:
    """Check the trailing data block against the declared shape.

    Triangular grids are compared with *size*, not *n_triangles*, using
    whole 72-byte records.
    """
    if n_triangles == 0:
        if actual_bytes // RECTANGULAR_CELL_BYTES != size:
            raise InvalidRectangularSize(size, actual_bytes)
    elif actual_bytes // TRIANGLE_BYTES != size:
        raise InvalidTriangleCount(n_triangles, actual_bytes)


def check_geometry(header: dict) -> None:
    """Run the size and extent checks on a decoded header, in file order."""
    check_size(header["size"], header["rows"], header["columns"])
    check_x_spec(header["xmin"], header["xmax"], header["xstep"], header["columns"])
    check_y_spec(header["ymin"], header["ymax"], header["ystep"], header["columns"])
    logger.debug("header consistent: %d x %d, %d triangles",
                 header["rows"], header["columns"], header["n_triangles"])
