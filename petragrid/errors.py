"""Errors raised while reading a Petra grid.

Every error is terminal for the decode attempt.  The values that caused
the failure are kept as attributes so callers can report them.
"""

from __future__ import annotations


class GridError(Exception):
    """Base class for all grid decoding errors."""


class GridIOError(GridError):
    """The underlying stream could not satisfy a seek or read."""

    def __init__(self, message: str, offset: int | None = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset {offset:#x})"
        super().__init__(f"I/O error: {message}")


class SizeMismatch(GridError):
    """The declared grid size is not rows x columns."""

    def __init__(self, size: int, rows: int, columns: int):
        self.size = size
        self.rows = rows
        self.columns = columns
        super().__init__(f"total size {size} != {rows} rows x {columns} columns")


class InvalidXSpec(GridError):
    """The x bounds disagree with the x step and column count."""

    def __init__(self, xmin: float, xmax: float, xstep: float, columns: int):
        self.xmin = xmin
        self.xmax = xmax
        self.xstep = xstep
        self.columns = columns
        super().__init__(
            f"invalid x spec: {xmin} to {xmax} by {xstep} but {columns} columns"
        )


class InvalidYSpec(GridError):
    """The y bounds disagree with the y step and *column* count.

    The check this reports uses the column count, not the row count.
    """

    def __init__(self, ymin: float, ymax: float, ystep: float, columns: int):
        self.ymin = ymin
        self.ymax = ymax
        self.ystep = ystep
        self.columns = columns
        super().__init__(
            f"invalid y spec: {ymin} to {ymax} by {ystep} but {columns} columns"
        )


class InvalidRectangularSize(GridError):
    """The trailing data block is not ``8 * size`` bytes."""

    def __init__(self, size: int, actual_bytes: int):
        self.size = size
        self.actual_bytes = actual_bytes
        super().__init__(
            f"actual data length {actual_bytes} bytes does not match "
            f"claimed grid size {size}"
        )


class InvalidTriangleCount(GridError):
    """The trailing data block does not hold the declared triangles."""

    def __init__(self, n_triangles: int, actual_bytes: int):
        self.n_triangles = n_triangles
        self.actual_bytes = actual_bytes
        super().__init__(
            f"actual data length {actual_bytes} bytes does not match "
            f"claimed triangle count {n_triangles}"
        )


class InvalidXYUnitOfMeasure(GridError):
    def __init__(self, code: int):
        self.code = code
        super().__init__(f"unknown XY unit-of-measure code {code}")


class InvalidZUnitOfMeasure(GridError):
    def __init__(self, code: int):
        self.code = code
        super().__init__(f"unknown Z unit-of-measure code {code}")


class InvalidDateTime(GridError):
    """The creation date cannot be represented as a calendar date-time."""

    def __init__(self, days: float):
        self.days = days
        super().__init__(f"creation date {days!r} days since 1899-12-30 is out of range")
