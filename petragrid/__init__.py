"""petragrid - A reader for Petra binary grid (.grd) files."""

__version__ = "0.1.0"

from petragrid.config import GridLayout, FieldGroup, FieldDefinition, load_config, default_layout
from petragrid.model import Grid, GridData, RectangularData, TriangularData, UnitOfMeasure
from petragrid.errors import (
    GridError,
    GridIOError,
    SizeMismatch,
    InvalidXSpec,
    InvalidYSpec,
    InvalidRectangularSize,
    InvalidTriangleCount,
    InvalidXYUnitOfMeasure,
    InvalidZUnitOfMeasure,
    InvalidDateTime,
)
from petragrid.reader import read, read_bytes, read_file

__all__ = [
    "GridLayout",
    "FieldGroup",
    "FieldDefinition",
    "load_config",
    "default_layout",
    "Grid",
    "GridData",
    "RectangularData",
    "TriangularData",
    "UnitOfMeasure",
    "GridError",
    "GridIOError",
    "SizeMismatch",
    "InvalidXSpec",
    "InvalidYSpec",
    "InvalidRectangularSize",
    "InvalidTriangleCount",
    "InvalidXYUnitOfMeasure",
    "InvalidZUnitOfMeasure",
    "InvalidDateTime",
    "read",
    "read_bytes",
    "read_file",
]
