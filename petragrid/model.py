"""In-memory representation of a decoded Petra grid."""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Union

import numpy as np


class UnitOfMeasure(enum.Enum):
    """Units of measure for a grid dimension."""

    FEET = 0
    METERS = 1

    @classmethod
    def from_code(cls, code: int) -> UnitOfMeasure | None:
        """Return the unit for a header code, or *None* if unknown."""
        try:
            return cls(code)
        except ValueError:
            return None


@dataclass(frozen=True, eq=False)
class RectangularData:
    """A ``(rows, columns)`` grid of z values.

    The x and y positions are implicit: column ``j`` sits at
    ``xmin + j * xstep`` and row ``i`` at ``ymin + i * ystep``.
    """

    values: np.ndarray
    kind = "rectangular"

    @property
    def shape(self) -> tuple[int, ...]:
        return self.values.shape


@dataclass(frozen=True, eq=False)
class TriangularData:
    """An ``(n_triangles, 3, 3)`` mesh indexed by (triangle, vertex, coordinate).

    Coordinate 0 is x, 1 is y and 2 is z.  Vertex order within a triangle
    is as stored; it appears to be counterclockwise (the triangles work
    with ``matplotlib.tri.Triangulation``) but that is unverified.
    """

    values: np.ndarray
    kind = "triangular"

    @property
    def shape(self) -> tuple[int, ...]:
        return self.values.shape

    @property
    def n_triangles(self) -> int:
        return self.values.shape[0]

    def vertices(self, triangle: int) -> np.ndarray:
        """Return the ``(3, 3)`` vertex array of one triangle."""
        return self.values[triangle]


GridData = Union[RectangularData, TriangularData]


@dataclass(frozen=True)
class Grid:
    """A decoded Petra grid.

    Fields documented as guesses are stored exactly as read.
    """

    # always 2 in the files seen so far; not checked
    version: int
    name: str
    # rows x columns; for triangular grids possibly the pre-triangulation size
    size: int
    rows: int
    columns: int
    # zero for rectangular grids
    n_triangles: int
    xmin: float
    xmax: float
    ymin: float
    ymax: float
    xstep: float
    ystep: float
    zmin: float
    zmax: float
    xyunits: UnitOfMeasure
    zunits: UnitOfMeasure
    # creation (or last modification) time as recorded by Petra
    created_date: datetime
    # probably describes the data the grid was built from
    source_data: str
    # meaning unknown; "C66" in every sample
    unknown_metadata: str
    # e.g. "TX-27C"
    projection: str
    # e.g. "NAD27"
    datum: str
    grid_method: int
    projection_code: int
    # "CM" in Petra's log, plausibly a central meridian
    cm: float
    # "RLAT" in Petra's log, plausibly a reference latitude
    rlat: float
    data: GridData

    @property
    def is_triangular(self) -> bool:
        return isinstance(self.data, TriangularData)

    def header(self) -> dict[str, Any]:
        """Return every scalar field as a JSON-serialisable dict."""
        out: dict[str, Any] = {}
        for f in fields(self):
            if f.name == "data":
                continue
            value = getattr(self, f.name)
            if isinstance(value, UnitOfMeasure):
                value = value.name.lower()
            elif isinstance(value, datetime):
                value = value.isoformat()
            out[f.name] = value
        out["data_kind"] = self.data.kind
        out["data_shape"] = list(self.data.shape)
        return out
