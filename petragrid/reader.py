"""Decode a Petra grid from a seekable binary stream.

The header is not laid out in logical order, so the reader walks the
layout's field groups, seeking to each one.  Unit codes are checked as
soon as they are read; the geometric checks run once the whole numeric
header and the stream length are known, before the deferred string
blocks and the bulk data are touched.
"""

from __future__ import annotations

import io
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any, BinaryIO, Callable

from petragrid.assemble import assemble_rectangular, assemble_triangular
from petragrid.config import FieldGroup, GridLayout, default_layout
from petragrid.decoders import legacy_datetime
from petragrid.errors import GridIOError
from petragrid.fields import FieldReader
from petragrid.model import Grid
from petragrid import validate

logger = logging.getLogger(__name__)

# raw header value -> decoded value, applied right after the field's group
_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "xyunits": validate.xy_units,
    "zunits": validate.z_units,
    "created_date": legacy_datetime,
}

_HEADER_FIELDS = {f.name for f in fields(Grid)} - {"data"}


def read(stream: BinaryIO, layout: GridLayout | None = None) -> Grid:
    """Read a :class:`Grid` from a seekable binary stream.

    The stream is left open; its cursor position afterwards is undefined.

    Parameters
    ----------
    stream : BinaryIO
        A file or buffer supporting ``seek`` and ``read``.
    layout : GridLayout, optional
        Offset table to decode with.  Defaults to the built-in layout.

    Returns
    -------
    Grid

    Raises
    ------
    GridError
        On the first I/O failure or inconsistency found.
    ValueError
        If *layout* does not describe every header field.
    """
    if layout is None:
        layout = default_layout()
    _check_layout(layout)
    reader = FieldReader(stream, layout.string_terminator)

    header: dict[str, Any] = {}
    for group in layout.header_groups:
        _read_group(reader, group, header)
    if header["version"] != layout.version:
        logger.warning("file declares version %d, layout %r describes version %d",
                       header["version"], layout.name, layout.version)
    validate.check_geometry(header)

    stream_length = reader.length()
    if stream_length < layout.data_offset:
        raise GridIOError(
            f"stream is {stream_length} bytes, shorter than the data offset",
            layout.data_offset,
        )
    data_bytes = stream_length - layout.data_offset
    validate.check_data_length(header["size"], header["n_triangles"], data_bytes)

    for group in layout.deferred_groups:
        _read_group(reader, group, header)

    reader.seek(layout.data_offset)
    n_triangles = header["n_triangles"]
    if n_triangles == 0:
        payload = reader.raw(header["size"] * validate.RECTANGULAR_CELL_BYTES)
        data = assemble_rectangular(payload, header["rows"], header["columns"])
    else:
        payload = reader.raw(n_triangles * validate.TRIANGLE_BYTES)
        data = assemble_triangular(payload, n_triangles)
    logger.debug("read %s data %s", data.kind, data.shape)

    return Grid(data=data, **header)


def _check_layout(layout: GridLayout) -> None:
    names = set(layout.field_offsets())
    missing = sorted(_HEADER_FIELDS - names)
    if missing:
        raise ValueError(f"Layout {layout.name!r} lacks fields: {', '.join(missing)}")
    unknown = sorted(names - _HEADER_FIELDS)
    if unknown:
        raise ValueError(f"Layout {layout.name!r} has unknown fields: {', '.join(unknown)}")


def _read_group(reader: FieldReader, group: FieldGroup, header: dict[str, Any]) -> None:
    values = reader.read_group(group)
    for name, value in values.items():
        convert = _CONVERTERS.get(name)
        header[name] = convert(value) if convert else value


def read_bytes(data: bytes, layout: GridLayout | None = None) -> Grid:
    """Read a :class:`Grid` from an in-memory buffer."""
    return read(io.BytesIO(data), layout)


def read_file(path: str | Path, layout: GridLayout | None = None) -> Grid:
    """Read a :class:`Grid` from a file on disk."""
    path = Path(path)
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise GridIOError(f"{path}: {exc.strerror or exc}") from exc
    with fh:
        logger.debug("reading %s", path)
        return read(fh, layout)
