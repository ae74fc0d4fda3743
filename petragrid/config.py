"""Offset tables for the Petra grid format.

Loads YAML layout definitions that map named header fields to absolute
byte offsets and primitive types.  The layout is data rather than code so
that a later revision of the format can be described by an alternate
table without touching the decoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

# dtype -> width in bytes; strings carry their own width
DTYPE_SIZES = {
    "uint32": 4,
    "float64": 8,
}


@dataclass(frozen=True)
class FieldDefinition:
    """A single field within a header group."""

    name: str
    dtype: str  # "uint32", "float64" or "string"
    size: int
    description: str = ""


@dataclass(frozen=True)
class FieldGroup:
    """A run of contiguous fields starting at an absolute offset."""

    name: str
    offset: int
    fields: tuple[FieldDefinition, ...] = ()
    deferred: bool = False

    @property
    def size(self) -> int:
        return sum(f.size for f in self.fields)

    @property
    def end(self) -> int:
        return self.offset + self.size

    def field_offsets(self) -> dict[str, int]:
        """Return the absolute offset of every field in the group."""
        offsets = {}
        pos = self.offset
        for f in self.fields:
            offsets[f.name] = pos
            pos += f.size
        return offsets


@dataclass(frozen=True)
class GridLayout:
    """Complete physical layout of one grid file version."""

    name: str
    version: int
    groups: tuple[FieldGroup, ...]
    data_offset: int
    string_terminator: bytes = b"0"
    endian: str = "little"

    @property
    def header_groups(self) -> tuple[FieldGroup, ...]:
        return tuple(g for g in self.groups if not g.deferred)

    @property
    def deferred_groups(self) -> tuple[FieldGroup, ...]:
        return tuple(g for g in self.groups if g.deferred)

    def field_offsets(self) -> dict[str, int]:
        """Return ``{field name: absolute offset}`` across all groups."""
        offsets: dict[str, int] = {}
        for g in self.groups:
            offsets.update(g.field_offsets())
        return offsets


def _parse_terminator(value: str | list | int | None) -> bytes:
    """Parse the string terminator from a config value.

    Accepts a hex string like ``"30"``, a list of ints or a single int.
    """
    if value is None:
        return b"0"
    if isinstance(value, int):
        return bytes([value])
    if isinstance(value, list):
        return bytes(value)
    if isinstance(value, str):
        return bytes.fromhex(value.replace(" ", ""))
    raise ValueError(f"Invalid string terminator: {value!r}")


def _parse_field(data: dict) -> FieldDefinition:
    """Build a :class:`FieldDefinition` from a dictionary."""
    dtype = data.get("dtype", "uint32")
    if dtype == "string":
        if "size" not in data:
            raise ValueError(f"String field {data['name']!r} needs a size")
        size = data["size"]
    elif dtype in DTYPE_SIZES:
        size = DTYPE_SIZES[dtype]
        if data.get("size", size) != size:
            raise ValueError(f"Field {data['name']!r}: {dtype} is {size} bytes wide")
    else:
        raise ValueError(f"Unsupported dtype for field {data['name']!r}: {dtype!r}")
    return FieldDefinition(
        name=data["name"],
        dtype=dtype,
        size=size,
        description=data.get("description", ""),
    )


def _parse_group(data: dict) -> FieldGroup:
    """Build a :class:`FieldGroup` from a dictionary."""
    return FieldGroup(
        name=data["name"],
        offset=data["offset"],
        fields=tuple(_parse_field(f) for f in data.get("fields", [])),
        deferred=data.get("deferred", False),
    )


def _parse_layout(data: dict) -> GridLayout:
    """Build a :class:`GridLayout` from a dictionary."""
    endian = data.get("endian", "little")
    if endian != "little":
        raise ValueError(f"Unsupported endian for {data['name']!r}: {endian!r}")
    terminator = _parse_terminator(data.get("string_terminator"))
    if len(terminator) != 1:
        raise ValueError(f"String terminator must be a single byte, got {terminator!r}")
    layout = GridLayout(
        name=data["name"],
        version=data.get("version", 0),
        groups=tuple(_parse_group(g) for g in data.get("groups", [])),
        data_offset=data["data_offset"],
        string_terminator=terminator,
        endian=endian,
    )
    overlapping = [g.name for g in layout.groups if g.end > layout.data_offset]
    if overlapping:
        raise ValueError(
            f"Groups in {layout.name!r} run past the data offset: {', '.join(overlapping)}"
        )
    names = [f.name for g in layout.groups for f in g.fields]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate fields in {layout.name!r}: {', '.join(duplicates)}")
    return layout


def load_config(path: str | Path | None = None) -> list[GridLayout]:
    """Load grid layouts from a YAML file.

    Parameters
    ----------
    path : str or Path, optional
        Path to a YAML layout file.  When *None* the built-in
        ``petra_grid.yaml`` shipped with the package is used.

    Returns
    -------
    list[GridLayout]
        Parsed layout definitions.
    """
    if path is None:
        path = Path(__file__).parent / "configs" / "petra_grid.yaml"
    else:
        path = Path(path)

    with open(path, "r") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ValueError(f"{path}: invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping with a 'layouts' list")
    try:
        return [_parse_layout(layout) for layout in data.get("layouts", [])]
    except KeyError as exc:
        raise ValueError(f"{path}: missing required key {exc}") from exc


@lru_cache(maxsize=1)
def default_layout() -> GridLayout:
    """Return the built-in layout for the observed format version."""
    return load_config()[0]
