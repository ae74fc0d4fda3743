"""Primitive little-endian reads against a seekable binary stream."""

from __future__ import annotations

import io
import logging
import struct
from typing import Any, BinaryIO

from petragrid.config import FieldDefinition, FieldGroup
from petragrid.decoders import decode_fixed_string
from petragrid.errors import GridIOError

logger = logging.getLogger(__name__)

_UINT32 = struct.Struct("<I")
_FLOAT64 = struct.Struct("<d")


class FieldReader:
    """Seek-and-read helper over a random-access stream.

    Every read advances the stream cursor.  The reader never closes the
    stream; ownership stays with the caller.

    Parameters
    ----------
    stream : BinaryIO
        Any object with ``seek``, ``read`` and ``tell``.
    terminator : bytes
        Terminator byte used when decoding fixed-width strings.
    """

    def __init__(self, stream: BinaryIO, terminator: bytes = b"0"):
        self.stream = stream
        self.terminator = terminator

    def tell(self) -> int:
        try:
            return self.stream.tell()
        except (OSError, ValueError) as exc:
            raise GridIOError(str(exc)) from exc

    def seek(self, offset: int) -> None:
        """Move the cursor to an absolute *offset*."""
        try:
            self.stream.seek(offset, io.SEEK_SET)
        except (OSError, ValueError) as exc:
            raise GridIOError(f"cannot seek: {exc}", offset) from exc

    def length(self) -> int:
        """Return the total stream length, leaving the cursor at the end."""
        try:
            return self.stream.seek(0, io.SEEK_END)
        except (OSError, ValueError) as exc:
            raise GridIOError(f"cannot seek to end: {exc}") from exc

    def raw(self, size: int) -> bytes:
        """Read exactly *size* bytes."""
        offset = self.tell()
        try:
            data = self.stream.read(size)
        except (OSError, ValueError) as exc:
            raise GridIOError(f"read failed: {exc}", offset) from exc
        if len(data) != size:
            raise GridIOError(
                f"unexpected end of stream: wanted {size} bytes, got {len(data)}",
                offset,
            )
        return data

    def uint32(self) -> int:
        return _UINT32.unpack(self.raw(4))[0]

    def float64(self) -> float:
        return _FLOAT64.unpack(self.raw(8))[0]

    def string(self, width: int) -> str:
        return decode_fixed_string(self.raw(width), self.terminator)

    def read_field(self, field: FieldDefinition) -> Any:
        """Read one field at the current cursor position."""
        if field.dtype == "uint32":
            return self.uint32()
        if field.dtype == "float64":
            return self.float64()
        if field.dtype == "string":
            return self.string(field.size)
        raise ValueError(f"Unsupported dtype: {field.dtype!r}")

    def read_group(self, group: FieldGroup) -> dict[str, Any]:
        """Seek to *group* and read its fields in order."""
        logger.debug("reading %s group at %#x", group.name, group.offset)
        self.seek(group.offset)
        return {f.name: self.read_field(f) for f in group.fields}
