"""Binary writer for .dat file serialization."""

from __future__ import annotations

import io
import struct

from factorio_dat.const import OPTIM_ESCAPE


class Writer:
    """Binary writer, the mirror image of Reader."""

    def __init__(self) -> None:
        self._buffer = io.BytesIO()

    @property
    def position(self) -> int:
        """Current write position."""
        return self._buffer.tell()

    def to_bytes(self) -> bytes:
        """Get all written data as bytes."""
        return self._buffer.getvalue()

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._buffer.write(data)

    def write_uint8(self, value: int) -> None:
        """Write unsigned 8-bit integer."""
        self._buffer.write(struct.pack('<B', value))

    def write_uint16(self, value: int) -> None:
        """Write unsigned 16-bit integer (little-endian)."""
        self._buffer.write(struct.pack('<H', value))

    def write_uint32(self, value: int) -> None:
        """Write unsigned 32-bit integer (little-endian)."""
        self._buffer.write(struct.pack('<I', value))

    def write_uint64(self, value: int) -> None:
        """Write unsigned 64-bit integer (little-endian)."""
        self._buffer.write(struct.pack('<Q', value))

    def write_double(self, value: float) -> None:
        """Write 64-bit double (little-endian)."""
        self._buffer.write(struct.pack('<d', value))

    def write_bool(self, value: bool) -> None:
        """Write boolean (1 byte)."""
        self.write_uint8(1 if value else 0)

    def write_optim_uint16(self, value: int) -> None:
        """Write space-optimised unsigned 16-bit integer."""
        if value < OPTIM_ESCAPE:
            self.write_uint8(value)
        else:
            self.write_uint8(OPTIM_ESCAPE)
            self.write_uint16(value)

    def write_optim_uint32(self, value: int) -> None:
        """Write space-optimised unsigned 32-bit integer."""
        if value < OPTIM_ESCAPE:
            self.write_uint8(value)
        else:
            self.write_uint8(OPTIM_ESCAPE)
            self.write_uint32(value)

    def write_string(self, value: str | None, has_empty_flag: bool = True) -> None:
        """Write a length-prefixed UTF-8 string.

        With the empty flag, None is written as a single set flag byte.
        Without it, None is written as a zero-length string.
        """
        if has_empty_flag:
            if value is None:
                self.write_bool(True)
                return
            self.write_bool(False)

        data = (value or '').encode('utf-8')
        self.write_optim_uint32(len(data))
        self._buffer.write(data)
