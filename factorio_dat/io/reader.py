"""Binary reader with position tracking for .dat file parsing."""

from __future__ import annotations

import struct

from factorio_dat.const import OPTIM_ESCAPE
from factorio_dat.errors import DecodeError, InvalidUtf8Error, UnexpectedEofError


class Reader:
    """Binary reader with position tracking and little-endian support.

    A read that fails leaves the position where it was before the call.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0

    @property
    def position(self) -> int:
        """Current read position."""
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        """Set read position."""
        if value < 0 or value > len(self._data):
            raise ValueError(f'Position {value} out of range [0, {len(self._data)}]')
        self._position = value

    @property
    def size(self) -> int:
        """Total size of data."""
        return len(self._data)

    @property
    def remaining(self) -> int:
        """Bytes remaining to read."""
        return len(self._data) - self._position

    def read_bytes(self, count: int) -> bytes:
        """Read raw bytes."""
        if count < 0:
            raise ValueError(f'Cannot read a negative number of bytes ({count})')
        if count > self.remaining:
            raise UnexpectedEofError(self._position, count, self.remaining)
        result = self._data[self._position : self._position + count]
        self._position += count
        return result

    def read_uint8(self) -> int:
        """Read unsigned 8-bit integer."""
        return self.read_bytes(1)[0]

    def read_uint16(self) -> int:
        """Read unsigned 16-bit integer (little-endian)."""
        return struct.unpack('<H', self.read_bytes(2))[0]

    def read_uint32(self) -> int:
        """Read unsigned 32-bit integer (little-endian)."""
        return struct.unpack('<I', self.read_bytes(4))[0]

    def read_uint64(self) -> int:
        """Read unsigned 64-bit integer (little-endian)."""
        return struct.unpack('<Q', self.read_bytes(8))[0]

    def read_double(self) -> float:
        """Read 64-bit double (little-endian)."""
        return struct.unpack('<d', self.read_bytes(8))[0]

    def read_bool(self) -> bool:
        """Read boolean (1 byte, any nonzero value is true)."""
        return self.read_uint8() != 0

    def read_optim_uint16(self) -> int:
        """Read space-optimised unsigned 16-bit integer.

        One byte holds values below 255; 0xFF is followed by the full uint16.
        """
        start = self._position
        try:
            value = self.read_uint8()
            if value == OPTIM_ESCAPE:
                value = self.read_uint16()
        except DecodeError:
            self._position = start
            raise
        return value

    def read_optim_uint32(self) -> int:
        """Read space-optimised unsigned 32-bit integer.

        One byte holds values below 255; 0xFF is followed by the full uint32.
        """
        start = self._position
        try:
            value = self.read_uint8()
            if value == OPTIM_ESCAPE:
                value = self.read_uint32()
        except DecodeError:
            self._position = start
            raise
        return value

    def read_string(self, has_empty_flag: bool = True) -> str | None:
        """Read a length-prefixed UTF-8 string.

        Format:
        - empty flag (mod-settings only): nonzero means no string follows
        - space-optimised uint32 byte length
        - UTF-8 bytes

        Returns:
            The string, or None if the empty flag was set.
        """
        start = self._position
        try:
            if has_empty_flag and self.read_bool():
                return None

            length = self.read_optim_uint32()
            data_start = self._position
            data = self.read_bytes(length)
            try:
                return data.decode('utf-8')
            except UnicodeDecodeError as e:
                raise InvalidUtf8Error(data_start + e.start, e.reason) from e
        except DecodeError:
            self._position = start
            raise
