"""Decode errors.

Every error carries the byte offset at which decoding failed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from factorio_dat.model.version import Version


class DecodeError(ValueError):
    """Base class for all decoding failures."""

    def __init__(self, message: str, offset: int) -> None:
        self.offset = offset
        super().__init__(f'Offset {offset}: {message}')


class UnexpectedEofError(DecodeError):
    """Buffer exhausted in the middle of a read."""

    def __init__(self, offset: int, needed: int, remaining: int) -> None:
        self.needed = needed
        self.remaining = remaining
        super().__init__(f'Cannot read {needed} bytes, only {remaining} remaining', offset)


class InvalidUtf8Error(DecodeError):
    """String bytes are not valid UTF-8."""

    def __init__(self, offset: int, reason: str) -> None:
        self.reason = reason
        super().__init__(f'Invalid UTF-8 in string: {reason}', offset)


class UnknownTypeTagError(DecodeError):
    """Property tree type tag outside 0-5."""

    def __init__(self, tag: int, offset: int) -> None:
        self.tag = tag
        super().__init__(f'Unknown property tree type tag {tag:#04x}', offset)


class UnsupportedVersionError(DecodeError):
    """No known save header layout for this version."""

    def __init__(self, version: Version, offset: int) -> None:
        self.version = version
        super().__init__(f'Unsupported save header version {version}', offset)


class TrailingDataError(DecodeError):
    """Bytes left over after the top-level value in strict mode."""

    def __init__(self, offset: int, count: int) -> None:
        self.count = count
        super().__init__(f'{count} trailing bytes after end of data', offset)


class MaxDepthExceededError(DecodeError):
    """Property tree nested deeper than the configured limit."""

    def __init__(self, offset: int, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f'Property tree nesting exceeds {max_depth} levels', offset)


class MalformedDataError(DecodeError):
    """Structurally valid data that does not have the expected shape."""
