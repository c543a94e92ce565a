"""Version structures shared by mod-settings.dat and level-init.dat."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from factorio_dat.log import log

if TYPE_CHECKING:
    from factorio_dat.io.reader import Reader
    from factorio_dat.io.writer import Writer


@dataclass(frozen=True, order=True)
class Version:
    """Game version (8 bytes - 4 uint16)."""

    major: int
    minor: int
    patch: int
    build: int = 0

    SIZE = 8

    @classmethod
    def read(cls, reader: Reader) -> Version:
        """Read Version from reader."""
        return cls(
            major=reader.read_uint16(),
            minor=reader.read_uint16(),
            patch=reader.read_uint16(),
            build=reader.read_uint16(),
        )

    def write(self, writer: Writer) -> None:
        """Write Version to writer."""
        writer.write_uint16(self.major)
        writer.write_uint16(self.minor)
        writer.write_uint16(self.patch)
        writer.write_uint16(self.build)

    def __str__(self) -> str:
        return f'{self.major}.{self.minor}.{self.patch}.{self.build}'


@dataclass(frozen=True)
class VersionHeader:
    """File preamble (9 bytes): Version plus a reserved flag byte.

    The engine always writes the flag as zero. It is kept verbatim so the
    header re-encodes byte for byte.
    """

    version: Version
    flag: int = 0

    SIZE = 9

    @classmethod
    def read(cls, reader: Reader) -> VersionHeader:
        """Read VersionHeader from reader."""
        version = Version.read(reader)
        flag = reader.read_uint8()
        if flag != 0:
            log.warning(f'Unexpected non-zero flag byte after version {version}: {flag}')
        return cls(version=version, flag=flag)

    def write(self, writer: Writer) -> None:
        """Write VersionHeader to writer."""
        self.version.write(writer)
        writer.write_uint8(self.flag)


@dataclass(frozen=True, order=True)
class ShortVersion:
    """Three-part version stored as space-optimised uint16s (mods, loaded_from)."""

    major: int
    minor: int
    patch: int

    @classmethod
    def read(cls, reader: Reader) -> ShortVersion:
        """Read ShortVersion from reader."""
        return cls(
            major=reader.read_optim_uint16(),
            minor=reader.read_optim_uint16(),
            patch=reader.read_optim_uint16(),
        )

    def write(self, writer: Writer) -> None:
        """Write ShortVersion to writer."""
        writer.write_optim_uint16(self.major)
        writer.write_optim_uint16(self.minor)
        writer.write_optim_uint16(self.patch)

    def __str__(self) -> str:
        return f'{self.major}.{self.minor}.{self.patch}'
