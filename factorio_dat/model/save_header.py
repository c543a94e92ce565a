"""Save header: the metadata record at the start of level-init.dat.

The header is a flat sequence of fields. Which fields are present, and how
wide some of them are, depends on the game version in the VersionHeader.
SAVE_HEADER_FIELDS lists every field in file order together with the
version range it is present in; reading and writing both walk that table.

Strings in the save header have no empty flag, only a length and the bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Any, Callable

from factorio_dat.errors import UnsupportedVersionError
from factorio_dat.log import log
from factorio_dat.model.version import ShortVersion, Version

if TYPE_CHECKING:
    from factorio_dat.io.reader import Reader
    from factorio_dat.io.writer import Writer


# Layouts are known for 1.x and 2.x saves
MIN_SUPPORTED_VERSION = Version(1, 0, 0, 0)
MAX_SUPPORTED_VERSION = Version(3, 0, 0, 0)  # exclusive

# 2.0 widened the build number to 32 bits and added 4 bytes after allowed_commands
VERSION_2_0 = (2, 0)

RESERVED_SIZE = 4


@dataclass(frozen=True)
class SaveHeaderMod:
    """A mod attached to the save (name, version, CRC)."""

    name: str
    version: ShortVersion
    crc: int  # uint32

    @classmethod
    def read(cls, reader: Reader) -> SaveHeaderMod:
        """Read SaveHeaderMod from reader."""
        return cls(
            name=reader.read_string(has_empty_flag=False),
            version=ShortVersion.read(reader),
            crc=reader.read_uint32(),
        )

    def write(self, writer: Writer) -> None:
        """Write SaveHeaderMod to writer."""
        writer.write_string(self.name, has_empty_flag=False)
        self.version.write(writer)
        writer.write_uint32(self.crc)

    def __str__(self) -> str:
        return f'{self.name} {self.version}'


def _read_mods(reader: Reader) -> tuple[SaveHeaderMod, ...]:
    count = reader.read_optim_uint32()
    return tuple(SaveHeaderMod.read(reader) for _ in range(count))


def _write_mods(writer: Writer, mods: tuple[SaveHeaderMod, ...]) -> None:
    writer.write_optim_uint32(len(mods))
    for mod in mods:
        mod.write(writer)


# kind -> (read, write)
FIELD_CODECS: dict[str, tuple[Callable[[Reader], Any], Callable[[Writer, Any], None]]] = {
    'string': (
        lambda r: r.read_string(has_empty_flag=False),
        lambda w, v: w.write_string(v, has_empty_flag=False),
    ),
    'uint8': (lambda r: r.read_uint8(), lambda w, v: w.write_uint8(v)),
    'uint16': (lambda r: r.read_uint16(), lambda w, v: w.write_uint16(v)),
    'uint32': (lambda r: r.read_uint32(), lambda w, v: w.write_uint32(v)),
    'bool': (lambda r: r.read_bool(), lambda w, v: w.write_bool(v)),
    'short_version': (ShortVersion.read, lambda w, v: v.write(w)),
    'reserved': (lambda r: r.read_bytes(RESERVED_SIZE), lambda w, v: w.write_bytes(v)),
    'mods': (_read_mods, _write_mods),
}


@dataclass(frozen=True)
class FieldSpec:
    """One save header field and the (major, minor) range it is present in."""

    name: str
    kind: str
    since: tuple[int, int] | None = None  # inclusive
    until: tuple[int, int] | None = None  # exclusive

    def applies(self, version: Version) -> bool:
        key = (version.major, version.minor)
        if self.since is not None and key < self.since:
            return False
        if self.until is not None and key >= self.until:
            return False
        return True


SAVE_HEADER_FIELDS = (
    FieldSpec('campaign', 'string'),
    FieldSpec('name', 'string'),
    FieldSpec('base_mod', 'string'),
    FieldSpec('difficulty', 'uint8'),
    FieldSpec('finished', 'bool'),
    FieldSpec('player_won', 'bool'),
    FieldSpec('next_level', 'string'),
    FieldSpec('can_continue', 'bool'),
    FieldSpec('finished_but_continuing', 'bool'),
    FieldSpec('saving_replay', 'bool'),
    FieldSpec('allow_non_admin_debug_options', 'bool'),
    FieldSpec('loaded_from', 'short_version'),
    FieldSpec('loaded_from_build', 'uint16', until=VERSION_2_0),
    FieldSpec('loaded_from_build', 'uint32', since=VERSION_2_0),
    FieldSpec('allowed_commands', 'bool'),
    FieldSpec('reserved', 'reserved', since=VERSION_2_0),
    FieldSpec('mods', 'mods'),
)


def is_supported(version: Version) -> bool:
    """Check if a save header layout is known for this version."""
    return MIN_SUPPORTED_VERSION <= version < MAX_SUPPORTED_VERSION


def fields_for_version(version: Version) -> list[FieldSpec]:
    """Get the fields present in a save header of this version, in file order."""
    return [spec for spec in SAVE_HEADER_FIELDS if spec.applies(version)]


@dataclass(frozen=True)
class SaveHeader:
    """Decoded level-init.dat header (everything after the VersionHeader)."""

    campaign: str  # e.g. 'freeplay' or 'transport-belt-madness'
    name: str  # campaign level
    base_mod: str  # always 'base'
    difficulty: int  # uint8
    finished: bool
    player_won: bool  # victory condition satisfied
    next_level: str
    can_continue: bool
    finished_but_continuing: bool
    saving_replay: bool
    allow_non_admin_debug_options: bool
    loaded_from: ShortVersion  # game version the save was loaded from
    loaded_from_build: int  # uint16 before 2.0, uint32 after
    allowed_commands: bool
    mods: tuple[SaveHeaderMod, ...] = ()
    reserved: bytes | None = None  # 2.0+ only, meaning unknown

    @classmethod
    def read(cls, reader: Reader, version: Version) -> SaveHeader:
        """Read SaveHeader from reader.

        Args:
            reader: Reader positioned just after the VersionHeader
            version: Game version from the VersionHeader

        Raises:
            UnsupportedVersionError: No layout is known for version
        """
        if not is_supported(version):
            raise UnsupportedVersionError(version, reader.position)

        values = {}
        for spec in fields_for_version(version):
            read, _ = FIELD_CODECS[spec.kind]
            values[spec.name] = read(reader)

        header = cls(**values)
        log.debug(f'Read save header: {header.campaign}/{header.name}, {len(header.mods)} mods')
        return header

    def write(self, writer: Writer, version: Version) -> None:
        """Write SaveHeader to writer using the layout for version."""
        if not is_supported(version):
            raise ValueError(f'Cannot write save header for unsupported version {version}')

        for spec in fields_for_version(version):
            value = getattr(self, spec.name)
            if value is None:
                raise ValueError(f'Field {spec.name} is required for version {version}')
            _, write = FIELD_CODECS[spec.kind]
            write(writer, value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain Python values."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, ShortVersion):
                value = str(value)
            elif isinstance(value, bytes):
                value = value.hex()
            elif f.name == 'mods':
                value = [{'name': m.name, 'version': str(m.version), 'crc': m.crc} for m in value]
            result[f.name] = value
        return result
