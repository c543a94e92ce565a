"""
Top-level entry points for Factorio .dat files.

Both file kinds start with a VersionHeader:
- mod-settings.dat: VersionHeader + one property tree node
- level-init.dat: VersionHeader + SaveHeader (followed by data we don't parse)

Input is the complete file contents; reading files or extracting
level-init.dat from a save zip is up to the caller.
"""

from __future__ import annotations

from factorio_dat.const import MAX_DEPTH
from factorio_dat.errors import TrailingDataError
from factorio_dat.io.reader import Reader
from factorio_dat.io.writer import Writer
from factorio_dat.log import log
from factorio_dat.model.property_tree import PropertyTree
from factorio_dat.model.save_header import SaveHeader
from factorio_dat.model.version import VersionHeader


def _check_trailing(reader: Reader, strict: bool) -> None:
    """Raise on unconsumed bytes in strict mode, otherwise just log them."""
    if reader.remaining == 0:
        return
    if strict:
        raise TrailingDataError(reader.position, reader.remaining)
    log.debug(f'Ignoring {reader.remaining} trailing bytes at offset {reader.position}')


def parse_mod_settings(
    data: bytes,
    strict: bool = True,
    max_depth: int = MAX_DEPTH,
) -> tuple[VersionHeader, PropertyTree]:
    """Parse mod-settings.dat contents.

    Args:
        data: Raw file contents
        strict: Raise TrailingDataError if bytes follow the property tree
        max_depth: Property tree nesting limit

    Returns:
        The VersionHeader and the top-level property tree node
    """
    reader = Reader(data)
    header = VersionHeader.read(reader)
    log.debug(f'mod-settings version {header.version}')

    tree = PropertyTree.read(reader, max_depth=max_depth)
    _check_trailing(reader, strict)
    return header, tree


def parse_save_header(data: bytes, strict: bool = False) -> tuple[VersionHeader, SaveHeader]:
    """Parse the header of level-init.dat contents.

    The header is a prefix of level-init.dat, so trailing bytes are ignored
    unless strict is set.

    Args:
        data: Raw file contents
        strict: Raise TrailingDataError if bytes follow the header

    Returns:
        The VersionHeader and the decoded SaveHeader
    """
    reader = Reader(data)
    header = VersionHeader.read(reader)
    log.debug(f'level-init version {header.version}')

    save_header = SaveHeader.read(reader, header.version)
    _check_trailing(reader, strict)
    return header, save_header


def encode_mod_settings(header: VersionHeader, tree: PropertyTree) -> bytes:
    """Serialize a VersionHeader and property tree to mod-settings.dat contents."""
    writer = Writer()
    header.write(writer)
    tree.write(writer)
    return writer.to_bytes()


def encode_save_header(header: VersionHeader, save_header: SaveHeader) -> bytes:
    """Serialize a VersionHeader and SaveHeader using the layout for its version."""
    writer = Writer()
    header.write(writer)
    save_header.write(writer, header.version)
    return writer.to_bytes()
