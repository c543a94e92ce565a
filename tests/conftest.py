"""
Pytest configuration and shared fixtures.

Sample files are built in memory; the save header samples are written field
by field so they do not depend on the SaveHeader encoder.
"""

import copy

import pytest

from factorio_dat.io.writer import Writer
from factorio_dat.model.property_tree import PropertyTree
from factorio_dat.model.version import Version, VersionHeader
from factorio_dat.parser import encode_mod_settings


MOD_SETTINGS_VERSION = Version(1, 1, 110, 0)

MOD_SETTINGS = {
    'startup': {
        'bobmods-plates-purewater': {'value': True},
        'angels-starting-resource': {'value': 'angels-ore1'},
    },
    'runtime-global': {
        'rso-region-size': {'value': 7.0},
    },
    'runtime-per-user': {
        'fnei-show-hidden': {'value': False},
        'color-presets': {'value': ['red', 'green']},
    },
}


def write_short_version(writer: Writer, major: int, minor: int, patch: int) -> None:
    writer.write_optim_uint16(major)
    writer.write_optim_uint16(minor)
    writer.write_optim_uint16(patch)


def write_save_header_start(writer: Writer, version: Version) -> None:
    """Write the fields shared by every save header layout, up to loaded_from."""
    version.write(writer)
    writer.write_uint8(0)  # flag
    writer.write_string('freeplay', has_empty_flag=False)  # campaign
    writer.write_string('nauvis', has_empty_flag=False)  # name
    writer.write_string('base', has_empty_flag=False)  # base_mod
    writer.write_uint8(1)  # difficulty
    writer.write_bool(False)  # finished
    writer.write_bool(True)  # player_won
    writer.write_string('', has_empty_flag=False)  # next_level
    writer.write_bool(True)  # can_continue
    writer.write_bool(False)  # finished_but_continuing
    writer.write_bool(True)  # saving_replay
    writer.write_bool(False)  # allow_non_admin_debug_options
    write_short_version(writer, version.major, version.minor, version.patch)  # loaded_from


@pytest.fixture()
def mod_settings_sections() -> dict:
    """Top-level dictionary of the sample mod-settings.dat as plain Python."""
    return copy.deepcopy(MOD_SETTINGS)


@pytest.fixture()
def mod_settings_data() -> bytes:
    """mod-settings.dat with all three sections."""
    return encode_mod_settings(
        VersionHeader(version=MOD_SETTINGS_VERSION),
        PropertyTree.from_python(MOD_SETTINGS),
    )


@pytest.fixture()
def save_header_1_1_data() -> bytes:
    """level-init.dat header written by 1.1.110 with two mods."""
    writer = Writer()
    write_save_header_start(writer, Version(1, 1, 110, 0))
    writer.write_uint16(62060)  # loaded_from_build
    writer.write_bool(True)  # allowed_commands
    writer.write_optim_uint32(2)
    writer.write_string('base', has_empty_flag=False)
    write_short_version(writer, 1, 1, 110)
    writer.write_uint32(0x12345678)
    writer.write_string('flib', has_empty_flag=False)
    write_short_version(writer, 0, 12, 300)
    writer.write_uint32(0xDEADBEEF)
    return writer.to_bytes()


@pytest.fixture()
def save_header_2_0_data() -> bytes:
    """level-init.dat header written by 2.0.28 with Space Age enabled."""
    writer = Writer()
    write_save_header_start(writer, Version(2, 0, 28, 0))
    writer.write_uint32(80000)  # loaded_from_build
    writer.write_bool(False)  # allowed_commands
    writer.write_bytes(b'\x00\x00\xa0\x00')  # reserved
    writer.write_optim_uint32(2)
    writer.write_string('base', has_empty_flag=False)
    write_short_version(writer, 2, 0, 28)
    writer.write_uint32(1)
    writer.write_string('space-age', has_empty_flag=False)
    write_short_version(writer, 2, 0, 28)
    writer.write_uint32(2)
    return writer.to_bytes()
