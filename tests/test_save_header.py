"""
Tests for level-init.dat save header decoding.
"""

import pytest

from factorio_dat.errors import TrailingDataError, UnexpectedEofError, UnsupportedVersionError
from factorio_dat.io.writer import Writer
from factorio_dat.model.save_header import SaveHeaderMod, fields_for_version, is_supported
from factorio_dat.model.version import ShortVersion, Version, VersionHeader
from factorio_dat.parser import encode_save_header, parse_save_header


def test_parse_1_1(save_header_1_1_data: bytes) -> None:
    header, save_header = parse_save_header(save_header_1_1_data)

    assert header.version == Version(1, 1, 110, 0)
    assert save_header.campaign == 'freeplay'
    assert save_header.name == 'nauvis'
    assert save_header.base_mod == 'base'
    assert save_header.difficulty == 1
    assert save_header.finished is False
    assert save_header.player_won is True
    assert save_header.next_level == ''
    assert save_header.can_continue is True
    assert save_header.finished_but_continuing is False
    assert save_header.saving_replay is True
    assert save_header.allow_non_admin_debug_options is False
    assert save_header.loaded_from == ShortVersion(1, 1, 110)
    assert save_header.loaded_from_build == 62060
    assert save_header.allowed_commands is True
    assert save_header.reserved is None
    assert save_header.mods == (
        SaveHeaderMod('base', ShortVersion(1, 1, 110), 0x12345678),
        SaveHeaderMod('flib', ShortVersion(0, 12, 300), 0xDEADBEEF),
    )


def test_parse_2_0(save_header_2_0_data: bytes) -> None:
    """Test the 2.0 layout: 32-bit build number and 4 reserved bytes."""
    header, save_header = parse_save_header(save_header_2_0_data)

    assert header.version == Version(2, 0, 28, 0)
    assert save_header.loaded_from == ShortVersion(2, 0, 28)
    assert save_header.loaded_from_build == 80000
    assert save_header.allowed_commands is False
    assert save_header.reserved == b'\x00\x00\xa0\x00'
    assert [str(mod) for mod in save_header.mods] == ['base 2.0.28', 'space-age 2.0.28']
    assert [mod.crc for mod in save_header.mods] == [1, 2]


def test_fields_for_version_1_1() -> None:
    specs = fields_for_version(Version(1, 1, 110, 0))
    kinds = {spec.name: spec.kind for spec in specs}

    assert kinds['loaded_from_build'] == 'uint16'
    assert 'reserved' not in kinds
    assert specs[0].name == 'campaign'
    assert specs[-1].name == 'mods'


def test_fields_for_version_2_0() -> None:
    specs = fields_for_version(Version(2, 0, 0, 0))
    names = [spec.name for spec in specs]
    kinds = {spec.name: spec.kind for spec in specs}

    assert kinds['loaded_from_build'] == 'uint32'
    assert names.count('loaded_from_build') == 1
    assert names.index('reserved') == names.index('allowed_commands') + 1


@pytest.mark.parametrize(
    ('version', 'supported'),
    [
        (Version(0, 18, 47, 0), False),
        (Version(1, 0, 0, 0), True),
        (Version(1, 1, 110, 0), True),
        (Version(2, 0, 28, 0), True),
        (Version(2, 65535, 0, 0), True),
        (Version(3, 0, 0, 0), False),
    ],
)
def test_is_supported(version: Version, supported: bool) -> None:
    assert is_supported(version) is supported


@pytest.mark.parametrize('version', [Version(0, 18, 47, 0), Version(3, 0, 0, 0)])
def test_unsupported_version(version: Version) -> None:
    """Test that unknown layouts fail closed right after the VersionHeader."""
    writer = Writer()
    VersionHeader(version).write(writer)
    writer.write_bytes(b'\x00' * 64)

    with pytest.raises(UnsupportedVersionError) as exc_info:
        parse_save_header(writer.to_bytes())
    assert exc_info.value.version == version
    assert exc_info.value.offset == VersionHeader.SIZE


def test_truncation_at_every_offset(save_header_2_0_data: bytes) -> None:
    for cut in range(len(save_header_2_0_data)):
        with pytest.raises(UnexpectedEofError):
            parse_save_header(save_header_2_0_data[:cut])


def test_trailing_data_ignored_by_default(save_header_1_1_data: bytes) -> None:
    """Test that the rest of level-init.dat after the header is ignored."""
    _, save_header = parse_save_header(save_header_1_1_data + b'\x01\x02\x03')
    assert save_header.campaign == 'freeplay'


def test_trailing_data_strict(save_header_1_1_data: bytes) -> None:
    with pytest.raises(TrailingDataError) as exc_info:
        parse_save_header(save_header_1_1_data + b'\x01\x02\x03', strict=True)
    assert exc_info.value.offset == len(save_header_1_1_data)
    assert exc_info.value.count == 3


def test_strict_without_trailing_data(save_header_1_1_data: bytes) -> None:
    parse_save_header(save_header_1_1_data, strict=True)


@pytest.mark.parametrize('fixture_name', ['save_header_1_1_data', 'save_header_2_0_data'])
def test_encode_roundtrip(fixture_name: str, request: pytest.FixtureRequest) -> None:
    """Test that encoding a decoded header reproduces the original bytes."""
    data = request.getfixturevalue(fixture_name)
    header, save_header = parse_save_header(data)
    assert encode_save_header(header, save_header) == data


def test_encode_requires_version_fields(save_header_1_1_data: bytes) -> None:
    """Test that a 1.x header cannot be written as 2.0 without its reserved bytes."""
    _, save_header = parse_save_header(save_header_1_1_data)
    with pytest.raises(ValueError):
        encode_save_header(VersionHeader(Version(2, 0, 28, 0)), save_header)


def test_encode_unsupported_version(save_header_1_1_data: bytes) -> None:
    _, save_header = parse_save_header(save_header_1_1_data)
    with pytest.raises(ValueError):
        encode_save_header(VersionHeader(Version(3, 0, 0, 0)), save_header)


def test_to_dict(save_header_2_0_data: bytes) -> None:
    _, save_header = parse_save_header(save_header_2_0_data)
    result = save_header.to_dict()

    assert result['loaded_from'] == '2.0.28'
    assert result['reserved'] == '0000a000'
    assert result['mods'][1] == {'name': 'space-age', 'version': '2.0.28', 'crc': 2}


def test_save_header_is_immutable(save_header_1_1_data: bytes) -> None:
    _, save_header = parse_save_header(save_header_1_1_data)
    with pytest.raises(AttributeError):
        save_header.campaign = 'other'
