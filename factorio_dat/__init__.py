"""Decoder and encoder for Factorio mod-settings.dat and level-init.dat files."""

from factorio_dat.errors import (
    DecodeError,
    InvalidUtf8Error,
    MalformedDataError,
    MaxDepthExceededError,
    TrailingDataError,
    UnexpectedEofError,
    UnknownTypeTagError,
    UnsupportedVersionError,
)
from factorio_dat.mod_settings import ModSettings
from factorio_dat.model import (
    PropertyTree,
    PropertyType,
    SaveHeader,
    SaveHeaderMod,
    ShortVersion,
    Version,
    VersionHeader,
)
from factorio_dat.parser import (
    encode_mod_settings,
    encode_save_header,
    parse_mod_settings,
    parse_save_header,
)

__all__ = [
    'DecodeError',
    'InvalidUtf8Error',
    'MalformedDataError',
    'MaxDepthExceededError',
    'ModSettings',
    'PropertyTree',
    'PropertyType',
    'SaveHeader',
    'SaveHeaderMod',
    'ShortVersion',
    'TrailingDataError',
    'UnexpectedEofError',
    'UnknownTypeTagError',
    'UnsupportedVersionError',
    'Version',
    'VersionHeader',
    'encode_mod_settings',
    'encode_save_header',
    'parse_mod_settings',
    'parse_save_header',
]
