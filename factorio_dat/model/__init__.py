"""Data model classes for .dat files."""

from factorio_dat.model.property_tree import PropertyTree, PropertyType
from factorio_dat.model.save_header import SaveHeader, SaveHeaderMod
from factorio_dat.model.version import ShortVersion, Version, VersionHeader

__all__ = [
    'PropertyTree',
    'PropertyType',
    'SaveHeader',
    'SaveHeaderMod',
    'ShortVersion',
    'Version',
    'VersionHeader',
]
