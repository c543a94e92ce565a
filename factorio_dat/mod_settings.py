"""ModSettings - section view over a decoded mod-settings.dat."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from factorio_dat.const import (
    MAX_DEPTH,
    MOD_SETTINGS_SECTIONS,
    SECTION_RUNTIME_GLOBAL,
    SECTION_RUNTIME_PER_USER,
    SECTION_STARTUP,
)
from factorio_dat.errors import MalformedDataError
from factorio_dat.model.property_tree import PropertyTree, PropertyType
from factorio_dat.model.version import VersionHeader
from factorio_dat.parser import encode_mod_settings, parse_mod_settings


@dataclass
class ModSettings:
    """mod-settings.dat split into its three settings sections.

    Each section is a Dictionary node mapping setting name to a Dictionary
    with a 'value' entry. Unknown top-level keys are kept in extra.
    """

    header: VersionHeader
    startup: PropertyTree
    runtime_global: PropertyTree
    runtime_per_user: PropertyTree
    extra: dict[str, PropertyTree] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path, strict: bool = True, max_depth: int = MAX_DEPTH) -> ModSettings:
        """Load and parse a mod-settings.dat file.

        Args:
            path: Path to mod-settings.dat
            strict: Reject trailing bytes after the property tree
            max_depth: Property tree nesting limit

        Returns:
            Parsed ModSettings
        """
        return cls.from_bytes(path.read_bytes(), strict=strict, max_depth=max_depth)

    @classmethod
    def from_bytes(cls, data: bytes, strict: bool = True, max_depth: int = MAX_DEPTH) -> ModSettings:
        """Parse mod-settings.dat contents.

        Raises:
            MalformedDataError: Top level is not a dictionary or a section is missing
        """
        header, tree = parse_mod_settings(data, strict=strict, max_depth=max_depth)

        if tree.type != PropertyType.DICTIONARY:
            raise MalformedDataError(f'Top-level property tree is {tree.type.name}, expected DICTIONARY', VersionHeader.SIZE)

        sections = dict(tree.value)
        for name in MOD_SETTINGS_SECTIONS:
            if name not in sections:
                raise MalformedDataError(f"Settings section '{name}' missing", VersionHeader.SIZE)

        return cls(
            header=header,
            startup=sections.pop(SECTION_STARTUP),
            runtime_global=sections.pop(SECTION_RUNTIME_GLOBAL),
            runtime_per_user=sections.pop(SECTION_RUNTIME_PER_USER),
            extra=sections,
        )

    def to_tree(self) -> PropertyTree:
        """Build the top-level Dictionary node, sections first."""
        value = {
            SECTION_STARTUP: self.startup,
            SECTION_RUNTIME_GLOBAL: self.runtime_global,
            SECTION_RUNTIME_PER_USER: self.runtime_per_user,
        }
        value.update(self.extra)
        return PropertyTree(PropertyType.DICTIONARY, value)

    def to_bytes(self) -> bytes:
        """Serialize back to mod-settings.dat contents."""
        return encode_mod_settings(self.header, self.to_tree())

    def save(self, path: Path) -> None:
        """Write to a mod-settings.dat file."""
        path.write_bytes(self.to_bytes())

    def section(self, name: str) -> PropertyTree:
        """Get a section by its file name ('startup', 'runtime-global', ...)."""
        if name == SECTION_STARTUP:
            return self.startup
        if name == SECTION_RUNTIME_GLOBAL:
            return self.runtime_global
        if name == SECTION_RUNTIME_PER_USER:
            return self.runtime_per_user
        return self.extra[name]

    def get(self, section: str, name: str, default: Any = None) -> Any:
        """Get the value of a setting as a plain Python value.

        Returns default if the section or the setting does not exist.
        """
        if section not in MOD_SETTINGS_SECTIONS and section not in self.extra:
            return default
        setting = self.section(section).get(name)
        if setting is None or 'value' not in setting:
            return default
        return setting['value'].to_python()

    def set(self, section: str, name: str, value: Any) -> None:
        """Set the value of a setting, creating it if needed."""
        tree = self.section(section)
        if tree.type != PropertyType.DICTIONARY:
            raise TypeError(f"Section '{section}' is {tree.type.name}, expected DICTIONARY")

        setting = tree.get(name)
        if setting is None or setting.type != PropertyType.DICTIONARY:
            setting = PropertyTree(PropertyType.DICTIONARY, {})
            tree.value[name] = setting
        setting.value['value'] = PropertyTree.from_python(value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain Python values."""
        return {
            'version': str(self.header.version),
            'settings': self.to_tree().to_python(),
        }
