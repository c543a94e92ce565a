"""Property tree: the recursive, self-describing value type of mod-settings.dat.

Each node is:
- type tag (uint8, see PropertyType)
- "any type" flag (uint8, not interpreted, preserved for re-encoding)
- payload depending on the type

List and Dictionary payloads are a uint32 count followed by (key, node)
pairs. List keys are always empty and are discarded on read.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from factorio_dat.const import MAX_DEPTH
from factorio_dat.errors import MaxDepthExceededError, UnknownTypeTagError

if TYPE_CHECKING:
    from factorio_dat.io.reader import Reader
    from factorio_dat.io.writer import Writer


class PropertyType(IntEnum):
    NONE = 0
    BOOL = 1
    NUMBER = 2
    STRING = 3
    LIST = 4
    DICTIONARY = 5


@dataclass
class PropertyTree:
    """A single property tree node.

    value holds, by type:
        NONE        None
        BOOL        bool
        NUMBER      float
        STRING      str, or None when the string is absent
        LIST        list[PropertyTree]
        DICTIONARY  dict[str, PropertyTree] in file order

    Numbers compare by bit pattern, so a NaN node equals itself.
    """

    type: PropertyType
    value: Any = None
    flag: int = 0  # uint8

    @classmethod
    def read(cls, reader: Reader, depth: int = 0, max_depth: int = MAX_DEPTH) -> PropertyTree:
        """Read one node and all of its children from reader."""
        if depth > max_depth:
            raise MaxDepthExceededError(reader.position, max_depth)

        tag_offset = reader.position
        tag = reader.read_uint8()
        try:
            node_type = PropertyType(tag)
        except ValueError:
            raise UnknownTypeTagError(tag, tag_offset) from None

        flag = reader.read_uint8()

        if node_type == PropertyType.NONE:
            value = None
        elif node_type == PropertyType.BOOL:
            value = reader.read_bool()
        elif node_type == PropertyType.NUMBER:
            value = reader.read_double()
        elif node_type == PropertyType.STRING:
            value = reader.read_string()
        elif node_type == PropertyType.LIST:
            count = reader.read_uint32()
            value = []
            for _ in range(count):
                reader.read_string()  # key, always empty for lists
                value.append(cls.read(reader, depth + 1, max_depth))
        else:
            count = reader.read_uint32()
            value = {}
            for _ in range(count):
                key = reader.read_string() or ''
                value[key] = cls.read(reader, depth + 1, max_depth)

        return cls(type=node_type, value=value, flag=flag)

    def write(self, writer: Writer) -> None:
        """Write this node and all of its children to writer."""
        writer.write_uint8(self.type)
        writer.write_uint8(self.flag)

        if self.type == PropertyType.NONE:
            return
        elif self.type == PropertyType.BOOL:
            writer.write_bool(self.value)
        elif self.type == PropertyType.NUMBER:
            writer.write_double(self.value)
        elif self.type == PropertyType.STRING:
            writer.write_string(self.value)
        elif self.type == PropertyType.LIST:
            writer.write_uint32(len(self.value))
            for item in self.value:
                writer.write_string(None)
                item.write(writer)
        else:
            writer.write_uint32(len(self.value))
            for key, item in self.value.items():
                writer.write_string(key or None)
                item.write(writer)

    @classmethod
    def from_python(cls, obj: Any) -> PropertyTree:
        """Build a tree from plain Python values.

        None, bool, int/float, str, list/tuple and dict map onto the six node
        types. Existing PropertyTree nodes are kept as they are.
        """
        if isinstance(obj, PropertyTree):
            return obj
        if obj is None:
            return cls(PropertyType.NONE)
        if isinstance(obj, bool):
            return cls(PropertyType.BOOL, obj)
        if isinstance(obj, (int, float)):
            return cls(PropertyType.NUMBER, float(obj))
        if isinstance(obj, str):
            return cls(PropertyType.STRING, obj)
        if isinstance(obj, (list, tuple)):
            return cls(PropertyType.LIST, [cls.from_python(item) for item in obj])
        if isinstance(obj, dict):
            return cls(PropertyType.DICTIONARY, {str(k): cls.from_python(v) for k, v in obj.items()})
        raise TypeError(f'Cannot convert {type(obj).__name__} to a property tree')

    def to_python(self) -> Any:
        """Convert to plain Python values (lists and dicts of scalars)."""
        if self.type == PropertyType.LIST:
            return [item.to_python() for item in self.value]
        if self.type == PropertyType.DICTIONARY:
            return {key: item.to_python() for key, item in self.value.items()}
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyTree):
            return NotImplemented
        if self.type != other.type or self.flag != other.flag:
            return False
        if self.type == PropertyType.NUMBER:
            return struct.pack('<d', self.value) == struct.pack('<d', other.value)
        return self.value == other.value

    @property
    def is_container(self) -> bool:
        return self.type in (PropertyType.LIST, PropertyType.DICTIONARY)

    def __getitem__(self, key: str | int) -> PropertyTree:
        if not self.is_container:
            raise TypeError(f'{self.type.name} node is not subscriptable')
        return self.value[key]

    def __contains__(self, key: object) -> bool:
        return self.type == PropertyType.DICTIONARY and key in self.value

    def get(self, key: str, default: Any = None) -> PropertyTree | Any:
        if self.type != PropertyType.DICTIONARY:
            return default
        return self.value.get(key, default)
