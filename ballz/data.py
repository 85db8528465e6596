"""A tagged value format for game data and its binary encoding."""

from __future__ import annotations

import enum
import struct
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from .bytebuf import ByteBuf


class DataType(enum.IntEnum):
    """The kind of value a Data holds; the numbers are the wire tags."""

    MAP = 0
    LIST = 1
    BYTE = 2
    SHORT = 3
    INT = 4
    LONG = 5
    CHAR = 6
    FLOAT = 7
    DOUBLE = 8
    STRING = 9


@dataclass
class Data:
    """A value tagged with its DataType."""

    type: DataType
    value: Any


@dataclass
class DataMap:
    """An insertion-ordered list of keyed values; lookups return the first match."""

    entries: list[tuple[str, Data]] = field(default_factory=list)

    def get(self, key: str) -> Data:
        """Return the value stored under ``key``."""
        for entry_key, value in self.entries:
            if entry_key == key:
                return value
        raise KeyError(f"data map does not contain key: {key}")

    def get_or_default(self, key: str, default: Data) -> Data:
        """Return the value under ``key``, or ``default`` when absent."""
        try:
            return self.get(key)
        except KeyError:
            return default

    def insert(self, key: str, value: Data) -> None:
        """Append a value under ``key``."""
        self.entries.append((key, value))

    def __contains__(self, key: object) -> bool:
        return any(entry_key == key for entry_key, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[tuple[str, Data]]:
        return iter(self.entries)


def _wrap(value: int, bits: int) -> int:
    value = int(value) & ((1 << bits) - 1)
    return value - (1 << bits) if value >= 1 << (bits - 1) else value


def _write_map(buf: ByteBuf, mapping: DataMap) -> None:
    buf.write_int(len(mapping))
    for key, value in mapping:
        buf.write_string(key)
        write_data(buf, value)


def _read_map(buf: ByteBuf) -> DataMap:
    mapping = DataMap()
    for _ in range(buf.read_int()):
        key = buf.read_string()
        mapping.insert(key, read_data(buf))
    return mapping


_WRITERS: dict[DataType, Callable[[ByteBuf, Any], None]] = {
    DataType.BYTE: lambda buf, value: buf.write_byte(value),
    DataType.INT: lambda buf, value: buf.write_int(value),
    DataType.CHAR: lambda buf, value: buf.write_byte(value),
    DataType.STRING: lambda buf, value: buf.write_string(value),
    DataType.MAP: _write_map,
}

_READERS: dict[int, Callable[[ByteBuf], Any]] = {
    DataType.BYTE: lambda buf: _wrap(buf.read_byte(), 8),
    DataType.INT: lambda buf: buf.read_int(),
    DataType.CHAR: lambda buf: buf.read_byte(),
    DataType.STRING: lambda buf: buf.read_string(),
    DataType.MAP: _read_map,
}


def write_data(buf: ByteBuf, data: Data) -> None:
    """Write a tag byte followed by the encoded value."""
    writer = _WRITERS.get(data.type)
    if writer is None:
        raise ValueError(f"cannot write data of type {DataType(data.type).name}")
    buf.write_byte(data.type)
    writer(buf, data.value)


def read_data(buf: ByteBuf) -> Data:
    """Read a value written by write_data."""
    tag = buf.read_byte()
    reader = _READERS.get(tag)
    if reader is None:
        raise ValueError(f"cannot read data with type tag {tag}")
    return Data(DataType(tag), reader(buf))


def data_map(mapping: DataMap | Mapping[str, Data]) -> Data:
    """Wrap a DataMap, or a plain mapping of keys to Data."""
    if not isinstance(mapping, DataMap):
        mapping = DataMap(list(mapping.items()))
    return Data(DataType.MAP, mapping)


def data_list(items: Iterable[Data]) -> Data:
    return Data(DataType.LIST, list(items))


def data_byte(value: int) -> Data:
    """A signed 8-bit value; out-of-range input wraps around."""
    return Data(DataType.BYTE, _wrap(value, 8))


def data_short(value: int) -> Data:
    return Data(DataType.SHORT, _wrap(value, 16))


def data_int(value: int) -> Data:
    """A signed 32-bit value; out-of-range input wraps around."""
    return Data(DataType.INT, _wrap(value, 32))


def data_long(value: int) -> Data:
    return Data(DataType.LONG, _wrap(value, 64))


def data_float(value: float) -> Data:
    """A value rounded to single precision."""
    return Data(DataType.FLOAT, struct.unpack("<f", struct.pack("<f", value))[0])


def data_double(value: float) -> Data:
    return Data(DataType.DOUBLE, float(value))


def data_string(value: str) -> Data:
    return Data(DataType.STRING, str(value))