"""Reading and writing GCL, the tab-indented format of workspace and project files.

A GCL document is a list of objects, one per line. ``Name:value`` is a string
object, ``Name:`` opens a table whose children follow on lines indented by one
more tab, and a line without a colon is a valueless object.
"""

from __future__ import annotations

import errno
from collections.abc import Iterable, Iterator
from os import PathLike
from pathlib import Path
from typing import Optional, Union

GclValue = Union[None, str, "list[GclObject]"]

_TRAILING_WHITESPACE = "\r\t "


class GclObject:
    """A named GCL node holding nothing, a string, or a table of child objects."""

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: GclValue = None) -> None:
        if value is not None and not isinstance(value, (str, list)):
            raise TypeError(f"GCL value must be None, str or list, not {type(value).__name__}")
        self.name = name
        self.value = value

    def set_string(self, value: str) -> str:
        """Make this object a string object holding ``value``."""
        self.value = value
        return value

    def set_table(self) -> list[GclObject]:
        """Make this object a table, keeping its children if it already is one."""
        if not isinstance(self.value, list):
            self.value = []
        return self.value

    def _require_table(self) -> list[GclObject]:
        if not isinstance(self.value, list):
            raise TypeError(f"GCL object {self.name!r} is not a table")
        return self.value

    def add_child(self, child: GclObject) -> GclObject:
        """Append ``child`` to this table and return it."""
        self._require_table().append(child)
        return child

    def string(self) -> str:
        """The string value; a valueless object yields its name."""
        if self.value is None:
            return self.name
        if isinstance(self.value, str):
            return self.value
        raise TypeError(f"GCL object {self.name!r} is not a string")

    def table(self) -> list[GclObject]:
        """The children of this table."""
        return self._require_table()

    def is_null(self) -> bool:
        return self.value is None

    def is_string(self) -> bool:
        return isinstance(self.value, str)

    def is_table(self) -> bool:
        return isinstance(self.value, list)

    def is_empty(self) -> bool:
        """True for valueless objects, empty strings and empty tables."""
        return not self.value

    def __getitem__(self, name: str) -> GclObject:
        """Find the child called ``name``, adding a valueless one if missing."""
        table = self._require_table()
        for child in table:
            if child.name == name:
                return child
        child = GclObject(name)
        table.append(child)
        return child

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            return isinstance(self.value, str) and self.value == other
        if isinstance(other, GclObject):
            return self.name == other.name and self.value == other.value
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GclObject({self.name!r}, {self.value!r})"


def _render(obj: GclObject, indent_level: int) -> Iterator[str]:
    prefix = "\t" * indent_level
    if obj.value is None:
        yield f"{prefix}{obj.name}\n"
    elif isinstance(obj.value, str):
        yield f"{prefix}{obj.name}:{obj.value}\n"
    else:
        yield f"{prefix}{obj.name}:\n"
        for child in obj.value:
            yield from _render(child, indent_level + 1)


def dump_gcl(objects: Iterable[GclObject]) -> str:
    """Render top-level objects as GCL text."""
    return "".join(line for obj in objects for line in _render(obj, 0))


def _trim(text: str) -> str:
    stripped = text.rstrip(_TRAILING_WHITESPACE)
    # A line of nothing but whitespace is kept as it is.
    return stripped if stripped else text


def _parse_line(lines: list[str], pos: int, indent_level: int) -> tuple[GclObject, int]:
    trimmed = _trim(lines[pos][indent_level:])
    pos += 1
    colon = trimmed.find(":")

    if colon == -1:
        return GclObject(trimmed), pos
    if colon + 1 < len(trimmed):
        return GclObject(trimmed[:colon], trimmed[colon + 1:]), pos

    table = GclObject(trimmed[:colon], [])
    child_indent = "\t" * (indent_level + 1)
    while pos < len(lines) and lines[pos].startswith(child_indent):
        child, pos = _parse_line(lines, pos, indent_level + 1)
        table.value.append(child)  # type: ignore[union-attr]
    return table, pos


def _iter_objects(text: str) -> Iterator[GclObject]:
    lines = text.split("\n")
    if text.endswith("\n") or not text:
        lines.pop()
    pos = 0
    while pos < len(lines):
        if not lines[pos].strip(_TRAILING_WHITESPACE):
            pos += 1
            continue
        obj, pos = _parse_line(lines, pos, 0)
        yield obj


def parse_gcl(text: str) -> list[GclObject]:
    """Parse GCL text into its top-level objects."""
    return list(_iter_objects(text))


class Serializer:
    """Writes GCL objects to a file, truncating it on open."""

    def __init__(self, path: Union[str, PathLike[str]]) -> None:
        self.path = Path(path)
        self._file = open(self.path, "w", encoding="utf-8", newline="")

    def write_object(self, obj: GclObject, indent_level: int = 0) -> None:
        """Write ``obj`` and its children, indented by ``indent_level`` tabs."""
        if self._file is None:
            raise ValueError("serializer is closed")
        self._file.writelines(_render(obj, indent_level))

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> Serializer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Deserializer:
    """Reads a GCL file and yields its top-level objects."""

    def __init__(self, path: Union[str, PathLike[str]]) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(errno.ENOENT, "GCL file does not exist", str(self.path))
        with open(self.path, encoding="utf-8", newline="") as handle:
            self._text: Optional[str] = handle.read()

    def objects(self) -> Iterator[GclObject]:
        """Yield the top-level objects of the file in order."""
        return _iter_objects(self._text or "")