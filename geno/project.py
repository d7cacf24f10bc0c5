"""Projects: named groups of source files, organised into file filters."""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from geno.configuration import Configuration, ProjectKind, enum_from_string, enum_to_string
from geno.gcl import Deserializer, GclObject, Serializer

StrPath = Union[str, PathLike[str]]

EXTENSION = ".gprj"

_SOURCE_EXTENSIONS = frozenset(
    {".cc", ".cpp", ".cxx", ".c++", ".h", ".hh", ".hpp", ".hxx", ".h++"}
)


@dataclass
class FileFilter:
    """A named group of files; the filter named "" holds ungrouped files."""

    name: str = ""
    path: str = ""
    files: list[Path] = field(default_factory=list)


def alphabetic_compare(a: str, b: str) -> bool:
    """True if ``a`` sorts before ``b``: letters case-insensitively, lower case first."""
    if not a:
        return False

    for char_a, char_b in zip(a, b):
        if char_a.isalpha() and char_b.isalpha():
            lower_a, lower_b = char_a.lower(), char_b.lower()
            if lower_a == lower_b:
                if char_a > char_b:
                    return True
                if char_a < char_b:
                    return False
            else:
                return lower_a < lower_b
        elif char_a < char_b:
            return True
        elif char_a > char_b:
            return False

    return len(a) < len(b)


def _compare(a: str, b: str) -> int:
    if alphabetic_compare(a, b):
        return -1
    if alphabetic_compare(b, a):
        return 1
    return 0


def _normalize(path: StrPath) -> Path:
    return Path(os.path.normpath(path))


def _relative(path: Path, base: Path) -> str:
    try:
        return os.path.relpath(path, base)
    except ValueError:
        # No relative path exists, e.g. across drives.
        return str(path)


def _same_file(a: Path, b: Path) -> bool:
    if _normalize(a) == _normalize(b):
        return True
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


class Project:
    """A project file: its kind, local configuration and file filters."""

    EXTENSION = EXTENSION

    def __init__(self, location: Optional[StrPath], name: str = "MyProject") -> None:
        self.location: Optional[Path] = Path(location) if location not in (None, "") else None
        self.name = name
        self.kind = ProjectKind.APPLICATION
        self.local_configuration = Configuration()
        self.file_filters: list[FileFilter] = []
        self.new_file_filter("")

    def __repr__(self) -> str:
        return f"Project({self.name!r}, location={self.location!r})"

    def _require_location(self, action: str) -> Path:
        if self.location is None:
            what = f"project {self.name!r}" if self.name else "unnamed project"
            raise ValueError(f"cannot {action} {what}: location not specified")
        return self.location

    def _base(self) -> Path:
        return self.location if self.location is not None else Path()

    def _save(self) -> None:
        if self.location is not None:
            self.serialize()

    def project_file(self) -> Path:
        """The path of the project file in the project's location."""
        stem = self.name
        suffix = Path(stem).suffix if stem else ""
        if suffix:
            stem = stem[: -len(suffix)]
        return self._base() / (stem + EXTENSION)

    # Serialization

    def _path_table(self, name: str, paths: list[Path], base: Path) -> GclObject:
        return GclObject(name, [GclObject(_relative(path, base)) for path in paths])

    def serialize(self) -> None:
        """Write the project file."""
        location = self._require_location("serialize")
        objects = [
            GclObject("Name", self.name),
            GclObject("Kind", enum_to_string(self.kind)),
        ]

        if self.file_filters:
            filters = GclObject("FileFilters", [])
            for file_filter in self.file_filters:
                if not file_filter.name:
                    continue
                filter_obj = GclObject(file_filter.name, [])
                if file_filter.path:
                    filter_obj.add_child(GclObject("Path", file_filter.path))
                if file_filter.files:
                    filter_obj.add_child(self._path_table("Files", file_filter.files, location))
                filters.add_child(filter_obj)
            objects.append(filters)

        default_filter = self.file_filter_by_name("")
        if default_filter is not None and default_filter.files:
            objects.append(self._path_table("Files", default_filter.files, location))

        config = self.local_configuration
        if config.include_dirs:
            objects.append(self._path_table("IncludeDirs", config.include_dirs, location))
        if config.library_dirs:
            objects.append(self._path_table("LibraryDirs", config.library_dirs, location))
        if config.defines:
            objects.append(GclObject("Defines", [GclObject(d) for d in config.defines]))
        if config.libraries:
            objects.append(GclObject("Libraries", [GclObject(lib) for lib in config.libraries]))

        with Serializer(self.project_file()) as serializer:
            for obj in objects:
                serializer.write_object(obj)

    def deserialize(self) -> None:
        """Read the project file into this project."""
        self._require_location("deserialize")
        for obj in Deserializer(self.project_file()).objects():
            self._apply(obj)

        default_filter = self.file_filter_by_name("")
        if default_filter is None:
            return
        grouped = [
            path
            for file_filter in self.file_filters
            if file_filter.name
            for path in file_filter.files
        ]
        default_filter.files = [
            path
            for path in default_filter.files
            if not any(_same_file(path, other) for other in grouped)
        ]

    def _resolve(self, text: str) -> Path:
        path = Path(text)
        if not path.is_absolute():
            path = self._base() / path
        return _normalize(path)

    def _apply(self, obj: GclObject) -> None:
        config = self.local_configuration

        if obj.name == "Name":
            self.name = obj.string()
        elif obj.name == "Kind":
            try:
                self.kind = enum_from_string(obj.string(), ProjectKind)
            except ValueError:
                self.kind = ProjectKind.UNSPECIFIED
        elif obj.name == "FileFilters":
            for filter_obj in obj.table():
                file_filter = FileFilter(name=filter_obj.name)
                for entry in filter_obj.table():
                    if entry.name == "Path":
                        file_filter.path = entry.string()
                    elif entry.name == "Files":
                        file_filter.files.extend(
                            self._resolve(file_obj.string()) for file_obj in entry.table()
                        )
                self.file_filters.append(file_filter)
            self.sort_file_filters()
        elif obj.name == "Files":
            for file_obj in obj.table():
                default_filter = self.file_filter_by_name("") or self.new_file_filter("")
                assert default_filter is not None
                default_filter.files.append(self._resolve(file_obj.name))
        elif obj.name == "IncludeDirs":
            config.include_dirs.extend(self._resolve(child.name) for child in obj.table())
        elif obj.name == "LibraryDirs":
            config.library_dirs.extend(self._resolve(child.name) for child in obj.table())
        elif obj.name == "Defines":
            config.defines.extend(child.name for child in obj.table())
        elif obj.name == "Libraries":
            config.libraries.extend(child.name for child in obj.table())

    # File filters

    def sort_file_filters(self) -> None:
        """Sort the files of each filter by file name, then the filters by name."""
        for file_filter in self.file_filters:
            file_filter.files.sort(
                key=functools.cmp_to_key(lambda a, b: _compare(a.name, b.name))
            )
        self.file_filters.sort(key=functools.cmp_to_key(lambda a, b: _compare(a.name, b.name)))

    def new_file_filter(self, name: str) -> Optional[FileFilter]:
        """Add an empty filter called ``name``; None if one already exists."""
        if self.file_filter_by_name(name) is not None:
            return None
        self.file_filters.append(FileFilter(name=name))
        self.sort_file_filters()
        return self.file_filter_by_name(name)

    def remove_file_filter(self, name: str) -> None:
        """Remove the filter called ``name``, if there is one."""
        for index, file_filter in enumerate(self.file_filters):
            if file_filter.name == name:
                del self.file_filters[index]
                break
        self.sort_file_filters()

    def file_filter_by_name(self, name: str) -> Optional[FileFilter]:
        """The filter called ``name``, or None."""
        return next((f for f in self.file_filters if f.name == name), None)

    def file_in_file_filter(self, file: StrPath, file_filter: str) -> Optional[Path]:
        """The entry for ``file`` in the given filter, or None."""
        found = self.file_filter_by_name(file_filter)
        if found is None:
            return None
        target = Path(file)
        return next((path for path in found.files if path == target), None)

    def rename_file_filter(self, file_filter: str, name: str) -> None:
        """Give the filter ``file_filter`` the new name ``name`` and save."""
        found = self.file_filter_by_name(file_filter)
        if found is not None:
            found.name = name
            self.sort_file_filters()
            self._save()

    # Files

    def new_file(self, path: StrPath, file_filter: str) -> bool:
        """Create an empty file on disk and add it to the filter."""
        found = self.file_filter_by_name(file_filter)
        if found is None or self.file_in_file_filter(path, file_filter) is not None:
            return False
        with open(path, "wb"):
            pass
        found.files.append(Path(path))
        self.sort_file_filters()
        self._save()
        return True

    def add_file(self, path: StrPath, file_filter: str) -> bool:
        """Add an existing file to the filter; False if absent or already there."""
        found = self.file_filter_by_name(file_filter)
        if found is None or self.file_in_file_filter(path, file_filter) is not None:
            return False
        found.files.append(Path(path))
        self.sort_file_filters()
        self._save()
        return True

    def remove_file(self, file: StrPath, file_filter: str) -> None:
        """Remove ``file`` from the filter, leaving it on disk."""
        found = self.file_filter_by_name(file_filter)
        if found is None:
            return
        target = Path(file)
        if target in found.files:
            found.files.remove(target)
            self.sort_file_filters()
            self._save()

    def rename_file(self, file: StrPath, file_filter: str, name: str) -> None:
        """Rename ``file`` to ``name`` inside the filter's directory, on disk too."""
        found = self.file_filter_by_name(file_filter)
        if found is None:
            return
        target = Path(file)
        for index, path in enumerate(found.files):
            if path != target:
                continue
            new_path = self._base() / found.path / name
            if path.exists():
                os.rename(path, new_path)
            found.files[index] = new_path
            self.sort_file_filters()
            self._save()
            break

    def find_source_folders(self) -> list[Path]:
        """The directories that hold C or C++ sources and headers."""
        source_paths: list[Path] = []
        for file_filter in self.file_filters:
            for path in file_filter.files:
                # A known directory ends the scan of this filter.
                if path.parent in source_paths:
                    break
                if path.suffix in _SOURCE_EXTENSIONS:
                    source_paths.append(path.parent)
        return source_paths