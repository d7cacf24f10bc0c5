"""Workspaces: a build matrix and the projects built together with it."""

from __future__ import annotations

import contextlib
import os
import sys
from collections.abc import Callable
from os import PathLike
from pathlib import Path
from typing import Optional, TypeVar, Union

from geno.buildmatrix import BuildMatrix, Column
from geno.compiler import Compiler
from geno.configuration import (
    Architecture,
    Configuration,
    Optimization,
    enum_from_string,
    enum_to_string,
)
from geno.gcc import CompilerGCC
from geno.gcl import Deserializer, GclObject, Serializer
from geno.msvc import CompilerMSVC
from geno.process import Process
from geno.project import Project

StrPath = Union[str, PathLike[str]]

EXTENSION = ".gwks"

BuildFinishedCallback = Callable[["Workspace", Optional[Path], bool], object]

_E = TypeVar("_E", Architecture, Optimization)


def _compiler_named(name: str) -> Optional[Compiler]:
    if sys.platform == "win32" and name == "MSVC":
        return CompilerMSVC()
    if name == "GCC":
        return CompilerGCC()
    print(f"Unrecognized compiler '{name}' for this workspace.", file=sys.stderr)
    return None


def _enum_or_first(text: str, enum_type: type[_E]) -> _E:
    # An unrecognised name leaves the value at the enum's first member.
    try:
        return enum_from_string(text, enum_type)
    except ValueError:
        return next(iter(enum_type))


def _serialize_column(column: Column) -> GclObject:
    column_obj = GclObject(column.name, [])
    for name, configuration in column.configurations:
        config_obj = GclObject(name)
        if (
            configuration.compiler is not None
            or configuration.architecture is not None
            or configuration.optimization is not None
        ):
            table = config_obj.set_table()
            if configuration.compiler is not None:
                table.append(GclObject("Compiler", configuration.compiler.name()))
            if configuration.architecture is not None:
                table.append(GclObject("Architecture", enum_to_string(configuration.architecture)))
            if configuration.optimization is not None:
                table.append(GclObject("Optimization", enum_to_string(configuration.optimization)))
        column_obj.add_child(config_obj)
    return column_obj


def _deserialize_column(column: Column, obj: GclObject) -> None:
    for config_obj in obj.table():
        configuration = Configuration()
        if config_obj.is_table():
            entries: dict[str, GclObject] = {}
            for child in config_obj.table():
                entries.setdefault(child.name, child)

            compiler = entries.get("Compiler")
            if compiler is not None and compiler.is_string():
                configuration.compiler = _compiler_named(compiler.string())

            architecture = entries.get("Architecture")
            if architecture is not None and architecture.is_string():
                configuration.architecture = _enum_or_first(architecture.string(), Architecture)

            optimization = entries.get("Optimization")
            if optimization is not None and optimization.is_string():
                configuration.optimization = _enum_or_first(optimization.string(), Optimization)

        column.configurations.append((config_obj.name, configuration))


class Workspace:
    """A workspace file: its name, build matrix and the projects it holds."""

    EXTENSION = EXTENSION

    def __init__(self, location: Optional[StrPath], name: str = "MyWorkspace") -> None:
        self.location: Optional[Path] = Path(location) if location not in (None, "") else None
        self.name = name
        self.build_matrix = BuildMatrix()
        self.projects: list[Project] = []
        self.app_process: Optional[Process] = None
        self.build_finished_listeners: list[BuildFinishedCallback] = []

    def __repr__(self) -> str:
        return f"Workspace({self.name!r}, location={self.location!r})"

    def _require_location(self, action: str) -> Path:
        if self.location is None:
            raise ValueError(f"cannot {action} workspace {self.name!r}: location not specified")
        return self.location

    def _base(self) -> Path:
        return self.location if self.location is not None else Path()

    def _file_for(self, name: str) -> Path:
        suffix = Path(name).suffix if name else ""
        stem = name[: -len(suffix)] if suffix else name
        return self._base() / (stem + EXTENSION)

    def workspace_file(self) -> Path:
        """The path of the workspace file in the workspace's location."""
        return self._file_for(self.name)

    def on_build_finished(self, callback: BuildFinishedCallback) -> BuildFinishedCallback:
        """Call ``callback(workspace, output_file, success)`` when a build ends."""
        self.build_finished_listeners.append(callback)
        return callback

    # Serialization

    def serialize(self) -> None:
        """Write the workspace file and every project file."""
        location = self._require_location("serialize")

        matrix = GclObject("Matrix", [_serialize_column(c) for c in self.build_matrix.columns])

        projects = GclObject("Projects", [])
        for project in self.projects:
            project_dir = project.location if project.location is not None else location
            try:
                relative_dir = os.path.relpath(project_dir, location)
            except ValueError:
                relative_dir = str(project_dir)
            projects.add_child(GclObject(str(Path(relative_dir) / project.name)))
            project.serialize()

        with Serializer(self.workspace_file()) as serializer:
            serializer.write_object(GclObject("Name", self.name))
            serializer.write_object(matrix)
            serializer.write_object(projects)

    def deserialize(self) -> None:
        """Read the workspace file, and the project files it lists."""
        self._require_location("deserialize")
        for obj in Deserializer(self.workspace_file()).objects():
            self._apply(obj)

    def _apply(self, obj: GclObject) -> None:
        if obj.name == "Name":
            self.name = obj.string()
        elif obj.name == "Matrix":
            self.build_matrix = BuildMatrix()
            for column_obj in obj.table():
                self.build_matrix.new_column(column_obj.name)
                _deserialize_column(self.build_matrix.columns[-1], column_obj)
        elif obj.name == "Projects":
            for project_obj in obj.table():
                project_path = Path(project_obj.string())
                if not project_path.is_absolute():
                    project_path = self._base() / project_path
                project_path = Path(os.path.normpath(project_path))
                project = self.new_project(project_path.parent, project_path.name)
                # A missing project file leaves the project empty.
                with contextlib.suppress(FileNotFoundError):
                    project.deserialize()

    # Workspace and projects

    def rename(self, name: str) -> None:
        """Rename the workspace, moving its file on disk, and save."""
        old_path = self.workspace_file()
        if old_path.exists():
            os.rename(old_path, self._file_for(name))
        self.name = name
        self.serialize()

    def new_project(self, location: StrPath, name: str) -> Project:
        """Add a new, empty project called ``name`` in ``location``."""
        project = Project(location, name)
        self.projects.append(project)
        return project

    def project_by_name(self, name: str) -> Optional[Project]:
        """The first project called ``name``, or None."""
        return next((p for p in self.projects if p.name == name), None)

    def add_project(self, path: StrPath) -> bool:
        """Add the project stored in the file ``path``; False if not loaded."""
        project_path = Path(os.path.normpath(path))
        if self.project_by_name(project_path.stem) is not None:
            return False
        project = self.new_project(project_path.parent, project_path.stem)
        try:
            project.deserialize()
        except FileNotFoundError:
            return False
        return True

    def remove_project(self, name: str) -> None:
        """Remove the first project called ``name`` and save."""
        project = self.project_by_name(name)
        if project is not None:
            self.projects.remove(project)
            self.serialize()

    def rename_project(self, project_name: str, name: str) -> None:
        """Rename a project, moving its file on disk, and save both files."""
        project = self.project_by_name(project_name)
        if project is None:
            return
        old_path = project.project_file()
        if old_path.exists():
            project_dir = project.location if project.location is not None else Path()
            suffix = Path(name).suffix if name else ""
            stem = name[: -len(suffix)] if suffix else name
            os.rename(old_path, project_dir / (stem + Project.EXTENSION))
        project.name = name
        project.serialize()
        self.serialize()