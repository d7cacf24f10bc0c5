"""The interface every compiler toolchain implements, and where its outputs go."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Sequence
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from geno.configuration import Configuration, ProjectKind
from geno.process import Process

_WINDOWS = os.name == "nt"

StrPath = Union[str, PathLike[str]]


def _output_dir(configuration: Configuration) -> Path:
    if configuration.output_dir is None:
        raise ValueError("configuration has no output directory")
    return Path(configuration.output_dir)


def compiler_output_path(configuration: Configuration, file_path: StrPath) -> Path:
    """Where the object file compiled from ``file_path`` is written."""
    return _output_dir(configuration) / Path(file_path).stem


def linker_output_path(configuration: Configuration, output_name: str, kind: ProjectKind) -> Path:
    """Where the linked result named ``output_name`` of the given kind is written."""
    output_file = _output_dir(configuration) / output_name

    if kind is ProjectKind.APPLICATION:
        if _WINDOWS:
            output_file = output_file.with_suffix(".exe")
    elif kind in (ProjectKind.STATIC_LIBRARY, ProjectKind.DYNAMIC_LIBRARY):
        if _WINDOWS:
            output_file = output_file.with_suffix(".lib")
        else:
            suffix = ".a" if kind is ProjectKind.STATIC_LIBRARY else ".so"
            output_file = output_file.with_name("lib" + output_file.name).with_suffix(suffix)

    return output_file


class Compiler(ABC):
    """A toolchain that builds command lines for compiling and linking."""

    @abstractmethod
    def name(self) -> str:
        """The name the toolchain is stored under in workspace files."""

    def compile(self, configuration: Configuration, file_path: StrPath) -> Optional[Path]:
        """Compile one source file; the object file's path, or None on failure."""
        command_line = self.make_compiler_command_line(configuration, file_path)
        if Process(command_line).result_of() == 0:
            return compiler_output_path(configuration, file_path)
        return None

    def link(
        self,
        configuration: Configuration,
        input_files: Sequence[StrPath],
        output_name: str,
        kind: ProjectKind,
    ) -> Optional[Path]:
        """Link object files; the output's path, or None on failure."""
        command_line = self.make_linker_command_line(configuration, input_files, output_name, kind)
        if Process(command_line).result_of() == 0:
            return linker_output_path(configuration, output_name, kind)
        return None

    @abstractmethod
    def make_compiler_command_line(self, configuration: Configuration, file_path: StrPath) -> str:
        """The command line that compiles ``file_path``."""

    @abstractmethod
    def make_linker_command_line(
        self,
        configuration: Configuration,
        input_files: Sequence[StrPath],
        output_name: str,
        kind: ProjectKind,
    ) -> str:
        """The command line that links ``input_files`` into ``output_name``."""