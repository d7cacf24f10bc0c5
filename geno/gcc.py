"""The GCC toolchain: g++ for compiling and linking, ar for static libraries."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from geno.compiler import Compiler, StrPath, compiler_output_path, linker_output_path
from geno.configuration import Configuration, ProjectKind

_LANGUAGES = {
    ".c": "c",
    ".cpp": "c++",
    ".cxx": "c++",
    ".cc": "c++",
    ".asm": "assembler",
}


class CompilerGCC(Compiler):
    """Builds g++ and ar command lines."""

    def name(self) -> str:
        return "GCC"

    def make_compiler_command_line(self, configuration: Configuration, file_path: StrPath) -> str:
        source = Path(file_path)
        parts = ["g++", "-c", "-x", _LANGUAGES.get(source.suffix, "none")]

        # Any explicit verbosity setting, even False, turns on timing and verbose output.
        if configuration.verbose is not None:
            parts += ["-time", "-v"]

        parts += ["-o", str(compiler_output_path(configuration, source)), str(source)]
        return " ".join(parts)

    def make_linker_command_line(
        self,
        configuration: Configuration,
        input_files: Sequence[StrPath],
        output_name: str,
        kind: ProjectKind,
    ) -> str:
        inputs = [str(Path(input_file)) for input_file in input_files]
        output = str(linker_output_path(configuration, output_name, kind))

        if kind in (ProjectKind.APPLICATION, ProjectKind.DYNAMIC_LIBRARY):
            parts = ["g++"]
            if kind is ProjectKind.DYNAMIC_LIBRARY:
                parts.append("-shared")
            parts += [f"-L{Path(directory)}" for directory in configuration.library_dirs]
            parts += [f"-l{library}" for library in configuration.libraries]
            parts += ["-o", output, *inputs]
            return " ".join(parts)

        if kind is ProjectKind.STATIC_LIBRARY:
            # Replace or insert, full path names, only newer files, no creation warning, index.
            return " ".join(["bin/ar", "rPucs", output, *inputs])

        return ""