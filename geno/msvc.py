"""The MSVC toolchain: cl.exe and link.exe located through vswhere and the Windows SDK."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from geno.compiler import Compiler, StrPath, compiler_output_path, linker_output_path
from geno.configuration import Architecture, Configuration, ProjectKind, host_architecture
from geno.process import Process

_TARGETS = {
    Architecture.X86: "x86",
    Architecture.X86_64: "x64",
}

_CPP_EXTENSIONS = (".cpp", ".cxx", ".cc")


def host_string() -> str:
    """The name of the host directory under the MSVC bin directory."""
    if host_architecture() is Architecture.X86:
        return "Hostx86"
    return "Hostx64"


def target_string(architecture: Architecture) -> str:
    """The name MSVC uses for a target architecture."""
    if architecture in _TARGETS:
        return _TARGETS[architecture]
    host = host_architecture()
    if host in _TARGETS:
        return _TARGETS[host]
    raise ValueError(f"MSVC has no target for {architecture.value}")


def find_program_files_x86_dir() -> Path:
    """The 32-bit Program Files directory, or an empty path if unknown."""
    value = os.environ.get("ProgramFiles(x86)")
    return Path(value) if value else Path()


def find_msvc_dir(program_files_x86: StrPath) -> Path:
    """The first MSVC toolset of the latest Visual Studio, or an empty path."""
    vswhere = Path(program_files_x86) / "Microsoft Visual Studio" / "Installer" / "vswhere.exe"
    if not vswhere.exists():
        return Path()

    process = Process(f"{vswhere} -latest -property installationPath")
    output = process.output_of()
    if process.exit_code != 0:
        return Path()

    visual_studio = Path(output.rstrip("\r\n"))
    if not visual_studio.exists():
        return Path()

    toolsets = sorted((visual_studio / "VC" / "Tools" / "MSVC").iterdir())
    return toolsets[0] if toolsets else Path()


def _target_for(configuration: Configuration) -> str:
    architecture = configuration.architecture
    return target_string(architecture if architecture is not None else host_architecture())


def find_windows_sdk_version(configuration: Configuration, program_files_x86: StrPath) -> str:
    """The first Windows 10 SDK version with libraries for the target, or an empty string."""
    target = _target_for(configuration)
    lib_root = Path(program_files_x86) / "Windows Kits" / "10" / "Lib"
    for directory in sorted(lib_root.iterdir()):
        if (directory / "um" / target / "kernel32.lib").exists():
            return directory.name
    return ""


def _quoted(path: StrPath) -> str:
    return f'"{Path(path)}"'


class CompilerMSVC(Compiler):
    """Builds cl.exe and link.exe command lines."""

    def name(self) -> str:
        return "MSVC"

    def make_compiler_command_line(self, configuration: Configuration, file_path: StrPath) -> str:
        program_files_x86 = find_program_files_x86_dir()
        msvc_dir = find_msvc_dir(program_files_x86)
        target = _target_for(configuration)
        source = Path(file_path)
        extension = source.suffix

        parts = [_quoted(msvc_dir / "bin" / host_string() / target / "cl.exe"), "/nologo", "/c"]

        if extension == ".c":
            parts.append("/std:c11")
        elif extension in _CPP_EXTENSIONS:
            parts.append("/std:c++latest /D _HAS_EXCEPTIONS=0")

        parts += [f'/D "{define}"' for define in configuration.defines]

        sdk_version = find_windows_sdk_version(configuration, program_files_x86)
        sdk_include = Path(program_files_x86) / "Windows Kits" / "10" / "Include" / sdk_version
        standard_includes = [
            msvc_dir / "include",
            sdk_include / "ucrt",
            sdk_include / "um",
            sdk_include / "shared",
        ]
        parts += [f"/I{_quoted(directory)}" for directory in standard_includes]
        parts += [f"/I{_quoted(directory)}" for directory in configuration.include_dirs]

        parts.append(f"/Fo{_quoted(compiler_output_path(configuration, source))}")

        if extension == ".c":
            parts.append(f"/Tc {_quoted(source)}")
        elif extension in _CPP_EXTENSIONS:
            parts.append(f"/Tp {_quoted(source)}")

        return " ".join(parts)

    def make_linker_command_line(
        self,
        configuration: Configuration,
        input_files: Sequence[StrPath],
        output_name: str,
        kind: ProjectKind,
    ) -> str:
        program_files_x86 = find_program_files_x86_dir()
        msvc_dir = find_msvc_dir(program_files_x86)
        output = _quoted(linker_output_path(configuration, output_name, kind))
        sdk_version = find_windows_sdk_version(configuration, program_files_x86)
        target = _target_for(configuration)

        parts = [_quoted(msvc_dir / "bin" / host_string() / target / "link.exe")]

        if kind is ProjectKind.APPLICATION:
            parts.append(f"/SUBSYSTEM:CONSOLE /OUT:{output}")
        elif kind is ProjectKind.STATIC_LIBRARY:
            parts.append(f"/LIB /OUT:{output}")
        elif kind is ProjectKind.DYNAMIC_LIBRARY:
            parts.append(f"/DLL /OUT:{output}")

        sdk_lib = Path(program_files_x86) / "Windows Kits" / "10" / "Lib" / sdk_version
        standard_lib_dirs = [
            msvc_dir / "lib" / target,
            sdk_lib / "um" / target,
            sdk_lib / "ucrt" / target,
        ]
        parts += [f"/LIBPATH:{_quoted(directory)}" for directory in standard_lib_dirs]

        # Path drops trailing separators, which link.exe does not accept.
        parts += [f"/LIBPATH:{_quoted(directory)}" for directory in configuration.library_dirs]

        for library in configuration.libraries:
            library_path = Path(library)
            if not library_path.suffix:
                library_path = library_path.with_suffix(".lib")
            parts.append(_quoted(library_path))

        parts += [f'"{Path(input_file)}.obj"' for input_file in input_files]

        parts.append("/NOLOGO")
        if configuration.architecture is Architecture.X86_64:
            parts.append("/MACHINE:x64")

        return " ".join(parts)