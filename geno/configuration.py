"""Build configurations: compiler, architecture, optimization and paths."""

from __future__ import annotations

import enum
import platform
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Optional, TypeVar

if TYPE_CHECKING:
    from geno.compiler import Compiler


class Optimization(enum.Enum):
    FAVOR_SIZE = "FavorSize"
    FAVOR_SPEED = "FavorSpeed"
    FULL = "Full"


class Architecture(enum.Enum):
    X86 = "x86"
    X86_64 = "x86_64"
    ARM = "ARM"
    ARM64 = "ARM64"


class ProjectKind(enum.Enum):
    UNSPECIFIED = "Unspecified"
    APPLICATION = "Application"
    STATIC_LIBRARY = "StaticLibrary"
    DYNAMIC_LIBRARY = "DynamicLibrary"


@dataclass
class Configuration:
    """Settings for a build; unset optional fields are left to other layers."""

    compiler: Optional[Compiler] = None
    include_dirs: list[Path] = field(default_factory=list)
    library_dirs: list[Path] = field(default_factory=list)
    libraries: list[str] = field(default_factory=list)
    defines: list[str] = field(default_factory=list)
    optimization: Optional[Optimization] = None
    architecture: Optional[Architecture] = None
    output_dir: Optional[Path] = None
    verbose: Optional[bool] = None

    def override(self, other: Configuration) -> None:
        """Take every field ``other`` sets and append its list entries to ours."""
        if other.compiler is not None:
            self.compiler = other.compiler
        if other.architecture is not None:
            self.architecture = other.architecture
        if other.optimization is not None:
            self.optimization = other.optimization
        if other.output_dir is not None:
            self.output_dir = other.output_dir
        if other.verbose is not None:
            self.verbose = other.verbose

        self.include_dirs.extend(other.include_dirs)
        self.library_dirs.extend(other.library_dirs)
        self.libraries.extend(other.libraries)
        self.defines.extend(other.defines)

    def copy(self) -> Configuration:
        """A copy whose lists can be changed without touching this one."""
        return replace(
            self,
            include_dirs=list(self.include_dirs),
            library_dirs=list(self.library_dirs),
            libraries=list(self.libraries),
            defines=list(self.defines),
        )


_MACHINE_ARCHITECTURES = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "x64": Architecture.X86_64,
    "i386": Architecture.X86,
    "i486": Architecture.X86,
    "i586": Architecture.X86,
    "i686": Architecture.X86,
    "x86": Architecture.X86,
    "aarch64": Architecture.ARM64,
    "arm64": Architecture.ARM64,
}


def host_architecture() -> Architecture:
    """The architecture of the machine this runs on."""
    machine = platform.machine().lower()
    if machine in _MACHINE_ARCHITECTURES:
        return _MACHINE_ARCHITECTURES[machine]
    if machine.startswith("arm"):
        return Architecture.ARM
    raise RuntimeError(f"unsupported host architecture {machine!r}")


def enum_to_string(value: object) -> str:
    """The name under which an enum value is stored in files."""
    if isinstance(value, (Architecture, Optimization, ProjectKind)):
        return value.value
    return "Unknown"


_E = TypeVar("_E", Architecture, Optimization, ProjectKind)


def enum_from_string(text: str, enum_type: type[_E]) -> _E:
    """The member of ``enum_type`` stored under ``text``."""
    try:
        return enum_type(text)
    except ValueError:
        raise ValueError(f"unknown {enum_type.__name__} {text!r}") from None