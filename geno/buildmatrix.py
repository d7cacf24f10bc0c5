"""The build matrix: columns of named configurations that combine into one."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from geno.configuration import Architecture, Configuration, Optimization
from geno.gcc import CompilerGCC
from geno.msvc import CompilerMSVC

NamedConfiguration = tuple[str, Configuration]


@dataclass
class Column:
    """One axis of the matrix, such as target or architecture, and its selection."""

    name: str = ""
    configurations: list[NamedConfiguration] = field(default_factory=list)
    current_configuration: int = 0


@dataclass
class BuildMatrix:
    """Columns whose selected configurations together make the active configuration."""

    columns: list[Column] = field(default_factory=list)

    def new_column(self, name: str) -> None:
        """Append an empty column called ``name``."""
        self.columns.append(Column(name=name))

    def new_configuration(self, which_column: str, name: str) -> None:
        """Add an empty configuration to the first column called ``which_column``."""
        column = next((c for c in self.columns if c.name == which_column), None)
        if column is not None:
            column.configurations.append((name, Configuration()))

    def current_configuration(self) -> Configuration:
        """The selected configuration of every column, layered in column order."""
        result = Configuration()
        for column in self.columns:
            if 0 <= column.current_configuration < len(column.configurations):
                _, configuration = column.configurations[column.current_configuration]
                result.override(configuration)
        return result

    @classmethod
    def platform_default(cls) -> BuildMatrix:
        """The matrix a new workspace starts with on this platform."""
        target = Column(name="Target")
        if sys.platform == "win32":
            target.configurations.append(("Windows", Configuration(compiler=CompilerMSVC())))
        elif sys.platform.startswith("linux"):
            target.configurations.append(("Linux", Configuration(compiler=CompilerGCC())))
        elif sys.platform == "darwin":
            target.configurations.append(("macOS", Configuration(compiler=None)))

        architecture = Column(
            name="Architecture",
            configurations=[
                ("x86", Configuration(architecture=Architecture.X86)),
                ("x86_64", Configuration(architecture=Architecture.X86_64)),
                ("ARM", Configuration(architecture=Architecture.ARM)),
                ("ARM64", Configuration(architecture=Architecture.ARM64)),
            ],
        )

        optimization = Column(
            name="Optimization",
            configurations=[
                ("Off", Configuration()),
                ("Favor Size", Configuration(optimization=Optimization.FAVOR_SIZE)),
                ("Favor Speed", Configuration(optimization=Optimization.FAVOR_SPEED)),
                ("Full", Configuration(optimization=Optimization.FULL)),
            ],
        )

        return cls(columns=[target, architecture, optimization])