import sys

from geno.buildmatrix import BuildMatrix, Column
from geno.configuration import Architecture, Configuration, Optimization
from geno.gcc import CompilerGCC


def test_platform_default_column_names():
    matrix = BuildMatrix.platform_default()
    assert [column.name for column in matrix.columns] == ["Target", "Architecture", "Optimization"]


def test_platform_default_architecture_column():
    matrix = BuildMatrix.platform_default()
    column = matrix.columns[1]
    assert [name for name, _ in column.configurations] == ["x86", "x86_64", "ARM", "ARM64"]
    assert [c.architecture for _, c in column.configurations] == list(Architecture)


def test_platform_default_optimization_column():
    matrix = BuildMatrix.platform_default()
    column = matrix.columns[2]
    assert [name for name, _ in column.configurations] == ["Off", "Favor Size", "Favor Speed", "Full"]
    assert [c.optimization for _, c in column.configurations] == [
        None,
        Optimization.FAVOR_SIZE,
        Optimization.FAVOR_SPEED,
        Optimization.FULL,
    ]


def test_platform_default_on_linux_uses_gcc(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    matrix = BuildMatrix.platform_default()
    name, configuration = matrix.columns[0].configurations[0]
    assert name == "Linux"
    assert isinstance(configuration.compiler, CompilerGCC)


def test_platform_default_on_macos_has_no_compiler(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    matrix = BuildMatrix.platform_default()
    name, configuration = matrix.columns[0].configurations[0]
    assert name == "macOS"
    assert configuration.compiler is None


def test_current_configuration_of_default_selects_first_entries(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    current = BuildMatrix.platform_default().current_configuration()
    assert current.architecture is Architecture.X86
    assert current.optimization is None
    assert isinstance(current.compiler, CompilerGCC)


def test_current_configuration_follows_selection():
    matrix = BuildMatrix.platform_default()
    matrix.columns[1].current_configuration = 3
    matrix.columns[2].current_configuration = 3
    current = matrix.current_configuration()
    assert current.architecture is Architecture.ARM64
    assert current.optimization is Optimization.FULL


def test_current_configuration_skips_out_of_range_selection():
    matrix = BuildMatrix(
        columns=[
            Column("A", [("one", Configuration(defines=["A"]))], current_configuration=5),
            Column("B", [("two", Configuration(defines=["B"]))], current_configuration=-1),
            Column("C", [("three", Configuration(defines=["C"]))]),
        ]
    )
    assert matrix.current_configuration().defines == ["C"]


def test_current_configuration_layers_lists_in_column_order():
    matrix = BuildMatrix(
        columns=[
            Column("A", [("one", Configuration(defines=["X"], libraries=["m"]))]),
            Column("B", [("two", Configuration(defines=["Y"]))]),
        ]
    )
    current = matrix.current_configuration()
    assert current.defines == ["X", "Y"]
    assert current.libraries == ["m"]
    # The stored configurations are left untouched.
    assert matrix.columns[0].configurations[0][1].defines == ["X"]


def test_new_column_and_configuration():
    matrix = BuildMatrix()
    matrix.new_column("Mode")
    matrix.new_configuration("Mode", "Debug")
    matrix.new_configuration("Mode", "Release")
    assert [name for name, _ in matrix.columns[0].configurations] == ["Debug", "Release"]
    assert matrix.columns[0].current_configuration == 0


def test_new_configuration_for_missing_column_is_ignored():
    matrix = BuildMatrix()
    matrix.new_column("Mode")
    matrix.new_configuration("Other", "Debug")
    assert matrix.columns[0].configurations == []
    assert len(matrix.columns) == 1