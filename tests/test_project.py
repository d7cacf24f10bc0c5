import pytest

from geno.configuration import ProjectKind
from geno.project import EXTENSION, FileFilter, Project, alphabetic_compare


@pytest.fixture
def project(tmp_path):
    return Project(tmp_path, "Demo")


def test_new_project_has_default_filter(project):
    assert [f.name for f in project.file_filters] == [""]
    assert project.kind is ProjectKind.APPLICATION


def test_default_name():
    assert Project(None).name == "MyProject"


def test_project_file(project, tmp_path):
    assert project.project_file() == tmp_path / ("Demo" + EXTENSION)


def test_project_file_replaces_extension(tmp_path):
    assert Project(tmp_path, "Demo.txt").project_file() == tmp_path / "Demo.gprj"


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("a", "b", True),
        ("b", "a", False),
        ("a", "A", True),
        ("A", "a", False),
        ("", "x", False),
        ("ab", "abc", True),
        ("abc", "ab", False),
        ("1", "a", True),
        ("Apple", "banana", True),
    ],
)
def test_alphabetic_compare(a, b, expected):
    assert alphabetic_compare(a, b) is expected


def test_new_file_filter_and_duplicate(project):
    created = project.new_file_filter("Sources")
    assert created == FileFilter(name="Sources")
    assert project.new_file_filter("Sources") is None
    assert project.file_filter_by_name("Sources") is created


def test_filters_are_sorted(project):
    project.new_file_filter("zeta")
    project.new_file_filter("Alpha")
    project.new_file_filter("beta")
    named = [f.name for f in project.file_filters if f.name]
    assert named == ["Alpha", "beta", "zeta"]


def test_remove_file_filter(project):
    project.new_file_filter("Sources")
    project.remove_file_filter("Sources")
    assert project.file_filter_by_name("Sources") is None
    assert [f.name for f in project.file_filters] == [""]


def test_add_file(project, tmp_path):
    path = tmp_path / "main.cpp"
    assert project.add_file(path, "") is True
    assert project.add_file(path, "") is False
    assert project.add_file(path, "Missing") is False
    assert project.file_in_file_filter(path, "") == path
    assert project.project_file().exists()


def test_file_in_file_filter_missing(project, tmp_path):
    assert project.file_in_file_filter(tmp_path / "x.cpp", "") is None
    assert project.file_in_file_filter(tmp_path / "x.cpp", "Nope") is None


def test_files_sorted_by_name(project, tmp_path):
    for name in ["b.cpp", "A.cpp", "a.cpp"]:
        project.add_file(tmp_path / name, "")
    files = [p.name for p in project.file_filter_by_name("").files]
    assert files == ["a.cpp", "A.cpp", "b.cpp"]


def test_new_file_creates_file(project, tmp_path):
    path = tmp_path / "new.cpp"
    assert project.new_file(path, "") is True
    assert path.read_bytes() == b""
    assert project.new_file(path, "") is False


def test_remove_file(project, tmp_path):
    path = tmp_path / "main.cpp"
    project.add_file(path, "")
    project.remove_file(path, "")
    assert project.file_filter_by_name("").files == []


def test_rename_file_moves_on_disk(project, tmp_path):
    path = tmp_path / "old.cpp"
    project.new_file(path, "")
    project.rename_file(path, "", "renamed.cpp")
    assert not path.exists()
    assert (tmp_path / "renamed.cpp").exists()
    assert project.file_filter_by_name("").files == [tmp_path / "renamed.cpp"]


def test_rename_file_filter(project):
    project.new_file_filter("Old")
    project.rename_file_filter("Old", "New")
    assert project.file_filter_by_name("Old") is None
    assert project.file_filter_by_name("New").name == "New"


def test_serialize_text(project, tmp_path):
    project.file_filter_by_name("").files.append(tmp_path / "main.cpp")
    project.serialize()
    assert project.project_file().read_text() == (
        "Name:Demo\nKind:Application\nFileFilters:\nFiles:\n\tmain.cpp\n"
    )


def test_serialize_without_location():
    with pytest.raises(ValueError):
        Project(None, "Demo").serialize()


def test_deserialize_without_location():
    with pytest.raises(ValueError):
        Project(None, "Demo").deserialize()


def test_deserialize_missing_file(project):
    with pytest.raises(FileNotFoundError):
        project.deserialize()


def test_round_trip(project, tmp_path):
    project.kind = ProjectKind.STATIC_LIBRARY
    headers = project.new_file_filter("Headers")
    headers.path = "inc"
    headers.files.append(tmp_path / "inc" / "a.h")
    project.file_filter_by_name("").files.append(tmp_path / "src" / "main.cpp")
    config = project.local_configuration
    config.include_dirs.append(tmp_path / "inc")
    config.library_dirs.append(tmp_path / "lib")
    config.defines.append("DEBUG")
    config.libraries.append("m")
    project.serialize()

    loaded = Project(tmp_path, "Demo")
    loaded.deserialize()
    assert loaded.name == "Demo"
    assert loaded.kind is ProjectKind.STATIC_LIBRARY
    assert loaded.file_filter_by_name("Headers") == headers
    assert loaded.file_filter_by_name("").files == [tmp_path / "src" / "main.cpp"]
    assert loaded.local_configuration.include_dirs == [tmp_path / "inc"]
    assert loaded.local_configuration.library_dirs == [tmp_path / "lib"]
    assert loaded.local_configuration.defines == ["DEBUG"]
    assert loaded.local_configuration.libraries == ["m"]


def test_deserialize_unknown_kind(project):
    project.project_file().write_text("Name:Demo\nKind:Weird\n")
    project.deserialize()
    assert project.kind is ProjectKind.UNSPECIFIED


def test_deserialize_removes_grouped_files_from_default(project, tmp_path):
    project.project_file().write_text(
        "Name:Demo\nKind:Application\nFileFilters:\n\tHeaders:\n\t\tFiles:\n\t\t\tinc/a.h\n"
        "Files:\n\tinc/a.h\n\tmain.cpp\n"
    )
    project.deserialize()
    assert project.file_filter_by_name("").files == [tmp_path / "main.cpp"]
    assert project.file_filter_by_name("Headers").files == [tmp_path / "inc" / "a.h"]


def test_find_source_folders(project, tmp_path):
    default = project.file_filter_by_name("")
    default.files.extend(
        [tmp_path / "src" / "a.cpp", tmp_path / "docs" / "readme.txt"]
    )
    other = project.new_file_filter("Include")
    other.files.append(tmp_path / "inc" / "a.hpp")
    folders = project.find_source_folders()
    assert sorted(folders) == sorted([tmp_path / "src", tmp_path / "inc"])
    assert tmp_path / "docs" not in folders