# geno

geno is a library that organises C and C++ code into workspaces and projects.
It also builds the compiler and linker command lines for GCC or MSVC.

A workspace file (`.gwks`) holds two things: a list of project files
(`.gprj`) and a build matrix. The build matrix has columns such as Target,
Architecture and Optimization. One configuration is selected in each column.
The selected configurations are layered, in column order, into a single
`Configuration`.

Workspace and project files use GCL, a small line-based format. Each line is
one of these:

- `name`
- `name:value`
- `name:`

A `name:` line starts a table. Its children follow on lines indented by one
more tab.

## Install

```
pip install .
```

With the test requirements:

```
pip install .[test]
```

## Workspaces and projects

```python
from geno.workspace import Workspace
from geno.buildmatrix import BuildMatrix

workspace = Workspace("/path/to/dir", "MyWorkspace")
workspace.build_matrix = BuildMatrix.platform_default()

project = workspace.new_project("/path/to/dir/app", "App")
project.new_file_filter("Sources")
project.add_file("/path/to/dir/app/main.cpp", "Sources")

workspace.serialize()      # writes MyWorkspace.gwks and App.gprj

loaded = Workspace("/path/to/dir", "MyWorkspace")
loaded.deserialize()       # FileNotFoundError if the .gwks file is missing
config = loaded.build_matrix.current_configuration()
```

`Project` also has methods to manage file filters and files:

- file filters: `new_file_filter`, `remove_file_filter` and `rename_file_filter`
- files: `new_file`, `add_file`, `remove_file` and `rename_file`
- `find_source_folders`

`Workspace` has methods to manage the workspace and its projects:
`rename`, `add_project`, `remove_project` and `rename_project`.

## Compilers

`geno.gcc.CompilerGCC` and `geno.msvc.CompilerMSVC` implement
`geno.compiler.Compiler`:

- `make_compiler_command_line` and `make_linker_command_line` return the
  command line as a string.
- `compile` and `link` run that command line. They return the output path
  when the command exits with status 0, and `None` otherwise.

The output locations come from `compiler_output_path` and
`linker_output_path`. Both need `output_dir` to be set on the configuration.

## GCL

```python
from geno.gcl import parse_gcl, dump_gcl

objects = parse_gcl("Name:Demo\nFiles:\n\tmain.cpp\n")
text = dump_gcl(objects)
```

`Serializer` writes `GclObject`s to a file. `Deserializer` reads them back
from a file.

## Other modules

- `geno.configuration`: provides `Configuration`, `Architecture`,
  `Optimization` and `ProjectKind`, plus `host_architecture` and the
  enum/string helpers.
- `geno.process`: `Process` runs a command line. It can wait for the exit
  code (`result_of`) or capture the combined output (`output_of`).
- `geno.profiling`: `Timer` prints a message with the elapsed time.
  `format_duration` formats a time given in microseconds.
- `geno.localappdata`: `local_app_data_dir` finds the per-user data
  directory and creates it if needed.

## What it does not do

The package has no command-line program. It also has nothing that builds a
whole workspace: it does not schedule compile and link jobs across projects.
You can register callbacks with `Workspace.on_build_finished`, but nothing in
the package calls them. To compile and link, call `Compiler.compile` and
`Compiler.link` yourself.