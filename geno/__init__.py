"""Workspaces, projects, build matrices, GCL files and GCC/MSVC command lines for C and C++ code."""

__version__ = "0.1.0"