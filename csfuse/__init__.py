# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
csfuse: fuse a tree of C# source files into one compilable file.

Packages:
  parser: C# structural parser (lark grammar) producing CompilationUnit trees
  fusion: member collection, import merging, root-namespace resolution, assembly
  core:   spans and diagnostics shared by the parser and the driver
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
