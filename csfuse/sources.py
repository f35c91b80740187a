# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Input file discovery and reading.

Discovery order is deterministic: the files of a directory come first
(ordinal by name), then each subdirectory in ordinal order, recursively.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from csfuse.core.span import Span
from csfuse.errors import FuseIOError, InputNotFound

logger = logging.getLogger(__name__)

SOURCE_SUFFIX = ".cs"

# Compared case-insensitively against the end of the file name.
DEFAULT_GENERATED_SUFFIXES = (
	".g.cs",
	".g.i.cs",
	".designer.cs",
	".AssemblyInfo.cs",
	".AssemblyAttributes.cs",
)

# Compared case-insensitively against the whole file name.
GENERATED_FILE_NAMES = ("AssemblyInfo.cs",)


@dataclass(frozen=True)
class SourceFile:
	path: Path
	raw_text: str


def is_generated_file(path: Path, suffixes: Iterable[str] = DEFAULT_GENERATED_SUFFIXES) -> bool:
	name = path.name.lower()
	if any(name == n.lower() for n in GENERATED_FILE_NAMES):
		return True
	return any(name.endswith(suffix.lower()) for suffix in suffixes)


def _same_path(a: Path, b: Path) -> bool:
	return str(a.resolve()).casefold() == str(b.resolve()).casefold()


def discover_source_files(
	root: Path,
	*,
	recursive: bool = True,
	exclude_generated: bool = True,
	generated_suffixes: Sequence[str] = DEFAULT_GENERATED_SUFFIXES,
	output_file: Optional[Path] = None,
) -> list[Path]:
	"""
	List the C# files under `root` in fusion order.

	The output file is never returned, even when it already exists inside the
	tree from a previous run.
	"""
	if not root.is_dir():
		raise InputNotFound(f"Input directory not found: {root}", span=Span(file=str(root)))

	found: list[Path] = []
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames.sort()
		if not recursive:
			dirnames.clear()
		for filename in sorted(filenames):
			if filename.lower().endswith(SOURCE_SUFFIX):
				found.append(Path(dirpath) / filename)

	files: list[Path] = []
	for path in found:
		if exclude_generated and is_generated_file(path, generated_suffixes):
			logger.debug("skipping generated file %s", path)
			continue
		if output_file is not None and _same_path(path, output_file):
			logger.debug("skipping output file %s", path)
			continue
		files.append(path)
	logger.info("discovered %d source file(s) under %s", len(files), root)
	return files


def read_source_file(path: Path) -> SourceFile:
	try:
		data = path.read_bytes()
	except OSError as err:
		raise FuseIOError(f"cannot read {path}: {err.strerror or err}", span=Span(file=str(path))) from err
	try:
		text = data.decode("utf-8-sig")
	except UnicodeDecodeError:
		logger.warning("%s is not valid UTF-8; decoding as latin-1", path)
		text = data.decode("latin-1")
	return SourceFile(path=path, raw_text=text)


__all__ = [
	"DEFAULT_GENERATED_SUFFIXES",
	"GENERATED_FILE_NAMES",
	"SOURCE_SUFFIX",
	"SourceFile",
	"discover_source_files",
	"is_generated_file",
	"read_source_file",
]
