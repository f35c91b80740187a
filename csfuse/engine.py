# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Fusion driver.

`fuse` runs the whole pipeline for one input directory: discover, read,
parse, collect, merge, assemble, write. Any failure aborts the run before the
output file is touched; the output is replaced atomically on success.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from csfuse import __version__
from csfuse.core.span import Span
from csfuse.errors import FuseIOError, InputNotFound, UsageError
from csfuse.fusion import DEFAULT_STD_PREFIX, fuse_units
from csfuse.fusion.assembler import emit
from csfuse.parser import parse_source_file
from csfuse.sources import DEFAULT_GENERATED_SUFFIXES, discover_source_files, read_source_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FuseOptions:
	input_dir: Path
	output_file: Optional[Path] = None
	root: Optional[str] = None
	recursive: bool = True
	exclude_generated: bool = True
	add_file_headers: bool = True
	std_prefix: str = DEFAULT_STD_PREFIX
	generated_suffixes: Tuple[str, ...] = DEFAULT_GENERATED_SUFFIXES

	@property
	def forced_root(self) -> Optional[str]:
		if self.root is None or not self.root.strip():
			return None
		return self.root.strip()


@dataclass(frozen=True)
class FuseResult:
	root_namespace: str
	files_processed: int
	members_emitted: int
	usings_emitted: int
	output_file: Path


def resolve_output_path(opts: FuseOptions) -> Path:
	"""An explicit output wins; otherwise `<input>/<root>.cs` for a forced root."""
	if opts.output_file is not None and str(opts.output_file).strip():
		return opts.output_file
	if opts.forced_root is None:
		raise UsageError("You must provide either an output file or the --root option.")
	return opts.input_dir / f"{opts.forced_root}.cs"


def write_output(path: Path, text: str) -> None:
	"""Write `text` as UTF-8 with LF newlines, replacing `path` atomically."""
	try:
		path.parent.mkdir(parents=True, exist_ok=True)
		fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
		try:
			with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
				f.write(text)
			os.replace(tmp_name, path)
		except BaseException:
			Path(tmp_name).unlink(missing_ok=True)
			raise
	except OSError as err:
		raise FuseIOError(f"cannot write {path}: {err.strerror or err}", span=Span(file=str(path))) from err


def fuse(
	opts: FuseOptions,
	*,
	generated_at: Optional[datetime] = None,
	version: str = __version__,
) -> FuseResult:
	if not opts.input_dir.is_dir():
		raise InputNotFound(f"Input directory not found: {opts.input_dir}", span=Span(file=str(opts.input_dir)))
	output = resolve_output_path(opts)

	paths = discover_source_files(
		opts.input_dir,
		recursive=opts.recursive,
		exclude_generated=opts.exclude_generated,
		generated_suffixes=opts.generated_suffixes,
		output_file=output,
	)
	units = []
	for path in paths:
		logger.debug("parsing %s", path)
		units.append(parse_source_file(read_source_file(path)))

	merged = fuse_units(
		units,
		forced_root=opts.forced_root,
		annotate=opts.add_file_headers,
		std_prefix=opts.std_prefix,
	)
	text = emit(merged, version=version, generated_at=generated_at or datetime.now())
	write_output(output, text)
	logger.info(
		"wrote %s: namespace %s, %d member(s), %d using(s)",
		output,
		merged.root_namespace,
		len(merged.declarations),
		len(merged.imports),
	)
	return FuseResult(
		root_namespace=merged.root_namespace,
		files_processed=len(units),
		members_emitted=len(merged.declarations),
		usings_emitted=len(merged.imports),
		output_file=output.resolve(),
	)


__all__ = ["FuseOptions", "FuseResult", "fuse", "resolve_output_path", "write_output"]
