# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line entry point.

  csfuse <inputDirectory> [outputFile] [--root=<name>] [options]

Exit codes: 0 success, 1 usage error or missing input directory, 2 any other
failure (parse, I/O, configuration).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, NoReturn, Optional

from csfuse import __version__
from csfuse.config import FuseConfig, load_config
from csfuse.core.diagnostics import Diagnostic
from csfuse.engine import FuseOptions, FuseResult, fuse
from csfuse.errors import FuseError, UsageError

_EPILOG = """\
examples:
  csfuse ../Project.Tests --root=TestNs
    -> writes ../Project.Tests/TestNs.cs
  csfuse ../Project.Tests ../Project.Tests/Merged.cs --root=TestNs
    -> writes ../Project.Tests/Merged.cs
"""


class _ArgumentParser(argparse.ArgumentParser):
	def error(self, message: str) -> NoReturn:
		raise UsageError(message)


def _build_parser() -> argparse.ArgumentParser:
	p = _ArgumentParser(
		prog="csfuse",
		description="Fuse a tree of C# source files into one compilable file.",
		epilog=_EPILOG,
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	p.add_argument("input_dir", type=Path, help="Directory containing the .cs files to fuse")
	p.add_argument("output_file", type=Path, nargs="?", default=None, help="Output file (default: <input>/<root>.cs)")
	p.add_argument("--root", type=str, default=None, help="Force the root namespace instead of inferring it")
	p.add_argument("--config", type=Path, default=None, help="JSON config file; command-line flags override it")
	p.add_argument(
		"--no-recursive",
		dest="recursive",
		action="store_const",
		const=False,
		default=None,
		help="Only read files directly inside the input directory",
	)
	p.add_argument(
		"--include-generated",
		dest="exclude_generated",
		action="store_const",
		const=False,
		default=None,
		help="Do not skip generated files (*.g.cs, *.designer.cs, AssemblyInfo.cs...)",
	)
	p.add_argument(
		"--no-file-headers",
		dest="add_file_headers",
		action="store_const",
		const=False,
		default=None,
		help="Do not prefix declarations with a '// ===== From: <file> =====' comment",
	)
	p.add_argument("--std-prefix", type=str, default=None, help="Import root sorted first (default: System)")
	p.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	p.add_argument("-v", "--verbose", action="count", default=0, help="Log progress to stderr (repeat for debug)")
	p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	return p


def _pick(cli_value: Any, config_value: Any, default: Any) -> Any:
	if cli_value is not None:
		return cli_value
	if config_value is not None:
		return config_value
	return default


def build_options(args: argparse.Namespace, config: Optional[FuseConfig] = None) -> FuseOptions:
	"""Merge defaults, config file values and command-line flags, in that order."""
	config = config or FuseConfig()
	base = FuseOptions(input_dir=args.input_dir)
	return replace(
		base,
		output_file=_pick(args.output_file, config.output, base.output_file),
		root=_pick(args.root, config.root, base.root),
		recursive=_pick(args.recursive, config.recursive, base.recursive),
		exclude_generated=_pick(args.exclude_generated, config.exclude_generated, base.exclude_generated),
		add_file_headers=_pick(args.add_file_headers, config.add_file_headers, base.add_file_headers),
		std_prefix=_pick(args.std_prefix, config.std_prefix, base.std_prefix),
		generated_suffixes=_pick(None, config.generated_suffixes, base.generated_suffixes),
	)


def _configure_logging(verbosity: int) -> None:
	level = logging.WARNING
	if verbosity == 1:
		level = logging.INFO
	elif verbosity > 1:
		level = logging.DEBUG
	logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def _print_result(result: FuseResult, as_json: bool) -> None:
	if as_json:
		payload = {
			"exit_code": 0,
			"root_namespace": result.root_namespace,
			"files_processed": result.files_processed,
			"members_emitted": result.members_emitted,
			"usings_emitted": result.usings_emitted,
			"output_file": str(result.output_file),
			"diagnostics": [],
		}
		print(json.dumps(payload))
		return
	print("Done.")
	print(f"Root Namespace  : {result.root_namespace}")
	print(f"Files Processed : {result.files_processed}")
	print(f"Members Emitted : {result.members_emitted}")
	print(f"Usings Emitted  : {result.usings_emitted}")
	print(f"Output File     : {result.output_file}")


def _report_failure(diag: Diagnostic, exit_code: int, as_json: bool, usage: Optional[str] = None) -> int:
	if as_json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [diag.to_json()]}))
		return exit_code
	print(diag.format_human(), file=sys.stderr)
	for note in diag.notes:
		print(note, file=sys.stderr)
	if usage:
		print(file=sys.stderr)
		print(usage, file=sys.stderr, end="")
	return exit_code


def main(argv: list[str] | None = None) -> int:
	"""
	Parse arguments, run one fusion and report the outcome.

	With --json, prints a single JSON object (result or diagnostics) on stdout;
	otherwise a human-readable summary on stdout and errors on stderr.
	"""
	argv = list(sys.argv[1:] if argv is None else argv)
	p = _build_parser()
	as_json = "--json" in argv
	try:
		args = p.parse_args(argv)
	except UsageError as err:
		return _report_failure(err.to_diagnostic(), err.exit_code, as_json, p.format_usage())

	_configure_logging(args.verbose)
	try:
		config = load_config(args.config) if args.config is not None else None
		result = fuse(build_options(args, config))
	except UsageError as err:
		return _report_failure(err.to_diagnostic(), err.exit_code, args.json, p.format_usage())
	except FuseError as err:
		return _report_failure(err.to_diagnostic(), err.exit_code, args.json)
	except Exception as err:
		return _report_failure(Diagnostic(message=str(err) or type(err).__name__, code="internal", phase="fuse"), 2, args.json)

	_print_result(result, args.json)
	return 0


__all__ = ["build_options", "main"]
