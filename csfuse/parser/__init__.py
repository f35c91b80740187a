# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
C# structural parser.

Parses source text into a `CompilationUnit` and converts every grammar or
placement failure into a pinned `SourceSyntaxError`. Nothing here recovers
from a bad file: the error propagates and the fusion run aborts.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from . import ast
from . import parser as _parser
from csfuse.core.span import Span
from csfuse.errors import SourceSyntaxError
from csfuse.sources import SourceFile


@dataclass(frozen=True)
class ParsedUnit:
	source_file: SourceFile
	root: ast.CompilationUnit


def _describe(err: UnexpectedInput) -> str:
	if isinstance(err, UnexpectedCharacters):
		return f"unexpected character {err.char!r}"
	if isinstance(err, UnexpectedEOF):
		return "unexpected end of file"
	if isinstance(err, UnexpectedToken):
		if err.token.type == "$END":
			return "unexpected end of file (unbalanced braces?)"
		return f"unexpected {err.token.value!r}"
	return "invalid syntax"


def parse_source_file(source_file: SourceFile) -> ParsedUnit:
	path = str(source_file.path)
	text = _parser.normalize_newlines(source_file.raw_text)
	try:
		root = _parser.parse_compilation_unit(text)
	except UnexpectedInput as err:
		line = getattr(err, "line", None)
		column = getattr(err, "column", None)
		if not (isinstance(line, int) and line > 0):
			line = column = None
		notes: tuple[str, ...] = ()
		if line is not None and getattr(err, "pos_in_stream", None) is not None:
			notes = (err.get_context(text).rstrip("\n"),)
		raise SourceSyntaxError(
			message=f"syntax error: {_describe(err)}",
			span=Span(file=path, line=line, column=column, raw=err),
			notes=notes,
		) from err
	except _parser.PlacementError as err:
		raise SourceSyntaxError(message=f"syntax error: {err}", span=Span.from_loc(err.loc, file=path)) from err
	return ParsedUnit(source_file=source_file, root=root)


def parse_source_text(text: str, path: str = "<memory>.cs") -> ParsedUnit:
	"""Parse in-memory text; convenience for callers that have no file."""
	return parse_source_file(SourceFile(path=Path(path), raw_text=text))


__all__ = ["ParsedUnit", "ast", "parse_source_file", "parse_source_text"]
