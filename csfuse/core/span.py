# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span used by diagnostics and errors.

A Span carries best-effort file/line/column info. `raw` keeps whatever
location object the producer had (a lark token, an UnexpectedInput, a
`Located`) so richer renderers can still get at it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw parser loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a parser/location object.

		`loc` may be a Span (returned as-is unless `file` fills a gap), a lark
		Token/UnexpectedInput, or an ast `Located`.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			if file is not None and loc.file is None:
				return replace(loc, file=file)
			return loc
		return cls(
			file=file or getattr(loc, "file", None) or None,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			raw=loc,
		)

	def format_prefix(self) -> str:
		"""`file:line:col`, dropping trailing parts that are unknown."""
		file = self.file or "<unknown>"
		if self.line is None:
			return file
		if self.column is None:
			return f"{file}:{self.line}"
		return f"{file}:{self.line}:{self.column}"


__all__ = ["Span"]
