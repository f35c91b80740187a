# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the parser and the fusion driver.

A message plus optional code/phase/span/notes. Errors raised by the pipeline
convert themselves into a Diagnostic for `--json` reporting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a fusion diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic: "discover", "parse", "emit"...
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def format_human(self) -> str:
		if self.span.file is None:
			return f"{self.severity}: {self.message}"
		return f"{self.span.format_prefix()}: {self.severity}: {self.message}"

	def to_json(self) -> dict[str, Any]:
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


__all__ = ["Diagnostic"]
