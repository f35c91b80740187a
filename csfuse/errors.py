# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Structured errors raised by the fusion pipeline.

Every failure is fatal to the run: nothing is retried and no partial output
is written. Each error knows the process exit code the CLI should return and
can render itself as a `Diagnostic` for machine-readable output.

The classes are dataclasses compared by identity and left mutable: the
interpreter and `contextlib` assign `__traceback__` on exceptions in flight.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from csfuse.core.diagnostics import Diagnostic
from csfuse.core.span import Span


@dataclass(eq=False)
class FuseError(Exception):
	"""Base error for csfuse tooling: stable reason code + optional source context."""

	message: str
	reason_code: str = "error"
	phase: str | None = None
	span: Span = field(default_factory=Span)
	notes: tuple[str, ...] = ()

	exit_code: ClassVar[int] = 2

	def __str__(self) -> str:
		return self.format_human()

	def format_human(self) -> str:
		if self.span.file is None:
			return self.message
		return f"{self.span.format_prefix()}: {self.message}"

	def to_diagnostic(self) -> Diagnostic:
		return Diagnostic(
			message=self.message,
			code=self.reason_code,
			phase=self.phase,
			severity="error",
			span=self.span,
			notes=list(self.notes),
		)


@dataclass(eq=False)
class InputNotFound(FuseError):
	"""The input directory does not exist."""

	reason_code: str = "input-not-found"
	phase: str | None = "discover"

	exit_code: ClassVar[int] = 1


@dataclass(eq=False)
class UsageError(FuseError):
	"""The command line (or options object) cannot describe a run."""

	reason_code: str = "usage"
	phase: str | None = "usage"

	exit_code: ClassVar[int] = 1


@dataclass(eq=False)
class SourceSyntaxError(FuseError):
	"""A source file is not structurally valid C#."""

	reason_code: str = "syntax"
	phase: str | None = "parse"


@dataclass(eq=False)
class FuseIOError(FuseError):
	"""Reading an input or writing the output failed."""

	reason_code: str = "io"
	phase: str | None = "io"


@dataclass(eq=False)
class ConfigError(FuseError):
	"""A JSON configuration file is unreadable or malformed."""

	reason_code: str = "config"
	phase: str | None = "config"


__all__ = [
	"FuseError",
	"InputNotFound",
	"UsageError",
	"SourceSyntaxError",
	"FuseIOError",
	"ConfigError",
]
