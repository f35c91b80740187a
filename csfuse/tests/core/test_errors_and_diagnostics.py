# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from contextlib import contextmanager

import pytest

from csfuse.core import Diagnostic, Span
from csfuse.errors import ConfigError, FuseError, FuseIOError, InputNotFound, SourceSyntaxError, UsageError
from csfuse.parser.ast import Located


def test_span_prefix_drops_unknown_parts():
	assert Span().format_prefix() == "<unknown>"
	assert Span(file="a.cs").format_prefix() == "a.cs"
	assert Span(file="a.cs", line=3).format_prefix() == "a.cs:3"
	assert Span(file="a.cs", line=3, column=7).format_prefix() == "a.cs:3:7"


def test_span_from_loc():
	loc = Located(line=4, column=2)

	span = Span.from_loc(loc, file="x.cs")

	assert (span.file, span.line, span.column, span.raw) == ("x.cs", 4, 2, loc)
	assert Span.from_loc(None, file="y.cs") == Span(file="y.cs")
	assert Span.from_loc(Span(line=1), file="z.cs") == Span(file="z.cs", line=1)


def test_diagnostic_json_shape():
	diag = Diagnostic(message="boom", code="syntax", phase="parse", span=Span(file="a.cs", line=1, column=2), notes=["ctx"])

	assert diag.to_json() == {
		"phase": "parse",
		"code": "syntax",
		"message": "boom",
		"severity": "error",
		"file": "a.cs",
		"line": 1,
		"column": 2,
		"notes": ["ctx"],
	}
	assert diag.format_human() == "a.cs:1:2: error: boom"
	assert Diagnostic(message="no input", severity="warning").format_human() == "warning: no input"


@pytest.mark.parametrize(
	"cls, reason, phase, exit_code",
	[
		(InputNotFound, "input-not-found", "discover", 1),
		(UsageError, "usage", "usage", 1),
		(SourceSyntaxError, "syntax", "parse", 2),
		(FuseIOError, "io", "io", 2),
		(ConfigError, "config", "config", 2),
	],
)
def test_error_taxonomy(cls, reason: str, phase: str, exit_code: int):
	err = cls("went wrong")

	assert isinstance(err, FuseError)
	assert (err.reason_code, err.phase, err.exit_code) == (reason, phase, exit_code)


def test_error_rendering():
	err = SourceSyntaxError("syntax error: unexpected '}'", span=Span(file="Bad.cs", line=2, column=1), notes=("}\n^",))

	assert str(err) == "Bad.cs:2:1: syntax error: unexpected '}'"
	assert str(UsageError("no output")) == "no output"
	diag = err.to_diagnostic()
	assert (diag.code, diag.phase, diag.span.line, diag.notes) == ("syntax", "parse", 2, ["}\n^"])


@contextmanager
def _stage():
	yield


def test_error_propagates_through_generator_context_manager():
	with pytest.raises(SourceSyntaxError) as excinfo:
		with _stage():
			raise SourceSyntaxError("bad", span=Span(file="A.cs", line=1))

	assert excinfo.value.__traceback__ is not None
	assert str(excinfo.value) == "A.cs:1: bad"
	assert excinfo.value != SourceSyntaxError("bad", span=Span(file="A.cs", line=1))
