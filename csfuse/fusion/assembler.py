# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Tree assembly: one compilation unit, one namespace block, plus the banner."""

from __future__ import annotations

from datetime import datetime

from csfuse.formatter import format_compilation_unit
from csfuse.parser.ast import CompilationUnit, Located, NamespaceDeclaration

from .model import MergedUnit

BANNER_RULE = "// " + "-" * 60
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def assemble(merged: MergedUnit) -> CompilationUnit:
	origin = Located(line=1, column=1)
	namespace = NamespaceDeclaration(
		name=merged.root_namespace,
		loc=origin,
		members=list(merged.declarations),
	)
	return CompilationUnit(
		externs=list(merged.externs),
		usings=list(merged.imports),
		attributes=list(merged.attributes),
		members=[namespace],
	)


def build_banner(version: str, generated_at: datetime) -> str:
	return "\n".join(
		[
			BANNER_RULE,
			f"//  Generated by csfuse v{version}",
			f"//  Generation Date: {generated_at.strftime(TIMESTAMP_FORMAT)}",
			BANNER_RULE,
		]
	)


def emit(merged: MergedUnit, *, version: str, generated_at: datetime) -> str:
	body = format_compilation_unit(assemble(merged))
	return build_banner(version, generated_at) + "\n" + body


__all__ = ["BANNER_RULE", "assemble", "build_banner", "emit"]
