# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Member collection with namespace flattening.

Walks every parsed unit in order and produces one flat declaration list. A
namespace scope never reaches the output: its name goes to the name pool
used for root inference, its directives go to the shared pools, and its
members are emitted in place, at any nesting depth.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from csfuse.parser import ParsedUnit
from csfuse.parser.ast import MemberDeclaration, NamespaceDeclaration, UsingDirective

from .model import Collection

logger = logging.getLogger(__name__)


def provenance_comment(file_name: str) -> str:
	return f"// ===== From: {file_name} ====="


def describe_declarations(declarations: Sequence[MemberDeclaration]) -> str:
	"""One-line summary for verbose output, e.g. `2 declaration(s): class Box, enum Mode`."""
	names = [d.kind if d.name is None else f"{d.kind} {d.name}" for d in declarations]
	summary = f"{len(names)} declaration(s)"
	return f"{summary}: {', '.join(names)}" if names else summary


def describe_imports(imports: Sequence[UsingDirective]) -> str:
	static = sum(1 for u in imports if u.is_static)
	aliased = sum(1 for u in imports if u.alias is not None)
	global_ = sum(1 for u in imports if u.is_global)
	return f"{len(imports)} using(s) ({static} static, {aliased} alias, {global_} global)"


class MemberCollector:
	def __init__(self, *, annotate: bool = True) -> None:
		self.annotate = annotate
		self.result = Collection()

	def collect(self, units: Iterable[ParsedUnit]) -> Collection:
		for unit in units:
			self.collect_unit(unit)
		return self.result

	def collect_unit(self, unit: ParsedUnit) -> None:
		root = unit.root
		file_name = unit.source_file.path.name
		before = len(self.result.declarations)
		imports_before = len(self.result.imports)
		self.result.externs.extend(root.externs)
		self.result.imports.extend(root.usings)
		self.result.attributes.extend(root.attributes)
		for member in root.members:
			self._visit(member, file_name)
		if logger.isEnabledFor(logging.DEBUG):
			logger.debug(
				"%s: %s; %s",
				unit.source_file.path,
				describe_declarations(self.result.declarations[before:]),
				describe_imports(self.result.imports[imports_before:]),
			)
			for attr in root.attributes:
				logger.debug("%s: %s attribute %s", unit.source_file.path, attr.target, attr.text)

	def _visit(self, member: MemberDeclaration | NamespaceDeclaration, file_name: str) -> None:
		if isinstance(member, NamespaceDeclaration):
			self.result.namespace_names.append(member.name)
			self.result.externs.extend(member.externs)
			self.result.imports.extend(member.usings)
			for child in member.members:
				self._visit(child, file_name)
			return
		if self.annotate:
			member = member.with_leading_comment(provenance_comment(file_name))
		self.result.declarations.append(member)


def collect_members(units: Iterable[ParsedUnit], *, annotate: bool = True) -> Collection:
	return MemberCollector(annotate=annotate).collect(units)


__all__ = [
	"MemberCollector",
	"collect_members",
	"describe_declarations",
	"describe_imports",
	"provenance_comment",
]
