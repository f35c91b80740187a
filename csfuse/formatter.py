# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Canonical text rendering for a `CompilationUnit`.

Layout: extern aliases, usings and global attributes (each group followed by
a blank line), then members. Namespace blocks use Allman braces; members are
indented four spaces per level and separated by one blank line. Member bodies
are moved, never reflowed: each line keeps its indentation relative to the
member's first line, and lines inside multi-line string literals are emitted
untouched.
"""

from __future__ import annotations

from typing import List, Sequence

from csfuse.parser.ast import CompilationUnit, Member, MemberDeclaration, NamespaceDeclaration

INDENT = "    "


def format_compilation_unit(unit: CompilationUnit) -> str:
	lines: List[str] = []
	for group in (
		[e.text for e in unit.externs],
		[u.text for u in unit.usings],
		[a.text for a in unit.attributes],
	):
		if group:
			lines.extend(group)
			lines.append("")
	_format_members(unit.members, 0, lines)
	while lines and not lines[-1]:
		lines.pop()
	return "\n".join(lines) + "\n"


def _format_members(members: Sequence[Member], depth: int, out: List[str]) -> None:
	for i, member in enumerate(members):
		if i:
			out.append("")
		if isinstance(member, NamespaceDeclaration):
			_format_namespace(member, depth, out)
		else:
			out.extend(format_member(member, depth))


def _format_namespace(ns: NamespaceDeclaration, depth: int, out: List[str]) -> None:
	pad = INDENT * depth
	inner = INDENT * (depth + 1)
	out.append(f"{pad}namespace {ns.name}")
	out.append(f"{pad}{{")
	directives = [e.text for e in ns.externs] + [u.text for u in ns.usings]
	for text in directives:
		out.append(inner + text)
	if directives and ns.members:
		out.append("")
	_format_members(ns.members, depth + 1, out)
	out.append(f"{pad}}}")


def format_member(member: MemberDeclaration, depth: int) -> List[str]:
	pad = INDENT * depth
	out = [pad + line if line else "" for line in member.leading_trivia]
	for offset, line in enumerate(member.text.split("\n")):
		if offset in member.verbatim_lines:
			out.append(line)
			continue
		if offset:
			line = _dedent(line, member.base_indent)
		line = line.rstrip()
		out.append(pad + line if line else "")
	out.extend(pad + line for line in member.trailing_trivia)
	return out


def _dedent(line: str, base_indent: str) -> str:
	if not base_indent:
		return line
	if line.startswith(base_indent):
		return line[len(base_indent):]
	# Shallower than the member's own indentation.
	return line.lstrip()


__all__ = ["INDENT", "format_compilation_unit", "format_member"]
