# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from csfuse.parser.ast import AttributeList, ExternAlias, MemberDeclaration, UsingDirective


@dataclass
class Collection:
	"""Raw output of member collection, in encounter order."""

	declarations: List[MemberDeclaration] = field(default_factory=list)
	imports: List[UsingDirective] = field(default_factory=list)
	namespace_names: List[str] = field(default_factory=list)
	externs: List[ExternAlias] = field(default_factory=list)
	attributes: List[AttributeList] = field(default_factory=list)


@dataclass(frozen=True)
class MergedUnit:
	"""Everything the assembler needs: one root namespace over flattened members."""

	root_namespace: str
	imports: tuple[UsingDirective, ...]
	declarations: tuple[MemberDeclaration, ...]
	externs: tuple[ExternAlias, ...] = ()
	attributes: tuple[AttributeList, ...] = ()


__all__ = ["Collection", "MergedUnit"]
