# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Structural C# syntax tree.

Only what fusion needs is modelled: compilation-level directives, namespace
scopes and member declarations. A member declaration is opaque; it keeps its
exact source text plus enough layout information for the formatter to move
it to a different indentation level.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int


@dataclass(frozen=True)
class ExternAlias:
	name: str
	loc: Located

	@property
	def text(self) -> str:
		return f"extern alias {self.name};"


@dataclass(frozen=True)
class UsingDirective:
	"""
	A `using` directive in canonical form.

	`text` is rebuilt from the directive's tokens (comments dropped, spacing
	normalized) and is the identity used for deduplication. `name` is the
	imported namespace or type, i.e. the alias target for `using A = B;`.
	"""

	text: str
	name: str
	loc: Located
	alias: Optional[str] = None
	is_static: bool = False
	is_global: bool = False

	@property
	def root_segment(self) -> str:
		name = self.name
		if name.startswith("global::"):
			name = name[len("global::"):]
		return name.split(".", 1)[0]


@dataclass(frozen=True)
class AttributeList:
	"""An `[assembly: ...]` or `[module: ...]` attribute section."""

	text: str
	target: str
	loc: Located


@dataclass(frozen=True)
class MemberDeclaration:
	"""
	One top-level construct (type, delegate, global statement...).

	- `text` is the exact source slice, starting at the first token.
	- `base_indent` is the whitespace that preceded the first token on its
	  line; continuation lines are re-indented relative to it.
	- `verbatim_lines` are 0-based line offsets into `text` that start inside
	  a multi-line string literal and must never be re-indented.
	- `leading_trivia` holds comment and preprocessor lines that preceded the
	  member, already dedented relative to `base_indent`.
	- `trailing_trivia` holds preprocessor lines that follow the last member
	  of a file, e.g. the `#endif` closing a region opened before it.
	"""

	text: str
	loc: Located
	base_indent: str = ""
	leading_trivia: Tuple[str, ...] = ()
	trailing_trivia: Tuple[str, ...] = ()
	verbatim_lines: FrozenSet[int] = frozenset()
	kind: str = "statement"
	name: Optional[str] = None

	def with_leading_comment(self, comment: str) -> "MemberDeclaration":
		return replace(self, leading_trivia=(comment, *self.leading_trivia))


@dataclass
class NamespaceDeclaration:
	name: str
	loc: Located
	externs: List[ExternAlias] = field(default_factory=list)
	usings: List[UsingDirective] = field(default_factory=list)
	members: List["Member"] = field(default_factory=list)
	file_scoped: bool = False


Member = Union[MemberDeclaration, NamespaceDeclaration]


@dataclass
class CompilationUnit:
	externs: List[ExternAlias] = field(default_factory=list)
	usings: List[UsingDirective] = field(default_factory=list)
	attributes: List[AttributeList] = field(default_factory=list)
	members: List[Member] = field(default_factory=list)


__all__ = [
	"Located",
	"ExternAlias",
	"UsingDirective",
	"AttributeList",
	"MemberDeclaration",
	"NamespaceDeclaration",
	"Member",
	"CompilationUnit",
]
