# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from lark import Lark, Token, Tree

from .ast import (
	AttributeList,
	CompilationUnit,
	ExternAlias,
	Located,
	Member,
	MemberDeclaration,
	NamespaceDeclaration,
	UsingDirective,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
)

_TYPE_KEYWORDS = {"class", "struct", "interface", "enum", "record", "delegate"}

# Token kinds that read as words; two adjacent words need a separating space.
_WORDISH = {"NAME", "NUMBER", "STRING", "CHAR", "USING", "GLOBAL_USING", "EXTERN_ALIAS", "NAMESPACE"}

_COMMENT_TYPES = {"LINE_COMMENT", "BLOCK_COMMENT"}

# `#define`/`#undef` must precede every token of a file; fusion drops them.
_FILE_ONLY_DIRECTIVE = re.compile(r"#\s*(?:define|undef)\b")


class PlacementError(ValueError):
	"""
	User-facing error for a directive or namespace that appears where C# does
	not allow it (e.g. a nested file-scoped namespace).

	Raised from the AST builder, not the grammar, so the caller can report a
	pinned syntax error instead of a raw Python exception.
	"""

	def __init__(self, message: str, *, loc: Located | None) -> None:
		super().__init__(message)
		self.loc = loc


def normalize_newlines(text: str) -> str:
	return text.replace("\r\n", "\n").replace("\r", "\n")


_RAW_OPEN = re.compile(r'\$*"""')
_INTERPOLATED_OPEN = re.compile(r'\$@"|@\$"|\$"')


def mask_interpolated_strings(text: str) -> str:
	"""
	Blank out every interpolated string literal in `text`.

	Each `$"..."` / `$@"..."` literal becomes a verbatim string of `x`
	characters with the same length and line breaks, so holes such as
	`{x switch { 1 => "}", _ => "" }}` never reach the grammar. Positions are
	unchanged; the builder slices real text from the original source. An
	unterminated literal is left as-is for the lexer to reject.
	"""
	out: List[str] = []
	copied = 0
	i = 0
	n = len(text)
	while i < n:
		if text[i] == "#":
			nl = text.find("\n", i)
			i = n if nl < 0 else nl
			continue
		end = _skip_literal(text, i)
		if end is None:
			i += 1
			continue
		if end < 0:
			break
		if _INTERPOLATED_OPEN.match(text, i):
			body = re.sub(r"[^\n]", "x", text[i + 2:end - 1])
			out.append(text[copied:i])
			out.append('@"' + body + '"')
			copied = end
		i = end
	out.append(text[copied:])
	return "".join(out)


def _skip_literal(text: str, i: int) -> Optional[int]:
	"""End of the literal or comment starting at `i`: None if none starts there, -1 if unterminated."""
	m = _RAW_OPEN.match(text, i)
	if m:
		end = text.find('"""', m.end())
		return -1 if end < 0 else end + 3
	m = _INTERPOLATED_OPEN.match(text, i)
	if m:
		return _skip_interpolated(text, m.end(), verbatim="@" in m.group())
	if text.startswith('@"', i):
		return _skip_quoted(text, i + 2, '"', verbatim=True)
	if text[i] in "\"'":
		return _skip_quoted(text, i + 1, text[i], verbatim=False)
	if text.startswith("//", i):
		end = text.find("\n", i)
		return len(text) if end < 0 else end
	if text.startswith("/*", i):
		end = text.find("*/", i + 2)
		return -1 if end < 0 else end + 2
	return None


def _skip_quoted(text: str, i: int, quote: str, *, verbatim: bool) -> int:
	while i < len(text):
		ch = text[i]
		if ch == quote:
			if verbatim and text.startswith(quote * 2, i):
				i += 2
				continue
			return i + 1
		if not verbatim:
			if ch == "\\":
				i += 2
				continue
			if ch == "\n":
				return -1
		i += 1
	return -1


def _skip_interpolated(text: str, i: int, *, verbatim: bool) -> int:
	while i < len(text):
		ch = text[i]
		if text.startswith("{{", i):
			i += 2
		elif ch == "{":
			i = _skip_hole(text, i + 1)
			if i < 0:
				return -1
		elif ch == '"':
			if verbatim and text.startswith('""', i):
				i += 2
				continue
			return i + 1
		elif not verbatim and ch == "\\":
			i += 2
		elif not verbatim and ch == "\n":
			return -1
		else:
			i += 1
	return -1


def _skip_hole(text: str, i: int) -> int:
	# Code up to the `}` that closes the hole; braces and literals nest freely.
	depth = 0
	while i < len(text):
		end = _skip_literal(text, i)
		if end is not None:
			if end < 0:
				return -1
			i = end
			continue
		ch = text[i]
		if ch == "{":
			depth += 1
		elif ch == "}":
			if depth == 0:
				return i + 1
			depth -= 1
		i += 1
	return -1


def parse_compilation_unit(source: str) -> CompilationUnit:
	text = normalize_newlines(source)
	masked = mask_interpolated_strings(text)
	tree = _PARSER.parse(masked)
	return _UnitBuilder(text, masked).build(tree)


def _name(tree: Tree) -> str:
	return tree.data if isinstance(tree.data, str) else tree.data.value


def _loc(node: Union[Tree, Token]) -> Located:
	if isinstance(node, Token):
		return Located(line=node.line, column=node.column)
	return Located(line=node.meta.line, column=node.meta.column)


def _subtrees(tree: Tree) -> List[Tree]:
	return [child for child in tree.children if isinstance(child, Tree)]


def _tokens(tree: Tree) -> List[Token]:
	return list(tree.scan_values(lambda v: isinstance(v, Token)))


def _spell(tok: Token) -> str:
	if tok.type == "GLOBAL_USING":
		return "global using"
	if tok.type == "EXTERN_ALIAS":
		return "extern alias"
	if tok.type == "ATTRIBUTE_TARGET":
		return "".join(tok.value.split())
	return tok.value


def canonical_text(tokens: Iterable[Token]) -> str:
	"""
	Render a token run with normalized spacing.

	Spacing only ever separates words, surrounds `=` and follows `,` or an
	attribute target; every other pair of tokens is glued. Token values (and
	thus string literal contents) are kept exactly.
	"""
	out: List[str] = []
	prev: Optional[Token] = None
	for tok in tokens:
		if prev is not None and _needs_space(prev, tok):
			out.append(" ")
		out.append(_spell(tok))
		prev = tok
	return "".join(out)


def _needs_space(a: Token, b: Token) -> bool:
	if a.value == "=" or b.value == "=":
		return True
	if a.value == "," or a.type == "ATTRIBUTE_TARGET":
		return True
	return a.type in _WORDISH and b.type in _WORDISH


class _UnitBuilder:
	def __init__(self, source: str, masked: str) -> None:
		self.source = source
		self.trivia = [
			t
			for t in _PARSER.lex(masked, dont_ignore=True)
			if t.type in _COMMENT_TYPES or (t.type == "PREPROCESSOR" and not _FILE_ONLY_DIRECTIVE.match(t.value))
		]
		self._trivia_starts = [t.start_pos for t in self.trivia]
		# Directives before this offset already belong to a member.
		self._claimed = 0
		self._last_member: Optional[Tuple[List[Member], int]] = None

	def build(self, tree: Tree) -> CompilationUnit:
		unit = CompilationUnit()
		scope: Union[CompilationUnit, NamespaceDeclaration] = unit
		cursor = 0
		for item in _subtrees(tree):
			kind = _name(item)
			if kind == "file_scoped_namespace":
				if isinstance(scope, NamespaceDeclaration):
					raise PlacementError("a file can declare only one file-scoped namespace", loc=_loc(item))
				if unit.members:
					raise PlacementError("file-scoped namespace must precede all member declarations", loc=_loc(item))
				scope = NamespaceDeclaration(
					name=self._qualified_name(item),
					loc=_loc(item),
					file_scoped=True,
				)
				unit.members.append(scope)
			elif kind == "global_attribute":
				if isinstance(scope, NamespaceDeclaration):
					raise PlacementError("assembly and module attributes must precede namespace declarations", loc=_loc(item))
				unit.attributes.append(self._build_attribute(item))
			elif kind == "namespace_declaration" and isinstance(scope, NamespaceDeclaration):
				raise PlacementError("a file-scoped namespace cannot contain namespace blocks", loc=_loc(item))
			else:
				self._build_item(item, scope, cursor)
			cursor = item.meta.end_pos
		self._attach_trailing_directives()
		return unit

	def _build_item(self, item: Tree, scope: Union[CompilationUnit, NamespaceDeclaration], cursor: int) -> None:
		kind = _name(item)
		if kind == "extern_alias":
			scope.externs.append(self._build_extern(item))
		elif kind == "using_directive":
			scope.usings.append(self._build_using(item))
		elif kind == "namespace_declaration":
			scope.members.append(self._build_namespace(item))
		elif kind == "member_declaration":
			scope.members.append(self._build_member(item, cursor))
			self._last_member = (scope.members, len(scope.members) - 1)
		else:
			raise PlacementError(f"unexpected {kind.replace('_', ' ')} inside a namespace", loc=_loc(item))

	def _build_namespace(self, tree: Tree) -> NamespaceDeclaration:
		ns = NamespaceDeclaration(name=self._qualified_name(tree), loc=_loc(tree))
		lbrace = next(c for c in tree.children if isinstance(c, Token) and c.type == "LBRACE")
		cursor = lbrace.end_pos
		for child in _subtrees(tree):
			kind = _name(child)
			if kind == "qualified_name":
				continue
			if kind == "file_scoped_namespace":
				raise PlacementError("file-scoped namespace cannot be nested in a namespace block", loc=_loc(child))
			self._build_item(child, ns, cursor)
			cursor = child.meta.end_pos
		return ns

	def _source_tokens(self, tree: Tree) -> List[Token]:
		# String tokens were lexed from the masked text; take their spelling from the source.
		return [
			t.update(value=self.source[t.start_pos:t.end_pos]) if t.type == "STRING" else t
			for t in _tokens(tree)
		]

	def _qualified_name(self, tree: Tree) -> str:
		qn = next(c for c in tree.children if isinstance(c, Tree) and _name(c) == "qualified_name")
		return canonical_text(_tokens(qn))

	def _build_extern(self, tree: Tree) -> ExternAlias:
		name_tok = next(c for c in tree.children if isinstance(c, Token) and c.type == "NAME")
		return ExternAlias(name=name_tok.value, loc=_loc(tree))

	def _build_using(self, tree: Tree) -> UsingDirective:
		tokens = self._source_tokens(tree)
		is_global = tokens[0].type == "GLOBAL_USING"
		clause = tokens[1:-1]
		is_static = False
		if clause and clause[0].type == "NAME" and clause[0].value in ("static", "unsafe"):
			is_static = clause[0].value == "static"
			clause = clause[1:]
		alias = None
		eq = next((i for i, tok in enumerate(clause) if tok.value == "="), None)
		if eq is not None:
			alias = canonical_text(clause[:eq])
			clause = clause[eq + 1:]
			if not alias:
				raise PlacementError("using alias is missing its name", loc=_loc(tree))
		if not clause:
			raise PlacementError("using directive does not name a namespace or type", loc=_loc(tree))
		return UsingDirective(
			text=canonical_text(tokens),
			name=canonical_text(clause),
			loc=_loc(tree),
			alias=alias,
			is_static=is_static,
			is_global=is_global,
		)

	def _build_attribute(self, tree: Tree) -> AttributeList:
		tokens = self._source_tokens(tree)
		target = _spell(tokens[0])[1:-1]
		return AttributeList(text=canonical_text(tokens), target=target, loc=_loc(tree))

	def _build_member(self, tree: Tree, cursor: int) -> MemberDeclaration:
		start = tree.meta.start_pos
		end = self._extend_trailing_comment(tree.meta.end_pos)
		line_start = self.source.rfind("\n", 0, start) + 1
		prefix = self.source[line_start:start]
		base_indent = prefix if not prefix.strip() else ""
		kind, name = _classify_member(tree)
		leading = self._leading_trivia(cursor, start, base_indent)
		self._claimed = end
		return MemberDeclaration(
			text=self.source[start:end],
			loc=_loc(tree),
			base_indent=base_indent,
			leading_trivia=leading,
			verbatim_lines=_verbatim_lines(tree),
			kind=kind,
			name=name,
		)

	def _extend_trailing_comment(self, end: int) -> int:
		# Comments that open and close on the member's closing line travel with it.
		nl = self.source.find("\n", end)
		line_end = len(self.source) if nl < 0 else nl
		for tok in self._trivia_between(end, line_end):
			if tok.type not in _COMMENT_TYPES:
				break
			if self.source[end:tok.start_pos].strip() or tok.end_pos > line_end:
				break
			end = tok.end_pos
		return end

	def _trivia_between(self, lo: int, hi: int) -> List[Token]:
		i = bisect_left(self._trivia_starts, lo)
		found: List[Token] = []
		while i < len(self.trivia) and self.trivia[i].start_pos < hi:
			found.append(self.trivia[i])
			i += 1
		return found

	def _leading_trivia(self, cursor: int, start: int, base_indent: str) -> Tuple[str, ...]:
		"""
		Comment and directive lines that precede this member, in source order.

		Comments count from the previous item in the same scope; those that sit
		entirely on that item's last line belong to it. Directives count from
		the previous member anywhere in the file, so `#if`/`#else`/`#endif`
		written between namespace headers or usings still reach a member.
		Blank lines between them are dropped; everything inside a comment is
		kept.
		"""
		boundary = -1
		if cursor > 0:
			nl = self.source.find("\n", cursor)
			boundary = len(self.source) if nl < 0 else nl
		lines: List[str] = []
		prev: Optional[Token] = None
		for tok in self._trivia_between(min(cursor, self._claimed), start):
			if tok.type == "PREPROCESSOR":
				if tok.start_pos < self._claimed:
					continue
			elif tok.start_pos < cursor or tok.end_pos <= boundary:
				continue
			first, *rest = tok.value.split("\n")
			if prev is not None and prev.end_line == tok.line:
				lines[-1] += self.source[prev.end_pos:tok.start_pos] + first
			else:
				lines.append(first)
			for raw in rest:
				lines.append(raw[len(base_indent):] if base_indent and raw.startswith(base_indent) else raw)
			prev = tok
		return tuple(line.rstrip() for line in lines)

	def _attach_trailing_directives(self) -> None:
		# Directives after the file's last member (an `#endif` before a closing
		# brace, say) close regions that member opened.
		if self._last_member is None:
			return
		lines = tuple(
			t.value.rstrip()
			for t in self._trivia_between(self._claimed, len(self.source))
			if t.type == "PREPROCESSOR"
		)
		if lines:
			members, index = self._last_member
			members[index] = replace(members[index], trailing_trivia=lines)


def _verbatim_lines(tree: Tree) -> frozenset[int]:
	first = tree.meta.line
	lines: set[int] = set()
	for tok in tree.scan_values(lambda v: isinstance(v, Token) and v.type == "STRING"):
		if tok.end_line is not None and tok.end_line > tok.line:
			lines.update(range(tok.line + 1 - first, tok.end_line + 1 - first))
	return frozenset(lines)


def _classify_member(tree: Tree) -> Tuple[str, Optional[str]]:
	"""Best-effort (kind, name) from the declaration head; attributes are skipped."""
	head = [c for c in tree.children if isinstance(c, Token)]
	depth = 0
	for i, tok in enumerate(head):
		if tok.type == "LSQB":
			depth += 1
			continue
		if tok.type == "RSQB":
			depth = max(0, depth - 1)
			continue
		if depth or tok.type != "NAME" or tok.value not in _TYPE_KEYWORDS:
			continue
		kind = tok.value
		rest = head[i + 1:]
		if kind == "delegate":
			return kind, _delegate_name(rest)
		if kind == "record" and rest and rest[0].value in ("class", "struct"):
			rest = rest[1:]
		name = next((t.value for t in rest if t.type == "NAME"), None)
		return kind, name
	return "statement", None


def _delegate_name(tokens: List[Token]) -> Optional[str]:
	# The last NAME at angle-depth 0 before the parameter list.
	name = None
	angle = 0
	for tok in tokens:
		if tok.value == "(":
			break
		if tok.value == "<":
			angle += 1
		elif tok.value == ">":
			angle = max(0, angle - 1)
		elif tok.type == "NAME" and angle == 0:
			name = tok.value
	return name


__all__ = [
	"PlacementError",
	"canonical_text",
	"mask_interpolated_strings",
	"normalize_newlines",
	"parse_compilation_unit",
]
