# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Import merging.

Usings are deduplicated by canonical text (first occurrence wins) and sorted:
global usings first, then the standard-library group, then everything else,
each group in ordinal order of the directive text.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, List, Tuple, TypeVar

from csfuse.parser.ast import UsingDirective

DEFAULT_STD_PREFIX = "System"

T = TypeVar("T")


def dedupe(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
	seen: set[Hashable] = set()
	out: List[T] = []
	for item in items:
		k = key(item)
		if k in seen:
			continue
		seen.add(k)
		out.append(item)
	return out


def import_sort_key(directive: UsingDirective, std_prefix: str = DEFAULT_STD_PREFIX) -> Tuple[bool, bool, str]:
	# False sorts first. Python compares str by code point, i.e. ordinal order.
	return (not directive.is_global, directive.root_segment != std_prefix, directive.text)


def merge_usings(usings: Iterable[UsingDirective], std_prefix: str = DEFAULT_STD_PREFIX) -> List[UsingDirective]:
	unique = dedupe(usings, key=lambda u: u.text)
	return sorted(unique, key=lambda u: import_sort_key(u, std_prefix))


__all__ = ["DEFAULT_STD_PREFIX", "dedupe", "import_sort_key", "merge_usings"]
