# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Fusion core: collect members, merge imports, resolve the root namespace.

`fuse_units` is the whole core in one call; the driver (csfuse.engine) wraps
it with discovery, parsing and output writing.
"""

from __future__ import annotations

from typing import Iterable, Optional

from csfuse.parser import ParsedUnit

from .collector import MemberCollector, collect_members, provenance_comment
from .imports import DEFAULT_STD_PREFIX, dedupe, merge_usings
from .model import Collection, MergedUnit
from .namespaces import DEFAULT_ROOT_NAMESPACE, resolve_root_namespace


def fuse_units(
	units: Iterable[ParsedUnit],
	*,
	forced_root: Optional[str] = None,
	annotate: bool = True,
	std_prefix: str = DEFAULT_STD_PREFIX,
) -> MergedUnit:
	collected = collect_members(units, annotate=annotate)
	return MergedUnit(
		root_namespace=resolve_root_namespace(collected.namespace_names, forced_root),
		imports=tuple(merge_usings(collected.imports, std_prefix)),
		declarations=tuple(collected.declarations),
		externs=tuple(dedupe(collected.externs, key=lambda e: e.text)),
		attributes=tuple(dedupe(collected.attributes, key=lambda a: a.text)),
	)


__all__ = [
	"Collection",
	"DEFAULT_ROOT_NAMESPACE",
	"DEFAULT_STD_PREFIX",
	"MemberCollector",
	"MergedUnit",
	"collect_members",
	"dedupe",
	"fuse_units",
	"merge_usings",
	"provenance_comment",
	"resolve_root_namespace",
]
