# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional

DEFAULT_ROOT_NAMESPACE = "Merged"


def first_segment(name: str) -> str:
	return name.split(".", 1)[0].strip()


def resolve_root_namespace(names: Iterable[str], forced: Optional[str] = None) -> str:
	"""
	Pick the namespace that wraps the fused output.

	A non-blank `forced` name wins as-is (trimmed, not validated). Otherwise
	the most frequent first segment among `names` is used; ties go to the
	ordinally smallest segment. With nothing to count, `Merged`.
	"""
	if forced is not None and forced.strip():
		return forced.strip()
	counts = Counter(seg for seg in map(first_segment, names) if seg)
	if not counts:
		return DEFAULT_ROOT_NAMESPACE
	best, _ = min(counts.items(), key=lambda kv: (-kv[1], kv[0]))
	return best


__all__ = ["DEFAULT_ROOT_NAMESPACE", "first_segment", "resolve_root_namespace"]
