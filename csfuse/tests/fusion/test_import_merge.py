# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from csfuse.fusion.imports import dedupe, merge_usings
from csfuse.parser import parse_source_text


def _usings(source: str):
	return parse_source_text(source).root.usings


def test_equivalent_usings_collapse_to_one():
	usings = _usings(
		"""
using System;
using   System ;
using /* again */ System;
using System.Text;
using System . Text;
"""
	)

	merged = merge_usings(usings)

	assert [u.text for u in merged] == ["using System.Text;", "using System;"]


def test_first_occurrence_wins():
	usings = _usings("using System;\nusing  System;\n")

	(kept,) = merge_usings(usings)

	assert kept is usings[0]
	assert kept.loc.line == 1


def test_std_prefix_partition_then_ordinal_order():
	usings = _usings(
		"""
using Zeta;
using System.Text;
using Alpha.Beta;
using System;
using SystemX.Foo;
using static System.Math;
using IO = System.IO;
using alpha;
global using Gamma;
"""
	)

	merged = [u.text for u in merge_usings(usings)]

	assert merged == [
		"global using Gamma;",
		"using IO = System.IO;",
		"using System.Text;",
		"using System;",
		"using static System.Math;",
		"using Alpha.Beta;",
		"using SystemX.Foo;",
		"using Zeta;",
		"using alpha;",
	]


def test_std_prefix_is_configurable():
	usings = _usings("using System;\nusing Unity.Mathematics;\nusing Acme;\n")

	merged = [u.text for u in merge_usings(usings, std_prefix="Unity")]

	assert merged == ["using Unity.Mathematics;", "using Acme;", "using System;"]


def test_dedupe_keeps_first_seen_order():
	assert dedupe(["b", "a", "b", "c", "a"], key=lambda s: s) == ["b", "a", "c"]
