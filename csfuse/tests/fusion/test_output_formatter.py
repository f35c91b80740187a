# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from csfuse.formatter import format_compilation_unit, format_member
from csfuse.fusion import fuse_units
from csfuse.fusion.assembler import assemble
from csfuse.parser import parse_source_text

DEEP = """
namespace Outer
{
    namespace Inner
    {
        public class Deep
        {
            public void Run()
            {
                var s = @"keep
    exactly";
            }
        }
    }
}
"""


def _render(source: str, *, root: str | None = None, annotate: bool = False) -> str:
	merged = fuse_units([parse_source_text(source, "In.cs")], forced_root=root, annotate=annotate)
	return format_compilation_unit(assemble(merged))


def test_members_are_reindented_and_multiline_strings_kept():
	text = _render(DEEP, root="Outer")

	assert text == (
		"namespace Outer\n"
		"{\n"
		"    public class Deep\n"
		"    {\n"
		"        public void Run()\n"
		"        {\n"
		'            var s = @"keep\n'
		'    exactly";\n'
		"        }\n"
		"    }\n"
		"}\n"
	)


def test_formatting_is_stable_on_its_own_output():
	first = _render(DEEP, root="Outer")

	assert _render(first, root="Outer") == first


def test_directive_groups_are_separated_by_blank_lines():
	source = "extern alias L;\nusing System;\n[assembly: Foo]\nnamespace N { class A {} }\n"

	assert _render(source) == (
		"extern alias L;\n"
		"\n"
		"using System;\n"
		"\n"
		"[assembly: Foo]\n"
		"\n"
		"namespace N\n"
		"{\n"
		"    class A {}\n"
		"}\n"
	)


def test_members_are_separated_and_trivia_indented():
	source = "namespace N\n{\n    // first\n    class A {}\n    class B {}\n}\n"

	assert _render(source, annotate=True) == (
		"namespace N\n"
		"{\n"
		"    // ===== From: In.cs =====\n"
		"    // first\n"
		"    class A {}\n"
		"\n"
		"    // ===== From: In.cs =====\n"
		"    class B {}\n"
		"}\n"
	)


def test_lines_shallower_than_the_member_are_left_aligned():
	(ns,) = parse_source_text("namespace N\n{\n        class A\n    {\n  }\n}\n").root.members
	(member,) = ns.members

	assert format_member(member, 1) == ["    class A", "    {", "    }"]


def test_blank_lines_inside_members_carry_no_whitespace():
	(member,) = parse_source_text("class A\n{\n    int x;\n    \n    int y;\n}\n").root.members

	assert format_member(member, 1) == [
		"    class A",
		"    {",
		"        int x;",
		"",
		"        int y;",
		"    }",
	]


def test_conditional_directives_survive_fusion():
	source = "namespace N\n{\n#if DEBUG\n    class A {}\n#else\n    class A { int x; }\n#endif\n}\n"

	text = _render(source, annotate=True)

	assert text == (
		"namespace N\n"
		"{\n"
		"    // ===== From: In.cs =====\n"
		"    #if DEBUG\n"
		"    class A {}\n"
		"\n"
		"    // ===== From: In.cs =====\n"
		"    #else\n"
		"    class A { int x; }\n"
		"    #endif\n"
		"}\n"
	)
	assert _render(text, annotate=False) == text
