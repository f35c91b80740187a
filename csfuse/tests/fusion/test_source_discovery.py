# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from csfuse.errors import FuseIOError, InputNotFound
from csfuse.sources import discover_source_files, is_generated_file, read_source_file


def _touch(path: Path) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text("class X {}\n", encoding="utf-8")


def test_files_before_subdirectories_in_ordinal_order(tmp_path: Path) -> None:
	for rel in ("b.cs", "A.cs", "z/Z.cs", "a/m.cs", "a/b/deep.cs", "a/a.cs", "notes.txt"):
		_touch(tmp_path / rel)

	found = [p.relative_to(tmp_path).as_posix() for p in discover_source_files(tmp_path)]

	assert found == ["A.cs", "b.cs", "a/a.cs", "a/m.cs", "a/b/deep.cs", "z/Z.cs"]


def test_non_recursive(tmp_path: Path) -> None:
	_touch(tmp_path / "Top.cs")
	_touch(tmp_path / "sub" / "Nested.cs")

	assert discover_source_files(tmp_path, recursive=False) == [tmp_path / "Top.cs"]


@pytest.mark.parametrize(
	"name, generated",
	[
		("View.g.cs", True),
		("View.G.CS", True),
		("View.g.i.cs", True),
		("Form1.Designer.cs", True),
		("Project.AssemblyInfo.cs", True),
		("AssemblyInfo.cs", True),
		("net8.0.AssemblyAttributes.cs", True),
		("Program.cs", False),
		("Designer.cs", False),
		("MyAssemblyInfo.cs", False),
	],
)
def test_generated_file_names(name: str, generated: bool) -> None:
	assert is_generated_file(Path(name)) is generated


def test_custom_suffixes_and_output_exclusion(tmp_path: Path) -> None:
	_touch(tmp_path / "Keep.cs")
	_touch(tmp_path / "Skip.gen.cs")
	_touch(tmp_path / "Merged.cs")

	found = discover_source_files(tmp_path, generated_suffixes=(".gen.cs",), output_file=tmp_path / "Merged.cs")

	assert found == [tmp_path / "Keep.cs"]


def test_missing_root(tmp_path: Path) -> None:
	with pytest.raises(InputNotFound):
		discover_source_files(tmp_path / "absent")


def test_unreadable_file_is_io_error(tmp_path: Path) -> None:
	with pytest.raises(FuseIOError) as excinfo:
		read_source_file(tmp_path / "ghost.cs")

	assert excinfo.value.span.file == str(tmp_path / "ghost.cs")
