# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from csfuse.cli import _build_parser, build_options
from csfuse.config import FuseConfig, load_config
from csfuse.errors import ConfigError
from csfuse.sources import DEFAULT_GENERATED_SUFFIXES


def _config(tmp_path: Path, data) -> Path:
	path = tmp_path / "conf" / "csfuse.json"
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(json.dumps(data), encoding="utf-8")
	return path


def test_load_full_config(tmp_path: Path) -> None:
	path = _config(
		tmp_path,
		{
			"root": "Acme",
			"output": "out/Acme.cs",
			"recursive": False,
			"exclude_generated": False,
			"add_file_headers": False,
			"std_prefix": "Unity",
			"generated_suffixes": [".gen.cs"],
		},
	)

	cfg = load_config(path)

	assert cfg == FuseConfig(
		root="Acme",
		output=path.parent / "out" / "Acme.cs",
		recursive=False,
		exclude_generated=False,
		add_file_headers=False,
		std_prefix="Unity",
		generated_suffixes=(".gen.cs",),
	)


def test_absolute_output_is_kept(tmp_path: Path) -> None:
	target = tmp_path / "elsewhere" / "X.cs"

	assert load_config(_config(tmp_path, {"output": str(target)})).output == target


def test_empty_object_sets_nothing(tmp_path: Path) -> None:
	assert load_config(_config(tmp_path, {})) == FuseConfig()


@pytest.mark.parametrize(
	"data, fragment",
	[
		([1, 2], "must be a JSON object"),
		({"rooot": "X"}, "unknown config key(s): rooot"),
		({"recursive": "yes"}, "'recursive' must be a boolean"),
		({"root": ""}, "'root' must be a non-empty string"),
		({"std_prefix": 1}, "'std_prefix' must be a non-empty string"),
		({"generated_suffixes": ".g.cs"}, "'generated_suffixes' must be a list"),
		({"generated_suffixes": [".g.cs", ""]}, "'generated_suffixes' must be a list"),
	],
)
def test_invalid_config_values(tmp_path: Path, data, fragment: str) -> None:
	with pytest.raises(ConfigError) as excinfo:
		load_config(_config(tmp_path, data))

	assert fragment in excinfo.value.message
	assert excinfo.value.exit_code == 2


def test_invalid_json_is_pinned(tmp_path: Path) -> None:
	path = tmp_path / "broken.json"
	path.write_text('{\n  "root": "A",\n  oops\n}\n', encoding="utf-8")

	with pytest.raises(ConfigError) as excinfo:
		load_config(path)

	assert excinfo.value.span.line == 3
	assert "invalid JSON" in excinfo.value.message


def test_missing_config_file(tmp_path: Path) -> None:
	with pytest.raises(ConfigError) as excinfo:
		load_config(tmp_path / "absent.json")

	assert excinfo.value.reason_code == "config"


def test_precedence_defaults_config_cli(tmp_path: Path) -> None:
	parser = _build_parser()
	cfg = FuseConfig(root="Cfg", recursive=False, std_prefix="Unity", generated_suffixes=(".x.cs",))

	opts = build_options(parser.parse_args([str(tmp_path)]), None)
	assert opts.root is None and opts.recursive and opts.std_prefix == "System"
	assert opts.generated_suffixes == DEFAULT_GENERATED_SUFFIXES

	opts = build_options(parser.parse_args([str(tmp_path)]), cfg)
	assert (opts.root, opts.recursive, opts.std_prefix) == ("Cfg", False, "Unity")
	assert opts.generated_suffixes == (".x.cs",)

	opts = build_options(parser.parse_args([str(tmp_path), "--root", "Cli", "--std-prefix", "Mono"]), cfg)
	assert (opts.root, opts.recursive, opts.std_prefix) == ("Cli", False, "Mono")
