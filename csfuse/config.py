# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JSON configuration for fusion runs.

A config file is a JSON object; every key is optional:

  {
    "root": "Acme",
    "output": "out/Acme.cs",
    "recursive": true,
    "exclude_generated": true,
    "add_file_headers": true,
    "std_prefix": "System",
    "generated_suffixes": [".g.cs", ".designer.cs"]
  }

Relative `output` paths are resolved against the config file's directory.
Command-line flags override config values, which override the defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from csfuse.core.span import Span
from csfuse.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FuseConfig:
	"""Values read from a config file; None means "not set"."""

	root: Optional[str] = None
	output: Optional[Path] = None
	recursive: Optional[bool] = None
	exclude_generated: Optional[bool] = None
	add_file_headers: Optional[bool] = None
	std_prefix: Optional[str] = None
	generated_suffixes: Optional[Tuple[str, ...]] = None


_BOOL_KEYS = ("recursive", "exclude_generated", "add_file_headers")
_STR_KEYS = ("root", "output", "std_prefix")
_KNOWN_KEYS = frozenset(_BOOL_KEYS + _STR_KEYS + ("generated_suffixes",))


def load_config(path: Path) -> FuseConfig:
	try:
		text = path.read_text(encoding="utf-8")
	except OSError as err:
		raise ConfigError(f"cannot read config file: {err.strerror or err}", span=Span(file=str(path))) from err
	try:
		data = json.loads(text)
	except json.JSONDecodeError as err:
		raise ConfigError(
			f"invalid JSON: {err.msg}",
			span=Span(file=str(path), line=err.lineno, column=err.colno),
		) from err
	config = parse_config(data, path=path)
	logger.debug("loaded config from %s: %s", path, config)
	return config


def parse_config(data: Any, *, path: Path) -> FuseConfig:
	span = Span(file=str(path))
	if not isinstance(data, Mapping):
		raise ConfigError("config must be a JSON object", span=span)
	unknown = sorted(set(data) - _KNOWN_KEYS)
	if unknown:
		raise ConfigError(f"unknown config key(s): {', '.join(unknown)}", span=span)

	for key in _BOOL_KEYS:
		if key in data and not isinstance(data[key], bool):
			raise ConfigError(f"'{key}' must be a boolean", span=span)
	for key in _STR_KEYS:
		if key in data and not (isinstance(data[key], str) and data[key].strip()):
			raise ConfigError(f"'{key}' must be a non-empty string", span=span)

	suffixes = data.get("generated_suffixes")
	if suffixes is not None:
		if not isinstance(suffixes, list) or not all(isinstance(s, str) and s for s in suffixes):
			raise ConfigError("'generated_suffixes' must be a list of non-empty strings", span=span)
		suffixes = tuple(suffixes)

	output = data.get("output")
	if output is not None:
		output = Path(output)
		if not output.is_absolute():
			output = path.parent / output

	return FuseConfig(
		root=data.get("root"),
		output=output,
		recursive=data.get("recursive"),
		exclude_generated=data.get("exclude_generated"),
		add_file_headers=data.get("add_file_headers"),
		std_prefix=data.get("std_prefix"),
		generated_suffixes=suffixes,
	)


__all__ = ["FuseConfig", "load_config", "parse_config"]
