# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from .diagnostics import Diagnostic
from .span import Span

__all__ = ["Diagnostic", "Span"]
