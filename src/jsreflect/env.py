"""Environment configuration.

Values are read from ``os.environ`` on every access so they can be changed at
runtime (and patched in tests) without re-importing.
"""

from __future__ import annotations

import os
from typing import Final

ENV_JSREFLECT_TRACE_TRAPS: Final = "JSREFLECT_TRACE_TRAPS"

_FALSY: Final = frozenset({"0", "false", "False"})


def _flag(name: str) -> bool:
	value = os.environ.get(name)
	if value is None:
		return False
	return value not in _FALSY


class Env:
	@property
	def trace_traps(self) -> bool:
		"""Log every proxy trap invocation at DEBUG level."""
		return _flag(ENV_JSREFLECT_TRACE_TRAPS)


env = Env()

__all__ = ["ENV_JSREFLECT_TRACE_TRAPS", "Env", "env"]
