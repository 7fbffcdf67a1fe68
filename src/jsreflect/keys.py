"""
Own-key enumeration filtered by enumerability.

The object's complete key list is requested exactly once and treated as a
snapshot. Each candidate key is then checked individually, because looking up
a descriptor can run proxy traps that add, delete or reconfigure properties of
the object being enumerated. A key that has disappeared by the time it is
visited is skipped. Keys are never re-listed, so the result is always a
subsequence of the snapshot.

In ``FilterMode.ALL`` no descriptor is fetched at all.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from jsreflect.coerce import to_object
from jsreflect.errors import ValidationError
from jsreflect.objects import JSObject
from jsreflect.values import PropertyKey, Symbol, Undefined, is_nullish


class FilterMode(Enum):
	ALL = "all"
	ENUMERABLE_ONLY = "enumerable"
	NON_ENUMERABLE_ONLY = "non-enumerable"

	def accepts(self, enumerable: bool | None) -> bool:
		if self is FilterMode.ALL:
			return True
		if self is FilterMode.ENUMERABLE_ONLY:
			return enumerable is True
		return enumerable is False


def filter_mode(options: Any = None) -> FilterMode:
	"""Resolve the ``{enumerable: true | false | "all"}`` options bag.

	Absent options, or options without an ``enumerable`` value, select
	``FilterMode.ALL``. Any other value raises ValidationError.
	"""
	if is_nullish(options):
		return FilterMode.ALL
	if isinstance(options, FilterMode):
		return options
	if isinstance(options, JSObject):
		enumerable = options.get("enumerable")
	elif isinstance(options, Mapping):
		enumerable = options.get("enumerable", Undefined)
	else:
		raise ValidationError(f"options must be an object, got {options!r}")

	if enumerable is Undefined or (isinstance(enumerable, str) and enumerable == "all"):
		return FilterMode.ALL
	if enumerable is True:
		return FilterMode.ENUMERABLE_ONLY
	if enumerable is False:
		return FilterMode.NON_ENUMERABLE_ONLY
	raise ValidationError(
		f"invalid enumerable option: {enumerable!r} (expected true, false or 'all')"
	)


def _filter_own_keys(
	obj: JSObject, mode: FilterMode, kind: type[str] | type[Symbol]
) -> list[Any]:
	keys = obj.own_property_keys()
	result: list[PropertyKey] = []
	for key in keys:
		if not isinstance(key, kind):
			continue
		if mode is FilterMode.ALL:
			result.append(key)
			continue
		desc = obj.get_own_property(key)
		if desc is None:
			continue
		if mode.accepts(desc.enumerable):
			result.append(key)
	return result


def select_symbols(value: Any, options: Any = None) -> list[Symbol]:
	"""The own symbol keys of ``value`` that pass the options' enumerability filter."""
	obj = to_object(value)
	mode = filter_mode(options)
	return _filter_own_keys(obj, mode, Symbol)


def select_names(value: Any, options: Any = None) -> list[str]:
	"""Like select_symbols, for string keys."""
	obj = to_object(value)
	mode = filter_mode(options)
	return _filter_own_keys(obj, mode, str)


__all__ = ["FilterMode", "filter_mode", "select_names", "select_symbols"]
