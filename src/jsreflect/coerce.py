from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsreflect.errors import ConversionError, JSTypeError
from jsreflect.objects import (
	BooleanObject,
	JSObject,
	MappingObject,
	NumberObject,
	StringObject,
	SymbolObject,
)
from jsreflect.values import Symbol, is_nullish


def to_object(value: Any) -> JSObject:
	"""ToObject: objects pass through, primitives are boxed into a new wrapper.

	A Python mapping is viewed in place through a ``MappingObject``.
	"""
	if isinstance(value, JSObject):
		return value
	if is_nullish(value):
		raise ConversionError("Cannot convert undefined or null to object")
	# bool before int: bool is an int subclass
	if isinstance(value, bool):
		return BooleanObject(value)
	if isinstance(value, (int, float)):
		return NumberObject(value)
	if isinstance(value, str):
		return StringObject(value)
	if isinstance(value, Symbol):
		return SymbolObject(value)
	if isinstance(value, Mapping):
		return MappingObject(value)
	raise JSTypeError(
		f"Cannot convert {type(value).__name__} to object; wrap it with OrdinaryObject.from_mapping()"
	)


__all__ = ["to_object"]
