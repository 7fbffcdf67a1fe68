"""
JavaScript Object builtins.

Usage:
    from jsreflect.object import Object
    Object.getOwnPropertySymbols(obj)                        # every own symbol key
    Object.getOwnPropertySymbols(obj, {"enumerable": False}) # only non-enumerable ones
    Object.symbols(obj)                                      # only enumerable ones

    # Or the snake_case functions:
    from jsreflect.object import get_own_property_symbols, symbols
    get_own_property_symbols(obj, {"enumerable": True})
    symbols(obj)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jsreflect.coerce import to_object
from jsreflect.descriptor import (
	PropertyDescriptor,
	from_property_descriptor,
	to_property_descriptor,
)
from jsreflect.errors import JSTypeError
from jsreflect.keys import FilterMode, select_names, select_symbols
from jsreflect.objects import JSObject, OrdinaryObject
from jsreflect.values import (
	PropertyKey,
	Symbol,
	UndefinedType,
	is_nullish,
	to_property_key,
)


def get_own_property_symbols(value: Any, options: Any = None) -> list[Symbol]:
	"""Object.getOwnPropertySymbols(value, options?)

	Without options (or without an ``enumerable`` entry) every own symbol key
	is returned. ``{"enumerable": True}`` / ``{"enumerable": False}`` keep only
	enumerable / non-enumerable ones.
	"""
	return select_symbols(value, options)


def symbols(value: Any) -> list[Symbol]:
	"""Object.symbols(value): the own enumerable symbol keys."""
	return select_symbols(value, FilterMode.ENUMERABLE_ONLY)


def get_own_property_names(value: Any, options: Any = None) -> list[str]:
	return select_names(value, options)


def keys(value: Any) -> list[str]:
	return select_names(value, FilterMode.ENUMERABLE_ONLY)


def get_own_property_descriptor(
	value: Any, key: Any
) -> OrdinaryObject | UndefinedType:
	obj = to_object(value)
	return from_property_descriptor(obj.get_own_property(to_property_key(key)))


def define_property(obj: Any, key: Any, attributes: Any) -> JSObject:
	if not isinstance(obj, JSObject):
		raise JSTypeError("Object.defineProperty called on non-object")
	prop = to_property_key(key)
	desc = to_property_descriptor(attributes)
	obj.define_property_or_throw(prop, desc)
	return obj


def define_properties(obj: Any, properties: Any) -> JSObject:
	if not isinstance(obj, JSObject):
		raise JSTypeError("Object.defineProperties called on non-object")
	descriptors: list[tuple[PropertyKey, PropertyDescriptor]] = []
	if isinstance(properties, Mapping):
		for key, attributes in properties.items():
			descriptors.append((to_property_key(key), to_property_descriptor(attributes)))
	else:
		props = to_object(properties)
		for key in props.own_property_keys():
			prop_desc = props.get_own_property(key)
			if prop_desc is not None and prop_desc.enumerable:
				descriptors.append((key, to_property_descriptor(props.get(key))))
	for key, desc in descriptors:
		obj.define_property_or_throw(key, desc)
	return obj


def create(proto: Any, properties: Any = None) -> OrdinaryObject:
	if proto is not None and not isinstance(proto, JSObject):
		raise JSTypeError(f"Object prototype may only be an Object or null: {proto!r}")
	obj = OrdinaryObject(proto)
	if not is_nullish(properties):
		define_properties(obj, properties)
	return obj


def is_extensible(value: Any) -> bool:
	if not isinstance(value, JSObject):
		return False
	return value.is_extensible()


def prevent_extensions(value: Any) -> Any:
	if isinstance(value, JSObject) and not value.prevent_extensions():
		raise JSTypeError("Cannot prevent extensions")
	return value


class Object:
	"""JavaScript Object namespace."""

	create = staticmethod(create)
	defineProperties = staticmethod(define_properties)
	defineProperty = staticmethod(define_property)
	getOwnPropertyDescriptor = staticmethod(get_own_property_descriptor)
	getOwnPropertyNames = staticmethod(get_own_property_names)
	getOwnPropertySymbols = staticmethod(get_own_property_symbols)
	isExtensible = staticmethod(is_extensible)
	keys = staticmethod(keys)
	preventExtensions = staticmethod(prevent_extensions)
	symbols = staticmethod(symbols)


__all__ = [
	"Object",
	"create",
	"define_properties",
	"define_property",
	"get_own_property_descriptor",
	"get_own_property_names",
	"get_own_property_symbols",
	"is_extensible",
	"keys",
	"prevent_extensions",
	"symbols",
]
