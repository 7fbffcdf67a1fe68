"""The object capability interface and its ordinary implementations.

``JSObject`` exposes the internal methods of a JavaScript object. Everything
that inspects objects (the key enumerator, descriptor conversion, the
``Object`` entry points) is written against this interface only, so ordinary
objects, wrapper objects and proxies are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, MutableMapping
from dataclasses import replace
from typing import Any, cast

from typing_extensions import override

from jsreflect.descriptor import (
	MISSING,
	PropertyDescriptor,
	is_compatible_property_descriptor,
	validate_and_apply,
)
from jsreflect.errors import JSTypeError
from jsreflect.values import (
	PropertyKey,
	Symbol,
	Undefined,
	describe_key,
	is_array_index,
	to_property_key,
)


class JSObject(ABC):
	"""An object as seen through its internal methods."""

	__slots__: tuple[str, ...] = ()

	@abstractmethod
	def own_property_keys(self) -> list[PropertyKey]:
		"""[[OwnPropertyKeys]]: a fresh list of every own key, in property order."""
		...

	@abstractmethod
	def get_own_property(self, key: PropertyKey) -> PropertyDescriptor | None:
		"""[[GetOwnProperty]]: the property's descriptor, or None if absent."""
		...

	@abstractmethod
	def define_own_property(self, key: PropertyKey, desc: PropertyDescriptor) -> bool: ...

	@abstractmethod
	def delete(self, key: PropertyKey) -> bool: ...

	@abstractmethod
	def is_extensible(self) -> bool: ...

	@abstractmethod
	def prevent_extensions(self) -> bool: ...

	@abstractmethod
	def get_prototype_of(self) -> JSObject | None: ...

	def has_property(self, key: PropertyKey) -> bool:
		if self.get_own_property(key) is not None:
			return True
		parent = self.get_prototype_of()
		if parent is None:
			return False
		return parent.has_property(key)

	def get(self, key: PropertyKey, receiver: Any = MISSING) -> Any:
		if receiver is MISSING:
			receiver = self
		desc = self.get_own_property(key)
		if desc is None:
			parent = self.get_prototype_of()
			if parent is None:
				return Undefined
			return parent.get(key, receiver)
		if desc.is_data:
			return desc.value
		if desc.get is Undefined:
			return Undefined
		return desc.get(receiver)

	def create_data_property(self, key: PropertyKey, value: Any) -> bool:
		return self.define_own_property(key, PropertyDescriptor.data(value))

	def define_property_or_throw(self, key: PropertyKey, desc: PropertyDescriptor) -> None:
		if not self.define_own_property(key, desc):
			raise JSTypeError(f"Cannot redefine property: {describe_key(key)}")

	def __getitem__(self, key: Any) -> Any:
		return self.get(to_property_key(key))


def _in_property_order(keys: Iterable[PropertyKey]) -> list[PropertyKey]:
	"""Array indices ascending, then other strings, then symbols, each in creation order."""
	indices: list[str] = []
	strings: list[str] = []
	symbols: list[Symbol] = []
	for key in keys:
		if isinstance(key, Symbol):
			symbols.append(key)
		elif is_array_index(key):
			indices.append(key)
		else:
			strings.append(key)
	indices.sort(key=int)
	return [*indices, *strings, *symbols]


class OrdinaryObject(JSObject):
	"""An object with default, storage-backed internal methods."""

	__slots__: tuple[str, ...] = ("_props", "_proto", "_extensible")
	_props: dict[PropertyKey, PropertyDescriptor]
	_proto: JSObject | None
	_extensible: bool

	def __init__(self, proto: JSObject | None = None) -> None:
		self._props = {}
		self._proto = proto
		self._extensible = True

	@classmethod
	def from_mapping(
		cls,
		mapping: Mapping[Any, Any] | Iterable[tuple[Any, Any]],
		proto: JSObject | None = None,
	) -> OrdinaryObject:
		"""Build an object whose data properties come from ``mapping``."""
		obj = cls(proto)
		items = mapping.items() if isinstance(mapping, Mapping) else mapping
		for key, value in items:
			obj.create_data_property(to_property_key(key), value)
		return obj

	@override
	def own_property_keys(self) -> list[PropertyKey]:
		return _in_property_order(self._props)

	@override
	def get_own_property(self, key: PropertyKey) -> PropertyDescriptor | None:
		desc = self._props.get(key)
		if desc is None:
			return None
		return replace(desc)

	@override
	def define_own_property(self, key: PropertyKey, desc: PropertyDescriptor) -> bool:
		return validate_and_apply(
			self._props, key, self._extensible, desc, self._props.get(key)
		)

	@override
	def delete(self, key: PropertyKey) -> bool:
		desc = self._props.get(key)
		if desc is None:
			return True
		if desc.configurable:
			del self._props[key]
			return True
		return False

	@override
	def is_extensible(self) -> bool:
		return self._extensible

	@override
	def prevent_extensions(self) -> bool:
		self._extensible = False
		return True

	@override
	def get_prototype_of(self) -> JSObject | None:
		return self._proto

	def set_prototype_of(self, proto: JSObject | None) -> bool:
		if proto is self._proto:
			return True
		if not self._extensible:
			return False
		cursor = proto
		while cursor is not None:
			if cursor is self:
				return False
			# Proxies may compute their prototype, so stop walking there
			if not isinstance(cursor, OrdinaryObject):
				break
			cursor = cursor.get_prototype_of()
		self._proto = proto
		return True

	def __setitem__(self, key: Any, value: Any) -> None:
		"""Strict-mode assignment to an own property."""
		key = to_property_key(key)
		current = self.get_own_property(key)
		if current is None:
			if not self.is_extensible():
				raise JSTypeError(
					f"Cannot add property {describe_key(key)}, object is not extensible"
				)
			self.create_data_property(key, value)
			return
		if current.is_accessor:
			if current.set is Undefined:
				raise JSTypeError(
					f"Cannot set property {describe_key(key)} which has only a getter"
				)
			current.set(self, value)
			return
		if not current.writable:
			raise JSTypeError(
				f"Cannot assign to read only property {describe_key(key)} of object"
			)
		self.define_own_property(key, PropertyDescriptor(value=value))

	@override
	def __repr__(self) -> str:
		inner = ", ".join(
			f"{describe_key(key)}: {desc.value!r}" if desc.is_data else f"{describe_key(key)}: [Accessor]"
			for key, desc in self._props.items()
		)
		return f"{type(self).__name__}({{{inner}}})"


class MappingObject(JSObject):
	"""A live view of a Python mapping as a plain object.

	Every entry is an own, enumerable data property, and changes to the mapping
	show up immediately. Entries of a ``MutableMapping`` are writable and
	configurable, and defining or deleting properties writes through to it. A
	read-only ``Mapping`` behaves like a frozen object. Non-string keys go
	through ``to_property_key``, so ``{1: x}`` has the property ``"1"``. The
	view has no prototype.
	"""

	__slots__: tuple[str, ...] = ("mapping",)
	mapping: Mapping[Any, Any]

	def __init__(self, mapping: Mapping[Any, Any]) -> None:
		self.mapping = mapping

	@property
	def _mutable(self) -> bool:
		return isinstance(self.mapping, MutableMapping)

	def _entry_key(self, key: PropertyKey) -> Any:
		"""The mapping key that holds property ``key``, or MISSING."""
		if key in self.mapping:
			return key
		for entry in self.mapping:
			if not isinstance(entry, (str, Symbol)) and to_property_key(entry) == key:
				return entry
		return MISSING

	@override
	def own_property_keys(self) -> list[PropertyKey]:
		# {1: a, "1": b} holds one property
		keys = dict.fromkeys(to_property_key(entry) for entry in self.mapping)
		return _in_property_order(keys)

	@override
	def get_own_property(self, key: PropertyKey) -> PropertyDescriptor | None:
		entry = self._entry_key(key)
		if entry is MISSING:
			return None
		mutable = self._mutable
		return PropertyDescriptor.data(
			self.mapping[entry], writable=mutable, enumerable=True, configurable=mutable
		)

	@override
	def define_own_property(self, key: PropertyKey, desc: PropertyDescriptor) -> bool:
		current = self.get_own_property(key)
		applied: dict[PropertyKey, PropertyDescriptor] = {}
		if not validate_and_apply(applied, key, self._mutable, desc, current):
			return False
		updated = applied.get(key)
		if updated is None or updated == current:
			return True
		# Only plain writable entries can be stored in a mapping
		if not (
			updated.is_data
			and updated.writable
			and updated.enumerable
			and updated.configurable
		):
			return False
		entry = self._entry_key(key)
		mapping = cast(MutableMapping[Any, Any], self.mapping)
		mapping[key if entry is MISSING else entry] = updated.value
		return True

	@override
	def delete(self, key: PropertyKey) -> bool:
		entry = self._entry_key(key)
		if entry is MISSING:
			return True
		if not self._mutable:
			return False
		del cast(MutableMapping[Any, Any], self.mapping)[entry]
		return True

	@override
	def is_extensible(self) -> bool:
		return self._mutable

	@override
	def prevent_extensions(self) -> bool:
		return not self._mutable

	@override
	def get_prototype_of(self) -> JSObject | None:
		return None

	@override
	def __repr__(self) -> str:
		return f"{type(self).__name__}({self.mapping!r})"


class PrimitiveWrapper(OrdinaryObject):
	"""An object boxing a primitive, as produced by ToObject."""

	__slots__: tuple[str, ...] = ("primitive",)
	primitive: Any

	def __init__(self, primitive: Any, proto: JSObject | None = None) -> None:
		super().__init__(proto)
		self.primitive = primitive


class BooleanObject(PrimitiveWrapper):
	__slots__: tuple[str, ...] = ()


class NumberObject(PrimitiveWrapper):
	__slots__: tuple[str, ...] = ()


class SymbolObject(PrimitiveWrapper):
	__slots__: tuple[str, ...] = ()


class StringObject(PrimitiveWrapper):
	"""String exotic object.

	Each UTF-16 code unit of the string is an own, enumerable, read-only
	property keyed by its index. Those keys come before every other key.
	"""

	__slots__: tuple[str, ...] = ("_units",)
	_units: bytes

	def __init__(self, primitive: str, proto: JSObject | None = None) -> None:
		super().__init__(primitive, proto)
		self._units = primitive.encode("utf-16-le", "surrogatepass")
		super().define_own_property(
			"length",
			PropertyDescriptor.data(
				len(self), writable=False, enumerable=False, configurable=False
			),
		)

	def __len__(self) -> int:
		return len(self._units) // 2

	def _string_property(self, key: PropertyKey) -> PropertyDescriptor | None:
		if not isinstance(key, str) or not is_array_index(key):
			return None
		index = int(key)
		if index >= len(self):
			return None
		unit = self._units[2 * index : 2 * index + 2].decode("utf-16-le", "surrogatepass")
		return PropertyDescriptor.data(
			unit, writable=False, enumerable=True, configurable=False
		)

	@override
	def own_property_keys(self) -> list[PropertyKey]:
		keys = super().own_property_keys()
		return [*(str(i) for i in range(len(self))), *keys]

	@override
	def get_own_property(self, key: PropertyKey) -> PropertyDescriptor | None:
		desc = super().get_own_property(key)
		if desc is not None:
			return desc
		return self._string_property(key)

	@override
	def define_own_property(self, key: PropertyKey, desc: PropertyDescriptor) -> bool:
		string_desc = self._string_property(key)
		if string_desc is not None:
			return is_compatible_property_descriptor(
				self.is_extensible(), desc, string_desc
			)
		return super().define_own_property(key, desc)

	@override
	def delete(self, key: PropertyKey) -> bool:
		if self._string_property(key) is not None:
			return False
		return super().delete(key)


__all__ = [
	"BooleanObject",
	"JSObject",
	"MappingObject",
	"NumberObject",
	"OrdinaryObject",
	"PrimitiveWrapper",
	"StringObject",
	"SymbolObject",
]
