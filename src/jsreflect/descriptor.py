"""Property descriptors and the rules for applying them.

A ``PropertyDescriptor`` doubles as the stored attribute record of a property
(where every field is present) and as a partial update passed to
``define_own_property`` (where any field may be absent).
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Final

from jsreflect.errors import JSTypeError
from jsreflect.values import (
	PropertyKey,
	Undefined,
	UndefinedType,
	same_value,
	to_boolean,
)

if TYPE_CHECKING:
	from jsreflect.objects import OrdinaryObject

MISSING: Any = object()

# ToPropertyDescriptor reads the fields in this order
DESCRIPTOR_FIELDS: Final = (
	"enumerable",
	"configurable",
	"value",
	"writable",
	"get",
	"set",
)


@dataclass(slots=True)
class PropertyDescriptor:
	"""The attributes of a property.

	Attributes:
		value: Data property value, or MISSING when absent.
		writable: Data property writability, or None when absent.
		get: Accessor getter, called as ``get(this)``. ``Undefined`` means no
			getter, MISSING means the field is absent.
		set: Accessor setter, called as ``set(this, value)``.
		enumerable: None when absent.
		configurable: None when absent.
	"""

	value: Any = MISSING
	writable: bool | None = None
	get: Any = MISSING
	set: Any = MISSING
	enumerable: bool | None = None
	configurable: bool | None = None

	def __post_init__(self) -> None:
		if self.is_accessor and self.is_data:
			raise JSTypeError(
				"Invalid property descriptor. Cannot both specify accessors and a value or writable attribute"
			)
		for name in ("get", "set"):
			fn = getattr(self, name)
			if fn is not MISSING and fn is not Undefined and not callable(fn):
				label = "Getter" if name == "get" else "Setter"
				raise JSTypeError(f"{label} must be a function: {fn!r}")

	@classmethod
	def data(
		cls,
		value: Any,
		*,
		writable: bool = True,
		enumerable: bool = True,
		configurable: bool = True,
	) -> PropertyDescriptor:
		return cls(
			value=value,
			writable=writable,
			enumerable=enumerable,
			configurable=configurable,
		)

	@classmethod
	def accessor(
		cls,
		get: Any = Undefined,
		set: Any = Undefined,
		*,
		enumerable: bool = True,
		configurable: bool = True,
	) -> PropertyDescriptor:
		return cls(get=get, set=set, enumerable=enumerable, configurable=configurable)

	@property
	def is_accessor(self) -> bool:
		return self.get is not MISSING or self.set is not MISSING

	@property
	def is_data(self) -> bool:
		return self.value is not MISSING or self.writable is not None

	@property
	def is_generic(self) -> bool:
		return not self.is_accessor and not self.is_data

	@property
	def is_empty(self) -> bool:
		return self.is_generic and self.enumerable is None and self.configurable is None

	def complete(self) -> PropertyDescriptor:
		"""CompletePropertyDescriptor, returning a new descriptor."""
		if self.is_accessor:
			return PropertyDescriptor(
				get=Undefined if self.get is MISSING else self.get,
				set=Undefined if self.set is MISSING else self.set,
				enumerable=bool(self.enumerable),
				configurable=bool(self.configurable),
			)
		return PropertyDescriptor(
			value=Undefined if self.value is MISSING else self.value,
			writable=bool(self.writable),
			enumerable=bool(self.enumerable),
			configurable=bool(self.configurable),
		)


def to_property_descriptor(obj: Any) -> PropertyDescriptor:
	"""ToPropertyDescriptor.

	Accepts a PropertyDescriptor, a Mapping of field names, or a JSObject. JS
	objects are read through ``has_property``/``get``, so getters and proxy
	traps on the attributes object run, in the order of DESCRIPTOR_FIELDS.
	"""
	from jsreflect.objects import JSObject

	if isinstance(obj, PropertyDescriptor):
		return replace(obj)

	fields: dict[str, Any] = {}
	if isinstance(obj, JSObject):
		for name in DESCRIPTOR_FIELDS:
			if obj.has_property(name):
				fields[name] = obj.get(name)
	elif isinstance(obj, Mapping):
		for name in DESCRIPTOR_FIELDS:
			if name in obj:
				fields[name] = obj[name]
	else:
		raise JSTypeError(f"Property description must be an object: {obj!r}")

	for flag in ("enumerable", "configurable", "writable"):
		if flag in fields:
			fields[flag] = to_boolean(fields[flag])
	return PropertyDescriptor(**fields)


def from_property_descriptor(
	desc: PropertyDescriptor | None,
) -> OrdinaryObject | UndefinedType:
	"""FromPropertyDescriptor: a fresh plain object listing the present fields."""
	from jsreflect.objects import OrdinaryObject

	if desc is None:
		return Undefined
	result = OrdinaryObject()
	for name in ("value", "writable", "get", "set", "enumerable", "configurable"):
		field_value = getattr(desc, name)
		if field_value is MISSING:
			continue
		if field_value is None and name in ("writable", "enumerable", "configurable"):
			continue
		result.create_data_property(name, field_value)
	return result


def validate_and_apply(
	props: MutableMapping[PropertyKey, PropertyDescriptor] | None,
	key: PropertyKey,
	extensible: bool,
	desc: PropertyDescriptor,
	current: PropertyDescriptor | None,
) -> bool:
	"""ValidateAndApplyPropertyDescriptor.

	With ``props=None`` only the validation half runs, which is how
	IsCompatiblePropertyDescriptor is expressed.
	"""
	if current is None:
		if not extensible:
			return False
		if props is not None:
			props[key] = desc.complete()
		return True

	if desc.is_empty:
		return True

	if current.configurable is False:
		if desc.configurable is True:
			return False
		if desc.enumerable is not None and desc.enumerable != current.enumerable:
			return False
		if not desc.is_generic and desc.is_accessor != current.is_accessor:
			return False
		if current.is_accessor:
			if desc.get is not MISSING and not same_value(desc.get, current.get):
				return False
			if desc.set is not MISSING and not same_value(desc.set, current.set):
				return False
		elif current.writable is False:
			if desc.writable is True:
				return False
			if desc.value is not MISSING and not same_value(desc.value, current.value):
				return False

	if props is None:
		return True

	configurable = current.configurable if desc.configurable is None else desc.configurable
	enumerable = current.enumerable if desc.enumerable is None else desc.enumerable
	if current.is_data and desc.is_accessor:
		updated = PropertyDescriptor(
			get=Undefined if desc.get is MISSING else desc.get,
			set=Undefined if desc.set is MISSING else desc.set,
			enumerable=enumerable,
			configurable=configurable,
		)
	elif current.is_accessor and desc.is_data:
		updated = PropertyDescriptor(
			value=Undefined if desc.value is MISSING else desc.value,
			writable=bool(desc.writable),
			enumerable=enumerable,
			configurable=configurable,
		)
	else:
		updated = replace(current, enumerable=enumerable, configurable=configurable)
		for name in ("value", "get", "set"):
			if getattr(desc, name) is not MISSING:
				setattr(updated, name, getattr(desc, name))
		if desc.writable is not None:
			updated.writable = desc.writable
	props[key] = updated
	return True


def is_compatible_property_descriptor(
	extensible: bool,
	desc: PropertyDescriptor,
	current: PropertyDescriptor | None,
) -> bool:
	return validate_and_apply(None, "", extensible, desc, current)


__all__ = [
	"DESCRIPTOR_FIELDS",
	"MISSING",
	"PropertyDescriptor",
	"from_property_descriptor",
	"is_compatible_property_descriptor",
	"to_property_descriptor",
	"validate_and_apply",
]
