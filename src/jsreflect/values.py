"""Primitive values of the object model.

Python values stand in for JavaScript primitives directly: ``bool`` for
booleans, ``int``/``float`` for numbers, ``str`` for strings and ``None`` for
``null``. ``undefined`` and symbols have no Python counterpart and are defined
here.
"""

from __future__ import annotations

import math
from typing import Any, Final, TypeAlias, final

from typing_extensions import override

from jsreflect.errors import JSTypeError

MAX_ARRAY_INDEX: Final = 2**32 - 2


@final
class _UndefinedType:
	__slots__: tuple[str, ...] = ()
	_instance: _UndefinedType | None = None

	def __new__(cls) -> _UndefinedType:
		if cls._instance is None:
			cls._instance = super().__new__(cls)
		return cls._instance

	@override
	def __repr__(self) -> str:
		return "undefined"

	def __bool__(self) -> bool:
		return False

	def __reduce__(self) -> str:
		return "Undefined"


Undefined: Final = _UndefinedType()
UndefinedType: TypeAlias = _UndefinedType


@final
class Symbol:
	"""A JavaScript symbol.

	Symbols compare by identity. Two symbols created with the same
	description are distinct; use ``Symbol.for_`` for registry-shared symbols.
	"""

	__slots__: Final = ("description",)
	description: str | None

	_registry: dict[str, Symbol] = {}

	def __init__(self, description: str | None = None) -> None:
		self.description = description

	@classmethod
	def for_(cls, key: str) -> Symbol:
		"""Symbol.for(key): fetch or create the registry symbol for ``key``."""
		existing = cls._registry.get(key)
		if existing is None:
			existing = cls(key)
			cls._registry[key] = existing
		return existing

	@classmethod
	def key_for(cls, sym: Symbol) -> str | UndefinedType:
		"""Symbol.keyFor(sym)"""
		if not isinstance(sym, Symbol):
			raise JSTypeError(f"{sym!r} is not a symbol")
		for key, registered in cls._registry.items():
			if registered is sym:
				return key
		return Undefined

	@override
	def __repr__(self) -> str:
		return f"Symbol({self.description or ''})"


# Well-known symbols
iterator: Final = Symbol("Symbol.iterator")
async_iterator: Final = Symbol("Symbol.asyncIterator")
has_instance: Final = Symbol("Symbol.hasInstance")
to_primitive: Final = Symbol("Symbol.toPrimitive")
to_string_tag: Final = Symbol("Symbol.toStringTag")

PropertyKey: TypeAlias = "str | Symbol"


def describe_key(key: PropertyKey) -> str:
	return repr(key) if isinstance(key, Symbol) else key


def is_nullish(value: Any) -> bool:
	return value is None or value is Undefined


def to_boolean(value: Any) -> bool:
	"""ToBoolean: JS truthiness, which differs from Python for containers."""
	if value is None or value is Undefined:
		return False
	if isinstance(value, bool):
		return value
	if isinstance(value, (int, float)):
		return not (value == 0 or value != value)
	if isinstance(value, str):
		return value != ""
	return True


def same_value(a: Any, b: Any) -> bool:
	"""SameValue: like === except NaN equals NaN and +0 differs from -0."""
	if isinstance(a, bool) or isinstance(b, bool):
		return isinstance(a, bool) and isinstance(b, bool) and a == b
	if isinstance(a, (int, float)) and isinstance(b, (int, float)):
		if a != a:
			return b != b
		if a == 0 and b == 0:
			return math.copysign(1.0, a) == math.copysign(1.0, b)
		return a == b
	if isinstance(a, str) and isinstance(b, str):
		return a == b
	return a is b


def _shortest_digits(value: float) -> tuple[str, int]:
	"""Split a positive finite float into digits ``d`` and ``n`` with value = 0.d * 10**n.

	``repr`` already yields the shortest round-tripping digits.
	"""
	text = repr(value)
	exponent = 0
	if "e" in text:
		text, exp_text = text.split("e")
		exponent = int(exp_text)
	int_part, _, frac_part = text.partition(".")
	combined = int_part + frac_part
	digits = combined.lstrip("0")
	point = len(int_part) + exponent - (len(combined) - len(digits))
	return digits.rstrip("0"), point


def number_to_string(value: int | float) -> str:
	"""Number::toString(value) for radix 10."""
	if isinstance(value, bool):
		raise TypeError("number_to_string() does not accept booleans")
	if isinstance(value, int):
		if abs(value) < 2**53:
			return str(value)
		try:
			value = float(value)
		except OverflowError:
			value = math.copysign(math.inf, value)
	if math.isnan(value):
		return "NaN"
	if math.isinf(value):
		return "Infinity" if value > 0 else "-Infinity"
	if value == 0:
		return "0"
	sign = "-" if value < 0 else ""
	digits, n = _shortest_digits(abs(value))
	k = len(digits)
	if k <= n <= 21:
		return sign + digits + "0" * (n - k)
	if 0 < n <= 21:
		return f"{sign}{digits[:n]}.{digits[n:]}"
	if -6 < n <= 0:
		return f"{sign}0.{'0' * -n}{digits}"
	e = n - 1
	exp_text = f"e+{e}" if e >= 0 else f"e-{-e}"
	if k == 1:
		return sign + digits + exp_text
	return f"{sign}{digits[0]}.{digits[1:]}{exp_text}"


def to_property_key(value: Any) -> PropertyKey:
	"""ToPropertyKey for the primitives this package models."""
	if isinstance(value, (str, Symbol)):
		return value
	if value is None:
		return "null"
	if value is Undefined:
		return "undefined"
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, (int, float)):
		return number_to_string(value)
	raise JSTypeError(f"cannot convert {type(value).__name__} to a property key")


def is_array_index(key: PropertyKey) -> bool:
	"""True for canonical decimal strings in [0, 2**32 - 2]."""
	if not isinstance(key, str) or not key or not key.isascii() or not key.isdigit():
		return False
	if len(key) > 1 and key[0] == "0":
		return False
	return int(key) <= MAX_ARRAY_INDEX


__all__ = [
	"MAX_ARRAY_INDEX",
	"PropertyKey",
	"Symbol",
	"Undefined",
	"UndefinedType",
	"async_iterator",
	"describe_key",
	"has_instance",
	"is_array_index",
	"is_nullish",
	"iterator",
	"number_to_string",
	"same_value",
	"to_boolean",
	"to_primitive",
	"to_property_key",
	"to_string_tag",
]
