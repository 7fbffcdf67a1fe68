"""
Proxy exotic objects.

A proxy forwards each internal method to a user-supplied trap on its handler,
falling back to the target when the handler has no such trap. Trap results are
checked against the standard proxy invariants so that a proxy can never
misreport non-configurable or non-extensible state of its target.

Usage:
    from jsreflect.proxy import Proxy

    def own_keys(target):
        return ["a", secret]

    proxy = Proxy(target, {"ownKeys": own_keys})

Handlers may be a mapping of trap name to callable, a JSObject whose
properties hold the traps, or any Python object with trap-named attributes.
Traps are called with the target as the first argument, as in JavaScript.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Final, Literal

from typing_extensions import override

from jsreflect.descriptor import (
	MISSING,
	PropertyDescriptor,
	from_property_descriptor,
	is_compatible_property_descriptor,
	to_property_descriptor,
)
from jsreflect.env import env
from jsreflect.errors import JSTypeError, ProxyInvariantError, RevokedProxyError
from jsreflect.objects import JSObject
from jsreflect.values import (
	PropertyKey,
	Symbol,
	Undefined,
	describe_key,
	same_value,
	to_boolean,
)

logger = logging.getLogger(__name__)

TrapName = Literal[
	"ownKeys",
	"getOwnPropertyDescriptor",
	"defineProperty",
	"deleteProperty",
	"isExtensible",
	"preventExtensions",
	"getPrototypeOf",
	"has",
	"get",
]

_PRIMITIVES: Final = (bool, int, float, str, Symbol)


def _is_object(value: Any) -> bool:
	"""Whether a trap result counts as an object rather than a primitive."""
	return isinstance(value, (JSObject, PropertyDescriptor, Mapping))


class ProxyObject(JSObject):
	__slots__: tuple[str, ...] = ("_target", "_handler")
	_target: JSObject | None
	_handler: Any

	def __init__(self, target: JSObject, handler: Any) -> None:
		if not isinstance(target, JSObject):
			raise JSTypeError("Cannot create proxy with a non-object as target")
		if handler is None or handler is Undefined or isinstance(handler, _PRIMITIVES):
			raise JSTypeError("Cannot create proxy with a non-object as handler")
		self._target = target
		self._handler = handler

	@classmethod
	def revocable(
		cls, target: JSObject, handler: Any
	) -> tuple[ProxyObject, Callable[[], None]]:
		"""Proxy.revocable(target, handler) -> (proxy, revoke)"""
		proxy = cls(target, handler)
		return proxy, proxy.revoke

	@property
	def revoked(self) -> bool:
		return self._handler is None

	def revoke(self) -> None:
		if self._handler is None:
			return
		self._target = None
		self._handler = None
		logger.debug("Proxy %#x revoked", id(self))

	def _trap(self, name: TrapName) -> tuple[JSObject, Callable[..., Any] | None]:
		"""GetMethod(handler, name), after checking the proxy is still live."""
		handler = self._handler
		target = self._target
		if handler is None or target is None:
			raise RevokedProxyError(
				f"Cannot perform '{name}' on a proxy that has been revoked"
			)
		if isinstance(handler, (JSObject, Mapping)):
			trap = handler.get(name)
		else:
			trap = getattr(handler, name, None)
		if trap is None or trap is Undefined:
			return target, None
		if not callable(trap):
			raise JSTypeError(f"proxy trap '{name}' is not a function: {trap!r}")
		if env.trace_traps:
			logger.debug("Proxy %#x trap %s", id(self), name)
		return target, trap

	@override
	def own_property_keys(self) -> list[PropertyKey]:
		target, trap = self._trap("ownKeys")
		if trap is None:
			return target.own_property_keys()

		trap_result = _create_key_list(trap(target))
		extensible = target.is_extensible()
		configurable_keys: list[PropertyKey] = []
		nonconfigurable_keys: list[PropertyKey] = []
		for key in target.own_property_keys():
			desc = target.get_own_property(key)
			if desc is not None and desc.configurable is False:
				nonconfigurable_keys.append(key)
			else:
				configurable_keys.append(key)

		if extensible and not nonconfigurable_keys:
			return trap_result

		unchecked = set(trap_result)
		for key in nonconfigurable_keys:
			if key not in unchecked:
				raise ProxyInvariantError(
					f"'ownKeys' on proxy: trap result did not include '{describe_key(key)}'"
				)
			unchecked.discard(key)
		if extensible:
			return trap_result

		for key in configurable_keys:
			if key not in unchecked:
				raise ProxyInvariantError(
					f"'ownKeys' on proxy: trap result did not include '{describe_key(key)}'"
				)
			unchecked.discard(key)
		if unchecked:
			raise ProxyInvariantError(
				"'ownKeys' on proxy: trap returned extra keys but proxy target is non-extensible"
			)
		return trap_result

	@override
	def get_own_property(self, key: PropertyKey) -> PropertyDescriptor | None:
		target, trap = self._trap("getOwnPropertyDescriptor")
		if trap is None:
			return target.get_own_property(key)

		trap_result = trap(target, key)
		if trap_result is not Undefined and not _is_object(trap_result):
			raise ProxyInvariantError(
				f"'getOwnPropertyDescriptor' on proxy: trap returned neither object nor undefined for property '{describe_key(key)}'"
			)
		target_desc = target.get_own_property(key)
		if trap_result is Undefined:
			if target_desc is None:
				return None
			if target_desc.configurable is False:
				raise ProxyInvariantError(
					f"'getOwnPropertyDescriptor' on proxy: trap returned undefined for property '{describe_key(key)}' which is non-configurable in the proxy target"
				)
			if not target.is_extensible():
				raise ProxyInvariantError(
					f"'getOwnPropertyDescriptor' on proxy: trap returned undefined for property '{describe_key(key)}' which exists in the non-extensible proxy target"
				)
			return None

		extensible = target.is_extensible()
		result_desc = to_property_descriptor(trap_result).complete()
		if not is_compatible_property_descriptor(extensible, result_desc, target_desc):
			raise ProxyInvariantError(
				f"'getOwnPropertyDescriptor' on proxy: trap returned descriptor for property '{describe_key(key)}' that is incompatible with the existing property in the proxy target"
			)
		if result_desc.configurable is False:
			if target_desc is None or target_desc.configurable:
				raise ProxyInvariantError(
					f"'getOwnPropertyDescriptor' on proxy: trap reported non-configurability for property '{describe_key(key)}' which is either non-existent or configurable in the proxy target"
				)
			if result_desc.writable is False and target_desc.writable is True:
				raise ProxyInvariantError(
					f"'getOwnPropertyDescriptor' on proxy: trap reported non-configurable and non-writable for property '{describe_key(key)}' which is writable in the proxy target"
				)
		return result_desc

	@override
	def define_own_property(self, key: PropertyKey, desc: PropertyDescriptor) -> bool:
		target, trap = self._trap("defineProperty")
		if trap is None:
			return target.define_own_property(key, desc)

		if not to_boolean(trap(target, key, from_property_descriptor(desc))):
			return False
		target_desc = target.get_own_property(key)
		extensible = target.is_extensible()
		setting_config_false = desc.configurable is False
		if target_desc is None:
			if not extensible:
				raise ProxyInvariantError(
					f"'defineProperty' on proxy: trap returned truish for adding property '{describe_key(key)}' to the non-extensible proxy target"
				)
			if setting_config_false:
				raise ProxyInvariantError(
					f"'defineProperty' on proxy: trap returned truish for defining non-configurable property '{describe_key(key)}' which is either non-existent or configurable in the proxy target"
				)
			return True

		if not is_compatible_property_descriptor(extensible, desc, target_desc):
			raise ProxyInvariantError(
				f"'defineProperty' on proxy: trap returned truish for adding property '{describe_key(key)}' that is incompatible with the existing property in the proxy target"
			)
		if setting_config_false and target_desc.configurable:
			raise ProxyInvariantError(
				f"'defineProperty' on proxy: trap returned truish for defining non-configurable property '{describe_key(key)}' which is either non-existent or configurable in the proxy target"
			)
		if (
			target_desc.is_data
			and target_desc.configurable is False
			and target_desc.writable is True
			and desc.writable is False
		):
			raise ProxyInvariantError(
				f"'defineProperty' on proxy: trap returned truish for defining non-configurable property '{describe_key(key)}' which cannot be non-writable, unless there exists a corresponding non-configurable, non-writable own property of the target object"
			)
		return True

	@override
	def delete(self, key: PropertyKey) -> bool:
		target, trap = self._trap("deleteProperty")
		if trap is None:
			return target.delete(key)

		if not to_boolean(trap(target, key)):
			return False
		target_desc = target.get_own_property(key)
		if target_desc is None:
			return True
		if target_desc.configurable is False:
			raise ProxyInvariantError(
				f"'deleteProperty' on proxy: trap returned truish for property '{describe_key(key)}' which is non-configurable in the proxy target"
			)
		if not target.is_extensible():
			raise ProxyInvariantError(
				f"'deleteProperty' on proxy: trap returned truish for property '{describe_key(key)}' but the proxy target is non-extensible"
			)
		return True

	@override
	def is_extensible(self) -> bool:
		target, trap = self._trap("isExtensible")
		if trap is None:
			return target.is_extensible()

		result = to_boolean(trap(target))
		target_result = target.is_extensible()
		if result != target_result:
			raise ProxyInvariantError(
				f"'isExtensible' on proxy: trap result does not reflect extensibility of proxy target (which is '{str(target_result).lower()}')"
			)
		return result

	@override
	def prevent_extensions(self) -> bool:
		target, trap = self._trap("preventExtensions")
		if trap is None:
			return target.prevent_extensions()

		result = to_boolean(trap(target))
		if result and target.is_extensible():
			raise ProxyInvariantError(
				"'preventExtensions' on proxy: trap returned truish but the proxy target is extensible"
			)
		return result

	@override
	def get_prototype_of(self) -> JSObject | None:
		target, trap = self._trap("getPrototypeOf")
		if trap is None:
			return target.get_prototype_of()

		handler_proto = trap(target)
		if handler_proto is not None and not isinstance(handler_proto, JSObject):
			raise ProxyInvariantError(
				"'getPrototypeOf' on proxy: trap returned neither object nor null"
			)
		if target.is_extensible():
			return handler_proto
		if handler_proto is not target.get_prototype_of():
			raise ProxyInvariantError(
				"'getPrototypeOf' on proxy: proxy target is non-extensible but the trap did not return its actual prototype"
			)
		return handler_proto

	@override
	def has_property(self, key: PropertyKey) -> bool:
		target, trap = self._trap("has")
		if trap is None:
			return target.has_property(key)

		result = to_boolean(trap(target, key))
		if not result:
			target_desc = target.get_own_property(key)
			if target_desc is not None:
				if target_desc.configurable is False:
					raise ProxyInvariantError(
						f"'has' on proxy: trap returned falsish for property '{describe_key(key)}' which exists in the proxy target as non-configurable"
					)
				if not target.is_extensible():
					raise ProxyInvariantError(
						f"'has' on proxy: trap returned falsish for property '{describe_key(key)}' but the proxy target is not extensible"
					)
		return result

	@override
	def get(self, key: PropertyKey, receiver: Any = MISSING) -> Any:
		if receiver is MISSING:
			receiver = self
		target, trap = self._trap("get")
		if trap is None:
			return target.get(key, receiver)

		trap_result = trap(target, key, receiver)
		target_desc = target.get_own_property(key)
		if target_desc is not None and target_desc.configurable is False:
			if (
				target_desc.is_data
				and target_desc.writable is False
				and not same_value(trap_result, target_desc.value)
			):
				raise ProxyInvariantError(
					f"'get' on proxy: property '{describe_key(key)}' is a read-only and non-configurable data property on the proxy target but the proxy did not return its actual value"
				)
			if (
				target_desc.is_accessor
				and target_desc.get is Undefined
				and trap_result is not Undefined
			):
				raise ProxyInvariantError(
					f"'get' on proxy: property '{describe_key(key)}' is a non-configurable accessor property on the proxy target and does not have a getter function, but the trap did not return 'undefined'"
				)
		return trap_result

	@override
	def __repr__(self) -> str:
		if self.revoked:
			return "Proxy(<revoked>)"
		return f"Proxy({self._target!r})"


def _create_key_list(value: Any) -> list[PropertyKey]:
	"""CreateListFromArrayLike restricted to property keys, rejecting duplicates."""
	if not isinstance(value, (list, tuple)):
		raise JSTypeError(
			f"'ownKeys' on proxy: trap result must be a list or tuple, got {type(value).__name__}"
		)
	keys: list[PropertyKey] = []
	seen: set[PropertyKey] = set()
	for element in value:
		if not isinstance(element, (str, Symbol)):
			raise JSTypeError(f"{element!r} is not a valid property name")
		if element in seen:
			raise ProxyInvariantError(
				f"'ownKeys' on proxy: trap returned duplicate entries ('{describe_key(element)}')"
			)
		seen.add(element)
		keys.append(element)
	return keys


Proxy: Final = ProxyObject


def revocable(target: JSObject, handler: Any) -> tuple[ProxyObject, Callable[[], None]]:
	return ProxyObject.revocable(target, handler)


__all__ = ["Proxy", "ProxyObject", "TrapName", "revocable"]
