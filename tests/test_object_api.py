"""
Tests for the Object builtins.
"""

import pytest
from jsreflect import (
	ConversionError,
	JSTypeError,
	Object,
	OrdinaryObject,
	PropertyDescriptor,
	Proxy,
	Symbol,
	Undefined,
	ValidationError,
	create,
	define_property,
	get_own_property_descriptor,
	get_own_property_symbols,
	symbols,
)


@pytest.fixture
def hidden_visible():
	hidden, visible = Symbol("hidden"), Symbol("visible")
	obj = OrdinaryObject()
	define_property(obj, hidden, {"enumerable": False, "value": 1})
	define_property(obj, visible, {"enumerable": True, "value": 2})
	return obj, hidden, visible


class TestGetOwnPropertySymbols:
	def test_hidden_and_visible(self, hidden_visible):
		obj, hidden, visible = hidden_visible
		assert get_own_property_symbols(obj) == [hidden, visible]
		assert symbols(obj) == [visible]
		assert get_own_property_symbols(obj, {"enumerable": False}) == [hidden]
		assert get_own_property_symbols(obj, {"enumerable": True}) == [visible]
		assert get_own_property_symbols(obj, {"enumerable": "all"}) == [hidden, visible]

	def test_namespace_matches_functions(self, hidden_visible):
		obj, hidden, visible = hidden_visible
		assert Object.getOwnPropertySymbols(obj) == [hidden, visible]
		assert Object.getOwnPropertySymbols(obj, {"enumerable": False}) == [hidden]
		assert Object.symbols(obj) == [visible]

	def test_symbols_takes_exactly_one_argument(self, hidden_visible):
		obj, _, _ = hidden_visible
		with pytest.raises(TypeError):
			symbols(obj, {"enumerable": False})  # pyright: ignore[reportCallIssue]

	def test_errors(self):
		with pytest.raises(ConversionError):
			Object.getOwnPropertySymbols(None)
		with pytest.raises(ConversionError):
			Object.symbols(Undefined)
		with pytest.raises(ValidationError):
			Object.getOwnPropertySymbols(OrdinaryObject(), {"enumerable": "yes"})

	def test_through_proxy(self, hidden_visible):
		obj, hidden, visible = hidden_visible
		proxy = Proxy(obj, {})
		assert Object.getOwnPropertySymbols(proxy) == [hidden, visible]
		assert Object.symbols(proxy) == [visible]


class TestNamesAndKeys:
	def test_names_and_keys(self):
		obj = OrdinaryObject.from_mapping({"a": 1, Symbol("s"): 2})
		define_property(obj, "hidden", {"value": 3})
		assert Object.getOwnPropertyNames(obj) == ["a", "hidden"]
		assert Object.getOwnPropertyNames(obj, {"enumerable": False}) == ["hidden"]
		assert Object.keys(obj) == ["a"]
		assert Object.keys("hi") == ["0", "1"]

	def test_plain_dicts(self):
		sym = Symbol("s")
		value = {"a": 1, sym: 2}
		assert Object.getOwnPropertySymbols(value) == [sym]
		assert Object.symbols(value) == [sym]
		assert Object.getOwnPropertySymbols({}, {"enumerable": False}) == []
		assert Object.keys(value) == ["a"]
		value[Symbol("later")] = 3
		assert len(Object.getOwnPropertySymbols(value)) == 2

	def test_fractional_number_key(self):
		obj = OrdinaryObject()
		define_property(obj, 0.00001, {"value": 1, "enumerable": True})
		assert Object.keys(obj) == ["0.00001"]


class TestDescriptors:
	def test_get_own_property_descriptor(self, hidden_visible):
		obj, hidden, _ = hidden_visible
		result = get_own_property_descriptor(obj, hidden)
		assert isinstance(result, OrdinaryObject)
		assert result["value"] == 1
		assert result["enumerable"] is False
		assert result["writable"] is False
		assert result["configurable"] is False
		assert get_own_property_descriptor(obj, "missing") is Undefined

	def test_get_own_property_descriptor_coerces(self):
		result = Object.getOwnPropertyDescriptor("abc", 1)
		assert isinstance(result, OrdinaryObject)
		assert result["value"] == "b"
		with pytest.raises(ConversionError):
			Object.getOwnPropertyDescriptor(None, "a")

	def test_define_property_returns_object(self):
		obj = OrdinaryObject()
		assert Object.defineProperty(obj, "a", {"value": 1, "configurable": False}) is obj
		with pytest.raises(JSTypeError, match="Cannot redefine property"):
			Object.defineProperty(obj, "a", {"value": 2})

	def test_define_property_on_primitive(self):
		with pytest.raises(JSTypeError, match="non-object"):
			define_property("str", "a", {"value": 1})

	def test_define_property_with_js_attributes(self):
		obj = OrdinaryObject()
		attributes = OrdinaryObject.from_mapping({"value": 1, "enumerable": True})
		define_property(obj, "a", attributes)
		assert obj.get_own_property("a") == PropertyDescriptor(
			value=1, writable=False, enumerable=True, configurable=False
		)

	def test_define_properties_uses_enumerable_entries_only(self):
		sym = Symbol("s")
		props = OrdinaryObject.from_mapping({"a": {"value": 1}, sym: {"value": 2}})
		props.define_own_property(
			"skipped", PropertyDescriptor.data({"value": 3}, enumerable=False)
		)
		obj = OrdinaryObject()
		Object.defineProperties(obj, props)
		assert obj.own_property_keys() == ["a", sym]


class TestCreateAndExtensibility:
	def test_create_with_properties(self):
		proto = OrdinaryObject.from_mapping({"inherited": True})
		sym = Symbol()
		obj = create(proto, {sym: {"value": 1, "enumerable": True}, "x": {"value": 2}})
		assert obj.get_prototype_of() is proto
		assert obj["inherited"] is True
		assert Object.symbols(obj) == [sym]
		assert Object.getOwnPropertyNames(obj, {"enumerable": False}) == ["x"]

	def test_create_null_prototype(self):
		obj = Object.create(None)
		assert obj.get_prototype_of() is None
		assert Object.getOwnPropertySymbols(obj) == []

	def test_create_rejects_primitive_prototype(self):
		with pytest.raises(JSTypeError, match="prototype"):
			Object.create(1)

	def test_prevent_extensions(self):
		obj = OrdinaryObject()
		assert Object.isExtensible(obj)
		assert Object.preventExtensions(obj) is obj
		assert not Object.isExtensible(obj)
		assert Object.preventExtensions(5) == 5
		assert not Object.isExtensible(5)

	def test_prevent_extensions_rejected_by_proxy(self):
		proxy = Proxy(OrdinaryObject(), {"preventExtensions": lambda target: False})
		with pytest.raises(JSTypeError, match="Cannot prevent extensions"):
			Object.preventExtensions(proxy)
