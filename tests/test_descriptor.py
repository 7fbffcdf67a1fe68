import pytest
from jsreflect import (
	MISSING,
	JSTypeError,
	OrdinaryObject,
	PropertyDescriptor,
	Undefined,
	from_property_descriptor,
	to_property_descriptor,
)
from jsreflect.descriptor import is_compatible_property_descriptor


def _getter(this: object) -> int:
	return 1


class TestPropertyDescriptor:
	def test_kinds(self):
		assert PropertyDescriptor(value=1).is_data
		assert PropertyDescriptor(writable=False).is_data
		assert PropertyDescriptor(get=_getter).is_accessor
		assert PropertyDescriptor(enumerable=True).is_generic
		assert PropertyDescriptor().is_empty
		assert not PropertyDescriptor(configurable=False).is_empty

	def test_mixed_kinds_rejected(self):
		with pytest.raises(JSTypeError, match="Cannot both specify accessors"):
			PropertyDescriptor(value=1, get=_getter)

	def test_non_callable_getter_rejected(self):
		with pytest.raises(JSTypeError, match="Getter must be a function"):
			PropertyDescriptor(get=42)
		with pytest.raises(JSTypeError, match="Setter must be a function"):
			PropertyDescriptor(set="nope")

	def test_complete_data(self):
		desc = PropertyDescriptor(enumerable=True).complete()
		assert desc == PropertyDescriptor(
			value=Undefined, writable=False, enumerable=True, configurable=False
		)

	def test_complete_accessor(self):
		desc = PropertyDescriptor(get=_getter).complete()
		assert desc.get is _getter
		assert desc.set is Undefined
		assert desc.enumerable is False
		assert desc.configurable is False


class TestToPropertyDescriptor:
	def test_from_mapping_coerces_flags(self):
		desc = to_property_descriptor({"enumerable": 1, "configurable": "", "value": None})
		assert desc.enumerable is True
		assert desc.configurable is False
		assert desc.value is None
		assert desc.writable is None
		assert desc.get is MISSING

	def test_from_mapping_ignores_unknown_fields(self):
		desc = to_property_descriptor({"value": 1, "color": "red"})
		assert desc == PropertyDescriptor(value=1)

	def test_from_js_object_reads_fields_in_order(self):
		reads: list[str] = []
		attributes = OrdinaryObject()
		for name, value in (("value", 7), ("configurable", True), ("enumerable", False)):

			def getter(this: object, name: str = name, value: object = value) -> object:
				reads.append(name)
				return value

			attributes.define_own_property(name, PropertyDescriptor.accessor(get=getter))

		desc = to_property_descriptor(attributes)
		assert reads == ["enumerable", "configurable", "value"]
		assert desc == PropertyDescriptor(value=7, enumerable=False, configurable=True)

	def test_inherited_fields_count(self):
		proto = OrdinaryObject.from_mapping({"enumerable": True})
		desc = to_property_descriptor(OrdinaryObject(proto))
		assert desc.enumerable is True

	def test_returns_copy_of_descriptor(self):
		original = PropertyDescriptor.data(1)
		copy = to_property_descriptor(original)
		assert copy == original
		assert copy is not original

	@pytest.mark.parametrize("value", [1, "x", None, Undefined, True])
	def test_primitive_rejected(self, value: object):
		with pytest.raises(JSTypeError, match="Property description must be an object"):
			to_property_descriptor(value)


class TestFromPropertyDescriptor:
	def test_absent_descriptor(self):
		assert from_property_descriptor(None) is Undefined

	def test_data_fields(self):
		obj = from_property_descriptor(PropertyDescriptor.data(None, enumerable=False))
		assert isinstance(obj, OrdinaryObject)
		assert obj.own_property_keys() == ["value", "writable", "enumerable", "configurable"]
		assert obj["value"] is None
		assert obj["enumerable"] is False

	def test_partial_descriptor_lists_only_present_fields(self):
		obj = from_property_descriptor(PropertyDescriptor(configurable=True))
		assert isinstance(obj, OrdinaryObject)
		assert obj.own_property_keys() == ["configurable"]


class TestCompatibility:
	def test_new_property_needs_extensible(self):
		desc = PropertyDescriptor.data(1)
		assert is_compatible_property_descriptor(True, desc, None)
		assert not is_compatible_property_descriptor(False, desc, None)

	def test_non_configurable_cannot_become_configurable(self):
		current = PropertyDescriptor.data(1, configurable=False)
		assert not is_compatible_property_descriptor(
			True, PropertyDescriptor(configurable=True), current
		)

	def test_non_configurable_cannot_flip_enumerable(self):
		current = PropertyDescriptor.data(1, enumerable=True, configurable=False)
		assert not is_compatible_property_descriptor(
			True, PropertyDescriptor(enumerable=False), current
		)
		assert is_compatible_property_descriptor(
			True, PropertyDescriptor(enumerable=True), current
		)

	def test_non_writable_value_is_fixed(self):
		current = PropertyDescriptor.data(1, writable=False, configurable=False)
		assert is_compatible_property_descriptor(True, PropertyDescriptor(value=1), current)
		assert not is_compatible_property_descriptor(True, PropertyDescriptor(value=2), current)
		assert not is_compatible_property_descriptor(
			True, PropertyDescriptor(writable=True), current
		)

	def test_non_configurable_kind_is_fixed(self):
		current = PropertyDescriptor.data(1, configurable=False)
		assert not is_compatible_property_descriptor(
			True, PropertyDescriptor(get=_getter), current
		)

	def test_non_configurable_accessor_functions_are_fixed(self):
		current = PropertyDescriptor.accessor(get=_getter, configurable=False)
		assert is_compatible_property_descriptor(True, PropertyDescriptor(get=_getter), current)
		assert not is_compatible_property_descriptor(
			True, PropertyDescriptor(get=lambda this: 2), current
		)
