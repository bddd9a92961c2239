"""Tests for property resolution from components."""

from dataclasses import dataclass, field

from formforge.components import FormComponent, Model, PropertyModel
from formforge.validation import (
    Property,
    PropertyModelResolver,
    resolve_property_model_from,
)


@dataclass
class Address:
    street: str | None = None


@dataclass
class Person:
    name: str | None = None
    address: Address | None = field(default_factory=Address)


class WrapModel:
    """A model delegating to another one."""

    def __init__(self, wrapped_model):
        self.wrapped_model = wrapped_model

    def get_object(self):
        return self.wrapped_model.get_object()


class TestResolvePropertyModelFrom:
    def test_direct_property_model(self):
        model = PropertyModel(Person(), "name")
        assert resolve_property_model_from(FormComponent("name", model)) is model

    def test_unwraps_wrapped_models(self):
        model = PropertyModel(Person(), "name")
        component = FormComponent("name", WrapModel(WrapModel(model)))
        assert resolve_property_model_from(component) is model

    def test_plain_model(self):
        assert resolve_property_model_from(FormComponent("name", Model("x"))) is None

    def test_no_model(self):
        assert resolve_property_model_from(FormComponent("name")) is None

    def test_self_wrapping_model_terminates(self):
        model = WrapModel(None)
        model.wrapped_model = model
        assert resolve_property_model_from(FormComponent("name", model)) is None


class TestPropertyModelResolver:
    def test_top_level_property(self):
        component = FormComponent("name", PropertyModel(Person(), "name"))
        assert PropertyModelResolver().resolve(component) == Property(Person, "name")

    def test_nested_property_owner_is_last_holder(self):
        component = FormComponent("street", PropertyModel(Person(), "address.street"))
        assert PropertyModelResolver().resolve(component) == Property(Address, "street")

    def test_none_along_the_path(self):
        component = FormComponent("street", PropertyModel(Person(address=None), "address.street"))
        assert PropertyModelResolver().resolve(component) is None

    def test_typo_in_last_segment(self):
        component = FormComponent("name", PropertyModel(Person(), "nmae"))
        assert PropertyModelResolver().resolve(component) is None

    def test_typo_in_intermediate_segment(self):
        component = FormComponent("street", PropertyModel(Person(), "adress.street"))
        assert PropertyModelResolver().resolve(component) is None

    def test_component_without_property_model(self):
        assert PropertyModelResolver().resolve(FormComponent("x", Model(1))) is None
