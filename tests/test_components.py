"""Tests for the host component surface, models and tag modifiers."""

from dataclasses import dataclass, field

import pytest

from formforge.components import (
    Behavior,
    Component,
    ComponentTag,
    FormComponent,
    Model,
    PropertyModel,
    TextArea,
    TextField,
    Validatable,
)
from formforge.validation import Pattern, PatternTagModifier, Size, SizeTagModifier


@dataclass
class Address:
    street: str | None = None


@dataclass
class Person:
    name: str | None = None
    address: Address | None = field(default_factory=Address)
    extra: dict = field(default_factory=dict)


class RecordingBehavior(Behavior):
    def __init__(self):
        self.events = []

    def bind(self, component):
        self.events.append(("bind", component.id))

    def on_configure(self, component):
        self.events.append(("configure", component.id))

    def on_component_tag(self, component, tag):
        self.events.append(("tag", tag.name))

    def detach(self, component):
        self.events.append(("detach", component.id))


class RejectingValidator:
    def validate(self, validatable):
        validatable.error(f"rejected {validatable.value}")


# =============================================================================
# Models
# =============================================================================


class TestModels:
    def test_model(self):
        model = Model(1)
        model.set_object(2)
        assert model.get_object() == 2

    def test_property_model_reads_nested(self):
        person = Person(address=Address(street="Main"))
        assert PropertyModel(person, "address.street").get_object() == "Main"

    def test_property_model_none_intermediate(self):
        assert PropertyModel(Person(address=None), "address.street").get_object() is None

    def test_property_model_writes_nested(self):
        person = Person()
        PropertyModel(person, "address.street").set_object("Elm")
        assert person.address.street == "Elm"

    def test_property_model_dict_segments(self):
        person = Person(extra={"color": "red"})
        model = PropertyModel(person, "extra.color")
        assert model.get_object() == "red"
        model.set_object("blue")
        assert person.extra["color"] == "blue"

    def test_set_through_none_raises(self):
        with pytest.raises(ValueError, match="intermediate"):
            PropertyModel(Person(address=None), "address.street").set_object("x")

    def test_expression_required(self):
        with pytest.raises(ValueError):
            PropertyModel(Person(), "")


# =============================================================================
# Components
# =============================================================================


class TestComponents:
    def test_lifecycle_reaches_behaviors(self):
        behavior = RecordingBehavior()
        component = Component("label").add(behavior)

        component.configure()
        component.render_tag()
        component.detach()

        assert behavior.events == [
            ("bind", "label"),
            ("configure", "label"),
            ("tag", "span"),
            ("detach", "label"),
        ]

    def test_form_component_collects_feedback(self):
        component = FormComponent("age").add(RejectingValidator())
        component.input = 3

        assert not component.validate()
        assert component.feedback == ["rejected 3"]

    def test_form_component_valid_without_validators(self):
        assert FormComponent("age").validate()

    def test_required_flag(self):
        component = FormComponent("age")
        assert not component.is_required()
        component.set_required(True)
        assert component.is_required()

    def test_text_field_tag(self):
        assert TextField("name").render_tag() == ComponentTag("input", {"id": "name", "type": "text"})

    def test_validatable(self):
        validatable = Validatable("x")
        assert validatable.is_valid
        validatable.error("bad")
        assert not validatable.is_valid


# =============================================================================
# Tag modifiers
# =============================================================================


class TestSizeTagModifier:
    def test_text_input(self):
        tag = TextField("name").render_tag()
        SizeTagModifier().modify(None, tag, Size(max=12))
        assert tag.get("maxlength") == "12"

    def test_textarea(self):
        tag = TextArea("bio").render_tag()
        SizeTagModifier().modify(None, tag, Size(max=500))
        assert tag.get("maxlength") == "500"

    def test_unbounded_size(self):
        tag = TextField("name").render_tag()
        SizeTagModifier().modify(None, tag, Size(min=2))
        assert tag.get("maxlength") is None

    def test_non_text_input(self):
        tag = ComponentTag("input", {"type": "checkbox"})
        SizeTagModifier().modify(None, tag, Size(max=1))
        assert tag.get("maxlength") is None

    def test_other_tag(self):
        tag = ComponentTag("select")
        SizeTagModifier().modify(None, tag, Size(max=1))
        assert tag.attributes == {}


class TestPatternTagModifier:
    def test_input(self):
        tag = TextField("zip").render_tag()
        PatternTagModifier().modify(None, tag, Pattern(r"\d{5}"))
        assert tag.get("pattern") == r"\d{5}"

    def test_textarea_untouched(self):
        tag = TextArea("bio").render_tag()
        PatternTagModifier().modify(None, tag, Pattern(r"\d{5}"))
        assert tag.get("pattern") is None
