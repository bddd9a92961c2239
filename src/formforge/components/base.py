"""Minimal host components.

Only what is needed to drive the configure -> tag -> validate lifecycle:
the real component tree and rendering belong to the host framework.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class ComponentTag:
    """A mutable markup tag about to be emitted.

    Attributes:
        name: Tag name (e.g., "input")
        attributes: Tag attributes, in insertion order
    """

    name: str
    attributes: dict[str, str] = field(default_factory=dict)

    def put(self, key: str, value: Any) -> None:
        self.attributes[key] = str(value)

    def get(self, key: str) -> str | None:
        return self.attributes.get(key)

    def remove(self, key: str) -> None:
        self.attributes.pop(key, None)


@dataclass
class Validatable:
    """A candidate value plus an error sink."""

    value: Any
    errors: list[Any] = field(default_factory=list)

    def error(self, error: Any) -> None:
        self.errors.append(error)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class Behavior:
    """Base class for objects attached to a component's lifecycle."""

    def bind(self, component: "Component") -> None:
        pass

    def on_configure(self, component: "Component") -> None:
        pass

    def on_component_tag(self, component: "Component", tag: ComponentTag) -> None:
        pass

    def detach(self, component: "Component") -> None:
        pass


class Component:
    """A node holding an id, an optional model and behaviors."""

    tag_name = "span"

    def __init__(self, id: str, model: Any = None):
        self.id = id
        self.model = model
        self.behaviors: list[Behavior] = []

    def add(self, *behaviors: Behavior) -> "Component":
        for behavior in behaviors:
            behavior.bind(self)
            self.behaviors.append(behavior)
        return self

    def configure(self) -> None:
        """Run the configuration phase for every behavior."""
        for behavior in self.behaviors:
            behavior.on_configure(self)

    def render_tag(self) -> ComponentTag:
        """Build this component's tag and let behaviors mutate it."""
        tag = self.create_tag()
        for behavior in self.behaviors:
            behavior.on_component_tag(self, tag)
        return tag

    def create_tag(self) -> ComponentTag:
        return ComponentTag(self.tag_name, {"id": self.id})

    def detach(self) -> None:
        for behavior in self.behaviors:
            behavior.detach(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class FormComponent(Component):
    """A component bound to a value that can be validated.

    Validators are any objects with a ``validate(validatable)`` method.
    Validators that are also Behaviors join the lifecycle too.
    """

    tag_name = "input"

    def __init__(self, id: str, model: Any = None):
        super().__init__(id, model)
        self.required = False
        self.input: Any = None
        self.validators: list[Any] = []
        self.feedback: list[Any] = []

    def add(self, *items: Any) -> "FormComponent":
        for item in items:
            if isinstance(item, Behavior):
                super().add(item)
            if callable(getattr(item, "validate", None)):
                self.validators.append(item)
        return self

    def set_required(self, required: bool) -> None:
        self.required = required

    def is_required(self) -> bool:
        return self.required

    def validate(self) -> bool:
        """Validate the current input with every validator.

        Reported errors are appended to ``feedback``.

        Returns:
            True if no validator reported an error
        """
        validatable = Validatable(self.input)
        for validator in self.validators:
            validator.validate(validatable)
        if validatable.errors:
            logger.debug("%r reported %d error(s)", self, len(validatable.errors))
        self.feedback.extend(validatable.errors)
        return validatable.is_valid


class TextField(FormComponent):
    def create_tag(self) -> ComponentTag:
        return ComponentTag("input", {"id": self.id, "type": "text"})


class TextArea(FormComponent):
    tag_name = "textarea"
