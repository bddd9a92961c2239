"""Core types for the formforge validation integration.

This module defines the foundational types shared by the validator,
the constraint engine and the pluggable collaborators:
- Property: an owning type plus a field path, the unit of validation
- ConstraintDescriptor: engine metadata for one declared constraint
- Violation: a failure of a value against one constraint
- ValidationError: the user-facing message reported to a component
- Capability protocols: PropertyResolver, TagModifier, ViolationTranslator,
  ConstraintEngine
"""

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Sequence


class Default:
    """Marker for the default validation group.

    Constraints declared without groups belong to this group implicitly.
    The engine does not add this marker to such constraints; their group
    set stays empty.
    """


class Severity(Enum):
    """Validation result severity."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Property:
    """An owning type and a field path.

    Attributes:
        owner: The owning type. An instance may be passed, in which case
            its type is used for constraint lookup.
        name: Dotted field path understood by the constraint engine
    """

    owner: Any
    name: str

    @property
    def owner_type(self) -> type:
        if isinstance(self.owner, type):
            return self.owner
        return type(self.owner)

    def __str__(self) -> str:
        return f"{self.owner_type.__name__}.{self.name}"


@dataclass(frozen=True)
class ConstraintDescriptor:
    """Engine metadata for one declared constraint on a property.

    Attributes:
        constraint: The constraint annotation instance
        kind: Stable identifier of the constraint type (e.g. "NotNull")
        groups: Declared groups; empty when none were declared
        composing: Descriptors of the constraints this one is composed of
    """

    constraint: Any
    kind: str
    groups: frozenset[type] = frozenset()
    composing: tuple["ConstraintDescriptor", ...] = ()


@dataclass(frozen=True)
class Violation:
    """A failure of a value against one constraint.

    Violations are data: the engine returns them, translators turn them
    into messages. They are never raised.
    """

    descriptor: ConstraintDescriptor
    invalid_value: Any
    property_path: str
    owner_type: type

    @property
    def constraint(self) -> Any:
        return self.descriptor.constraint

    @property
    def kind(self) -> str:
        return self.descriptor.kind


@dataclass(frozen=True)
class ValidationError:
    """A single user-facing validation error.

    Attributes:
        message: Human-readable message
        code: Machine-readable error code (e.g., "NOT_NULL")
        field: Field path this error relates to
        severity: ERROR or WARNING
    """

    message: str
    code: str
    field: str | None = None
    severity: Severity = Severity.ERROR
    variables: dict[str, Any] = dataclasses.field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "field": self.field,
            "severity": self.severity.value,
        }

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Capability Protocols
# =============================================================================


class PropertyResolver(Protocol):
    """Derives a Property from a form component.

    Resolvers are tried in registration order; the first one returning
    a Property wins.
    """

    def resolve(self, component: Any) -> Property | None:
        ...


class TagModifier(Protocol):
    """Mutates a component's markup tag for a matched constraint."""

    def modify(self, component: Any, tag: Any, constraint: Any) -> None:
        ...


class ViolationTranslator(Protocol):
    """Converts one violation into a user-facing error."""

    def convert(self, violation: Violation) -> "ValidationError | str":
        ...


class ConstraintEngine(Protocol):
    """The constraint validation capability.

    Treated as a black box by the validator: it only needs constraint
    metadata for a property and single-value validation.
    """

    def constraints_for_property(
        self,
        owner_type: type,
        name: str,
    ) -> Sequence[ConstraintDescriptor]:
        """Return descriptors declared on the property, in engine order.

        Unknown properties yield an empty sequence.
        """
        ...

    def validate_value(
        self,
        owner: Any,
        name: str,
        value: Any,
        groups: Sequence[type] = (),
    ) -> list[Violation]:
        """Validate a candidate value for owner.name under groups.

        An empty groups sequence validates the Default group.
        """
        ...
