"""Constraint engine reading ``Annotated`` field metadata.

Supports three kinds of owner types:
- pydantic models: constraints come from ``model_fields[name].metadata``
- dataclasses and plain annotated classes: constraints come from
  ``typing.get_type_hints(..., include_extras=True)``

Dotted paths ("address.street") descend through the declared field types.
"""

import logging
import types
import typing
from typing import Annotated, Any, Sequence, Union, get_args, get_origin

from pydantic import BaseModel

from formforge.validation.constraints import Constraint, kind_of
from formforge.validation.iterator import ConstraintIterator
from formforge.validation.types import (
    ConstraintDescriptor,
    Property,
    Violation,
)

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)


def _unwrap(annotation: Any) -> tuple[Any, list[Any]]:
    """Strip ``Annotated`` and ``Optional`` wrappers.

    Returns the bare type and the collected ``Annotated`` metadata.
    """
    metadata: list[Any] = []
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            base, *extras = get_args(annotation)
            metadata.extend(extras)
            annotation = base
            continue
        if origin is Union or origin is types.UnionType:
            args = [arg for arg in get_args(annotation) if arg is not _NONE_TYPE]
            if len(args) == 1:
                annotation = args[0]
                continue
        return annotation, metadata


def _declared_fields(owner_type: type) -> dict[str, tuple[Any, list[Any]]]:
    """Map field name to (bare type, metadata) for an owner type."""
    if isinstance(owner_type, type) and issubclass(owner_type, BaseModel):
        fields: dict[str, tuple[Any, list[Any]]] = {}
        for name, info in owner_type.model_fields.items():
            bare, extra = _unwrap(info.annotation)
            fields[name] = (bare, list(info.metadata) + extra)
        return fields

    try:
        hints = typing.get_type_hints(owner_type, include_extras=True)
    except (NameError, TypeError):
        logger.debug("Could not read type hints of %r", owner_type)
        return {}
    return {name: _unwrap(hint) for name, hint in hints.items()}


def _build_descriptor(
    constraint: Constraint,
    inherited_groups: frozenset[type] = frozenset(),
) -> ConstraintDescriptor:
    groups = frozenset(constraint.groups) or inherited_groups
    composing = tuple(
        _build_descriptor(part, groups)
        for part in getattr(constraint, "parts", ())
    )
    return ConstraintDescriptor(
        constraint=constraint,
        kind=kind_of(constraint),
        groups=groups,
        composing=composing,
    )


class AnnotatedConstraintEngine:
    """Constraint engine backed by ``Annotated`` metadata.

    Descriptor lookups are cached per (owner type, path). The cache only
    grows and entries never change once computed.
    """

    def __init__(self) -> None:
        self._cache: dict[tuple[type, str], tuple[ConstraintDescriptor, ...] | None] = {}

    def _lookup(self, owner_type: type, path: str) -> tuple[ConstraintDescriptor, ...] | None:
        key = (owner_type, path)
        if key in self._cache:
            return self._cache[key]

        current: Any = owner_type
        metadata: list[Any] | None = None
        for segment in path.split("."):
            if not isinstance(current, type):
                metadata = None
                break
            declared = _declared_fields(current).get(segment)
            if declared is None:
                metadata = None
                break
            current, metadata = declared

        descriptors = None
        if metadata is not None:
            descriptors = tuple(
                _build_descriptor(item) for item in metadata if isinstance(item, Constraint)
            )
        self._cache[key] = descriptors
        return descriptors

    def has_property(self, owner_type: type, name: str) -> bool:
        """Check if the owner type declares the (possibly nested) field."""
        return self._lookup(owner_type, name) is not None

    def constraints_for_property(
        self,
        owner_type: type,
        name: str,
    ) -> Sequence[ConstraintDescriptor]:
        """Return the top-level descriptors declared on the property.

        Unknown properties yield an empty sequence.
        """
        return self._lookup(owner_type, name) or ()

    def validate_value(
        self,
        owner: Any,
        name: str,
        value: Any,
        groups: Sequence[type] = (),
    ) -> list[Violation]:
        """Validate a candidate value against the property's constraints.

        Args:
            owner: The owning type or an instance of it
            name: Field path
            value: Candidate value
            groups: Groups to validate; empty means the Default group

        Returns:
            Violations in descriptor iteration order

        Raises:
            ValueError: If the owner type does not declare the property
        """
        prop = Property(owner, name)
        owner_type = prop.owner_type
        if not self.has_property(owner_type, name):
            raise ValueError(
                f"'{name}' is not a declared property of {owner_type.__name__}"
            )

        violations = []
        for descriptor in ConstraintIterator(self, prop, tuple(groups)):
            if not descriptor.constraint.is_valid(value):
                violations.append(
                    Violation(
                        descriptor=descriptor,
                        invalid_value=value,
                        property_path=name,
                        owner_type=owner_type,
                    )
                )
        return violations
