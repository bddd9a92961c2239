"""Validator delegating a form component's value to the constraint engine.

The integration must first be configured through ValidationConfiguration,
or a ValidationContext passed explicitly.

The validator needs a Property, unless one can be resolved from the
component. The default configuration resolves components bound through a
PropertyModel, so those need no explicit Property.

The validator sets the required flag of its component when a not-null
style constraint (NotNull, NotBlank, NotEmpty) applies to its groups. The
flag is only ever set to True: a component already required is never made
optional by this validator.

Tag modifiers registered in the configuration may mutate the component's
tag for the constraints that apply to the validator's groups.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from formforge.components.base import Behavior, FormComponent, Validatable
from formforge.validation.constraints import NOT_NULL_KINDS
from formforge.validation.context import ValidationConfiguration, ValidationContext
from formforge.validation.errors import BindingConflictError, UnresolvablePropertyError
from formforge.validation.iterator import (
    ConstraintIterator,
    is_default_applicable,
    matches_groups,
)
from formforge.validation.resolvers import resolve_property_model_from
from formforge.validation.types import ConstraintDescriptor, Property

logger = logging.getLogger(__name__)

GroupsProvider = Callable[[], Sequence[type]]


class PropertyValidator(Behavior):
    """Validates one form component against its property's constraints.

    Instances are not reusable: each binds to exactly one component.

    Args:
        *groups: Validation groups; none means the Default group
        prop: Explicit Property; resolved from the component when omitted
        groups_provider: Called for the groups on every use, instead of
            the static ``groups``
        context: Configuration to use instead of the installed one
    """

    def __init__(
        self,
        *groups: type,
        prop: Property | None = None,
        groups_provider: GroupsProvider | None = None,
        context: ValidationContext | None = None,
    ):
        if groups and groups_provider is not None:
            raise ValueError("Pass either groups or groups_provider, not both")
        self.component: FormComponent | None = None
        self._property = prop
        self._groups = tuple(groups)
        self._groups_provider = groups_provider
        self._context = context
        # Set on the first configuration pass, never reset
        self._required_flag_set = False

    @classmethod
    def for_property(cls, prop: Property, *groups: type) -> "PropertyValidator":
        return cls(*groups, prop=prop)

    # -------------------------------------------------------------------------
    # Configuration and resolution
    # -------------------------------------------------------------------------

    @property
    def context(self) -> ValidationContext:
        if self._context is not None:
            return self._context
        return ValidationConfiguration.get()

    @property
    def groups(self) -> tuple[type, ...]:
        if self._groups_provider is not None:
            return tuple(self._groups_provider() or ())
        return self._groups

    def resolve_property(self) -> Property:
        """Return the Property, resolving and caching it on first use.

        Raises:
            UnresolvablePropertyError: If no resolver can derive a Property
        """
        if self._property is None:
            prop = self.context.resolve_property(self.component)
            if prop is None:
                model = resolve_property_model_from(self.component)
                if model is None:
                    model = getattr(self.component, "model", None)
                raise UnresolvablePropertyError(
                    self._unresolvable_message(model),
                    component=self.component,
                    model=model,
                )
            logger.debug("Resolved %s for %r", prop, self.component)
            self._property = prop
        return self._property

    def _unresolvable_message(self, model: Any) -> str:
        message = (
            f"Could not resolve a property from component {self.component!r}. "
            "Possible causes are a typo in the property expression, a None "
            "value along the path, or a model no PropertyResolver understands."
        )
        if model is not None:
            message += f" Model: {model!r}"
        return message

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def bind(self, component: Any) -> None:
        if self.component is not None:
            raise BindingConflictError(
                f"This validator is already bound to {self.component!r}. "
                "Validators cannot be reused; create a new one."
            )
        if not isinstance(component, FormComponent):
            raise BindingConflictError(
                f"{type(self).__name__} can only be added to form components, "
                f"not {component!r}"
            )
        self.component = component

    def on_configure(self, component: Any) -> None:
        # The model must be reachable here, so the required flag is derived
        # on the first configuration pass rather than at bind time.
        if self._required_flag_set:
            return
        self._required_flag_set = True
        if self.is_required():
            self.component.set_required(True)

    def on_component_tag(self, component: Any, tag: Any) -> None:
        context = self.context
        prop = self.resolve_property()

        for descriptor in ConstraintIterator(context.engine, prop, self.groups):
            modifier = context.get_tag_modifier(descriptor.kind)
            if modifier is not None:
                logger.debug("Applying %r for %s on %r", modifier, descriptor.kind, component)
                modifier.modify(component, tag, descriptor.constraint)

    def detach(self, component: Any) -> None:
        detach = getattr(self._groups_provider, "detach", None)
        if callable(detach):
            detach()

    # -------------------------------------------------------------------------
    # Required flag
    # -------------------------------------------------------------------------

    def _find_not_null_constraints(self) -> list[ConstraintDescriptor]:
        context = self.context
        prop = self.resolve_property()
        return [
            descriptor
            for descriptor in ConstraintIterator(context.engine, prop)
            if descriptor.kind in NOT_NULL_KINDS
        ]

    def is_required(self) -> bool:
        """Check if a not-null style constraint applies to this validator's groups."""
        constraints = self._find_not_null_constraints()
        if not constraints:
            return False

        validator_groups = set(self.groups)

        for descriptor in constraints:
            if not validator_groups and is_default_applicable(descriptor.groups):
                return True
            if validator_groups and matches_groups(descriptor.groups, validator_groups):
                return True

        return False

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, validatable: Validatable) -> None:
        """Validate the candidate value and report translated violations."""
        context = self.context
        prop = self.resolve_property()

        violations = context.engine.validate_value(
            prop.owner, prop.name, validatable.value, self.groups
        )

        for violation in violations:
            validatable.error(context.translator.convert(violation))
