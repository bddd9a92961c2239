"""formforge validation integration.

Connects form components to a constraint engine:
- Resolves the property a component edits (explicitly or via resolvers)
- Validates submitted values under validation groups
- Derives the component's required flag from not-null style constraints
- Lets tag modifiers add markup attributes for declared constraints

Usage:
    from formforge.validation import (
        NotBlank, Size, PropertyValidator, ValidationConfiguration,
    )

    class Person(BaseModel):
        name: Annotated[str | None, NotBlank(), Size(max=40)] = None

    # At application startup
    ValidationConfiguration().configure()

    # Per form field
    field = TextField("name", PropertyModel(person, "name"))
    field.add(PropertyValidator())
"""

from formforge.validation.constraints import (
    NOT_NULL_KINDS,
    Composite,
    Constraint,
    ConstraintKind,
    Email,
    Max,
    Min,
    NotBlank,
    NotEmpty,
    NotNull,
    Pattern,
    Size,
)
from formforge.validation.context import (
    ValidationConfiguration,
    ValidationContext,
    ValidationSettings,
)
from formforge.validation.engine import AnnotatedConstraintEngine
from formforge.validation.errors import (
    BindingConflictError,
    NotConfiguredError,
    UnresolvablePropertyError,
    ValidationIntegrationError,
)
from formforge.validation.iterator import (
    ConstraintIterator,
    is_default_applicable,
    matches_groups,
)
from formforge.validation.modifiers import PatternTagModifier, SizeTagModifier
from formforge.validation.property_validator import PropertyValidator
from formforge.validation.resolvers import (
    PropertyModelResolver,
    resolve_property_model_from,
)
from formforge.validation.translator import (
    DefaultViolationTranslator,
    MessageBundle,
    MessageInterpolator,
)
from formforge.validation.types import (
    ConstraintDescriptor,
    ConstraintEngine,
    Default,
    Property,
    PropertyResolver,
    Severity,
    TagModifier,
    ValidationError,
    Violation,
    ViolationTranslator,
)

__all__ = [
    # Types
    "ConstraintDescriptor",
    "ConstraintEngine",
    "Default",
    "Property",
    "PropertyResolver",
    "Severity",
    "TagModifier",
    "ValidationError",
    "Violation",
    "ViolationTranslator",
    # Constraints
    "NOT_NULL_KINDS",
    "Composite",
    "Constraint",
    "ConstraintKind",
    "Email",
    "Max",
    "Min",
    "NotBlank",
    "NotEmpty",
    "NotNull",
    "Pattern",
    "Size",
    # Engine
    "AnnotatedConstraintEngine",
    "ConstraintIterator",
    "is_default_applicable",
    "matches_groups",
    # Configuration
    "ValidationConfiguration",
    "ValidationContext",
    "ValidationSettings",
    # Collaborators
    "DefaultViolationTranslator",
    "MessageBundle",
    "MessageInterpolator",
    "PatternTagModifier",
    "PropertyModelResolver",
    "SizeTagModifier",
    "resolve_property_model_from",
    # Validator
    "PropertyValidator",
    # Errors
    "BindingConflictError",
    "NotConfiguredError",
    "UnresolvablePropertyError",
    "ValidationIntegrationError",
]
