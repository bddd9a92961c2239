"""Constraint annotations.

Constraints are declared as ``Annotated`` metadata on model fields:

    class Person(BaseModel):
        name: Annotated[str | None, NotBlank(), Size(max=40)] = None
        nickname: Annotated[str | None, Size(max=10, groups=(Strict,))] = None

Every constraint carries the groups it belongs to and an optional
message template overriding the bundle lookup. ``None`` is valid for
every constraint outside the not-null family.
"""

import re
from collections.abc import Sized
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar


class ConstraintKind(str, Enum):
    """Stable identifiers of the bundled constraint types.

    Custom constraints may use any other string as their kind.
    """

    NOT_NULL = "NotNull"
    NOT_BLANK = "NotBlank"
    NOT_EMPTY = "NotEmpty"
    SIZE = "Size"
    MIN = "Min"
    MAX = "Max"
    PATTERN = "Pattern"
    EMAIL = "Email"


# Constraint kinds that make a field required
NOT_NULL_KINDS: frozenset[str] = frozenset(
    kind.value
    for kind in (ConstraintKind.NOT_NULL, ConstraintKind.NOT_BLANK, ConstraintKind.NOT_EMPTY)
)

# Email: Basic RFC 5322 compliant pattern
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
)


def kind_of(constraint: Any) -> str:
    """Return the stable kind identifier of a constraint instance."""
    kind = getattr(constraint, "kind", None)
    if kind is None:
        return type(constraint).__name__
    if isinstance(kind, ConstraintKind):
        return kind.value
    return str(kind)


def as_number(value: Any) -> float | Decimal | None:
    """Return value as a number, converting numeric strings.

    Returns None when the value is not a number.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class Constraint:
    """Base class for constraint annotations."""

    kind: ClassVar[str] = ""

    groups: tuple[type, ...] = field(default=(), kw_only=True)
    message: str | None = field(default=None, kw_only=True)

    def is_valid(self, value: Any) -> bool:
        raise NotImplementedError("Subclasses must implement is_valid()")

    def attributes(self) -> dict[str, Any]:
        """Constraint attributes available to message templates."""
        return {}

    def message_key(self) -> str:
        """Key of the default message in the message bundle."""
        return kind_of(self)


@dataclass(frozen=True)
class NotNull(Constraint):
    kind: ClassVar[str] = ConstraintKind.NOT_NULL

    def is_valid(self, value: Any) -> bool:
        return value is not None


@dataclass(frozen=True)
class NotBlank(Constraint):
    """The value must be a string with at least one non-whitespace character."""

    kind: ClassVar[str] = ConstraintKind.NOT_BLANK

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return False
        return str(value).strip() != ""


@dataclass(frozen=True)
class NotEmpty(Constraint):
    """The value must be non-null and have a non-zero length."""

    kind: ClassVar[str] = ConstraintKind.NOT_EMPTY

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, Sized):
            return len(value) > 0
        return True


@dataclass(frozen=True)
class Size(Constraint):
    """Length bounds for strings and collections, inclusive."""

    kind: ClassVar[str] = ConstraintKind.SIZE

    min: int = 0
    max: int | None = None

    def is_valid(self, value: Any) -> bool:
        if value is None or not isinstance(value, Sized):
            return True
        length = len(value)
        if length < self.min:
            return False
        if self.max is not None and length > self.max:
            return False
        return True

    def attributes(self) -> dict[str, Any]:
        return {"min": self.min, "max": self.max}

    def message_key(self) -> str:
        if self.max is None:
            return "Size.min"
        return "Size"


@dataclass(frozen=True)
class Min(Constraint):
    """The value must be a number, or a numeric string, at least ``limit``."""

    kind: ClassVar[str] = ConstraintKind.MIN

    limit: float

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        number = as_number(value)
        return number is not None and number >= self.limit

    def attributes(self) -> dict[str, Any]:
        return {"limit": self.limit}


@dataclass(frozen=True)
class Max(Constraint):
    """The value must be a number, or a numeric string, at most ``limit``."""

    kind: ClassVar[str] = ConstraintKind.MAX

    limit: float

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        number = as_number(value)
        return number is not None and number <= self.limit

    def attributes(self) -> dict[str, Any]:
        return {"limit": self.limit}


@dataclass(frozen=True)
class Pattern(Constraint):
    """The whole string must match the regular expression."""

    kind: ClassVar[str] = ConstraintKind.PATTERN

    regexp: str
    flags: int = 0

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        return re.fullmatch(self.regexp, str(value), self.flags) is not None

    def attributes(self) -> dict[str, Any]:
        return {"regexp": self.regexp}


@dataclass(frozen=True)
class Email(Constraint):
    kind: ClassVar[str] = ConstraintKind.EMAIL

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        return EMAIL_PATTERN.match(str(value)) is not None


@dataclass(frozen=True)
class Composite(Constraint):
    """A named constraint made of other constraints.

    The composite itself always passes; its parts are checked and report
    their own violations. Parts without groups inherit the composite's.

    Example:
        Username = Composite("Username", (NotBlank(), Size(min=3, max=20)))
    """

    name: str
    parts: tuple[Constraint, ...] = ()

    @property
    def kind(self) -> str:  # type: ignore[override]
        return self.name

    def is_valid(self, value: Any) -> bool:
        return True
