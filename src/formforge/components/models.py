"""Value models bound to components."""

from typing import Any


def get_path(target: Any, expression: str) -> Any:
    """Read a dotted path from an object graph.

    Mapping keys and attributes are both supported. A None intermediate
    value short-circuits to None.
    """
    current = target
    for segment in expression.split("."):
        if current is None:
            return None
        if isinstance(current, dict):
            current = current.get(segment)
        else:
            current = getattr(current, segment)
    return current


def set_path(target: Any, expression: str, value: Any) -> None:
    """Write a value at a dotted path in an object graph."""
    *parents, last = expression.split(".")
    owner = get_path(target, ".".join(parents)) if parents else target
    if owner is None:
        raise ValueError(
            f"Cannot set '{expression}': an intermediate value is None"
        )
    if isinstance(owner, dict):
        owner[last] = value
    else:
        setattr(owner, last, value)


class Model:
    """A model holding a plain value."""

    def __init__(self, value: Any = None):
        self.value = value

    def get_object(self) -> Any:
        return self.value

    def set_object(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Model(object={self.value!r})"


class PropertyModel:
    """A model reading and writing a property of a target object.

    Attributes:
        target: The root object
        expression: Dotted property path relative to the target
    """

    def __init__(self, target: Any, expression: str):
        if not expression:
            raise ValueError("expression is required")
        self.target = target
        self.expression = expression

    def get_object(self) -> Any:
        return get_path(self.target, self.expression)

    def set_object(self, value: Any) -> None:
        set_path(self.target, self.expression, value)

    def __repr__(self) -> str:
        return (
            f"PropertyModel(target={type(self.target).__name__}, "
            f"expression={self.expression!r})"
        )
