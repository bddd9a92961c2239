"""Tag modifiers for constraint-driven markup attributes."""

from typing import Any

from formforge.components.base import ComponentTag


class SizeTagModifier:
    """Sets ``maxlength`` on text inputs and textareas from a Size constraint."""

    def modify(self, component: Any, tag: ComponentTag, constraint: Any) -> None:
        if constraint.max is None:
            return
        if tag.name == "textarea" or (
            tag.name == "input" and tag.get("type") in (None, "text", "password", "email")
        ):
            tag.put("maxlength", constraint.max)


class PatternTagModifier:
    """Sets the ``pattern`` attribute on inputs from a Pattern constraint."""

    def modify(self, component: Any, tag: ComponentTag, constraint: Any) -> None:
        if tag.name == "input":
            tag.put("pattern", constraint.regexp)
