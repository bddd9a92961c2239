"""Minimal component surface driven by formforge validators."""

from formforge.components.base import (
    Behavior,
    Component,
    ComponentTag,
    FormComponent,
    TextArea,
    TextField,
    Validatable,
)
from formforge.components.models import Model, PropertyModel, get_path, set_path

__all__ = [
    "Behavior",
    "Component",
    "ComponentTag",
    "FormComponent",
    "Model",
    "PropertyModel",
    "TextArea",
    "TextField",
    "Validatable",
    "get_path",
    "set_path",
]
