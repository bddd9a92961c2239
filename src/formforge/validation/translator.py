"""Violation translation.

Turns engine violations into ValidationErrors:
1. MessageBundle: message templates keyed by constraint and target type
2. MessageInterpolator: fills {placeholders} in a template
3. DefaultViolationTranslator: picks the template and builds the error
"""

import logging
import re
from collections.abc import Sized
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from formforge.validation.types import Severity, ValidationError, Violation

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES_PATH = Path(__file__).parent / "messages.yaml"

FALLBACK_TEMPLATE = "{label} is invalid"


# =============================================================================
# Message Bundle
# =============================================================================


class MessageBundle:
    """Message templates keyed by "<key>" or "<key>.<target>"."""

    def __init__(self, messages: dict[str, str] | None = None):
        self.messages = dict(messages or {})

    @classmethod
    def load(cls, override_path: Path | None = None) -> "MessageBundle":
        """Load the packaged defaults, merged with an optional override file.

        A missing override file is logged and ignored.
        """
        messages = _read_yaml(DEFAULT_MESSAGES_PATH)

        if override_path is not None:
            if override_path.exists():
                messages.update(_read_yaml(override_path))
                logger.info("Loaded message overrides from %s", override_path)
            else:
                logger.warning("Message override file not found: %s", override_path)

        return cls(messages)

    def get(self, key: str) -> str | None:
        return self.messages.get(key)

    def lookup(self, keys: list[str]) -> str | None:
        """Return the template of the first key present."""
        for key in keys:
            template = self.messages.get(key)
            if template is not None:
                return template
        return None


def _read_yaml(path: Path) -> dict[str, str]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Message file {path} must contain a mapping")
    return {str(key): str(value) for key, value in data.items()}


# =============================================================================
# Interpolation
# =============================================================================


class MessageInterpolator:
    """Interpolates variables into message templates.

    Supports {name} placeholders. Unknown placeholders are left as-is.
    """

    PATTERN = re.compile(r"\{(?P<name>\w+)\}")

    def interpolate(self, template: str, variables: dict[str, Any]) -> str:
        def replace(match: re.Match) -> str:
            name = match.group("name")
            if name not in variables:
                return match.group(0)
            return self._format_value(variables[name])

        return self.PATTERN.sub(replace, template)

    def _format_value(self, value: Any) -> str:
        """Format a value for display."""
        if value is None:
            return ""
        if isinstance(value, bool):
            return "Yes" if value else "No"
        if isinstance(value, datetime):
            return value.strftime("%B %d, %Y %I:%M %p")
        if isinstance(value, date):
            return value.strftime("%B %d, %Y")
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, Decimal):
            return f"{value:f}"
        if isinstance(value, list):
            return ", ".join(str(v) for v in value)
        return str(value)


def to_title_case(name: str) -> str:
    """Convert camelCase or snake_case to Title Case."""
    result = re.sub(r"([A-Z])", r" \1", name.replace("_", " "))
    return " ".join(result.split()).title()


def to_error_code(kind: str) -> str:
    """Convert a constraint kind to an error code ("NotNull" -> "NOT_NULL")."""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", kind).upper()


def target_of(value: Any) -> str | None:
    """Classify a rejected value for message lookup."""
    if isinstance(value, str):
        return "str"
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return "number"
    if isinstance(value, Sized):
        return "collection"
    return None


# =============================================================================
# Translator
# =============================================================================


class DefaultViolationTranslator:
    """Converts violations to ValidationErrors using a message bundle.

    Template resolution order:
    1. The constraint's own ``message``, itself looked up as a bundle key
    2. "<message key>.<target>", then "<message key>"
    3. "<kind>.<target>", then "<kind>"
    4. A generic fallback
    """

    def __init__(
        self,
        bundle: MessageBundle | None = None,
        labels: dict[str, str] | None = None,
    ):
        self.bundle = bundle if bundle is not None else MessageBundle.load()
        self.labels = labels or {}
        self.interpolator = MessageInterpolator()

    def convert(self, violation: Violation) -> ValidationError:
        variables = self._variables(violation)
        template = self._template(violation)
        return ValidationError(
            message=self.interpolator.interpolate(template, variables),
            code=to_error_code(violation.kind),
            field=violation.property_path,
            severity=Severity.ERROR,
            variables=variables,
        )

    def _template(self, violation: Violation) -> str:
        constraint = violation.constraint
        own = getattr(constraint, "message", None)
        if own:
            return self.bundle.get(own) or own

        keys: list[str] = []
        target = target_of(violation.invalid_value)
        message_key = getattr(constraint, "message_key", None)
        candidates = [message_key() if message_key else violation.kind, violation.kind]
        for key in dict.fromkeys(candidates):
            if target:
                keys.append(f"{key}.{target}")
            keys.append(key)

        return self.bundle.lookup(keys) or FALLBACK_TEMPLATE

    def _variables(self, violation: Violation) -> dict[str, Any]:
        attributes = getattr(violation.constraint, "attributes", None)
        variables: dict[str, Any] = dict(attributes()) if attributes else {}
        variables["label"] = self._label(violation.property_path)
        variables["value"] = violation.invalid_value
        return variables

    def _label(self, path: str) -> str:
        if path in self.labels:
            return self.labels[path]
        return to_title_case(path.rsplit(".", 1)[-1])
