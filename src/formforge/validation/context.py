"""Process-wide validation configuration.

The context is built once at application startup and read-only afterwards:

    ValidationConfiguration().register_tag_modifier("Even", EvenTagModifier()).configure()

Validators read the installed context through ``ValidationConfiguration.get()``
unless one is passed to them explicitly. Reconfiguring replaces the whole
context; nothing mutates an installed one, so concurrent readers need no lock.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from formforge.validation.constraints import ConstraintKind
from formforge.validation.engine import AnnotatedConstraintEngine
from formforge.validation.errors import NotConfiguredError
from formforge.validation.modifiers import PatternTagModifier, SizeTagModifier
from formforge.validation.resolvers import PropertyModelResolver
from formforge.validation.translator import DefaultViolationTranslator, MessageBundle
from formforge.validation.types import (
    ConstraintEngine,
    Property,
    PropertyResolver,
    TagModifier,
    ViolationTranslator,
)

logger = logging.getLogger(__name__)


def _key(kind: str | ConstraintKind) -> str:
    return kind.value if isinstance(kind, ConstraintKind) else str(kind)


@dataclass
class ValidationSettings:
    """Settings read from the environment.

    Attributes:
        messages_path: YAML file overriding the default violation messages
    """

    messages_path: Path | None = None

    @classmethod
    def from_env(cls) -> ValidationSettings:
        """Create settings from environment variables.

        FORMFORGE_MESSAGES_PATH: path of a message override file
        """
        messages_path = os.environ.get("FORMFORGE_MESSAGES_PATH")
        return cls(messages_path=Path(messages_path) if messages_path else None)


@dataclass(frozen=True)
class ValidationContext:
    """Immutable validation configuration.

    Attributes:
        engine: The constraint engine
        resolvers: Property resolvers, tried in order
        tag_modifiers: Tag modifier per constraint kind
        translator: Violation to message translator
    """

    engine: ConstraintEngine
    resolvers: tuple[PropertyResolver, ...] = ()
    tag_modifiers: Mapping[str, TagModifier] = field(
        default_factory=lambda: MappingProxyType({})
    )
    translator: ViolationTranslator | None = None

    def __post_init__(self) -> None:
        if self.translator is None:
            object.__setattr__(self, "translator", DefaultViolationTranslator())

    def resolve_property(self, component: Any) -> Property | None:
        """Ask each resolver in turn; the first Property found wins."""
        for resolver in self.resolvers:
            prop = resolver.resolve(component)
            if prop is not None:
                logger.debug("%r resolved %s for %r", resolver, prop, component)
                return prop
        return None

    def get_tag_modifier(self, kind: str) -> TagModifier | None:
        return self.tag_modifiers.get(_key(kind))


class ValidationConfiguration:
    """Builder for the process-wide ValidationContext.

    Starts with the bundled defaults: the annotated constraint engine,
    the PropertyModel resolver, Size and Pattern tag modifiers and the
    default translator.

    Example:
        # At application startup
        ValidationConfiguration().add_resolver(MyResolver()).configure()

        # Later, anywhere
        context = ValidationConfiguration.get()
    """

    _installed: ValidationContext | None = None

    def __init__(self, settings: ValidationSettings | None = None):
        self.settings = settings or ValidationSettings.from_env()
        self._engine: ConstraintEngine | None = None
        self._resolvers: list[PropertyResolver] = [PropertyModelResolver()]
        self._tag_modifiers: dict[str, TagModifier] = {
            ConstraintKind.SIZE.value: SizeTagModifier(),
            ConstraintKind.PATTERN.value: PatternTagModifier(),
        }
        self._translator: ViolationTranslator | None = None

    def set_engine(self, engine: ConstraintEngine) -> ValidationConfiguration:
        self._engine = engine
        return self

    def add_resolver(self, resolver: PropertyResolver) -> ValidationConfiguration:
        """Add a resolver, tried after the ones already registered."""
        self._resolvers.append(resolver)
        return self

    def clear_resolvers(self) -> ValidationConfiguration:
        self._resolvers.clear()
        return self

    def register_tag_modifier(
        self,
        kind: str,
        modifier: TagModifier,
    ) -> ValidationConfiguration:
        """Register the tag modifier for a constraint kind.

        A kind has at most one modifier; registering again replaces it.
        """
        key = _key(kind)
        if key in self._tag_modifiers:
            logger.debug("Replacing tag modifier for %s", key)
        self._tag_modifiers[key] = modifier
        return self

    def set_translator(self, translator: ViolationTranslator) -> ValidationConfiguration:
        self._translator = translator
        return self

    def build(self) -> ValidationContext:
        """Build a context without installing it."""
        translator = self._translator
        if translator is None:
            translator = DefaultViolationTranslator(
                MessageBundle.load(self.settings.messages_path)
            )
        return ValidationContext(
            engine=self._engine or AnnotatedConstraintEngine(),
            resolvers=tuple(self._resolvers),
            tag_modifiers=MappingProxyType(dict(self._tag_modifiers)),
            translator=translator,
        )

    def configure(self) -> ValidationContext:
        """Build the context and install it process-wide.

        Call once at startup. Calling again replaces the installed context.
        """
        context = self.build()
        if ValidationConfiguration._installed is not None:
            logger.info("Replacing installed validation configuration")
        ValidationConfiguration._installed = context
        logger.info(
            "Validation configured: %d resolver(s), tag modifiers for %s",
            len(context.resolvers),
            ", ".join(sorted(context.tag_modifiers)) or "nothing",
        )
        return context

    @classmethod
    def get(cls) -> ValidationContext:
        """Get the installed context.

        Raises:
            NotConfiguredError: If configure() has not been called
        """
        if cls._installed is None:
            raise NotConfiguredError(
                "Validation is not configured. Call "
                "ValidationConfiguration().configure() at application startup."
            )
        return cls._installed

    @classmethod
    def is_configured(cls) -> bool:
        return cls._installed is not None

    @classmethod
    def clear(cls) -> None:
        """Remove the installed context. Primarily for testing."""
        cls._installed = None
