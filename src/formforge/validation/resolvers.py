"""Property resolvers.

A resolver derives the Property a component edits from the component
itself. The configuration holds an ordered chain of resolvers; the first
one returning a Property wins.
"""

import logging
from typing import Any

from formforge.components.models import PropertyModel, get_path
from formforge.validation.types import Property

logger = logging.getLogger(__name__)


def resolve_property_model_from(component: Any) -> PropertyModel | None:
    """Find the PropertyModel attached to a component.

    Models exposing ``wrapped_model`` are unwrapped until a PropertyModel
    is found.
    """
    model = getattr(component, "model", None)
    seen: set[int] = set()
    while model is not None and id(model) not in seen:
        if isinstance(model, PropertyModel):
            return model
        seen.add(id(model))
        model = getattr(model, "wrapped_model", None)
    return None


class PropertyModelResolver:
    """Resolves components bound through a PropertyModel.

    The owner is the runtime type of the object holding the last path
    segment, so "address.street" on a Person resolves to
    ``Property(Address, "street")``.
    """

    def resolve(self, component: Any) -> Property | None:
        model = resolve_property_model_from(component)
        if model is None:
            return None

        *parents, name = model.expression.split(".")
        try:
            owner = get_path(model.target, ".".join(parents)) if parents else model.target
        except AttributeError:
            logger.debug("Could not walk %r for %r", model, component)
            return None

        if owner is None or not hasattr(owner, name):
            return None

        return Property(type(owner), name)
