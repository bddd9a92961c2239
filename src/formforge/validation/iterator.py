"""Iteration over the constraint descriptors of a property.

Group matching lives here so the required-flag derivation, the tag
modification pass and the engine's value validation all agree on which
constraints apply to a set of groups.
"""

from collections.abc import Collection, Iterator, Sequence
from typing import Any

from formforge.validation.types import ConstraintDescriptor, Default, Property

_DEFAULT_ONLY: frozenset[type] = frozenset({Default})


def is_default_applicable(descriptor_groups: Collection[type]) -> bool:
    """Check if a constraint belongs to the Default group.

    A constraint declared without groups is a Default member even though
    its group set is empty, so the empty check is required.
    """
    return len(descriptor_groups) == 0 or Default in descriptor_groups


def matches_groups(descriptor_groups: Collection[type], groups: Collection[type]) -> bool:
    """Check if a constraint applies to at least one of the given groups.

    An empty ``groups`` collection means "Default group only".
    """
    if not groups:
        return is_default_applicable(descriptor_groups)
    effective = frozenset(descriptor_groups) or _DEFAULT_ONLY
    return not effective.isdisjoint(groups)


class ConstraintIterator:
    """Single-pass iterator over a property's constraint descriptors.

    Composing constraints are visited depth-first, right after the
    constraint they compose. With ``groups=None`` every descriptor is
    yielded; otherwise only those matching the groups (see
    ``matches_groups``).

    Descriptor order is whatever the engine reports; the bundled engine
    reports declaration order, other engines may not.
    """

    def __init__(
        self,
        engine: Any,
        prop: Property,
        groups: Sequence[type] | None = None,
    ):
        self._groups = None if groups is None else tuple(groups)
        self._stack: list[Iterator[ConstraintDescriptor]] = []

        descriptors = engine.constraints_for_property(prop.owner_type, prop.name)
        if descriptors:
            self._stack.append(iter(descriptors))

    def __iter__(self) -> "ConstraintIterator":
        return self

    def __next__(self) -> ConstraintDescriptor:
        while self._stack:
            try:
                descriptor = next(self._stack[-1])
            except StopIteration:
                self._stack.pop()
                continue

            if descriptor.composing:
                self._stack.append(iter(descriptor.composing))

            if self._groups is None or matches_groups(descriptor.groups, self._groups):
                return descriptor

        raise StopIteration
