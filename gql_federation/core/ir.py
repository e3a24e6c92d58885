"""Intermediate Representation (IR) for federation analysis results.

These dataclasses describe parsed field sets and the shape a reference
resolver receives, independently of the language an emitter targets.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class FieldSetItem:
    """A leaf field referenced from a field set."""
    name: str
    required: bool  # True if the field's type is non-null in the schema


@dataclass
class FieldSet:
    """Parsed form of a ``fields`` argument, before any type reference is applied."""
    fields: list[str] = field(default_factory=list)
    # Name of the nested parent field for "parent { a b }" selections
    parent: Optional[str] = None


@dataclass
class ExtractFieldSetResult:
    """Field set of one directive, resolved against a parent type reference.

    ``parent_type_ref`` is indexed by the nested parent field when the
    directive selects one, e.g. ``ParentType['person']``.
    """
    field_set: list[str]
    parent_type_ref: Optional[str] = None
    parent_field: Optional[str] = None


@dataclass
class KeyFragment:
    """A "pick these fields" fragment of a type signature."""
    parent_type_ref: str
    items: list[FieldSetItem]

    def render(self) -> str:
        keys = " | ".join(f"'{item.name}'" for item in self.items)
        return f"Pick<{self.parent_type_ref}, {keys}>"


@dataclass
class ReferenceShape:
    """What a ``__resolveReference`` resolver receives for one entity type.

    Any one of ``keys`` identifies the entity; every fragment in
    ``requires`` is additionally available.
    """
    typename: str
    keys: list[KeyFragment]
    requires: list[KeyFragment] = field(default_factory=list)

    def render(self) -> str:
        """Render as ``{ __typename: 'T' } & (key | key) & requires``."""
        parts = [f"{{ __typename: '{self.typename}' }}"]

        if self.keys:
            rendered_keys = " | ".join(key.render() for key in self.keys)
            if len(self.keys) > 1:
                rendered_keys = f"({rendered_keys})"
            parts.append(rendered_keys)

        parts.extend(fragment.render() for fragment in self.requires)
        return " & ".join(parts)
