"""Synthesis of the parent type a ``__resolveReference`` resolver receives.

Each @key directive is one way of identifying the entity, so key fragments
are joined as alternatives. Fields named by @requires on the resolved field
are always available on top of the key fields.
"""

from typing import Optional, Union

from graphql import (
    DirectiveNode,
    FieldDefinitionNode,
    GraphQLInterfaceType,
    GraphQLObjectType,
    get_named_type,
    is_interface_type,
    is_non_null_type,
    is_object_type,
)

from .constants import KEY_DIRECTIVE, REQUIRES_DIRECTIVE
from .directives import directives_by_name
from .errors import FederationError, UnresolvableFieldError
from .field_set import deduplicate, extract_field_set
from .ir import FieldSetItem, KeyFragment, ReferenceShape

CompositeType = Union[GraphQLObjectType, GraphQLInterfaceType]


def resolve_field_set_items(parent_type: CompositeType, names: list[str]) -> list[FieldSetItem]:
    """Look up each name on `parent_type` and tag it with its nullability.

    Raises:
        UnresolvableFieldError: If a name is not a field of `parent_type`
    """
    items = []
    for name in names:
        field = parent_type.fields.get(name)
        if field is None:
            raise UnresolvableFieldError(parent_type.name, name)
        items.append(FieldSetItem(name=name, required=is_non_null_type(field.type)))
    return items


def nested_parent_type(parent_type: CompositeType, field_name: str) -> CompositeType:
    """Return the type a nested selection ``field_name { ... }`` selects from."""
    field = parent_type.fields.get(field_name)
    if field is None:
        raise UnresolvableFieldError(parent_type.name, field_name)

    nested = get_named_type(field.type)
    if not (is_object_type(nested) or is_interface_type(nested)):
        raise FederationError(
            f"Field '{parent_type.name}.{field_name}' of type '{nested.name}' "
            "cannot have a nested selection"
        )
    return nested


def key_fragment(
    directive: DirectiveNode, parent_type: CompositeType, parent_type_ref: str
) -> Optional[KeyFragment]:
    """Build the fragment of one @key directive; None for an empty field set."""
    result = extract_field_set(directive, parent_type_ref)
    owner = parent_type
    if result.parent_field is not None:
        owner = nested_parent_type(parent_type, result.parent_field)

    items = resolve_field_set_items(owner, result.field_set)
    if not items:
        return None
    return KeyFragment(parent_type_ref=result.parent_type_ref, items=items)


def requires_fragments(
    field_node: Optional[FieldDefinitionNode], parent_type: CompositeType, parent_type_ref: str
) -> list[KeyFragment]:
    """Merge the @requires field sets of a field.

    Flat field sets are compressed into a single fragment; nested ones keep
    a fragment each, against the nested parent.
    """
    flat_names: list[str] = []
    fragments = []

    for directive in directives_by_name(REQUIRES_DIRECTIVE, field_node):
        result = extract_field_set(directive, parent_type_ref)
        if result.parent_field is None:
            flat_names.extend(result.field_set)
            continue

        owner = nested_parent_type(parent_type, result.parent_field)
        items = resolve_field_set_items(owner, result.field_set)
        fragments.append(KeyFragment(parent_type_ref=result.parent_type_ref, items=items))

    items = resolve_field_set_items(parent_type, deduplicate(flat_names))
    if items:
        fragments.insert(0, KeyFragment(parent_type_ref=parent_type_ref, items=items))
    return fragments


def build_reference_shape(
    parent_type: CompositeType,
    field_node: Optional[FieldDefinitionNode],
    parent_type_signature: str,
) -> Optional[ReferenceShape]:
    """Describe what the reference resolver of `parent_type` receives.

    Returns None when the type has no @key directive.

    Raises:
        FieldSetSyntaxError: If a field set names several nested parents
        UnresolvableFieldError: If a field set names an unknown field
    """
    keys = directives_by_name(KEY_DIRECTIVE, parent_type)
    if not keys:
        return None

    requires = requires_fragments(field_node, parent_type, parent_type_signature)

    fragments = []
    for directive in keys:
        fragment = key_fragment(directive, parent_type, parent_type_signature)
        if fragment is not None:
            fragments.append(fragment)

    return ReferenceShape(typename=parent_type.name, keys=fragments, requires=requires)
