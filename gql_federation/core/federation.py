"""Federation-aware decisions for code generators.

An ApolloFederation instance is created once per generation run. Generators
ask it which types, fields, scalars and directives to emit, and which parent
type signature a ``__resolveReference`` resolver receives.

Example:
    federation = ApolloFederation(enabled=True, schema=schema)
    for name in federation.filter_type_names(list(schema.type_map)):
        ...
"""

from typing import Optional, Union

from graphql import (
    FieldDefinitionNode,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    ObjectTypeDefinitionNode,
    is_object_type,
)

from .constants import (
    EXTERNAL_DIRECTIVE,
    FEDERATION_DIRECTIVES,
    FIELD_SET_SCALAR,
    INTROSPECTION_PREFIX,
    KEY_DIRECTIVE,
    RESOLVE_REFERENCE_FIELD,
    ROOT_TYPE_NAMES,
)
from .directives import as_directive_host, has_directive
from .ir import ReferenceShape
from .provides import ProvidesMap, build_provides_map, provided_fields
from .reference import build_reference_shape


def is_federation_object_type(node: Union[GraphQLObjectType, ObjectTypeDefinitionNode]) -> bool:
    """Check if an object type takes part in federation.

    True for object types other than the root operation and introspection
    types that carry at least one @key directive.
    """
    if not (is_object_type(node) or isinstance(node, ObjectTypeDefinitionNode)):
        return False
    host = as_directive_host(node)
    name = host.name or ""
    is_not_root = name not in ROOT_TYPE_NAMES
    is_not_introspection = not name.startswith(INTROSPECTION_PREFIX)
    return is_not_root and is_not_introspection and has_directive(KEY_DIRECTIVE, host)


class ApolloFederation:
    """Classifies types and fields of one schema for federated generation.

    With ``enabled=False`` every method passes its input through unchanged,
    so callers need no separate code path for non-federated schemas.
    """

    def __init__(self, enabled: bool, schema: GraphQLSchema):
        self.enabled = enabled
        self.schema = schema
        self.provides_map: ProvidesMap = build_provides_map(schema) if enabled else {}

    def filter_type_names(self, type_names: list[str]) -> list[str]:
        """Exclude the types defined by federation."""
        if not self.enabled:
            return type_names
        return [name for name in type_names if name != FIELD_SET_SCALAR]

    def filter_field_names(self, field_names: list[str]) -> list[str]:
        """Exclude ``__resolveReference`` fields."""
        if not self.enabled:
            return field_names
        return [name for name in field_names if name != RESOLVE_REFERENCE_FIELD]

    def skip_directive(self, name: str) -> bool:
        """Decide if a directive should not be generated."""
        return self.enabled and name in FEDERATION_DIRECTIVES

    def skip_scalar(self, name: str) -> bool:
        """Decide if a scalar should not be generated."""
        return self.enabled and name == FIELD_SET_SCALAR

    def skip_field(self, field_node: FieldDefinitionNode, parent_type: GraphQLNamedType) -> bool:
        """Decide if a field should not be generated.

        Fields owned by another service (@external) are skipped unless a
        @provides elsewhere makes them resolvable locally.
        """
        if (
            not self.enabled
            or not is_object_type(parent_type)
            or not is_federation_object_type(parent_type)
        ):
            return False

        return self._is_external_and_not_provided(field_node, parent_type)

    def is_resolve_reference_field(self, field_node: FieldDefinitionNode) -> bool:
        return self.enabled and field_node.name.value == RESOLVE_REFERENCE_FIELD

    def reference_shape(
        self,
        field_node: Optional[FieldDefinitionNode],
        parent_type: GraphQLNamedType,
        parent_type_signature: str,
    ) -> Optional[ReferenceShape]:
        """Structured form of ``transform_parent_type``; None when not applicable."""
        if (
            not self.enabled
            or not is_object_type(parent_type)
            or not is_federation_object_type(parent_type)
            or field_node is None
            or field_node.name.value != RESOLVE_REFERENCE_FIELD
        ):
            return None

        return build_reference_shape(parent_type, field_node, parent_type_signature)

    def transform_parent_type(
        self,
        field_node: FieldDefinitionNode,
        parent_type: GraphQLNamedType,
        parent_type_signature: str,
    ) -> str:
        """Transform the ParentType signature of ``__resolveReference`` fields.

        Args:
            field_node: The field being generated
            parent_type: The type owning the field
            parent_type_signature: Signature the generator would use otherwise

        Returns:
            e.g. ``{ __typename: 'User' } & Pick<ParentType, 'id'>``, or
            `parent_type_signature` unchanged for any other field
        """
        shape = self.reference_shape(field_node, parent_type, parent_type_signature)
        if shape is None:
            return parent_type_signature
        return shape.render()

    def federation_types(self) -> list[str]:
        """Names of the federation object types, in schema order."""
        if not self.enabled:
            return []
        return [
            type_.name
            for type_ in self.schema.type_map.values()
            if is_object_type(type_) and is_federation_object_type(type_)
        ]

    def _is_external_and_not_provided(
        self, field_node: FieldDefinitionNode, object_type: GraphQLObjectType
    ) -> bool:
        return has_directive(EXTERNAL_DIRECTIVE, field_node) and not self._has_provides(
            object_type, field_node
        )

    def _has_provides(self, object_type: GraphQLObjectType, field_node: FieldDefinitionNode) -> bool:
        return field_node.name.value in provided_fields(self.provides_map, object_type.name)
