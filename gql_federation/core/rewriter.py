"""Schema transformations for federated generation.

Both public functions return a new schema and leave their input untouched:

    original = load_schema("./schema", federation=True)
    with_references = add_federation_references_to_schema(original)
    plain = remove_federation(original)
"""

import logging
from copy import copy
from typing import Callable, Collection, Optional

from graphql import (
    FieldDefinitionNode,
    GraphQLArgument,
    GraphQLDirective,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    NamedTypeNode,
    NameNode,
    ObjectTypeDefinitionNode,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_introspection_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    is_specified_directive,
    is_union_type,
)

from .constants import (
    FEDERATION_DIRECTIVES,
    FEDERATION_META_TYPES,
    FEDERATION_QUERY_FIELDS,
    FIELD_SET_SCALAR,
    RESOLVE_REFERENCE_FIELD,
)
from .directives import type_definition_node
from .federation import is_federation_object_type

logger = logging.getLogger(__name__)

FieldMap = dict[str, GraphQLField]
FieldsTransform = Callable[[GraphQLObjectType, FieldMap], FieldMap]
AstNodeTransform = Callable[[GraphQLObjectType], Optional[ObjectTypeDefinitionNode]]


def map_schema(
    schema: GraphQLSchema,
    transform_fields: Optional[FieldsTransform] = None,
    transform_ast_node: Optional[AstNodeTransform] = None,
    drop_types: Collection[str] = (),
    drop_directives: Collection[str] = (),
) -> GraphQLSchema:
    """Rebuild `schema` with fresh copies of every composite type.

    Args:
        schema: The schema to copy; it is not modified
        transform_fields: Called with each object type and its fields; returns
            the fields of the copy. References to other types are rewired
            to the copies afterwards.
        transform_ast_node: Called with each object type; returns the AST
            node of the copy
        drop_types: Names of types left out of the copy
        drop_directives: Names of directive definitions left out of the copy
    """
    type_map: dict[str, GraphQLNamedType] = {}

    def replace_type(type_):
        if is_list_type(type_):
            return GraphQLList(replace_type(type_.of_type))
        if is_non_null_type(type_):
            return GraphQLNonNull(replace_type(type_.of_type))
        return type_map[type_.name]

    def replace_maybe_type(type_):
        return type_ and type_map[type_.name]

    def copy_args(args):
        return {
            name: GraphQLArgument(**{**arg.to_kwargs(), "type_": replace_type(arg.type)})
            for name, arg in args.items()
        }

    def copy_fields(fields):
        return {
            name: GraphQLField(**{
                **field.to_kwargs(),
                "type_": replace_type(field.type),
                "args": copy_args(field.args),
            })
            for name, field in fields.items()
        }

    def copy_input_fields(fields):
        return {
            name: GraphQLInputField(**{**field.to_kwargs(), "type_": replace_type(field.type)})
            for name, field in fields.items()
        }

    def copy_named_type(type_):
        if is_scalar_type(type_) or is_enum_type(type_) or is_introspection_type(type_):
            return type_

        kwargs = type_.to_kwargs()
        if is_object_type(type_):
            fields = type_.fields
            if transform_fields is not None:
                fields = transform_fields(type_, fields)
            ast_node = type_.ast_node
            if transform_ast_node is not None:
                ast_node = transform_ast_node(type_)
            return GraphQLObjectType(**{
                **kwargs,
                "fields": lambda: copy_fields(fields),
                "interfaces": lambda: [replace_type(i) for i in type_.interfaces],
                "ast_node": ast_node,
            })
        if is_interface_type(type_):
            return GraphQLInterfaceType(**{
                **kwargs,
                "fields": lambda: copy_fields(type_.fields),
                "interfaces": lambda: [replace_type(i) for i in type_.interfaces],
            })
        if is_union_type(type_):
            return GraphQLUnionType(**{
                **kwargs,
                "types": lambda: [replace_type(t) for t in type_.types],
            })
        if is_input_object_type(type_):
            return GraphQLInputObjectType(**{
                **kwargs,
                "fields": lambda: copy_input_fields(type_.fields),
            })
        raise TypeError(f"Unexpected type: {type_!r}")

    def copy_directive(directive):
        if is_specified_directive(directive):
            return directive
        return GraphQLDirective(**{**directive.to_kwargs(), "args": copy_args(directive.args)})

    for type_ in schema.type_map.values():
        if type_.name not in drop_types:
            type_map[type_.name] = copy_named_type(type_)

    return GraphQLSchema(
        query=replace_maybe_type(schema.query_type),
        mutation=replace_maybe_type(schema.mutation_type),
        subscription=replace_maybe_type(schema.subscription_type),
        types=list(type_map.values()),
        directives=[
            copy_directive(directive)
            for directive in schema.directives
            if directive.name not in drop_directives
        ],
        description=schema.description,
        extensions=schema.extensions,
        ast_node=schema.ast_node,
        extension_ast_nodes=schema.extension_ast_nodes,
    )


def _resolve_reference_node(type_name: str) -> FieldDefinitionNode:
    return FieldDefinitionNode(
        name=NameNode(value=RESOLVE_REFERENCE_FIELD),
        type=NamedTypeNode(name=NameNode(value=type_name)),
        arguments=(),
        directives=(),
    )


def add_federation_references_to_schema(schema: GraphQLSchema) -> GraphQLSchema:
    """Add ``__resolveReference`` to each object type involved in federation.

    The field is the first of the type's field map and of its AST field list.
    Returns a new schema; `schema` is left as it was.
    """
    federated = {
        type_.name
        for type_ in schema.type_map.values()
        if is_object_type(type_)
        and is_federation_object_type(type_)
        and RESOLVE_REFERENCE_FIELD not in type_.fields
    }
    field_nodes = {name: _resolve_reference_node(name) for name in federated}

    def transform_fields(type_: GraphQLObjectType, fields: FieldMap) -> FieldMap:
        if type_.name not in federated:
            return fields
        reference = GraphQLField(type_, ast_node=field_nodes[type_.name])
        return {RESOLVE_REFERENCE_FIELD: reference, **fields}

    def transform_ast_node(type_: GraphQLObjectType) -> Optional[ObjectTypeDefinitionNode]:
        if type_.name not in federated:
            return type_.ast_node
        node = copy(type_definition_node(type_))
        node.fields = (field_nodes[type_.name], *(node.fields or ()))
        return node

    logger.debug("Adding %s to %d types", RESOLVE_REFERENCE_FIELD, len(federated))
    return map_schema(schema, transform_fields=transform_fields, transform_ast_node=transform_ast_node)


def remove_federation(schema: GraphQLSchema) -> GraphQLSchema:
    """Remove the constructs added by federation from a schema.

    Drops ``_entities`` and ``_service`` from the Query type, the
    ``_Service``, ``_Entity`` and ``_Any`` types, the ``_FieldSet`` scalar and
    the federation directive definitions. Returns a new schema.
    """
    query_type = schema.query_type

    def transform_fields(type_: GraphQLObjectType, fields: FieldMap) -> FieldMap:
        if query_type is None or type_.name != query_type.name:
            return fields
        return {name: field for name, field in fields.items() if name not in FEDERATION_QUERY_FIELDS}

    logger.debug("Removing federation types and directives")
    return map_schema(
        schema,
        transform_fields=transform_fields,
        drop_types=(*FEDERATION_META_TYPES, FIELD_SET_SCALAR),
        drop_directives=FEDERATION_DIRECTIVES,
    )
