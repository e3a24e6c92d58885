"""Prints a schema as SDL, with or without federation constructs."""

import os
from typing import Optional

from graphql import (
    DirectiveNode,
    EnumTypeDefinitionNode,
    GraphQLNamedType,
    GraphQLSchema,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    TypeDefinitionNode,
    parse,
    print_ast,
    print_schema,
)

from .config import FederationConfig
from .errors import FederationError
from .rewriter import remove_federation


def print_schema_ast(schema: GraphQLSchema, config: Optional[FederationConfig] = None) -> str:
    """Print `schema` as SDL.

    With ``config.federation`` the federation constructs are removed first;
    with ``config.include_directives`` directive usages are kept.
    """
    config = config or FederationConfig()
    output_schema = remove_federation(schema) if config.federation else schema

    if config.include_directives:
        return print_schema_with_directives(output_schema)
    return print_schema(output_schema)


def _source_directives(type_: GraphQLNamedType) -> list[DirectiveNode]:
    nodes = [type_.ast_node, *(type_.extension_ast_nodes or ())]
    return [d for node in nodes if node is not None for d in node.directives or ()]


def _merge_directives(printed, source, defined: set[str]) -> tuple[DirectiveNode, ...]:
    """Add source directive usages to printed ones, for directives the schema defines."""
    printed = tuple(printed or ())
    printed_names = {d.name.value for d in printed}
    added = tuple(
        d for d in source or ()
        if d.name.value in defined and d.name.value not in printed_names
    )
    return printed + added


def print_schema_with_directives(schema: GraphQLSchema) -> str:
    """Print `schema` keeping the directives used on types, fields and values.

    Usages of directives the schema does not define are left out.
    """
    printed = print_schema(schema)
    if not printed:
        return printed

    defined = {directive.name for directive in schema.directives}
    document = parse(printed)

    for definition in document.definitions:
        if not isinstance(definition, TypeDefinitionNode):
            continue
        type_ = schema.get_type(definition.name.value)
        definition.directives = _merge_directives(
            definition.directives, _source_directives(type_), defined
        )

        if isinstance(definition, (
            ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode, InputObjectTypeDefinitionNode
        )):
            for field_node in definition.fields or ():
                field = type_.fields[field_node.name.value]
                source = field.ast_node.directives if field.ast_node is not None else ()
                field_node.directives = _merge_directives(field_node.directives, source, defined)
        elif isinstance(definition, EnumTypeDefinitionNode):
            for value_node in definition.values or ():
                value = type_.values[value_node.name.value]
                source = value.ast_node.directives if value.ast_node is not None else ()
                value_node.directives = _merge_directives(value_node.directives, source, defined)

    return print_ast(document)


def validate_output_file(output_file: str, single_plugin: bool = True) -> None:
    """Check that a schema printed on its own goes to a ``.graphql`` file.

    Raises:
        FederationError: If the extension is not ``.graphql``
    """
    if single_plugin and os.path.splitext(output_file)[1] != ".graphql":
        raise FederationError('Schema output requires extension to be ".graphql"!')
