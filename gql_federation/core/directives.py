"""Uniform lookup of directives attached to object types and fields."""

from dataclasses import dataclass
from typing import Optional, Union

from graphql import (
    DirectiveNode,
    FieldDefinitionNode,
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLObjectType,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    parse,
    print_type,
)

TypeNode = Union[
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
]


@dataclass(frozen=True)
class ObjectTypeHost:
    """An object or interface type, with its definition and extension nodes."""
    name: str
    nodes: tuple[TypeNode, ...]

    @property
    def directives(self) -> list[DirectiveNode]:
        return [directive for node in self.nodes for directive in node.directives or ()]


@dataclass(frozen=True)
class FieldHost:
    """A field definition."""
    node: Optional[FieldDefinitionNode]

    @property
    def name(self) -> Optional[str]:
        return self.node.name.value if self.node is not None else None

    @property
    def directives(self) -> list[DirectiveNode]:
        if self.node is None:
            return []
        return list(self.node.directives or ())


DirectiveHost = Union[ObjectTypeHost, FieldHost]

HostLike = Union[
    DirectiveHost,
    GraphQLObjectType,
    GraphQLInterfaceType,
    TypeNode,
    GraphQLField,
    FieldDefinitionNode,
    None,
]


def type_definition_node(
    type_: Union[GraphQLObjectType, GraphQLInterfaceType],
) -> Union[ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode]:
    """Return the AST definition of a type, synthesizing it when the type has none."""
    if type_.ast_node is not None:
        return type_.ast_node
    return parse(print_type(type_)).definitions[0]


def as_directive_host(node: HostLike) -> DirectiveHost:
    """Wrap a graphql-core type, field or AST node as a DirectiveHost."""
    if isinstance(node, (ObjectTypeHost, FieldHost)):
        return node
    if isinstance(node, (GraphQLObjectType, GraphQLInterfaceType)):
        return ObjectTypeHost(
            name=node.name,
            nodes=(type_definition_node(node), *(node.extension_ast_nodes or ())),
        )
    if isinstance(node, (
        ObjectTypeDefinitionNode,
        ObjectTypeExtensionNode,
        InterfaceTypeDefinitionNode,
        InterfaceTypeExtensionNode,
    )):
        return ObjectTypeHost(name=node.name.value, nodes=(node,))
    if isinstance(node, GraphQLField):
        return FieldHost(node=node.ast_node)
    if node is None or isinstance(node, FieldDefinitionNode):
        return FieldHost(node=node)
    raise TypeError(f"Cannot look up directives on {type(node).__name__}")


def directives_by_name(name: str, node: HostLike) -> list[DirectiveNode]:
    """Return the directives named `name` attached to `node`, in declaration order.

    An empty list means the directive is absent; that is not an error.
    """
    return [d for d in as_directive_host(node).directives if d.name.value == name]


def has_directive(name: str, node: HostLike) -> bool:
    return bool(directives_by_name(name, node))
