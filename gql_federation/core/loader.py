"""GraphQL schema loader using graphql-core.

Reads .graphql/.graphqls files and builds a GraphQLSchema, optionally
adding the federation scalar and directive definitions.
"""

import logging
import os
from typing import Optional

from graphql import (
    DefinitionNode,
    DirectiveDefinitionNode,
    DocumentNode,
    GraphQLSchema,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    TypeDefinitionNode,
    build_ast_schema,
    parse,
)

from .constants import FEDERATION_SPEC_SDL
from .errors import InvalidSchemaError

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls", ".gql")


def _definition_name(node: DefinitionNode) -> Optional[str]:
    if isinstance(node, (TypeDefinitionNode, DirectiveDefinitionNode)):
        return node.name.value
    return None


def add_federation_definitions(document: DocumentNode) -> DocumentNode:
    """Prepend the federation definitions that `document` does not define itself."""
    defined = {_definition_name(node) for node in document.definitions}
    missing = [
        node
        for node in parse(FEDERATION_SPEC_SDL).definitions
        if _definition_name(node) not in defined
    ]
    return DocumentNode(definitions=(*missing, *document.definitions))


def promote_orphan_extensions(document: DocumentNode) -> DocumentNode:
    """Turn extensions of types defined nowhere in `document` into definitions.

    Subgraphs extend types owned by another service (``extend type User
    @key(fields: "id")``) without defining them.
    """
    defined = {_definition_name(node) for node in document.definitions}
    definitions = []
    for node in document.definitions:
        name_node = getattr(node, "name", None)
        name = name_node.value if name_node is not None else None
        if isinstance(node, ObjectTypeExtensionNode) and name not in defined:
            node = ObjectTypeDefinitionNode(
                name=node.name,
                interfaces=node.interfaces,
                directives=node.directives,
                fields=node.fields,
                loc=node.loc,
            )
            defined.add(name)
        elif isinstance(node, InterfaceTypeExtensionNode) and name not in defined:
            node = InterfaceTypeDefinitionNode(
                name=node.name,
                interfaces=node.interfaces,
                directives=node.directives,
                fields=node.fields,
                loc=node.loc,
            )
            defined.add(name)
        definitions.append(node)
    return DocumentNode(definitions=tuple(definitions))


def build_schema_from_document(document: DocumentNode, federation: bool = False) -> GraphQLSchema:
    """Build a schema from a parsed SDL document.

    Raises:
        InvalidSchemaError: If the document is not a valid schema
    """
    if federation:
        document = add_federation_definitions(document)
    try:
        return build_ast_schema(promote_orphan_extensions(document))
    except TypeError as e:
        # graphql-core reports SDL validation errors as TypeError
        raise InvalidSchemaError(str(e)) from e


def build_schema_from_sdl(sdl: str, federation: bool = False) -> GraphQLSchema:
    """Build a schema from SDL text.

    Raises:
        graphql.GraphQLError: If the SDL does not parse
        InvalidSchemaError: If the SDL is not a valid schema
    """
    return build_schema_from_document(parse(sdl), federation=federation)


class SchemaLoader:
    """Loads GraphQL schema files into a GraphQLSchema."""

    def __init__(self, schema_path: str, federation: bool = False):
        """Initialize a loader with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.federation = federation
        self.current_file = ""

    def load(self) -> GraphQLSchema:
        """Parse all schema files and build a single schema from them."""
        definitions: list[DefinitionNode] = []

        for file_path in self.collect_schema_files():
            self.current_file = os.path.basename(file_path)
            with open(file_path) as f:
                content = f.read()
            try:
                document = parse(content)
            except Exception as e:
                logger.error("Error parsing %s: %s", self.current_file, e)
                raise
            definitions.extend(document.definitions)

        logger.debug("Loaded %d definitions from %s", len(definitions), self.schema_path)
        return build_schema_from_document(
            DocumentNode(definitions=tuple(definitions)), federation=self.federation
        )

    def collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)


def load_schema(schema_path: str, federation: bool = False) -> GraphQLSchema:
    """Load a schema from a file or a directory of schema files."""
    return SchemaLoader(schema_path, federation=federation).load()
