"""Map of fields that some other type makes resolvable through @provides."""

import logging

from graphql import GraphQLSchema, get_named_type, is_object_type

from .constants import PROVIDES_DIRECTIVE
from .directives import directives_by_name
from .field_set import extract_field_set

logger = logging.getLogger(__name__)

ProvidesMap = dict[str, set[str]]


def build_provides_map(schema: GraphQLSchema) -> ProvidesMap:
    """Collect @provides field sets of every object type field.

    Names are recorded against the field's own (unwrapped) type, since
    ``book: Book @provides(fields: "title")`` says that Book.title is
    resolvable through this field. A nested selection (``author { name }``)
    records its leaf names the same way.
    """
    provides_map: ProvidesMap = {}

    for type_ in schema.type_map.values():
        if not is_object_type(type_):
            continue

        for field in type_.fields.values():
            of_type = get_named_type(field.type)

            for directive in directives_by_name(PROVIDES_DIRECTIVE, field.ast_node):
                result = extract_field_set(directive)
                provides_map.setdefault(of_type.name, set()).update(result.field_set)

    logger.debug("Built provides map for %d types", len(provides_map))
    return provides_map


def provided_fields(provides_map: ProvidesMap, type_name: str) -> set[str]:
    """Fields provided for `type_name`; a type with no entry provides nothing."""
    return provides_map.get(type_name, set())
