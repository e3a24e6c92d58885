"""Names and definitions from the Apollo Federation (v1) schema additions."""

FIELD_SET_SCALAR = "_FieldSet"

EXTERNAL_DIRECTIVE = "external"
REQUIRES_DIRECTIVE = "requires"
PROVIDES_DIRECTIVE = "provides"
KEY_DIRECTIVE = "key"

FEDERATION_DIRECTIVES = (
    EXTERNAL_DIRECTIVE,
    REQUIRES_DIRECTIVE,
    PROVIDES_DIRECTIVE,
    KEY_DIRECTIVE,
)

RESOLVE_REFERENCE_FIELD = "__resolveReference"

# Added to the Query type and the type map by federation-aware servers
FEDERATION_QUERY_FIELDS = ("_entities", "_service")
FEDERATION_META_TYPES = ("_Service", "_Entity", "_Any")

ROOT_TYPE_NAMES = ("Query", "Mutation", "Subscription")
INTROSPECTION_PREFIX = "__"

FEDERATION_SPEC_SDL = """
scalar _FieldSet

directive @external on FIELD_DEFINITION
directive @requires(fields: _FieldSet!) on FIELD_DEFINITION
directive @provides(fields: _FieldSet!) on FIELD_DEFINITION
directive @key(fields: _FieldSet!) repeatable on OBJECT | INTERFACE
"""
