"""Core modules for federation-aware GraphQL code generation."""

from .config import FederationConfig, load_config
from .constants import (
    FEDERATION_DIRECTIVES,
    FEDERATION_SPEC_SDL,
    FIELD_SET_SCALAR,
    RESOLVE_REFERENCE_FIELD,
)
from .directives import (
    DirectiveHost,
    FieldHost,
    ObjectTypeHost,
    as_directive_host,
    directives_by_name,
)
from .errors import (
    FederationError,
    FieldSetSyntaxError,
    InvalidSchemaError,
    UnresolvableFieldError,
)
from .federation import ApolloFederation, is_federation_object_type
from .field_set import extract_field_set, parse_field_set, tokenize_field_set
from .ir import (
    ExtractFieldSetResult,
    FieldSet,
    FieldSetItem,
    KeyFragment,
    ReferenceShape,
)
from .loader import SchemaLoader, build_schema_from_sdl, load_schema
from .printer import print_schema_ast, validate_output_file
from .provides import build_provides_map
from .reference import build_reference_shape
from .report import SchemaReport, TypeReport, build_report
from .rewriter import add_federation_references_to_schema, remove_federation

__all__ = [
    # Config
    "FederationConfig",
    "load_config",
    # Constants
    "FEDERATION_DIRECTIVES",
    "FEDERATION_SPEC_SDL",
    "FIELD_SET_SCALAR",
    "RESOLVE_REFERENCE_FIELD",
    # Directives
    "DirectiveHost",
    "FieldHost",
    "ObjectTypeHost",
    "as_directive_host",
    "directives_by_name",
    # Errors
    "FederationError",
    "FieldSetSyntaxError",
    "InvalidSchemaError",
    "UnresolvableFieldError",
    # Classifier
    "ApolloFederation",
    "is_federation_object_type",
    # Field sets
    "extract_field_set",
    "parse_field_set",
    "tokenize_field_set",
    # IR types
    "ExtractFieldSetResult",
    "FieldSet",
    "FieldSetItem",
    "KeyFragment",
    "ReferenceShape",
    # Loader
    "SchemaLoader",
    "build_schema_from_sdl",
    "load_schema",
    # Printer
    "print_schema_ast",
    "validate_output_file",
    # Provides
    "build_provides_map",
    # Reference resolver
    "build_reference_shape",
    # Report
    "SchemaReport",
    "TypeReport",
    "build_report",
    # Rewriter
    "add_federation_references_to_schema",
    "remove_federation",
]
