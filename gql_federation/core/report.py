"""Per-type generation decisions, serializable for generators in other languages."""

from typing import Optional

from graphql import GraphQLSchema, is_introspection_type, is_object_type, is_scalar_type
from pydantic import BaseModel

from .config import FederationConfig
from .constants import RESOLVE_REFERENCE_FIELD
from .federation import ApolloFederation
from .ir import KeyFragment
from .rewriter import add_federation_references_to_schema


class TypeReport(BaseModel):
    """Decisions for one object type."""

    name: str
    federated: bool = False
    fields: list[str] = []
    skipped_fields: list[str] = []
    # Set for federated types only
    reference_signature: Optional[str] = None
    keys: list[KeyFragment] = []
    requires: list[KeyFragment] = []


class SchemaReport(BaseModel):
    """Decisions for a whole schema."""

    federation: bool
    type_names: list[str]
    skipped_scalars: list[str] = []
    skipped_directives: list[str] = []
    types: list[TypeReport] = []


def build_report(schema: GraphQLSchema, config: Optional[FederationConfig] = None) -> SchemaReport:
    """Run the federation classifier over every object type of `schema`.

    Raises:
        FederationError: If a @key or @requires field set cannot be resolved
    """
    config = config or FederationConfig()
    federation = ApolloFederation(enabled=config.federation, schema=schema)
    generation_schema = add_federation_references_to_schema(schema) if config.federation else schema

    type_names = federation.filter_type_names(
        [name for name, type_ in generation_schema.type_map.items() if not is_introspection_type(type_)]
    )

    types = []
    for name in type_names:
        type_ = generation_schema.type_map[name]
        if not is_object_type(type_):
            continue

        report = TypeReport(name=name)
        for field_name in federation.filter_field_names(list(type_.fields)):
            field = type_.fields[field_name]
            if federation.skip_field(field.ast_node, type_):
                report.skipped_fields.append(field_name)
            else:
                report.fields.append(field_name)

        reference = type_.fields.get(RESOLVE_REFERENCE_FIELD)
        if reference is not None:
            shape = federation.reference_shape(reference.ast_node, type_, config.parent_type_signature)
            if shape is not None:
                report.federated = True
                report.reference_signature = shape.render()
                report.keys = shape.keys
                report.requires = shape.requires

        types.append(report)

    return SchemaReport(
        federation=config.federation,
        type_names=type_names,
        skipped_scalars=[
            name for name, type_ in schema.type_map.items()
            if is_scalar_type(type_) and federation.skip_scalar(name)
        ],
        skipped_directives=[
            directive.name for directive in schema.directives
            if federation.skip_directive(directive.name)
        ],
        types=types,
    )
