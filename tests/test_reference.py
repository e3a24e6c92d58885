"""Tests for reference resolver shapes."""

import pytest
from graphql import parse

from gql_federation.core.errors import FederationError, UnresolvableFieldError
from gql_federation.core.ir import FieldSetItem, KeyFragment, ReferenceShape
from gql_federation.core.loader import build_schema_from_sdl
from gql_federation.core.reference import (
    build_reference_shape,
    nested_parent_type,
    requires_fragments,
    resolve_field_set_items,
)


@pytest.fixture
def schema():
    return build_schema_from_sdl(
        """
        type Query {
          user: User
        }

        type Person {
          id: ID!
          nickname: String
        }

        type User @key(fields: "id") @key(fields: "person { id nickname }") {
          id: ID!
          email: String
          person: Person!
          tags: [String!]!
        }
        """,
        federation=True,
    )


def field_node(sdl: str):
    return parse("type X { " + sdl + " }").definitions[0].fields[0]


class TestRender:
    """Tests for KeyFragment and ReferenceShape rendering."""

    def test_key_fragment(self):
        fragment = KeyFragment(
            parent_type_ref="ParentType",
            items=[FieldSetItem(name="id", required=True), FieldSetItem(name="sku", required=False)],
        )
        assert fragment.render() == "Pick<ParentType, 'id' | 'sku'>"

    def test_single_key_has_no_parentheses(self):
        shape = ReferenceShape(
            typename="User",
            keys=[KeyFragment("ParentType", [FieldSetItem("id", True)])],
        )
        assert shape.render() == "{ __typename: 'User' } & Pick<ParentType, 'id'>"

    def test_keys_are_alternatives(self):
        shape = ReferenceShape(
            typename="User",
            keys=[
                KeyFragment("ParentType", [FieldSetItem("id", True)]),
                KeyFragment("ParentType", [FieldSetItem("email", False)]),
            ],
        )
        assert shape.render() == (
            "{ __typename: 'User' } & (Pick<ParentType, 'id'> | Pick<ParentType, 'email'>)"
        )

    def test_requires_are_intersected(self):
        shape = ReferenceShape(
            typename="User",
            keys=[KeyFragment("ParentType", [FieldSetItem("id", True)])],
            requires=[KeyFragment("ParentType", [FieldSetItem("email", False)])],
        )
        assert shape.render() == (
            "{ __typename: 'User' } & Pick<ParentType, 'id'> & Pick<ParentType, 'email'>"
        )

    def test_no_keys(self):
        assert ReferenceShape(typename="User", keys=[]).render() == "{ __typename: 'User' }"


class TestResolveItems:
    """Tests for nullability lookup."""

    def test_required_follows_non_null(self, schema):
        items = resolve_field_set_items(schema.type_map["User"], ["id", "email", "tags"])
        assert items == [
            FieldSetItem(name="id", required=True),
            FieldSetItem(name="email", required=False),
            FieldSetItem(name="tags", required=True),
        ]

    def test_unknown_field(self, schema):
        with pytest.raises(UnresolvableFieldError, match="'missing'"):
            resolve_field_set_items(schema.type_map["User"], ["id", "missing"])

    def test_nested_parent_type(self, schema):
        assert nested_parent_type(schema.type_map["User"], "person") is schema.type_map["Person"]

    def test_nested_parent_must_have_fields(self, schema):
        with pytest.raises(FederationError):
            nested_parent_type(schema.type_map["User"], "email")

    def test_nested_parent_must_exist(self, schema):
        with pytest.raises(UnresolvableFieldError):
            nested_parent_type(schema.type_map["User"], "company")


class TestBuildReferenceShape:
    """Tests for build_reference_shape."""

    def test_keys_in_declaration_order(self, schema):
        shape = build_reference_shape(
            schema.type_map["User"], field_node("__resolveReference: User"), "ParentType"
        )
        assert shape.typename == "User"
        assert [key.parent_type_ref for key in shape.keys] == ["ParentType", "ParentType['person']"]
        assert shape.keys[1].items == [
            FieldSetItem(name="id", required=True),
            FieldSetItem(name="nickname", required=False),
        ]
        assert shape.requires == []

    def test_type_without_key(self, schema):
        assert build_reference_shape(schema.type_map["Person"], None, "ParentType") is None

    def test_empty_key_contributes_nothing(self):
        schema = build_schema_from_sdl(
            """
            type Query { user: User }
            type User @key(fields: "") @key(fields: "id") {
              id: ID!
            }
            """,
            federation=True,
        )
        shape = build_reference_shape(schema.type_map["User"], None, "ParentType")
        assert shape.render() == "{ __typename: 'User' } & Pick<ParentType, 'id'>"


class TestRequiresFragments:
    """Tests for merging @requires field sets."""

    def test_flat_sets_are_merged(self, schema):
        node = field_node(
            'x: String @requires(fields: "email id") @requires(fields: "email tags")'
        )
        fragments = requires_fragments(node, schema.type_map["User"], "ParentType")
        assert [f.render() for f in fragments] == ["Pick<ParentType, 'email' | 'id' | 'tags'>"]

    def test_nested_set_keeps_own_fragment(self, schema):
        node = field_node(
            'x: String @requires(fields: "person { nickname }") @requires(fields: "email")'
        )
        fragments = requires_fragments(node, schema.type_map["User"], "ParentType")
        assert [f.render() for f in fragments] == [
            "Pick<ParentType, 'email'>",
            "Pick<ParentType['person'], 'nickname'>",
        ]

    def test_no_requires(self, schema):
        assert requires_fragments(field_node("x: String"), schema.type_map["User"], "ParentType") == []
        assert requires_fragments(None, schema.type_map["User"], "ParentType") == []

    def test_unknown_required_field(self, schema):
        node = field_node('x: String @requires(fields: "age")')
        with pytest.raises(UnresolvableFieldError):
            requires_fragments(node, schema.type_map["User"], "ParentType")
