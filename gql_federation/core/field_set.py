"""Parser for the ``fields`` argument of federation directives.

The argument is a small selection language::

    "id"                      # a single field
    "id sku"                  # several fields
    "person { id personalId }"  # one nested parent and its fields

With a brace group, the first token is the nested parent and every other
name belongs to it. Only one level of nesting and one nested parent per
directive instance are supported.
"""

import re
from typing import Optional, Union

from graphql import DirectiveNode, StringValueNode

from .errors import FederationError, FieldSetSyntaxError
from .ir import ExtractFieldSetResult, FieldSet

# Commas are insignificant in GraphQL, same as whitespace
_TOKEN_RE = re.compile(r"[{}]|[^\s,{}]+")
_BRACES = ("{", "}")

MULTIPLE_PARENTS_MESSAGE = (
    "Nested fields in _FieldSet are not supported for several parents. "
    "Try using duplicate directives. "
    "Example: '@key(fields: \"entity1 { a }\") @key(fields: \"entity2 { b }\")' "
    "instead of '@key(fields: \"entity1 { a } entity2 { b }\")'."
)


def deduplicate(items: list[str]) -> list[str]:
    """Remove repeated items, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))


def tokenize_field_set(value: str) -> list[str]:
    """Split a field set into names and brace tokens."""
    return _TOKEN_RE.findall(value)


def parse_field_set(value: str) -> Union[FieldSet, FieldSetSyntaxError]:
    """Parse a field set string.

    Without braces every token is a field. With one brace group the first
    token names the nested parent and every other name is a field of it.

    Returns the parsed FieldSet, or a FieldSetSyntaxError describing why the
    value is not supported. Never raises.
    """
    tokens = tokenize_field_set(value)

    if not any(token in _BRACES for token in tokens):
        return FieldSet(fields=deduplicate(tokens))

    depth = 0
    for token in tokens:
        if token == "{":
            depth += 1
            if depth > 1:
                return FieldSetSyntaxError(
                    f"Field set '{value}' is nested more than one level deep", value
                )
        elif token == "}":
            depth -= 1

    if tokens.count("{") > 1:
        return FieldSetSyntaxError(MULTIPLE_PARENTS_MESSAGE, value)

    if "{" in tokens:
        open_at = tokens.index("{")
        if open_at + 1 == len(tokens) or tokens[open_at + 1] == "}":
            return FieldSetSyntaxError(f"Empty nested selection in field set '{value}'", value)

    if tokens[0] in _BRACES:
        return FieldSetSyntaxError(
            f"Nested selection in field set '{value}' has no parent field", value
        )

    names = [token for token in tokens[1:] if token not in _BRACES]
    return FieldSet(fields=deduplicate(names), parent=tokens[0])


def field_set_argument(directive: DirectiveNode) -> str:
    """Return the string value of a directive's ``fields`` argument."""
    for argument in directive.arguments or ():
        if argument.name.value == "fields":
            if isinstance(argument.value, StringValueNode):
                return argument.value.value
            break
    raise FederationError(
        f"Directive '@{directive.name.value}' requires a string 'fields' argument"
    )


def extract_field_set(
    directive: DirectiveNode, parent_type_ref: Optional[str] = None
) -> ExtractFieldSetResult:
    """Extract the field set of a directive.

    Args:
        directive: A @key, @requires or @provides directive node
        parent_type_ref: Textual reference to the directive's host type,
            e.g. "ParentType". Nested selections index into it.

    Raises:
        FieldSetSyntaxError: If the field set has an unsupported shape
    """
    result = parse_field_set(field_set_argument(directive))
    if isinstance(result, FieldSetSyntaxError):
        raise result

    if result.parent is None:
        return ExtractFieldSetResult(field_set=result.fields, parent_type_ref=parent_type_ref)

    nested_ref = f"{parent_type_ref}['{result.parent}']" if parent_type_ref is not None else None
    return ExtractFieldSetResult(
        field_set=result.fields,
        parent_type_ref=nested_ref,
        parent_field=result.parent,
    )
