"""Exceptions raised while analyzing a federated schema."""

from typing import Optional


class FederationError(Exception):
    """Base exception for federation analysis errors."""


class FieldSetSyntaxError(FederationError):
    """A directive's ``fields`` argument has a shape that cannot be resolved.

    Instances double as the error value returned by ``parse_field_set``;
    ``extract_field_set`` raises them.
    """

    def __init__(self, message: str, value: Optional[str] = None):
        self.message = message
        self.value = value
        super().__init__(message)


class UnresolvableFieldError(FederationError):
    """A field set names a field that does not exist on its parent type."""

    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(
            f"Field '{field_name}' referenced in a field set does not exist on type '{type_name}'"
        )


class InvalidSchemaError(FederationError):
    """The SDL does not describe a valid schema."""
