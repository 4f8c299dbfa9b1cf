"""
Domain-specific exceptions for the breeze query and serialization layers.

Failures raised by a query-builder collaborator are propagated unchanged by
the clause applier; these exceptions cover the failures breeze raises itself.
"""

from typing import Any


class BreezeError(Exception):
    """Base exception for all breeze errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(BreezeError):
    """
    Raised when a resolver or builder is constructed with an unusable configuration.

    Examples:
    - Empty home package name for a type-scoped resolver
    - Included-type entry that is not a type
    """

    pass


class InvalidQueryError(BreezeError):
    """
    Raised when a client entity query cannot be read.

    Examples:
    - Query text is not valid JSON
    - Skip or take is not an integer
    - Operator predicates given to the equality-only default builder
    """

    pass


class UnknownMemberError(BreezeError):
    """
    Raised when a query token refers to a member the entity type does not have.

    Examples:
    - Order-by on a column that is not mapped
    - Expand path through a relationship that does not exist
    """

    pass


class SerializationError(BreezeError):
    """
    Raised when an object graph cannot be serialized.

    Examples:
    - Self-referencing loop between included members
    """

    pass
