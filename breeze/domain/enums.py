"""
Domain enums shared across the query and serialization layers.
"""

from enum import Enum


class LoadStrategy(str, Enum):
    """SQLAlchemy eager-loading strategy used for expanded relationships."""

    SELECTIN = "selectin"
    JOINED = "joined"
    SUBQUERY = "subquery"


class MemberKind(str, Enum):
    """Kind of a serializable member: a Python property or a data field."""

    PROPERTY = "property"
    FIELD = "field"
