"""
Entity query data model.

An EntityQuery is the normalized form of a client query request. Clause tokens
(where, orderBy, select) are opaque here; their meaning belongs to the query
builder that applies them.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from breeze.core.errors import InvalidQueryError


class ExpandClause(BaseModel):
    """Ordered relationship paths to load eagerly, e.g. ``("orders/items", "profile")``."""

    model_config = ConfigDict(frozen=True)

    property_paths: tuple[str, ...]

    @field_validator("property_paths", mode="before")
    @classmethod
    def split_property_paths(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a sequence of paths."""
        if isinstance(v, str):
            return tuple(path.strip() for path in v.split(",") if path.strip())
        return v


class EntityQuery(BaseModel):
    """
    Immutable description of a client query.

    Every clause is optional. Fields can be populated by their Python names or
    by the client JSON keys (``where``, ``orderBy``, ``select``, ``skip``,
    ``take``, ``expand``, ``inlineCount``).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )

    where_predicate: Any = Field(default=None, alias="where")
    order_by_clause: Any = Field(default=None, alias="orderBy")
    select_clause: Any = Field(default=None, alias="select")
    skip_count: int | None = Field(default=None, alias="skip")
    take_count: int | None = Field(default=None, alias="take")
    expand_clause: ExpandClause | None = Field(default=None, alias="expand")
    inline_count: bool = Field(default=False, alias="inlineCount")

    @field_validator("expand_clause", mode="before")
    @classmethod
    def parse_expand_clause(cls, v: Any) -> Any:
        """Wrap raw path lists and strings in an ExpandClause; empty means absent."""
        if v is None or isinstance(v, ExpandClause):
            return v
        if isinstance(v, str | list | tuple):
            clause = ExpandClause(property_paths=v)
            return clause if clause.property_paths else None
        return v

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> EntityQuery:
        """Build a query from already-decoded client parameters.

        Raises:
            InvalidQueryError: If a clause has the wrong shape
        """
        try:
            return cls.model_validate(dict(params))
        except ValidationError as e:
            raise InvalidQueryError(
                "Invalid entity query", details={"errors": e.errors(include_url=False)}
            ) from e

    @classmethod
    def from_json(cls, text: str | bytes) -> EntityQuery:
        """Build a query from its client JSON form.

        Example:
            EntityQuery.from_json('{"where": {"status": "OPEN"}, "take": 10, "expand": "orders/items"}')

        Raises:
            InvalidQueryError: If the text is not valid JSON or a clause has the wrong shape
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise InvalidQueryError(
                "Invalid entity query", details={"errors": e.errors(include_url=False)}
            ) from e
