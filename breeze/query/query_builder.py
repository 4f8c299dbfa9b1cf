"""
Query-builder collaborator.

The clause applier never interprets clause tokens itself; it hands them to a
QueryBuilder. `SqlAlchemyQueryBuilder` is the default implementation. It
applies tokens that are already SQL expressions, callables producing them from
the entity class, or plain member names. It has no expression grammar:
operator predicates need a dedicated builder.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy import Select, and_
from sqlalchemy.orm import InstrumentedAttribute

from breeze.core.errors import InvalidQueryError, UnknownMemberError


class QueryBuilder(Protocol):
    """One method per clause kind; each returns a new statement."""

    def apply_where(self, stmt: Select, entity_type: type, predicate: Any) -> Select: ...

    def apply_order_by(self, stmt: Select, entity_type: type, order_by: Any) -> Select: ...

    def apply_select(self, stmt: Select, entity_type: type, select: Any) -> Select: ...

    def apply_skip(self, stmt: Select, entity_type: type, count: int) -> Select: ...

    def apply_take(self, stmt: Select, entity_type: type, count: int) -> Select: ...


def resolve_member(entity_type: type, name: str) -> InstrumentedAttribute:
    """Return the mapped attribute `name` of `entity_type`.

    Raises:
        UnknownMemberError: If the entity type has no mapped attribute of that name
    """
    attr = getattr(entity_type, name, None)
    if not isinstance(attr, InstrumentedAttribute):
        raise UnknownMemberError(
            f"'{entity_type.__name__}' has no mapped member '{name}'",
            details={"entity_type": entity_type.__name__, "member": name},
        )
    return attr


def _split_names(token: str) -> list[str]:
    return [part.strip() for part in token.split(",") if part.strip()]


def _as_items(token: Any) -> list[Any]:
    """Flatten a token into its individual items."""
    if isinstance(token, str):
        return _split_names(token)
    if isinstance(token, Sequence):
        items: list[Any] = []
        for item in token:
            items.extend(_split_names(item) if isinstance(item, str) else [item])
        return items
    return [token]


class SqlAlchemyQueryBuilder:
    """Applies pre-built clause tokens to SQLAlchemy `Select` statements."""

    def _resolve(self, entity_type: type, token: Any) -> Any:
        if callable(token) and not hasattr(token, "__clause_element__"):
            return token(entity_type)
        return token

    def _order_item(self, entity_type: type, item: Any) -> Any:
        if not isinstance(item, str):
            return self._resolve(entity_type, item)
        name, _, direction = item.partition(" ")
        attr = resolve_member(entity_type, name)
        direction = direction.strip().lower()
        if direction == "desc":
            return attr.desc()
        if direction in ("", "asc"):
            return attr.asc() if direction else attr
        raise InvalidQueryError(
            f"Unknown sort direction '{direction}' for member '{name}'",
            details={"member": name, "direction": direction},
        )

    def apply_where(self, stmt: Select, entity_type: type, predicate: Any) -> Select:
        if isinstance(predicate, Mapping):
            clauses = []
            for name, value in predicate.items():
                if isinstance(value, Mapping):
                    raise InvalidQueryError(
                        f"Operator predicate on '{name}' is not supported by the default builder",
                        details={"member": name},
                    )
                clauses.append(resolve_member(entity_type, name) == value)
            return stmt.where(and_(*clauses)) if clauses else stmt
        return stmt.where(self._resolve(entity_type, predicate))

    def apply_order_by(self, stmt: Select, entity_type: type, order_by: Any) -> Select:
        resolved = self._resolve(entity_type, order_by)
        return stmt.order_by(*(self._order_item(entity_type, item) for item in _as_items(resolved)))

    def apply_select(self, stmt: Select, entity_type: type, select: Any) -> Select:
        resolved = self._resolve(entity_type, select)
        columns = [
            resolve_member(entity_type, item) if isinstance(item, str) else item
            for item in _as_items(resolved)
        ]
        return stmt.with_only_columns(*columns)

    def apply_skip(self, stmt: Select, entity_type: type, count: int) -> Select:
        return stmt.offset(count)

    def apply_take(self, stmt: Select, entity_type: type, count: int) -> Select:
        return stmt.limit(count)


default_query_builder = SqlAlchemyQueryBuilder()
