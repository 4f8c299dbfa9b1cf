"""Entity query model and its translation onto SQLAlchemy statements."""

from breeze.query.entity_query import EntityQuery, ExpandClause
from breeze.query.extensions import (
    apply_entity_query,
    apply_expand,
    apply_order_by,
    apply_select,
    apply_skip,
    apply_take,
    apply_where,
    expand_paths,
)
from breeze.query.query_builder import QueryBuilder, SqlAlchemyQueryBuilder

__all__ = [
    "EntityQuery",
    "ExpandClause",
    "QueryBuilder",
    "SqlAlchemyQueryBuilder",
    "apply_entity_query",
    "apply_expand",
    "apply_order_by",
    "apply_select",
    "apply_skip",
    "apply_take",
    "apply_where",
    "expand_paths",
]
