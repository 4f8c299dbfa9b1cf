"""
Apply the clauses of an EntityQuery to a SQLAlchemy statement.

Each `apply_*` function returns the statement unchanged when its clause is
absent and otherwise delegates to the query builder. Builder failures are not
caught or translated here.

Usage:
    stmt = select(Customer)
    stmt = apply_where(eq, stmt, Customer)
    stmt = apply_order_by(eq, stmt, Customer)
    stmt = apply_expand(eq, stmt, Customer)
"""

import logging

from sqlalchemy import Select

from breeze.domain.enums import LoadStrategy
from breeze.query.entity_query import EntityQuery, ExpandClause
from breeze.query.loading import include
from breeze.query.query_builder import QueryBuilder, default_query_builder

logger = logging.getLogger(__name__)

INPUT_PATH_DELIMITER = "/"
TARGET_PATH_DELIMITER = "."


def apply_where(
    eq: EntityQuery,
    stmt: Select,
    entity_type: type,
    builder: QueryBuilder = default_query_builder,
) -> Select:
    """Apply the where predicate, if any."""
    if eq.where_predicate is not None:
        stmt = builder.apply_where(stmt, entity_type, eq.where_predicate)
    return stmt


def apply_order_by(
    eq: EntityQuery,
    stmt: Select,
    entity_type: type,
    builder: QueryBuilder = default_query_builder,
) -> Select:
    """Apply the order-by clause, if any."""
    if eq.order_by_clause is not None:
        stmt = builder.apply_order_by(stmt, entity_type, eq.order_by_clause)
    return stmt


def apply_select(
    eq: EntityQuery,
    stmt: Select,
    entity_type: type,
    builder: QueryBuilder = default_query_builder,
) -> Select:
    """Apply the projection, if any."""
    if eq.select_clause is not None:
        stmt = builder.apply_select(stmt, entity_type, eq.select_clause)
    return stmt


def apply_skip(
    eq: EntityQuery,
    stmt: Select,
    entity_type: type,
    builder: QueryBuilder = default_query_builder,
) -> Select:
    """Apply the skip count, if any. A count of 0 is present and is delegated."""
    if eq.skip_count is not None:
        stmt = builder.apply_skip(stmt, entity_type, eq.skip_count)
    return stmt


def apply_take(
    eq: EntityQuery,
    stmt: Select,
    entity_type: type,
    builder: QueryBuilder = default_query_builder,
) -> Select:
    """Apply the take count, if any."""
    if eq.take_count is not None:
        stmt = builder.apply_take(stmt, entity_type, eq.take_count)
    return stmt


def expand_paths(expand_clause: ExpandClause) -> list[str]:
    """Normalize expand paths and keep only the most specific path of each prefix chain.

    A path is dropped when another declared path continues it past a
    delimiter: ``"orders"`` is dropped when ``"orders/items"`` is declared,
    but not when only ``"ordersArchive"`` is. Declaration order is preserved
    and exact duplicates are kept.

    Args:
        expand_clause: Declared relationship paths, `/` or `.` delimited

    Returns:
        Dot-delimited paths to include
    """
    normalized = [
        path.replace(INPUT_PATH_DELIMITER, TARGET_PATH_DELIMITER)
        for path in expand_clause.property_paths
    ]

    paths: list[str] = []
    for path in normalized:
        prefix = path + TARGET_PATH_DELIMITER
        if any(other.startswith(prefix) for other in normalized):
            continue
        paths.append(path)
    return paths


def apply_expand(
    eq: EntityQuery,
    stmt: Select,
    entity_type: type,
    strategy: LoadStrategy | str | None = None,
) -> Select:
    """Eagerly load every expanded relationship path, if any.

    Args:
        eq: Entity query
        stmt: Statement selecting `entity_type`
        entity_type: Mapped class the paths start from
        strategy: Loading strategy passed to `include`
    """
    if eq.expand_clause is not None:
        paths = expand_paths(eq.expand_clause)
        logger.debug(
            "Applying expand clause",
            extra={
                "entity_type": entity_type.__name__,
                "declared": list(eq.expand_clause.property_paths),
                "included": paths,
            },
        )
        for path in paths:
            stmt = include(stmt, entity_type, path, strategy)
    return stmt


def apply_entity_query(
    eq: EntityQuery,
    stmt: Select,
    entity_type: type,
    builder: QueryBuilder = default_query_builder,
    strategy: LoadStrategy | str | None = None,
) -> Select:
    """Apply every clause: where, order-by, skip, take, expand, then select.

    Projection comes last so loader options still target the entity. Expanding
    and projecting in the same query is left to the builder to reconcile.
    """
    stmt = apply_where(eq, stmt, entity_type, builder)
    stmt = apply_order_by(eq, stmt, entity_type, builder)
    stmt = apply_skip(eq, stmt, entity_type, builder)
    stmt = apply_take(eq, stmt, entity_type, builder)
    stmt = apply_expand(eq, stmt, entity_type, strategy)
    stmt = apply_select(eq, stmt, entity_type, builder)
    return stmt
