"""
Eager loading of related entities along a relationship path.

`include` is the data-access side of the expand clause: it turns a dotted
relationship path such as ``"orders.items"`` into a chained loader option on
the statement. Results of a `joined` strategy over collections must be made
unique by the caller (``result.unique()``), as SQLAlchemy requires.
"""

import logging

from sqlalchemy import Select, inspect
from sqlalchemy.orm import joinedload, selectinload, subqueryload

from breeze.core.config import settings
from breeze.core.errors import UnknownMemberError
from breeze.domain.enums import LoadStrategy

logger = logging.getLogger(__name__)

_LOADERS = {
    LoadStrategy.SELECTIN: selectinload,
    LoadStrategy.JOINED: joinedload,
    LoadStrategy.SUBQUERY: subqueryload,
}


def include(
    stmt: Select,
    entity_type: type,
    path: str,
    strategy: LoadStrategy | str | None = None,
) -> Select:
    """Attach a loader option for every relationship along `path`.

    Args:
        stmt: Statement selecting `entity_type`
        entity_type: Mapped class the path starts from
        path: Dot-separated relationship names
        strategy: Loading strategy (default: settings.expand_load_strategy)

    Returns:
        New statement with the loader option applied

    Raises:
        UnknownMemberError: If a path segment is not a relationship of its class
    """
    strategy = LoadStrategy(strategy or settings.expand_load_strategy)
    loader = _LOADERS[strategy]

    option = None
    current = entity_type
    for name in path.split("."):
        mapper = inspect(current, raiseerr=False)
        if mapper is None or name not in mapper.relationships:
            raise UnknownMemberError(
                f"'{current.__name__}' has no relationship '{name}' (expand path '{path}')",
                details={"entity_type": current.__name__, "member": name, "path": path},
            )
        attr = getattr(current, name)
        option = loader(attr) if option is None else getattr(option, loader.__name__)(attr)
        current = mapper.relationships[name].mapper.class_

    logger.debug(
        "Including related entities",
        extra={"entity_type": entity_type.__name__, "path": path, "strategy": strategy.value},
    )
    return stmt.options(option)
