"""
Pytest configuration and shared fixtures.

Provides:
- engine: In-memory SQLite engine with the test schema created
- db_session: Function-scoped session over seeded customers, orders and items
- recording_builder: Query builder double that records every delegation
- person: Dataclass object graph for serialization tests
"""

from __future__ import annotations

import sys
from collections.abc import Generator
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]

# Add package root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402 (import after path setup)
from sqlalchemy import Engine, create_engine  # noqa: E402 (import after path setup)
from sqlalchemy.orm import Session  # noqa: E402 (import after path setup)

from tests.models import (  # noqa: E402 (import after path setup)
    Address,
    Base,
    Customer,
    Order,
    OrderItem,
    Person,
    Profile,
)


class RecordingBuilder:
    """Query builder double: records (method, stmt, entity_type, token) and returns a new handle."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any, type, Any]] = []

    def _record(self, method: str, stmt: Any, entity_type: type, token: Any) -> Any:
        self.calls.append((method, stmt, entity_type, token))
        return ("handle", len(self.calls))

    def apply_where(self, stmt, entity_type, predicate):
        return self._record("apply_where", stmt, entity_type, predicate)

    def apply_order_by(self, stmt, entity_type, order_by):
        return self._record("apply_order_by", stmt, entity_type, order_by)

    def apply_select(self, stmt, entity_type, select):
        return self._record("apply_select", stmt, entity_type, select)

    def apply_skip(self, stmt, entity_type, count):
        return self._record("apply_skip", stmt, entity_type, count)

    def apply_take(self, stmt, entity_type, count):
        return self._record("apply_take", stmt, entity_type, count)


@pytest.fixture
def recording_builder() -> RecordingBuilder:
    return RecordingBuilder()


@pytest.fixture
def engine() -> Generator[Engine]:
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Generator[Session]:
    """Seeded session.

    Ada (ACTIVE): profile, order 1 (2 items), order 2 (1 item)
    Grace (ACTIVE): order 3 (no items)
    Linus (INACTIVE): nothing
    """
    with Session(engine) as session:
        ada = Customer(customer_id=1, name="Ada", status="ACTIVE")
        grace = Customer(customer_id=2, name="Grace", status="ACTIVE")
        linus = Customer(customer_id=3, name="Linus", status="INACTIVE")
        session.add_all([ada, grace, linus])
        session.add(Profile(profile_id=1, customer_id=1, bio="Analyst"))
        session.add_all(
            [
                Order(order_id=1, customer_id=1, total=Decimal("10.50")),
                Order(order_id=2, customer_id=1, total=Decimal("4.00")),
                Order(order_id=3, customer_id=2, total=Decimal("99.99")),
            ]
        )
        session.add_all(
            [
                OrderItem(item_id=1, order_id=1, sku="ENG-1", quantity=2),
                OrderItem(item_id=2, order_id=1, sku="ENG-2"),
                OrderItem(item_id=3, order_id=2, sku="CARD-1", quantity=5),
            ]
        )
        session.commit()
        session.expunge_all()
        yield session


@pytest.fixture
def person() -> Person:
    boss = Person(id=2, name="Charles Babbage", born=date(1791, 12, 26))
    return Person(
        id=1,
        name="Ada Lovelace",
        born=date(1815, 12, 10),
        tags=["math"],
        addresses=[Address(street="St James's Square", city="London")],
        home=Address(street="Ockham Park", city="Surrey"),
        manager=boss,
        metadata={"title": "Countess"},
    )
