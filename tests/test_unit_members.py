"""
Unit tests for member discovery and type classification (breeze.serialization.members).
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

import pytest
from pydantic import BaseModel

from breeze.domain.enums import MemberKind
from breeze.serialization.members import (
    discover_members,
    is_collection_type,
    is_scalar_type,
    is_system_type,
    strip_optional,
)
from tests.models import Address, Customer, Order, Person, Profile


class Color(Enum):
    RED = "red"


class Snapshot(BaseModel):
    label: str
    address: Address | None = None


class TestClassification:
    @pytest.mark.parametrize(
        "tp", [int, float, bool, str, bytes, Decimal, date, datetime, UUID, Color, int | None]
    )
    def test_scalars(self, tp):
        assert is_scalar_type(tp)

    @pytest.mark.parametrize("tp", [Address, list[int], timezone, Any, int | str])
    def test_non_scalars(self, tp):
        assert not is_scalar_type(tp)

    @pytest.mark.parametrize(
        "tp", [list, list[Address], dict[str, int], set[str], tuple[int, ...], list[Address] | None]
    )
    def test_collections(self, tp):
        assert is_collection_type(tp)

    @pytest.mark.parametrize("tp", [Address, timezone, int | str])
    def test_non_collections(self, tp):
        assert not is_collection_type(tp)

    @pytest.mark.parametrize("tp", [timezone, Any, object, Decimal])
    def test_system_types(self, tp):
        assert is_system_type(tp)

    @pytest.mark.parametrize("tp", [Address, Customer, Snapshot, BaseModel])
    def test_non_system_types(self, tp):
        assert not is_system_type(tp)

    def test_strip_optional(self):
        assert strip_optional(Address | None) is Address
        assert strip_optional(int | str) == int | str


class TestDiscoverMembers:
    def test_mapped_class_columns_relationships_and_properties(self):
        members = {m.name: m for m in discover_members(Customer)}

        assert set(members) == {
            "display_name",
            "customer_id",
            "name",
            "status",
            "created_at",
            "orders",
            "profile",
        }
        assert members["display_name"].kind is MemberKind.PROPERTY
        assert members["display_name"].member_type is str
        assert members["customer_id"].member_type is int
        assert members["created_at"].member_type is datetime
        assert members["orders"].member_type == list[Order]
        assert members["profile"].member_type is Profile
        assert all(m.declaring_type is Customer for m in members.values())

    def test_properties_listed_first(self):
        members = discover_members(Person)
        assert members[0].name == "initials"
        assert members[0].kind is MemberKind.PROPERTY
        assert all(m.kind is MemberKind.FIELD for m in members[1:])

    def test_dataclass_fields(self):
        members = {m.name: m.member_type for m in discover_members(Person)}
        assert members["born"] is date
        assert members["addresses"] == list[Address]
        assert members["manager"] == Person | None

    def test_pydantic_model_fields_without_framework_properties(self):
        members = {m.name: m.member_type for m in discover_members(Snapshot)}
        assert members == {"label": str, "address": Address | None}

    def test_numeric_column_type(self):
        members = {m.name: m.member_type for m in discover_members(Order)}
        assert members["total"] is Decimal
