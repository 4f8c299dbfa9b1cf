"""
Contract resolver that includes members by name.

Lets the serializer skip members so it does not walk the entire object graph.
Scalars, strings and standard-library types are serialized by default; collections
and application types are excluded unless their member name is allow-listed,
either globally or for the declaring type.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from breeze.core.errors import ConfigurationError
from breeze.domain.enums import MemberKind
from breeze.serialization.members import (
    MemberInfo,
    is_collection_type,
    is_scalar_type,
    is_system_type,
)
from breeze.serialization.resolver import ContractResolver


def type_key(tp: type | str) -> str:
    """Stable identifier for a type: its fully-qualified name."""
    if isinstance(tp, str):
        return tp
    if isinstance(tp, type):
        return f"{tp.__module__}.{tp.__qualname__}"
    raise ConfigurationError(
        f"Included type members must be keyed by type or qualified name, got {tp!r}"
    )


class IncludingContractResolver(ContractResolver):
    """
    Name-based inclusion policy.

    Example:
        IncludingContractResolver("customer", "items")
        IncludingContractResolver(included_type_members={Order: ["items"], "app.models.Customer": ["orders"]})
    """

    def __init__(
        self,
        *included_members: str,
        included_type_members: Mapping[type | str, Iterable[str]] | None = None,
    ) -> None:
        """
        Args:
            included_members: Member names included on every type
            included_type_members: Member names included per declaring type,
                keyed by the type or its fully-qualified name
        """
        super().__init__()
        self._included_members = frozenset(included_members)
        self._included_type_members: Mapping[str, frozenset[str]] = MappingProxyType(
            {type_key(tp): frozenset(names) for tp, names in (included_type_members or {}).items()}
        )

    def get_serializable_members(self, object_type: type) -> list[MemberInfo]:
        members = super().get_serializable_members(object_type)

        properties = [
            m
            for m in members
            if m.kind is MemberKind.PROPERTY and self.is_included(m.member_type, object_type, m.name)
        ]
        fields = [
            m
            for m in members
            if m.kind is MemberKind.FIELD and self.is_included(m.member_type, object_type, m.name)
        ]
        return properties + fields

    def is_included(self, member_type: Any, declaring_type: type, name: str) -> bool:
        """
        Return True if the member should be serialized.

        Allow-listed names win; after that scalars and strings are included,
        collections are excluded, standard-library types are included and
        everything else is excluded.
        """
        if name in self._included_members:
            return True

        names = self._included_type_members.get(type_key(declaring_type))
        if names is not None and name in names:
            return True

        if is_scalar_type(member_type):
            return True

        # collections are excluded
        if is_collection_type(member_type):
            return False

        return is_system_type(member_type)
