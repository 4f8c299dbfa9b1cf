"""Serialization member control: contract resolvers and the serializer that consults them."""

from breeze.serialization.including_resolver import IncludingContractResolver
from breeze.serialization.members import MemberInfo, discover_members
from breeze.serialization.resolver import ContractResolver
from breeze.serialization.type_resolver import TypeContractResolver

__all__ = [
    "ContractResolver",
    "IncludingContractResolver",
    "MemberInfo",
    "TypeContractResolver",
    "discover_members",
]
