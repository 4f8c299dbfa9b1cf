"""
Base contract resolver and serializer.

A ContractResolver decides which members of a type are serialized. The base
resolver serializes every discovered member; subclasses prune the list in
`get_serializable_members`. Member lists are computed once per type and cached
on the resolver instance.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic_core import to_jsonable_python

from breeze.core.errors import SerializationError
from breeze.serialization.members import MemberInfo, discover_members, is_scalar_type, is_system_type

logger = logging.getLogger(__name__)


class ContractResolver:
    """Serializes every public property and field of an object."""

    def __init__(self) -> None:
        self._member_cache: dict[type, list[MemberInfo]] = {}

    def get_serializable_members(self, object_type: type) -> list[MemberInfo]:
        """Return the members of `object_type` that should be serialized."""
        return discover_members(object_type)

    def members_for(self, object_type: type) -> list[MemberInfo]:
        """Cached `get_serializable_members`."""
        members = self._member_cache.get(object_type)
        if members is None:
            members = self.get_serializable_members(object_type)
            self._member_cache[object_type] = members
            logger.debug(
                "Resolved serializable members",
                extra={
                    "object_type": object_type.__qualname__,
                    "members": [m.name for m in members],
                },
            )
        return members

    def serialize(self, obj: Any) -> Any:
        """Convert `obj` into JSON-compatible data, keeping only included members.

        Raises:
            SerializationError: If an object is reached again through its own members
        """
        return self._serialize(obj, ())

    def to_json(self, obj: Any, **kwargs: Any) -> str:
        """Serialize `obj` to a JSON string; kwargs go to `json.dumps`."""
        return json.dumps(self.serialize(obj), **kwargs)

    def _serialize(self, value: Any, ancestors: tuple[int, ...]) -> Any:
        if value is None or is_scalar_type(type(value)):
            return to_jsonable_python(value)
        if isinstance(value, Mapping):
            return {
                to_jsonable_python(key): self._serialize(item, ancestors)
                for key, item in value.items()
            }
        if isinstance(value, list | tuple | set | frozenset):
            return [self._serialize(item, ancestors) for item in value]
        if is_system_type(type(value)):
            return to_jsonable_python(value)

        if id(value) in ancestors:
            raise SerializationError(
                f"Self referencing loop detected for type '{type(value).__qualname__}'",
                details={"object_type": type(value).__qualname__},
            )
        ancestors = (*ancestors, id(value))
        return {
            member.name: self._serialize(getattr(value, member.name), ancestors)
            for member in self.members_for(type(value))
        }
