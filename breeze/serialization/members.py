"""
Member discovery and type classification for serialization.

`discover_members` lists the candidate members of a class the way a
serializer sees them: Python properties, then data fields. Fields come from
the SQLAlchemy mapper for mapped classes, from `model_fields` for pydantic
models, and from type hints otherwise. Relationship members are typed as their
target class, or ``list[target]`` for collections.

The classification helpers answer the questions inclusion policies ask about
a member type: is it a scalar, a collection, or a standard-library type?
"""

import dataclasses
import sys
import types
from collections.abc import Iterable
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, NamedTuple, Union, get_args, get_origin, get_type_hints
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper

from breeze.domain.enums import MemberKind

# datetime is a subclass of date
SCALAR_TYPES: tuple[type, ...] = (bool, int, float, complex, Decimal, bytes, date, time, timedelta, UUID)

# Base classes whose own properties are framework plumbing, not data
_FRAMEWORK_PACKAGES = frozenset({"pydantic", "sqlalchemy"})


class MemberInfo(NamedTuple):
    """A serializable member of `declaring_type`."""

    name: str
    member_type: Any
    declaring_type: type
    kind: MemberKind


def top_level_package(module_name: str) -> str:
    return module_name.partition(".")[0]


def strip_optional(tp: Any) -> Any:
    """Return ``X`` for ``X | None``; any other hint is returned as is."""
    if get_origin(tp) in (Union, types.UnionType):
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def is_scalar_type(tp: Any) -> bool:
    """True for value-like types: numbers, bool, str, bytes, dates and times, UUID, Decimal, Enum."""
    tp = strip_optional(tp)
    if not isinstance(tp, type):
        return False
    return tp is str or issubclass(tp, SCALAR_TYPES) or issubclass(tp, Enum)


def is_collection_type(tp: Any) -> bool:
    """True for sequences, sets, mappings and any other iterable type."""
    tp = strip_optional(tp)
    origin = get_origin(tp)
    if origin is not None:
        return isinstance(origin, type) and issubclass(origin, Iterable)
    return isinstance(tp, type) and issubclass(tp, Iterable)


def is_system_type(tp: Any) -> bool:
    """True when the type (or typing construct) is defined by the standard library."""
    tp = strip_optional(tp)
    if tp is Any:
        return True
    module = getattr(tp, "__module__", None)
    if not isinstance(module, str):
        return False
    package = top_level_package(module)
    return package == "builtins" or package in sys.stdlib_module_names


def _column_type(prop: Any) -> Any:
    try:
        return prop.columns[0].type.python_type
    except NotImplementedError:
        return Any


def _field_types(cls: type) -> dict[str, Any]:
    mapper = sa_inspect(cls, raiseerr=False)
    if isinstance(mapper, Mapper):
        fields = {prop.key: _column_type(prop) for prop in mapper.column_attrs}
        for rel in mapper.relationships:
            target = rel.mapper.class_
            fields[rel.key] = list[target] if rel.uselist else target
        return fields

    if issubclass(cls, BaseModel):
        return {name: info.annotation for name, info in cls.model_fields.items()}

    hints = get_type_hints(cls)
    if dataclasses.is_dataclass(cls):
        return {f.name: hints.get(f.name, Any) for f in dataclasses.fields(cls)}
    return {
        name: tp
        for name, tp in hints.items()
        if tp is not ClassVar and get_origin(tp) is not ClassVar
    }


def _property_types(cls: type) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    seen: set[str] = set()
    for klass in cls.__mro__:
        package = top_level_package(klass.__module__)
        if package in _FRAMEWORK_PACKAGES or package == "builtins" or package in sys.stdlib_module_names:
            continue
        for name, value in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(value, property) and value.fget is not None:
                properties[name] = get_type_hints(value.fget).get("return", Any)
    return properties


def discover_members(object_type: type) -> list[MemberInfo]:
    """List the public properties and fields of `object_type`, properties first.

    Raises:
        NameError: If an annotation refers to a name that cannot be resolved
    """
    fields = _field_types(object_type)
    properties = _property_types(object_type)

    members = [
        MemberInfo(name, tp, object_type, MemberKind.PROPERTY)
        for name, tp in properties.items()
        if not name.startswith("_") and name not in fields
    ]
    members.extend(
        MemberInfo(name, tp, object_type, MemberKind.FIELD)
        for name, tp in fields.items()
        if not name.startswith("_")
    )
    return members
