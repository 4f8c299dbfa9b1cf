"""
Contract resolver that includes members by type.

Types from the home package are excluded unless explicitly included; types
from every other package pass through. This controls which application types
are serialized without naming individual members.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import ModuleType
from typing import Any, get_args, get_origin

from breeze.core.errors import ConfigurationError
from breeze.serialization.members import MemberInfo, strip_optional, top_level_package
from breeze.serialization.resolver import ContractResolver


def unwrap_member_type(tp: Any) -> Any:
    """Return the first type argument of a parameterized type, one level deep.

    ``list[Order]`` gives ``Order``, ``Order | None`` and ``None | Order`` give
    ``Order``, and ``list[list[Order]]`` gives ``list[Order]``. An optional wrapper
    is removed first, so ``list[Order] | None`` gives ``Order``. When the first
    argument is not a type, as in ``Callable[[Order], None]`` or
    ``Literal["a"]``, the hint is returned as is.
    """
    tp = strip_optional(tp)
    args = get_args(tp)
    if args and (isinstance(args[0], type) or get_origin(args[0]) is not None):
        return args[0]
    return tp


class TypeContractResolver(ContractResolver):
    """
    Type-based inclusion policy.

    Example:
        # home package is inferred from Order's top-level package
        TypeContractResolver(Order, Customer)

        # explicit home package, may be a sub-package
        TypeContractResolver(Order, home_package="shop.models")
    """

    def __init__(self, *included_types: type, home_package: str | ModuleType | None = None) -> None:
        """
        Args:
            included_types: Types that are serialized even though they are in the home package
            home_package: Package whose types are excluded by default; defaults to
                the top-level package of the first included type, or breeze itself

        Raises:
            ConfigurationError: If an included type is not a type or the home package is empty
        """
        super().__init__()
        for tp in included_types:
            if not isinstance(tp, type):
                raise ConfigurationError(f"Included types must be types, got {tp!r}")

        if isinstance(home_package, ModuleType):
            home_package = home_package.__name__
        elif home_package is None:
            anchor = included_types[0] if included_types else TypeContractResolver
            home_package = top_level_package(anchor.__module__)

        if not home_package or not home_package.strip():
            raise ConfigurationError("Home package must be a non-empty package name")

        self._home_package = home_package.strip()
        self._included_types = frozenset(included_types)

    @classmethod
    def for_package(
        cls, home_package: str | ModuleType, included_types: Iterable[type]
    ) -> TypeContractResolver:
        """Build a resolver for an explicit home package and included-type set."""
        return cls(*included_types, home_package=home_package)

    @property
    def home_package(self) -> str:
        return self._home_package

    def _in_home_package(self, module: str) -> bool:
        return module == self._home_package or module.startswith(self._home_package + ".")

    def get_serializable_members(self, object_type: type) -> list[MemberInfo]:
        members = super().get_serializable_members(object_type)
        return [m for m in members if self.is_included(m.member_type)]

    def is_included(self, member_type: Any) -> bool:
        # unwrap collections
        tp = unwrap_member_type(member_type)

        if tp in self._included_types:
            return True

        module = getattr(tp, "__module__", None)
        if isinstance(module, str) and self._in_home_package(module):
            return False

        return True
