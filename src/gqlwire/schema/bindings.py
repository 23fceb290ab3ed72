# -*- coding: utf-8 -*-
"""
Associate resolver callables with schema fields and abstract types,
independently of any schema.

>>> bindings = ResolverBindingTable()
>>> @bindings.resolver("Query.hero")
... def resolve_hero(root, args, info):
...     return {"name": "R2-D2"}
"""

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
)

from ..exc import DuplicateBindingError, SchemaFrozenError
from .types import FrozenMap

if TYPE_CHECKING:
    from ..execution.wrappers import ResolveInfo  # noqa: F401

Resolver = Callable[[Any, Dict[str, Any], "ResolveInfo"], Any]
TypeResolver = Callable[[Any, "ResolveInfo"], Any]

TResolver = TypeVar("TResolver", bound=Callable[..., Any])
TTypeResolver = TypeVar("TTypeResolver", bound=Callable[..., Any])

FieldKey = Tuple[str, str]


def _split_field_path(field: str) -> FieldKey:
    parts = field.split(".")
    if len(parts) != 2 or not all(parts):
        raise ValueError(
            'Invalid field path "%s". Field path must be of the form '
            '"{Typename}.{Fieldname}"' % field
        )
    return parts[0], parts[1]


class ResolverBindings:
    """
    Immutable set of resolver bindings, as produced by
    :meth:`ResolverBindingTable.build`.

    Attributes:
        field_resolvers (Mapping[Tuple[str, str], Resolver]): Field resolvers
            keyed by ``(type name, field name)``.
        type_resolvers (Mapping[str, TypeResolver]): Type resolvers keyed by
            abstract type name.
    """

    __slots__ = ("field_resolvers", "type_resolvers")

    def __init__(
        self,
        field_resolvers: Optional[Mapping[FieldKey, Resolver]] = None,
        type_resolvers: Optional[Mapping[str, TypeResolver]] = None,
    ):
        object.__setattr__(
            self, "field_resolvers", FrozenMap(field_resolvers)
        )
        object.__setattr__(
            self, "type_resolvers", FrozenMap(type_resolvers)
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise SchemaFrozenError("Resolver bindings are immutable")

    def field_resolver(
        self, type_name: str, field_name: str
    ) -> Optional[Resolver]:
        return self.field_resolvers.get((type_name, field_name))

    def type_resolver(self, type_name: str) -> Optional[TypeResolver]:
        return self.type_resolvers.get(type_name)

    def bound_fields(self) -> Iterator[FieldKey]:
        return iter(self.field_resolvers)

    def bound_types(self) -> Iterator[str]:
        return iter(self.type_resolvers)

    def __len__(self) -> int:
        return len(self.field_resolvers) + len(self.type_resolvers)

    def __repr__(self) -> str:
        return "<ResolverBindings fields=%d types=%d>" % (
            len(self.field_resolvers),
            len(self.type_resolvers),
        )


class ResolverBindingTable:
    """
    Mutable collection of resolver bindings.

    Each ``(type, field)`` pair and each abstract type can be bound at most
    once, re-binding raises :class:`~gqlwire.exc.DuplicateBindingError`
    whatever the registration order. Once :meth:`build` has been called the
    table is frozen and any further registration raises
    :class:`~gqlwire.exc.SchemaFrozenError`.

    Tables can be combined with :meth:`merge`.
    """

    def __init__(self):
        self._field_resolvers = {}  # type: Dict[FieldKey, Resolver]
        self._type_resolvers = {}  # type: Dict[str, TypeResolver]
        self._built = None  # type: Optional[ResolverBindings]

    @property
    def frozen(self) -> bool:
        return self._built is not None

    def _check_not_frozen(self) -> None:
        if self._built is not None:
            raise SchemaFrozenError(
                "Resolver binding table has already been built"
            )

    def bind(self, type_name: str, field_name: str, resolver: Resolver) -> None:
        """
        Register a field resolver.

        Args:
            type_name: Object or interface type name
            field_name: Field name
            resolver: ``callable(parent, args, info)``

        Raises:
            :class:`~gqlwire.exc.DuplicateBindingError`: The field is
                already bound.
            :class:`~gqlwire.exc.SchemaFrozenError`: The table has been
                built.
        """
        self._check_not_frozen()
        key = (type_name, field_name)
        if key in self._field_resolvers:
            raise DuplicateBindingError(
                'Field "%s.%s" already has a resolver' % key
            )
        self._field_resolvers[key] = resolver

    def bind_type_resolver(
        self, type_name: str, type_resolver: TypeResolver
    ) -> None:
        """
        Register the type resolver of an interface or union type.

        Args:
            type_name: Abstract type name
            type_resolver: ``callable(value, info) -> str`` returning the
                name of the concrete object type of ``value``.

        Raises:
            :class:`~gqlwire.exc.DuplicateBindingError`: The type is
                already bound.
            :class:`~gqlwire.exc.SchemaFrozenError`: The table has been
                built.
        """
        self._check_not_frozen()
        if type_name in self._type_resolvers:
            raise DuplicateBindingError(
                'Type "%s" already has a type resolver' % type_name
            )
        self._type_resolvers[type_name] = type_resolver

    def resolver(self, field: str) -> Callable[[TResolver], TResolver]:
        """
        Decorator form of :meth:`bind`.

        Args:
            field: Field path in the form ``{Typename}.{Fieldname}``.

        Raises:
            ValueError: If ``field`` cannot be parsed.
        """
        type_name, field_name = _split_field_path(field)

        def decorator(func: TResolver) -> TResolver:
            self.bind(type_name, field_name, func)
            return func

        return decorator

    def type_resolver(
        self, type_name: str
    ) -> Callable[[TTypeResolver], TTypeResolver]:
        """ Decorator form of :meth:`bind_type_resolver`. """

        def decorator(func: TTypeResolver) -> TTypeResolver:
            self.bind_type_resolver(type_name, func)
            return func

        return decorator

    def merge(self, other: "ResolverBindingTable") -> None:
        """
        Copy every binding of ``other`` into this table. Conflicting keys
        raise :class:`~gqlwire.exc.DuplicateBindingError`.
        """
        for key, resolver in other._field_resolvers.items():
            self.bind(key[0], key[1], resolver)
        for type_name, type_resolver in other._type_resolvers.items():
            self.bind_type_resolver(type_name, type_resolver)

    def snapshot(self) -> ResolverBindings:
        """
        Immutable copy of the current bindings. Unlike :meth:`build` this
        does not freeze the table.
        """
        if self._built is not None:
            return self._built
        return ResolverBindings(self._field_resolvers, self._type_resolvers)

    def build(self) -> ResolverBindings:
        """
        Freeze the table and return the corresponding immutable bindings.
        Calling it again returns the same object.
        """
        if self._built is None:
            self._built = self.snapshot()
        return self._built

    def __repr__(self) -> str:
        return "<ResolverBindingTable fields=%d types=%d%s>" % (
            len(self._field_resolvers),
            len(self._type_resolvers),
            " frozen" if self.frozen else "",
        )
