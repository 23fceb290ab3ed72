# -*- coding: utf-8 -*-
"""
Turn schema definition language text into a validated graph of
:class:`~gqlwire.schema.types.TypeDefinition`.

Parsing is a pure function of the input text. Validation happens in two
passes: the first one collects every declared type name (rejecting
duplicates), the second one builds the definitions and checks that every
reference resolves to a declared type or a built-in scalar.
"""

import logging
from typing import (
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    TypeVar,
    Union,
)

from ..exc import (
    DuplicateDefinitionError,
    GraphQLSyntaxError,
    SchemaSyntaxError,
    UnknownTypeReference,
)
from ..lang import ast as _ast
from ..lang.parser import parse
from .types import (
    BUILTIN_SCALARS,
    ArgumentDefinition,
    EnumValueDefinition,
    FieldDefinition,
    FrozenMap,
    TypeDefinition,
    TypeKind,
    TypeRef,
    _Frozen,
    builtin_scalar_definitions,
    type_ref_from_ast,
    unwrap_type,
)

logger = logging.getLogger(__name__)

DEFAULT_DEPRECATION_REASON = "No longer supported"

T = TypeVar("T")


class TypeGraph(_Frozen):
    """
    Result of parsing a schema document.

    Attributes:
        definitions (Tuple[TypeDefinition, ...]): Declared types in document
            order; built-in scalars are not included.
        type_map (Mapping[str, TypeDefinition]): All known types by name,
            built-in scalars included.
        query_type (Optional[str]): Name of the query root type
        mutation_type (Optional[str]): Name of the mutation root type
    """

    __slots__ = ("definitions", "type_map", "query_type", "mutation_type")

    def __init__(
        self,
        definitions: Iterable[TypeDefinition],
        query_type: Optional[str] = None,
        mutation_type: Optional[str] = None,
    ):
        definitions = tuple(definitions)
        type_map = {t.name: t for t in builtin_scalar_definitions()}
        type_map.update((t.name, t) for t in definitions)
        self._set(
            definitions=definitions,
            type_map=FrozenMap(type_map),
            query_type=query_type,
            mutation_type=mutation_type,
        )

    def __iter__(self):
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    def __contains__(self, name: str) -> bool:
        return name in self.type_map

    def __repr__(self) -> str:
        return "<TypeGraph %s>" % ", ".join(t.name for t in self.definitions)


def parse_schema(schema_text: Union[str, bytes]) -> List[TypeDefinition]:
    """
    Parse schema definition text into its list of type definitions.

    Args:
        schema_text: Schema definition language source.

    Returns:
        Declared types in document order.

    Raises:
        :class:`~gqlwire.exc.SchemaSyntaxError`: Malformed text.
        :class:`~gqlwire.exc.DuplicateDefinitionError`: A name is defined
            more than once.
        :class:`~gqlwire.exc.UnknownTypeReference`: A definition refers to
            an undeclared type.
    """
    return list(parse_schema_document(schema_text).definitions)


def parse_schema_document(schema_text: Union[str, bytes]) -> TypeGraph:
    """
    Parse schema definition text, keeping track of the root operation types.

    Root types come from the ``schema { ... }`` definition when present and
    otherwise default to the types named ``Query`` and ``Mutation``.
    """
    try:
        document = parse(schema_text, allow_type_system=True)
    except GraphQLSyntaxError as err:
        raise SchemaSyntaxError(err.message, err.position, err.source) from err

    return _GraphBuilder(document).build()


def _loc_start(node: _ast.Node) -> int:
    return node.loc[0] if node.loc else 0


def _description(node: Optional[_ast.StringValue]) -> Optional[str]:
    return node.value if node is not None else None


def _deprecation_reason(directives: Sequence[_ast.Directive]) -> Optional[str]:
    for directive in directives:
        if directive.name.value != "deprecated":
            continue
        for arg in directive.arguments:
            if arg.name.value == "reason" and isinstance(
                arg.value, _ast.StringValue
            ):
                return arg.value.value
        return DEFAULT_DEPRECATION_REASON
    return None


class _GraphBuilder:
    def __init__(self, document: _ast.Document):
        self.document = document
        self.source = document.source or ""
        self.known = set(BUILTIN_SCALARS)  # type: Set[str]

    def build(self) -> TypeGraph:
        schema_node = None  # type: Optional[_ast.SchemaDefinition]
        type_nodes = []  # type: List[_ast.TypeDefinition]

        for definition in self.document.definitions:
            if isinstance(definition, _ast.SchemaDefinition):
                if schema_node is not None:
                    raise DuplicateDefinitionError(
                        "Must provide only one schema definition"
                    )
                schema_node = definition
            elif isinstance(definition, _ast.TypeDefinition):
                type_nodes.append(definition)
            else:
                raise SchemaSyntaxError(
                    "Schema documents cannot contain executable definitions",
                    _loc_start(definition),
                    self.source,
                )

        for node in type_nodes:
            name = node.name.value
            if name in BUILTIN_SCALARS:
                raise DuplicateDefinitionError(
                    'Cannot redefine built-in scalar "%s"' % name
                )
            if name in self.known:
                raise DuplicateDefinitionError('Duplicate type "%s"' % name)
            self.known.add(name)

        definitions = [self.build_type(node) for node in type_nodes]
        query_type, mutation_type = self.root_types(schema_node)

        logger.debug(
            "Parsed schema document with %d types", len(definitions)
        )
        return TypeGraph(definitions, query_type, mutation_type)

    def root_types(
        self, schema_node: Optional[_ast.SchemaDefinition]
    ) -> Tuple[Optional[str], Optional[str]]:
        if schema_node is None:
            return (
                "Query" if "Query" in self.known else None,
                "Mutation" if "Mutation" in self.known else None,
            )

        roots = {}  # type: Dict[str, str]
        for op in schema_node.operation_types:
            if op.operation in roots:
                raise DuplicateDefinitionError(
                    'Duplicate root type for operation "%s"' % op.operation
                )
            name = op.type.name.value
            if name not in self.known:
                raise UnknownTypeReference("schema", op.operation, name)
            roots[op.operation] = name

        return roots.get("query"), roots.get("mutation")

    def type_ref(
        self, node: _ast.Type, owner: str, field: Optional[str]
    ) -> TypeRef:
        ref = type_ref_from_ast(node)
        name = unwrap_type(ref)
        if name not in self.known:
            raise UnknownTypeReference(owner, field, name)
        return ref

    def reference(self, name: str, owner: str) -> str:
        if name not in self.known:
            raise UnknownTypeReference(owner, None, name)
        return name

    def unique(
        self, entries: Iterable[T], key: Callable[[T], str], what: str
    ) -> List[T]:
        seen = set()  # type: Set[str]
        result = []  # type: List[T]
        for entry in entries:
            name = key(entry)
            if name in seen:
                raise DuplicateDefinitionError("Duplicate %s %s" % (what, name))
            seen.add(name)
            result.append(entry)
        return result

    def arguments(
        self,
        nodes: Sequence[_ast.InputValueDefinition],
        owner: str,
        what: str,
    ) -> List[ArgumentDefinition]:
        return self.unique(
            (
                ArgumentDefinition(
                    node.name.value,
                    self.type_ref(node.type, owner, node.name.value),
                    default_value=node.default_value,
                    description=_description(node.description),
                )
                for node in nodes
            ),
            lambda arg: '"%s.%s"' % (owner, arg.name),
            what,
        )

    def fields(
        self, nodes: Sequence[_ast.FieldDefinition], owner: str
    ) -> List[FieldDefinition]:
        return self.unique(
            (
                FieldDefinition(
                    node.name.value,
                    self.type_ref(node.type, owner, node.name.value),
                    arguments=self.arguments(
                        node.arguments,
                        "%s.%s" % (owner, node.name.value),
                        "argument",
                    ),
                    description=_description(node.description),
                    deprecation_reason=_deprecation_reason(node.directives),
                )
                for node in nodes
            ),
            lambda field: '"%s.%s"' % (owner, field.name),
            "field",
        )

    def build_type(self, node: _ast.TypeDefinition) -> TypeDefinition:
        name = node.name.value
        description = _description(node.description)

        if isinstance(node, _ast.ScalarTypeDefinition):
            return TypeDefinition(
                name, TypeKind.SCALAR, description=description
            )

        elif isinstance(node, _ast.ObjectTypeDefinition):
            return TypeDefinition(
                name,
                TypeKind.OBJECT,
                fields=self.fields(node.fields, name),
                interfaces=self.unique(
                    (
                        self.reference(i.name.value, name)
                        for i in node.interfaces
                    ),
                    lambda i: '"%s" for type "%s"' % (i, name),
                    "interface",
                ),
                description=description,
            )

        elif isinstance(node, _ast.InterfaceTypeDefinition):
            return TypeDefinition(
                name,
                TypeKind.INTERFACE,
                fields=self.fields(node.fields, name),
                description=description,
            )

        elif isinstance(node, _ast.UnionTypeDefinition):
            return TypeDefinition(
                name,
                TypeKind.UNION,
                possible_types=self.unique(
                    (self.reference(t.name.value, name) for t in node.types),
                    lambda t: '"%s" in union "%s"' % (t, name),
                    "member",
                ),
                description=description,
            )

        elif isinstance(node, _ast.EnumTypeDefinition):
            return TypeDefinition(
                name,
                TypeKind.ENUM,
                enum_values=self.unique(
                    (
                        EnumValueDefinition(
                            value.name.value,
                            description=_description(value.description),
                            deprecation_reason=_deprecation_reason(
                                value.directives
                            ),
                        )
                        for value in node.values
                    ),
                    lambda v: '"%s.%s"' % (name, v.name),
                    "enum value",
                ),
                description=description,
            )

        elif isinstance(node, _ast.InputObjectTypeDefinition):
            return TypeDefinition(
                name,
                TypeKind.INPUT_OBJECT,
                input_fields=self.arguments(node.fields, name, "input field"),
                description=description,
            )

        raise TypeError("Unsupported definition %r" % node)


def as_type_map(
    types: "Union[TypeGraph, Iterable[TypeDefinition]]",
) -> Mapping[str, TypeDefinition]:
    if isinstance(types, TypeGraph):
        return types.type_map
    return TypeGraph(types).type_map
