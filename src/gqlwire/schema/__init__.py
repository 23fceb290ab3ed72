# -*- coding: utf-8 -*-
"""
The :mod:`gqlwire.schema` module turns schema definition text and resolver
bindings into an immutable :class:`ExecutableSchema`.
"""

# flake8: noqa

from .bindings import ResolverBindings, ResolverBindingTable
from .executable import ExecutableSchema, build_executable_schema
from .loader import load_schema_source
from .printer import print_schema
from .registry import TypeGraph, parse_schema, parse_schema_document
from .types import (
    ArgumentDefinition,
    EnumValueDefinition,
    FieldDefinition,
    FrozenMap,
    ListTypeRef,
    NamedTypeRef,
    NonNullTypeRef,
    TypeDefinition,
    TypeKind,
    TypeRef,
    is_list,
    is_non_null,
    unwrap_type,
)

__all__ = (
    "ArgumentDefinition",
    "EnumValueDefinition",
    "ExecutableSchema",
    "FieldDefinition",
    "FrozenMap",
    "ListTypeRef",
    "NamedTypeRef",
    "NonNullTypeRef",
    "ResolverBindingTable",
    "ResolverBindings",
    "TypeDefinition",
    "TypeGraph",
    "TypeKind",
    "TypeRef",
    "build_executable_schema",
    "is_list",
    "is_non_null",
    "load_schema_source",
    "parse_schema",
    "parse_schema_document",
    "print_schema",
    "unwrap_type",
)
