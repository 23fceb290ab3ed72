# -*- coding: utf-8 -*-
"""
Execute documents against an executable schema.
"""

# flake8: noqa

from .default_resolver import default_resolver
from .execute import execute
from .executor import Executor
from .get_operation import get_operation, get_operation_with_type
from .instrumentation import Instrumentation, MultiInstrumentation
from .runtime import AsyncIORuntime, BlockingRuntime, Runtime
from .wrappers import ExecutionResult, ResolutionContext, ResolveInfo

__all__ = (
    "execute",
    "get_operation",
    "get_operation_with_type",
    "default_resolver",
    "Executor",
    "ExecutionResult",
    "ResolutionContext",
    "ResolveInfo",
    "Instrumentation",
    "MultiInstrumentation",
    "Runtime",
    "BlockingRuntime",
    "AsyncIORuntime",
)
