# -*- coding: utf-8 -*-
"""
Runtimes control how resolvers are called and how their results are
combined, see :class:`Runtime`.
"""

from .asyncio import AsyncIORuntime
from .base import Runtime
from .blocking import BlockingRuntime

__all__ = ["Runtime", "BlockingRuntime", "AsyncIORuntime"]
