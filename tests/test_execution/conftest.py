# -*- coding: utf-8 -*-
"""
Run execution tests against every runtime.
"""

import pytest

from gqlwire.execution.runtime import AsyncIORuntime, BlockingRuntime

from ._test_utils import assert_execution as assert_execution_original


@pytest.fixture(
    params=(
        pytest.param(BlockingRuntime, id="blocking"),
        pytest.param(AsyncIORuntime, id="asyncio"),
    )
)
def runtime_cls(request):
    return request.param


@pytest.fixture
def assert_execution(runtime_cls):
    async def _assert_execution(*args, **kwargs):
        return await assert_execution_original(
            *args, runtime=runtime_cls(), **kwargs
        )

    return _assert_execution
