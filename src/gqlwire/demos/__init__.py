# -*- coding: utf-8 -*-
"""
Demonstration schemas, each defined by a packaged ``.graphql`` resource and a
:class:`~gqlwire.schema.ResolverBindingTable`.
"""

import importlib
from typing import Tuple

from ..schema import ExecutableSchema

DEMOS = ("starwars", "books")


def load_demo(name: str) -> Tuple[ExecutableSchema, str]:
    """
    Build the executable schema of a demo.

    Args:
        name: Demo name, one of :data:`DEMOS`.

    Returns:
        The executable schema and the default query of the demo.

    Raises:
        ValueError: Unknown demo.
    """
    if name not in DEMOS:
        raise ValueError(
            'Unknown demo "%s", expected one of %s' % (name, ", ".join(DEMOS))
        )
    module = importlib.import_module("%s.%s" % (__name__, name))
    return module.build_schema(), module.DEFAULT_QUERY  # type: ignore
