# -*- coding: utf-8 -*-
""" Global fixtures """

import pytest

from gqlwire.schema import (
    ResolverBindingTable,
    build_executable_schema,
    parse_schema_document,
)


@pytest.fixture
def starwars_schema():
    from gqlwire.demos import starwars

    return starwars.build_schema()


@pytest.fixture
def books_schema():
    from gqlwire.demos import books

    return books.build_schema()


@pytest.fixture
def build_schema():
    """ Helper building an executable schema from SDL and a mapping of
    ``"Type.field"`` (field resolvers) or ``"Type"`` (type resolvers) keys to
    callables. """

    def factory(sdl, resolvers=None):
        table = ResolverBindingTable()
        for key, func in (resolvers or {}).items():
            if "." in key:
                table.resolver(key)(func)
            else:
                table.type_resolver(key)(func)
        return build_executable_schema(parse_schema_document(sdl), table)

    return factory


@pytest.fixture
def raiser():
    def factory(cls, *args, **kwargs):
        assert issubclass(cls, Exception)

        def _raiser(*_a, **_kw):
            raise cls(*args, **kwargs)

        return _raiser

    return factory
