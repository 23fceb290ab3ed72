# -*- coding: utf-8 -*-
""" Some generic language level utilities for internal use. """

from typing import Any, Mapping


def is_iterable(value: Any, strings: bool = True) -> bool:
    """ Check if a value is iterable.

    This does not consume iterators. Mappings are never considered iterable as
    GraphQL lists are ordered sequences.

    >>> is_iterable([1, 2])
    True

    >>> is_iterable("foo", strings=False)
    False

    >>> is_iterable({"a": 1})
    False
    """
    if isinstance(value, (str, bytes)):
        return strings

    if isinstance(value, Mapping):
        return False

    try:
        iter(value)
    except TypeError:
        return False
    return True
