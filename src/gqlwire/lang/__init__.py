# -*- coding: utf-8 -*-
"""
The :mod:`gqlwire.lang` module parses GraphQL source text: queries sent by
clients as well as the type definition language schemas are written in.
"""

# flake8: noqa

from .lexer import Lexer
from .parser import Parser, parse, parse_type, parse_value

__all__ = ("parse", "parse_type", "parse_value", "Parser", "Lexer")
