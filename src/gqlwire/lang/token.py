# -*- coding: utf-8 -*-
"""
Token kinds produced by :class:`gqlwire.lang.lexer.Lexer`.

Every kind is a subclass of :class:`Token`. Variable tokens (names, numbers
and strings) carry the characters they were read from while punctuators and
the ``<SOF>`` / ``<EOF>`` markers have a fixed value set on the class.
"""

from typing import Any


class Token:
    """ Base token class.

    Tokens compare equal when they have the same kind, value and position.

    Attributes:
        start (int): Position of the first character (0-indexed)
        end (int): Position after the last character (0-indexed)
        value (str): Characters making up this token
    """

    __slots__ = ("start", "end", "value")

    def __init__(self, start: int, end: int, value: str):
        self.start = start
        self.end = end
        self.value = value

    @classmethod
    def kind(cls) -> str:
        """ Name of this kind of token as shown in error messages. """
        return cls.__name__

    def describe(self) -> str:
        """ Describe the token for error messages, e.g. ``Name "foo"``. """
        return '%s "%s"' % (self.kind(), self.value)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return "<%s %r [%d:%d]>" % (
            self.__class__.__name__,
            self.value,
            self.start,
            self.end,
        )

    def __eq__(self, rhs: Any) -> bool:
        return (
            self.__class__ is rhs.__class__
            and (self.start, self.end, self.value)
            == (rhs.start, rhs.end, rhs.value)
        )


class Punctuator(Token):
    """ Tokens whose value is fixed by their kind. """

    __slots__ = ()

    value = ""

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end

    @classmethod
    def kind(cls) -> str:
        return '"%s"' % cls.value

    def describe(self) -> str:
        return self.kind()


class _Marker(Punctuator):
    __slots__ = ()

    @classmethod
    def kind(cls) -> str:
        return cls.value


class SOF(_Marker):
    value = "<SOF>"


class EOF(_Marker):
    value = "<EOF>"


class ExclamationMark(Punctuator):
    value = "!"


class Dollar(Punctuator):
    value = "$"


class ParenOpen(Punctuator):
    value = "("


class ParenClose(Punctuator):
    value = ")"


class BracketOpen(Punctuator):
    value = "["


class BracketClose(Punctuator):
    value = "]"


class CurlyOpen(Punctuator):
    value = "{"


class CurlyClose(Punctuator):
    value = "}"


class Colon(Punctuator):
    value = ":"


class Equals(Punctuator):
    value = "="


class At(Punctuator):
    value = "@"


class Pipe(Punctuator):
    value = "|"


class Ampersand(Punctuator):
    value = "&"


class Ellip(Punctuator):
    value = "..."


class Name(Token):
    __slots__ = ()


class Integer(Token):
    __slots__ = ()


class Float(Token):
    __slots__ = ()


class String(Token):
    __slots__ = ()


class BlockString(Token):
    __slots__ = ()

    @classmethod
    def kind(cls) -> str:
        return "String"

    def describe(self) -> str:
        return 'String """%s"""' % self.value
