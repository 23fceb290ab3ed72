# -*- coding: utf-8 -*-
"""
Iterable interface for the GraphQL language lexer.
"""

from string import ascii_letters, digits
from typing import Iterator, List, Optional, Union

from .._string_utils import ensure_unicode, parse_block_string
from ..exc import (
    InvalidCharacter,
    InvalidEscapeSequence,
    NonTerminatedString,
    UnexpectedCharacter,
    UnexpectedEOF,
)
from .token import (
    EOF,
    SOF,
    Ampersand,
    At,
    BlockString,
    BracketClose,
    BracketOpen,
    Colon,
    CurlyClose,
    CurlyOpen,
    Dollar,
    Ellip,
    Equals,
    ExclamationMark,
    Float,
    Integer,
    Name,
    ParenClose,
    ParenOpen,
    Pipe,
    String,
    Token,
)

IGNORED_CHARS = frozenset("\n\r\ufeff\t ,")

NAME_START = frozenset(ascii_letters + "_")
NAME_CHARS = frozenset(ascii_letters + digits + "_")

SYMBOLS = {
    cls.value: cls
    for cls in (
        ExclamationMark,
        Dollar,
        ParenOpen,
        ParenClose,
        BracketOpen,
        BracketClose,
        CurlyOpen,
        CurlyClose,
        Colon,
        Equals,
        At,
        Pipe,
        Ampersand,
    )
}

QUOTED_CHARS = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\u0008",
    "f": "\u000c",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _is_source_char(char: str) -> bool:
    return char >= " " or char == "\t"


def _decode(source: Union[str, bytes]) -> str:
    if not isinstance(source, bytes):
        return source
    try:
        return ensure_unicode(source)
    except UnicodeDecodeError as err:
        # Point at the first undecodable byte in a best effort decoding.
        raise InvalidCharacter(
            "Invalid UTF-8 byte 0x%02x" % source[err.start],
            len(source[: err.start].decode("utf8")),
            source.decode("utf8", "replace"),
        ) from err


class Lexer:
    """
    Iterable GraphQL language lexer / tokenizer.

    Each call to ``__next__`` reads over the characters required to form a
    valid :class:`gqlwire.lang.token.Token` and otherwise raises a
    :class:`~gqlwire.exc.GraphQLSyntaxError`. The first token is always
    :class:`~gqlwire.lang.token.SOF` and the last one
    :class:`~gqlwire.lang.token.EOF`.

    Args:
        source (Union[str, bytes]): Source string.
            Bytestrings will be converted to unicode.
    """

    __slots__ = ("_source", "_len", "_done", "_position", "_started")

    def __init__(self, source: Union[str, bytes]):
        self._source = _decode(source)
        self._len = len(self._source)
        self._done = False
        self._started = False
        self._position = 0

    @property
    def source(self) -> str:
        return self._source

    def _peek(self, offset: int = 0) -> Optional[str]:
        try:
            return self._source[self._position + offset]
        except IndexError:
            return None

    def _read_over_whitespace(self) -> None:
        source, pos = self._source, self._position
        while pos < self._len:
            char = source[pos]
            if char in IGNORED_CHARS:
                pos += 1
            elif char == "#":
                pos += 1
                while pos < self._len and source[pos] not in "\n\r":
                    pos += 1
            else:
                break
        self._position = pos

    def _read_ellipsis(self) -> Ellip:
        start = self._position
        for _ in range(3):
            char = self._peek()
            if char is None:
                raise UnexpectedEOF(self._position, self._source)
            if char != ".":
                raise UnexpectedCharacter(
                    'Expected "." but found "%s"' % char,
                    self._position,
                    self._source,
                )
            self._position += 1
        return Ellip(start, self._position)

    def _read_string(self) -> String:
        start = self._position
        self._position += 1
        acc = []  # type: List[str]
        while True:
            char = self._peek()
            if char is None or char in "\n\r":
                raise NonTerminatedString(
                    "Unterminated string", self._position, self._source
                )

            self._position += 1

            if char == '"':
                return String(start, self._position, "".join(acc))
            elif char == "\\":
                acc.append(self._read_escape_sequence())
            elif not _is_source_char(char):
                raise InvalidCharacter(
                    "Invalid character %r" % char,
                    self._position - 1,
                    self._source,
                )
            else:
                acc.append(char)

    def _read_block_string(self) -> BlockString:
        start = self._position
        self._position += 3
        acc = []  # type: List[str]

        while True:
            if self._source.startswith('"""', self._position):
                self._position += 3
                return BlockString(
                    start, self._position, parse_block_string("".join(acc))
                )

            char = self._peek()
            if char is None:
                raise NonTerminatedString(
                    "Unterminated string", self._position, self._source
                )

            if char == "\\" and self._source.startswith(
                '"""', self._position + 1
            ):
                acc.append('"""')
                self._position += 4
            elif _is_source_char(char) or char in "\n\r":
                acc.append(char)
                self._position += 1
            else:
                raise InvalidCharacter(
                    "Invalid character %r" % char, self._position, self._source
                )

    def _read_escape_sequence(self) -> str:
        char = self._peek()
        if char is None:
            raise NonTerminatedString(
                "Unterminated string", self._position, self._source
            )

        self._position += 1

        if char in QUOTED_CHARS:
            return QUOTED_CHARS[char]

        if char == "u":
            escape = self._source[self._position : self._position + 4]
            try:
                if len(escape) != 4:
                    raise ValueError(escape)
                decoded = chr(int(escape, 16))
            except ValueError:
                raise InvalidEscapeSequence(
                    "Invalid escape sequence \\u%s" % escape,
                    self._position - 2,
                    self._source,
                )
            self._position += 4
            return decoded

        raise InvalidEscapeSequence(
            "Invalid escape sequence \\%s" % char,
            self._position - 2,
            self._source,
        )

    def _read_digits(self) -> None:
        char = self._peek()
        if char is None:
            raise UnexpectedEOF(self._position, self._source)
        if not char.isdigit():
            raise UnexpectedCharacter(
                'Unexpected character "%s"' % char, self._position, self._source
            )
        while char is not None and char.isdigit():
            self._position += 1
            char = self._peek()

    def _read_integer_part(self) -> None:
        if self._peek() == "0":
            self._position += 1
            char = self._peek()
            if char is not None and char.isdigit():
                raise UnexpectedCharacter(
                    'Unexpected character "%s"' % char,
                    self._position,
                    self._source,
                )
        else:
            self._read_digits()

    def _read_number(self) -> Union[Integer, Float]:
        start = self._position
        is_float = False

        if self._peek() == "-":
            self._position += 1

        self._read_integer_part()

        if self._peek() == ".":
            self._position += 1
            is_float = True
            self._read_digits()

        char = self._peek()
        if char is not None and char in "eE":
            self._position += 1
            is_float = True
            char = self._peek()
            if char is not None and char in "+-":
                self._position += 1
            self._read_digits()

        next_char = self._peek()
        if next_char is not None and (
            next_char in NAME_START or next_char == "."
        ):
            raise UnexpectedCharacter(
                'Unexpected character "%s"' % next_char,
                self._position,
                self._source,
            )

        value = self._source[start : self._position]
        if is_float:
            return Float(start, self._position, value)
        return Integer(start, self._position, value)

    def _read_name(self) -> Name:
        start = self._position
        while self._position < self._len and (
            self._source[self._position] in NAME_CHARS
        ):
            self._position += 1
        return Name(start, self._position, self._source[start : self._position])

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        """
        Advance lexer and return the next :class:`gqlwire.lang.token.Token`
        instance.

        Raises:
            :class:`~gqlwire.exc.UnexpectedEOF`
            :class:`~gqlwire.exc.InvalidCharacter`
            :class:`~gqlwire.exc.UnexpectedCharacter`
            :class:`~gqlwire.exc.NonTerminatedString`
        """
        if self._done:
            raise StopIteration()

        if not self._started:
            self._started = True
            return SOF(0, 0)

        self._read_over_whitespace()

        char = self._peek()
        if char is None:
            self._done = True
            return EOF(self._position, self._position)

        if not _is_source_char(char):
            raise InvalidCharacter(
                "Invalid character %r" % char, self._position, self._source
            )

        if char in SYMBOLS:
            start = self._position
            self._position += 1
            return SYMBOLS[char](start, self._position)
        elif char == ".":
            return self._read_ellipsis()
        elif self._source.startswith('"""', self._position):
            return self._read_block_string()
        elif char == '"':
            return self._read_string()
        elif char == "-" or char.isdigit():
            return self._read_number()
        elif char in NAME_START:
            return self._read_name()

        raise UnexpectedCharacter(
            'Unexpected character "%s"' % char, self._position, self._source
        )
