# -*- coding: utf-8 -*-
""" Work with strings """

import re
import sys
import textwrap
from typing import Iterable, List, Sequence, Tuple, Union

LINE_SEPARATOR = re.compile(r"\r\n|[\n\r]")

ResponsePath = Sequence[Union[int, str]]


def ensure_unicode(string: Union[str, bytes]) -> str:
    if isinstance(string, bytes):
        return string.decode("utf8")
    return string


def parse_block_string(raw_string: str) -> str:
    """ Parse a raw string according to the GraphQL BlockStringValue()
    algorithm: strip the common indentation of all lines but the first one
    as well as leading and trailing blank lines.
    """
    lines = LINE_SEPARATOR.split(raw_string)

    common_indent = sys.maxsize

    for line in lines[1:]:
        inner_len = len(line.lstrip())
        if inner_len:
            common_indent = min(common_indent, len(line) - inner_len)

    if common_indent < sys.maxsize:
        for i, line in enumerate(lines[1:]):
            lines[i + 1] = line[common_indent:]

    while lines and (not lines[0].strip()):
        lines.pop(0)

    while lines and (not lines[-1].strip()):
        lines.pop()

    return "\n".join(lines)


def dedent(raw_string: str) -> str:
    return textwrap.dedent(raw_string).lstrip()


def index_to_loc(body: str, position: int) -> Tuple[int, int]:
    r""" Get the (line number, column number) tuple from a zero-indexed offset.

    Args:
        body (str): Source string
        position (int): 0-indexed position of the character

    Returns:
        Tuple[int, int]: (line number, column number)

    Raises:
        :py:class:`IndexError`: if ``position`` is out of bounds

    >>> index_to_loc("ab\ncd\ne", 0)
    (1, 1)

    >>> index_to_loc("ab\ncd\ne", 3)
    (2, 1)

    >>> index_to_loc("", 0)
    (1, 1)

    >>> index_to_loc("{", 1)
    (1, 2)
    """
    if not body and not position:
        return (1, 1)

    if position > len(body) or position < 0:
        raise IndexError(position)

    line, col = 1, 1
    for char in body[:position]:
        if char == "\n":
            line += 1
            col = 1
        else:
            col += 1
    return (line, col)


def highlight_location(body: str, position: int, delta: int = 2) -> str:
    """ Format a view of the source around a position, with a caret under
    the offending character.

    Args:
        body (str): Source string
        position (int): 0-indexed position of the character
        delta (int): How many lines around the position should be kept

    Returns:
        str: Formatted view
    """
    line, col = index_to_loc(body, position)
    line_index = line - 1
    lines = LINE_SEPARATOR.split(body)
    min_line = max(0, line_index - delta)
    max_line = min(line_index + delta, len(lines) - 1)
    pad_len = len(str(max_line + 1))

    def _numbered(index: int) -> str:
        return "  %s:%s" % (str(index + 1).rjust(pad_len), lines[index])

    output = ["(%d:%d):" % (line, col)]
    output.extend(_numbered(i) for i in range(min_line, line_index + 1))
    output.append(" " * (2 + pad_len + col) + "^")
    output.extend(_numbered(i) for i in range(line_index + 1, max_line + 1))
    return "\n".join(output) + "\n"


def quoted_list(items: Sequence[str]) -> str:
    """ Quote and join a list of names.

    >>> quoted_list([])
    ''

    >>> quoted_list(['foo'])
    '"foo"'

    >>> quoted_list(['foo', 'bar', 'baz'])
    '"foo", "bar", "baz"'
    """
    return ", ".join('"%s"' % item for item in items)


def stringify_path(path: ResponsePath) -> str:
    """ Concatenate traversal path into a string.

    >>> stringify_path(['foo', 0, 'bar'])
    'foo[0].bar'

    >>> stringify_path([1, 'foo'])
    '[1].foo'

    >>> stringify_path([])
    ''
    """
    path_str = ""
    for entry in path:
        if isinstance(entry, int):
            path_str += "[%s]" % entry
        else:
            path_str += ".%s" % entry
    return path_str.lstrip(".")


def wrapped_lines(lines: Iterable[str], max_len: int) -> List[str]:
    """ Wrap lines on spaces so that none is longer than ``max_len`` unless it
    contains a single word.

    >>> wrapped_lines(["aaa bbb ccc"], 7)
    ['aaa bbb', 'ccc']
    """
    wrapped = []  # type: List[str]
    for line in lines:
        if len(line) <= max_len:
            wrapped.append(line)
            continue
        wrapped.extend(textwrap.wrap(line, max_len, break_long_words=False))
    return wrapped
