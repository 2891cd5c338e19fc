"""Wrap minified output after a column without splitting literals."""

from __future__ import annotations

from typing import List

_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")
_REGEX_KEYWORDS = frozenset(
    {
        "await",
        "case",
        "delete",
        "do",
        "else",
        "in",
        "instanceof",
        "new",
        "return",
        "throw",
        "typeof",
        "void",
        "yield",
    }
)


def _skip_string(text: str, start: int) -> int:
    """Return the index just past the string literal opening at ``start``."""

    quote = text[start]
    cursor = start + 1
    length = len(text)
    while cursor < length:
        char = text[cursor]
        if char == "\\":
            cursor += 2
            continue
        if char == quote:
            return cursor + 1
        if char == "\n" and quote != "`":
            return cursor
        cursor += 1
    return length


def _skip_comment(text: str, start: int) -> int:
    """Return the index just past the comment opening at ``start``."""

    if text.startswith("/*", start):
        end = text.find("*/", start + 2)
        return len(text) if end < 0 else end + 2
    end = text.find("\n", start)
    return len(text) if end < 0 else end


def _starts_regex(text: str, start: int) -> bool:
    """Guess whether the ``/`` at ``start`` opens a regular expression."""

    cursor = start - 1
    while cursor >= 0 and text[cursor].isspace():
        cursor -= 1
    if cursor < 0:
        return True
    previous = text[cursor]
    if previous in _REGEX_PRECEDERS:
        return True
    if previous.isalnum() or previous in "_$":
        end = cursor + 1
        while cursor >= 0 and (text[cursor].isalnum() or text[cursor] in "_$"):
            cursor -= 1
        return text[cursor + 1:end] in _REGEX_KEYWORDS
    return False


def _skip_regex(text: str, start: int) -> int:
    """Return the index just past the regex literal at ``start``."""

    cursor = start + 1
    length = len(text)
    in_class = False
    while cursor < length:
        char = text[cursor]
        if char == "\\":
            cursor += 2
            continue
        if char == "\n":
            return cursor
        if in_class:
            if char == "]":
                in_class = False
        elif char == "[":
            in_class = True
        elif char == "/":
            cursor += 1
            break
        cursor += 1
    while cursor < length and (text[cursor].isalnum() or text[cursor] == "_"):
        cursor += 1
    return min(cursor, length)


def insert_line_breaks(
    text: str,
    column: int,
    *,
    break_after: str = ";}",
    regex_literals: bool = True,
    line_comments: bool = True,
) -> str:
    """Insert a newline after ``break_after`` characters past ``column``.

    A negative ``column`` disables wrapping; ``0`` breaks after every
    candidate character. Quoted strings, template literals, comments and,
    when ``regex_literals`` is set, JavaScript regular expressions are
    copied through untouched. ``//`` opens a comment only when
    ``line_comments`` is set; stylesheets have block comments alone.
    """

    if column < 0 or not text:
        return text

    comment_openers = ("/*", "//") if line_comments else ("/*",)

    pieces: List[str] = []
    line_length = 0
    cursor = 0
    length = len(text)

    def emit(segment: str) -> None:
        nonlocal line_length
        pieces.append(segment)
        newline = segment.rfind("\n")
        if newline < 0:
            line_length += len(segment)
        else:
            line_length = len(segment) - newline - 1

    while cursor < length:
        char = text[cursor]
        if char in "'\"`":
            end = _skip_string(text, cursor)
        elif char == "/" and text.startswith(comment_openers, cursor):
            end = _skip_comment(text, cursor)
        elif char == "/" and regex_literals and _starts_regex(text, cursor):
            end = _skip_regex(text, cursor)
        else:
            emit(char)
            cursor += 1
            if (
                char in break_after
                and line_length > column
                and cursor < length
                and text[cursor] != "\n"
            ):
                emit("\n")
            continue
        emit(text[cursor:end])
        cursor = end

    return "".join(pieces)


__all__ = ["insert_line_breaks"]
