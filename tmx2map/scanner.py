"""tmx2map/scanner.py -- Line scanner and attribute extraction.

TMX is read as plain text, one line at a time. Tags are located by substring
match and attribute values are the text between the first pair of double
quotes that follows the attribute name. No XML parser is involved.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from tmx2map.errors import EndOfInput, MissingAttributeError, MissingTagError


class LineScanner:
    """Sequential reader over the lines of a text stream."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)
        self.line_number = 0

    def next_line(self) -> str:
        """Return the next line, or raise EndOfInput."""
        try:
            line = next(self._lines)
        except StopIteration:
            raise EndOfInput(f"end of input after line {self.line_number}") from None
        self.line_number += 1
        return line

    def find_tag(self, prefix: str, exit_code: int | None = None) -> str:
        """Skip lines until one contains *prefix*; return the line from the tag on.

        Raises:
            MissingTagError: If the stream ends before the tag is found.
        """
        while True:
            try:
                line = self.next_line()
            except EndOfInput:
                tag = prefix.lstrip("<")
                raise MissingTagError(f"Missing <{tag}> tag.", exit_code) from None
            pos = line.find(prefix)
            if pos >= 0:
                return line[pos:]


def read_attribute(tag_text: str, name: str, exit_code: int | None = None) -> str:
    """Return the quoted value following the first occurrence of *name*.

    The match is purely textual: ``name`` may hit inside another attribute
    (``"y"`` inside ``"type"``), exactly as a substring search would.

    Raises:
        MissingAttributeError: If *name* or the surrounding quotes are absent.
    """
    start = tag_text.find(name)
    if start < 0:
        raise MissingAttributeError(f"Missing {name!r} property.", exit_code)
    open_quote = tag_text.find('"', start)
    if open_quote < 0:
        raise MissingAttributeError(f"Missing value for {name!r} property.", exit_code)
    close_quote = tag_text.find('"', open_quote + 1)
    if close_quote < 0:
        raise MissingAttributeError(f"Unterminated value for {name!r} property.", exit_code)
    return tag_text[open_quote + 1:close_quote]


def parse_int(text: str) -> int | None:
    """Parse a leading decimal integer, ignoring surrounding whitespace.

    Returns None when *text* holds no digits.
    """
    text = text.strip()
    end = 1 if text[:1] in ("+", "-") else 0
    while end < len(text) and text[end] in "0123456789":
        end += 1
    digits = text[:end]
    if not digits.lstrip("+-"):
        return None
    return int(digits)
