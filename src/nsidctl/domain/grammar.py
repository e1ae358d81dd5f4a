"""NSID grammar — a left-to-right scanner over the canonical dotted form.

Grammar::

    segment   = alpha (alpha | digit | '-')*
    authority = segment '.' segment
    name      = '*' | segment ('.' segment)*
    nsid      = authority '.' name

The authority is always exactly the first two segments; every later token
belongs to the name. Length ceilings are not checked here (see
:mod:`nsidctl.domain.nsid`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from nsidctl.domain.errors import NsidSyntaxError

SEGMENT_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9-]*")
WILDCARD = "*"


@dataclass(frozen=True)
class NsidParts:
    """Raw grammar output: authority in the order it appeared, plus the name.

    The authority keeps reverse-DNS order, e.g. ``("com", "example")``.
    """

    authority: tuple[str, str]
    name: str


class _Scanner:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def fail(self, expected: str) -> NsidSyntaxError:
        remainder = None if self.at_end() else self.text[self.pos :]
        return NsidSyntaxError(remainder, self.pos, expected)

    def segment(self) -> str:
        match = SEGMENT_PATTERN.match(self.text, self.pos)
        if match is None:
            raise self.fail("segment")
        self.pos = match.end()
        return match.group()

    def dot(self) -> None:
        if self.text.startswith(".", self.pos):
            self.pos += 1
            return
        raise self.fail("'.'")

    def end(self) -> None:
        if not self.at_end():
            raise self.fail("end of input")

    def authority(self) -> tuple[str, str]:
        first = self.segment()
        self.dot()
        second = self.segment()
        return first, second

    def name(self) -> str:
        start = self.pos
        if self.text.startswith(WILDCARD, self.pos):
            self.pos += len(WILDCARD)
            self.end()
            return WILDCARD
        self.segment()
        while not self.at_end():
            self.dot()
            self.segment()
        return self.text[start:]


def split_nsid(text: str) -> NsidParts:
    """Split a canonical NSID into its authority and name.

    Raises:
        NsidSyntaxError: If *text* does not match the grammar.

    Examples:
        >>> split_nsid("com.example.bar")
        NsidParts(authority=('com', 'example'), name='bar')
        >>> split_nsid("com.long-thing1.cool.fooBarBaz").name
        'cool.fooBarBaz'
    """
    scanner = _Scanner(text)
    authority = scanner.authority()
    scanner.dot()
    name = scanner.name()
    return NsidParts(authority=authority, name=name)


def scan_authority(text: str) -> tuple[str, str]:
    """Check a natural-order authority (``example.com``) and return its segments."""
    scanner = _Scanner(text)
    authority = scanner.authority()
    scanner.end()
    return authority


def scan_name(text: str) -> str:
    """Check a standalone name path (``foo.bar`` or ``*``)."""
    return _Scanner(text).name()


def scan_segment(text: str) -> str:
    """Check that *text* is exactly one segment."""
    scanner = _Scanner(text)
    segment = scanner.segment()
    scanner.end()
    return segment
