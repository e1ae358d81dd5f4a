"""Namespace Identifier (NSID) value type, length policy, and engine API.

An NSID is written in reverse-DNS order (``com.example.fooBar``) and stored
with its authority in natural order (``example.com``) next to the name
path (``fooBar``).

Length ceilings, all measured in UTF-8 bytes:
- Whole identifier: 382 (checked before any parsing).
- Authority, dot-joined: 63.
- Name, dot-joined: 128.

INVARIANT: Every :class:`Nsid` instance satisfies the grammar and all three
ceilings. There is no unchecked construction path.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from nsidctl.domain.errors import (
    AuthorityTooLongError,
    NameTooLongError,
    NsidError,
    NsidSyntaxError,
    NsidTooLongError,
    NsidValidationError,
)
from nsidctl.domain.grammar import (
    WILDCARD,
    NsidParts,
    scan_authority,
    scan_name,
    scan_segment,
    split_nsid,
)

MAX_NSID_LENGTH = 382
MAX_AUTHORITY_LENGTH = 63
MAX_NAME_LENGTH = 128


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def _check_part_lengths(authority: str, name: str) -> None:
    authority_length = _byte_length(authority)
    if authority_length > MAX_AUTHORITY_LENGTH:
        raise AuthorityTooLongError(authority, authority_length, MAX_AUTHORITY_LENGTH)
    name_length = _byte_length(name)
    if name_length > MAX_NAME_LENGTH:
        raise NameTooLongError(name, name_length, MAX_NAME_LENGTH)


def _check_fields(authority: tuple[str, ...], name: str) -> None:
    """Validate natural-order *authority* segments and *name* as the parser would.

    The joined domain must scan as exactly two segments, and each element
    must itself be one segment, so ``("example.com",)`` is rejected even
    though its joined form looks right.
    """
    domain = ".".join(authority)
    total = _byte_length(domain) + 1 + _byte_length(name)
    if total > MAX_NSID_LENGTH:
        raise NsidTooLongError(total, MAX_NSID_LENGTH)
    try:
        scan_authority(domain)
    except NsidSyntaxError as exc:
        raise NsidValidationError("authority", domain, exc) from exc
    for segment in authority:
        try:
            scan_segment(segment)
        except NsidSyntaxError as exc:
            raise NsidValidationError("authority", segment, exc) from exc
    try:
        scan_name(name)
    except NsidSyntaxError as exc:
        raise NsidValidationError("name", name, exc) from exc
    _check_part_lengths(domain, name)


@dataclass(frozen=True)
class Nsid:
    """A validated Namespace Identifier.

    Attributes:
        authority: Domain segments in natural order, e.g. ``("example", "com")``.
        name: Dot-joined name path, or ``"*"`` for a whole namespace.
    """

    authority: tuple[str, ...]
    name: str

    def __post_init__(self) -> None:
        authority = tuple(self.authority)
        object.__setattr__(self, "authority", authority)
        _check_fields(authority, self.name)

    @classmethod
    def parse(cls, text: str) -> Nsid:
        return parse_nsid(text)

    @classmethod
    def create(cls, authority: str | Sequence[str], name: str) -> Nsid:
        return construct_nsid(authority, name)

    @property
    def authority_domain(self) -> str:
        """The authority as a natural-order domain, e.g. ``example.com``."""
        return ".".join(self.authority)

    @property
    def is_wildcard(self) -> bool:
        return self.name == WILDCARD

    @property
    def name_segments(self) -> tuple[str, ...]:
        return tuple(self.name.split("."))

    def to_canonical_string(self) -> str:
        return to_canonical_string(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nsid": self.to_canonical_string(),
            "authority": list(self.authority),
            "authority_domain": self.authority_domain,
            "name": self.name,
            "wildcard": self.is_wildcard,
        }

    def __str__(self) -> str:
        return self.to_canonical_string()


def _parse_parts(text: str) -> NsidParts:
    length = _byte_length(text)
    if length > MAX_NSID_LENGTH:
        raise NsidTooLongError(length, MAX_NSID_LENGTH)
    parts = split_nsid(text)
    _check_part_lengths(".".join(reversed(parts.authority)), parts.name)
    return parts


def parse_nsid(text: str) -> Nsid:
    """Parse a canonical NSID string.

    Raises:
        NsidTooLongError: Input exceeds 382 bytes.
        NsidSyntaxError: Input does not match the grammar.
        AuthorityTooLongError: Joined authority exceeds 63 bytes.
        NameTooLongError: Joined name exceeds 128 bytes.

    Examples:
        >>> parse_nsid("com.example.bar")
        Nsid(authority=('example', 'com'), name='bar')
        >>> parse_nsid("com.example.*").is_wildcard
        True
    """
    parts = _parse_parts(text)
    return Nsid(authority=tuple(reversed(parts.authority)), name=parts.name)


def validate_nsid(text: str) -> None:
    """Run every check :func:`parse_nsid` runs, without building an :class:`Nsid`."""
    _parse_parts(text)


def is_valid_nsid(text: str) -> bool:
    """Check whether *text* is a valid canonical NSID."""
    try:
        _parse_parts(text)
    except NsidError:
        return False
    return True


def construct_nsid(authority: str | Sequence[str], name: str) -> Nsid:
    """Build an :class:`Nsid` from a natural-order authority and a name.

    *authority* may be a dotted domain (``"example.com"``) or its segments
    (``["example", "com"]``).

    Raises:
        NsidValidationError: A field fails the segment grammar.
        AuthorityTooLongError: Joined authority exceeds 63 bytes.
        NameTooLongError: Joined name exceeds 128 bytes.
    """
    segments = authority.split(".") if isinstance(authority, str) else tuple(authority)
    return Nsid(authority=tuple(segments), name=name)


def to_canonical_string(nsid: Nsid) -> str:
    """Serialize to reverse-DNS dotted form: ``com.example`` + ``.`` + name.

    Examples:
        >>> to_canonical_string(Nsid(authority=("example", "com"), name="bar"))
        'com.example.bar'
    """
    return ".".join(reversed(nsid.authority)) + "." + nsid.name
