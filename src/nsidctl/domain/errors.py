"""NSID error taxonomy.

Every failure the engine can produce is an :class:`NsidError` subclass with
a stable ``code`` and a ``detail()`` payload. The service layer converts
these into ``ServiceError`` values; the domain never catches them itself.
"""

from __future__ import annotations

from typing import Any, ClassVar


class NsidError(ValueError):
    """Base class for all NSID parse, length, and construction failures."""

    code: ClassVar[str] = "NSID_ERROR"

    def detail(self) -> dict[str, Any]:
        """Structured fields describing the failure."""
        return {}


class NsidTooLongError(NsidError):
    """Raw input exceeds the overall byte ceiling; raised before parsing."""

    code: ClassVar[str] = "TOO_LONG"

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(f"NSID is too long ({length} bytes, limit {limit})")

    def detail(self) -> dict[str, Any]:
        return {"length": self.length, "limit": self.limit}


class NsidSyntaxError(NsidError):
    """Grammar violation.

    Attributes:
        remainder: Unconsumed input at the point of failure, or ``None`` when
            the input ended before the grammar was satisfied.
        position: Character offset of the failure within the input.
        expected: Human-readable description of what the parser wanted.
    """

    code: ClassVar[str] = "SYNTAX_ERROR"

    def __init__(self, remainder: str | None, position: int, expected: str) -> None:
        self.remainder = remainder
        self.position = position
        self.expected = expected
        super().__init__(self._describe())

    @property
    def at_end(self) -> bool:
        return self.remainder is None

    def _describe(self) -> str:
        if self.remainder is None:
            return f"expected {self.expected} at position {self.position}, got end of input"
        return f"expected {self.expected} at position {self.position}, got {self.remainder!r}"

    def detail(self) -> dict[str, Any]:
        return {
            "remainder": self.remainder,
            "position": self.position,
            "expected": self.expected,
        }


class _PartTooLongError(NsidError):
    part: ClassVar[str] = ""

    def __init__(self, value: str, length: int, limit: int) -> None:
        self.value = value
        self.length = length
        self.limit = limit
        super().__init__(f"{self.part} is too long ({length} bytes, limit {limit})")

    def detail(self) -> dict[str, Any]:
        return {self.part: self.value, "length": self.length, "limit": self.limit}


class AuthorityTooLongError(_PartTooLongError):
    """Joined authority exceeds its byte ceiling."""

    code: ClassVar[str] = "AUTHORITY_TOO_LONG"
    part: ClassVar[str] = "authority"


class NameTooLongError(_PartTooLongError):
    """Joined name exceeds its byte ceiling."""

    code: ClassVar[str] = "NAME_TOO_LONG"
    part: ClassVar[str] = "name"


class NsidValidationError(NsidError):
    """A field passed to direct construction fails the segment grammar."""

    code: ClassVar[str] = "VALIDATION"

    def __init__(self, field: str, value: str, cause: NsidSyntaxError) -> None:
        self.field = field
        self.value = value
        self.cause = cause
        super().__init__(f"invalid {field} {value!r}: {cause}")

    def detail(self) -> dict[str, Any]:
        return {"field": self.field, "value": self.value, **self.cause.detail()}
