"""nsidctl — parse, validate, and build Namespace Identifiers (NSIDs)."""

from nsidctl.domain.errors import (
    AuthorityTooLongError,
    NameTooLongError,
    NsidError,
    NsidSyntaxError,
    NsidTooLongError,
    NsidValidationError,
)
from nsidctl.domain.nsid import (
    Nsid,
    construct_nsid,
    is_valid_nsid,
    parse_nsid,
    to_canonical_string,
    validate_nsid,
)

__version__ = "0.1.0"

__all__ = [
    "AuthorityTooLongError",
    "NameTooLongError",
    "Nsid",
    "NsidError",
    "NsidSyntaxError",
    "NsidTooLongError",
    "NsidValidationError",
    "__version__",
    "construct_nsid",
    "is_valid_nsid",
    "parse_nsid",
    "to_canonical_string",
    "validate_nsid",
]
