"""NsidService — NSID engine operations as ServiceResult values.

Every :class:`~nsidctl.domain.errors.NsidError` raised by the engine is
converted into a failed ServiceResult carrying the error's code, message,
and detail. Nothing NSID-related escapes as an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from nsidctl.config.models import BatchConfig
from nsidctl.domain.errors import NsidError
from nsidctl.domain.nsid import construct_nsid, parse_nsid, validate_nsid
from nsidctl.services.result import ServiceError, ServiceResult
from nsidctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


def _failure(op: str, exc: NsidError, **data: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        data=data,
        error=ServiceError.from_nsid_error(exc),
    )


class NsidService:
    """Parse, validate, and build NSIDs for the CLI and other callers."""

    def __init__(self, batch: BatchConfig | None = None) -> None:
        self._batch = batch or BatchConfig()

    # ------------------------------------------------------------------
    # Single identifiers
    # ------------------------------------------------------------------

    @traced
    def parse(self, text: str) -> ServiceResult:
        """Parse *text* and report its authority (natural order) and name."""
        try:
            nsid = parse_nsid(text)
        except NsidError as exc:
            logger.debug("Rejected NSID %r: %s", text, exc)
            return _failure("parse_nsid", exc, input=text)
        return ServiceResult(ok=True, op="parse_nsid", data=nsid.to_dict())

    @traced
    def validate(self, text: str) -> ServiceResult:
        """Check *text* without building an Nsid."""
        try:
            validate_nsid(text)
        except NsidError as exc:
            logger.debug("Rejected NSID %r: %s", text, exc)
            return _failure("validate_nsid", exc, input=text, valid=False)
        return ServiceResult(ok=True, op="validate_nsid", data={"nsid": text, "valid": True})

    @traced
    def construct(self, authority: str | Sequence[str], name: str) -> ServiceResult:
        """Build an NSID from a natural-order *authority* and a *name*."""
        try:
            nsid = construct_nsid(authority, name)
        except NsidError as exc:
            logger.debug("Rejected construction of %r / %r: %s", authority, name, exc)
            shown = authority if isinstance(authority, str) else ".".join(authority)
            return _failure("construct_nsid", exc, authority=shown, name=name)
        return ServiceResult(ok=True, op="construct_nsid", data=nsid.to_dict())

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    def _skipped(self, text: str) -> bool:
        if not text:
            return self._batch.skip_blank
        prefix = self._batch.comment_prefix
        return bool(prefix) and text.startswith(prefix)

    @traced
    def validate_many(
        self,
        values: Iterable[str],
        *,
        fail_fast: bool | None = None,
        normalize: bool = True,
    ) -> ServiceResult:
        """Validate one candidate per entry of *values* (e.g. manifest lines).

        With *normalize*, entries are stripped of surrounding whitespace and
        blank or comment entries are skipped per the ``[batch]`` config.
        Without it every entry is checked verbatim, exactly as
        :meth:`validate` would. With *fail_fast* (default from config), the
        scan stops at the first invalid entry.
        """
        stop_on_error = self._batch.fail_fast if fail_fast is None else fail_fast

        items: list[dict[str, Any]] = []
        stopped_early = False
        with trace_span("scan") as span:
            for line, raw in enumerate(values, start=1):
                text = raw.strip() if normalize else raw
                if normalize and self._skipped(text):
                    continue
                try:
                    validate_nsid(text)
                except NsidError as exc:
                    logger.debug("Line %d rejected: %s", line, exc)
                    items.append(
                        {
                            "line": line,
                            "nsid": text,
                            "valid": False,
                            "code": exc.code,
                            "message": str(exc),
                        }
                    )
                    if stop_on_error:
                        stopped_early = True
                        break
                else:
                    items.append({"line": line, "nsid": text, "valid": True})
            if span is not None:
                span.annotate("items", len(items))

        invalid = [item for item in items if not item["valid"]]
        data = {
            "count": len(items),
            "valid_count": len(items) - len(invalid),
            "invalid_count": len(invalid),
            "stopped_early": stopped_early,
            "items": items,
        }
        warnings = [] if items else ["No identifiers to validate"]

        if not invalid:
            return ServiceResult(ok=True, op="validate_batch", data=data, warnings=warnings)
        return ServiceResult(
            ok=False,
            op="validate_batch",
            data=data,
            error=ServiceError(
                code="INVALID_NSIDS",
                message=f"{len(invalid)} of {len(items)} identifiers are invalid",
                detail={"invalid_lines": [item["line"] for item in invalid]},
            ),
        )
