from __future__ import annotations

from media_resolver.constants import MSG_DEFERRED, MSG_RESOLVE_FAILED, MSG_UNSUPPORTED
from media_resolver.domain.models import (
    Candidates,
    DeferredProcessing,
    Direct,
    ErrorKind,
    Failure,
    ResolutionOutcome,
)
from .dto import ErrorResult, ExternalResult, Payload, Redirect


_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.UNSUPPORTED: 422,
    ErrorKind.UPSTREAM_REJECTED: 502,
    ErrorKind.TIMEOUT: 504,
    ErrorKind.TRANSPORT_FAILURE: 502,
    ErrorKind.UNEXPECTED_RESPONSE_SHAPE: 502,
    ErrorKind.ALL_PROVIDERS_EXHAUSTED: 502,
}


class OutcomeProjector:
    """
    ResolutionOutcome -> ExternalResult. Whether the caller wants a choice
    (JSON payload) or an immediate download (redirect) is decided by the caller.
    """

    def project(self, outcome: ResolutionOutcome, *, want_choice: bool = False) -> ExternalResult:
        if isinstance(outcome, Direct):
            if want_choice:
                return Payload({"success": True, "items": [{"url": outcome.url, "label": "default"}]})
            return Redirect(outcome.url)

        if isinstance(outcome, Candidates):
            if want_choice:
                return Payload(
                    {
                        "success": True,
                        "items": [{"url": i.url, "label": i.label} for i in outcome.items],
                    }
                )
            return Redirect(outcome.default.url)

        if isinstance(outcome, DeferredProcessing):
            return ErrorResult(status=409, message=MSG_DEFERRED, detail=outcome.reason)

        if isinstance(outcome, Failure):
            if outcome.kind == ErrorKind.INVALID_INPUT:
                message = str(outcome.detail) if outcome.detail else MSG_RESOLVE_FAILED
            elif outcome.kind == ErrorKind.UNSUPPORTED:
                message = MSG_UNSUPPORTED
            else:
                message = MSG_RESOLVE_FAILED
            return ErrorResult(
                status=_STATUS_BY_KIND.get(outcome.kind, 500),
                message=message,
                kind=outcome.kind,
                detail=outcome.detail,
            )

        raise TypeError(f"Unknown outcome: {outcome!r}")
