"""
Parallel execution of independent storage requests.

The pool sends every request at once, waits for all of them, and splits the
originating descriptors into those whose response status is in the batch's
success set and those that failed.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple

import structlog

from ...core.exceptions import TransportError, UsageError
from .client import HttpClient, HttpRequest, HttpResponse

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FailureInfo:
    """Why a batch item failed: an HTTP status, or a transport fault."""

    status_code: Optional[int] = None
    reason: Optional[str] = None
    error: Optional[TransportError] = None

    @property
    def is_transport_fault(self) -> bool:
        return self.error is not None

    @classmethod
    def from_response(cls, response: HttpResponse) -> "FailureInfo":
        return cls(status_code=response.status_code, reason=response.reason)

    @classmethod
    def from_error(cls, error: TransportError) -> "FailureInfo":
        return cls(reason=str(error), error=error)

    def __str__(self):
        if self.is_transport_fault:
            return f"transport error: {self.reason}"
        return f"HTTP {self.status_code} {self.reason}"


@dataclass(frozen=True)
class BatchResult:
    ok: Tuple[Any, ...] = ()
    failed: Tuple[Tuple[Any, FailureInfo], ...] = ()

    @property
    def has_failures(self) -> bool:
        return len(self.failed) > 0


class BatchPool:
    """One batch of requests paired index by index with their descriptors."""

    def __init__(self, requests: Sequence[HttpRequest], objects: Sequence[Any],
                 ok_statuses: Iterable[int], http_client: HttpClient):
        """
        Args:
            requests: Requests to send
            objects: Descriptor for each request, same order
            ok_statuses: Status codes counted as success for this batch
            http_client: Transport used for dispatch

        Raises:
            UsageError: If requests and objects differ in length
        """
        if len(requests) != len(objects):
            raise UsageError(
                f"Batch needs one object per request, got {len(requests)} requests "
                f"and {len(objects)} objects"
            )
        self.requests = list(requests)
        self.objects = list(objects)
        self.ok_statuses = frozenset(ok_statuses)
        self.http_client = http_client

    def send(self) -> BatchResult:
        """Send all requests and partition the descriptors by outcome."""
        if not self.requests:
            return BatchResult()

        logger.debug("Dispatching batch",
                     size=len(self.requests), ok_statuses=sorted(self.ok_statuses))
        responses = self.http_client.send_all(self.requests)

        ok = []
        failed = []
        for obj, response in zip(self.objects, responses):
            if isinstance(response, TransportError):
                info = FailureInfo.from_error(response)
            elif response.status_code in self.ok_statuses:
                ok.append(obj)
                continue
            else:
                info = FailureInfo.from_response(response)
            logger.warning("Batch item failed",
                           server_name=getattr(obj, "server_name", None), failure=str(info))
            failed.append((obj, info))

        logger.info("Batch finished", size=len(self.requests), ok=len(ok), failed=len(failed))
        return BatchResult(ok=tuple(ok), failed=tuple(failed))
