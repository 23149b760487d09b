"""
HTTP transport built on a shared requests session.

Batches are fanned out over a thread pool; every request runs in its own
worker and results are stored back at the index of the originating request.
"""

import concurrent.futures
import threading
from dataclasses import dataclass, field
from typing import IO, Dict, List, Optional, Sequence, Union

import requests
import structlog
from requests.adapters import DEFAULT_POOLSIZE, HTTPAdapter

from ...core.exceptions import TransportError

logger = structlog.get_logger(__name__)


@dataclass
class HttpRequest:
    """A request ready to be sent. ``body`` is owned by the request."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[IO] = None

    def add_headers(self, headers: Dict[str, str]) -> None:
        self.headers.update(headers)

    def close(self) -> None:
        """Release the body handle, if any."""
        if self.body is not None and not self.body.closed:
            self.body.close()


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    reason: str
    headers: Dict[str, str] = field(default_factory=dict)


class HttpClient:
    """Sends single requests or batches of requests in parallel."""

    def __init__(self, timeout: float = 30, max_workers: Optional[int] = None,
                 session: Optional[requests.Session] = None):
        """
        Args:
            timeout: Per-request timeout in seconds
            max_workers: Thread cap for batches; None runs every request of a batch at once
            session: Session to reuse; a new one is created when omitted and its
                connection pool is kept as large as the widest batch
        """
        self.timeout = timeout
        self.max_workers = max_workers
        self._owns_session = session is None
        self.session = session or requests.Session()
        self._pool_lock = threading.Lock()
        self._pool_maxsize = DEFAULT_POOLSIZE
        if max_workers:
            self._ensure_pool_size(max_workers)

    def create_request(self, method: str, url: str, headers: Optional[Dict[str, str]] = None,
                       body: Optional[IO] = None) -> HttpRequest:
        return HttpRequest(method=method.upper(), url=url, headers=dict(headers or {}), body=body)

    def send(self, request: HttpRequest) -> HttpResponse:
        """
        Send one request. The request body is closed whatever the outcome.

        Raises:
            TransportError: If no HTTP response could be obtained
        """
        try:
            logger.debug("Sending request", method=request.method, url=request.url)
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.timeout,
                allow_redirects=False,
            )
            try:
                return HttpResponse(
                    status_code=response.status_code,
                    reason=response.reason or "",
                    headers=dict(response.headers),
                )
            finally:
                response.close()
        except requests.RequestException as e:
            logger.warning("Request failed without response",
                           method=request.method, url=request.url, error=str(e))
            raise TransportError(f"{request.method} {request.url} failed: {e}", original=e) from e
        finally:
            request.close()

    def send_all(self, requests_: Sequence[HttpRequest]) -> List[Union[HttpResponse, TransportError]]:
        """
        Send all requests concurrently and wait for every one of them.

        Returns:
            One entry per request, in input order: the response, or the
            TransportError describing why no response was received
        """
        if not requests_:
            return []

        results: List[Union[HttpResponse, TransportError, None]] = [None] * len(requests_)
        workers = self.max_workers or len(requests_)
        self._ensure_pool_size(workers)
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(self.send, request): index
                       for index, request in enumerate(requests_)}
            for future in concurrent.futures.as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except TransportError as e:
                    results[index] = e
                except Exception as e:
                    logger.error("Unexpected error while sending request",
                                 url=requests_[index].url, error=str(e))
                    results[index] = TransportError(f"Unexpected error: {e}", original=e)
        return results

    def _ensure_pool_size(self, workers: int) -> None:
        if not self._owns_session:
            return
        with self._pool_lock:
            if workers <= self._pool_maxsize:
                return
            adapter = HTTPAdapter(pool_maxsize=workers)
            self.session.mount("https://", adapter)
            self.session.mount("http://", adapter)
            self._pool_maxsize = workers
            logger.debug("Connection pool resized", pool_maxsize=workers)

    def close(self) -> None:
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
