"""Exception hierarchy for stats collection failures."""

from typing import Optional


class CouchbaseExporterError(Exception):
    """Base class for all collection errors."""


class TransportError(CouchbaseExporterError):
    """Request could not be built or sent (network, DNS, timeout)."""


class UpstreamError(CouchbaseExporterError):
    """Node answered with a non-200 status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"couchbase node stats non-200 http status code received: {status_code}. body: {body}"
        )


class DecodeError(CouchbaseExporterError):
    """Response body is not a stats document we understand."""

    def __init__(self, message: str, body: Optional[str] = None):
        self.body = body
        super().__init__(message)
