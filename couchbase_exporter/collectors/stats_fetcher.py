"""HTTP fetcher for the Couchbase /pools/default stats document."""

import json
import logging

import httpx
from pydantic import ValidationError

from ..errors import DecodeError, TransportError, UpstreamError
from ..stats.models import StatsDocument

STATS_PATH = "/pools/default"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _reject_constant(token: str):
    # NaN and Infinity are not JSON
    raise ValueError(f"non-standard JSON constant {token}")


def create_http_client(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> httpx.Client:
    """
    Build the process-wide HTTP client shared by all fetches.

    Args:
        timeout: Per-request timeout in seconds

    Returns:
        httpx.Client: Client with a fixed timeout and default pooling
    """
    return httpx.Client(timeout=timeout)


class StatsFetcher:
    """Fetches and decodes node stats, one GET per call."""

    def __init__(self, client: httpx.Client, logger: logging.Logger = None):
        """
        Initialize fetcher.

        Args:
            client: Shared HTTP client (owns the timeout)
            logger: Optional logger instance
        """
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def stats_url(node_url: str) -> str:
        """
        Build the stats endpoint URL for a node.

        Args:
            node_url: Node base URL; a trailing slash is ignored

        Returns:
            str: {node_url}/pools/default
        """
        return node_url.rstrip("/") + STATS_PATH

    def fetch(self, node_url: str) -> StatsDocument:
        """
        Fetch the stats document from a node.

        Args:
            node_url: Node base URL, e.g. http://localhost:8091

        Returns:
            StatsDocument: Parsed stats

        Raises:
            TransportError: Request could not be built or sent
            UpstreamError: Non-200 response
            DecodeError: Body is not a valid stats document
        """
        url = self.stats_url(node_url)

        try:
            response = self.client.get(url)
        except httpx.TimeoutException as e:
            raise TransportError(f"timed out fetching {url}: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(f"failed to fetch {url}: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise UpstreamError(response.status_code, response.text)

        body = response.text
        try:
            payload = json.loads(body, parse_constant=_reject_constant)
        except ValueError as e:
            raise DecodeError(f"invalid JSON from {url}: {e}", body=body) from e

        if not isinstance(payload, dict):
            raise DecodeError(
                f"expected a JSON object from {url}, got {type(payload).__name__}",
                body=body
            )

        try:
            document = StatsDocument.model_validate(payload)
        except ValidationError as e:
            raise DecodeError(f"unexpected stats document shape from {url}: {e}", body=body) from e

        self.logger.debug(f"Fetched stats for {len(document.nodes)} nodes from {url}")
        return document
