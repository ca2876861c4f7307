"""Collector group for Couchbase node and storage statistics."""

import logging
from typing import List, Optional, Tuple

from ..utils.metrics import CollectionResult
from .base import BaseCollector, safe_collect
from .node_formatter import format_node_stats, metric_descriptions
from .stats_fetcher import StatsFetcher


class NodeCollector(BaseCollector):
    """Fetches /pools/default from one node and formats it per scrape."""

    name = "node"

    def __init__(
        self,
        node_url: str,
        fetcher: StatsFetcher,
        logger: logging.Logger,
        node_name: Optional[str] = None
    ):
        """
        Initialize node collector.

        Args:
            node_url: Node base URL, also used as the `source` label
            fetcher: Stats fetcher bound to the shared HTTP client
            logger: Logger instance
            node_name: Optional hostname prefix filter
        """
        super().__init__(logger)
        self._node_url = node_url
        self._node_name = node_name or None
        self._fetcher = fetcher

    @property
    def node_url(self) -> str:
        """Node base URL; fetched every scrape and used as the `source` label."""
        return self._node_url

    @property
    def node_name(self) -> Optional[str]:
        """Hostname prefix filter, or None when all nodes are collected."""
        return self._node_name

    def describe(self) -> List[Tuple[str, str]]:
        return metric_descriptions()

    @safe_collect
    def collect(self) -> CollectionResult:
        """
        Fetch and format node stats.

        Returns:
            CollectionResult: Formatted samples, unmodified
        """
        document = self._fetcher.fetch(self._node_url)
        samples = format_node_stats(self._node_url, self._node_name, document)
        self.logger.debug(
            f"Collected {len(samples)} samples from {self._node_url}",
            extra={"source": self._node_url, "nodes": len(document.nodes)}
        )
        return CollectionResult(collector_name=self.name, samples=samples)
