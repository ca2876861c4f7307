"""Tests for NodeCollector."""

import logging
from unittest.mock import Mock

import httpx
import pytest

from couchbase_exporter.collectors.node_collector import NodeCollector
from couchbase_exporter.collectors.node_formatter import metric_descriptions
from couchbase_exporter.errors import DecodeError, TransportError, UpstreamError

NODE_URL = "http://h:8091"

# Fixtures imported from conftest.py: logger, pools_default, stats_document, fetcher_for, json_response


@pytest.fixture
def mock_fetcher(stats_document):
    fetcher = Mock()
    fetcher.fetch.return_value = stats_document
    return fetcher


class TestNodeCollector:
    """Test suite for NodeCollector."""

    def test_collect_success(self, fetcher_for, json_response, pools_default, logger):
        """Test a healthy fetch returns formatted samples and no error."""
        collector = NodeCollector(NODE_URL, fetcher_for(json_response(pools_default)), logger)

        result = collector.collect()

        assert result.ok
        assert result.error is None
        assert result.collector_name == "node"
        assert len(result.samples) == 7 + 19 * 2

    def test_collect_passes_configuration(self, mock_fetcher, logger):
        """Test the configured URL is fetched and used as the source label."""
        collector = NodeCollector(NODE_URL, mock_fetcher, logger, node_name="web")

        result = collector.collect()

        mock_fetcher.fetch.assert_called_once_with(NODE_URL)
        assert len(result.samples) == 7 + 19
        assert all(dict(s.labels)["source"] == NODE_URL for s in result.samples)

    def test_empty_filter_means_all_nodes(self, mock_fetcher, logger):
        """Test an empty node name is treated as no filter."""
        collector = NodeCollector(NODE_URL, mock_fetcher, logger, node_name="")

        assert collector.node_name is None
        assert len(collector.collect().samples) == 7 + 19 * 2

    def test_collect_non_200(self, fetcher_for, logger):
        """Test upstream error yields zero samples and the error."""
        fetcher = fetcher_for(lambda request: httpx.Response(500, text="boom"))
        collector = NodeCollector(NODE_URL, fetcher, logger)

        result = collector.collect()

        assert result.samples == []
        assert isinstance(result.error, UpstreamError)
        assert not result.ok

    def test_collect_malformed_json(self, fetcher_for, logger):
        """Test decode error yields zero samples and the error."""
        fetcher = fetcher_for(lambda request: httpx.Response(200, text="<html>"))
        collector = NodeCollector(NODE_URL, fetcher, logger)

        result = collector.collect()

        assert result.samples == []
        assert isinstance(result.error, DecodeError)

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_collect_non_finite_counter(self, fetcher_for, logger, token):
        """Test a NaN or Infinity counter fails the scrape cleanly."""
        body = '{"nodes": [{"hostname": "n1", "interestingStats": {"ops": %s}}]}' % token
        fetcher = fetcher_for(lambda request: httpx.Response(200, text=body))
        collector = NodeCollector(NODE_URL, fetcher, logger)

        result = collector.collect()

        assert result.samples == []
        assert isinstance(result.error, DecodeError)

    def test_collect_transport_error(self, mock_fetcher, logger):
        """Test transport error yields zero samples and the error."""
        mock_fetcher.fetch.side_effect = TransportError("connection refused")
        collector = NodeCollector(NODE_URL, mock_fetcher, logger)

        result = collector.collect()

        assert result.samples == []
        assert isinstance(result.error, TransportError)

    def test_collect_logs_failure(self, mock_fetcher, caplog):
        """Test a failed collection is logged at ERROR."""
        parent = logging.getLogger("test_node_collector")
        mock_fetcher.fetch.side_effect = TransportError("connection refused")
        collector = NodeCollector(NODE_URL, mock_fetcher, parent)

        with caplog.at_level(logging.ERROR, logger="test_node_collector"):
            collector.collect()

        assert any("connection refused" in r.getMessage() for r in caplog.records)

    def test_unexpected_error_propagates(self, mock_fetcher, logger):
        """Test bugs are not swallowed as collection errors."""
        mock_fetcher.fetch.side_effect = RuntimeError("bug")
        collector = NodeCollector(NODE_URL, mock_fetcher, logger)

        with pytest.raises(RuntimeError):
            collector.collect()

    def test_fresh_fetch_every_collect(self, mock_fetcher, logger):
        """Test no caching between scrapes."""
        collector = NodeCollector(NODE_URL, mock_fetcher, logger)

        collector.collect()
        collector.collect()

        assert mock_fetcher.fetch.call_count == 2

    def test_recovers_after_failure(self, mock_fetcher, stats_document, logger):
        """Test the next scrape succeeds independently of a failed one."""
        mock_fetcher.fetch.side_effect = [TransportError("down"), stats_document]
        collector = NodeCollector(NODE_URL, mock_fetcher, logger)

        assert collector.collect().samples == []
        assert len(collector.collect().samples) == 7 + 19 * 2

    def test_describe(self, mock_fetcher, logger):
        """Test describe lists static metric names without fetching."""
        collector = NodeCollector(NODE_URL, mock_fetcher, logger)

        assert collector.describe() == metric_descriptions()
        mock_fetcher.fetch.assert_not_called()

    def test_configuration_read_only(self, mock_fetcher, logger):
        """Test URL and filter are exposed read-only."""
        collector = NodeCollector(NODE_URL, mock_fetcher, logger, node_name="web")

        assert collector.node_url == NODE_URL
        assert collector.node_name == "web"
        with pytest.raises(AttributeError):
            collector.node_url = "http://other:8091"
