"""Shared pytest configuration and fixtures."""

import json

import httpx
import pytest

from couchbase_exporter.collectors.stats_fetcher import StatsFetcher
from couchbase_exporter.stats.models import StatsDocument
from couchbase_exporter.utils.logger import setup_logger


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test", "DEBUG")


@pytest.fixture
def pools_default():
    """Trimmed /pools/default payload from a two-node cluster."""
    return {
        "name": "default",
        "rebalanceStatus": "none",
        "storageTotals": {
            "ram": {
                "total": 16777216000,
                "quotaTotal": 4294967296,
                "used": 12582912000,
                "usedByData": 104857600
            },
            "hdd": {
                "total": 107374182400,
                "quotaTotal": 107374182400,
                "used": 53687091200,
                "usedByData": 209715200,
                "free": 53687091200
            }
        },
        "nodes": [
            {
                "hostname": "web-1:8091",
                "status": "healthy",
                "clusterMembership": "active",
                "uptime": "86400",
                "systemStats": {
                    "cpu_utilization_rate": 12.75,
                    "swap_total": 2147483648,
                    "swap_used": 1048576,
                    "mem_total": 8388608000,
                    "mem_free": 4194304000
                },
                "interestingStats": {
                    "cmd_get": 17.9,
                    "couch_docs_actual_disk_size": 40960000,
                    "couch_docs_data_size": 20480000,
                    "couch_views_actual_disk_size": 1024,
                    "couch_views_data_size": 512,
                    "curr_items": 42,
                    "curr_items_tot": 84,
                    "ep_bg_fetched": 3,
                    "get_hits": 9.99,
                    "mem_used": 52428800,
                    "ops": 120.5,
                    "vb_replica_curr_items": 42
                }
            },
            {
                "hostname": "db-1:8091",
                "status": "warmup",
                "uptime": "60",
                "interestingStats": {
                    "curr_items": 7
                }
            }
        ]
    }


@pytest.fixture
def stats_document(pools_default):
    """Parsed two-node stats document."""
    return StatsDocument.model_validate(pools_default)


def make_fetcher(handler) -> StatsFetcher:
    """Build a StatsFetcher whose client answers through `handler`."""
    client = httpx.Client(transport=httpx.MockTransport(handler), timeout=10.0)
    return StatsFetcher(client)


def json_handler(payload, status_code: int = 200):
    """MockTransport handler returning `payload` as JSON for /pools/default."""
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/pools/default"
        return httpx.Response(status_code, content=json.dumps(payload).encode())
    return handler


@pytest.fixture
def fetcher_for():
    """Factory fixture: handler -> StatsFetcher."""
    return make_fetcher


@pytest.fixture
def json_response():
    """Factory fixture: (payload, status) -> MockTransport handler."""
    return json_handler
