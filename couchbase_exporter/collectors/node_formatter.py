"""Flatten a stats document into labeled gauge samples."""

from typing import Callable, List, Optional, Tuple

from ..stats.models import NodeEntry, StatsDocument, StorageTotals
from ..utils.metrics import MetricSample
from ..utils.status import NodeHealth

HOSTNAME_LABEL = "hostname"
SOURCE_LABEL = "source"

# (metric name, description, accessor); order is emission order
STORAGE_METRICS: List[Tuple[str, str, Callable[[StorageTotals], float]]] = [
    ("storage_hdd_total", "Total disk capacity across the cluster in bytes",
     lambda s: s.hdd.total),
    ("storage_hdd_free", "Free disk capacity across the cluster in bytes",
     lambda s: s.hdd.free),
    ("storage_hdd_used", "Disk space used across the cluster in bytes",
     lambda s: s.hdd.used),
    ("storage_hdd_usedbydata", "Disk space used by Couchbase data in bytes",
     lambda s: s.hdd.used_by_data),
    ("storage_ram_total", "Total memory across the cluster in bytes",
     lambda s: s.ram.total),
    ("storage_ram_used", "Memory used across the cluster in bytes",
     lambda s: s.ram.used),
    ("storage_ram_usedbydata", "Memory used by Couchbase data in bytes",
     lambda s: s.ram.used_by_data),
]

NODE_METRICS: List[Tuple[str, str, Callable[[NodeEntry], float]]] = [
    ("cmd_get", "Get operations per second",
     lambda n: n.interesting_stats.cmd_get),
    ("couch_docs_actual_disk_size", "Disk size of document data files in bytes",
     lambda n: n.interesting_stats.couch_docs_actual_disk_size),
    ("couch_docs_data_size", "Size of document data in bytes",
     lambda n: n.interesting_stats.couch_docs_data_size),
    ("couch_views_actual_disk_size", "Disk size of view index files in bytes",
     lambda n: n.interesting_stats.couch_views_actual_disk_size),
    ("couch_views_data_size", "Size of view index data in bytes",
     lambda n: n.interesting_stats.couch_views_data_size),
    ("curr_items", "Active items on the node",
     lambda n: n.interesting_stats.curr_items),
    ("curr_items_tot", "Active and replica items on the node",
     lambda n: n.interesting_stats.curr_items_tot),
    ("ep_bg_fetched", "Items fetched from disk by background fetches",
     lambda n: n.interesting_stats.ep_bg_fetched),
    ("get_hits", "Get operation hits per second",
     lambda n: n.interesting_stats.get_hits),
    ("mem_used", "Memory used by the data service in bytes",
     lambda n: n.interesting_stats.mem_used),
    ("ops", "Operations per second",
     lambda n: n.interesting_stats.ops),
    ("vb_replica_curr_items", "Replica items on the node",
     lambda n: n.interesting_stats.vb_replica_curr_items),
    ("cpu_utilization_rate", "Host CPU utilization in percent",
     lambda n: n.system_stats.cpu_utilization_rate),
    ("swap_total", "Host swap size in bytes",
     lambda n: n.system_stats.swap_total),
    ("swap_used", "Host swap in use in bytes",
     lambda n: n.system_stats.swap_used),
    ("mem_total", "Host memory size in bytes",
     lambda n: n.system_stats.mem_total),
    ("mem_free", "Host free memory in bytes",
     lambda n: n.system_stats.mem_free),
    ("uptime", "Node uptime in seconds",
     lambda n: n.uptime),
    ("status", "1 if the node reports itself healthy, 0 otherwise",
     lambda n: NodeHealth.from_status(n.status).to_value()),
]


def metric_descriptions() -> List[Tuple[str, str]]:
    """Static (name, description) pairs for every metric the formatter emits."""
    return [(name, help_text) for name, help_text, _ in STORAGE_METRICS + NODE_METRICS]


def _node_selected(hostname: str, node_name: Optional[str]) -> bool:
    if not node_name:
        return True
    return hostname.startswith(node_name)


def format_node_stats(
    node_url: str,
    node_name: Optional[str],
    document: StatsDocument
) -> List[MetricSample]:
    """
    Translate a stats document into gauge samples.

    Storage totals come first and are emitted regardless of the node filter.
    Each node whose hostname starts with `node_name` then contributes one
    sample per entry in NODE_METRICS, labeled with its hostname. Finally every
    sample gets a trailing `source` label carrying `node_url`.

    Float counters are truncated toward zero, never rounded.

    Args:
        node_url: Node base URL the document was fetched from
        node_name: Hostname prefix filter; None or empty keeps all nodes
        document: Parsed stats document

    Returns:
        List[MetricSample]: Samples in emission order
    """
    samples = [
        MetricSample(name=name, value=int(getter(document.storage_totals)), description=help_text)
        for name, help_text, getter in STORAGE_METRICS
    ]

    for node in document.nodes:
        if not _node_selected(node.hostname, node_name):
            continue
        samples.extend(
            MetricSample(
                name=name,
                value=int(getter(node)),
                description=help_text,
                label_keys=(HOSTNAME_LABEL,),
                label_values=(node.hostname,)
            )
            for name, help_text, getter in NODE_METRICS
        )

    return [sample.with_label(SOURCE_LABEL, node_url) for sample in samples]
