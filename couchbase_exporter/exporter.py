"""Prometheus collector that fans out to registered collector groups."""

import logging
import threading
import time
from collections import OrderedDict
from typing import Dict, Iterator, List

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import Collector

from .collectors.base import BaseCollector
from .utils.metrics import MetricKind, MetricSample

DEFAULT_NAMESPACE = "couchbase"


class CouchbaseExporter(Collector):
    """
    Bridges collector groups to a prometheus_client registry.

    Each scrape runs every group once. Samples are grouped by name into
    metric families prefixed with the namespace. A failing group yields no
    samples for that scrape; the failure is logged and counted in the
    exporter's own scrape metrics.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE, logger: logging.Logger = None):
        self.namespace = namespace
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)
        self._groups: List[BaseCollector] = []

        # Scrapes may run concurrently on server threads
        self._lock = threading.Lock()
        self._scrapes_total = 0
        self._scrape_errors_total = 0

    @property
    def groups(self) -> List[BaseCollector]:
        return list(self._groups)

    def add_group(self, collector: BaseCollector) -> None:
        self._groups.append(collector)
        self.logger.info(f"Registered collector group {collector.name}")

    def _metric_name(self, name: str) -> str:
        return f"{self.namespace}_{name}"

    def describe(self) -> Iterator[Metric]:
        """Yield one empty family per metric any group can emit."""
        seen = set()
        for group in self._groups:
            for name, help_text in group.describe():
                if name in seen:
                    continue
                seen.add(name)
                yield GaugeMetricFamily(self._metric_name(name), help_text)
        for family in self._scrape_families(0.0, False):
            yield family

    def collect(self) -> Iterator[Metric]:
        """Run every group and yield its samples as metric families."""
        start = time.time()
        samples: List[MetricSample] = []
        failed = False

        for group in self._groups:
            result = group.collect()
            if result.ok:
                samples.extend(result.samples)
            else:
                failed = True
                self.logger.error(
                    f"Collector group {group.name} failed: {result.error}",
                    extra={"collector": group.name, "error_type": type(result.error).__name__}
                )

        with self._lock:
            self._scrapes_total += 1
            if failed:
                self._scrape_errors_total += 1

        for family in self._families(samples):
            yield family
        for family in self._scrape_families(time.time() - start, failed):
            yield family

    def _families(self, samples: List[MetricSample]) -> Iterator[Metric]:
        families: Dict[str, GaugeMetricFamily] = OrderedDict()
        for sample in samples:
            if sample.kind is not MetricKind.GAUGE:
                raise ValueError(f"Unsupported metric kind {sample.kind} for {sample.name}")
            family = families.get(sample.name)
            if family is None:
                family = GaugeMetricFamily(
                    self._metric_name(sample.name),
                    sample.description,
                    labels=list(sample.label_keys)
                )
                families[sample.name] = family
            family.add_metric(list(sample.label_values), sample.value)
        return iter(families.values())

    def _scrape_families(self, duration: float, failed: bool) -> List[Metric]:
        with self._lock:
            scrapes_total = self._scrapes_total
            errors_total = self._scrape_errors_total

        scrapes = CounterMetricFamily(
            self._metric_name("exporter_scrapes"),
            "Total number of times the exporter collected stats"
        )
        scrapes.add_metric([], scrapes_total)

        errors = CounterMetricFamily(
            self._metric_name("exporter_scrape_errors"),
            "Total number of scrapes in which a collector group failed"
        )
        errors.add_metric([], errors_total)

        last_error = GaugeMetricFamily(
            self._metric_name("exporter_last_scrape_error"),
            "Whether the last scrape failed (1 for error, 0 for success)"
        )
        last_error.add_metric([], 1 if failed else 0)

        last_duration = GaugeMetricFamily(
            self._metric_name("exporter_last_scrape_duration_seconds"),
            "Duration of the last scrape in seconds"
        )
        last_duration.add_metric([], duration)

        return [scrapes, errors, last_error, last_duration]
