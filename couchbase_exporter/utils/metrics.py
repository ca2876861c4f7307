"""Metric data structures for collectors."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class MetricKind(Enum):
    """Prometheus metric type of a sample."""

    GAUGE = "gauge"


@dataclass(frozen=True)
class MetricSample:
    """Single labeled value produced by a collector."""

    name: str
    value: int
    description: str
    kind: MetricKind = MetricKind.GAUGE
    label_keys: Tuple[str, ...] = ()
    label_values: Tuple[str, ...] = ()

    def __post_init__(self):
        """Keys and values are paired positionally."""
        if len(self.label_keys) != len(self.label_values):
            raise ValueError(
                f"Metric {self.name} has {len(self.label_keys)} label keys "
                f"but {len(self.label_values)} label values"
            )

    @property
    def labels(self) -> List[Tuple[str, str]]:
        return list(zip(self.label_keys, self.label_values))

    def with_label(self, key: str, value: str) -> "MetricSample":
        """Return a copy with one more label appended after the existing ones."""
        return MetricSample(
            name=self.name,
            value=self.value,
            description=self.description,
            kind=self.kind,
            label_keys=self.label_keys + (key,),
            label_values=self.label_values + (value,),
        )


@dataclass
class CollectionResult:
    """Standard result format from all collectors."""

    collector_name: str
    samples: List[MetricSample] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
