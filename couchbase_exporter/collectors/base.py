"""Base collector abstract class for exporter collector groups."""

from abc import ABC, abstractmethod
from typing import List, Tuple
import logging
from functools import wraps

from ..errors import CouchbaseExporterError
from ..utils.metrics import CollectionResult


class BaseCollector(ABC):
    """Abstract base class for all collector groups."""

    #: Short name used in logs and results
    name: str = "base"

    def __init__(self, logger: logging.Logger):
        """
        Initialize base collector.

        Args:
            logger: Parent logger; the collector logs through a child of it
        """
        self.logger = logger.getChild(self.__class__.__name__)

    @abstractmethod
    def describe(self) -> List[Tuple[str, str]]:
        """
        List the metrics this collector can emit.

        Returns:
            List[Tuple[str, str]]: (metric name, description) pairs
        """
        pass

    @abstractmethod
    def collect(self) -> CollectionResult:
        """
        Collect samples for one scrape.

        Returns:
            CollectionResult: Samples, or an empty result carrying the error

        Note:
            Implementations should use the @safe_collect decorator so fetch
            errors become an empty result instead of an exception.
        """
        pass


def safe_collect(func):
    """
    Decorator turning collection errors into an empty, failed result.

    Only CouchbaseExporterError is caught; anything else is a bug and
    propagates to the caller.

    Args:
        func: Collector method to wrap

    Returns:
        Wrapped function returning CollectionResult
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except CouchbaseExporterError as e:
            self.logger.error(
                f"Collection failed: {e}",
                extra={"error_type": type(e).__name__, "collector": self.name}
            )
            return CollectionResult(collector_name=self.name, samples=[], error=e)
    return wrapper
