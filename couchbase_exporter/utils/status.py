"""Node health status enumeration."""

from enum import Enum


class NodeHealth(Enum):
    """Couchbase node health as reported in the `status` field."""

    HEALTHY = "healthy"
    OTHER = "other"

    @classmethod
    def from_status(cls, status: str) -> "NodeHealth":
        """
        Map a raw status string to a health value.

        Only an exact, case-sensitive "healthy" counts as healthy;
        "warmup", "unhealthy" and the empty string all map to OTHER.
        """
        if status == cls.HEALTHY.value:
            return cls.HEALTHY
        return cls.OTHER

    def to_value(self) -> int:
        """
        Convert status to its gauge value.

        Returns:
            int: 1 for healthy, 0 otherwise
        """
        return {
            NodeHealth.HEALTHY: 1,
            NodeHealth.OTHER: 0,
        }[self]
