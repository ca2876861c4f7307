"""Pydantic models for the /pools/default stats document.

Decoding is deliberately lenient: unknown fields are ignored and missing
fields fall back to zero so that documents from any Couchbase version parse.
Numeric strings are accepted for integer fields, but values must fit in a
signed 64-bit integer and NaN or Infinity are rejected.
"""

from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Values are widened to 64-bit integers downstream
Int64 = Annotated[int, Field(ge=-2**63, le=2**63 - 1)]


class _StatsModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore", frozen=True, populate_by_name=True, allow_inf_nan=False
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        # null reads as the field default
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class InterestingStats(_StatsModel):
    """Per-node operation counters and sizes."""
    cmd_get: float = 0.0
    couch_docs_actual_disk_size: Int64 = 0
    couch_docs_data_size: Int64 = 0
    couch_views_actual_disk_size: Int64 = 0
    couch_views_data_size: Int64 = 0
    curr_items: Int64 = 0
    curr_items_tot: Int64 = 0
    ep_bg_fetched: Int64 = 0
    get_hits: float = 0.0
    mem_used: Int64 = 0
    ops: float = 0.0
    vb_replica_curr_items: Int64 = 0


class SystemStats(_StatsModel):
    """Per-node host figures; only reported by newer server versions."""
    cpu_utilization_rate: float = 0.0
    swap_total: Int64 = 0
    swap_used: Int64 = 0
    mem_total: Int64 = 0
    mem_free: Int64 = 0


class NodeEntry(_StatsModel):
    """One cluster member as listed under `nodes`."""
    hostname: str = ""
    status: str = ""
    uptime: Int64 = 0
    interesting_stats: InterestingStats = Field(
        default_factory=InterestingStats, alias="interestingStats"
    )
    system_stats: SystemStats = Field(default_factory=SystemStats, alias="systemStats")

    @field_validator("uptime", mode="before")
    @classmethod
    def parse_uptime(cls, v):
        """Couchbase reports uptime as a decimal string."""
        if isinstance(v, str) and not v.strip():
            return 0
        return v


class HddTotals(_StatsModel):
    total: Int64 = 0
    free: Int64 = 0
    used: Int64 = 0
    used_by_data: Int64 = Field(default=0, alias="usedByData")


class RamTotals(_StatsModel):
    total: Int64 = 0
    used: Int64 = 0
    used_by_data: Int64 = Field(default=0, alias="usedByData")


class StorageTotals(_StatsModel):
    """Cluster-wide disk and memory capacity."""
    hdd: HddTotals = Field(default_factory=HddTotals)
    ram: RamTotals = Field(default_factory=RamTotals)


class StatsDocument(_StatsModel):
    """Root of the /pools/default response."""
    nodes: List[NodeEntry] = Field(default_factory=list)
    storage_totals: StorageTotals = Field(
        default_factory=StorageTotals, alias="storageTotals"
    )
