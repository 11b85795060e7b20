"""Domain models and the persisted record schema."""
from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from .duration import Duration


@dataclass(frozen=True, slots=True)
class LeaseConfig:
    """Default and maximum lease applied to issued SSH credentials."""

    lease: Duration
    lease_max: Duration

    def to_record(self) -> "LeaseRecord":
        return LeaseRecord(Lease=self.lease.nanoseconds, LeaseMax=self.lease_max.nanoseconds)

    def as_dict(self) -> dict[str, object]:
        return {
            "lease": str(self.lease),
            "lease_max": str(self.lease_max),
            "lease_ns": self.lease.nanoseconds,
            "lease_max_ns": self.lease_max.nanoseconds,
        }


class LeaseRecord(BaseModel):
    """Stored form of :class:`LeaseConfig`, durations as integer nanoseconds."""

    lease: int = Field(alias="Lease", strict=True)
    lease_max: int = Field(alias="LeaseMax", strict=True)

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    def to_config(self) -> LeaseConfig:
        return LeaseConfig(lease=Duration(self.lease), lease_max=Duration(self.lease_max))


__all__ = ["LeaseConfig", "LeaseRecord"]
