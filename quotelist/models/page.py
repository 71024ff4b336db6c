"""Per-partition fetch results and the merged result page."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from ..core.enums import PartitionKey
from .resource import ResourceItem

RawRecord = dict[str, Any]
ContinuationState = dict[PartitionKey, str]


@dataclass(frozen=True)
class PartitionPage:
    """One page fetched from one partition.

    Attributes:
        partition: Partition the page was fetched from
        records: Raw upstream records in upstream order
        next_token: Upstream cursor for this partition ("" when exhausted)
        error: Failure recovered under the partial policy, None on success
    """

    partition: PartitionKey
    records: tuple[RawRecord, ...] = field(default_factory=tuple)
    next_token: str = ""
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, partition: PartitionKey, error: Exception) -> PartitionPage:
        """Empty page standing in for a failed fetch."""
        return cls(partition=partition, error=error)


class ResultPage(BaseModel):
    """Merged listing page plus the continuation token for the next call."""

    items: list[ResourceItem]
    next: str = ""

    model_config = ConfigDict(frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return {"items": [item.to_payload() for item in self.items], "next": self.next}
