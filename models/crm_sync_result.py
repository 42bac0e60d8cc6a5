from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CrmSyncResult(BaseModel):
    """Counters for one export-time CRM upsert run."""

    created: int = 0
    updated: int = 0
    failed: int = 0

    model_config = ConfigDict(extra="forbid")

    @property
    def total(self) -> int:
        return self.created + self.updated + self.failed
