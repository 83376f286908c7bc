from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True)
class JobSite:
    jobsite_id: Hashable
    name: str
    status: str = "Active"

    @property
    def is_active(self) -> bool:
        return (self.status or "").strip().lower() == "active"
