from __future__ import annotations

from typing import Protocol, Sequence

from .model import JobSite


class JobSiteRepository(Protocol):
    def list_all(self) -> Sequence[JobSite]:
        raise NotImplementedError
