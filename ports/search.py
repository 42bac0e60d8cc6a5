from __future__ import annotations

from typing import List, Protocol

from models import SearchResult


class SearchClientPort(Protocol):
    provider_name: str

    def search(self, query: str) -> List[SearchResult]:
        ...
