from __future__ import annotations

from pipelines.runner import RunContext
from ports.search import SearchClientPort
from profile_searcher import build_search_phrase


class SearchProfiles:
    """Run the primary search. Failures propagate: without results there is nothing to return."""

    def __init__(self, searcher: SearchClientPort) -> None:
        self.searcher = searcher

    def run(self, ctx: RunContext) -> RunContext:
        company = ctx.parsed.company if ctx.parsed else ""
        phrase = build_search_phrase(ctx.query or "", company)
        ctx.meta["search_phrase"] = phrase
        ctx.results = self.searcher.search(phrase)
        ctx.meta["search_results"] = len(ctx.results)
        return ctx
