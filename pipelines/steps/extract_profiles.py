from __future__ import annotations

import logging
from typing import Optional

from data_extractor import LinkedInProfileExtractor
from pipelines.runner import RunContext
from services.match_filter import filter_profiles


class ExtractProfiles:
    def __init__(self, extractor: Optional[LinkedInProfileExtractor] = None) -> None:
        self.extractor = extractor or LinkedInProfileExtractor()

    def run(self, ctx: RunContext) -> RunContext:
        company = ctx.parsed.company if ctx.parsed else ""
        ctx.people = self.extractor.extract_all(ctx.results, company)
        ctx.meta["profiles_extracted"] = len(ctx.people)
        ctx.meta["extraction_stats"] = self.extractor.get_extraction_stats()
        return ctx


class FilterMatches:
    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def run(self, ctx: RunContext) -> RunContext:
        if ctx.parsed is None:
            return ctx
        before = len(ctx.people)
        ctx.people = filter_profiles(ctx.people, ctx.parsed, strict=self.strict)
        ctx.meta["profiles_matched"] = len(ctx.people)
        logging.info(f"Match filter kept {len(ctx.people)}/{before} profiles")
        return ctx
