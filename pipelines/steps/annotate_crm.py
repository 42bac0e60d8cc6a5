from __future__ import annotations

import logging
from typing import Optional

from pipelines.runner import RunContext
from services.dedup_annotator import DedupAnnotator


class AnnotateCrm:
    def __init__(self, annotator: Optional[DedupAnnotator]) -> None:
        self.annotator = annotator

    def run(self, ctx: RunContext) -> RunContext:
        if self.annotator is None:
            logging.info("No HubSpot token, skipping duplicate check")
            return ctx
        ctx.people = self.annotator.annotate(ctx.people)
        ctx.meta["in_crm"] = sum(1 for p in ctx.people if p.in_hubspot)
        return ctx
