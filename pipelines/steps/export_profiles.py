from __future__ import annotations

import logging
from typing import Optional

from pipelines.runner import RunContext
from ports.crm import CrmClientPort
from services.crm_sync import sync_to_crm
from services.csv_export import write_csv


class SyncCrm:
    def __init__(self, crm: Optional[CrmClientPort]) -> None:
        self.crm = crm

    def run(self, ctx: RunContext) -> RunContext:
        if self.crm is None:
            logging.info("No HubSpot token, skipping CRM sync")
            ctx.meta["crm_sync"] = None
            return ctx
        ctx.meta["crm_sync"] = sync_to_crm(ctx.people, self.crm)
        return ctx


class WriteCsv:
    def __init__(self, output_dir: str, filename: Optional[str] = None) -> None:
        self.output_dir = output_dir
        self.filename = filename

    def run(self, ctx: RunContext) -> RunContext:
        ctx.output_path = write_csv(ctx.people, self.output_dir, self.filename)
        ctx.meta["exported"] = len(ctx.people)
        logging.info(f"Wrote {len(ctx.people)} profiles to {ctx.output_path}")
        return ctx
