from __future__ import annotations

from typing import Optional

from config.settings import Settings, get_settings
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import SyncCrm, ValidateSelection, WriteCsv
from ports.crm import CrmClientPort


def build_export_pipeline(
    crm: Optional[CrmClientPort] = None,
    output_dir: Optional[str] = None,
    filename: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> Pipeline:
    settings = settings or get_settings()
    return Pipeline([
        ValidateSelection(),
        SyncCrm(crm),
        WriteCsv(output_dir or settings.export_dir, filename),
    ])


def run_export(selection: list, **kwargs) -> RunContext:
    """Export selected profiles: CRM upsert, then CSV. Raises ValueError on an empty selection."""
    return build_export_pipeline(**kwargs).run(RunContext(selection=selection))
