from __future__ import annotations

from data_validator import DataValidator
from pipelines.runner import RunContext


class ValidateSelection:
    """Parse the export selection into Profiles; raises ValueError on an empty or invalid one."""

    def __init__(self) -> None:
        self.validator = DataValidator()

    def run(self, ctx: RunContext) -> RunContext:
        ctx.people = self.validator.validate_selection(ctx.selection)
        ctx.meta["validation_stats"] = self.validator.get_validation_stats()
        return ctx
