from __future__ import annotations

from data_validator import DataValidator
from pipelines.runner import RunContext


class ValidateQuery:
    """Reject a missing/blank query before any external call is made."""

    def __init__(self) -> None:
        self.validator = DataValidator()

    def run(self, ctx: RunContext) -> RunContext:
        ctx.query = self.validator.validate_query(ctx.query)
        return ctx
