from __future__ import annotations

import logging

from pipelines.runner import RunContext
from services.query_interpreter import QueryInterpreter


class InterpretQuery:
    def __init__(self, interpreter: QueryInterpreter) -> None:
        self.interpreter = interpreter

    def run(self, ctx: RunContext) -> RunContext:
        ctx.parsed = self.interpreter.interpret(ctx.query or "")
        ctx.meta["llm_assisted"] = self.interpreter.llm is not None
        logging.info(
            f"Parsed query: company={ctx.parsed.company!r}, title={ctx.parsed.job_title!r}, "
            f"variations={len(ctx.parsed.title_variations)}"
        )
        return ctx
