from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol

from models import ParsedQuery, Profile, SearchResult
from utils.logging_setup import init_logging


@dataclass
class RunContext:
    query: Optional[str] = None
    parsed: Optional[ParsedQuery] = None
    results: List[SearchResult] = field(default_factory=list)
    people: List[Profile] = field(default_factory=list)
    selection: list = field(default_factory=list)
    output_path: Optional[Path] = None
    meta: dict = field(default_factory=dict)


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        for step in self.steps:
            name = type(step).__name__
            t0 = time.time()
            ctx = step.run(ctx)
            logging.debug(
                f"{name} done",
                extra={"step": name, "status": "ok", "duration_ms": int((time.time() - t0) * 1000)},
            )
        return ctx
