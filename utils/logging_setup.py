from __future__ import annotations

import logging
import os
import sys

from config.settings import get_settings


_INITIALIZED: bool = False

# Structured fields steps and clients attach via ``extra=``
CONTEXT_FIELDS = ("step", "status", "duration_ms", "provider", "error")


class ContextFormatter(logging.Formatter):
    """Appends ``key=value`` for each context field the record carries, plus the run id.

    Records without extras print as plain messages; ``run_id`` comes from the
    ``RUN_ID`` env var set by the CLI when the record does not bring its own.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = super().format(record)
        pairs = [f"{key}={getattr(record, key)}" for key in CONTEXT_FIELDS if getattr(record, key, None) is not None]
        run_id = getattr(record, "run_id", None) or os.getenv("RUN_ID")
        if run_id:
            pairs.append(f"run_id={run_id}")
        if pairs:
            line = f"{line} {' '.join(pairs)}"
        return line


def init_logging(level: str | None = None) -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return

    settings = get_settings()
    log_level_str = (level or settings.log_level).upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if not root_logger.handlers:
        # stdout carries the JSON written by the search command
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(ContextFormatter(fmt="%(asctime)s %(levelname)s %(name)s %(message)s"))
        root_logger.addHandler(handler)

    # Vendor SDK request logs stay at WARNING
    for noisy in ("httpx", "urllib3", "openai"):
        logging.getLogger(noisy).setLevel(max(log_level, logging.WARNING))

    _INITIALIZED = True
