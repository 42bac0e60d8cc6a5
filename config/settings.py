from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    exa_api_key: str | None
    openai_api_key: str | None
    openai_model: str | None
    hubspot_access_token: str | None
    hubspot_base_url: str

    # Search provider options
    search_type: str
    search_domain_filter: list[str]
    search_num_results: int
    search_text_max_characters: int
    search_highlights_per_url: int
    search_highlight_sentences: int

    max_retries: int
    request_timeout_seconds: int

    # CRM dedup batching
    crm_batch_size: int
    crm_batch_pause_seconds: float

    # Matching
    strict_title_match: bool

    export_dir: str
    log_level: str
    run_env: str

    # AI gating (effective only when OPENAI_API_KEY is present)
    ai_enabled: bool = True

    # Call tracing
    api_trace: bool = False
    api_log_path: str = "logs/api_calls.jsonl"

    @property
    def llm_available(self) -> bool:
        return self.ai_enabled and bool(self.openai_api_key)

    @property
    def crm_available(self) -> bool:
        return bool(self.hubspot_access_token)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        exa_api_key=os.getenv("EXA_API_KEY") or None,
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL") or None,
        hubspot_access_token=os.getenv("HUBSPOT_ACCESS_TOKEN") or None,
        hubspot_base_url=os.getenv("HUBSPOT_BASE_URL", "https://api.hubapi.com"),
        search_type=os.getenv("SEARCH_TYPE", "auto"),
        search_domain_filter=["linkedin.com/in"],
        search_num_results=int(os.getenv("SEARCH_NUM_RESULTS", "100")),
        search_text_max_characters=int(os.getenv("SEARCH_TEXT_MAX_CHARACTERS", "500")),
        search_highlights_per_url=int(os.getenv("SEARCH_HIGHLIGHTS_PER_URL", "5")),
        search_highlight_sentences=int(os.getenv("SEARCH_HIGHLIGHT_SENTENCES", "3")),
        max_retries=int(os.getenv("MAX_RETRIES", "3")),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT", "30")),
        crm_batch_size=int(os.getenv("CRM_BATCH_SIZE", "5")),
        crm_batch_pause_seconds=float(os.getenv("CRM_BATCH_PAUSE_SECONDS", "0.2")),
        strict_title_match=_as_bool(os.getenv("STRICT_TITLE_MATCH")),
        export_dir=os.getenv("EXPORT_DIR", "exports"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
        ai_enabled=_as_bool(os.getenv("AI_ENABLED"), default=True),
        api_trace=_as_bool(os.getenv("API_TRACE")),
        api_log_path=os.getenv("API_LOG_PATH", "logs/api_calls.jsonl"),
    )
