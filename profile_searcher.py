"""
Exa neural search integration for LinkedIn profile searches.
"""
import logging
import time
from typing import Any, Dict, List, Optional

import requests
from exa_py import Exa

from config.settings import Settings, get_settings
from models import SearchResult
from utils.api_logger import log_call

TIMEOUT_MESSAGE = "Search timed out. Exa API may be slow or unreachable. Please try again."
CREDENTIAL_MESSAGE = "Invalid Exa API key. Please check your configuration."
GENERIC_MESSAGE = "Failed to search profiles"


class SearchFailed(RuntimeError):
    """The primary profile search could not be completed; message is user-facing."""


def describe_search_error(error: BaseException) -> str:
    """Map a search failure to the message shown to the user."""
    message = str(error or "")
    lowered = message.lower()
    if isinstance(error, (requests.exceptions.Timeout, requests.exceptions.ConnectionError, TimeoutError)):
        return TIMEOUT_MESSAGE
    if "fetch failed" in lowered or "timeout" in lowered or "timed out" in lowered:
        return TIMEOUT_MESSAGE
    if "api key" in lowered or "401" in lowered or "unauthorized" in lowered:
        return CREDENTIAL_MESSAGE
    return message or GENERIC_MESSAGE


def build_search_phrase(query: str, company: str = "") -> str:
    """Bias the search toward current employees when a company was parsed."""
    if company:
        return f"{query} currently works at {company} linkedin profile"
    return f"{query} linkedin profile"


class ProfileSearcher:
    """Runs LinkedIn-restricted searches through Exa and returns SearchResult records."""

    provider_name = "exa"

    def __init__(self, settings: Optional[Settings] = None, client: Any = None, sleep=time.sleep):
        self.settings = settings or get_settings()
        self.api_calls_made = 0
        self._sleep = sleep

        if client is None:
            if not self.settings.exa_api_key:
                raise ValueError("Exa API key must be set in .env file (EXA_API_KEY)")
            client = Exa(api_key=self.settings.exa_api_key)
        self.client = client

    def search_options(self) -> Dict[str, Any]:
        return {
            "type": self.settings.search_type,
            "num_results": self.settings.search_num_results,
            "text": {"max_characters": self.settings.search_text_max_characters},
            "highlights": {
                "highlights_per_url": self.settings.search_highlights_per_url,
                "num_sentences": self.settings.search_highlight_sentences,
            },
            "include_domains": list(self.settings.search_domain_filter),
        }

    def _to_search_result(self, item: Any) -> SearchResult:
        url = getattr(item, "url", None) or ""
        return SearchResult(
            id=str(getattr(item, "id", None) or url),
            url=url,
            title=getattr(item, "title", None) or "",
            text=getattr(item, "text", None) or "",
            highlights=[h for h in (getattr(item, "highlights", None) or []) if isinstance(h, str)],
        )

    def search(self, query: str) -> List[SearchResult]:
        """Execute one search with retries; raises SearchFailed once retries are exhausted."""
        options = self.search_options()
        last_error: Optional[Exception] = None

        attempts = max(1, self.settings.max_retries)
        for attempt in range(attempts):
            t0 = time.time()
            try:
                logging.info(f"Making search call {self.api_calls_made + 1}: {query!r}")
                response = self.client.search_and_contents(query, **options)
                self.api_calls_made += 1
            except Exception as e:
                last_error = e
                duration_ms = int((time.time() - t0) * 1000)
                log_call(settings=self.settings, caller="profile_searcher.search", provider=self.provider_name,
                         operation="search_and_contents", duration_ms=duration_ms,
                         status="error", error=str(e))
                logging.error(f"Search error on attempt {attempt + 1}: {e}")
                if describe_search_error(e) == CREDENTIAL_MESSAGE:
                    break
                if attempt < attempts - 1:
                    self._sleep(2 ** attempt)  # Exponential backoff
                continue

            results = [self._to_search_result(item) for item in (getattr(response, "results", None) or [])]
            log_call(settings=self.settings, caller="profile_searcher.search", provider=self.provider_name,
                     operation="search_and_contents", duration_ms=int((time.time() - t0) * 1000),
                     status="ok", extras={"results": len(results)})
            logging.info(f"Search returned {len(results)} results")
            return results

        raise SearchFailed(describe_search_error(last_error)) from last_error

    def get_api_usage(self) -> Dict:
        """Return API usage statistics."""
        return {'api_calls_made': self.api_calls_made}
