from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.match_filter'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture(autouse=True)
def _fresh_settings():
    # Settings are lru_cached; env changes in one test must not leak into the next
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_settings():
    from config.settings import get_settings

    def _make(**overrides):
        return dataclasses.replace(get_settings(), **overrides)

    return _make


class FakeCrm:
    """In-memory stand-in for the HubSpot client, keyed by LinkedIn URL."""

    def __init__(self, contacts: Optional[Dict[str, str]] = None, fail_lookups=(), fail_writes=()) -> None:
        self.contacts = dict(contacts or {})
        self.fail_lookups = set(fail_lookups)
        self.fail_writes = set(fail_writes)
        self.lookups: list = []
        self.created: list = []
        self.updated: list = []

    def find_by_field(self, field_name: str, value: str) -> Optional[Dict[str, Any]]:
        self.lookups.append((field_name, value))
        if value in self.fail_lookups:
            raise RuntimeError("HubSpot unavailable")
        if value in self.contacts:
            return {"id": self.contacts[value], "properties": {}}
        return None

    def create(self, properties: Dict[str, Any]) -> Dict[str, Any]:
        if properties.get("hs_linkedin_url") in self.fail_writes:
            raise RuntimeError("create rejected")
        self.created.append(properties)
        return {"id": f"new-{len(self.created)}"}

    def update(self, contact_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        if properties.get("hs_linkedin_url") in self.fail_writes:
            raise RuntimeError("update rejected")
        self.updated.append((contact_id, properties))
        return {"id": contact_id}


class FakeSearcher:
    provider_name = "fake"

    def __init__(self, results=None, error: Optional[Exception] = None) -> None:
        self.results = list(results or [])
        self.error = error
        self.queries: list = []

    def search(self, query: str):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.results)


class FakeLLM:
    def __init__(self, reply: str = "", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list = []

    def chat(self, **kwargs):
        raise NotImplementedError

    def complete(self, system_prompt: str, user_prompt: str, *, use_case: str = "query_parsing") -> str:
        self.prompts.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_crm():
    return FakeCrm


@pytest.fixture
def fake_searcher():
    return FakeSearcher


@pytest.fixture
def fake_llm():
    return FakeLLM
