from __future__ import annotations

import json

import pytest

from models import SearchResult
from pipelines.search_pipeline import run_search
from profile_searcher import SearchFailed


def _r(title: str, slug: str, text: str = "", kind: str = "in") -> SearchResult:
    url = f"https://www.linkedin.com/{kind}/{slug}"
    return SearchResult(id=slug, url=url, title=title, text=text)


RESULTS = [
    _r("Chris Beaumont - Data Science @ OpenAI | LinkedIn", "chris"),
    _r("Data Science Jobs at OpenAI | LinkedIn", "123", kind="jobs/view"),
    _r("Bob Smith - Data Science at Google | LinkedIn", "bob"),
    _r("Jane Roe - Member of Technical Staff at OpenAI | LinkedIn", "jane"),
]


def test_regex_path_end_to_end(make_settings, fake_searcher, fake_crm):
    searcher = fake_searcher(RESULTS)
    crm = fake_crm(contacts={"https://www.linkedin.com/in/chris": "42"})

    ctx = run_search("data science at OpenAI", searcher, crm=crm,
                     settings=make_settings(crm_batch_pause_seconds=0.0), strict=False)

    assert searcher.queries == ["data science at OpenAI currently works at OpenAI linkedin profile"]
    assert ctx.parsed.company == "OpenAI"
    assert [p.name for p in ctx.people] == ["Chris Beaumont"]
    chris = ctx.people[0]
    assert chris.in_hubspot is True
    assert chris.hubspot_contact_id == "42"
    assert ctx.meta["search_results"] == 4
    assert ctx.meta["profiles_extracted"] == 3
    assert ctx.meta["profiles_matched"] == 1
    assert ctx.meta["llm_assisted"] is False
    # job posting never reaches the CRM
    assert [v for _, v in crm.lookups] == ["https://www.linkedin.com/in/chris"]


def test_llm_variations_widen_the_match(make_settings, fake_searcher, fake_llm):
    llm = fake_llm(json.dumps({
        "company": "OpenAI",
        "jobTitle": "research scientist",
        "titleVariations": ["Member of Technical Staff"],
    }))
    ctx = run_search("research scientists at OpenAI", fake_searcher(RESULTS), llm=llm,
                     settings=make_settings(), strict=False)

    assert ctx.meta["llm_assisted"] is True
    assert [p.name for p in ctx.people] == ["Jane Roe"]
    # no CRM configured: profiles stay unannotated
    assert ctx.people[0].in_hubspot is None


def test_crm_failure_degrades_to_not_in_crm(make_settings, fake_searcher, fake_crm):
    crm = fake_crm(fail_lookups={"https://www.linkedin.com/in/chris"})
    ctx = run_search("data science at OpenAI", fake_searcher(RESULTS), crm=crm,
                     settings=make_settings(crm_batch_pause_seconds=0.0))
    assert ctx.people[0].in_hubspot is False


def test_blank_query_is_rejected_before_search(make_settings, fake_searcher):
    searcher = fake_searcher(RESULTS)
    with pytest.raises(ValueError, match="Query is required"):
        run_search("   ", searcher, settings=make_settings())
    assert searcher.queries == []


def test_search_failure_propagates(make_settings, fake_searcher):
    searcher = fake_searcher(error=SearchFailed("Invalid Exa API key. Please check your configuration."))
    with pytest.raises(SearchFailed):
        run_search("data science at OpenAI", searcher, settings=make_settings())


def test_public_dict_uses_camel_case(make_settings, fake_searcher, fake_crm):
    crm = fake_crm(contacts={"https://www.linkedin.com/in/chris": "42"})
    ctx = run_search("data science at OpenAI", fake_searcher(RESULTS), crm=crm,
                     settings=make_settings(crm_batch_pause_seconds=0.0))
    out = ctx.people[0].to_public_dict()
    assert out["linkedinUrl"] == "https://www.linkedin.com/in/chris"
    assert out["inHubSpot"] is True
    assert out["hubSpotContactId"] == "42"
