from __future__ import annotations

from data_extractor import (
    BIO_PLACEHOLDER,
    LinkedInProfileExtractor,
    clean_extracted_text,
    extract_bio,
    is_plausible_title,
    is_profile_url,
)
from models import NOT_SPECIFIED, UNKNOWN_NAME, SearchResult


def _result(title: str, url: str = "https://www.linkedin.com/in/someone", text: str = "", highlights=None) -> SearchResult:
    return SearchResult(id=url, url=url, title=title, text=text, highlights=highlights or [])


def test_split_title_with_at_symbol():
    p = LinkedInProfileExtractor().extract(_result("Chris Beaumont - Data Science @ OpenAI | LinkedIn"))
    assert p.name == "Chris Beaumont"
    assert p.title == "Data Science"
    assert p.company == "OpenAI"


def test_short_phrase_without_job_word_is_company():
    p = LinkedInProfileExtractor().extract(_result("Jane Doe - Acme | LinkedIn"))
    assert p.name == "Jane Doe"
    assert p.company == "Acme"
    assert p.title == NOT_SPECIFIED


def test_phrase_with_job_word_is_title():
    p = LinkedInProfileExtractor().extract(_result("Jane Doe - Staff Engineer | LinkedIn"))
    assert p.title == "Staff Engineer"
    assert p.company == NOT_SPECIFIED


def test_at_separator_is_case_insensitive():
    p = LinkedInProfileExtractor().extract(_result("Sam Lee - Product Manager AT Stripe | Professional Profile"))
    assert p.title == "Product Manager"
    assert p.company == "Stripe"


def test_no_dash_keeps_sentinels():
    p = LinkedInProfileExtractor().extract(_result("Jane Doe | LinkedIn"))
    assert p.name == "Jane Doe"
    assert p.title == NOT_SPECIFIED
    assert p.company == NOT_SPECIFIED


def test_empty_title_gives_unknown_name():
    p = LinkedInProfileExtractor().extract(_result(""))
    assert p.name == UNKNOWN_NAME
    assert p.summary == BIO_PLACEHOLDER


def test_experience_section_overrides_title():
    text = "Experience: Senior Research Engineer\nAcme Robotics, working on perception and planning systems"
    p = LinkedInProfileExtractor().extract(_result("Jane Roe - Engineer at Acme | LinkedIn", text=text))
    assert p.title == "Senior Research Engineer"
    assert p.company == "Acme"


def test_experience_duration_is_rejected():
    text = "Experience: 3 years 2 months\nAcme Robotics, working on perception and planning systems"
    p = LinkedInProfileExtractor().extract(_result("Jane Roe - Engineer at Acme | LinkedIn", text=text))
    assert p.title == "Engineer"


def test_target_company_pass_forces_company():
    text = "Senior Research Engineer at OpenAI\nWorking on alignment and safety research."
    p = LinkedInProfileExtractor().extract(
        _result("Jane Roe - Member of Technical Staff | LinkedIn", text=text), "OpenAI"
    )
    assert p.title == "Senior Research Engineer"
    assert p.company == "OpenAI"


def test_target_company_pass_needs_body_text():
    p = LinkedInProfileExtractor().extract(_result("Jane Roe - Member of Technical Staff | LinkedIn"), "OpenAI")
    assert p.title == "Member of Technical Staff"
    assert p.company == NOT_SPECIFIED


def test_extraction_is_deterministic():
    result = _result(
        "Chris Beaumont - Data Science @ OpenAI | LinkedIn",
        text="Chris builds forecasting models for the research org. Previously at Stripe.",
        highlights=["Data Science at OpenAI"],
    )
    extractor = LinkedInProfileExtractor()
    assert extractor.extract(result, "OpenAI") == extractor.extract(result, "OpenAI")


def test_clean_extracted_text_strips_markup():
    assert clean_extracted_text("• <b>Staff Engineer</b> (Full-time) at") == "Staff Engineer"
    assert clean_extracted_text("## [Acme Corp]  (Current)") == "Acme Corp"
    assert clean_extracted_text("@ OpenAI") == "OpenAI"
    assert clean_extracted_text("") == ""


def test_is_plausible_title():
    assert is_plausible_title("Senior Research Engineer")
    assert not is_plausible_title("3 years")
    assert not is_plausible_title("2019 - Present")
    assert not is_plausible_title("Jan 2020 - Present")
    assert not is_plausible_title("Jane Roe")
    assert not is_plausible_title("CTO")


def test_bio_skips_login_boilerplate():
    text = "Sign in to view Jane's full profile. Jane leads the applied research team at Acme."
    assert extract_bio(text, "", "") == "Jane leads the applied research team at Acme"


def test_bio_falls_back_to_page_title():
    assert extract_bio("", "", "Chris Beaumont - Data Science @ OpenAI | LinkedIn") == "Data Science @ OpenAI"


def test_bio_placeholder_when_nothing_usable():
    assert extract_bio("Join now", "", "Jane Doe | LinkedIn") == BIO_PLACEHOLDER


def test_is_profile_url():
    assert is_profile_url("https://www.linkedin.com/in/jane-roe")
    assert not is_profile_url("https://www.linkedin.com/jobs/view/123")
    assert not is_profile_url("https://www.linkedin.com/company/acme")
    assert not is_profile_url("https://www.linkedin.com/in/jane/jobs/")
    assert not is_profile_url(None)


def test_extract_all_drops_non_profile_urls_and_keeps_order():
    results = [
        _result("Ann One - Engineer at Acme | LinkedIn", url="https://www.linkedin.com/in/ann"),
        _result("Acme is hiring | LinkedIn", url="https://www.linkedin.com/jobs/view/1"),
        _result("Acme | LinkedIn", url="https://www.linkedin.com/company/acme"),
        _result("Bob Two - Designer at Acme | LinkedIn", url="https://www.linkedin.com/in/bob"),
    ]
    extractor = LinkedInProfileExtractor()
    profiles = extractor.extract_all(results, "Acme")
    assert [p.linkedin_url for p in profiles] == [
        "https://www.linkedin.com/in/ann",
        "https://www.linkedin.com/in/bob",
    ]
    stats = extractor.get_extraction_stats()
    assert stats["results_seen"] == 4
    assert stats["non_profile_urls_skipped"] == 2
    assert stats["profiles_extracted"] == 2


def test_current_section_overrides_title():
    text = "Current: Principal Product Designer\nStudio Nine, shipping design systems for fintech teams"
    p = LinkedInProfileExtractor().extract(_result("Jane Roe - Designer at Studio Nine | LinkedIn", text=text))
    assert p.title == "Principal Product Designer"
    assert p.company == "Studio Nine"


def test_body_pass_needs_more_than_fifty_characters():
    text = "Experience: Principal Staff Engineer\n"  # 37 characters
    title = "Jane Roe - Staff Engineer at Acme | LinkedIn"
    extractor = LinkedInProfileExtractor()

    assert extractor.extract(_result(title, text=text)).title == "Staff Engineer"
    # 37 + 13 == 50: still too short
    assert extractor.extract(_result(title, text=text, highlights=["Acme Storage!"])).title == "Staff Engineer"
    # 37 + 14 == 51
    assert extractor.extract(_result(title, text=text, highlights=["Acme Storage!!"])).title == "Principal Staff Engineer"


def test_target_company_with_regex_metacharacters():
    text = "Senior Compiler Engineer at C++ Labs (Acme)\nBuilding optimizing compilers for embedded targets."
    p = LinkedInProfileExtractor().extract(
        _result("Jane Roe - Staff Engineer at C++ Labs | LinkedIn", text=text), "C++ Labs (Acme)"
    )
    assert p.title == "Senior Compiler Engineer"
    assert p.company == "C++ Labs (Acme)"
