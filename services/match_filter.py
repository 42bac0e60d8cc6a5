from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

from models import NOT_SPECIFIED, ParsedQuery, Profile


# Canonical role -> alternate phrasings seen on LinkedIn headlines
TITLE_SYNONYMS: Dict[str, List[str]] = {
    "director": ["director", "head", "vp", "vice president", "lead", "principal"],
    "engineer": [
        "engineer", "developer", "programmer", "technologist", "swe", "mts",
        "member of technical staff", "ic", "individual contributor", "staff engineer", "senior engineer",
    ],
    "scientist": ["scientist", "researcher", "research engineer", "research scientist", "applied scientist"],
    "manager": [
        "manager", "lead", "supervisor", "head", "em", "engineering manager",
        "technical lead", "tech lead", "tl",
    ],
    "founder": ["founder", "co-founder", "cofounder", "ceo", "chief executive"],
    "designer": ["designer", "ux", "ui", "product designer", "design lead", "creative director"],
    "analyst": ["analyst", "associate", "specialist", "consultant"],
    "product": ["product manager", "pm", "product lead", "product owner", "tpm", "technical product manager"],
    "data": ["data scientist", "data engineer", "data analyst", "ml engineer", "machine learning engineer"],
}

STOP_WORDS = {"a", "the", "and", "or", "at", "in", "of", "senior", "junior", "staff"}

_SEPARATOR_RE = re.compile(r"[-_]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lower-case, hyphens/underscores to spaces, collapsed whitespace: "Co-Founder_CEO" -> "co founder ceo"."""
    text = _SEPARATOR_RE.sub(" ", (title or "").lower())
    return _WHITESPACE_RE.sub(" ", text).strip()


def _is_blank(value: Optional[str]) -> bool:
    return not value or value.strip().lower() == NOT_SPECIFIED.lower()


def _contains_either(a: str, b: str) -> bool:
    return a in b or b in a


def is_company_match(profile: Profile, target_company: str) -> bool:
    """True when the profile's company and the target contain one another (case-insensitive)."""
    if _is_blank(profile.company):
        return False
    profile_company = profile.company.lower()
    wanted = (target_company or "").lower()
    return _contains_either(profile_company, wanted) or profile_company == wanted


def _token_overlap(search_tokens: List[str], profile_tokens: List[str], strict: bool) -> bool:
    for word in search_tokens:
        if word in STOP_WORDS:
            continue
        if strict:
            if word in profile_tokens:
                return True
        elif any(_contains_either(word, p_word) for p_word in profile_tokens):
            return True
    return False


def is_title_match(
    profile: Profile,
    target_title: str,
    variations: Optional[Iterable[str]] = None,
    strict: bool = False,
) -> bool:
    """Decide whether the profile's title satisfies the searched title.

    Checks run from most to least specific: direct containment, the
    founder/co-founder equivalence, caller-supplied variations, the synonym
    table, and finally a single shared meaningful word. That last check is
    very permissive (one common word is enough); ``strict`` narrows it to an
    exact, non-stopword token match.
    """
    if _is_blank(profile.title):
        return False

    normalized_profile = normalize_title(profile.title)
    normalized_search = normalize_title(target_title)

    if _contains_either(normalized_profile, normalized_search):
        return True

    if "founder" in normalized_search or "founder" in normalized_profile:
        if "co founder" in normalized_search or "cofounder" in normalized_search:
            return "founder" in normalized_profile
        if "co founder" in normalized_profile or "cofounder" in normalized_profile:
            return "founder" in normalized_search

    for variation in variations or []:
        normalized_variation = normalize_title(variation)
        if normalized_variation and _contains_either(normalized_profile, normalized_variation):
            return True

    search_terms = normalized_search.split()
    for base_title, synonyms in TITLE_SYNONYMS.items():
        base_words = base_title.split()
        has_base_match = any(
            _contains_either(word, term) for word in base_words for term in search_terms
        )
        if has_base_match or base_title in normalized_search:
            if any(syn in normalized_profile for syn in synonyms):
                return True

    return _token_overlap(search_terms, normalized_profile.split(), strict)


def filter_profiles(profiles: Iterable[Profile], parsed: ParsedQuery, strict: bool = False) -> List[Profile]:
    """Keep profiles at the target company holding a matching title (each check only when targeted)."""
    kept: List[Profile] = []
    for profile in profiles:
        if parsed.company and not is_company_match(profile, parsed.company):
            logging.debug(
                f"Filtered out {profile.name}: company mismatch (has: {profile.company!r}, need: {parsed.company!r})"
            )
            continue
        if parsed.job_title and not is_title_match(profile, parsed.job_title, parsed.title_variations, strict):
            logging.debug(
                f"Filtered out {profile.name}: title mismatch (has: {profile.title!r}, need: {parsed.job_title!r})"
            )
            continue
        logging.debug(f"Included {profile.name}: {profile.title} at {profile.company}")
        kept.append(profile)
    return kept
