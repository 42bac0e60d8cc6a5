from __future__ import annotations

import logging
import re
from typing import Optional

from models import ParsedQuery
from ports.llm import LLMClientPort
from services.llm_client import extract_json


QUERY_PARSING_SYSTEM_PROMPT = (
    "You are a helpful assistant that parses job search queries. Extract the company name, "
    "job title, and provide alternative job titles that might be used at that company. "
    'Respond in JSON format: {"company": "CompanyName", "jobTitle": "MainTitle", '
    '"titleVariations": ["alt1", "alt2", "alt3"]}'
)

QUERY_PARSING_USER_TEMPLATE = (
    'Parse this job search query and provide alternatives: "{query}"\n\n'
    'For example, if searching for "director at OpenAI", the title variations might include: '
    '"Head of", "VP", "Vice President", "Lead", etc. Consider what title variations that '
    "specific company might use."
)

_COMPANY_RE = re.compile(r"(?:at|@)\s+([A-Z][a-zA-Z0-9\s&.]+?)(?:\s|$)", re.IGNORECASE)
_AT_SPLIT_RE = re.compile(r"\s+(?:at|@)\s+", re.IGNORECASE)


def extract_company_from_query(query: str) -> str:
    """Company after "at"/"@", e.g. "data scientists at OpenAI" -> "OpenAI"."""
    m = _COMPANY_RE.search(query or "")
    if m and m.group(1):
        return m.group(1).strip()
    return ""


def extract_job_title_from_query(query: str) -> str:
    """Lower-cased text before the first "at"/"@", e.g. "Data Scientists at OpenAI" -> "data scientists"."""
    before_at = _AT_SPLIT_RE.split(query or "", maxsplit=1)[0].strip()
    return before_at.lower()


class QueryInterpreter:
    """Derive the target company and title from a free-text query.

    With an LLM collaborator the model's non-empty fields win over the regex
    baseline and its title variations are carried along for matching. Any
    failure on the LLM path falls back to the baseline; this never raises.
    """

    def __init__(self, llm: Optional[LLMClientPort] = None) -> None:
        self.llm = llm

    def interpret(self, query: str) -> ParsedQuery:
        baseline = ParsedQuery(
            company=extract_company_from_query(query),
            job_title=extract_job_title_from_query(query),
        )
        if self.llm is None:
            logging.debug("No LLM configured, using regex query parsing")
            return baseline

        enhanced = self._parse_with_llm(query)
        if enhanced is None:
            return baseline

        parsed = ParsedQuery(
            company=enhanced.company or baseline.company,
            job_title=enhanced.job_title or baseline.job_title,
            title_variations=enhanced.title_variations,
        )
        logging.info(
            f"LLM parsed query: company={parsed.company!r} title={parsed.job_title!r} "
            f"variations={parsed.title_variations}"
        )
        return parsed

    def _parse_with_llm(self, query: str) -> Optional[ParsedQuery]:
        try:
            raw = self.llm.complete(
                QUERY_PARSING_SYSTEM_PROMPT,
                QUERY_PARSING_USER_TEMPLATE.format(query=query),
            )
        except Exception as e:
            logging.warning(f"LLM query parsing failed: {e}", extra={"step": "interpret_query", "status": "error"})
            return None

        data = extract_json(raw)
        if data is None:
            logging.warning(f"LLM reply was not valid JSON: {(raw or '')[:200]!r}", extra={"step": "interpret_query", "status": "error"})
            return None
        try:
            return ParsedQuery.model_validate(data)
        except ValueError as e:
            logging.warning(f"LLM reply had an unexpected shape: {e}", extra={"step": "interpret_query", "status": "error"})
            return None


def interpret(query: str, synonym_source: Optional[LLMClientPort] = None) -> ParsedQuery:
    return QueryInterpreter(synonym_source).interpret(query)
