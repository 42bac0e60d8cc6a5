from __future__ import annotations

from typing import Optional

from config.settings import Settings, get_settings
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import AnnotateCrm, ExtractProfiles, FilterMatches, InterpretQuery, SearchProfiles, ValidateQuery
from ports.crm import CrmClientPort
from ports.llm import LLMClientPort
from ports.search import SearchClientPort
from services.dedup_annotator import DedupAnnotator
from services.query_interpreter import QueryInterpreter


def build_search_pipeline(
    searcher: SearchClientPort,
    llm: Optional[LLMClientPort] = None,
    crm: Optional[CrmClientPort] = None,
    settings: Optional[Settings] = None,
    strict: Optional[bool] = None,
) -> Pipeline:
    """query -> parsed query -> search -> extract -> match -> CRM annotation.

    ``llm`` selects the LLM-assisted variant of query parsing; without it the
    regex baseline is used. Without ``crm`` the annotation step is a no-op.
    """
    settings = settings or get_settings()
    annotator = None
    if crm is not None:
        annotator = DedupAnnotator(
            crm,
            batch_size=settings.crm_batch_size,
            pause_seconds=settings.crm_batch_pause_seconds,
        )
    return Pipeline([
        ValidateQuery(),
        InterpretQuery(QueryInterpreter(llm)),
        SearchProfiles(searcher),
        ExtractProfiles(),
        FilterMatches(strict=settings.strict_title_match if strict is None else strict),
        AnnotateCrm(annotator),
    ])


def run_search(query: str, searcher: SearchClientPort, **kwargs) -> RunContext:
    """Run one search request; raises ValueError (bad query) or SearchFailed (provider down)."""
    return build_search_pipeline(searcher, **kwargs).run(RunContext(query=query))
