from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from config.settings import get_settings
from models import CrmSyncResult, ParsedQuery, Profile


def _api_usage_for_run(run_id: str) -> Dict[str, Dict[str, int]]:
    """Aggregate traced calls from API_LOG_PATH for the given run_id.

    Returns dict like { 'openai': {'calls': N, 'tokens': T}, 'exa': {...}, 'hubspot': {...} }
    """
    result: Dict[str, Dict[str, int]] = {}
    log_path = Path(get_settings().api_log_path)
    if not log_path.exists():
        return result
    with log_path.open("r", encoding="utf-8") as f:
        for line in f:
            try:
                rec = json.loads(line)
            except ValueError:
                continue
            if not isinstance(rec, dict) or rec.get("run_id") != run_id:
                continue
            provider = rec.get("provider") or "unknown"
            usage = rec.get("usage") or {}
            bucket = result.setdefault(provider, {"calls": 0, "tokens": 0})
            bucket["calls"] += 1
            try:
                bucket["tokens"] += int(usage.get("total_tokens") or 0)
            except (TypeError, ValueError):
                pass
    return result


def _print_api_usage() -> None:
    settings = get_settings()
    run_id = os.getenv("RUN_ID")
    if not (run_id and settings.api_trace):
        return
    usage = _api_usage_for_run(run_id)
    if usage:
        print("API Usage:")
        for provider, stats in usage.items():
            print(f"  {provider}: calls={stats.get('calls', 0)}, tokens={stats.get('tokens', 0)}")


def print_search_summary(query: str, parsed: Optional[ParsedQuery], profiles: List[Profile], meta: dict) -> None:
    """Print a human summary of one search run (stdout)."""
    print("\n" + "="*60)
    print("LINKEDIN PROFILE SEARCH - SUMMARY")
    print("="*60)
    print(f"Search Query: {query}")
    if parsed is not None:
        print(f"Target Company: {parsed.company or '-'}")
        print(f"Target Title: {parsed.job_title or '-'}")
        if parsed.title_variations:
            print(f"Title Variations: {', '.join(parsed.title_variations)}")
    print()
    print(f"Search Results: {meta.get('search_results', 0)}")
    print(f"Profile URLs: {meta.get('profiles_extracted', 0)}")
    print(f"Matching Profiles: {len(profiles)}")
    annotated = [p for p in profiles if p.in_hubspot is not None]
    if annotated:
        in_crm = sum(1 for p in annotated if p.in_hubspot)
        print(f"Already in HubSpot: {in_crm}/{len(annotated)}")
    _print_api_usage()
    print("="*60)


def print_export_summary(count: int, sync: Optional[CrmSyncResult], output_path: Optional[Path]) -> None:
    print("\n" + "="*60)
    print("LINKEDIN PROFILE EXPORT - SUMMARY")
    print("="*60)
    print(f"Exported Profiles: {count}")
    if sync is not None:
        print(f"HubSpot: created={sync.created}, updated={sync.updated}, failed={sync.failed}")
    else:
        print("HubSpot: skipped (no access token)")
    if output_path:
        print(f"Output File: {output_path}")
    _print_api_usage()
    print("="*60)
