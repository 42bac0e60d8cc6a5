import argparse
import json
import os
import sys
import uuid as _uuid
from pathlib import Path

import profile_searcher
from config.settings import get_settings
from pipelines.export_pipeline import run_export
from pipelines.search_pipeline import run_search
from services import hubspot_client, llm_client
from services.reporting import print_export_summary, print_search_summary
from utils.logging_setup import init_logging


def _ensure_run_id() -> None:
    if not os.getenv("RUN_ID"):
        os.environ["RUN_ID"] = _uuid.uuid4().hex


def _fail(message: str, code: int) -> None:
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(code)


def cmd_search(args):
    settings = get_settings()
    _ensure_run_id()
    try:
        searcher = profile_searcher.ProfileSearcher(settings)
    except ValueError as e:
        _fail(str(e), 2)
    llm = None if args.no_llm else llm_client.build_llm_client(settings)
    crm = None if args.no_crm else hubspot_client.build_crm_client(settings)

    try:
        ctx = run_search(
            args.query,
            searcher,
            llm=llm,
            crm=crm,
            settings=settings,
            strict=True if args.strict_titles else None,
        )
    except ValueError as e:
        _fail(str(e), 2)
    except profile_searcher.SearchFailed as e:
        _fail(str(e), 1)

    payload = {"profiles": [p.to_public_dict() for p in ctx.people]}
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        print_search_summary(ctx.query, ctx.parsed, ctx.people, ctx.meta)
        print(f"Output File: {out}")
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False))


def _load_selection(path: str):
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ValueError(f"Could not read profiles from {path}: {e}") from e
    if isinstance(data, dict):
        return data.get("profiles")
    return data


def cmd_export(args):
    settings = get_settings()
    _ensure_run_id()
    crm = None if args.no_crm else hubspot_client.build_crm_client(settings)
    try:
        selection = _load_selection(args.input)
        ctx = run_export(
            selection,
            crm=crm,
            output_dir=args.output_dir or settings.export_dir,
            filename=args.filename,
            settings=settings,
        )
    except ValueError as e:
        _fail(str(e), 2)
    print_export_summary(len(ctx.people), ctx.meta.get("crm_sync"), ctx.output_path)


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="LinkedIn profile finder")
    parser.add_argument('--log-level', '-l', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default=settings.log_level, help='Set logging level (default: from settings)')
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_search = sub.add_parser("search", help="Find LinkedIn profiles matching a free-text query")
    p_search.add_argument('--query', '-q', required=True, help='e.g. "data scientists at OpenAI"')
    p_search.add_argument('--output', '-o', help='Write profiles JSON here instead of stdout')
    p_search.add_argument('--no-llm', action='store_true', help='Regex query parsing only, even if OPENAI_API_KEY is set')
    p_search.add_argument('--no-crm', action='store_true', help='Skip the HubSpot duplicate check')
    p_search.add_argument('--strict-titles', action='store_true',
                          help='Require an exact shared word in the last-resort title match')
    p_search.set_defaults(func=cmd_search)

    p_export = sub.add_parser("export", help="Upsert selected profiles into HubSpot and write a CSV")
    p_export.add_argument('--input', '-i', required=True, help='Profiles JSON (array or {"profiles": [...]})')
    p_export.add_argument('--output-dir', help='Directory for the CSV (default: EXPORT_DIR)')
    p_export.add_argument('--filename', help='CSV file name (default: profiles_<epoch ms>.csv)')
    p_export.add_argument('--no-crm', action='store_true', help='Write the CSV without touching HubSpot')
    p_export.set_defaults(func=cmd_export)

    args = parser.parse_args()
    init_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
