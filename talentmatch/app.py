import argparse
import json
from dataclasses import replace
from pathlib import Path

from . import __version__
from .config import load_settings
from .env import load_env
from .ingest import import_records
from .logger import get_logger
from .matching.scorer import rank_candidates
from .schema import validate_export
from .similarity import validate_employment_history
from .storage import CandidateNotFoundError, JobNotFoundError, RecordStore


def _split_list(value):
    # Organization names can contain commas, so lists are ';'-separated
    if not value:
        return []
    return [part.strip() for part in value.split(";") if part.strip()]


def _read_json(path_arg: str):
    input_path = Path(path_arg)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SystemExit(f"Invalid JSON in {input_path}: {e}")


def cmd_init_db(args: argparse.Namespace) -> None:
    RecordStore(args.settings.db_path).close()
    print(f"Database ready: {args.settings.db_path}")


def cmd_validate(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    errors = validate_export(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_load(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    if not isinstance(data, dict):
        raise SystemExit("Export must be a JSON object with 'jobs' and/or 'candidates'")
    with RecordStore(args.settings.db_path) as store:
        counts = import_records(data, store, dry_run=args.dry_run)
    prefix = "[dry-run] " if args.dry_run else ""
    print(
        f"{prefix}Done. jobs={counts['jobs']} candidates={counts['candidates']} "
        f"histories={counts['histories']} skipped={counts['skipped']} invalid={counts['invalid']}"
    )


def cmd_rank(args: argparse.Namespace) -> None:
    with RecordStore(args.settings.db_path) as store:
        try:
            results = rank_candidates(
                store,
                args.job_id,
                min_threshold=args.threshold,
                limit=args.limit,
                settings=args.settings,
            )
        except JobNotFoundError as e:
            raise SystemExit(str(e))
        except ValueError as e:
            raise SystemExit(f"Invalid arguments: {e}")

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return
    if not results:
        print("No candidates above threshold.")
        return
    print(f"Top {len(results)} candidates for job {args.job_id}:\n")
    for i, r in enumerate(results, 1):
        print(f"{i}. {r.candidate_name} ({r.candidate_id}) - {r.score}%")
        for reason in r.reasons:
            print(f"   - {reason}")


def cmd_check_history(args: argparse.Namespace) -> None:
    exclude = None
    with RecordStore(args.settings.db_path) as store:
        if args.candidate_id:
            history = store.get_employment_history(args.candidate_id)
            if history is None:
                raise SystemExit(f"No employment history for candidate {args.candidate_id}")
            organizations, dates = history.organizations, history.date_phrases
            exclude = args.candidate_id
        else:
            organizations, dates = _split_list(args.orgs), _split_list(args.dates)

        try:
            report = validate_employment_history(
                store, organizations, dates, exclude_candidate_id=exclude, settings=args.settings
            )
        except ValueError as e:
            raise SystemExit(str(e))

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return
    print(report.message)
    for pattern in report.suspicious_patterns:
        print(f"[{pattern.severity}] {pattern.type}: {pattern.message}")
        print(f"    {pattern.detail}")
    for match in report.high_similarity_matches:
        name = report.candidate_names.get(match.candidate_id, "Unknown")
        print(f" - {name} ({match.candidate_id}): {match.similarity}% similar")


def cmd_list_candidates(args: argparse.Namespace) -> None:
    with RecordStore(args.settings.db_path) as store:
        candidates = store.list_candidates(include_invalidated=args.all)
    if not candidates:
        print("No candidates in store.")
        return
    print(f"Found {len(candidates)} candidates in {args.settings.db_path}:\n")
    for c in candidates:
        flag = " [invalidated]" if c.is_invalidated else ""
        print(f"ID: {c.id}{flag}")
        print(f"  Name: {c.name}")
        print(f"  Location: {c.location or 'Unknown'}")
        if c.invalidated_reason:
            print(f"  Reason: {c.invalidated_reason}")
        print()


def cmd_mark_invalid(args: argparse.Namespace) -> None:
    with RecordStore(args.settings.db_path) as store:
        try:
            candidate = store.mark_candidate_invalidated(args.candidate_id, args.reason)
        except CandidateNotFoundError as e:
            raise SystemExit(str(e))
    print(f"Candidate {candidate.id} marked invalid: {candidate.invalidated_reason}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="talentmatch", description="Candidate matching and history checks")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", help="Path to SQLite database (default: TALENTMATCH_DB or data/talentmatch.db)")

    subparsers = parser.add_subparsers(dest="command")
    init = subparsers.add_parser("init-db", help="Create the database tables")
    init.set_defaults(func=cmd_init_db)

    val = subparsers.add_parser("validate", help="Validate a JSON export without importing it")
    val.add_argument("--input", required=True, help="Path to JSON export")
    val.set_defaults(func=cmd_validate)

    load = subparsers.add_parser("load", help="Import jobs and candidates from a JSON export")
    load.add_argument("--input", required=True, help="Path to JSON export")
    load.add_argument("--dry-run", action="store_true", help="Validate and count without writing")
    load.set_defaults(func=cmd_load)

    rank = subparsers.add_parser("rank", help="Rank candidates for a job")
    rank.add_argument("--job-id", required=True, help="Job id to rank candidates for")
    rank.add_argument("--threshold", type=float, help="Minimum composite score 0-1 (default 0.3)")
    rank.add_argument("--limit", type=int, help="Maximum results (default 10)")
    rank.add_argument("--json", action="store_true", help="Print results as JSON")
    rank.set_defaults(func=cmd_rank)

    chk = subparsers.add_parser("check-history", help="Look for candidates with near-identical employment history")
    source = chk.add_mutually_exclusive_group(required=True)
    source.add_argument("--candidate-id", help="Check a stored candidate's history")
    source.add_argument("--orgs", help="Semicolon-separated employers, most recent first")
    chk.add_argument("--dates", help="Semicolon-separated date ranges aligned with --orgs")
    chk.add_argument("--json", action="store_true", help="Print the report as JSON")
    chk.set_defaults(func=cmd_check_history)

    lst = subparsers.add_parser("list-candidates", help="List stored candidates")
    lst.add_argument("--all", action="store_true", help="Include invalidated candidates")
    lst.set_defaults(func=cmd_list_candidates)

    inv = subparsers.add_parser("mark-invalid", help="Exclude a candidate from future rankings")
    inv.add_argument("--candidate-id", required=True, help="Candidate id")
    inv.add_argument("--reason", required=True, help="Why the candidate is invalidated")
    inv.set_defaults(func=cmd_mark_invalid)

    return parser


def main(argv=None):
    # Load .env if present (TALENTMATCH_DB, TALENTMATCH_LOG_LEVEL, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    try:
        settings = load_settings()
    except ValueError as e:
        raise SystemExit(f"Configuration error: {e}")
    if args.db:
        settings = replace(settings, db_path=Path(args.db))
    args.settings = settings
    get_logger(level=settings.log_level, log_dir=settings.log_dir)

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
