"""
Bulk import of jobs and candidates from a JSON export.

Export shape:
    {"jobs": [{...}], "candidates": [{..., "history": {...}}]}
"""

from typing import Any, Dict

from .logger import get_logger
from .models import CandidateProfile, EmploymentHistory, JobOpening
from .schema import validate_candidate, validate_job
from .storage import RecordStore


def job_from_dict(data: Dict[str, Any]) -> JobOpening:
    state = data.get("state")
    return JobOpening(
        id=data["id"].strip(),
        title=data["title"].strip(),
        description=data.get("description") or "",
        client_name=data.get("client_name"),
        client_focus=data.get("client_focus"),
        city=data.get("city"),
        state=state.strip().upper() if state else None,
        mode=(data.get("mode") or "onsite").lower(),
    )


def candidate_from_dict(data: Dict[str, Any]) -> CandidateProfile:
    return CandidateProfile(
        id=data["id"].strip(),
        name=data["name"].strip(),
        location=data.get("location") or "",
        years_hint=data.get("years_hint"),
        is_invalidated=bool(data.get("is_invalidated", False)),
        invalidated_reason=data.get("invalidated_reason"),
    )


def history_from_dict(candidate_id: str, data: Dict[str, Any]) -> EmploymentHistory:
    return EmploymentHistory(
        candidate_id=candidate_id,
        organizations=list(data.get("organizations") or []),
        titles=list(data.get("titles") or []),
        date_phrases=list(data.get("date_phrases") or []),
        skills=list(data.get("skills") or []),
    )


def import_records(data: Dict[str, Any], store: RecordStore, dry_run: bool = False) -> Dict[str, int]:
    """
    Import an export into the store.

    Invalid records and ids that already exist are skipped, not fatal.

    Args:
        data: Parsed export
        store: Destination record store
        dry_run: Validate and count without writing

    Returns:
        Counts of created, skipped and invalid records
    """
    logger = get_logger()
    counts = {"jobs": 0, "candidates": 0, "histories": 0, "skipped": 0, "invalid": 0}

    for record in data.get("jobs", []):
        errors = validate_job(record)
        if errors:
            logger.warning("Skipping invalid job", id=record.get("id") if isinstance(record, dict) else None, errors=errors)
            counts["invalid"] += 1
            continue
        if dry_run:
            counts["jobs"] += 1
            continue
        try:
            store.create_job(job_from_dict(record))
            counts["jobs"] += 1
        except ValueError as e:
            logger.warning(f"Skipping job: {e}")
            counts["skipped"] += 1

    for record in data.get("candidates", []):
        errors = validate_candidate(record)
        if errors:
            logger.warning("Skipping invalid candidate", id=record.get("id") if isinstance(record, dict) else None, errors=errors)
            counts["invalid"] += 1
            continue
        candidate = candidate_from_dict(record)
        if dry_run:
            counts["candidates"] += 1
            if record.get("history") is not None:
                counts["histories"] += 1
            continue
        try:
            store.create_candidate(candidate)
            counts["candidates"] += 1
        except ValueError as e:
            logger.warning(f"Skipping candidate: {e}")
            counts["skipped"] += 1
            continue
        if record.get("history") is not None:
            store.save_employment_history(history_from_dict(candidate.id, record["history"]))
            counts["histories"] += 1

    logger.info("Import finished", dry_run=dry_run, **counts)
    return counts
