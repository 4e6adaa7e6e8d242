from typing import Any, Dict, List

from .models import JOB_MODES
from .matching.location import STATE_TIME_ZONES

JOB_REQUIRED_STR_FIELDS = ["id", "title"]
JOB_OPTIONAL_STR_FIELDS = [
    "description",
    "client_name",
    "client_focus",
    "city",
    "state",
    "mode",
]

CANDIDATE_REQUIRED_STR_FIELDS = ["id", "name"]
CANDIDATE_OPTIONAL_STR_FIELDS = ["location", "invalidated_reason"]

HISTORY_LIST_FIELDS = ["organizations", "titles", "date_phrases", "skills"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _check_strings(data: Dict[str, Any], required: List[str], optional: List[str]) -> List[str]:
    errors: List[str] = []
    for f in required:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")
    for f in optional:
        if f in data and data[f] is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")
    return errors


def validate_job(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Job record must be an object"]
    errors = _check_strings(data, JOB_REQUIRED_STR_FIELDS, JOB_OPTIONAL_STR_FIELDS)

    mode = data.get("mode")
    if isinstance(mode, str) and mode.lower() not in JOB_MODES:
        errors.append(f"Field 'mode' must be one of: {', '.join(JOB_MODES)}")

    state = data.get("state")
    if _is_non_empty_str(state) and state.strip().upper() not in STATE_TIME_ZONES:
        errors.append("Field 'state' must be a two-letter US state code")

    return errors


def validate_history(data: Dict[str, Any]) -> List[str]:
    if not isinstance(data, dict):
        return ["Field 'history' must be an object"]
    errors: List[str] = []
    for f in HISTORY_LIST_FIELDS:
        if f not in data or data[f] is None:
            continue
        value = data[f]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            errors.append(f"Field '{f}' must be a list of strings")
    return errors


def validate_candidate(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    A nested 'history' object is validated too.
    """
    if not isinstance(data, dict):
        return ["Candidate record must be an object"]
    errors = _check_strings(data, CANDIDATE_REQUIRED_STR_FIELDS, CANDIDATE_OPTIONAL_STR_FIELDS)

    years = data.get("years_hint")
    if years is not None and (isinstance(years, bool) or not isinstance(years, int) or years < 0):
        errors.append("Field 'years_hint' must be a non-negative integer if provided")

    if "is_invalidated" in data and not isinstance(data["is_invalidated"], bool):
        errors.append("Field 'is_invalidated' must be a boolean if provided")

    if data.get("history") is not None:
        errors.extend(validate_history(data["history"]))

    return errors


def validate_export(data: Dict[str, Any]) -> List[str]:
    """Validate a full {"jobs": [...], "candidates": [...]} export."""
    if not isinstance(data, dict):
        return ["Export must be an object with 'jobs' and/or 'candidates'"]
    errors: List[str] = []
    for key, validator in (("jobs", validate_job), ("candidates", validate_candidate)):
        records = data.get(key, [])
        if not isinstance(records, list):
            errors.append(f"Field '{key}' must be a list")
            continue
        for i, record in enumerate(records):
            errors.extend(f"{key}[{i}]: {e}" for e in validator(record))
    return errors
