"""
Employment-history similarity detection.

Compares one employment history (organizations and date ranges) against
every stored history to surface candidates whose work history duplicates
another's. Near-identical histories are a common sign of fabricated
resumes, so the results feed a validation report with suspicious patterns.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .config import Settings
from .logger import StructuredLogger, get_logger
from .models import EmploymentHistory, SimilarityMatch
from .normalize import ORG_KEY_WORDS, normalize_date_phrase, normalize_organization

COMPANY_WEIGHT = 0.7
DATE_WEIGHT = 0.3
DEFAULT_SIMILARITY_FLOOR = 50


@dataclass
class SuspiciousPattern:
    type: str
    severity: str
    message: str
    detail: str

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "severity": self.severity,
            "message": self.message,
            "detail": self.detail,
        }


@dataclass
class HistoryValidationReport:
    message: str
    total_candidates_checked: int
    high_similarity_matches: List[SimilarityMatch] = field(default_factory=list)
    identical_chronology_matches: List[SimilarityMatch] = field(default_factory=list)
    suspicious_patterns: List[SuspiciousPattern] = field(default_factory=list)
    candidate_names: Dict[str, str] = field(default_factory=dict)

    @property
    def has_similar_histories(self) -> bool:
        return bool(self.high_similarity_matches)

    @property
    def has_identical_chronology(self) -> bool:
        return bool(self.identical_chronology_matches)

    def to_dict(self) -> dict:
        def with_name(match: SimilarityMatch) -> dict:
            data = match.to_dict()
            data["candidate_name"] = self.candidate_names.get(
                match.candidate_id, f"Unknown (ID: {match.candidate_id})"
            )
            return data

        return {
            "message": self.message,
            "has_similar_histories": self.has_similar_histories,
            "has_identical_chronology": self.has_identical_chronology,
            "high_similarity_matches": [with_name(m) for m in self.high_similarity_matches],
            "identical_chronology_matches": [
                with_name(m) for m in self.identical_chronology_matches
            ],
            "total_candidates_checked": self.total_candidates_checked,
            "suspicious_patterns": [p.to_dict() for p in self.suspicious_patterns],
        }


def _match_indices(target_keys: Sequence[str], candidate_keys: Sequence[str]) -> List[int]:
    # Each target entry takes the first candidate position not before the
    # previous match, falling back to the earliest position overall.
    indices = []
    previous = None
    for key in target_keys:
        if not key:
            continue
        positions = [i for i, k in enumerate(candidate_keys) if k == key]
        if not positions:
            continue
        if previous is not None:
            later = [p for p in positions if p >= previous]
            index = later[0] if later else positions[0]
        else:
            index = positions[0]
        indices.append(index)
        previous = index
    return indices


def _date_match_percentage(
    target_tokens: Sequence[Sequence[str]],
    candidate_tokens: Sequence[Sequence[str]],
) -> float:
    total = sum(len(tokens) for tokens in target_tokens)
    if total == 0:
        return 0.0
    matched = 0
    for target in target_tokens:
        for candidate in candidate_tokens:
            present = set(candidate)
            matched += sum(1 for token in target if token in present)
    return min(100.0, matched / total * 100)


def compare_histories(
    target_keys: Sequence[str],
    target_tokens: Sequence[Sequence[str]],
    history: EmploymentHistory,
    org_key_words: int = ORG_KEY_WORDS,
) -> SimilarityMatch:
    """Score one stored history against pre-normalized target features."""
    candidate_keys = [normalize_organization(o, org_key_words) for o in history.organizations]
    candidate_tokens = [normalize_date_phrase(d) for d in history.date_phrases]

    indices = _match_indices(target_keys, candidate_keys)
    in_order = all(a <= b for a, b in zip(indices, indices[1:]))
    company_pct = len(indices) / len(target_keys) * 100 if target_keys else 0.0
    date_pct = _date_match_percentage(target_tokens, candidate_tokens)

    similarity = math.floor(company_pct * COMPANY_WEIGHT + date_pct * DATE_WEIGHT + 0.5)
    return SimilarityMatch(
        candidate_id=history.candidate_id,
        similarity=min(100, similarity),
        organizations=list(history.organizations),
        date_phrases=list(history.date_phrases),
        company_match_percentage=company_pct,
        date_match_percentage=date_pct,
        chronology_in_order=in_order,
    )


def find_similar_histories(
    target_organizations: Iterable[str],
    target_dates: Optional[Iterable[str]],
    histories: Iterable[EmploymentHistory],
    exclude_candidate_id: Optional[str] = None,
    org_key_words: int = ORG_KEY_WORDS,
    floor: int = DEFAULT_SIMILARITY_FLOOR,
) -> List[SimilarityMatch]:
    """
    Find stored histories that resemble a target history.

    Only histories sharing at least one organization key with the target
    are scored, so a history that overlaps on dates alone never surfaces.

    Args:
        target_organizations: Employers to check, most recent first
        target_dates: Date phrases aligned with the employers
        histories: Histories to compare against
        exclude_candidate_id: Candidate whose own history is skipped
        org_key_words: Leading words kept in organization keys
        floor: Minimum similarity (0-100) to report

    Returns:
        SimilarityMatch list, most similar first, ties by candidate id
    """
    # Blank entries stay in the denominator but never match
    target_keys = [normalize_organization(o, org_key_words) for o in target_organizations or []]
    target_key_set = {key for key in target_keys if key}
    if not target_key_set:
        return []
    target_tokens = [normalize_date_phrase(d) for d in (target_dates or [])]

    matches = []
    for history in histories:
        if exclude_candidate_id is not None and history.candidate_id == exclude_candidate_id:
            continue
        if history.is_empty():
            continue
        candidate_keys = {normalize_organization(o, org_key_words) for o in history.organizations}
        if not target_key_set & candidate_keys:
            continue
        match = compare_histories(target_keys, target_tokens, history, org_key_words)
        if match.similarity >= floor:
            matches.append(match)

    matches.sort(key=lambda m: (-m.similarity, m.candidate_id))
    return matches


def detect_similar_histories(
    store,
    organizations: Sequence[str],
    dates: Optional[Sequence[str]] = None,
    exclude_candidate_id: Optional[str] = None,
    settings: Optional[Settings] = None,
    logger: Optional[StructuredLogger] = None,
) -> List[SimilarityMatch]:
    """Compare a history against every history in the store (one bulk read)."""
    settings = settings or Settings()
    logger = logger or get_logger()

    histories = store.list_all_employment_histories()
    matches = find_similar_histories(
        organizations,
        dates or [],
        histories,
        exclude_candidate_id=exclude_candidate_id,
        org_key_words=settings.org_key_words,
        floor=settings.similarity_floor,
    )
    flagged = sum(1 for m in matches if m.is_high_similarity)
    logger.record_similarity_check(compared=len(histories), flagged=flagged)
    logger.info(
        f"Similarity check found {len(matches)} similar histories",
        exclude_candidate_id=exclude_candidate_id,
        high_similarity=flagged,
    )
    return matches


def validate_employment_history(
    store,
    organizations: Sequence[str],
    dates: Optional[Sequence[str]] = None,
    exclude_candidate_id: Optional[str] = None,
    settings: Optional[Settings] = None,
    logger: Optional[StructuredLogger] = None,
) -> HistoryValidationReport:
    """
    Build a fraud-review report for an employment history.

    Raises:
        ValueError: If no organizations are given
    """
    if not organizations or not any(isinstance(o, str) and o.strip() for o in organizations):
        raise ValueError("organizations must be a non-empty list")
    logger = logger or get_logger()

    matches = detect_similar_histories(
        store, organizations, dates, exclude_candidate_id, settings=settings, logger=logger
    )
    high = [m for m in matches if m.is_high_similarity]
    identical = [m for m in matches if m.has_identical_chronology]

    patterns = []
    if identical:
        patterns.append(SuspiciousPattern(
            type="IDENTICAL_CHRONOLOGY",
            severity="HIGH",
            message=f"{len(identical)} other candidate(s) have identical employer sequence and dates",
            detail=(
                "Same companies in same order with matching employment dates strongly "
                "suggests resume fraud. Consider rejecting this candidate or requiring "
                "additional verification."
            ),
        ))
    if high:
        patterns.append(SuspiciousPattern(
            type="HIGH_SIMILARITY",
            severity="MEDIUM",
            message=f"{len(high)} other candidate(s) have >80% matching employment histories",
            detail=(
                "Extremely similar work histories may indicate resume fraud, template "
                "usage, or legitimate similar career paths. Review carefully and compare "
                "specific details."
            ),
        ))

    if identical:
        message = (
            f"CRITICAL: Found {len(identical)} candidates with identical job chronology. "
            "This is a high fraud risk pattern."
        )
        logger.warning(message, exclude_candidate_id=exclude_candidate_id)
    elif high:
        message = (
            f"WARNING: Found {len(high)} candidates with >80% similar employment history. "
            "Review carefully."
        )
        logger.warning(message, exclude_candidate_id=exclude_candidate_id)
    else:
        message = "Employment history validation complete"

    names = {}
    if high or identical:
        names = {c.id: c.name for c in store.list_candidates(include_invalidated=True)}

    return HistoryValidationReport(
        message=message,
        total_candidates_checked=len(matches),
        high_similarity_matches=high,
        identical_chronology_matches=identical,
        suspicious_patterns=patterns,
        candidate_names=names,
    )
