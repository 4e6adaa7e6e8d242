"""
Composite candidate scoring and ranking.

Each candidate is scored on five independent dimensions (title, skills,
location, client experience, seniority). The weighted sum is the
composite score used for thresholding and ranking.
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor, as_completed
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from ..config import Settings
from ..logger import StructuredLogger, get_logger
from ..models import (
    CandidateProfile,
    ClientMatch,
    EmploymentHistory,
    JobOpening,
    LocationMatch,
    MatchResult,
    SeniorityMatch,
    SkillMatch,
    TitleMatch,
)
from .clients import match_client_experience
from .location import match_location
from .seniority import match_seniority_level
from .skills import match_skills
from .titles import match_title

DIMENSIONS = ("title", "skill", "location", "client", "seniority")

DEFAULT_WEIGHTS = MappingProxyType({
    "title": 0.25,
    "skill": 0.35,
    "location": 0.15,
    "client": 0.15,
    "seniority": 0.10,
})

DEFAULT_MIN_THRESHOLD = 0.3
DEFAULT_LIMIT = 10
TITLE_REASON_THRESHOLD = 0.6
LOCATION_REASON_THRESHOLD = 0.5

# Neutral results used when a dimension cannot be computed for a candidate
FALLBACKS: Mapping[str, Callable[[], object]] = MappingProxyType({
    "title": TitleMatch,
    "skill": SkillMatch,
    "location": lambda: LocationMatch(score=0.0),
    "client": ClientMatch,
    "seniority": lambda: SeniorityMatch(score=0.5),
})


def validate_weights(weights: Mapping[str, float]) -> Mapping[str, float]:
    """
    Check a weight table covers every dimension and sums to 1.0.

    Returns:
        Read-only copy of the weights

    Raises:
        ValueError: If a dimension is missing or unknown, a weight is
            negative, or the weights do not sum to 1.0
    """
    if set(weights) != set(DIMENSIONS):
        raise ValueError(f"Weights must cover exactly {', '.join(DIMENSIONS)}")
    if any(w < 0 for w in weights.values()):
        raise ValueError("Weights must be non-negative")
    total = sum(weights.values())
    if not math.isclose(total, 1.0, abs_tol=1e-9):
        raise ValueError(f"Weights must sum to 1.0, got {total}")
    return MappingProxyType(dict(weights))


def to_percent(composite: float) -> int:
    """Composite in [0, 1] to an integer percentage, rounding halves up."""
    return max(0, min(100, math.floor(composite * 100 + 0.5)))


def build_reasons(
    title: TitleMatch,
    skills: SkillMatch,
    location: LocationMatch,
    client: ClientMatch,
    seniority: SeniorityMatch,
) -> List[str]:
    reasons = []
    if title.score > TITLE_REASON_THRESHOLD and title.matched_title:
        reasons.append(f"Similar job title: {title.matched_title}")
    if skills.matched_skills:
        reasons.append(f"Matches {len(skills.matched_skills)} required skills")
        if skills.client_focus_matches:
            reasons.append(f"Matches {len(skills.client_focus_matches)} client focus areas")
    if location.score > LOCATION_REASON_THRESHOLD and location.description:
        reasons.append(location.description)
    if client.reason:
        reasons.append(client.reason)
    if seniority.seniority_note:
        reasons.append(seniority.seniority_note)
    return reasons


class CandidateScorer:
    """Scores candidates against one job and ranks the pool."""

    def __init__(
        self,
        weights: Optional[Mapping[str, float]] = None,
        max_workers: int = 8,
        logger: Optional[StructuredLogger] = None,
        current_year: Optional[int] = None,
    ):
        if max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        self.weights = validate_weights(weights if weights is not None else DEFAULT_WEIGHTS)
        self.max_workers = max_workers
        self.logger = logger or get_logger()
        self.current_year = current_year

    def _guarded(self, dimension: str, candidate_id: str, func, *args):
        try:
            return func(*args)
        except Exception as e:
            self.logger.warning(
                f"{dimension} extraction failed; using neutral score",
                candidate_id=candidate_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            self.logger.record_extraction_failure(type(e).__name__)
            return FALLBACKS[dimension]()

    def score_candidate(
        self,
        job: JobOpening,
        candidate: CandidateProfile,
        history: Optional[EmploymentHistory],
    ) -> MatchResult:
        """Score one candidate on every dimension and combine."""
        if history is None:
            history = EmploymentHistory(candidate_id=candidate.id)
        cid = candidate.id

        title = self._guarded("title", cid, match_title, job.title, history.titles)
        skills = self._guarded(
            "skill", cid, match_skills, job.requirements_text, history.skills, job.client_focus
        )
        location = self._guarded(
            "location", cid, match_location, job.city, job.state, job.mode, candidate.location
        )
        client = self._guarded(
            "client", cid, match_client_experience, job.client_name, history.organizations
        )
        seniority = self._guarded(
            "seniority", cid, match_seniority_level,
            job, history, candidate.years_hint, self.current_year,
        )

        sub_scores = {
            "title": title.score,
            "skill": skills.score,
            "location": location.score,
            "client": client.score,
            "seniority": seniority.score,
        }
        composite = sum(self.weights[d] * min(1.0, max(0.0, sub_scores[d])) for d in DIMENSIONS)
        composite = min(1.0, max(0.0, composite))

        return MatchResult(
            candidate_id=cid,
            candidate_name=candidate.name,
            score=to_percent(composite),
            composite=composite,
            reasons=build_reasons(title, skills, location, client, seniority),
            title=title,
            skills=skills,
            location=location,
            client=client,
            seniority=seniority,
        )

    def rank_pool(
        self,
        job: JobOpening,
        candidates: Iterable[CandidateProfile],
        histories: Mapping[str, EmploymentHistory],
        min_threshold: float = DEFAULT_MIN_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
    ) -> List[MatchResult]:
        """
        Score an in-memory candidate pool and return the best matches.

        Candidates are scored concurrently. Results at or above
        ``min_threshold`` are sorted by composite score, highest first,
        with ties broken by candidate id, then truncated to ``limit``.
        """
        _check_rank_args(min_threshold, limit)
        pool = list(candidates)
        results: List[MatchResult] = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self.score_candidate, job, c, histories.get(c.id)): c
                for c in pool
            }
            for future in as_completed(futures):
                result = future.result()
                included = result.composite >= min_threshold
                self.logger.record_candidate_scored(included)
                if included:
                    results.append(result)

        results.sort(key=lambda r: (-r.composite, r.candidate_id))
        self.logger.debug(
            "Ranked candidate pool",
            job_id=job.id,
            pool_size=len(pool),
            matched=len(results),
        )
        return results[:limit]

    def rank(
        self,
        store,
        job_id: str,
        min_threshold: float = DEFAULT_MIN_THRESHOLD,
        limit: int = DEFAULT_LIMIT,
    ) -> List[MatchResult]:
        """
        Rank the store's active candidates for a job.

        Args:
            store: Record store exposing get_job, list_candidates and
                list_all_employment_histories
            job_id: Job to rank candidates for
            min_threshold: Minimum composite score (0-1) to include
            limit: Maximum number of results

        Returns:
            MatchResult list, best first

        Raises:
            JobNotFoundError: If the job does not exist
            ValueError: If limit or min_threshold is out of range
        """
        _check_rank_args(min_threshold, limit)
        self.logger.record_rank_request()

        job = store.get_job(job_id)
        candidates = store.list_candidates()
        histories: Dict[str, EmploymentHistory] = {
            h.candidate_id: h for h in store.list_all_employment_histories()
        }
        self.logger.info(
            f"Ranking {len(candidates)} candidates for job {job_id}",
            min_threshold=min_threshold,
            limit=limit,
        )
        return self.rank_pool(job, candidates, histories, min_threshold, limit)


def _check_rank_args(min_threshold: float, limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    if not 0.0 <= min_threshold <= 1.0:
        raise ValueError(f"min_threshold must be between 0 and 1, got {min_threshold!r}")


def rank_candidates(
    store,
    job_id: str,
    min_threshold: Optional[float] = None,
    limit: Optional[int] = None,
    settings: Optional[Settings] = None,
    current_year: Optional[int] = None,
) -> List[MatchResult]:
    """Rank candidates for a job using the configured defaults."""
    settings = settings or Settings()
    scorer = CandidateScorer(max_workers=settings.max_workers, current_year=current_year)
    return scorer.rank(
        store,
        job_id,
        min_threshold=settings.min_threshold if min_threshold is None else min_threshold,
        limit=settings.limit if limit is None else limit,
    )
