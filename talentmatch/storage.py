"""
Record store backed by the SQLite database.

Reads return the immutable dataclasses from models.py so the matching
code never touches ORM rows or open sessions.
"""

from pathlib import Path
from typing import Any, List, Optional

from sqlalchemy.orm import sessionmaker

from .database import Candidate, EmploymentHistoryRecord, Job, get_engine, init_database
from .models import JOB_MODES, CandidateProfile, EmploymentHistory, JobOpening


class JobNotFoundError(LookupError):
    """Raised when a job id has no matching record."""


class CandidateNotFoundError(LookupError):
    """Raised when a candidate id has no matching record."""


def _str_list(value: Any) -> List[str]:
    # JSON columns may hold anything an import wrote; keep only usable strings
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


def _to_job(row: Job) -> JobOpening:
    return JobOpening(
        id=row.id,
        title=row.title or "",
        description=row.description or "",
        client_name=row.client_name,
        client_focus=row.client_focus,
        city=row.city,
        state=row.state,
        mode=row.mode or "onsite",
    )


def _to_candidate(row: Candidate) -> CandidateProfile:
    return CandidateProfile(
        id=row.id,
        name=row.name,
        location=row.location or "",
        years_hint=row.years_hint,
        is_invalidated=bool(row.is_invalidated),
        invalidated_reason=row.invalidated_reason,
    )


def _to_history(row: EmploymentHistoryRecord) -> EmploymentHistory:
    return EmploymentHistory(
        candidate_id=row.candidate_id,
        organizations=_str_list(row.organizations),
        titles=_str_list(row.titles),
        date_phrases=_str_list(row.date_phrases),
        skills=_str_list(row.skills),
    )


class RecordStore:
    """Jobs, candidates and employment histories in one SQLite file."""

    def __init__(self, db_path: Path, create: bool = True):
        self.db_path = Path(db_path)
        if create:
            init_database(self.db_path)
        self.engine = get_engine(self.db_path)
        self._sessionmaker = sessionmaker(bind=self.engine)

    def _session(self):
        return self._sessionmaker()

    def close(self) -> None:
        """Release pooled connections held by this store."""
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # Jobs

    def create_job(self, job: JobOpening) -> JobOpening:
        """
        Insert a new job opening.

        Raises:
            ValueError: If the id already exists or the mode is unknown
        """
        if job.mode not in JOB_MODES:
            raise ValueError(f"Unknown job mode: {job.mode!r}")
        with self._session() as session:
            if session.get(Job, job.id) is not None:
                raise ValueError(f"Job already exists: {job.id}")
            session.add(Job(
                id=job.id,
                title=job.title,
                description=job.description or "",
                client_name=job.client_name,
                client_focus=job.client_focus,
                city=job.city,
                state=job.state.upper() if job.state else None,
                mode=job.mode,
            ))
            session.commit()
        return job

    def get_job(self, job_id: str) -> JobOpening:
        with self._session() as session:
            row = session.get(Job, job_id)
            if row is None:
                raise JobNotFoundError(f"Job not found: {job_id}")
            return _to_job(row)

    def list_jobs(self) -> List[JobOpening]:
        with self._session() as session:
            return [_to_job(row) for row in session.query(Job).order_by(Job.id)]

    # Candidates

    def create_candidate(self, candidate: CandidateProfile) -> CandidateProfile:
        """
        Insert a new candidate profile.

        Raises:
            ValueError: If the id already exists
        """
        with self._session() as session:
            if session.get(Candidate, candidate.id) is not None:
                raise ValueError(f"Candidate already exists: {candidate.id}")
            session.add(Candidate(
                id=candidate.id,
                name=candidate.name,
                location=candidate.location or "",
                years_hint=candidate.years_hint,
                is_invalidated=candidate.is_invalidated,
                invalidated_reason=candidate.invalidated_reason,
            ))
            session.commit()
        return candidate

    def get_candidate(self, candidate_id: str) -> CandidateProfile:
        with self._session() as session:
            row = session.get(Candidate, candidate_id)
            if row is None:
                raise CandidateNotFoundError(f"Candidate not found: {candidate_id}")
            return _to_candidate(row)

    def list_candidates(self, include_invalidated: bool = False) -> List[CandidateProfile]:
        """
        List candidate profiles ordered by id.

        Invalidated candidates are left out unless asked for, so ranking
        never sees them.
        """
        with self._session() as session:
            query = session.query(Candidate)
            if not include_invalidated:
                query = query.filter(Candidate.is_invalidated.is_(False))
            return [_to_candidate(row) for row in query.order_by(Candidate.id)]

    def mark_candidate_invalidated(self, candidate_id: str, reason: str) -> CandidateProfile:
        with self._session() as session:
            row = session.get(Candidate, candidate_id)
            if row is None:
                raise CandidateNotFoundError(f"Candidate not found: {candidate_id}")
            row.is_invalidated = True
            row.invalidated_reason = reason
            session.commit()
            return _to_candidate(row)

    # Employment histories

    def save_employment_history(self, history: EmploymentHistory) -> EmploymentHistory:
        """Create or replace a candidate's employment history."""
        with self._session() as session:
            if session.get(Candidate, history.candidate_id) is None:
                raise CandidateNotFoundError(f"Candidate not found: {history.candidate_id}")
            session.merge(EmploymentHistoryRecord(
                candidate_id=history.candidate_id,
                organizations=list(history.organizations),
                titles=list(history.titles),
                date_phrases=list(history.date_phrases),
                skills=list(history.skills),
            ))
            session.commit()
        return history

    def get_employment_history(self, candidate_id: str) -> Optional[EmploymentHistory]:
        with self._session() as session:
            row = session.get(EmploymentHistoryRecord, candidate_id)
            return _to_history(row) if row is not None else None

    def list_all_employment_histories(self) -> List[EmploymentHistory]:
        with self._session() as session:
            query = session.query(EmploymentHistoryRecord).order_by(
                EmploymentHistoryRecord.candidate_id
            )
            return [_to_history(row) for row in query]
