"""
Data models shared by the matching engine and the similarity detector.

These are plain dataclasses; the SQLAlchemy rows in database.py are
converted into them by storage.py before any scoring happens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

JOB_MODES = ("onsite", "remote", "hybrid")


class MatchOutcome(Enum):
    """Result of evaluating an ordered rule list."""

    EXACT = "exact"
    PARTIAL = "partial"
    NONE = "none"


@dataclass(frozen=True)
class JobOpening:
    id: str
    title: str
    description: str = ""
    client_name: Optional[str] = None
    client_focus: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    mode: str = "onsite"

    @property
    def requirements_text(self) -> str:
        """Title and description together, as searched for required skills."""
        return f"{self.title or ''} {self.description or ''}".strip()


@dataclass(frozen=True)
class CandidateProfile:
    id: str
    name: str
    location: str = ""
    years_hint: Optional[int] = None
    is_invalidated: bool = False
    invalidated_reason: Optional[str] = None


@dataclass(frozen=True)
class EmploymentHistory:
    """
    Positionally aligned employment entries, most recent first.

    The three sequences may have different lengths in imported data. Every
    consumer reads each sequence on its own and never indexes one sequence
    by a position taken from another, so a short sequence reads as absent.
    """

    candidate_id: str
    organizations: List[str] = field(default_factory=list)
    titles: List[str] = field(default_factory=list)
    date_phrases: List[str] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.organizations and not self.date_phrases


@dataclass
class TitleMatch:
    score: float = 0.0
    matched_title: Optional[str] = None
    technologies: List[str] = field(default_factory=list)
    outcome: MatchOutcome = MatchOutcome.NONE


@dataclass
class PartialSkill:
    skill: str
    related_to: str
    weight: float


@dataclass
class SkillMatch:
    score: float = 0.0
    matched_skills: List[str] = field(default_factory=list)
    partial_matches: List[PartialSkill] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    client_focus_matches: List[str] = field(default_factory=list)


@dataclass
class LocationMatch:
    score: float = 0.0
    description: str = "No location data"
    distance: Optional[float] = None
    within_commute: bool = False
    timezone_compatibility: float = 0.7


@dataclass
class ClientMatch:
    score: float = 0.0
    reason: Optional[str] = None
    organization: Optional[str] = None


@dataclass
class SeniorityMatch:
    score: float = 0.5
    years_of_experience: Optional[int] = None
    leadership_experience: bool = False
    seniority_note: Optional[str] = None


@dataclass
class MatchResult:
    candidate_id: str
    candidate_name: str
    score: int
    composite: float
    reasons: List[str]
    title: TitleMatch
    skills: SkillMatch
    location: LocationMatch
    client: ClientMatch
    seniority: SeniorityMatch

    def sub_scores(self) -> dict:
        return {
            "title": self.title.score,
            "skill": self.skills.score,
            "location": self.location.score,
            "client": self.client.score,
            "seniority": self.seniority.score,
        }

    def to_dict(self) -> dict:
        return {
            "candidate_id": self.candidate_id,
            "candidate_name": self.candidate_name,
            "score": self.score,
            "reasons": list(self.reasons),
            "sub_scores": self.sub_scores(),
            "matched_title": self.title.matched_title,
            "matched_skills": list(self.skills.matched_skills),
            "missing_skills": list(self.skills.missing_skills),
            "distance": self.location.distance,
            "years_of_experience": self.seniority.years_of_experience,
        }


@dataclass
class SimilarityMatch:
    candidate_id: str
    similarity: int
    organizations: List[str]
    date_phrases: List[str]
    company_match_percentage: float
    date_match_percentage: float
    chronology_in_order: bool

    @property
    def is_high_similarity(self) -> bool:
        return self.similarity >= 80

    @property
    def has_identical_chronology(self) -> bool:
        return (
            self.chronology_in_order
            and self.company_match_percentage >= 90
            and self.date_match_percentage >= 80
        )

    def to_dict(self) -> dict:
        return {
            "candidate_id": self.candidate_id,
            "similarity": self.similarity,
            "organizations": list(self.organizations),
            "date_phrases": list(self.date_phrases),
            "company_match_percentage": round(self.company_match_percentage, 1),
            "date_match_percentage": round(self.date_match_percentage, 1),
            "is_high_similarity": self.is_high_similarity,
            "has_identical_chronology": self.has_identical_chronology,
        }
