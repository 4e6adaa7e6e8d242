"""Per-dimension matchers and the composite candidate scorer."""

from .clients import match_client_experience
from .location import match_location
from .scorer import CandidateScorer, rank_candidates
from .seniority import match_seniority_level
from .skills import match_skills
from .titles import match_title

__all__ = [
    "CandidateScorer",
    "match_client_experience",
    "match_location",
    "match_seniority_level",
    "match_skills",
    "match_title",
    "rank_candidates",
]
