"""
Job title matching.

Titles are compared against static equivalence groups and shared
technology keywords first; anything that is not an outright equivalent gets a
blended score from word overlap, shared technologies and seniority.
"""

from types import MappingProxyType
from typing import Callable, List, Optional, Sequence, Tuple

from ..models import MatchOutcome, TitleMatch
from ..normalize import contains_term, normalize_text

EQUIVALENT_TITLES = MappingProxyType({
    "Software Engineer": (
        "Software Developer", "Application Developer", "Programmer", "SDE",
        "Computer Programmer", "Application Engineer",
    ),
    "Java Engineer": (
        "Java Developer", "Java Programmer", "J2EE Developer",
        "Java Application Developer", "Backend Java Developer",
    ),
    "Frontend Developer": (
        "Frontend Engineer", "UI Developer", "UI Engineer", "Web Developer",
        "Client-Side Developer", "Web Frontend Developer",
    ),
    "Backend Developer": (
        "Backend Engineer", "Server-Side Developer", "API Developer",
        "Backend Programming Specialist",
    ),
    "Full Stack Developer": (
        "Full Stack Engineer", "Web Application Developer",
        "End-to-End Developer", "Full-Stack Programmer",
    ),
    "DevOps Engineer": (
        "Site Reliability Engineer", "Platform Engineer", "Release Engineer",
        "Infrastructure Engineer", "DevOps Specialist",
    ),
    "QA Engineer": (
        "Quality Assurance Engineer", "Test Engineer", "Software Tester",
        "Automation Engineer", "QA Specialist",
    ),
    "Data Scientist": (
        "Machine Learning Engineer", "AI Developer", "ML Engineer",
        "Data Analyst", "Analytics Engineer",
    ),
    "Data Engineer": (
        "Big Data Engineer", "ETL Developer", "Database Developer",
        "Data Pipeline Engineer",
    ),
    "Business Analyst": (
        "Business Systems Analyst", "Requirements Analyst", "Process Analyst",
        "Business Process Analyst", "Systems Analyst",
    ),
    "Project Manager": (
        "Program Manager", "IT Project Manager", "Technical Project Manager",
        "Delivery Manager", "Project Lead",
    ),
    "Product Manager": (
        "Product Owner", "Technical Product Manager", "Product Specialist",
    ),
})

TECH_TITLE_FAMILIES = MappingProxyType({
    "Java": (
        "Java Engineer", "Java Developer", "Java Programmer", "Java Architect",
        "J2EE Developer", "Spring Developer",
    ),
    "Python": (
        "Python Developer", "Python Engineer", "Django Developer",
        "Flask Developer",
    ),
    "JavaScript": (
        "JavaScript Developer", "Frontend Developer", "React Developer",
        "Angular Developer", "Vue Developer", "Node.js Developer",
    ),
    "C#": (
        "C# Developer", ".NET Developer", "ASP.NET Developer", ".NET Engineer",
    ),
    "Ruby": ("Ruby Developer", "Ruby on Rails Developer", "Rails Engineer"),
    "PHP": (
        "PHP Developer", "Laravel Developer", "Symfony Developer",
        "WordPress Developer",
    ),
    "Mobile": (
        "Mobile Developer", "iOS Developer", "Android Developer",
        "React Native Developer", "Flutter Developer",
    ),
    "Oracle": (
        "Oracle Developer", "Oracle DBA", "PL/SQL Developer",
        "Oracle Database Engineer",
    ),
    "SQL": (
        "Database Developer", "SQL Developer", "Database Administrator",
        "Database Engineer",
    ),
    "AWS": (
        "AWS Developer", "Cloud Engineer", "AWS Solutions Architect",
        "Cloud Developer",
    ),
    "DevOps": (
        "DevOps Engineer", "CI/CD Engineer", "Release Engineer",
        "Build Engineer",
    ),
    "UNIX": (
        "UNIX Administrator", "Linux Engineer", "System Administrator",
        "Linux Developer", "UNIX Engineer",
    ),
})

# Order matters: the first keyword found in a title decides its level.
SENIORITY_LEVELS: Tuple[Tuple[str, float], ...] = (
    ("Junior", 0.7),
    ("Associate", 0.8),
    ("Mid-level", 0.9),
    ("Senior", 1.0),
    ("Lead", 1.1),
    ("Principal", 1.2),
    ("Staff", 1.1),
    ("Architect", 1.2),
    ("Manager", 1.0),
    ("Director", 1.1),
)
DEFAULT_SENIORITY = ("Mid-level", 0.9)

DEV_ROLE_TERMS = ("developer", "engineer", "programmer", "architect")

WORD_WEIGHT = 0.6
TECH_WEIGHT = 0.3
SENIORITY_WEIGHT = 0.1

_GROUPS = tuple(
    frozenset(normalize_text(t) for t in (head,) + members)
    for head, members in EQUIVALENT_TITLES.items()
)


def extract_technologies(title: Optional[str]) -> List[str]:
    """Technology keywords named in a title, in table order."""
    normalized = normalize_text(title)
    if not normalized:
        return []
    found = []
    for tech in TECH_TITLE_FAMILIES:
        if contains_term(normalized, tech):
            found.append(tech)
    return found


def extract_seniority(title: Optional[str]) -> Tuple[str, float]:
    normalized = normalize_text(title)
    for level, weight in SENIORITY_LEVELS:
        if contains_term(normalized, level):
            return level, weight
    return DEFAULT_SENIORITY


def _same_title(a: str, b: str) -> MatchOutcome:
    return MatchOutcome.EXACT if a == b else MatchOutcome.NONE


def _same_group(a: str, b: str) -> MatchOutcome:
    for group in _GROUPS:
        if a in group and b in group:
            return MatchOutcome.EXACT
    return MatchOutcome.NONE


def _is_dev_role(title: str) -> bool:
    return any(term in title for term in DEV_ROLE_TERMS)


def _same_tech_family(a: str, b: str) -> MatchOutcome:
    shared = set(extract_technologies(a)) & set(extract_technologies(b))
    if shared and _is_dev_role(a) and _is_dev_role(b):
        return MatchOutcome.EXACT
    return MatchOutcome.NONE


# Evaluated in order; the first EXACT outcome wins.
EQUIVALENCE_RULES: Tuple[Callable[[str, str], MatchOutcome], ...] = (
    _same_title,
    _same_group,
    _same_tech_family,
)


def title_equivalence(title1: Optional[str], title2: Optional[str]) -> MatchOutcome:
    a, b = normalize_text(title1), normalize_text(title2)
    if not a or not b:
        return MatchOutcome.NONE
    for rule in EQUIVALENCE_RULES:
        outcome = rule(a, b)
        if outcome is MatchOutcome.EXACT:
            return outcome
    return MatchOutcome.NONE


def are_equivalent_titles(title1: Optional[str], title2: Optional[str]) -> bool:
    return title_equivalence(title1, title2) is MatchOutcome.EXACT


def word_similarity(title1: str, title2: str) -> float:
    """Exact word overlap plus half credit for substring overlap, 0..1."""
    words1 = [w for w in normalize_text(title1).split() if len(w) > 2]
    words2 = [w for w in normalize_text(title2).split() if len(w) > 2]
    if not words1 or not words2:
        return 0.0

    exact = sum(1 for w in words1 if w in words2)
    partial = 0
    for w1 in words1:
        for w2 in words2:
            if w1 != w2 and (w1 in w2 or w2 in w1):
                partial += 1

    score = (exact + partial * 0.5) / max(len(words1), len(words2))
    return min(1.0, score)


def _blended_score(job_title: str, job_techs: Sequence[str], candidate_title: str):
    candidate_techs = extract_technologies(candidate_title)
    shared = [t for t in job_techs if t in candidate_techs]

    score = word_similarity(job_title, candidate_title) * WORD_WEIGHT
    if shared:
        score += len(shared) / max(len(job_techs), 1) * TECH_WEIGHT

    _, job_level = extract_seniority(job_title)
    _, candidate_level = extract_seniority(candidate_title)
    score += max(0.0, 1 - abs(job_level - candidate_level)) * SENIORITY_WEIGHT
    return min(1.0, score), shared


def match_title(job_title: Optional[str], candidate_titles: Optional[Sequence[str]]) -> TitleMatch:
    """
    Score a candidate's past titles against a job title.

    Args:
        job_title: Title of the job opening
        candidate_titles: Candidate titles, most recent first

    Returns:
        TitleMatch with the best-scoring title. An equivalent title scores
        1.0 and ends the search; otherwise the highest blend wins and ties
        keep the earlier title.
    """
    titles = [t for t in (candidate_titles or []) if t]
    if not titles or not normalize_text(job_title):
        return TitleMatch()

    job_techs = extract_technologies(job_title)
    best = TitleMatch()
    for candidate_title in titles:
        if title_equivalence(job_title, candidate_title) is MatchOutcome.EXACT:
            return TitleMatch(
                score=1.0,
                matched_title=candidate_title,
                technologies=list(job_techs),
                outcome=MatchOutcome.EXACT,
            )

        score, shared = _blended_score(job_title, job_techs, candidate_title)
        if score > best.score:
            best = TitleMatch(
                score=score,
                matched_title=candidate_title,
                technologies=shared,
                outcome=MatchOutcome.PARTIAL,
            )
    return best
