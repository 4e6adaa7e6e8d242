"""Experience level matching from employment dates and titles."""

from datetime import date
from typing import Optional

from ..models import EmploymentHistory, JobOpening, SeniorityMatch
from ..normalize import extract_years

LEADERSHIP_KEYWORDS = (
    "lead", "senior", "manager", "director", "chief", "head", "vp",
    "president", "principal", "architect", "supervisor", "executive",
)
JUNIOR_ROLE_KEYWORDS = ("junior", "associate", "entry", "trainee")
SENIOR_ROLE_KEYWORDS = ("senior", "lead", "principal", "architect")
MANAGERIAL_ROLE_KEYWORDS = ("manager", "director", "head", "chief", "vp")

NEUTRAL_SCORE = 0.5


def _mentions(text: str, keywords) -> bool:
    return any(keyword in text for keyword in keywords)


def years_of_experience(history: Optional[EmploymentHistory], current_year: int) -> Optional[int]:
    """Years since the earliest year mentioned in the history, or None."""
    if history is None:
        return None
    years = extract_years(history.date_phrases)
    if not years:
        return None
    return max(0, current_year - min(years))


def has_leadership_experience(history: Optional[EmploymentHistory]) -> bool:
    if history is None:
        return False
    return any(
        _mentions(title.lower(), LEADERSHIP_KEYWORDS)
        for title in history.titles
        if isinstance(title, str)
    )


def match_seniority_level(
    job: JobOpening,
    history: Optional[EmploymentHistory],
    years_hint: Optional[int] = None,
    current_year: Optional[int] = None,
) -> SeniorityMatch:
    """
    Compare the seniority a job title implies with the candidate's experience.

    Args:
        job: Job opening; only its title is used
        history: Candidate employment history (may be None)
        years_hint: Profile-level years of experience, used when the
            history carries no year at all
        current_year: Override for the reference year (defaults to today)

    Returns:
        SeniorityMatch; 0.5 with no note when experience is unknown.
    """
    if current_year is None:
        current_year = date.today().year

    years = years_of_experience(history, current_year)
    if years is None and years_hint is not None and years_hint >= 0:
        years = int(years_hint)
    leadership = has_leadership_experience(history)

    title = (job.title or "").lower()
    junior = _mentions(title, JUNIOR_ROLE_KEYWORDS)
    senior = _mentions(title, SENIOR_ROLE_KEYWORDS)
    managerial = _mentions(title, MANAGERIAL_ROLE_KEYWORDS)

    score = NEUTRAL_SCORE
    note = None
    if years is not None:
        if junior and years <= 3:
            score, note = 0.9, "Junior role matches early career experience"
        elif senior and years >= 5:
            score, note = 0.9, "Senior role matches substantial experience"
        elif managerial and years >= 8:
            score, note = 0.9, "Management role matches extensive experience"
        elif junior and years > 5:
            score, note = 0.3, "Candidate may be overqualified for junior role"
        elif (senior or managerial) and years < 3:
            score, note = 0.3, "Candidate may need more experience for this senior role"
        else:
            score, note = 0.7, "Moderate experience level match"

    # Leadership bonus applies even when years are unknown
    if managerial and leadership:
        score = min(1.0, score + 0.2)
        note = "Leadership experience matches management role"
    elif senior and leadership:
        score = min(1.0, score + 0.1)

    return SeniorityMatch(
        score=score,
        years_of_experience=years,
        leadership_experience=leadership,
        seniority_note=note,
    )
