"""
Pytest configuration and shared fixtures.
"""

import pytest
from pathlib import Path
from typing import Dict, Any

from talentmatch.logger import get_logger, reset_logger
from talentmatch.models import CandidateProfile, EmploymentHistory, JobOpening
from talentmatch.storage import RecordStore


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir with no console output."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    for handler in list(logger.logger.handlers):
        handler.close()
        logger.logger.removeHandler(handler)
    reset_logger()


@pytest.fixture
def java_job() -> JobOpening:
    """Onsite Java role in Seattle for a bank client."""
    return JobOpening(
        id="job-java",
        title="Senior Java Engineer",
        description="Build services with Java, Spring Boot and AWS. SQL experience required.",
        client_name="First National Bank",
        client_focus="Java and AWS",
        city="Seattle",
        state="WA",
        mode="onsite",
    )


@pytest.fixture
def remote_job() -> JobOpening:
    """Remote frontend role based in New York."""
    return JobOpening(
        id="job-react",
        title="Frontend Developer",
        description="React, TypeScript and CSS for customer dashboards.",
        client_name="Acme Retail",
        city="New York",
        state="NY",
        mode="remote",
    )


@pytest.fixture
def strong_candidate() -> CandidateProfile:
    return CandidateProfile(id="cand-1", name="Dana Reyes", location="Seattle, WA")


@pytest.fixture
def strong_history() -> EmploymentHistory:
    return EmploymentHistory(
        candidate_id="cand-1",
        organizations=["First National Bank, Seattle", "Globex Corporation"],
        titles=["Senior Java Developer", "Java Developer"],
        date_phrases=["Jan 2019 - Present", "Jun 2013 - Dec 2018"],
        skills=["Java", "Spring Boot", "AWS", "SQL"],
    )


@pytest.fixture
def weak_candidate() -> CandidateProfile:
    return CandidateProfile(id="cand-2", name="Sam Ortiz", location="Miami, FL")


@pytest.fixture
def weak_history() -> EmploymentHistory:
    return EmploymentHistory(
        candidate_id="cand-2",
        organizations=["Sunshine Bakery"],
        titles=["Pastry Chef"],
        date_phrases=["2020 - 2023"],
        skills=["Baking"],
    )


@pytest.fixture
def sample_export() -> Dict[str, Any]:
    """JSON export with one job and two candidates."""
    return {
        "jobs": [
            {
                "id": "job-java",
                "title": "Senior Java Engineer",
                "description": "Java, Spring Boot and AWS",
                "client_name": "First National Bank",
                "city": "Seattle",
                "state": "wa",
                "mode": "onsite",
            }
        ],
        "candidates": [
            {
                "id": "cand-1",
                "name": "Dana Reyes",
                "location": "Seattle, WA",
                "history": {
                    "organizations": ["First National Bank", "Globex Corporation"],
                    "titles": ["Senior Java Developer", "Java Developer"],
                    "date_phrases": ["Jan 2019 - Present", "Jun 2013 - Dec 2018"],
                    "skills": ["Java", "AWS"],
                },
            },
            {
                "id": "cand-2",
                "name": "Sam Ortiz",
                "location": "Miami, FL",
            },
        ],
    }


@pytest.fixture
def temp_db_path(tmp_path) -> Path:
    return tmp_path / "data" / "test.db"


@pytest.fixture
def populated_store(
    temp_db_path, java_job, strong_candidate, strong_history, weak_candidate, weak_history
) -> RecordStore:
    """Store with one job and two candidates with histories."""
    store = RecordStore(temp_db_path)
    store.create_job(java_job)
    store.create_candidate(strong_candidate)
    store.create_candidate(weak_candidate)
    store.save_employment_history(strong_history)
    store.save_employment_history(weak_history)
    yield store
    store.close()
