"""
Tests for skill extraction and matching.
"""

import pytest

from talentmatch.matching.skills import (
    extract_skills,
    match_skills,
    related_skills,
    technology_relevance,
)


class TestExtractSkills:
    """Test skill extraction from free text."""

    def test_finds_known_skills(self):
        """Known skills are found in discovery order."""
        skills = extract_skills("We use React with Redux, and Docker for deploys.")
        assert skills[0] == "React"
        assert "Redux" in skills
        assert "Docker" in skills
        assert skills.index("Redux") < skills.index("Docker")

    def test_java_does_not_match_javascript(self):
        """Whole-word matching keeps Java and JavaScript apart."""
        assert "Java" not in extract_skills("Strong JavaScript skills")
        assert "JavaScript" in extract_skills("Strong JavaScript skills")

    def test_deduplicates(self):
        """Skills listed in several clusters appear once."""
        skills = extract_skills("Kotlin and Java")
        assert skills.count("Kotlin") == 1
        assert skills.count("Java") == 1

    def test_multi_word_half_present(self):
        """Multi-word skills match when half their long words appear."""
        assert "Spring Boot" in extract_skills("Spring services")

    def test_empty(self):
        """No text gives no skills."""
        assert extract_skills("") == []
        assert extract_skills(None) == []


class TestRelations:
    """Test related and transferable skills."""

    def test_transferable_both_directions(self):
        """Transferable skills relate in both directions."""
        assert "c#" in related_skills("Java")
        assert "java" in related_skills("C#")

    def test_cluster_relation(self):
        """Cluster members relate to their primary skill."""
        assert "redux" in related_skills("React")
        assert "react" in related_skills("JSX")

    def test_unknown_skill(self):
        """Unknown skills have no relations."""
        assert related_skills("Basket Weaving") == frozenset()

    def test_relevance(self):
        """Relevance follows table order."""
        assert technology_relevance("React Native") == 1.2
        assert technology_relevance("JavaScript") == 1.0
        assert technology_relevance("jQuery") == 0.8
        assert technology_relevance("Cobol") == 1.0


class TestMatchSkills:
    """Test weighted skill matching."""

    def test_transferable_partial_credit(self):
        """C# stands in for Java at 0.7."""
        result = match_skills("Java", ["C#"])
        assert result.score == pytest.approx(0.7)
        assert result.matched_skills == []
        assert result.partial_matches[0].skill == "c#"
        assert result.partial_matches[0].related_to == "Java"
        assert result.partial_matches[0].weight == 0.7

    def test_exact_match(self):
        """Exact skills earn full credit, case-insensitively."""
        result = match_skills("Java", ["java"])
        assert result.score == 1.0
        assert result.matched_skills == ["Java"]

    def test_no_candidate_skills(self):
        """No candidate skills scores zero with everything missing."""
        result = match_skills("Java and Docker", [])
        assert result.score == 0
        assert result.missing_skills == ["Java", "Docker"]

    def test_no_job_skills(self):
        """A job with no recognisable skills scores zero."""
        assert match_skills("Friendly team", ["Java"]).score == 0

    def test_client_focus_doubles_weight(self):
        """Client focus skills weigh double and are reported."""
        result = match_skills("Java and PHP", ["Java"], client_focus_text="Java")
        # Java: 1.0 * 2.0 earned; PHP: 0.9 missing
        assert result.score == pytest.approx(2.0 / 2.9)
        assert result.client_focus_matches == ["Java"]
        assert result.missing_skills == ["PHP"]

    def test_monotonic(self):
        """Adding an exact skill never lowers the score."""
        job_text = "Java, Kubernetes, PostgreSQL and React"
        skills = ["C#"]
        previous = match_skills(job_text, skills).score
        for extra in ["Kubernetes", "Java", "PostgreSQL", "React"]:
            skills = skills + [extra]
            current = match_skills(job_text, skills).score
            assert current >= previous
            previous = current
        assert previous > match_skills(job_text, ["C#"]).score

    def test_score_bounds(self):
        """Scores stay within 0..1."""
        result = match_skills("React Redux JSX Flux", ["React", "Redux", "JSX", "Flux", "Vue"])
        assert 0.0 <= result.score <= 1.0
