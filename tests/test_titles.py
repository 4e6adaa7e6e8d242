"""
Tests for job title matching.
"""

import pytest

from talentmatch.matching.titles import (
    are_equivalent_titles,
    extract_seniority,
    extract_technologies,
    match_title,
    title_equivalence,
    word_similarity,
)
from talentmatch.models import MatchOutcome


class TestEquivalence:
    """Test title equivalence rules."""

    def test_same_group(self):
        """Titles in one equivalence group are equivalent."""
        assert are_equivalent_titles("Java Engineer", "Java Developer")
        assert are_equivalent_titles("Software Engineer", "SDE")

    def test_identical_titles(self):
        """Identical titles are equivalent regardless of case."""
        assert are_equivalent_titles("Chief Baker", "chief  baker")

    def test_shared_technology_dev_roles(self):
        """Developer roles sharing a technology are equivalent."""
        assert are_equivalent_titles("Senior Python Engineer", "Python Developer")
        assert are_equivalent_titles("C# Developer", "C# Engineer")

    def test_technology_without_dev_role(self):
        """A shared technology alone is not enough."""
        assert not are_equivalent_titles("Oracle DBA", "Oracle Developer")

    def test_java_is_not_javascript(self):
        """Java titles do not pick up the JavaScript family."""
        assert not are_equivalent_titles("Java Developer", "JavaScript Developer")

    @pytest.mark.parametrize("a,b", [
        ("Java Engineer", "Java Developer"),
        ("QA Engineer", "Software Tester"),
        ("Python Developer", "Flask Developer"),
        ("Java Developer", "Pastry Chef"),
    ])
    def test_symmetric(self, a, b):
        """Equivalence gives the same answer in both directions."""
        assert title_equivalence(a, b) is title_equivalence(b, a)

    def test_empty_titles(self):
        """Missing titles are never equivalent."""
        assert title_equivalence("", "Java Developer") is MatchOutcome.NONE
        assert title_equivalence(None, None) is MatchOutcome.NONE


class TestExtractors:
    """Test technology and seniority extraction."""

    def test_technologies_from_keyword(self):
        """Technology names in a title become tags."""
        assert extract_technologies("Senior Java Engineer") == ["Java"]

    def test_family_role_names_carry_no_technology(self):
        """Only the technology keyword tags a title, not its family role names."""
        assert extract_technologies("Cloud Engineer") == []
        assert extract_technologies("iOS Developer") == []
        assert extract_technologies("AWS Developer") == ["AWS"]

    def test_symbol_technologies(self):
        assert extract_technologies("Senior C# Developer") == ["C#"]

    def test_seniority_first_match_wins(self):
        """The first level in table order wins."""
        assert extract_seniority("Senior Lead Developer") == ("Senior", 1.0)
        assert extract_seniority("Principal Architect") == ("Principal", 1.2)

    def test_seniority_default(self):
        """Titles without a level are mid-level."""
        assert extract_seniority("Developer") == ("Mid-level", 0.9)

    def test_word_similarity(self):
        """Exact and partial overlaps are blended and capped."""
        assert word_similarity("Data Warehouse Architect", "Data Warehouse Architect") == 1.0
        assert word_similarity("ab cd", "ab cd") == 0.0
        # "developer" exact, "dev" is partial against "developer"
        assert word_similarity("web developer", "dev developer") == pytest.approx((1 + 0.5) / 2)


class TestMatchTitle:
    """Test best-title selection."""

    def test_equivalent_short_circuit(self):
        """An equivalent title scores 1.0."""
        result = match_title("Java Engineer", ["Java Developer"])
        assert result.score == 1.0
        assert result.matched_title == "Java Developer"
        assert result.outcome is MatchOutcome.EXACT

    def test_symmetric_scores(self):
        """Matching in either direction gives 1.0 for equivalents."""
        assert match_title("Java Developer", ["Java Engineer"]).score == 1.0
        assert match_title("Java Engineer", ["Java Developer"]).score == 1.0

    def test_no_titles(self):
        """No candidate titles scores zero."""
        result = match_title("Java Engineer", [])
        assert result.score == 0
        assert result.matched_title is None

    def test_blended_keeps_best(self):
        """The highest blended title is kept."""
        result = match_title("Warehouse Supervisor", ["Pastry Chef", "Warehouse Associate"])
        assert result.matched_title == "Warehouse Associate"
        assert result.outcome is MatchOutcome.PARTIAL
        assert 0 < result.score < 1

    def test_unrelated_titles_only_score_seniority(self):
        """Unrelated titles only earn the seniority share."""
        result = match_title("Pastry Chef", ["Truck Driver"])
        assert result.score == pytest.approx(0.1)

    @pytest.mark.parametrize("job_title,candidate_title", [
        ("iOS Developer", "Android Developer"),
        ("Frontend Developer", "Vue Developer"),
        ("Cloud Engineer", "AWS Developer"),
    ])
    def test_same_family_without_shared_keyword(self, job_title, candidate_title):
        """Roles from one family list are blended, not treated as equivalent."""
        result = match_title(job_title, [candidate_title])
        assert result.outcome is MatchOutcome.PARTIAL
        assert result.score < 1.0
