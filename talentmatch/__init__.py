"""TalentMatch: candidate ranking and employment-history similarity checks."""

__version__ = "0.3.0"
