"""Client and industry experience matching."""

from typing import Iterable, Optional

from ..models import ClientMatch

FINANCIAL_CLIENT_MARKERS = ("bank", "financial", "payment", "capital", "invest", "fis")

FINANCIAL_INDUSTRY_KEYWORDS = (
    "bank", "financial", "finance", "investment", "trading", "wealth", "asset",
    "credit", "loan", "mortgage", "insurance", "payment",
)

DIRECT_MATCH_SCORE = 1.0
INDUSTRY_MATCH_SCORE = 0.8


def is_financial_client(client_name: Optional[str]) -> bool:
    lowered = (client_name or "").lower()
    return any(marker in lowered for marker in FINANCIAL_CLIENT_MARKERS)


def match_client_experience(
    job_client_name: Optional[str],
    candidate_organizations: Optional[Iterable[str]],
) -> ClientMatch:
    """
    Check whether a candidate has worked for the job's client or its industry.

    A past employer whose name contains the client name is a direct match.
    Failing that, financial-services clients accept any past employer from
    the financial industry at reduced credit.
    """
    client = (job_client_name or "").strip().lower()
    organizations = [o for o in (candidate_organizations or []) if isinstance(o, str) and o.strip()]
    if not client or not organizations:
        return ClientMatch()

    for organization in organizations:
        if client in organization.lower():
            return ClientMatch(
                score=DIRECT_MATCH_SCORE,
                reason=f"Previous experience with {organization}",
                organization=organization,
            )

    if is_financial_client(client):
        for organization in organizations:
            lowered = organization.lower()
            if any(keyword in lowered for keyword in FINANCIAL_INDUSTRY_KEYWORDS):
                return ClientMatch(
                    score=INDUSTRY_MATCH_SCORE,
                    reason="Financial industry experience",
                    organization=organization,
                )

    return ClientMatch()
