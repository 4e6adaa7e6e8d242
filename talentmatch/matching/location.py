"""
Location matching: commute distance for onsite/hybrid roles, time-zone
overlap for remote ones.
"""

import math
from types import MappingProxyType
from typing import Optional, Tuple

from ..models import LocationMatch

STATE_TIME_ZONES = MappingProxyType({
    "AL": ("America/Chicago",),
    "AK": ("America/Anchorage", "America/Adak"),
    "AZ": ("America/Phoenix",),
    "AR": ("America/Chicago",),
    "CA": ("America/Los_Angeles",),
    "CO": ("America/Denver",),
    "CT": ("America/New_York",),
    "DE": ("America/New_York",),
    "FL": ("America/New_York", "America/Chicago"),
    "GA": ("America/New_York",),
    "HI": ("Pacific/Honolulu",),
    "ID": ("America/Denver", "America/Los_Angeles"),
    "IL": ("America/Chicago",),
    "IN": ("America/New_York", "America/Chicago"),
    "IA": ("America/Chicago",),
    "KS": ("America/Chicago", "America/Denver"),
    "KY": ("America/New_York", "America/Chicago"),
    "LA": ("America/Chicago",),
    "ME": ("America/New_York",),
    "MD": ("America/New_York",),
    "MA": ("America/New_York",),
    "MI": ("America/New_York", "America/Chicago"),
    "MN": ("America/Chicago",),
    "MS": ("America/Chicago",),
    "MO": ("America/Chicago",),
    "MT": ("America/Denver",),
    "NE": ("America/Chicago", "America/Denver"),
    "NV": ("America/Los_Angeles", "America/Denver"),
    "NH": ("America/New_York",),
    "NJ": ("America/New_York",),
    "NM": ("America/Denver",),
    "NY": ("America/New_York",),
    "NC": ("America/New_York",),
    "ND": ("America/Chicago", "America/Denver"),
    "OH": ("America/New_York",),
    "OK": ("America/Chicago",),
    "OR": ("America/Los_Angeles",),
    "PA": ("America/New_York",),
    "RI": ("America/New_York",),
    "SC": ("America/New_York",),
    "SD": ("America/Chicago", "America/Denver"),
    "TN": ("America/New_York", "America/Chicago"),
    "TX": ("America/Chicago", "America/Denver"),
    "UT": ("America/Denver",),
    "VT": ("America/New_York",),
    "VA": ("America/New_York",),
    "WA": ("America/Los_Angeles",),
    "WV": ("America/New_York",),
    "WI": ("America/Chicago",),
    "WY": ("America/Denver",),
    "DC": ("America/New_York",),
})

# Hours between zones; looked up in both directions.
TIME_ZONE_DIFFERENCES = MappingProxyType({
    "America/New_York": MappingProxyType({
        "America/Chicago": 1, "America/Denver": 2, "America/Los_Angeles": 3,
        "America/Phoenix": 2, "America/Anchorage": 4, "Pacific/Honolulu": 5,
        "America/Adak": 5,
    }),
    "America/Chicago": MappingProxyType({
        "America/New_York": 1, "America/Denver": 1, "America/Los_Angeles": 2,
        "America/Phoenix": 1, "America/Anchorage": 3, "Pacific/Honolulu": 4,
        "America/Adak": 4,
    }),
    "America/Denver": MappingProxyType({
        "America/New_York": 2, "America/Chicago": 1, "America/Los_Angeles": 1,
        "America/Phoenix": 0, "America/Anchorage": 2, "Pacific/Honolulu": 3,
        "America/Adak": 3,
    }),
    "America/Los_Angeles": MappingProxyType({
        "America/New_York": 3, "America/Chicago": 2, "America/Denver": 1,
        "America/Phoenix": 1, "America/Anchorage": 1, "Pacific/Honolulu": 2,
        "America/Adak": 2,
    }),
    "America/Phoenix": MappingProxyType({
        "America/New_York": 2, "America/Chicago": 1, "America/Denver": 0,
        "America/Los_Angeles": 1, "America/Anchorage": 2, "Pacific/Honolulu": 3,
        "America/Adak": 3,
    }),
})

CITY_COORDINATES = MappingProxyType({
    "new york": (40.7128, -74.0060),
    "los angeles": (34.0522, -118.2437),
    "chicago": (41.8781, -87.6298),
    "houston": (29.7604, -95.3698),
    "phoenix": (33.4484, -112.0740),
    "philadelphia": (39.9526, -75.1652),
    "san antonio": (29.4241, -98.4936),
    "san diego": (32.7157, -117.1611),
    "dallas": (32.7767, -96.7970),
    "san jose": (37.3382, -121.8863),
    "austin": (30.2672, -97.7431),
    "jacksonville": (30.3322, -81.6557),
    "fort worth": (32.7555, -97.3308),
    "columbus": (39.9612, -82.9988),
    "san francisco": (37.7749, -122.4194),
    "charlotte": (35.2271, -80.8431),
    "indianapolis": (39.7684, -86.1581),
    "seattle": (47.6062, -122.3321),
    "denver": (39.7392, -104.9903),
    "washington": (38.9072, -77.0369),
    "boston": (42.3601, -71.0589),
    "nashville": (36.1627, -86.7816),
    "baltimore": (39.2904, -76.6122),
    "portland": (45.5051, -122.6750),
    "atlanta": (33.7490, -84.3880),
})

MAX_COMMUTE_MILES = MappingProxyType({"onsite": 30, "hybrid": 50, "remote": 500})

EARTH_RADIUS_MILES = 3958.8
SAME_STATE_MILES = 50
OTHER_STATE_MILES = 500
UNKNOWN_TZ_SCORE = 0.7
MAX_TZ_DIFFERENCE = 12


def parse_location(location: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split "City, ST" text into (lowercase city, uppercase state)."""
    if not location or not location.strip():
        return None, None
    parts = [p.strip() for p in location.split(",")]
    if len(parts) >= 2:
        return parts[0].lower() or None, parts[1].upper() or None

    single = parts[0]
    if len(single) == 2 and single.upper() in STATE_TIME_ZONES:
        return None, single.upper()
    return single.lower(), None


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def time_zone_compatibility(job_state: Optional[str], candidate_state: Optional[str]) -> float:
    """1.0 for a shared zone, 0.1 less per hour apart, never below 0.5."""
    if not job_state or not candidate_state:
        return UNKNOWN_TZ_SCORE
    job_zones = STATE_TIME_ZONES.get(job_state.upper(), ())
    candidate_zones = STATE_TIME_ZONES.get(candidate_state.upper(), ())
    if not job_zones or not candidate_zones:
        return UNKNOWN_TZ_SCORE

    min_difference = MAX_TZ_DIFFERENCE
    for job_zone in job_zones:
        for candidate_zone in candidate_zones:
            if job_zone == candidate_zone:
                return 1.0
            difference = TIME_ZONE_DIFFERENCES.get(job_zone, {}).get(candidate_zone)
            if difference is None:
                difference = TIME_ZONE_DIFFERENCES.get(candidate_zone, {}).get(
                    job_zone, MAX_TZ_DIFFERENCE
                )
            min_difference = min(min_difference, difference)
    return max(0.5, 1.0 - min_difference * 0.1)


def estimate_distance(
    job_city: Optional[str],
    job_state: Optional[str],
    candidate_city: Optional[str],
    candidate_state: Optional[str],
) -> Optional[float]:
    """Miles between two places, or a coarse estimate when coordinates are unknown."""
    if (not job_city and not job_state) or (not candidate_city and not candidate_state):
        return None
    if job_city and candidate_city:
        if job_city == candidate_city:
            return 0.0
        job_coords = CITY_COORDINATES.get(job_city)
        candidate_coords = CITY_COORDINATES.get(candidate_city)
        if job_coords and candidate_coords:
            return haversine_miles(*job_coords, *candidate_coords)
    if job_state and candidate_state and job_state == candidate_state:
        return float(SAME_STATE_MILES)
    return float(OTHER_STATE_MILES)


def _remote_description(tz_score: float) -> str:
    if tz_score >= 0.9:
        return "Remote position with excellent time zone compatibility"
    if tz_score >= 0.7:
        return "Remote position with good time zone compatibility"
    return "Remote position with challenging time zone difference"


def match_location(
    job_city: Optional[str],
    job_state: Optional[str],
    job_mode: Optional[str],
    candidate_location: Optional[str],
) -> LocationMatch:
    """
    Score a candidate's location against a job's location and work mode.

    Args:
        job_city: Job city, any case
        job_state: Two-letter job state
        job_mode: onsite, hybrid or remote (None is treated as onsite)
        candidate_location: Free-text candidate location such as "Austin, TX"

    Returns:
        LocationMatch. A missing candidate location scores 0 and a shared
        city scores 1.0 whatever the mode.
    """
    if not candidate_location or not candidate_location.strip():
        return LocationMatch()

    mode = (job_mode or "onsite").lower()
    city = job_city.strip().lower() if job_city and job_city.strip() else None
    state = job_state.strip().upper() if job_state and job_state.strip() else None
    candidate_city, candidate_state = parse_location(candidate_location)

    if city and candidate_city and city == candidate_city:
        return LocationMatch(
            score=1.0,
            description=f"Same city ({job_city.strip()})",
            distance=0.0,
            within_commute=True,
            timezone_compatibility=1.0,
        )

    tz_score = time_zone_compatibility(state, candidate_state)

    if mode == "remote":
        return LocationMatch(
            score=tz_score,
            description=_remote_description(tz_score),
            distance=None,
            within_commute=True,
            timezone_compatibility=tz_score,
        )

    distance = estimate_distance(city, state, candidate_city, candidate_state)
    max_distance = MAX_COMMUTE_MILES.get(mode, MAX_COMMUTE_MILES["onsite"])
    within = distance is not None and distance <= max_distance

    if state and candidate_state and state == candidate_state:
        score = {"hybrid": 0.9, "onsite": 0.7}.get(mode, 0.95)
        suffix = f" - {candidate_city}" if candidate_city else ""
        return LocationMatch(
            score=score,
            description=f"Same state ({state}){suffix}",
            distance=distance if distance else float(SAME_STATE_MILES),
            within_commute=within,
            timezone_compatibility=1.0,
        )

    if distance is not None and within:
        factor = {"onsite": 0.8, "hybrid": 0.9}.get(mode, 0.95)
        score = min(0.95, (1 - distance / max_distance) * factor)
        return LocationMatch(
            score=score,
            description=f"Within commutable distance ({round(distance)} miles)",
            distance=distance,
            within_commute=True,
            timezone_compatibility=tz_score,
        )

    if mode == "onsite":
        score, description = 0.1, "Location too far for onsite role"
    elif mode == "hybrid":
        score = 0.2 + tz_score * 0.3
        description = "Location distant for hybrid role, but may work occasionally"
    else:
        score, description = 0.3, "Partial location match"
    return LocationMatch(
        score=score,
        description=description,
        distance=distance,
        within_commute=False,
        timezone_compatibility=tz_score,
    )
