"""
Skill extraction and weighted skill matching.

Job skills are pulled out of free text against a fixed vocabulary of
skill clusters. Each required skill earns full credit for an exact
candidate skill and partial credit for a related or transferable one.
"""

import math
from types import MappingProxyType
from typing import Iterable, List, Optional, Tuple

from ..models import PartialSkill, SkillMatch
from ..normalize import contains_term, normalize_text

SKILL_CLUSTERS = MappingProxyType({
    "React": ("React.js", "React Native", "Redux", "Flux", "JSX"),
    "Angular": ("AngularJS", "Angular 2+", "Angular Material", "NgRx"),
    "Vue": ("Vue.js", "Vuex", "Vue Router", "Nuxt.js"),
    "JavaScript": (
        "ES6", "ES2015+", "TypeScript", "CoffeeScript", "Babel", "Webpack",
        "Rollup", "Parcel",
    ),
    "TypeScript": ("JavaScript", "ES6", "Type Systems", "Interface Design"),
    "CSS": (
        "SCSS", "SASS", "LESS", "Styled Components", "CSS Modules", "Tailwind",
        "Bootstrap", "Material UI",
    ),
    "Java": (
        "Spring", "Spring Boot", "Hibernate", "J2EE", "Kotlin", "Scala",
        "JUnit", "Maven", "Gradle",
    ),
    "Python": (
        "Django", "Flask", "FastAPI", "PyTorch", "TensorFlow", "NumPy",
        "Pandas", "Scikit-learn",
    ),
    ".NET": ("C#", "ASP.NET", "VB.NET", "Entity Framework", "LINQ", "WPF", "WCF"),
    "PHP": ("Laravel", "Symfony", "WordPress", "CodeIgniter", "CakePHP"),
    "Ruby": ("Rails", "Sinatra", "RSpec"),
    "Node.js": ("Express", "Koa", "Nest.js", "Fastify", "Hapi"),
    "iOS": ("Swift", "Objective-C", "UIKit", "SwiftUI", "Core Data"),
    "Android": ("Kotlin", "Java", "Android SDK", "Jetpack Compose", "Room"),
    "Mobile": ("React Native", "Flutter", "Xamarin", "Ionic", "Cordova"),
    "SQL": ("MySQL", "PostgreSQL", "SQL Server", "Oracle", "SQLite", "MariaDB"),
    "NoSQL": (
        "MongoDB", "DynamoDB", "Cassandra", "Firebase", "Redis", "Elasticsearch",
    ),
    "GraphQL": ("Apollo", "Relay", "Prisma"),
    "AWS": ("EC2", "S3", "Lambda", "DynamoDB", "CloudFormation", "ECS", "EKS"),
    "Azure": ("App Service", "Azure Functions", "Cosmos DB", "Azure DevOps"),
    "GCP": ("Google Compute Engine", "App Engine", "BigQuery", "Firestore"),
    "DevOps": (
        "Docker", "Kubernetes", "CI/CD", "Jenkins", "GitHub Actions",
        "CircleCI", "Terraform", "Ansible", "Chef", "Puppet",
    ),
    "Machine Learning": (
        "TensorFlow", "PyTorch", "Scikit-learn", "Keras", "Deep Learning",
        "Neural Networks", "Computer Vision", "NLP",
    ),
    "Data Science": (
        "Python", "R", "Pandas", "NumPy", "Jupyter", "Matplotlib",
        "Data Analysis", "Statistical Analysis",
    ),
    "Microservices": (
        "API Gateway", "Service Mesh", "Event-Driven Architecture", "Serverless",
    ),
    "Web Services": ("REST", "SOAP", "GraphQL", "gRPC", "API Design"),
    "Testing": (
        "Unit Testing", "Integration Testing", "TDD", "BDD", "Automated Testing",
        "Jest", "Mocha", "Selenium", "Cypress",
    ),
})

# Directional: experience in the key partially carries over to the values.
TRANSFERABLE_SKILLS = MappingProxyType({
    "Java": ("C#", "Kotlin", "Scala"),
    "React": ("Angular", "Vue"),
    "AWS": ("Azure", "GCP"),
    "SQL Server": ("MySQL", "PostgreSQL", "Oracle"),
    "NoSQL": ("MongoDB", "DynamoDB", "Cassandra"),
    "CI/CD": ("Jenkins", "GitHub Actions", "CircleCI", "GitLab CI"),
    "Docker": ("Containerization", "Kubernetes"),
    "Python": ("R", "Julia"),
    "iOS": ("Mobile Development", "Android"),
    "TensorFlow": ("PyTorch", "Keras"),
})

# First key contained in the skill name applies; order matters because
# "javascript" must be tested before "java".
TECHNOLOGY_RELEVANCE: Tuple[Tuple[str, float], ...] = (
    ("React", 1.2), ("Vue", 1.2), ("TypeScript", 1.2), ("GraphQL", 1.3),
    ("Kubernetes", 1.3), ("Microservices", 1.2), ("Serverless", 1.3),
    ("TensorFlow", 1.3), ("PyTorch", 1.3), ("Docker", 1.2), ("Swift", 1.2),
    ("Kotlin", 1.2), ("Flutter", 1.3),
    ("JavaScript", 1.0), ("Java", 1.0), ("Python", 1.0), ("SQL", 1.0),
    ("AWS", 1.0), ("C#", 1.0),
    ("jQuery", 0.8), ("PHP", 0.9), ("AngularJS", 0.7), ("Objective-C", 0.8),
    ("SOAP", 0.7), ("JSP", 0.7), ("Perl", 0.7), ("VB.NET", 0.8),
)

PARTIAL_CREDIT = 0.7
CLIENT_FOCUS_MULTIPLIER = 2.0


def _contains_skill(text: str, skill: str) -> bool:
    if contains_term(text, skill):
        return True
    parts = skill.lower().split()
    if len(parts) < 2:
        return False
    hits = sum(1 for part in parts if len(part) > 3 and contains_term(text, part))
    return hits >= math.ceil(len(parts) / 2)


def extract_skills(text: Optional[str]) -> List[str]:
    """Known skills mentioned in free text, in vocabulary order, deduplicated."""
    normalized = normalize_text(text)
    if not normalized:
        return []
    found = []
    for primary, related in SKILL_CLUSTERS.items():
        for skill in (primary,) + related:
            if skill not in found and _contains_skill(normalized, skill):
                found.append(skill)
    return found


def _build_relations():
    relations = {}

    def link(a, b):
        a_key, b_key = a.lower(), b.lower()
        if a_key == b_key:
            return
        relations.setdefault(a_key, set()).add(b_key)
        relations.setdefault(b_key, set()).add(a_key)

    for primary, related in SKILL_CLUSTERS.items():
        for skill in related:
            link(primary, skill)
        for i, skill in enumerate(related):
            for other in related[i + 1:]:
                link(skill, other)
    for source, targets in TRANSFERABLE_SKILLS.items():
        for target in targets:
            link(source, target)
    return MappingProxyType({k: frozenset(v) for k, v in relations.items()})


_RELATIONS = _build_relations()


def related_skills(skill: Optional[str]) -> frozenset:
    """Lowercased skills that stand in for ``skill`` at partial credit."""
    if not skill:
        return frozenset()
    return _RELATIONS.get(skill.strip().lower(), frozenset())


def technology_relevance(skill: str) -> float:
    lowered = skill.lower()
    for tech, weight in TECHNOLOGY_RELEVANCE:
        if tech.lower() in lowered:
            return weight
    return 1.0


def _find_related(job_skill: str, candidate_skills: Iterable[str]) -> Optional[str]:
    job_related = related_skills(job_skill)
    job_key = job_skill.lower()
    for candidate_skill in candidate_skills:
        if candidate_skill in job_related or job_key in related_skills(candidate_skill):
            return candidate_skill
    return None


def match_skills(
    job_text: Optional[str],
    candidate_skills: Optional[Iterable[str]],
    client_focus_text: Optional[str] = None,
) -> SkillMatch:
    """
    Weighted overlap between the skills a job asks for and a candidate's.

    Args:
        job_text: Free text the job's required skills are extracted from
        candidate_skills: Skills listed for the candidate
        client_focus_text: Skills the client cares most about (double weight)

    Returns:
        SkillMatch; score is earned weight over possible weight.
    """
    job_skills = extract_skills(job_text)
    if not job_skills:
        return SkillMatch()

    normalized_candidate = []
    for skill in candidate_skills or []:
        key = normalize_text(skill) if isinstance(skill, str) else ""
        if key and key not in normalized_candidate:
            normalized_candidate.append(key)
    if not normalized_candidate:
        return SkillMatch(missing_skills=list(job_skills))

    focus_keys = {s.lower() for s in extract_skills(client_focus_text)}

    result = SkillMatch()
    earned = 0.0
    possible = 0.0
    for job_skill in job_skills:
        weight = technology_relevance(job_skill)
        if job_skill.lower() in focus_keys:
            weight *= CLIENT_FOCUS_MULTIPLIER
        possible += weight

        if job_skill.lower() in normalized_candidate:
            result.matched_skills.append(job_skill)
            if job_skill.lower() in focus_keys:
                result.client_focus_matches.append(job_skill)
            earned += weight
            continue

        related = _find_related(job_skill, normalized_candidate)
        if related is not None:
            result.partial_matches.append(
                PartialSkill(skill=related, related_to=job_skill, weight=PARTIAL_CREDIT)
            )
            earned += weight * PARTIAL_CREDIT
        else:
            result.missing_skills.append(job_skill)

    result.score = min(1.0, max(0.0, earned / possible)) if possible > 0 else 0.0
    return result
