"""
Repository statistics folding for the Profile context.

Fetching from the hosting API (paging, auth, rate limits) happens outside
this package. What arrives here is already aggregated: account counters,
per-language byte totals or a ranked language list, and notable
repositories. This module ranks and filters those numbers and turns them
into an ExtractedFragment, so they reach the record through the same
merge rules as document extraction.

Stats file shape (JSON):

    {
      "username": "jane",
      "display_name": "Jane Doe",
      "blog": "https://jane.dev",
      "public_repos": 12,
      "followers": 40,
      "following": 3,
      "account_created": "2019-03-01T12:00:00Z",
      "total_stars": 25,
      "total_forks": 4,
      "language_bytes": {"Python": 120000, "TypeScript": 40000},
      "notable_repos": [{"name": "...", "stars": 3, "forks": 1, ...}]
    }
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from autorriculum.contexts.profile.exceptions import InvalidProfileStructureError
from autorriculum.contexts.profile.nomenclature import derive_key
from autorriculum.contexts.profile.profile_data_structure import (
    ExtractedFragment,
    ProfileRecord,
    TechnicalSkills,
)

ACCOUNT_URL_TEMPLATE = "https://github.com/{username}"

MOST_USED_LANGUAGES_LIMIT = 10
SKILL_LANGUAGES_LIMIT = 5
NOTABLE_REPOS_LIMIT = 10
PROJECT_REPOS_LIMIT = 5
MIN_DESCRIPTION_LENGTH = 10

# Facts are only worth stating past these thresholds
FOLLOWERS_FACT_THRESHOLD = 10
PUBLIC_REPOS_FACT_THRESHOLD = 5


@dataclass
class NotableRepository:
    name: str
    description: str = "No description available"
    language: str = "Unknown"
    stars: int = 0
    forks: int = 0
    url: str = ""
    topics: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NotableRepository":
        if not isinstance(data, Mapping) or not data.get("name"):
            raise InvalidProfileStructureError(f"Repository entry needs a 'name': {data!r}")
        return cls(
            name=str(data["name"]),
            description=data.get("description") or "No description available",
            language=data.get("language") or "Unknown",
            stars=int(data.get("stars", data.get("stargazers_count", 0)) or 0),
            forks=int(data.get("forks", data.get("forks_count", 0)) or 0),
            url=data.get("url") or data.get("html_url") or "",
            topics=list(data.get("topics") or []),
        )

    @property
    def popularity(self) -> int:
        return self.stars + self.forks

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "language": self.language,
            "stars": self.stars,
            "forks": self.forks,
            "url": self.url,
            "topics": list(self.topics),
        }


@dataclass
class RepositoryStats:
    """Aggregated account statistics handed over by the stats collaborator."""

    username: str
    display_name: Optional[str] = None
    blog: Optional[str] = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0
    account_created: Optional[str] = None
    total_stars: int = 0
    total_forks: int = 0
    most_used_languages: List[str] = field(default_factory=list)
    notable_repos: List[NotableRepository] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RepositoryStats":
        """
        Build stats from the aggregated JSON shape.

        Accepts either "language_bytes" (ranked here) or an already ranked
        "most_used_languages" list.

        Raises:
            InvalidProfileStructureError: If username is missing or a counter is not numeric
        """
        if not isinstance(data, Mapping) or not data.get("username"):
            raise InvalidProfileStructureError("Repository stats need a 'username'")

        if "language_bytes" in data:
            languages = rank_languages(data["language_bytes"])
        else:
            languages = list(data.get("most_used_languages") or [])

        try:
            return cls(
                username=str(data["username"]),
                display_name=data.get("display_name") or data.get("name"),
                blog=data.get("blog") or None,
                public_repos=int(data.get("public_repos", 0)),
                followers=int(data.get("followers", 0)),
                following=int(data.get("following", 0)),
                account_created=data.get("account_created") or data.get("created_at"),
                total_stars=int(data.get("total_stars", 0)),
                total_forks=int(data.get("total_forks", 0)),
                most_used_languages=languages,
                notable_repos=[
                    NotableRepository.from_dict(repo) for repo in data.get("notable_repos") or []
                ],
            )
        except (TypeError, ValueError) as e:
            raise InvalidProfileStructureError(f"Malformed repository stats: {e}") from e

    @classmethod
    def from_file(cls, stats_path: Path) -> "RepositoryStats":
        try:
            data = json.loads(Path(stats_path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidProfileStructureError(f"Stats file is not valid JSON: {stats_path} ({e})") from e
        return cls.from_dict(data)

    @property
    def account_url(self) -> str:
        return ACCOUNT_URL_TEMPLATE.format(username=self.username)

    def to_dict(self) -> Dict[str, Any]:
        """Stored github_stats shape."""
        return {
            "total_repos": self.public_repos,
            "total_stars": self.total_stars,
            "total_forks": self.total_forks,
            "followers": self.followers,
            "following": self.following,
            "account_created": self.account_created,
            "most_used_languages": self.most_used_languages[:MOST_USED_LANGUAGES_LIMIT],
            "notable_repos": [repo.to_dict() for repo in self.notable_repos[:NOTABLE_REPOS_LIMIT]],
        }


def rank_languages(language_bytes: Mapping[str, int], limit: int = MOST_USED_LANGUAGES_LIMIT) -> List[str]:
    """
    Rank languages by total byte count, largest first.

    Ties keep the input order.
    """
    ranked = sorted(language_bytes.items(), key=lambda item: item[1], reverse=True)
    return [language for language, _ in ranked[:limit]]


def is_notable(repo: Mapping[str, Any]) -> bool:
    """A repository is notable if it has stars, forks, topics, or a real description."""
    description = repo.get("description") or ""
    return bool(
        repo.get("stargazers_count", 0) > 0
        or repo.get("forks_count", 0) > 0
        or repo.get("topics")
        or len(description) > MIN_DESCRIPTION_LENGTH
    )


def summarize_repositories(
    repos: Iterable[Mapping[str, Any]],
    language_bytes_by_repo: Optional[Mapping[str, Mapping[str, int]]] = None,
) -> Dict[str, Any]:
    """
    Aggregate raw repository listings into stats fields.

    Forks and archived repositories are ignored.

    Args:
        repos: Repository dicts as listed by the hosting API
               (name, stargazers_count, forks_count, fork, archived, ...)
        language_bytes_by_repo: Optional repo name -> {language: bytes}

    Returns:
        Dict with total_stars, total_forks, language_bytes and notable_repos
        (sorted by stars + forks, most popular first), ready to be merged
        into a RepositoryStats JSON
    """
    language_bytes_by_repo = language_bytes_by_repo or {}
    total_stars = 0
    total_forks = 0
    language_bytes: Dict[str, int] = {}
    notable = []

    for repo in repos:
        if repo.get("fork") or repo.get("archived"):
            continue

        total_stars += repo.get("stargazers_count", 0)
        total_forks += repo.get("forks_count", 0)

        for language, size in language_bytes_by_repo.get(repo.get("name"), {}).items():
            language_bytes[language] = language_bytes.get(language, 0) + size

        if is_notable(repo):
            notable.append(NotableRepository.from_dict(repo))

    notable.sort(key=lambda repo: repo.popularity, reverse=True)

    return {
        "total_stars": total_stars,
        "total_forks": total_forks,
        "language_bytes": language_bytes,
        "notable_repos": [repo.to_dict() for repo in notable],
    }


def _project_entry(repo: NotableRepository) -> Dict[str, Any]:
    return {
        "type": "open_source_project",
        "platform": "GitHub",
        "language": repo.language,
        "url": repo.url,
        "description": repo.description,
        "stars": repo.stars,
        "forks": repo.forks,
        "topics": list(repo.topics),
        "status": "published",
    }


def stats_facts(stats: RepositoryStats) -> List[str]:
    """Human-readable facts for counters past their thresholds."""
    facts = []
    if stats.total_stars > 0:
        facts.append(f"{stats.total_stars} stars on GitHub repositories")
    if stats.followers > FOLLOWERS_FACT_THRESHOLD:
        facts.append(f"{stats.followers} followers on GitHub")
    if stats.public_repos > PUBLIC_REPOS_FACT_THRESHOLD:
        facts.append(f"{stats.public_repos} public repositories on GitHub")
    return facts


def stats_to_fragment(stats: RepositoryStats, current: ProfileRecord) -> ExtractedFragment:
    """
    Turn repository statistics into a fragment for merge_profile().

    The programming-languages sub-list replaces the stored one on merge, so
    it is built here as the stored list extended with the top languages.

    Args:
        stats: Aggregated statistics
        current: Stored profile (read only, for the programming-languages union)

    Returns:
        ExtractedFragment with contact, name, facts, projects,
        technical_skills.programming_languages and github_stats
    """
    contact = [stats.account_url]
    if stats.blog:
        contact.append(stats.blog)

    existing_languages = []
    if current.technical_skills and current.technical_skills.programming_languages:
        existing_languages = list(current.technical_skills.programming_languages)
    programming_languages = existing_languages + [
        language
        for language in stats.most_used_languages[:SKILL_LANGUAGES_LIMIT]
        if language not in existing_languages
    ]

    projects = {}
    for repo in stats.notable_repos[:PROJECT_REPOS_LIMIT]:
        if repo.stars > 0 or repo.forks > 0 or repo.topics:
            key = derive_key(repo.name)
            if key and key not in projects:
                projects[key] = _project_entry(repo)

    return ExtractedFragment(
        name=stats.display_name,
        contact=contact,
        facts=stats_facts(stats) or None,
        projects=projects or None,
        technical_skills=TechnicalSkills(programming_languages=programming_languages),
        github_stats=stats.to_dict(),
    )
