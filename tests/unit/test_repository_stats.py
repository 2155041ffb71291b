"""Unit tests for repository statistics folding."""

import pytest

from autorriculum.contexts.profile.exceptions import InvalidProfileStructureError
from autorriculum.contexts.profile.profile_data_structure import ProfileRecord, TechnicalSkills
from autorriculum.contexts.profile.repository_stats import (
    RepositoryStats,
    rank_languages,
    stats_facts,
    stats_to_fragment,
    summarize_repositories,
)

REPOS = [
    {
        "name": "resume-engine",
        "description": "Heuristic resume parser",
        "language": "Python",
        "stargazers_count": 4,
        "forks_count": 1,
        "html_url": "https://github.com/alice/resume-engine",
        "topics": ["nlp"],
    },
    {
        "name": "forked-lib",
        "stargazers_count": 100,
        "forks_count": 50,
        "fork": True,
    },
    {
        "name": "old-project",
        "stargazers_count": 30,
        "archived": True,
    },
    {
        "name": "dotfiles",
        "description": "",
        "stargazers_count": 0,
        "forks_count": 0,
    },
    {
        "name": "Data Viz Toolkit",
        "description": "Plotting helpers for dashboards",
        "language": "TypeScript",
        "stargazers_count": 10,
        "forks_count": 2,
        "html_url": "https://github.com/alice/data-viz",
    },
]

LANGUAGE_BYTES = {
    "resume-engine": {"Python": 5000, "Shell": 200},
    "forked-lib": {"C": 100000},
    "Data Viz Toolkit": {"TypeScript": 3000, "Python": 1000},
}


@pytest.fixture
def stats():
    summary = summarize_repositories(REPOS, LANGUAGE_BYTES)
    return RepositoryStats.from_dict(
        {
            "username": "alice",
            "display_name": "Alice Smith",
            "blog": "https://alice.dev",
            "public_repos": 12,
            "followers": 11,
            "following": 3,
            **summary,
        }
    )


@pytest.mark.unit
def test_rank_languages():
    assert rank_languages({"Python": 100, "Go": 300, "C": 50}, limit=2) == ["Go", "Python"]


@pytest.mark.unit
def test_summarize_skips_forks_and_archived():
    summary = summarize_repositories(REPOS, LANGUAGE_BYTES)

    assert summary["total_stars"] == 14
    assert summary["total_forks"] == 3
    assert summary["language_bytes"] == {"Python": 6000, "Shell": 200, "TypeScript": 3000}


@pytest.mark.unit
def test_notable_repos_sorted_by_popularity():
    """Repos without stars, forks, topics or a real description are left out."""
    summary = summarize_repositories(REPOS)
    assert [repo["name"] for repo in summary["notable_repos"]] == [
        "Data Viz Toolkit",
        "resume-engine",
    ]


@pytest.mark.unit
def test_stats_from_dict_ranks_language_bytes(stats):
    assert stats.most_used_languages == ["Python", "TypeScript", "Shell"]
    assert stats.account_url == "https://github.com/alice"


@pytest.mark.unit
def test_stats_from_dict_requires_username():
    with pytest.raises(InvalidProfileStructureError):
        RepositoryStats.from_dict({"followers": 3})


@pytest.mark.unit
def test_stats_from_dict_rejects_non_numeric_counters():
    with pytest.raises(InvalidProfileStructureError):
        RepositoryStats.from_dict({"username": "alice", "followers": "many"})


@pytest.mark.unit
def test_facts_thresholds(stats):
    assert stats_facts(stats) == [
        "14 stars on GitHub repositories",
        "11 followers on GitHub",
        "12 public repositories on GitHub",
    ]
    assert stats_facts(RepositoryStats(username="bob", followers=10, public_repos=5)) == []


@pytest.mark.unit
def test_fragment_from_stats(stats):
    current = ProfileRecord(technical_skills=TechnicalSkills(programming_languages=["Rust", "Python"]))

    fragment = stats_to_fragment(stats, current)

    assert fragment.name == "Alice Smith"
    assert fragment.contact == ["https://github.com/alice", "https://alice.dev"]
    assert fragment.technical_skills.programming_languages == [
        "Rust",
        "Python",
        "TypeScript",
        "Shell",
    ]
    assert list(fragment.projects) == ["data_viz_toolkit", "resume_engine"]
    assert fragment.projects["resume_engine"] == {
        "type": "open_source_project",
        "platform": "GitHub",
        "language": "Python",
        "url": "https://github.com/alice/resume-engine",
        "description": "Heuristic resume parser",
        "stars": 4,
        "forks": 1,
        "topics": ["nlp"],
        "status": "published",
    }
    assert fragment.github_stats["total_stars"] == 14
    assert fragment.github_stats["most_used_languages"] == ["Python", "TypeScript", "Shell"]


@pytest.mark.unit
def test_fragment_without_notable_repos():
    fragment = stats_to_fragment(RepositoryStats(username="bob"), ProfileRecord())

    assert fragment.contact == ["https://github.com/bob"]
    assert fragment.projects is None
    assert fragment.facts is None
    assert fragment.technical_skills.programming_languages == []
