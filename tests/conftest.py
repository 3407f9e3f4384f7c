"""Shared pytest fixtures for the test suite."""

from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from github_release_resource.releases import Release

_next_id = iter(range(1000, 100000))


def make_release(tag_name: str | None, release_id: int | None = None, draft: bool = False) -> Release:
    """Create a release fixture with the given tag.

    Ids are allocated automatically unless given, since most tests only
    care about the tag.
    """
    return Release(
        id=release_id if release_id is not None else next(_next_id),
        tag_name=tag_name,
        draft=draft,
    )


def make_git_release(
    release_id: int = 1,
    tag_name: str = "v1.0.0",
    draft: bool = False,
    prerelease: bool = False,
    title: str = "release-name",
    body: str = "*markdown*",
    html_url: str = "http://example.com",
) -> MagicMock:
    """Create a mock PyGithub GitRelease object."""
    git_release = MagicMock()
    git_release.id = release_id
    git_release.tag_name = tag_name
    git_release.draft = draft
    git_release.prerelease = prerelease
    git_release.title = title
    git_release.body = body
    git_release.html_url = html_url
    return git_release


@pytest.fixture
def mock_github_api() -> MagicMock:
    """Create a mock GitHubAPI instance for unit tests."""
    mock_api = MagicMock()
    mock_api.list_releases.return_value = []
    mock_api.get_release.return_value = None
    mock_api.get_release_by_tag.return_value = None
    return mock_api


@pytest.fixture
def mock_pygithub() -> Generator[dict[str, Any], None, None]:
    """Patch PyGithub for unit tests."""
    with patch("github_release_resource.github_api.Github") as mock_github:
        mock_repo = MagicMock()
        mock_github.return_value.get_repo.return_value = mock_repo
        yield {"github": mock_github, "repo": mock_repo}


@pytest.fixture
def published_releases() -> list[Release]:
    """Published releases with mixed tag prefixes, in no particular order."""
    return [
        make_release("v0.1.4", 4),
        make_release("0.4.0", 5),
        make_release("v0.1.3", 3),
        make_release("0.1.2", 2),
    ]
