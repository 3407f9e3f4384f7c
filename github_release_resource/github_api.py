# Copyright (c) 2026 Mark Ferrell. MIT License.
"""GitHub API wrapper for reading releases.

References:
    - GitHub REST API: https://docs.github.com/en/rest
    - PyGithub Documentation: https://pygithub.readthedocs.io/
"""

from __future__ import annotations

import logging
import os

from github import Auth, Github
from github.GithubException import UnknownObjectException

from github_release_resource.releases import Release

logger = logging.getLogger(__name__)


class GitHubAPI:
    """Wrapper around PyGithub for release lookups.

    Authenticates with a token when one is available, defaulting to the
    GITHUB_TOKEN environment variable. Without a token, requests are made
    anonymously, which only works for public repositories and never
    returns drafts.

    References:
        - Authentication: https://docs.github.com/en/rest/authentication
        - GitHub Enterprise Server API: https://docs.github.com/en/enterprise-server@latest/rest
    """

    def __init__(
        self,
        token: str | None = None,
        repository: str | None = None,
        base_url: str | None = None,
    ) -> None:
        """Initialize the GitHub API client.

        Args:
            token: GitHub token for authentication. Defaults to GITHUB_TOKEN env var.
            repository: Repository in 'owner/repo' format. Defaults to GITHUB_REPOSITORY env var.
            base_url: API root for GitHub Enterprise (e.g., 'https://ghe.example.com/api/v3').

        Raises:
            ValueError: If no repository is given.

        References:
            - Get a repository: https://docs.github.com/en/rest/repos/repos#get-a-repository
        """
        self._token = token or os.environ.get("GITHUB_TOKEN", "")
        self._repository = repository or os.environ.get("GITHUB_REPOSITORY", "")

        if not self._repository:
            raise ValueError("Repository is required. Set GITHUB_REPOSITORY or pass repository parameter.")

        kwargs = {}
        if self._token:
            kwargs["auth"] = Auth.Token(self._token)
        else:
            logger.debug("No GitHub token configured, using anonymous access")
        if base_url:
            kwargs["base_url"] = base_url

        self._github = Github(**kwargs)
        self._repo = self._github.get_repo(self._repository)

    def list_releases(self) -> list[Release]:
        """List all releases in the repository.

        Returns:
            Releases of the repository, drafts included when the token
            grants push access.

        Raises:
            GithubException: If the releases cannot be listed.

        References:
            - List releases: https://docs.github.com/en/rest/releases/releases#list-releases
        """
        return [Release.from_github(release) for release in self._repo.get_releases()]

    def get_release(self, release_id: int) -> Release | None:
        """Get a release by its numeric id.

        Args:
            release_id: The release id.

        Returns:
            The release, or None if it doesn't exist.

        References:
            - Get a release: https://docs.github.com/en/rest/releases/releases#get-a-release
        """
        try:
            return Release.from_github(self._repo.get_release(release_id))
        except UnknownObjectException:
            return None

    def get_release_by_tag(self, tag_name: str) -> Release | None:
        """Get a published release by its tag name.

        Args:
            tag_name: Name of the tag (e.g., 'v1.2.0').

        Returns:
            The release, or None if no release uses that tag.

        References:
            - Get a release by tag name: https://docs.github.com/en/rest/releases/releases#get-a-release-by-tag-name
        """
        try:
            return Release.from_github(self._repo.get_release(tag_name))
        except UnknownObjectException:
            return None
