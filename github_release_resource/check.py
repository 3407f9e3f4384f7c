# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Version discovery for the release resource.

Given every release of a repository and the last version the pipeline saw,
works out which releases are new. Releases are ordered by semantic version
of their tags, and the resource tracks either drafts or published releases,
never both at once.

References:
    - Concourse resource check: https://concourse-ci.org/implementing-resource-types.html#resource-check
    - Semantic Versioning 2.0.0: https://semver.org/
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from github_release_resource.versions import Version, determine_version_from_tag, parse_tag, sort_by_version

if TYPE_CHECKING:
    from github_release_resource.github_api import GitHubAPI
    from github_release_resource.releases import Release

logger = logging.getLogger(__name__)


def filter_candidates(releases: Iterable[Release], drafts: bool) -> list[Release]:
    """Reduce a release collection to the releases that can be versioned.

    A release is kept only if its draft status matches ``drafts``, it has a
    tag, and that tag parses as a semantic version.

    Args:
        releases: All releases of the repository.
        drafts: Track draft releases instead of published ones.

    Returns:
        The surviving releases, in input order.

    Examples:
        >>> from github_release_resource.releases import Release
        >>> releases = [Release(1, "v1.0.0"), Release(2, "latest"), Release(3, "v2.0.0", draft=True)]
        >>> [r.id for r in filter_candidates(releases, drafts=False)]
        [1]
    """
    candidates = []
    for release in releases:
        if release.draft != drafts:
            continue
        if not release.has_tag:
            continue
        if parse_tag(release.tag_name) is None:
            logger.debug("Ignoring release %d: tag '%s' is not a semantic version", release.id, release.tag_name)
            continue
        candidates.append(release)
    return candidates


def _same_tag(first: str | None, second: str | None) -> bool:
    """Compare two tags ignoring their prefix character, so 'v1.0.0' equals '1.0.0'."""
    if not first or not second:
        return False
    return determine_version_from_tag(first) == determine_version_from_tag(second)


def _matches_cursor(release: Release, cursor: Version) -> bool:
    """Check whether a release is the one the cursor points at.

    Drafts are matched by id since their tag may change; published
    releases are matched by tag, ignoring any prefix character.
    """
    if release.draft:
        return cursor.id == str(release.id)
    return _same_tag(cursor.tag, release.tag_name)


def resolve_versions(candidates: Sequence[Release], cursor: Version | None) -> list[Version]:
    """Compute the versions that are newer than the cursor.

    Args:
        candidates: Filtered releases in ascending version order.
        cursor: Last version the pipeline saw, or None on the first run.

    Returns:
        Versions newer than the cursor, oldest first. On the first run only
        the latest version is returned. If the cursor no longer matches any
        candidate, history is discarded and only the latest version is
        returned.

    Examples:
        >>> from github_release_resource.releases import Release
        >>> candidates = [Release(1, "v0.1.3"), Release(2, "v0.1.4"), Release(3, "0.4.0")]
        >>> resolve_versions(candidates, Version(tag="v0.1.3"))
        [Version(tag='v0.1.4', id=''), Version(tag='0.4.0', id='')]
        >>> resolve_versions(candidates, None)
        [Version(tag='0.4.0', id='')]
    """
    if not candidates:
        return []

    latest = candidates[-1]

    if cursor is None:
        return [Version.from_release(latest)]

    if _same_tag(cursor.tag, latest.tag_name):
        return []

    matched = False
    newer: list[Version] = []
    for release in candidates:
        if matched:
            newer.append(Version.from_release(release))
        elif _matches_cursor(release, cursor):
            matched = True

    if not matched:
        logger.info("Version '%s' is no longer present, starting over from latest '%s'", cursor, latest.tag_name)
        return [Version.from_release(latest)]

    return newer


class CheckCommand:
    """Discover new release versions of a repository."""

    def __init__(self, api: GitHubAPI) -> None:
        """Initialize the command.

        Args:
            api: Release source used to list the repository's releases.
        """
        self._api = api

    def run(self, cursor: Version | None, drafts: bool = False) -> list[Version]:
        """Fetch releases and return the versions newer than the cursor.

        Args:
            cursor: Last version the pipeline saw, or None on the first run.
            drafts: Track draft releases instead of published ones.

        Returns:
            New versions, oldest first. Empty when there is nothing new,
            including when the repository has no usable releases.

        Raises:
            GithubException: If the releases cannot be listed.
        """
        releases = self._api.list_releases()
        logger.debug("Fetched %d releases", len(releases))

        candidates = sort_by_version(filter_candidates(releases, drafts))
        if not candidates:
            logger.info("No %s releases with semantic version tags found", "draft" if drafts else "published")

        versions = resolve_versions(candidates, cursor)
        logger.debug("Resolved %d new versions", len(versions))
        return versions
