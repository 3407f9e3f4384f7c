# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Release records as seen by the version resolver.

The resolver only needs a release's id, tag name and draft flag. Records
coming from the GitHub API are adapted into this shape so that the
filtering and ordering logic can be exercised with plain fixtures.

References:
    - Releases API: https://docs.github.com/en/rest/releases/releases
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from github.GitRelease import GitRelease


@dataclass(frozen=True)
class Release:
    """A single GitHub release."""

    id: int
    tag_name: str | None = None
    draft: bool = False
    prerelease: bool = False
    name: str | None = None
    body: str | None = None
    html_url: str | None = None

    @property
    def has_tag(self) -> bool:
        """Return True when the release carries a non-empty tag name."""
        return bool(self.tag_name)

    @classmethod
    def from_github(cls, git_release: GitRelease) -> Release:
        """Adapt a PyGithub release object.

        Unpublished drafts come back with an empty tag name; those are
        normalised to None.

        Args:
            git_release: Release returned by PyGithub.

        Returns:
            Release holding the fields the resource cares about.
        """
        return cls(
            id=git_release.id,
            tag_name=git_release.tag_name or None,
            draft=bool(git_release.draft),
            prerelease=bool(git_release.prerelease),
            name=git_release.title or None,
            body=git_release.body or None,
            html_url=git_release.html_url or None,
        )
