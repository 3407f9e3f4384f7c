# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Fetch a discovered release version into a working directory.

Only release metadata is fetched: the tag, the bare version and the release
notes are written as files, and descriptive metadata is reported back to the
pipeline. Release assets are not downloaded.

References:
    - Concourse resource in: https://concourse-ci.org/implementing-resource-types.html#resource-in
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from github_release_resource.versions import Version, determine_version_from_tag

if TYPE_CHECKING:
    from github_release_resource.github_api import GitHubAPI
    from github_release_resource.releases import Release

logger = logging.getLogger(__name__)


class ReleaseNotFoundError(Exception):
    """Raised when a version no longer resolves to a release."""


@dataclass(frozen=True)
class MetadataPair:
    """A name/value pair shown alongside a fetched version."""

    name: str
    value: str
    url: str = ""
    markdown: bool = False

    def to_dict(self) -> dict[str, str | bool]:
        """Return the JSON object form, omitting unset optional fields."""
        result: dict[str, str | bool] = {"name": self.name, "value": self.value}
        if self.url:
            result["url"] = self.url
        if self.markdown:
            result["markdown"] = True
        return result


@dataclass
class InResponse:
    """Result of fetching a version."""

    version: Version
    metadata: list[MetadataPair] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "version": self.version.to_dict(),
            "metadata": [pair.to_dict() for pair in self.metadata],
        }


def metadata_from_release(release: Release) -> list[MetadataPair]:
    """Describe a release as metadata pairs.

    Args:
        release: The release to describe.

    Returns:
        Pairs for name, url, body, tag, draft and pre-release, each present
        only when the release has that attribute set.
    """
    metadata = []

    if release.name:
        metadata.append(MetadataPair(name="name", value=release.name, url=release.html_url or ""))

    if release.html_url:
        metadata.append(MetadataPair(name="url", value=release.html_url))

    if release.body:
        metadata.append(MetadataPair(name="body", value=release.body, markdown=True))

    if release.tag_name:
        metadata.append(MetadataPair(name="tag", value=release.tag_name))

    if release.draft:
        metadata.append(MetadataPair(name="draft", value="true"))

    if release.prerelease:
        metadata.append(MetadataPair(name="pre-release", value="true"))

    return metadata


class InCommand:
    """Fetch the release identified by a version."""

    def __init__(self, api: GitHubAPI) -> None:
        self._api = api

    def _find_release(self, version: Version) -> Release | None:
        # Drafts are looked up by id: their tag may be missing or reused
        if version.id:
            return self._api.get_release(int(version.id))
        if version.tag:
            return self._api.get_release_by_tag(version.tag)
        return None

    def run(self, destination: str | Path, version: Version) -> InResponse:
        """Write the release's tag, version and notes into ``destination``.

        Args:
            destination: Directory to write into; created if missing.
            version: Version previously reported by the check command.

        Returns:
            InResponse echoing the version with the release metadata.

        Raises:
            ReleaseNotFoundError: If no release matches the version.
            GithubException: If the release lookup fails.
        """
        release = self._find_release(version)
        if release is None:
            raise ReleaseNotFoundError("no releases")

        dest = Path(destination)
        dest.mkdir(parents=True, exist_ok=True)

        if release.tag_name:
            (dest / "tag").write_text(release.tag_name)
            (dest / "version").write_text(determine_version_from_tag(release.tag_name))
            logger.info("Fetched release '%s'", release.tag_name)
        else:
            logger.info("Fetched untagged draft release %d", release.id)

        if release.body:
            (dest / "body").write_text(release.body)

        return InResponse(version=version, metadata=metadata_from_release(release))
