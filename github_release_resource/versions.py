# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Version parsing, ordering and the version values exchanged with callers.

Release tags are compared by semantic version, not by creation date or
string order. A single leading non-digit character (usually 'v') is
stripped before parsing, so 'v0.1.4' and '0.1.4' name the same version.

References:
    - Semantic Versioning 2.0.0: https://semver.org/
    - python-semver: https://python-semver.readthedocs.io/
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import semver

if TYPE_CHECKING:
    from github_release_resource.releases import Release

logger = logging.getLogger(__name__)

# One leading non-digit character, e.g. the 'v' in 'v1.2.3'
TAG_PREFIX_PATTERN = re.compile(r"^[^0-9]")


def determine_version_from_tag(tag: str) -> str:
    """Strip a single leading non-digit character from a tag.

    Args:
        tag: Raw tag name (e.g., 'v1.2.3').

    Returns:
        The tag without its prefix character.

    Examples:
        >>> determine_version_from_tag("v1.2.3")
        '1.2.3'
        >>> determine_version_from_tag("1.2.3")
        '1.2.3'
    """
    return TAG_PREFIX_PATTERN.sub("", tag, count=1)


def parse_tag(tag: str | None) -> semver.Version | None:
    """Parse a tag into a semantic version.

    Args:
        tag: Raw tag name, or None for an untagged release.

    Returns:
        The parsed version, or None if the tag is missing or not valid SemVer.

    Examples:
        >>> parse_tag("v0.4.0")
        Version(major=0, minor=4, patch=0, prerelease=None, build=None)
        >>> parse_tag("latest") is None
        True
    """
    if not tag:
        return None
    try:
        return semver.Version.parse(determine_version_from_tag(tag))
    except ValueError:
        return None


def compare_releases(first: Release, second: Release) -> int:
    """Compare two releases by the semantic version of their tags.

    A release whose tag does not parse sorts below any release whose tag
    does. Two unparseable releases compare equal.

    Returns:
        Negative, zero or positive, like a classic cmp function.
    """
    first_version = parse_tag(first.tag_name)
    second_version = parse_tag(second.tag_name)

    if first_version is None:
        return 0 if second_version is None else -1
    if second_version is None:
        return 1

    return first_version.compare(second_version)


def sort_by_version(releases: Iterable[Release]) -> list[Release]:
    """Return releases in ascending semantic-version order.

    The sort is stable, so releases with equal versions keep their input
    order.
    """
    return sorted(releases, key=functools.cmp_to_key(compare_releases))


@dataclass(frozen=True)
class Version:
    """A release version as reported to, and received back from, the pipeline.

    Published releases are identified by tag. Drafts additionally carry
    their numeric release id, since a draft may be retagged or have no tag
    at all.
    """

    tag: str = ""
    id: str = ""

    @property
    def is_empty(self) -> bool:
        """Return True when neither a tag nor an id is set."""
        return not self.tag and not self.id

    @classmethod
    def from_release(cls, release: Release) -> Version:
        """Build the version that identifies a release."""
        if release.draft:
            return cls(tag=release.tag_name or "", id=str(release.id))
        return cls(tag=release.tag_name or "")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Version:
        """Build a version from its JSON object form.

        Raises:
            ValueError: If a field is present but is not a string or integer.
        """
        fields = {}
        for key in ("tag", "id"):
            value = data.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                raise ValueError(f"Version field '{key}' must be a string, got {type(value).__name__}")
            fields[key] = str(value)
        return cls(**fields)

    def to_dict(self) -> dict[str, str]:
        """Return the JSON object form, omitting empty fields."""
        result = {}
        if self.tag:
            result["tag"] = self.tag
        if self.id:
            result["id"] = self.id
        return result

    def __str__(self) -> str:
        """Return the tag, falling back to the id for untagged drafts."""
        return self.tag or self.id


def parse_cursor(data: Mapping[str, Any] | None) -> Version | None:
    """Parse the caller's last known version.

    Args:
        data: The 'version' object of a request, or None.

    Returns:
        None when there is no prior version (first run), otherwise the
        version to compute newer releases against.

    Raises:
        ValueError: If the version object is malformed.

    Examples:
        >>> parse_cursor(None) is None
        True
        >>> parse_cursor({}) is None
        True
        >>> parse_cursor({"tag": "v1.0.0"})
        Version(tag='v1.0.0', id='')
    """
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise ValueError(f"Version must be a JSON object, got {type(data).__name__}")

    version = Version.from_dict(data)
    if version.is_empty:
        logger.debug("Empty version supplied, treating as first run")
        return None
    return version
