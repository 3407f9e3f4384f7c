# Copyright (c) 2026 Mark Ferrell. MIT License.
"""GitHub Release Resource - Core modules."""

from github_release_resource.check import CheckCommand, filter_candidates, resolve_versions
from github_release_resource.github_api import GitHubAPI
from github_release_resource.releases import Release
from github_release_resource.versions import Version, parse_cursor, sort_by_version

__all__ = [
    "CheckCommand",
    "GitHubAPI",
    "Release",
    "Version",
    "filter_candidates",
    "parse_cursor",
    "resolve_versions",
    "sort_by_version",
]
