# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Main entry point for the GitHub release resource.

The pipeline invokes the resource with a JSON request on stdin and reads a
JSON response from stdout. Logs go to stderr so they never mix with the
response.

References:
    - Implementing a resource type: https://concourse-ci.org/implementing-resource-types.html
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import IO, Any

import requests
from github.GithubException import GithubException

from github_release_resource.check import CheckCommand
from github_release_resource.fetch import InCommand, ReleaseNotFoundError
from github_release_resource.github_api import GitHubAPI
from github_release_resource.versions import Version, parse_cursor

logger = logging.getLogger(__name__)


@dataclass
class Source:
    """Resource configuration from the 'source' object of a request."""

    repository: str
    user: str = ""
    access_token: str = ""
    github_api_url: str = ""
    drafts: bool = False

    @property
    def full_name(self) -> str:
        """Return the repository in 'owner/repo' format."""
        if self.user and "/" not in self.repository:
            return f"{self.user}/{self.repository}"
        return self.repository

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Source:
        """Build the configuration from a request's 'source' object.

        Raises:
            ValueError: If the repository is missing or a field has the wrong type.
        """
        repository = data.get("repository") or ""
        if not isinstance(repository, str) or not repository:
            raise ValueError("source.repository is required")

        drafts = data.get("drafts", False)
        if not isinstance(drafts, bool):
            raise ValueError(f"source.drafts must be a boolean, got {drafts!r}")

        return cls(
            repository=repository,
            user=str(data.get("user") or data.get("owner") or ""),
            access_token=str(data.get("access_token") or ""),
            github_api_url=str(data.get("github_api_url") or ""),
            drafts=drafts,
        )


@dataclass
class ResourceRequest:
    """A check or in request read from stdin."""

    source: Source
    version: Version | None = None


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Optional list of CLI arguments. Defaults to sys.argv[1:].

    Returns:
        Namespace with 'command', 'debug' and, for 'in', 'destination'.
    """
    parser = argparse.ArgumentParser(
        description="GitHub release resource - discover and fetch release versions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  RESOURCE_DEBUG               Enable debug logging (true/false)
  GITHUB_TOKEN                 Token used when source.access_token is unset

Examples:
  # Discover new versions
  echo '{"source": {"repository": "owner/repo"}}' | python -m github_release_resource.main check

  # Fetch a version into ./out
  echo '{"source": {"repository": "owner/repo"}, "version": {"tag": "v1.0.0"}}' \\
    | python -m github_release_resource.main in ./out
        """,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=os.environ.get("RESOURCE_DEBUG", "false").lower() == "true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="List release versions newer than the given version")
    in_parser = subparsers.add_parser("in", help="Fetch the release for the given version")
    in_parser.add_argument("destination", help="Directory to write release files into")

    return parser.parse_args(args)


def parse_request(stream: IO[str]) -> ResourceRequest:
    """Read a request object from a JSON stream.

    Raises:
        ValueError: If the payload is not valid JSON or is malformed.
    """
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as e:
        raise ValueError(f"Request is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ValueError("Request must be a JSON object")

    source = payload.get("source")
    if not isinstance(source, dict):
        raise ValueError("Request is missing the 'source' object")

    return ResourceRequest(
        source=Source.from_dict(source),
        version=parse_cursor(payload.get("version")),
    )


def configure_logging(debug: bool) -> None:
    """Configure logging based on debug flag.

    Args:
        debug: If True, enable DEBUG level logging.
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_api(source: Source) -> GitHubAPI:
    """Create the release source for a resource configuration."""
    return GitHubAPI(
        token=source.access_token or None,
        repository=source.full_name,
        base_url=source.github_api_url or None,
    )


def handle_check(api: GitHubAPI, request: ResourceRequest) -> list[dict[str, str]]:
    """Handle a check request.

    Returns:
        New versions as JSON objects, oldest first.
    """
    versions = CheckCommand(api).run(request.version, drafts=request.source.drafts)
    return [version.to_dict() for version in versions]


def handle_in(api: GitHubAPI, request: ResourceRequest, destination: str) -> dict[str, object]:
    """Handle an in request.

    Raises:
        ValueError: If the request carries no version.
    """
    if request.version is None:
        raise ValueError("A version is required to fetch a release")
    return InCommand(api).run(destination, request.version).to_dict()


def main(args: list[str] | None = None) -> None:
    """Main entry point for the resource."""
    parsed = parse_args(args)
    configure_logging(parsed.debug)

    try:
        request = parse_request(sys.stdin)
        api = create_api(request.source)
        logger.debug("Running %s for %s (drafts=%s)", parsed.command, request.source.full_name, request.source.drafts)

        if parsed.command == "check":
            response: object = handle_check(api, request)
        else:
            response = handle_in(api, request, parsed.destination)
    except ValueError as e:
        logger.error("Invalid request: %s", e)
        sys.exit(1)
    except ReleaseNotFoundError as e:
        logger.error("Failed to fetch release: %s", e)
        sys.exit(1)
    except GithubException as e:
        logger.error("GitHub API request failed: %s", e)
        sys.exit(1)
    except requests.exceptions.RequestException as e:
        logger.error("Could not reach GitHub: %s", e)
        sys.exit(1)
    except OSError as e:
        logger.error("Failed to write release files: %s", e)
        sys.exit(1)

    json.dump(response, sys.stdout)
    sys.stdout.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()
