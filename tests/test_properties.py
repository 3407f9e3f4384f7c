# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Property-based tests for version discovery.

Uses hypothesis to generate random release sets and verify the resolver's
invariants hold across all of them.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from github_release_resource.check import filter_candidates, resolve_versions
from github_release_resource.releases import Release
from github_release_resource.versions import Version, parse_tag, sort_by_version

version_number = st.integers(min_value=0, max_value=50)


@st.composite
def semver_triple(draw: st.DrawFn) -> tuple[int, int, int]:
    """Generate (major, minor, patch) triples."""
    return (draw(version_number), draw(version_number), draw(version_number))


@st.composite
def release_set(draw: st.DrawFn, min_size: int = 1) -> list[Release]:
    """Generate published releases with distinct versions, randomly prefixed."""
    triples = draw(st.lists(semver_triple(), min_size=min_size, max_size=12, unique=True))
    releases = []
    for index, (major, minor, patch) in enumerate(triples):
        prefix = draw(st.sampled_from(["", "v"]))
        releases.append(Release(id=index + 1, tag_name=f"{prefix}{major}.{minor}.{patch}"))
    return releases


def _ordered(releases: list[Release]) -> list[Release]:
    return sort_by_version(filter_candidates(releases, drafts=False))


class TestResolverProperties:
    """Invariants of resolve_versions() over generated release sets."""

    @settings(max_examples=100)
    @given(releases=release_set())
    def test_first_run_returns_maximum(self, releases: list[Release]) -> None:
        """Without a cursor the result is the single highest version."""
        candidates = _ordered(releases)
        highest = max(releases, key=lambda r: parse_tag(r.tag_name))
        assert resolve_versions(candidates, None) == [Version(tag=highest.tag_name)]

    @settings(max_examples=100)
    @given(releases=release_set())
    def test_cursor_at_maximum_returns_nothing(self, releases: list[Release]) -> None:
        candidates = _ordered(releases)
        assert resolve_versions(candidates, Version(tag=candidates[-1].tag_name)) == []

    @settings(max_examples=100)
    @given(releases=release_set(), data=st.data())
    def test_cursor_returns_everything_after_it(self, releases: list[Release], data: st.DataObject) -> None:
        candidates = _ordered(releases)
        k = data.draw(st.integers(min_value=0, max_value=len(candidates) - 1))
        result = resolve_versions(candidates, Version(tag=candidates[k].tag_name))
        assert result == [Version(tag=r.tag_name) for r in candidates[k + 1 :]]

    @settings(max_examples=100)
    @given(releases=release_set())
    def test_unknown_cursor_behaves_like_first_run(self, releases: list[Release]) -> None:
        candidates = _ordered(releases)
        unknown = Version(tag="v999.999.999")
        assert resolve_versions(candidates, unknown) == resolve_versions(candidates, None)

    @settings(max_examples=100)
    @given(releases=release_set(min_size=0), data=st.data())
    def test_resolution_is_idempotent(self, releases: list[Release], data: st.DataObject) -> None:
        candidates = _ordered(releases)
        tags = [r.tag_name for r in releases] + ["v999.0.0"]
        cursor = data.draw(st.one_of(st.none(), st.sampled_from(tags).map(lambda t: Version(tag=t))))
        assert resolve_versions(candidates, cursor) == resolve_versions(candidates, cursor)


class TestOrderingProperties:
    """Invariants of sort_by_version()."""

    @settings(max_examples=100)
    @given(releases=release_set(), data=st.data())
    def test_order_is_independent_of_input_order(self, releases: list[Release], data: st.DataObject) -> None:
        shuffled = data.draw(st.permutations(releases))
        assert sort_by_version(shuffled) == sort_by_version(releases)

    @settings(max_examples=100)
    @given(releases=release_set())
    def test_order_is_ascending(self, releases: list[Release]) -> None:
        versions = [parse_tag(r.tag_name) for r in sort_by_version(releases)]
        assert all(a < b for a, b in zip(versions, versions[1:]))

    @settings(max_examples=100)
    @given(tags=st.lists(st.text(max_size=12), max_size=10))
    def test_arbitrary_tags_never_raise(self, tags: list[str]) -> None:
        """Random tag strings are filtered out or sorted, never an error."""
        releases = [Release(id=i, tag_name=t) for i, t in enumerate(tags)]
        candidates = _ordered(releases)
        assert all(parse_tag(r.tag_name) is not None for r in candidates)
        resolve_versions(candidates, None)
