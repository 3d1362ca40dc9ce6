import random

import pytest

from reviewflow.rules.models import PullRequestContext, ReviewerConfig, ReviewerOptions, ReviewerRef, identifiers
from reviewflow.rules.reviewers import (
    collect_candidates,
    default_reviewers,
    exclude,
    global_excludes,
    other_group_members,
    resolve_individuals,
    reviewers_for_author,
    reviewers_for_changed_files,
    sample,
    should_request_review,
)


def refs(*names: str) -> list[ReviewerRef]:
    return [ReviewerRef.parse(name) for name in names]


class TestShouldRequestReview:
    def test_draft_is_ignored_by_default(self) -> None:
        assert not should_request_review("Add cache", is_draft=True, options=ReviewerOptions())

    def test_draft_allowed_when_ignore_draft_disabled(self) -> None:
        options = ReviewerOptions(ignore_draft=False)
        assert should_request_review("Add cache", is_draft=True, options=options)

    def test_ignored_keyword_in_title(self) -> None:
        assert not should_request_review("[DO NOT REVIEW] Add cache", is_draft=False, options=ReviewerOptions())

    def test_keyword_match_is_case_sensitive_substring(self) -> None:
        options = ReviewerOptions(ignored_keywords=["WIP"])
        assert not should_request_review("feature: WIP cache", is_draft=False, options=options)
        assert should_request_review("feature: wip cache", is_draft=False, options=options)

    def test_no_keywords(self) -> None:
        options = ReviewerOptions(ignored_keywords=[])
        assert should_request_review("DO NOT REVIEW", is_draft=False, options=options)


class TestResolveIndividuals:
    def test_groups_are_expanded(self) -> None:
        groups = {"backend": ["bob", "carol"]}
        assert identifiers(resolve_individuals(["backend", "alice"], groups)) == ["bob", "carol", "alice"]

    def test_idempotent_on_individuals(self) -> None:
        groups = {"backend": ["bob", "carol"]}
        individuals = refs("alice", "team:infra", "zoe")

        once = resolve_individuals(individuals, groups)

        assert once == individuals
        assert resolve_individuals(once, groups) == once

    def test_only_one_level_is_expanded(self) -> None:
        groups = {"all": ["backend", "alice"], "backend": ["bob"]}
        assert identifiers(resolve_individuals(["all"], groups)) == ["backend", "alice"]


class TestExclude:
    def test_dedupes_in_first_seen_order(self) -> None:
        assert identifiers(exclude(refs("bob", "alice", "bob", "carol", "alice"))) == ["bob", "alice", "carol"]

    def test_removes_excluded(self) -> None:
        assert identifiers(exclude(refs("bob", "alice", "carol"), ["alice", "dan"])) == ["bob", "carol"]

    def test_teams_and_individuals_are_distinct(self) -> None:
        assert identifiers(exclude(refs("team:ops", "ops"), ["ops"])) == ["team:ops"]


class TestOtherGroupMembers:
    groups = {"team_x": ["bob", "carol", "dan"], "team_y": ["bob", "erin", "carol"], "team_z": ["zed"]}

    def test_disabled(self) -> None:
        assert other_group_members("bob", self.groups, enable_group_assignment=False) == []

    def test_peers_of_every_group(self) -> None:
        peers = other_group_members("bob", self.groups, enable_group_assignment=True)
        assert identifiers(peers) == ["carol", "dan", "erin"]

    def test_author_in_no_group(self) -> None:
        assert other_group_members("nobody", self.groups, enable_group_assignment=True) == []


class TestReviewersForChangedFiles:
    def test_missing_section(self) -> None:
        assert reviewers_for_changed_files(ReviewerConfig(), ["README.md"]) == []

    def test_simple_match(self) -> None:
        config = ReviewerConfig.model_validate({"files": {"*.md": ["alice"]}})
        assert identifiers(reviewers_for_changed_files(config, ["README.md"])) == ["alice"]

    def test_anchored_patterns(self) -> None:
        config = ReviewerConfig.model_validate({"files": {"*.md": ["alice"]}})
        assert reviewers_for_changed_files(config, ["docs/README.md"]) == []

    def test_groups_resolved_and_excludes_applied(self, sample_config: ReviewerConfig) -> None:
        reviewers = reviewers_for_changed_files(sample_config, ["app/main.py", "docs/index.rst"], excludes=["carol"])
        assert identifiers(reviewers) == ["bob", "dan", "wario"]

    def test_team_entries_pass_through(self, sample_config: ReviewerConfig) -> None:
        assert identifiers(reviewers_for_changed_files(sample_config, ["CHANGELOG.md"])) == ["team:writers"]

    def test_no_changed_files(self, sample_config: ReviewerConfig) -> None:
        assert reviewers_for_changed_files(sample_config, []) == []

    def test_invalid_pattern_does_not_block_other_rules(self) -> None:
        config = ReviewerConfig.model_validate({"files": {"log-[z-a].txt": ["alice"], "*.md": ["bob"]}})
        assert identifiers(reviewers_for_changed_files(config, ["README.md", "log-b.txt"])) == ["bob"]


class TestReviewersForAuthor:
    def test_missing_section(self) -> None:
        assert reviewers_for_author(ReviewerConfig(), "toad") == []

    def test_literal_author(self, sample_config: ReviewerConfig) -> None:
        assert identifiers(reviewers_for_author(sample_config, "toad")) == ["yoshi"]

    def test_group_author_excludes_the_author(self, sample_config: ReviewerConfig) -> None:
        assert identifiers(reviewers_for_author(sample_config, "carol")) == ["bob", "dan", "peach"]

    def test_several_keys_can_match(self) -> None:
        config = ReviewerConfig.model_validate(
            {
                "reviewers": {
                    "groups": {"backend": ["bob", "carol"]},
                    "per_author": {"backend": ["peach"], "bob": ["yoshi", "peach"]},
                }
            }
        )
        assert identifiers(reviewers_for_author(config, "bob")) == ["peach", "yoshi"]

    def test_unmatched_author(self, sample_config: ReviewerConfig) -> None:
        assert reviewers_for_author(sample_config, "bowser") == []


class TestDefaultReviewers:
    def test_groups_expanded(self) -> None:
        config = ReviewerConfig.model_validate(
            {"reviewers": {"defaults": ["backend"], "groups": {"backend": ["bob", "carol"]}}}
        )
        assert identifiers(default_reviewers(config)) == ["bob", "carol"]

    def test_missing_defaults(self) -> None:
        assert default_reviewers(ReviewerConfig()) == []

    def test_excludes(self, sample_config: ReviewerConfig) -> None:
        assert identifiers(default_reviewers(sample_config, excludes=["mario"])) == ["luigi"]


def test_global_excludes_expand_groups() -> None:
    config = ReviewerConfig.model_validate(
        {"reviewers": {"groups": {"bots": ["dependabot", "renovate"]}}, "options": {"exclude": ["bots", "alice"]}}
    )
    assert identifiers(global_excludes(config)) == ["dependabot", "renovate", "alice"]


class TestSample:
    def test_unset_returns_everyone(self) -> None:
        pool = refs("a", "b", "c")
        assert sample(pool, None) == pool

    @pytest.mark.parametrize("size", [0, 1, 2, 3])
    def test_subset_of_requested_size(self, size: int) -> None:
        pool = refs("a", "b", "c")
        picked = sample(pool, size)

        assert len(picked) == size
        assert set(picked) <= set(pool)
        assert len(set(picked)) == len(picked)

    def test_pool_smaller_than_requested(self) -> None:
        pool = refs("a", "b")
        assert sorted(identifiers(sample(pool, 5))) == ["a", "b"]

    def test_negative_size(self) -> None:
        assert sample(refs("a", "b"), -1) == []

    def test_uses_random_module(self) -> None:
        random.seed(7)
        first = sample(refs("a", "b", "c", "d", "e"), 2)
        random.seed(7)
        assert sample(refs("a", "b", "c", "d", "e"), 2) == first


class TestCollectCandidates:
    def test_union_of_every_source(self, sample_config: ReviewerConfig) -> None:
        pull_request = PullRequestContext(author="toad", changed_files=["src/app.py", "docs/guide.md"])

        candidates = collect_candidates(sample_config, pull_request)

        assert identifiers(candidates) == ["mario", "luigi", "bob", "carol", "dan", "wario", "yoshi"]

    def test_author_never_a_candidate(self, sample_config: ReviewerConfig) -> None:
        config = sample_config.model_copy(
            update={"options": ReviewerOptions(enable_group_assignment=True)}
        )
        pull_request = PullRequestContext(author="bob", changed_files=["src/app.py", "README.md"])

        candidates = collect_candidates(config, pull_request)

        assert ReviewerRef.individual("bob") not in candidates
        assert identifiers(candidates) == ["mario", "luigi", "carol", "dan", "team:writers", "peach"]

    def test_excluding_a_group_removes_its_members(self) -> None:
        config = ReviewerConfig.model_validate(
            {
                "reviewers": {
                    "defaults": ["backend", "alice"],
                    "groups": {"backend": ["bob", "carol"]},
                },
                "options": {"exclude": ["backend"]},
            }
        )

        candidates = collect_candidates(config, PullRequestContext(author="zoe"))

        assert identifiers(candidates) == ["alice"]

    def test_excluding_a_group_removes_members_added_by_other_rules(self) -> None:
        config = ReviewerConfig.model_validate(
            {
                "reviewers": {
                    "groups": {"backend": ["bob", "carol"]},
                    "per_author": {"zoe": ["bob", "alice"]},
                },
                "files": {"*.py": ["carol"]},
                "options": {"exclude": ["backend"]},
            }
        )

        candidates = collect_candidates(config, PullRequestContext(author="zoe", changed_files=["setup.py"]))

        assert identifiers(candidates) == ["alice"]

    def test_group_assignment_scenario(self) -> None:
        config = ReviewerConfig.model_validate(
            {
                "reviewers": {"groups": {"team_x": ["bob", "carol", "dan"]}},
                "options": {"enable_group_assignment": True},
            }
        )

        candidates = collect_candidates(config, PullRequestContext(author="bob"))

        assert set(identifiers(candidates)) == {"carol", "dan"}

    def test_empty_configuration(self) -> None:
        assert collect_candidates(ReviewerConfig(), PullRequestContext(author="bob", changed_files=["a.py"])) == []
