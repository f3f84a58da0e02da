# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_branch_verifier

"""
Checks that secondary-main exists at the expected commit and was forked from main.
"""

from coreason_branch_verifier.harness.assertions import ensure, ensure_equal, ensure_in, ensure_matches
from coreason_branch_verifier.harness.context import CheckContext
from coreason_branch_verifier.harness.runner import Check, Scenario
from coreason_branch_verifier.scenarios.constants import (
    MAIN_BRANCH,
    OWNER,
    REPO,
    SECONDARY_MAIN_BRANCH,
    SECONDARY_MAIN_SHA,
    SECONDARY_MAIN_SHA_PREFIX,
)

SHA_PATTERN = r"[0-9a-f]{40}"


async def secondary_main_exists(ctx: CheckContext) -> None:
    branch = await ctx.load_branch(SECONDARY_MAIN_BRANCH)
    ensure(branch.name, "Branch should have a name")
    ensure_equal(branch.name, SECONDARY_MAIN_BRANCH)


async def main_exists(ctx: CheckContext) -> None:
    branch = await ctx.load_branch(MAIN_BRANCH)
    ensure(branch.name, "Branch should have a name")
    ensure_equal(branch.name, MAIN_BRANCH)


async def sha_has_expected_prefix(ctx: CheckContext) -> None:
    sha = ctx.require_branch(SECONDARY_MAIN_BRANCH).head_sha
    ensure(
        sha.startswith(SECONDARY_MAIN_SHA_PREFIX),
        f"Expected SHA to start with {SECONDARY_MAIN_SHA_PREFIX}, got {sha}",
    )


async def sha_matches_full(ctx: CheckContext) -> None:
    sha = ctx.require_branch(SECONDARY_MAIN_BRANCH).head_sha
    ensure_equal(sha, SECONDARY_MAIN_SHA, f"Expected {SECONDARY_MAIN_SHA}, got {sha}")


async def is_ancestor_of_main(ctx: CheckContext) -> None:
    secondary = ctx.require_branch(SECONDARY_MAIN_BRANCH)
    main = ctx.require_branch(MAIN_BRANCH)
    # main may have advanced since the fork, so "ahead" is as good as "identical".
    result = await ctx.client.compare(ctx.owner, ctx.repo, secondary.head_sha, main.head_sha)
    ensure_in(
        result.status,
        ("ahead", "identical"),
        f"Expected main to be ahead of or identical to secondary-main, got status: {result.status}",
    )


async def is_not_protected(ctx: CheckContext) -> None:
    branch = ctx.require_branch(SECONDARY_MAIN_BRANCH)
    ensure_equal(branch.protected, False, "secondary-main should not be protected")


async def sha_is_well_formed(ctx: CheckContext) -> None:
    sha = ctx.require_branch(SECONDARY_MAIN_BRANCH).head_sha
    ensure_matches(sha, SHA_PATTERN, f"SHA should be 40 hex characters, got: {sha}")


async def commit_url_is_valid(ctx: CheckContext) -> None:
    url = ctx.require_branch(SECONDARY_MAIN_BRANCH).head_url
    ensure(url, "Commit should have a URL")
    ensure(
        f"/repos/{ctx.owner}/{ctx.repo}/commits/" in (url or ""),
        f"Commit URL should reference the correct repo, got: {url}",
    )


async def commit_has_expected_structure(ctx: CheckContext) -> None:
    detail = await ctx.client.get_commit(ctx.owner, ctx.repo, SECONDARY_MAIN_SHA)
    ensure(detail.sha, "Commit should have a SHA")
    ensure(detail.commit, "Commit should have commit metadata")
    ensure(detail.commit.message, "Commit should have a message")
    ensure(detail.commit.author, "Commit should have an author")
    ensure(detail.commit.committer, "Commit should have a committer")


def build_scenario() -> Scenario:
    return Scenario(
        name="secondary-main",
        title=f"secondary-main branch in {OWNER}/{REPO}",
        owner=OWNER,
        repo=REPO,
        checks=[
            Check("secondary-main branch exists", secondary_main_exists),
            Check("main branch exists", main_exists),
            Check(
                f"secondary-main SHA starts with expected prefix {SECONDARY_MAIN_SHA_PREFIX}",
                sha_has_expected_prefix,
            ),
            Check("secondary-main SHA matches expected full SHA", sha_matches_full),
            Check("secondary-main is an ancestor of main (main may have advanced)", is_ancestor_of_main),
            Check("secondary-main is not a protected branch", is_not_protected),
            Check("secondary-main commit has valid SHA format (40 hex chars)", sha_is_well_formed),
            Check("secondary-main commit has a valid commit URL", commit_url_is_valid),
            Check("secondary-main commit object has expected structure", commit_has_expected_structure),
        ],
    )
