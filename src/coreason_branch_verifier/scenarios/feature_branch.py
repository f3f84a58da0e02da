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
Checks that the issue-13217 feature branch was cut from secondary-main and documented locally.
"""

from coreason_branch_verifier.harness.assertions import (
    ensure,
    ensure_at_least,
    ensure_contains,
    ensure_equal,
    ensure_not_equal,
)
from coreason_branch_verifier.harness.context import CheckContext
from coreason_branch_verifier.harness.runner import Check, Scenario
from coreason_branch_verifier.scenarios.constants import (
    FEATURE_BRANCH,
    FEATURE_BRANCH_PREFIX,
    GITIGNORE_FILE,
    IGNORED_CLONE_DIR,
    ISSUE_NUMBER,
    ISSUE_REFERENCE,
    OWNER,
    README_FILE,
    REPO,
    SECONDARY_MAIN_BRANCH,
    SECONDARY_MAIN_SHA,
)


async def feature_branch_exists(ctx: CheckContext) -> None:
    branch = await ctx.load_branch(FEATURE_BRANCH)
    ensure(branch.name, "Branch should have a name")
    ensure_equal(branch.name, FEATURE_BRANCH)


async def name_follows_convention(ctx: CheckContext) -> None:
    name = ctx.require_branch(FEATURE_BRANCH).name
    ensure(
        name.startswith(FEATURE_BRANCH_PREFIX),
        f"Branch name should start with '{FEATURE_BRANCH_PREFIX}', got '{name}'",
    )
    ensure(ISSUE_REFERENCE in name, f"Branch name should reference issue {ISSUE_NUMBER}, got '{name}'")


async def base_branch_exists(ctx: CheckContext) -> None:
    branch = await ctx.load_branch(SECONDARY_MAIN_BRANCH)
    ensure_equal(branch.head_sha, SECONDARY_MAIN_SHA)


async def is_ahead_of_base(ctx: CheckContext) -> None:
    ctx.require_branch(FEATURE_BRANCH)
    result = await ctx.client.compare(ctx.owner, ctx.repo, SECONDARY_MAIN_BRANCH, FEATURE_BRANCH)
    ensure_at_least(
        result.ahead_by,
        1,
        f"Feature branch should be at least 1 commit ahead of secondary-main, got {result.ahead_by}",
    )
    ensure_equal(
        result.behind_by,
        0,
        f"Feature branch should not be behind secondary-main, got {result.behind_by}",
    )


async def merge_base_matches_base_sha(ctx: CheckContext) -> None:
    result = await ctx.client.compare(ctx.owner, ctx.repo, SECONDARY_MAIN_BRANCH, FEATURE_BRANCH)
    ensure_equal(
        result.merge_base_sha,
        SECONDARY_MAIN_SHA,
        f"Merge base should be {SECONDARY_MAIN_SHA}, got {result.merge_base_sha}",
    )


async def head_differs_from_base(ctx: CheckContext) -> None:
    branch = ctx.require_branch(FEATURE_BRANCH)
    ensure_not_equal(
        branch.head_sha,
        SECONDARY_MAIN_SHA,
        "Feature branch HEAD should differ from secondary-main (has new commits)",
    )


async def is_not_protected(ctx: CheckContext) -> None:
    branch = ctx.require_branch(FEATURE_BRANCH)
    ensure_equal(branch.protected, False, "Feature branch should not be protected")


async def readme_documents_branch(ctx: CheckContext) -> None:
    content = ctx.read_artifact(README_FILE)
    ensure_contains(content, "Task 2", f"{README_FILE} should contain 'Task 2' section")
    ensure_contains(content, FEATURE_BRANCH, f"{README_FILE} should reference branch '{FEATURE_BRANCH}'")
    ensure_contains(content, SECONDARY_MAIN_SHA, f"{README_FILE} should reference base SHA '{SECONDARY_MAIN_SHA}'")
    ensure_contains(content, SECONDARY_MAIN_BRANCH, f"{README_FILE} should reference secondary-main as the base")


async def readme_documents_issue(ctx: CheckContext) -> None:
    content = ctx.read_artifact(README_FILE)
    ensure_contains(content, ISSUE_NUMBER, f"{README_FILE} should reference issue {ISSUE_NUMBER}")
    ensure_contains(content, "RoslynCodeTaskFactory", f"{README_FILE} should reference RoslynCodeTaskFactory")


async def gitignore_excludes_clone(ctx: CheckContext) -> None:
    ensure(ctx.artifact_path(GITIGNORE_FILE).exists(), f"{GITIGNORE_FILE} file should exist")
    content = ctx.read_artifact(GITIGNORE_FILE)
    ensure_contains(content, IGNORED_CLONE_DIR, f"{GITIGNORE_FILE} should exclude {IGNORED_CLONE_DIR}/")


def build_scenario() -> Scenario:
    return Scenario(
        name="feature-branch",
        title=f"feature branch {FEATURE_BRANCH}",
        owner=OWNER,
        repo=REPO,
        checks=[
            Check("feature branch exists", feature_branch_exists),
            Check("feature branch name follows expected convention", name_follows_convention),
            Check("secondary-main branch exists as base", base_branch_exists),
            Check("feature branch is based on secondary-main (compare shows ahead)", is_ahead_of_base),
            Check("feature branch merge base matches secondary-main SHA", merge_base_matches_base_sha),
            Check("feature branch HEAD differs from secondary-main", head_differs_from_base),
            Check("feature branch is not protected", is_not_protected),
            Check(f"{README_FILE} documents the feature branch", readme_documents_branch),
            Check(f"{README_FILE} documents issue {ISSUE_NUMBER} and RoslynCodeTaskFactory", readme_documents_issue),
            Check(f"{GITIGNORE_FILE} excludes {IGNORED_CLONE_DIR}/", gitignore_excludes_clone),
        ],
    )
