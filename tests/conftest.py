import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import httpx
import pytest

from coreason_branch_verifier.api.github import AsyncGitHubClient
from coreason_branch_verifier.config import Settings
from coreason_branch_verifier.harness.context import CheckContext
from coreason_branch_verifier.scenarios.constants import FEATURE_BRANCH, OWNER, REPO, SECONDARY_MAIN_SHA

MAIN_SHA = "4b6f0a1e9c2d3b7a8e5f6c1d2a3b4c5d6e7f8091"
FEATURE_SHA = "9e8d7c6b5a4f3e2d1c0b9a8f7e6d5c4b3a291807"
REPO_PATH = f"/repos/{OWNER}/{REPO}"
ENCODED_FEATURE = FEATURE_BRANCH.replace("/", "%2F")


def branch_payload(name: str, sha: str, protected: bool = False) -> Dict[str, Any]:
    return {
        "name": name,
        "commit": {"sha": sha, "url": f"https://api.github.com{REPO_PATH}/commits/{sha}"},
        "protected": protected,
        "_links": {"self": f"https://api.github.com{REPO_PATH}/branches/{name}"},
    }


def compare_payload(ahead_by: int, behind_by: int, status: str, merge_base: str) -> Dict[str, Any]:
    return {
        "ahead_by": ahead_by,
        "behind_by": behind_by,
        "status": status,
        "total_commits": ahead_by,
        "merge_base_commit": {"sha": merge_base, "url": f"https://api.github.com{REPO_PATH}/commits/{merge_base}"},
    }


def commit_payload(sha: str) -> Dict[str, Any]:
    actor = {"name": "Bot", "email": "bot@example.com", "date": "2025-01-01T00:00:00Z"}
    return {
        "sha": sha,
        "url": f"https://api.github.com{REPO_PATH}/commits/{sha}",
        "commit": {"message": "Merge pull request #1", "author": actor, "committer": actor},
    }


class FakeGitHub:
    """In-memory GitHub API keyed by raw (still percent-encoded) request path."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, body: Any, status: int = 200) -> None:
        self.routes[path] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.decode()
        if path not in self.routes:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body = self.routes[path]
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        if isinstance(body, str):
            return httpx.Response(status, content=body.encode())
        return httpx.Response(status, content=json.dumps(body).encode(), headers={"content-type": "application/json"})

    def client(self, settings: Settings) -> AsyncGitHubClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return AsyncGitHubClient(settings, http_client=http)

    def paths(self) -> List[str]:
        return [r.url.raw_path.decode() for r in self.requests]


def healthy_github() -> FakeGitHub:
    fake = FakeGitHub()
    fake.add(f"{REPO_PATH}/branches/secondary-main", branch_payload("secondary-main", SECONDARY_MAIN_SHA))
    fake.add(f"{REPO_PATH}/branches/main", branch_payload("main", MAIN_SHA, protected=True))
    fake.add(f"{REPO_PATH}/branches/{ENCODED_FEATURE}", branch_payload(FEATURE_BRANCH, FEATURE_SHA))
    fake.add(
        f"{REPO_PATH}/compare/{SECONDARY_MAIN_SHA}...{MAIN_SHA}",
        compare_payload(12, 0, "ahead", SECONDARY_MAIN_SHA),
    )
    fake.add(
        f"{REPO_PATH}/compare/secondary-main...{ENCODED_FEATURE}",
        compare_payload(1, 0, "ahead", SECONDARY_MAIN_SHA),
    )
    fake.add(f"{REPO_PATH}/commits/{SECONDARY_MAIN_SHA}", commit_payload(SECONDARY_MAIN_SHA))
    return fake


README_TEXT = f"""# msbuild workspace

## Task 1

Created `secondary-main` from `main`.

## Task 2

Feature branch `{FEATURE_BRANCH}` was created from `secondary-main`
at `{SECONDARY_MAIN_SHA}` to fix issue #13217 (RoslynCodeTaskFactory references).
"""


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    return Settings(_env_file=None, max_retries=1)  # type: ignore[call-arg]


@pytest.fixture
def fake_github() -> FakeGitHub:
    return healthy_github()


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    (tmp_path / "readme.md").write_text(README_TEXT, encoding="utf-8")
    (tmp_path / ".gitignore").write_text("node_modules/\nmsbuild-repo/\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def context(fake_github: FakeGitHub, settings: Settings, artifacts_dir: Path) -> CheckContext:
    return CheckContext(fake_github.client(settings), OWNER, REPO, artifacts_dir)
