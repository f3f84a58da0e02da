from pathlib import Path
from typing import Dict

from coreason_branch_verifier.api.github import AsyncGitHubClient
from coreason_branch_verifier.domain.models import BranchSnapshot
from coreason_branch_verifier.exceptions import MissingPrerequisiteError
from coreason_branch_verifier.utils.logger import logger


class CheckContext:
    """
    State threaded through every check of a run.

    Checks that fetch a branch store the snapshot here; later checks read it
    back with `require_branch`, which turns a missing fetch into a check
    failure instead of an attribute error.
    """

    def __init__(self, client: AsyncGitHubClient, owner: str, repo: str, artifacts_dir: Path) -> None:
        self.client = client
        self.owner = owner
        self.repo = repo
        self.artifacts_dir = artifacts_dir
        self.branches: Dict[str, BranchSnapshot] = {}

    async def load_branch(self, name: str) -> BranchSnapshot:
        """Fetches a branch and caches the snapshot for the rest of the run."""
        snapshot = await self.client.get_branch(self.owner, self.repo, name)
        self.branches[name] = snapshot
        return snapshot

    def require_branch(self, name: str) -> BranchSnapshot:
        snapshot = self.branches.get(name)
        if snapshot is None:
            raise MissingPrerequisiteError(f"{name} branch data must be loaded")
        return snapshot

    def artifact_path(self, filename: str) -> Path:
        return self.artifacts_dir / filename

    def read_artifact(self, filename: str) -> str:
        """
        Reads a local artifact as UTF-8 text; undecodable bytes become U+FFFD.

        Raises:
            FileNotFoundError: If the artifact does not exist.
        """
        path = self.artifact_path(filename)
        logger.debug(f"Reading artifact {path}")
        return path.read_text(encoding="utf-8", errors="replace")
