from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CommitRef(BaseModel):
    """A commit pointer as embedded in branch and compare payloads."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sha: str = Field(..., description="Full 40-character commit SHA")
    url: Optional[str] = Field(default=None, description="API URL of the commit")


class BranchSnapshot(BaseModel):
    """Point-in-time record of a branch's head commit and protection flag."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Branch name")
    commit: CommitRef = Field(..., description="Head commit of the branch")
    protected: bool = Field(..., description="Whether branch protection is enabled")

    @property
    def head_sha(self) -> str:
        return self.commit.sha

    @property
    def head_url(self) -> Optional[str]:
        return self.commit.url


class CompareResult(BaseModel):
    """Divergence summary between a base and a head commit."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    ahead_by: int = Field(..., description="Commits on head that are not on base")
    behind_by: int = Field(..., description="Commits on base that are not on head")
    status: Literal["ahead", "behind", "identical", "diverged"]
    merge_base_commit: CommitRef

    @property
    def merge_base_sha(self) -> str:
        return self.merge_base_commit.sha


class GitActor(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = None
    email: Optional[str] = None
    date: Optional[str] = None


class CommitMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    message: str
    author: Optional[GitActor] = None
    committer: Optional[GitActor] = None


class CommitDetail(BaseModel):
    """Commit detail as returned by the single-commit endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sha: str
    url: Optional[str] = None
    commit: CommitMetadata
