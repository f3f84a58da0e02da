from .github import ApiResponse, AsyncGitHubClient

__all__ = ["ApiResponse", "AsyncGitHubClient"]
