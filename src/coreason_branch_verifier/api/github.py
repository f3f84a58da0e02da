from dataclasses import dataclass
from types import TracebackType
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from coreason_branch_verifier.config import Settings
from coreason_branch_verifier.domain.models import BranchSnapshot, CommitDetail, CompareResult
from coreason_branch_verifier.exceptions import HttpStatusError, NetworkError, UnexpectedShapeError
from coreason_branch_verifier.utils.logger import logger

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ApiResponse:
    """A successful (2xx) API response with its decoded JSON body."""

    status_code: int
    body: Any


def encode_segment(value: str) -> str:
    """Escapes a single path segment, including '/' (branch names like fix/x)."""
    return quote(value, safe="")


def decode_model(model: Type[ModelT], body: Any) -> ModelT:
    """
    Validates a decoded JSON body against a model.

    Raises:
        UnexpectedShapeError: If the body does not fit the model.
    """
    try:
        return model.model_validate(body)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors())
        raise UnexpectedShapeError(f"Unexpected shape for {model.__name__}: invalid fields [{fields}]") from e


class AsyncGitHubClient:
    """
    Async read-only client for the GitHub REST API.
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self.settings = settings
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout))
        # HTTP status errors are final; only transport failures are retried.
        self.retry_wait: wait_base = wait_exponential(multiplier=1, min=1, max=10)

    async def __aenter__(self) -> "AsyncGitHubClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http.aclose()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/vnd.github+json",
        }
        if self.settings.GITHUB_TOKEN:
            headers["Authorization"] = f"Bearer {self.settings.GITHUB_TOKEN.get_secret_value()}"
        return headers

    async def _send(self, url: str) -> httpx.Response:
        try:
            return await self.http.get(url, headers=self._headers())
        except httpx.TransportError as e:
            logger.warning(f"Transport failure for GET {url}: {e!r}")
            raise NetworkError(f"GET {url} failed: {e!r}") from e
        except httpx.DecodingError as e:
            raise UnexpectedShapeError(f"GET {url} returned an undecodable body: {e}") from e

    async def get(self, path: str) -> ApiResponse:
        """
        Performs a GET against the API host.

        Args:
            path: Request path, starting with '/'.

        Returns:
            ApiResponse with the status code and decoded JSON body.

        Raises:
            NetworkError: If the transport fails on every attempt.
            HttpStatusError: If the API answers with a non-2xx status.
            UnexpectedShapeError: If a 2xx body is not valid UTF-8 JSON.
        """
        url = f"{self.settings.api_base_url}{path}"
        logger.debug(f"GET {url}")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_retries),
            wait=self.retry_wait,
            retry=retry_if_exception_type(NetworkError),
            reraise=True,
        )
        response = await retrying(self._send, url)

        if not response.is_success:
            raise HttpStatusError(response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as e:
            raise UnexpectedShapeError(f"GET {url} returned non-JSON body: {response.text[:200]}") from e
        return ApiResponse(status_code=response.status_code, body=body)

    async def get_branch(self, owner: str, repo: str, name: str) -> BranchSnapshot:
        logger.debug(f"Fetching branch {owner}/{repo}@{name}")
        response = await self.get(f"/repos/{owner}/{repo}/branches/{encode_segment(name)}")
        return decode_model(BranchSnapshot, response.body)

    async def compare(self, owner: str, repo: str, base: str, head: str) -> CompareResult:
        """
        Compares two refs; the result describes head relative to base.
        """
        logger.debug(f"Comparing {owner}/{repo} {base}...{head}")
        response = await self.get(f"/repos/{owner}/{repo}/compare/{encode_segment(base)}...{encode_segment(head)}")
        return decode_model(CompareResult, response.body)

    async def get_commit(self, owner: str, repo: str, sha: str) -> CommitDetail:
        logger.debug(f"Fetching commit {owner}/{repo}@{sha}")
        response = await self.get(f"/repos/{owner}/{repo}/commits/{encode_segment(sha)}")
        return decode_model(CommitDetail, response.body)
