# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_branch_verifier

BODY_PREVIEW_LIMIT = 200


class VerifierError(Exception):
    """Base exception for Coreason Branch Verifier."""

    pass


class ConfigurationError(VerifierError):
    """Exception raised for an invalid run configuration (e.g. unknown scenario)."""

    pass


class ApiError(VerifierError):
    """Base exception for GitHub API related errors."""

    pass


class NetworkError(ApiError):
    """Exception raised when the transport fails (DNS, connection refused, timeout)."""

    pass


class HttpStatusError(ApiError):
    """Exception raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body[:BODY_PREVIEW_LIMIT]
        super().__init__(f"GitHub API returned {status_code}: {self.body}")


class UnexpectedShapeError(ApiError):
    """Exception raised when a response body does not decode into the expected model."""

    pass


class MissingPrerequisiteError(VerifierError):
    """Exception raised when a check needs data an earlier check failed to load."""

    pass


class CheckFailure(AssertionError):
    """Raised when an expected value does not match the actual one."""

    pass
