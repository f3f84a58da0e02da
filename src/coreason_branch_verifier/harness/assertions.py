"""
Expected-vs-actual helpers used by scenario checks.

Each helper raises CheckFailure with the caller's message, or a generated one
when no message is given.
"""

import re
from typing import Any, Container, Optional

from coreason_branch_verifier.exceptions import CheckFailure


def ensure(condition: Any, message: str) -> None:
    if not condition:
        raise CheckFailure(message)


def ensure_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    if actual != expected:
        raise CheckFailure(message or f"Expected {expected!r}, got {actual!r}")


def ensure_not_equal(actual: Any, unexpected: Any, message: Optional[str] = None) -> None:
    if actual == unexpected:
        raise CheckFailure(message or f"Expected a value other than {unexpected!r}")


def ensure_at_least(actual: int, minimum: int, message: Optional[str] = None) -> None:
    if actual < minimum:
        raise CheckFailure(message or f"Expected at least {minimum}, got {actual}")


def ensure_in(actual: Any, allowed: Container[Any], message: Optional[str] = None) -> None:
    if actual not in allowed:
        raise CheckFailure(message or f"Expected one of {allowed!r}, got {actual!r}")


def ensure_matches(value: str, pattern: str, message: Optional[str] = None) -> None:
    if not re.fullmatch(pattern, value):
        raise CheckFailure(message or f"Expected {value!r} to match {pattern!r}")


def ensure_contains(text: str, needle: str, message: Optional[str] = None) -> None:
    if needle not in text:
        raise CheckFailure(message or f"Expected text to contain {needle!r}")
