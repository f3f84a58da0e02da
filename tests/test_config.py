from pathlib import Path

import pytest
from pydantic import ValidationError

from coreason_branch_verifier.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GITHUB_TOKEN",
        "VERIFY_API_BASE_URL",
        "VERIFY_USER_AGENT",
        "VERIFY_REQUEST_TIMEOUT",
        "VERIFY_MAX_RETRIES",
        "VERIFY_ARTIFACTS_DIR",
        "VERIFY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_settings_defaults() -> None:
    """Test default values for settings."""
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.api_base_url == "https://api.github.com"
    assert settings.user_agent == "branch-verifier"
    assert settings.request_timeout is None
    assert settings.max_retries == 3
    assert settings.artifacts_dir == Path(".")
    assert settings.log_level == "INFO"
    assert settings.GITHUB_TOKEN is None


def test_settings_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test overriding settings with environment variables."""
    monkeypatch.setenv("VERIFY_API_BASE_URL", "https://ghe.example.com/api/v3/")
    monkeypatch.setenv("VERIFY_REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("VERIFY_MAX_RETRIES", "5")
    monkeypatch.setenv("VERIFY_ARTIFACTS_DIR", "/tmp/work")
    monkeypatch.setenv("VERIFY_LOG_LEVEL", "DEBUG")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.api_base_url == "https://ghe.example.com/api/v3"
    assert settings.request_timeout == 12.5
    assert settings.max_retries == 5
    assert settings.artifacts_dir == Path("/tmp/work")
    assert settings.log_level == "DEBUG"


def test_token_read_without_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_abc")
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.GITHUB_TOKEN is not None
    assert settings.GITHUB_TOKEN.get_secret_value() == "ghp_abc"


def test_empty_token_means_unauthenticated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "")
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert settings.GITHUB_TOKEN is None


def test_secrets_not_logged(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that secrets are not exposed in repr."""
    monkeypatch.setenv("GITHUB_TOKEN", "secret_token_value")
    settings = Settings(_env_file=None)  # type: ignore[call-arg]
    assert "secret_token_value" not in repr(settings)


def test_invalid_max_retries(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VERIFY_MAX_RETRIES", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_invalid_timeout() -> None:
    with pytest.raises(ValidationError) as excinfo:
        Settings(_env_file=None, request_timeout=0)  # type: ignore[call-arg]
    assert "request_timeout must be positive" in str(excinfo.value)


def test_invalid_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VERIFY_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_settings_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("VERIFY_USER_AGENT=task-2-test\n", encoding="utf-8")
    settings = Settings(_env_file=env_file)  # type: ignore[call-arg]
    assert settings.user_agent == "task-2-test"


def test_get_settings_is_cached() -> None:
    get_settings.cache_clear()
    s1 = get_settings()
    s2 = get_settings()
    assert isinstance(s1, Settings)
    assert s1 is s2
    get_settings.cache_clear()
