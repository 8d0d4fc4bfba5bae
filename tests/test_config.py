import pytest
from pydantic import ValidationError

from nutag.config import DEFAULT_GITHUB_API_URL, Settings

ENV_VARS = (
    "GITHUB_TOKEN",
    "NUTAG_GITHUB_TOKEN",
    "NUTAG_GITHUB_API_URL",
    "NUTAG_HTTP_TIMEOUT",
    "NUTAG_REMOTE",
    "NUTAG_RELEASE_BRANCHES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_from_empty_environment():
    settings = Settings()
    assert settings.github_token is None
    assert settings.github_api_url == DEFAULT_GITHUB_API_URL
    assert settings.remote == "origin"
    assert settings.release_branches == ["main", "master"]
    assert settings.http_timeout == 10.0


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_secret")
    monkeypatch.setenv("NUTAG_REMOTE", "upstream")
    monkeypatch.setenv("NUTAG_RELEASE_BRANCHES", "trunk, release ,")
    monkeypatch.setenv("NUTAG_HTTP_TIMEOUT", "2.5")
    settings = Settings()
    assert settings.github_token == "ghp_secret"
    assert settings.remote == "upstream"
    assert settings.release_branches == ["trunk", "release"]
    assert settings.http_timeout == 2.5


def test_prefixed_token_alias(monkeypatch):
    monkeypatch.setenv("NUTAG_GITHUB_TOKEN", "ghp_other")
    assert Settings().github_token == "ghp_other"


def test_empty_token_counts_as_missing(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "")
    assert Settings().github_token is None


def test_release_branches_as_json_list(monkeypatch):
    monkeypatch.setenv("NUTAG_RELEASE_BRANCHES", '["trunk", "stable"]')
    assert Settings().release_branches == ["trunk", "stable"]


@pytest.mark.parametrize("value", ["ten", "0", "-1"])
def test_bad_timeout_is_rejected(monkeypatch, value):
    monkeypatch.setenv("NUTAG_HTTP_TIMEOUT", value)
    with pytest.raises(ValidationError):
        Settings()


def test_is_release_branch():
    settings = Settings()
    assert settings.is_release_branch(["feature", "main"])
    assert not settings.is_release_branch(["feature"])
    assert not settings.is_release_branch([])
