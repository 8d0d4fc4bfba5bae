"""
Runtime settings for nutag, read from NUTAG_* environment variables.
"""

from typing import List, Optional, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GITHUB_API_URL = "https://api.github.com/graphql"
DEFAULT_RELEASE_BRANCHES = ["main", "master"]


class Settings(BaseSettings):
    """Configuration shared by the CLI and its collaborators"""

    github_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "NUTAG_GITHUB_TOKEN"),
    )
    github_api_url: str = DEFAULT_GITHUB_API_URL
    http_timeout: float = Field(default=10.0, gt=0)

    remote: str = "origin"
    # Branches/bookmarks where a bare `nutag` means a patch release
    release_branches: Union[List[str], str] = Field(
        default_factory=lambda: list(DEFAULT_RELEASE_BRANCHES)
    )

    model_config = SettingsConfigDict(
        env_prefix="NUTAG_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("github_token", mode="before")
    @classmethod
    def _empty_token_is_missing(cls, v):
        return v or None

    @field_validator("release_branches", mode="before")
    @classmethod
    def _parse_release_branches(cls, v):
        if v in (None, "", []):
            return list(DEFAULT_RELEASE_BRANCHES)
        if isinstance(v, (list, tuple, set)):
            return [str(item).strip() for item in v if str(item).strip()]
        return [part.strip() for part in str(v).split(",") if part.strip()]

    def is_release_branch(self, branches: List[str]) -> bool:
        return any(branch in self.release_branches for branch in branches)
