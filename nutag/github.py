"""List a repository's tags through the GitHub GraphQL API."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

import httpx

from nutag.config import DEFAULT_GITHUB_API_URL
from nutag.errors import GitHubError

logger = logging.getLogger(__name__)

PAGE_SIZE = 100

TAGS_QUERY = """
query($owner: String!, $name: String!, $first: Int!, $after: String) {
  repository(owner: $owner, name: $name) {
    refs(refPrefix: "refs/tags/", first: $first, after: $after) {
      nodes { name }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

REMOTE_PATTERN = re.compile(
    r"^(?:https://(?:[^@/]+@)?github\.com/|git@github\.com:|ssh://git@github\.com/)"
    r"(?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$"
)


def parse_remote_url(url: str) -> Optional[Tuple[str, str]]:
    """Return ``(owner, name)`` for a GitHub remote URL, None otherwise."""
    match = REMOTE_PATTERN.match(url.strip())
    if not match:
        return None
    return match.group("owner"), match.group("name")


def _fetch_page(
    client: httpx.Client, api_url: str, owner: str, name: str, after: Optional[str]
) -> dict:
    try:
        response = client.post(
            api_url,
            json={
                "query": TAGS_QUERY,
                "variables": {"owner": owner, "name": name, "first": PAGE_SIZE, "after": after},
            },
        )
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise GitHubError(f"listing tags of {owner}/{name} failed: {exc}") from exc

    try:
        payload = response.json()
    except ValueError as exc:
        raise GitHubError(f"GitHub answered with something other than JSON: {exc}") from exc
    if payload.get("errors"):
        messages = "; ".join(error.get("message", "unknown error") for error in payload["errors"])
        raise GitHubError(f"GitHub rejected the tag query: {messages}")

    repository = (payload.get("data") or {}).get("repository")
    if repository is None:
        raise GitHubError(f"repository {owner}/{name} not found")
    return repository["refs"]


def list_remote_tags(
    owner: str,
    name: str,
    token: str,
    *,
    api_url: str = DEFAULT_GITHUB_API_URL,
    timeout: float = 10.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> List[str]:
    """Return every tag name of ``owner/name``, following pagination."""
    headers = {"Authorization": f"Bearer {token}"}
    tags: List[str] = []
    after = None
    with httpx.Client(headers=headers, timeout=timeout, transport=transport) as client:
        while True:
            refs = _fetch_page(client, api_url, owner, name, after)
            tags.extend(node["name"] for node in refs["nodes"])
            page_info = refs["pageInfo"]
            if not page_info["hasNextPage"]:
                break
            after = page_info["endCursor"]
    logger.info("GitHub returned %d tags for %s/%s", len(tags), owner, name)
    return tags
