import json

import httpx
import pytest

from nutag.errors import GitHubError
from nutag.github import list_remote_tags, parse_remote_url


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/acme/widgets.git",
        "https://github.com/acme/widgets",
        "https://x-access-token@github.com/acme/widgets.git",
        "git@github.com:acme/widgets.git",
        "ssh://git@github.com/acme/widgets.git",
    ],
)
def test_parse_remote_url(url):
    assert parse_remote_url(url) == ("acme", "widgets")


@pytest.mark.parametrize("url", ["https://gitlab.com/acme/widgets.git", "/srv/git/widgets.git", ""])
def test_parse_remote_url_rejects_other_hosts(url):
    assert parse_remote_url(url) is None


def _page(names, cursor=None):
    return {
        "data": {
            "repository": {
                "refs": {
                    "nodes": [{"name": name} for name in names],
                    "pageInfo": {"hasNextPage": cursor is not None, "endCursor": cursor},
                }
            }
        }
    }


def test_list_remote_tags_follows_pagination():
    requests = []
    pages = {None: _page(["v0.1.0", "v0.2.0"], cursor="c1"), "c1": _page(["v0.3.0"])}

    def handler(request):
        body = json.loads(request.content)
        requests.append((request, body))
        return httpx.Response(200, json=pages[body["variables"]["after"]])

    tags = list_remote_tags("acme", "widgets", "tok", transport=httpx.MockTransport(handler))

    assert tags == ["v0.1.0", "v0.2.0", "v0.3.0"]
    assert len(requests) == 2
    request, body = requests[0]
    assert str(request.url) == "https://api.github.com/graphql"
    assert request.headers["Authorization"] == "Bearer tok"
    assert body["variables"]["owner"] == "acme"
    assert body["variables"]["name"] == "widgets"


def test_graphql_errors_are_raised():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"errors": [{"message": "Bad credentials"}]})
    )
    with pytest.raises(GitHubError, match="Bad credentials"):
        list_remote_tags("acme", "widgets", "tok", transport=transport)


def test_http_errors_are_raised():
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={}))
    with pytest.raises(GitHubError, match="acme/widgets"):
        list_remote_tags("acme", "widgets", "tok", transport=transport)


def test_missing_repository():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"data": {"repository": None}}))
    with pytest.raises(GitHubError, match="not found"):
        list_remote_tags("acme", "widgets", "tok", transport=transport)


def test_non_json_response_is_raised():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, text="<html>proxy login</html>", headers={"content-type": "text/html"})
    )
    with pytest.raises(GitHubError, match="other than JSON"):
        list_remote_tags("acme", "widgets", "tok", transport=transport)
